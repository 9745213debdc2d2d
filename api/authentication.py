"""
DRF authentication backed by ``OwnerSessionMiddleware``.

The middleware resolves the owner from the session cookie or a Bearer
header. Browsers attach the cookie on their own, so cookie-sourced
sessions must pass the CSRF check before unsafe methods run, the same
way ``SessionAuthentication`` treats Django sessions.
"""

from django.middleware.csrf import CsrfViewMiddleware
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication


class CSRFCheck(CsrfViewMiddleware):
    def _reject(self, request, reason):
        # Return the failure reason instead of an HttpResponse
        return reason


class OwnerSessionAuthentication(BaseAuthentication):
    """Authenticate the dashboard owner attached to the request."""

    def authenticate(self, request):
        """
        Return ``(owner, None)`` for an authenticated request.

        Raises:
            PermissionDenied: cookie session without a valid CSRF token
        """
        owner = getattr(request._request, "owner", None)
        if owner is None:
            return None

        if getattr(request._request, "owner_from_cookie", False):
            self.enforce_csrf(request)
        return (owner, None)

    def enforce_csrf(self, request):
        """Run Django's CSRF validation against the underlying request."""

        def dummy_get_response(request):  # pragma: no cover
            return None

        check = CSRFCheck(dummy_get_response)
        # Populates request.META['CSRF_COOKIE'] for process_view
        check.process_request(request)
        reason = check.process_view(request, None, (), {})
        if reason:
            raise exceptions.PermissionDenied(f"CSRF Failed: {reason}")

    def authenticate_header(self, request):
        return "Bearer"
