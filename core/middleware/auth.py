"""
Owner session authentication middleware.

Resolves the dashboard owner from the session token so views can
scope every operation to that owner's applications.
"""

import hashlib
import logging
from typing import Optional, Tuple

from django.conf import settings
from django.http import HttpRequest
from django.utils.deprecation import MiddlewareMixin

from accounts.infrastructure.models import OwnerSession

logger = logging.getLogger(__name__)

DEFAULT_SESSION_COOKIE = "venom-auth-token"


def hash_token(token: str) -> str:
    """Hash a session token for lookup."""
    return hashlib.sha256(token.encode()).hexdigest()


class OwnerSessionMiddleware(MiddlewareMixin):
    """
    Middleware for owner session authentication.

    This middleware:
    1. Reads the session token from the session cookie or a Bearer header
    2. Looks up the unexpired OwnerSession by token hash
    3. Sets ``request.owner`` (None when unauthenticated) and
       ``request.owner_from_cookie`` for CSRF enforcement

    Rejecting anonymous requests is left to the views.
    """

    def process_request(self, request: HttpRequest) -> None:
        """
        Attach the authenticated owner to the request.

        Args:
            request: HTTP request
        """
        request.owner = None  # type: ignore
        request.owner_from_cookie = False  # type: ignore

        token, from_cookie = self._extract_token(request)
        if not token:
            return None

        token_hash = hash_token(token)

        # pylint: disable=no-member
        session = (
            OwnerSession.objects.select_related("user")
            .filter(token_hash=token_hash)
            .first()
        )
        if not session:
            logger.warning("Unknown session token attempted (hash %s...)", token_hash[:8])
            return None
        if not session.is_valid():
            logger.info("Expired session for owner %s", session.user_id)
            return None

        request.owner = session.user  # type: ignore
        request.owner_from_cookie = from_cookie  # type: ignore
        return None

    def _extract_token(self, request: HttpRequest) -> Tuple[Optional[str], bool]:
        """
        Get the session token from the cookie or Authorization header.

        Args:
            request: HTTP request

        Returns:
            Token string or None, and whether it came from the cookie
        """
        cookie_name = getattr(settings, "VENOMAUTH_SESSION_COOKIE", DEFAULT_SESSION_COOKIE)
        token = request.COOKIES.get(cookie_name)
        if token:
            return token, True

        authorization = request.headers.get("Authorization", "")
        if authorization.startswith("Bearer "):
            return authorization[len("Bearer "):].strip() or None, False
        return None, False
