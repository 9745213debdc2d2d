"""
Integration tests for owner session authentication and CSRF.
"""
import logging

import pytest
from django.conf import settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

pytestmark = [pytest.mark.django_db, pytest.mark.integration]

CSRF_SECRET = "a" * 32


@pytest.fixture
def cookie_client(session_token):
    """Browser-like client carrying the session cookie and enforcing CSRF."""
    client = APIClient(enforce_csrf_checks=True)
    client.cookies[settings.VENOMAUTH_SESSION_COOKIE] = session_token
    return client


class TestCookieSession:
    """Tests for sessions sent as the dashboard cookie."""

    def test_unsafe_method_without_csrf_token_is_rejected(self, cookie_client):
        """Test a cookie-authenticated POST needs a CSRF token."""
        response = cookie_client.post(reverse("applications"), {"name": "Loader"}, format="json")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["error"]["message"].startswith("CSRF Failed")
        assert cookie_client.get(reverse("applications")).json() == []

    def test_unsafe_method_with_csrf_token(self, cookie_client):
        """Test a matching CSRF cookie and header let the POST through."""
        cookie_client.cookies[settings.CSRF_COOKIE_NAME] = CSRF_SECRET

        response = cookie_client.post(
            reverse("applications"),
            {"name": "Loader"},
            format="json",
            HTTP_X_CSRFTOKEN=CSRF_SECRET,
        )

        assert response.status_code == status.HTTP_201_CREATED

    def test_safe_method_needs_no_csrf_token(self, cookie_client):
        """Test reads with the cookie alone are allowed."""
        response = cookie_client.get(reverse("applications"))

        assert response.status_code == status.HTTP_200_OK


class TestBearerSession:
    """Tests for sessions sent as a Bearer header."""

    def test_post_without_csrf_token(self, session_token):
        """Test header tokens are not subject to CSRF checks."""
        client = APIClient(enforce_csrf_checks=True)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {session_token}")

        response = client.post(reverse("applications"), {"name": "Loader"}, format="json")

        assert response.status_code == status.HTTP_201_CREATED

    def test_unknown_token_is_not_logged(self, api_client, caplog):
        """Test an unknown token is logged by hash prefix only."""
        token = "unknown-session-token-value"
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        with caplog.at_level(logging.WARNING, logger="core.middleware.auth"):
            response = api_client.get(reverse("applications"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert "Unknown session token attempted" in caplog.text
        assert token[:8] not in caplog.text
