"""
Integration tests for the application endpoints.
"""
import pytest
from django.urls import reverse
from rest_framework import status

pytestmark = [pytest.mark.django_db, pytest.mark.integration]


class TestApplicationAPI:
    """Tests for /api/v1/apps/."""

    def test_requires_session(self, api_client):
        """Test requests without a session token are rejected."""
        response = api_client.get(reverse("applications"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error"]["kind"] == "unauthorized"

    def test_create_and_list(self, owner_client):
        """Test a created application shows up in the owner's list."""
        created = owner_client.post(reverse("applications"), {"name": "Loader"}, format="json")
        listed = owner_client.get(reverse("applications"))

        assert created.status_code == status.HTTP_201_CREATED
        assert created.json()["status"] == "active"
        assert [app["name"] for app in listed.json()] == ["Loader"]

    def test_create_without_name(self, owner_client):
        """Test the error envelope for invalid input."""
        response = owner_client.post(reverse("applications"), {"name": "  "}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        error = response.json()["error"]
        assert error["code"] == "INVALID_INPUT"
        assert error["kind"] == "invalid_input"
        assert error["message"]

    def test_other_owner_cannot_see_application(self, db_application, other_owner_client):
        """Test an application of another owner is reported as not found."""
        url = reverse("application-detail", kwargs={"application_id": db_application.id})

        response = other_owner_client.patch(url, {"name": "Mine now"}, format="json")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"]["code"] == "APPLICATION_NOT_FOUND"

    def test_delete(self, db_application, owner_client):
        """Test deleting an owned application."""
        url = reverse("application-detail", kwargs={"application_id": db_application.id})

        response = owner_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert owner_client.get(reverse("applications")).json() == []
