"""
Integration tests for health, readiness and metrics endpoints.
"""
import pytest
from django.urls import reverse

pytestmark = pytest.mark.integration


def test_health(client):
    """Test the liveness endpoint needs no database."""
    response = client.get(reverse("health"))

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.django_db
def test_ready(client):
    """Test readiness reports the database check."""
    response = client.get(reverse("ready"))

    assert response.status_code == 200
    assert response.json()["checks"] == {"database": True}


def test_metrics(client):
    """Test the Prometheus endpoint exposes service counters."""
    response = client.get(reverse("metrics"))

    assert response.status_code == 200
    assert b"http_requests_total" in response.content
