"""
Pytest configuration and shared fixtures.
"""

import hashlib
import secrets
from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.utils import timezone

from applications.domain.application import Application
from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)
from core.domain.events import DomainEvent, EventHandler
from core.infrastructure.events import event_bus
from fakes import (
    OTHER_OWNER_ID,
    OWNER_ID,
    InMemoryApplicationRepository,
    InMemoryAppUserRepository,
    InMemoryLicenseRepository,
    InMemoryUserVarRepository,
)
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from users.infrastructure.repositories.django_app_user_repository import (
    DjangoAppUserRepository,
)
from users.infrastructure.repositories.django_user_var_repository import (
    DjangoUserVarRepository,
)


class RecordingHandler(EventHandler):
    """Event handler that keeps every event it receives."""

    def __init__(self):
        self.events = []

    async def handle(self, event: DomainEvent) -> None:
        self.events.append(event)


@pytest.fixture(autouse=True)
def _reset_event_bus():
    """Keep subscriptions from leaking between tests."""
    event_bus.clear()
    yield
    event_bus.clear()


@pytest.fixture
def recorded_events():
    """Events published on the global bus during the test."""
    handler = RecordingHandler()
    event_bus.subscribe(DomainEvent, handler)
    return handler.events


@pytest.fixture
def application():
    """Fixture for an Application entity owned by OWNER_ID."""
    return Application.create(owner_id=OWNER_ID, name="Venom Loader")


@pytest.fixture
def foreign_application():
    """Fixture for an Application entity owned by someone else."""
    return Application.create(owner_id=OTHER_OWNER_ID, name="Someone Else")


@pytest.fixture
def fake_application_repository(application, foreign_application):
    """In-memory ApplicationRepository holding both applications."""
    return InMemoryApplicationRepository(application, foreign_application)


@pytest.fixture
def fake_license_repository():
    """Empty in-memory LicenseRepository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def fake_app_user_repository():
    """Empty in-memory AppUserRepository."""
    return InMemoryAppUserRepository()


@pytest.fixture
def fake_user_var_repository():
    """Empty in-memory UserVarRepository."""
    return InMemoryUserVarRepository()


@pytest.fixture
def application_repository():
    """Fixture for ApplicationRepository."""
    return DjangoApplicationRepository()


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def app_user_repository():
    """Fixture for AppUserRepository."""
    return DjangoAppUserRepository()


@pytest.fixture
def user_var_repository():
    """Fixture for UserVarRepository."""
    return DjangoUserVarRepository()


@pytest.fixture
def owner(db):
    """Dashboard owner account saved in database."""
    from django.contrib.auth import get_user_model

    return get_user_model().objects.create_user(
        username=f"owner-{secrets.token_hex(4)}", password="not-used"
    )


@pytest.fixture
def other_owner(db):
    """A second owner account saved in database."""
    from django.contrib.auth import get_user_model

    return get_user_model().objects.create_user(
        username=f"other-{secrets.token_hex(4)}", password="not-used"
    )


@pytest.fixture
def db_application(owner, application_repository):
    """Fixture for an Application saved in database."""
    application = Application.create(owner_id=owner.pk, name="Venom Loader")
    return async_to_sync(application_repository.save)(application)


@pytest.fixture
def foreign_db_application(other_owner, application_repository):
    """Fixture for an Application saved in database and owned by other_owner."""
    application = Application.create(owner_id=other_owner.pk, name="Foreign App")
    return async_to_sync(application_repository.save)(application)


def issue_session(user, lifetime=timedelta(hours=1)) -> str:
    """Create an owner session and return its raw token."""
    from accounts.infrastructure.models import OwnerSession

    token = secrets.token_urlsafe(32)
    OwnerSession.objects.create(
        user=user,
        token_hash=hashlib.sha256(token.encode()).hexdigest(),
        expires_at=timezone.now() + lifetime,
    )
    return token


@pytest.fixture
def session_token(owner):
    """Raw session token for ``owner``."""
    return issue_session(owner)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def owner_client(api_client, owner):
    """API client authenticated as ``owner`` through a bearer session token."""
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_session(owner)}")
    return api_client


@pytest.fixture
def other_owner_client(other_owner):
    """API client authenticated as ``other_owner``."""
    from rest_framework.test import APIClient

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_session(other_owner)}")
    return client
