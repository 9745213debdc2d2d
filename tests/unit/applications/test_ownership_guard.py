"""
Unit tests for the ownership guard and request parsing helpers.
"""
import uuid

import pytest

from applications.domain.services import (
    OwnershipGuard,
    parse_delete_mode,
    parse_id_list,
    parse_uuid,
)
from core.domain.exceptions import (
    AppUserNotFoundError,
    ApplicationNotFoundError,
    InvalidInputError,
    UnauthorizedError,
)
from core.domain.value_objects import DeleteMode
from fakes import OTHER_OWNER_ID, OWNER_ID, InMemoryAppUserRepository
from users.domain.app_user import AppUser


@pytest.mark.asyncio
class TestOwnershipGuard:
    """Tests for OwnershipGuard."""

    async def test_owned_application(self, application, fake_application_repository):
        """Test the owner resolves its application."""
        guard = OwnershipGuard(fake_application_repository)
        assert await guard.require_application(OWNER_ID, application.id) == application

    async def test_application_id_as_string(self, application, fake_application_repository):
        """Test string ids are accepted."""
        guard = OwnershipGuard(fake_application_repository)
        assert await guard.require_application(OWNER_ID, str(application.id)) == application

    async def test_foreign_and_absent_look_the_same(
        self, foreign_application, fake_application_repository
    ):
        """Test not-owned and missing applications raise the same error."""
        guard = OwnershipGuard(fake_application_repository)

        with pytest.raises(ApplicationNotFoundError) as foreign:
            await guard.require_application(OWNER_ID, foreign_application.id)
        with pytest.raises(ApplicationNotFoundError) as missing:
            await guard.require_application(OWNER_ID, uuid.uuid4())

        assert foreign.value.message == missing.value.message

    async def test_other_owner(self, foreign_application, fake_application_repository):
        """Test the other owner resolves its own application."""
        guard = OwnershipGuard(fake_application_repository)
        found = await guard.require_application(OTHER_OWNER_ID, foreign_application.id)
        assert found.id == foreign_application.id

    async def test_no_owner(self, application, fake_application_repository):
        """Test a missing owner is unauthorized."""
        guard = OwnershipGuard(fake_application_repository)
        with pytest.raises(UnauthorizedError):
            await guard.require_application(None, application.id)

    async def test_malformed_application_id(self, fake_application_repository):
        """Test a malformed id is invalid input."""
        guard = OwnershipGuard(fake_application_repository)
        with pytest.raises(InvalidInputError):
            await guard.require_application(OWNER_ID, "not-a-uuid")

    async def test_user_of_another_application(self, application, foreign_application):
        """Test a user outside the guarded application is not found."""
        outsider = AppUser.create(
            application_id=foreign_application.id, username="neo", password_hash="x"
        )
        repository = InMemoryAppUserRepository(outsider)

        with pytest.raises(AppUserNotFoundError):
            await OwnershipGuard.require_app_user(application, outsider.id, repository)


class TestParsing:
    """Tests for request parsing helpers."""

    def test_parse_uuid(self):
        """Test UUID coercion."""
        value = uuid.uuid4()
        assert parse_uuid(value, "id") is value
        assert parse_uuid(str(value), "id") == value
        with pytest.raises(InvalidInputError, match="userId"):
            parse_uuid(None, "userId")

    def test_parse_id_list(self):
        """Test id list coercion."""
        value = uuid.uuid4()
        assert parse_id_list([str(value)], "ids") == [value]
        with pytest.raises(InvalidInputError):
            parse_id_list([], "ids")
        with pytest.raises(InvalidInputError):
            parse_id_list(["nope"], "ids")

    def test_parse_delete_mode(self):
        """Test delete modes are restricted to the allowed set."""
        allowed = (DeleteMode.USED, DeleteMode.UNUSED)
        assert parse_delete_mode("used", allowed) is DeleteMode.USED
        with pytest.raises(InvalidInputError, match="used, unused"):
            parse_delete_mode("expired", allowed)
        with pytest.raises(InvalidInputError):
            parse_delete_mode(None, allowed)
