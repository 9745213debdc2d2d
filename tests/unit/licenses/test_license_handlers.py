"""
Unit tests for license command handlers.
"""
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.duration import LIFETIME_SENTINEL, ExpiryDelta, ExpiryUnit
from core.domain.exceptions import (
    ApplicationNotFoundError,
    InvalidInputError,
    LicenseNotFoundError,
    UnauthorizedError,
)
from fakes import OWNER_ID, InMemoryLicenseRepository
from licenses.application.commands.add_license_time import AddLicenseTimeCommand
from licenses.application.commands.ban_license import BanLicenseCommand
from licenses.application.commands.create_license_batch import CreateLicenseBatchCommand
from licenses.application.commands.delete_licenses import DeleteLicensesCommand
from licenses.application.handlers.create_license_batch_handler import CreateLicenseBatchHandler
from licenses.application.handlers.license_lifecycle_handlers import (
    AddLicenseTimeHandler,
    BanLicenseHandler,
    DeleteLicensesHandler,
    ListLicensesHandler,
)
from licenses.domain.license import License


def _stored(application, key, used=False, unit=ExpiryUnit.DAYS):
    license = License.create(application_id=application.id, key=key, delta=ExpiryDelta(1, unit))
    return replace(license, used=used)


@pytest.mark.asyncio
class TestCreateLicenseBatchHandler:
    """Tests for CreateLicenseBatchHandler."""

    async def test_create_batch(
        self, application, fake_application_repository, fake_license_repository, recorded_events
    ):
        """Test creating a batch of day licenses."""
        handler = CreateLicenseBatchHandler(
            application_repository=fake_application_repository,
            license_repository=fake_license_repository,
        )
        before = datetime.now(timezone.utc)

        result = await handler.handle(
            CreateLicenseBatchCommand(
                owner_id=OWNER_ID,
                application_id=application.id,
                amount=3,
                mask="KEY-**",
                duration=1,
                expiry_unit=86400,
                lowercase_letters=False,
                uppercase_letters=True,
            )
        )

        assert result.count == 3
        assert len(fake_license_repository.rows) == 3
        assert {dto.duration for dto in result.licenses} == {86400}
        assert len({dto.expiry for dto in result.licenses}) == 1
        expiry = result.licenses[0].expiry
        after = datetime.now(timezone.utc)
        assert before + timedelta(days=1) <= expiry <= after + timedelta(days=1)
        assert result.licenses[0].duration_display == "1 day(s)"
        assert [event.event_type for event in recorded_events] == ["LicensesCreated"]
        assert recorded_events[0].count == 3

    async def test_create_lifetime_batch(
        self, application, fake_application_repository, fake_license_repository
    ):
        """Test the lifetime sentinel produces licenses without expiry."""
        handler = CreateLicenseBatchHandler(fake_application_repository, fake_license_repository)

        result = await handler.handle(
            CreateLicenseBatchCommand(
                owner_id=OWNER_ID,
                application_id=application.id,
                amount=2,
                mask="****-****",
                duration=1,
                expiry_unit=LIFETIME_SENTINEL,
                level="2",
                note="giveaway",
            )
        )

        assert all(dto.expiry is None for dto in result.licenses)
        assert all(dto.duration_display == "Lifetime" for dto in result.licenses)
        assert {dto.level for dto in result.licenses} == {2}
        assert {dto.note for dto in result.licenses} == {"giveaway"}

    async def test_missing_unit_writes_nothing(
        self, application, fake_application_repository, fake_license_repository
    ):
        """Test invalid input is rejected before anything is stored."""
        handler = CreateLicenseBatchHandler(fake_application_repository, fake_license_repository)

        with pytest.raises(InvalidInputError):
            await handler.handle(
                CreateLicenseBatchCommand(
                    owner_id=OWNER_ID,
                    application_id=application.id,
                    amount=2,
                    mask="****",
                    duration=1,
                    expiry_unit=None,
                )
            )
        assert fake_license_repository.rows == {}

    async def test_foreign_application(
        self, foreign_application, fake_application_repository, fake_license_repository
    ):
        """Test an application of another owner looks absent."""
        handler = CreateLicenseBatchHandler(fake_application_repository, fake_license_repository)

        with pytest.raises(ApplicationNotFoundError):
            await handler.handle(
                CreateLicenseBatchCommand(
                    owner_id=OWNER_ID,
                    application_id=foreign_application.id,
                    amount=1,
                    mask="****",
                    duration=1,
                    expiry_unit=60,
                )
            )
        assert fake_license_repository.rows == {}

    async def test_unauthenticated(
        self, application, fake_application_repository, fake_license_repository
    ):
        """Test a missing owner is unauthorized."""
        handler = CreateLicenseBatchHandler(fake_application_repository, fake_license_repository)

        with pytest.raises(UnauthorizedError):
            await handler.handle(
                CreateLicenseBatchCommand(
                    owner_id=None,
                    application_id=application.id,
                    amount=1,
                    mask="****",
                    duration=1,
                    expiry_unit=60,
                )
            )


@pytest.mark.asyncio
class TestAddLicenseTimeHandler:
    """Tests for AddLicenseTimeHandler."""

    async def test_add_time(self, application, fake_application_repository, recorded_events):
        """Test only unused licenses receive time."""
        unused = _stored(application, "A")
        used = _stored(application, "B", used=True)
        repository = InMemoryLicenseRepository(unused, used)
        handler = AddLicenseTimeHandler(fake_application_repository, repository)

        result = await handler.handle(
            AddLicenseTimeCommand(
                owner_id=OWNER_ID, application_id=application.id, time=2, expiry_unit=86400
            )
        )

        assert result.count == 1
        assert repository.rows[unused.id].duration == 259200
        assert repository.rows[unused.id].expiry == unused.expiry + timedelta(days=2)
        assert repository.rows[used.id] == used
        assert recorded_events[0].updated == 1

    async def test_zero_time_keeps_state(self, application, fake_application_repository):
        """Test time=0 leaves every license as it was."""
        unused = _stored(application, "A")
        repository = InMemoryLicenseRepository(unused)
        handler = AddLicenseTimeHandler(fake_application_repository, repository)

        await handler.handle(
            AddLicenseTimeCommand(
                owner_id=OWNER_ID, application_id=application.id, time=0, expiry_unit=86400
            )
        )

        stored = repository.rows[unused.id]
        assert (stored.expiry, stored.duration) == (unused.expiry, unused.duration)

    async def test_foreign_application_unchanged(
        self, application, foreign_application, fake_application_repository
    ):
        """Test a foreign application id changes nothing."""
        foreign = _stored(foreign_application, "A")
        repository = InMemoryLicenseRepository(foreign)
        handler = AddLicenseTimeHandler(fake_application_repository, repository)

        with pytest.raises(ApplicationNotFoundError):
            await handler.handle(
                AddLicenseTimeCommand(
                    owner_id=OWNER_ID,
                    application_id=foreign_application.id,
                    time=5,
                    expiry_unit=86400,
                )
            )
        assert repository.rows[foreign.id] == foreign


@pytest.mark.asyncio
class TestBanLicenseHandler:
    """Tests for BanLicenseHandler."""

    async def test_ban(self, application, fake_application_repository):
        """Test banning a license with a reason."""
        license = _stored(application, "A")
        repository = InMemoryLicenseRepository(license)
        handler = BanLicenseHandler(fake_application_repository, repository)

        result = await handler.handle(
            BanLicenseCommand(
                owner_id=OWNER_ID,
                application_id=application.id,
                license_id=license.id,
                reason="shared key",
            )
        )

        assert result.banned is True
        assert result.ban_reason == "shared key"
        assert repository.rows[license.id].banned is True

    async def test_license_of_other_application(
        self, application, foreign_application, fake_application_repository
    ):
        """Test a license outside the guarded application is not found."""
        license = _stored(foreign_application, "A")
        repository = InMemoryLicenseRepository(license)
        handler = BanLicenseHandler(fake_application_repository, repository)

        with pytest.raises(LicenseNotFoundError):
            await handler.handle(
                BanLicenseCommand(
                    owner_id=OWNER_ID, application_id=application.id, license_id=license.id
                )
            )
        assert repository.rows[license.id].banned is False


@pytest.mark.asyncio
class TestDeleteLicensesHandler:
    """Tests for DeleteLicensesHandler."""

    @pytest.mark.parametrize("mode,remaining", [("used", {"A"}), ("unused", {"B"})])
    async def test_delete_by_used_flag(
        self, application, fake_application_repository, mode, remaining
    ):
        """Test deleting used or unused licenses."""
        repository = InMemoryLicenseRepository(
            _stored(application, "A"), _stored(application, "B", used=True)
        )
        handler = DeleteLicensesHandler(fake_application_repository, repository)

        result = await handler.handle(
            DeleteLicensesCommand(owner_id=OWNER_ID, application_id=application.id, mode=mode)
        )

        assert result.count == 1
        assert {lic.key for lic in repository.rows.values()} == remaining

    async def test_delete_ids(self, application, fake_application_repository):
        """Test deleting exactly the listed licenses."""
        first, second = _stored(application, "A"), _stored(application, "B")
        repository = InMemoryLicenseRepository(first, second)
        handler = DeleteLicensesHandler(fake_application_repository, repository)

        result = await handler.handle(
            DeleteLicensesCommand(
                owner_id=OWNER_ID,
                application_id=application.id,
                mode="ids",
                license_ids=[str(first.id)],
            )
        )

        assert result.count == 1
        assert list(repository.rows) == [second.id]

    @pytest.mark.parametrize("mode", [None, "", "everything", "expired"])
    async def test_unrecognised_mode_deletes_nothing(
        self, application, fake_application_repository, mode
    ):
        """Test a missing or unknown mode is rejected."""
        repository = InMemoryLicenseRepository(_stored(application, "A"))
        handler = DeleteLicensesHandler(fake_application_repository, repository)

        with pytest.raises(InvalidInputError, match="Delete mode"):
            await handler.handle(
                DeleteLicensesCommand(owner_id=OWNER_ID, application_id=application.id, mode=mode)
            )
        assert len(repository.rows) == 1

    async def test_ids_mode_requires_ids(self, application, fake_application_repository):
        """Test ids mode with an empty list is rejected."""
        handler = DeleteLicensesHandler(fake_application_repository, InMemoryLicenseRepository())

        with pytest.raises(InvalidInputError):
            await handler.handle(
                DeleteLicensesCommand(owner_id=OWNER_ID, application_id=application.id, mode="ids")
            )


@pytest.mark.asyncio
class TestListLicensesHandler:
    """Tests for ListLicensesHandler."""

    async def test_list_scoped_to_application(
        self, application, foreign_application, fake_application_repository
    ):
        """Test listing returns only the application's licenses."""
        repository = InMemoryLicenseRepository(
            _stored(application, "A"), _stored(foreign_application, "B")
        )
        handler = ListLicensesHandler(fake_application_repository, repository)

        result = await handler.handle(OWNER_ID, application.id)

        assert [dto.key for dto in result] == ["A"]
