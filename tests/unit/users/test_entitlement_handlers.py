"""
Unit tests for extend and subtract handlers.
"""
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.duration import LIFETIME_SENTINEL
from core.domain.exceptions import ApplicationNotFoundError, InvalidInputError
from fakes import OWNER_ID, InMemoryAppUserRepository
from users.application.commands.change_user_time import (
    ExtendAppUsersCommand,
    SubtractAppUserTimeCommand,
)
from users.application.handlers.entitlement_handlers import (
    ExtendAppUsersHandler,
    SubtractAppUserTimeHandler,
)
from users.domain.app_user import AppUser
from users.domain.cohort import AppUserCohort

DAY = 86400


def _now():
    return datetime.now(timezone.utc)


def _user(application, username, expiry=None, subscription=None):
    return AppUser.create(
        application_id=application.id,
        username=username,
        password_hash="hashed",
        subscription=subscription,
        expiry=expiry,
    )


@pytest.mark.asyncio
class TestExtendAppUsersHandler:
    """Tests for ExtendAppUsersHandler."""

    async def test_extend_everyone_from_dashboard_filters(
        self, application, fake_application_repository, recorded_events
    ):
        """Test username 'all' and subscription 'default' extend every user."""
        expiry = _now() + timedelta(days=1)
        unlimited = _user(application, "neo")
        finite = _user(application, "trinity", expiry=expiry, subscription="gold")
        repository = InMemoryAppUserRepository(unlimited, finite)
        handler = ExtendAppUsersHandler(fake_application_repository, repository)
        before = _now()

        result = await handler.handle(
            ExtendAppUsersCommand(
                owner_id=OWNER_ID,
                application_id=application.id,
                time=7,
                expiry_unit=DAY,
                cohort=AppUserCohort.from_dashboard(username="all", subscription="default"),
            )
        )

        assert result.count == 2
        restarted = repository.rows[unlimited.id].expiry
        assert before + timedelta(days=7) <= restarted <= _now() + timedelta(days=7)
        assert repository.rows[finite.id].expiry == expiry + timedelta(days=7)
        assert recorded_events[0].operation == "extend"

    async def test_extend_filters_by_subscription(self, application, fake_application_repository):
        """Test an exact subscription filter narrows the cohort."""
        gold = _user(application, "neo", expiry=_now(), subscription="gold")
        basic = _user(application, "trinity", expiry=_now())
        repository = InMemoryAppUserRepository(gold, basic)
        handler = ExtendAppUsersHandler(fake_application_repository, repository)

        result = await handler.handle(
            ExtendAppUsersCommand(
                owner_id=OWNER_ID,
                application_id=application.id,
                time=1,
                expiry_unit=DAY,
                cohort=AppUserCohort.from_dashboard(subscription="gold"),
            )
        )

        assert result.count == 1
        assert repository.rows[basic.id] == basic

    async def test_extend_active_only_skips_expired(
        self, application, fake_application_repository
    ):
        """Test active_only leaves expired users alone."""
        expired = _user(application, "neo", expiry=_now() - timedelta(days=3))
        active = _user(application, "trinity", expiry=_now() + timedelta(days=3))
        repository = InMemoryAppUserRepository(expired, active)
        handler = ExtendAppUsersHandler(fake_application_repository, repository)

        result = await handler.handle(
            ExtendAppUsersCommand(
                owner_id=OWNER_ID,
                application_id=application.id,
                time=1,
                expiry_unit=DAY,
                cohort=AppUserCohort.from_dashboard(active_only=True),
            )
        )

        assert result.count == 1
        assert repository.rows[expired.id] == expired

    async def test_extend_lifetime(self, application, fake_application_repository):
        """Test a lifetime extension makes every user unlimited."""
        user = _user(application, "neo", expiry=_now())
        repository = InMemoryAppUserRepository(user)
        handler = ExtendAppUsersHandler(fake_application_repository, repository)

        await handler.handle(
            ExtendAppUsersCommand(
                owner_id=OWNER_ID,
                application_id=application.id,
                time=1,
                expiry_unit=LIFETIME_SENTINEL,
            )
        )

        assert repository.rows[user.id].expiry is None

    async def test_extend_requires_unit(self, application, fake_application_repository):
        """Test a missing unit is invalid and changes nothing."""
        user = _user(application, "neo", expiry=_now())
        repository = InMemoryAppUserRepository(user)
        handler = ExtendAppUsersHandler(fake_application_repository, repository)

        with pytest.raises(InvalidInputError):
            await handler.handle(
                ExtendAppUsersCommand(
                    owner_id=OWNER_ID, application_id=application.id, time=1, expiry_unit=None
                )
            )
        assert repository.rows[user.id] == user

    async def test_extend_beyond_last_date(self, application, fake_application_repository):
        """Test an extension past year 9999 is invalid input and changes nothing."""
        user = _user(application, "neo", expiry=_now() + timedelta(days=1))
        repository = InMemoryAppUserRepository(user)
        handler = ExtendAppUsersHandler(fake_application_repository, repository)

        with pytest.raises(InvalidInputError, match="Expiry out of range"):
            await handler.handle(
                ExtendAppUsersCommand(
                    owner_id=OWNER_ID,
                    application_id=application.id,
                    time=10000,
                    expiry_unit=31556926,
                )
            )
        assert repository.rows[user.id] == user

    async def test_extend_foreign_application(
        self, foreign_application, fake_application_repository
    ):
        """Test another owner's users are not reachable."""
        user = _user(foreign_application, "neo", expiry=_now())
        repository = InMemoryAppUserRepository(user)
        handler = ExtendAppUsersHandler(fake_application_repository, repository)

        with pytest.raises(ApplicationNotFoundError):
            await handler.handle(
                ExtendAppUsersCommand(
                    owner_id=OWNER_ID,
                    application_id=foreign_application.id,
                    time=1,
                    expiry_unit=DAY,
                )
            )
        assert repository.rows[user.id] == user


@pytest.mark.asyncio
class TestSubtractAppUserTimeHandler:
    """Tests for SubtractAppUserTimeHandler."""

    async def test_subtract_clamps_to_now(self, application, fake_application_repository):
        """Test removing more time than remains ends the subscription now."""
        user = _user(application, "neo", expiry=_now() + timedelta(days=2))
        repository = InMemoryAppUserRepository(user)
        handler = SubtractAppUserTimeHandler(fake_application_repository, repository)
        before = _now()

        result = await handler.handle(
            SubtractAppUserTimeCommand(
                owner_id=OWNER_ID, application_id=application.id, time=10, expiry_unit=DAY
            )
        )

        assert result.count == 1
        assert before <= repository.rows[user.id].expiry <= _now()

    async def test_subtract_partial(self, application, fake_application_repository):
        """Test removing less time than remains."""
        expiry = _now() + timedelta(days=10)
        user = _user(application, "neo", expiry=expiry)
        repository = InMemoryAppUserRepository(user)
        handler = SubtractAppUserTimeHandler(fake_application_repository, repository)

        await handler.handle(
            SubtractAppUserTimeCommand(
                owner_id=OWNER_ID, application_id=application.id, time=3, expiry_unit=DAY
            )
        )

        assert repository.rows[user.id].expiry == expiry - timedelta(days=3)

    async def test_subtract_skips_unlimited(self, application, fake_application_repository):
        """Test unlimited users are matched but never written."""
        unlimited = _user(application, "neo")
        finite = _user(application, "trinity", expiry=_now() + timedelta(days=5))
        repository = InMemoryAppUserRepository(unlimited, finite)
        handler = SubtractAppUserTimeHandler(fake_application_repository, repository)

        result = await handler.handle(
            SubtractAppUserTimeCommand(
                owner_id=OWNER_ID, application_id=application.id, time=1, expiry_unit=DAY
            )
        )

        assert result.count == 1
        assert result.matched == 2
        assert repository.rows[unlimited.id].expiry is None

    async def test_subtract_never_before_now(self, application, fake_application_repository):
        """Test no finite expiry ends up in the past, whatever the amount."""
        users = [
            _user(application, f"user{days}", expiry=_now() + timedelta(days=days))
            for days in (-3, 0, 1, 30)
        ]
        repository = InMemoryAppUserRepository(*users)
        handler = SubtractAppUserTimeHandler(fake_application_repository, repository)
        before = _now()

        await handler.handle(
            SubtractAppUserTimeCommand(
                owner_id=OWNER_ID, application_id=application.id, time=5, expiry_unit=DAY
            )
        )

        assert all(user.expiry >= before for user in repository.rows.values())
