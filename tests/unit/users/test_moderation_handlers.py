"""
Unit tests for user moderation handlers.
"""
import pytest

from core.domain.exceptions import AppUserNotFoundError, InvalidInputError
from fakes import OWNER_ID, InMemoryAppUserRepository
from users.application.commands.moderate_users import (
    BanAppUserCommand,
    DeleteSubscriptionCommand,
    PauseAppUsersCommand,
    ResetHwidCommand,
)
from users.application.handlers.moderation_handlers import (
    BanAppUserHandler,
    DeleteSubscriptionHandler,
    PauseAppUsersHandler,
    ResetHwidHandler,
)
from users.domain.app_user import AppUser


def _user(application, username, hwid=None, subscription=None):
    user = AppUser.create(
        application_id=application.id,
        username=username,
        password_hash="hashed",
        subscription=subscription,
    )
    return user.update(hwid=hwid) if hwid else user


@pytest.mark.asyncio
class TestModerationHandlers:
    """Tests for ban, pause, hwid reset and subscription reset."""

    async def test_ban(self, application, fake_application_repository, recorded_events):
        """Test banning a user with a reason."""
        user = _user(application, "neo")
        repository = InMemoryAppUserRepository(user)
        handler = BanAppUserHandler(fake_application_repository, repository)

        result = await handler.handle(
            BanAppUserCommand(
                owner_id=OWNER_ID, application_id=application.id, user_id=user.id, reason="abuse"
            )
        )

        assert result.banned is True
        assert result.ban_reason == "abuse"
        assert repository.rows[user.id].banned is True
        assert recorded_events[0].event_type == "AppUserBanned"

    async def test_ban_user_of_other_application(
        self, application, foreign_application, fake_application_repository
    ):
        """Test a user id from another application is not found."""
        outsider = _user(foreign_application, "neo")
        repository = InMemoryAppUserRepository(outsider)
        handler = BanAppUserHandler(fake_application_repository, repository)

        with pytest.raises(AppUserNotFoundError):
            await handler.handle(
                BanAppUserCommand(
                    owner_id=OWNER_ID, application_id=application.id, user_id=outsider.id
                )
            )
        assert repository.rows[outsider.id].banned is False

    async def test_pause_and_unpause(self, application, fake_application_repository):
        """Test pausing only the listed users, then unpausing them."""
        first, second = _user(application, "neo"), _user(application, "trinity")
        repository = InMemoryAppUserRepository(first, second)
        handler = PauseAppUsersHandler(fake_application_repository, repository)

        paused = await handler.handle(
            PauseAppUsersCommand(
                owner_id=OWNER_ID,
                application_id=application.id,
                user_ids=[str(first.id)],
                action="pause",
            )
        )
        assert paused.count == 1
        assert repository.rows[first.id].paused is True
        assert repository.rows[second.id].paused is False

        await handler.handle(
            PauseAppUsersCommand(
                owner_id=OWNER_ID,
                application_id=application.id,
                user_ids=[first.id],
                action="unpause",
            )
        )
        assert repository.rows[first.id].paused is False

    @pytest.mark.parametrize("action,user_ids", [("freeze", ["x"]), (None, ["x"]), ("pause", [])])
    async def test_pause_invalid(
        self, application, fake_application_repository, action, user_ids
    ):
        """Test unknown actions and empty id lists are rejected."""
        user = _user(application, "neo")
        ids = [user.id] if user_ids else []
        handler = PauseAppUsersHandler(
            fake_application_repository, InMemoryAppUserRepository(user)
        )

        with pytest.raises(InvalidInputError):
            await handler.handle(
                PauseAppUsersCommand(
                    owner_id=OWNER_ID, application_id=application.id, user_ids=ids, action=action
                )
            )

    async def test_reset_hwid_listed(self, application, fake_application_repository):
        """Test resetting only the listed users."""
        first = _user(application, "neo", hwid="HW-1")
        second = _user(application, "trinity", hwid="HW-2")
        repository = InMemoryAppUserRepository(first, second)
        handler = ResetHwidHandler(fake_application_repository, repository)

        result = await handler.handle(
            ResetHwidCommand(owner_id=OWNER_ID, application_id=application.id, user_ids=[first.id])
        )

        assert result.count == 1
        assert repository.rows[first.id].hwid is None
        assert repository.rows[second.id].hwid == "HW-2"

    async def test_reset_hwid_everyone(
        self, application, foreign_application, fake_application_repository
    ):
        """Test no ids resets every user of the application only."""
        mine = [_user(application, "neo", hwid="A"), _user(application, "trinity", hwid="B")]
        theirs = _user(foreign_application, "smith", hwid="C")
        repository = InMemoryAppUserRepository(*mine, theirs)
        handler = ResetHwidHandler(fake_application_repository, repository)

        result = await handler.handle(
            ResetHwidCommand(owner_id=OWNER_ID, application_id=application.id)
        )

        assert result.count == 2
        assert all(repository.rows[user.id].hwid is None for user in mine)
        assert repository.rows[theirs.id].hwid == "C"

    async def test_delete_subscription(self, application, fake_application_repository):
        """Test a user goes back to the default tier without expiry."""
        user = _user(application, "neo", subscription="gold")
        repository = InMemoryAppUserRepository(user)
        handler = DeleteSubscriptionHandler(fake_application_repository, repository)

        result = await handler.handle(
            DeleteSubscriptionCommand(
                owner_id=OWNER_ID, application_id=application.id, user_id=user.id
            )
        )

        assert result.subscription == "default"
        assert result.expiry is None
