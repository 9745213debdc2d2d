"""
Unit tests for Application entity.
"""
import pytest

from applications.domain.application import Application
from core.domain.exceptions import InvalidInputError
from core.domain.value_objects import ApplicationStatus


class TestApplication:
    """Tests for Application entity."""

    def test_create(self):
        """Test creating an application."""
        application = Application.create(owner_id=7, name="  Loader  ")

        assert application.name == "Loader"
        assert application.status is ApplicationStatus.ACTIVE
        assert application.version == "1.0"
        assert len(application.secret) == 64
        int(application.secret, 16)
        assert application.is_owned_by(7) is True
        assert application.is_owned_by(8) is False

    def test_secrets_are_unique(self):
        """Test each application gets its own secret."""
        first = Application.create(owner_id=1, name="A")
        second = Application.create(owner_id=1, name="B")
        assert first.secret != second.secret

    def test_blank_name_rejected(self):
        """Test a blank name is invalid."""
        with pytest.raises(InvalidInputError, match="App name is required"):
            Application.create(owner_id=1, name="   ")

    def test_rename(self):
        """Test renaming returns a new instance."""
        application = Application.create(owner_id=1, name="Old")
        renamed = application.rename("New")
        assert renamed.name == "New"
        assert application.name == "Old"

    def test_set_status(self):
        """Test pausing an application."""
        application = Application.create(owner_id=1, name="A")
        assert application.set_status("paused").status is ApplicationStatus.PAUSED

    def test_invalid_status(self):
        """Test unknown statuses are rejected."""
        with pytest.raises(InvalidInputError, match="Invalid status"):
            Application.create(owner_id=1, name="A").set_status("archived")
