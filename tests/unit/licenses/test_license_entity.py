"""
Unit tests for License entity.
"""
import uuid
from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.duration import LIFETIME_SENTINEL, ExpiryDelta, ExpiryUnit
from core.domain.exceptions import InvalidInputError
from licenses.domain.license import License, normalize_level

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)


def _license(unit=ExpiryUnit.DAYS, amount=1, **changes):
    license = License.create(
        application_id=uuid.uuid4(),
        key="KEY-AB12",
        delta=ExpiryDelta(amount, unit),
        now=NOW,
    )
    if changes:
        license = replace(license, **changes)
    return license


class TestLicense:
    """Tests for License entity."""

    def test_create_finite(self):
        """Test creating a finite license."""
        license = _license(amount=1)

        assert license.duration == 86400
        assert license.expiry == NOW + timedelta(days=1)
        assert license.level == 1
        assert license.used is False
        assert license.banned is False
        assert license.is_lifetime is False

    def test_create_lifetime(self):
        """Test lifetime licenses have no expiry and one sentinel of duration."""
        license = _license(unit=LIFETIME_SENTINEL, amount=3)

        assert license.expiry is None
        assert license.duration == LIFETIME_SENTINEL
        assert license.is_lifetime is True

    def test_create_requires_key(self):
        """Test empty keys are rejected."""
        with pytest.raises(InvalidInputError):
            License.create(application_id=uuid.uuid4(), key="", delta=ExpiryDelta(1, 60))

    @pytest.mark.parametrize("raw,level", [(None, 1), ("", 1), ("3", 3), (0, 1), (-2, 1), (5, 5)])
    def test_normalize_level(self, raw, level):
        """Test subscription level coercion."""
        assert normalize_level(raw) == level

    def test_add_time(self):
        """Test adding time moves expiry and duration together."""
        license = _license(amount=1)

        updated = license.add_time(ExpiryDelta(2, ExpiryUnit.DAYS), NOW)

        assert updated.expiry == NOW + timedelta(days=3)
        assert updated.duration == 259200

    def test_add_zero_time_keeps_state(self):
        """Test time=0 leaves expiry and duration unchanged."""
        license = _license(amount=1)

        updated = license.add_time(ExpiryDelta(0, ExpiryUnit.DAYS), NOW)

        assert (updated.expiry, updated.duration) == (license.expiry, license.duration)

    def test_add_time_used_license_untouched(self):
        """Test used licenses are frozen."""
        license = _license(used=True)
        assert license.add_time(ExpiryDelta(5, ExpiryUnit.DAYS), NOW) is None
        assert license.add_time(ExpiryDelta(1, LIFETIME_SENTINEL), NOW) is None

    def test_add_lifetime(self):
        """Test adding lifetime turns a finite license into a lifetime one."""
        updated = _license().add_time(ExpiryDelta(1, LIFETIME_SENTINEL), NOW)

        assert updated.expiry is None
        assert updated.duration == LIFETIME_SENTINEL

    def test_add_finite_to_lifetime_is_noop(self):
        """Test a lifetime license is never downgraded."""
        license = _license(unit=LIFETIME_SENTINEL)
        assert license.add_time(ExpiryDelta(1, ExpiryUnit.DAYS), NOW) is None

    def test_ban(self):
        """Test banning a license."""
        banned = _license().ban("chargeback")
        assert banned.banned is True
        assert banned.ban_reason == "chargeback"
        assert _license().ban("").ban_reason is None
