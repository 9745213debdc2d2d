"""
Unit tests for the duration unit model.
"""
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.duration import (
    LIFETIME_SENTINEL,
    ExpiryDelta,
    ExpiryUnit,
    humanize_duration,
    is_lifetime_unit,
)
from core.domain.exceptions import InvalidInputError

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestExpiryUnit:
    """Tests for the named unit multipliers."""

    def test_dashboard_values(self):
        """Test the multipliers match the dashboard selectors."""
        assert ExpiryUnit.DAYS == 86400
        assert ExpiryUnit.WEEKS == 604800
        assert ExpiryUnit.MONTHS == 2629743
        assert ExpiryUnit.YEARS == 31556926
        assert ExpiryUnit.LIFETIME == LIFETIME_SENTINEL == 315569260

    def test_is_lifetime_unit(self):
        """Test sentinel detection."""
        assert is_lifetime_unit(315569260) is True
        assert is_lifetime_unit(ExpiryUnit.YEARS) is False


class TestExpiryDelta:
    """Tests for ExpiryDelta value object."""

    def test_seconds(self):
        """Test finite delta length."""
        delta = ExpiryDelta(amount=3, unit=ExpiryUnit.DAYS)
        assert delta.seconds == 3 * 86400
        assert delta.as_timedelta == timedelta(days=3)
        assert delta.total_seconds() == 259200

    def test_lifetime_has_no_length(self):
        """Test lifetime delta is never multiplied."""
        delta = ExpiryDelta(amount=5, unit=LIFETIME_SENTINEL)
        assert delta.is_lifetime is True
        assert delta.seconds is None
        assert delta.as_timedelta is None
        assert delta.total_seconds() == LIFETIME_SENTINEL

    def test_any_positive_unit_is_accepted(self):
        """Test arbitrary caller-supplied multipliers."""
        assert ExpiryDelta(amount=2, unit=90).seconds == 180

    @pytest.mark.parametrize(
        "amount,unit",
        [(-1, 86400), (1, 0), (1, -60), ("1", 86400), (1, None), (True, 86400)],
    )
    def test_invalid(self, amount, unit):
        """Test invalid amounts and units are rejected."""
        with pytest.raises(InvalidInputError):
            ExpiryDelta(amount=amount, unit=unit)

    def test_amount_beyond_representable_range(self):
        """Test a delta longer than any timedelta is rejected up front."""
        with pytest.raises(InvalidInputError, match="Expiry out of range"):
            ExpiryDelta(amount=10**9, unit=ExpiryUnit.YEARS)

    def test_huge_lifetime_amount_is_accepted(self):
        """Test the range bound ignores the lifetime sentinel."""
        assert ExpiryDelta(amount=10**9, unit=LIFETIME_SENTINEL).initial_expiry(NOW) is None

    def test_initial_expiry_past_last_date(self):
        """Test an expiry after year 9999 is invalid input."""
        with pytest.raises(InvalidInputError, match="Expiry out of range"):
            ExpiryDelta(10000, ExpiryUnit.YEARS).initial_expiry(NOW)

    def test_extend_past_last_date(self):
        """Test extending beyond year 9999 is invalid input."""
        delta = ExpiryDelta(10000, ExpiryUnit.YEARS)
        with pytest.raises(InvalidInputError, match="Expiry out of range"):
            delta.extend(NOW + timedelta(days=1), NOW)
        with pytest.raises(InvalidInputError):
            delta.extend(None, NOW)

    def test_subtract_before_first_date_clamps_to_now(self):
        """Test subtracting past year 1 still clamps to now."""
        expiry = NOW + timedelta(days=1)
        assert ExpiryDelta(10000, ExpiryUnit.YEARS).subtract(expiry, NOW) == NOW

    def test_initial_expiry(self):
        """Test expiry of something starting now."""
        assert ExpiryDelta(1, ExpiryUnit.DAYS).initial_expiry(NOW) == NOW + timedelta(days=1)
        assert ExpiryDelta(1, LIFETIME_SENTINEL).initial_expiry(NOW) is None

    def test_extend_finite(self):
        """Test extending a finite expiry adds to it, even in the past."""
        past = NOW - timedelta(days=10)
        delta = ExpiryDelta(7, ExpiryUnit.DAYS)
        assert delta.extend(past, NOW) == past + timedelta(days=7)

    def test_extend_unlimited_restarts_from_now(self):
        """Test a None expiry restarts from now."""
        assert ExpiryDelta(7, ExpiryUnit.DAYS).extend(None, NOW) == NOW + timedelta(days=7)

    def test_extend_lifetime_always_unlimited(self):
        """Test lifetime extension collapses to None."""
        delta = ExpiryDelta(1, LIFETIME_SENTINEL)
        assert delta.extend(NOW + timedelta(days=3), NOW) is None
        assert delta.extend(None, NOW) is None

    def test_subtract_finite(self):
        """Test subtracting inside the remaining time."""
        expiry = NOW + timedelta(days=10)
        assert ExpiryDelta(3, ExpiryUnit.DAYS).subtract(expiry, NOW) == NOW + timedelta(days=7)

    def test_subtract_clamps_to_now(self):
        """Test subtraction never goes before now."""
        expiry = NOW + timedelta(days=2)
        assert ExpiryDelta(10, ExpiryUnit.DAYS).subtract(expiry, NOW) == NOW

    def test_subtract_keeps_unlimited(self):
        """Test a None expiry is never touched."""
        assert ExpiryDelta(10, ExpiryUnit.DAYS).subtract(None, NOW) is None
        assert ExpiryDelta(1, LIFETIME_SENTINEL).subtract(None, NOW) is None

    def test_subtract_lifetime_clamps_to_now(self):
        """Test subtracting a lifetime from a finite expiry ends it now."""
        expiry = NOW + timedelta(days=30)
        assert ExpiryDelta(1, LIFETIME_SENTINEL).subtract(expiry, NOW) == NOW

    def test_extend_then_subtract_is_inverse(self):
        """Test extend and subtract cancel out for a finite future expiry."""
        expiry = NOW + timedelta(days=4)
        delta = ExpiryDelta(2, ExpiryUnit.WEEKS)
        assert delta.subtract(delta.extend(expiry, NOW), NOW) == expiry

    def test_extend_then_subtract_on_past_expiry(self):
        """Test the round trip clamps a past expiry to now."""
        expiry = NOW - timedelta(days=1)
        delta = ExpiryDelta(2, ExpiryUnit.DAYS)
        assert delta.subtract(delta.extend(expiry, NOW), NOW) == max(NOW, expiry)

    def test_str(self):
        """Test readable form."""
        assert str(ExpiryDelta(2, 86400)) == "2x86400s"
        assert str(ExpiryDelta(1, LIFETIME_SENTINEL)) == "lifetime"


class TestHumanizeDuration:
    """Tests for humanize_duration."""

    @pytest.mark.parametrize(
        "seconds,label",
        [
            (None, "Lifetime"),
            (LIFETIME_SENTINEL, "Lifetime"),
            (31556926 * 2, "2 year(s)"),
            (2629743, "1 month(s)"),
            (604800 * 3, "3 week(s)"),
            (259200, "3 day(s)"),
            (7200, "2 hour(s)"),
            (120, "2 minute(s)"),
            (45, "45 second(s)"),
        ],
    )
    def test_labels(self, seconds, label):
        """Test dashboard duration labels."""
        assert humanize_duration(seconds) == label
