"""Unit tests for SeatPolicy."""

import pytest

from roster.config import InvitationSettings
from roster.domain.error import ValidationError
from roster.domain.service import SeatPolicy
from roster.domain.value import Role


class TestLimit:
    """Tests for limit method."""

    def test_default_limits(self):
        """Default limits should be 5 STAFF and 20 ATHLETE seats."""
        policy = SeatPolicy(InvitationSettings())

        assert policy.limit(Role.STAFF) == 5
        assert policy.limit(Role.ATHLETE) == 20

    def test_limits_come_from_settings(self):
        """Configured limits should override the defaults."""
        policy = SeatPolicy(
            InvitationSettings(staff_seat_limit=2, athlete_seat_limit=3)
        )

        assert policy.limits() == {Role.STAFF: 2, Role.ATHLETE: 3}

    def test_pro_role_has_no_seats(self):
        """PRO is not a seat-holding role."""
        policy = SeatPolicy(InvitationSettings())

        with pytest.raises(ValidationError, match="role PRO"):
            policy.limit(Role.PRO)
