"""Seat limits per role."""

from roster.config import InvitationSettings
from roster.domain.error import ValidationError
from roster.domain.value import AccountId, Role

from . import reasons
from .base import Service


class SeatPolicy(Service):
    """Maps a role to the number of seats a team has for it.

    Limits come from InvitationSettings. pro_id is accepted so per-PRO
    overrides can be added without changing callers.
    """

    def __init__(self, invitation_settings: InvitationSettings) -> None:
        self.invitation_settings = invitation_settings

    def limit(self, role: Role, pro_id: AccountId | None = None) -> int:
        """Seat limit for role on pro_id's team.

        Raises:
            ValidationError: If role does not take seats
        """
        if role == Role.STAFF:
            return self.invitation_settings.staff_seat_limit
        if role == Role.ATHLETE:
            return self.invitation_settings.athlete_seat_limit
        raise ValidationError(reasons.invalid_role(role))

    def limits(self, pro_id: AccountId | None = None) -> dict[Role, int]:
        """Limits for every member role."""
        return {role: self.limit(role, pro_id) for role in (Role.STAFF, Role.ATHLETE)}
