"""Team domain service."""

from dataclasses import dataclass
from uuid import uuid4

import logfire

from roster.domain.error import ForbiddenError, InvalidStateError, NotFoundError
from roster.domain.model import Account, AuditEntry
from roster.domain.repository import (
    AccountRepository,
    AuditLogRepository,
    TeamRepository,
    TransactionRunner,
    TransactionScope,
)
from roster.domain.value import (
    AccountId,
    AuditAction,
    AuditEntryId,
    MembershipStatus,
    Role,
)
from roster.util.clock import Clock

from . import reasons
from .base import Service
from .consistency_guardian import ConsistencyGuardian
from .identity_provider import IdentityProvider
from .seat_ledger import ReconciliationResult, SeatLedger
from .seat_policy import SeatPolicy


@dataclass
class RoleSeats:
    """Seat usage for one role."""

    role: Role
    count: int
    limit: int

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)


@dataclass
class TeamRoster:
    """A PRO's team: name, seat usage per role and active members."""

    pro_id: AccountId
    name: str
    seats: list[RoleSeats]
    members: list[Account]


class TeamService(Service):
    """Domain service for a PRO managing their team."""

    def __init__(
        self,
        account_repository: AccountRepository,
        team_repository: TeamRepository,
        audit_log_repository: AuditLogRepository,
        seat_ledger: SeatLedger,
        seat_policy: SeatPolicy,
        guardian: ConsistencyGuardian,
        identity_provider: IdentityProvider,
        transaction_runner: TransactionRunner,
        clock: Clock,
    ) -> None:
        """Initialize team service.

        Args:
            account_repository: Account repository
            team_repository: Team repository
            audit_log_repository: Audit log
            seat_ledger: Seat counters
            seat_policy: Role limits
            guardian: Post-commit account hook
            identity_provider: Identity provider (orphan cleanup)
            transaction_runner: Runner for removal
            clock: Time source
        """
        self.account_repository = account_repository
        self.team_repository = team_repository
        self.audit_log_repository = audit_log_repository
        self.seat_ledger = seat_ledger
        self.seat_policy = seat_policy
        self.guardian = guardian
        self.identity_provider = identity_provider
        self.transaction_runner = transaction_runner
        self.clock = clock

    async def require_pro(self, account_id: AccountId) -> Account:
        """Load an account that must be a PRO.

        Raises:
            NotFoundError: If the account does not exist
            ForbiddenError: If the account is not a PRO
        """
        account = await self.account_repository.find_by_id(account_id)
        if account is None:
            raise NotFoundError("Account", str(account_id))
        if account.role != Role.PRO:
            raise ForbiddenError(reasons.ONLY_PRO)
        return account

    async def get_roster(self, pro_id: AccountId) -> TeamRoster:
        """Seat usage and active members of a PRO's team."""
        with logfire.span("team_service.get_roster", pro_id=str(pro_id)):
            pro = await self.require_pro(pro_id)
            team = await self.team_repository.find_by_pro(pro.id)
            seats = [
                RoleSeats(
                    role=role,
                    count=await self.seat_ledger.current_count(pro.id, role),
                    limit=limit,
                )
                for role, limit in self.seat_policy.limits(pro.id).items()
            ]
            members = await self.account_repository.find_team_members(pro.id)
            return TeamRoster(
                pro_id=pro.id,
                name=team.name if team else "My Team",
                seats=seats,
                members=members,
            )

    async def remove_member(
        self, requester_id: AccountId, member_id: AccountId
    ) -> Account:
        """Remove a member from the requester's team.

        The member keeps their account: status becomes inactive and pro_id is
        cleared. The team counter goes down in the same transaction.

        Raises:
            ForbiddenError: If the requester is not a PRO or the member is on
                another team
            InvalidStateError: If the requester tries to remove themselves
            NotFoundError: If the member does not exist
        """
        with logfire.span(
            "team_service.remove_member",
            requester_id=str(requester_id),
            member_id=str(member_id),
        ):
            pro = await self.require_pro(requester_id)
            if member_id == pro.id:
                raise InvalidStateError(reasons.CANNOT_REMOVE_SELF)

            async def work(scope: TransactionScope) -> tuple[Account, Account]:
                member = await scope.get_account(member_id)
                if member is None:
                    raise NotFoundError("Account", str(member_id))
                if not member.is_member_of(pro.id):
                    raise ForbiddenError(reasons.NOT_A_MEMBER)
                now = self.clock.now()
                await self.seat_ledger.vacate(scope, member, now)
                removed = member.model_copy(
                    update={
                        "status": MembershipStatus.INACTIVE,
                        "pro_id": None,
                        "removed_at": now,
                        "removed_by": pro.id,
                        "updated_at": now,
                    }
                )
                scope.put(removed)
                return member, removed

            before, after = await self.transaction_runner.run(
                work, name="remove_member"
            )
            await self.audit_log_repository.append(
                AuditEntry(
                    id=AuditEntryId(uuid4()),
                    action=AuditAction.REMOVE_TEAM_MEMBER,
                    requester_id=pro.id,
                    subject_id=str(member_id),
                    pro_id=pro.id,
                    details={
                        "role": before.role.value if before.role else None,
                        "email": before.email,
                    },
                    created_at=self.clock.now(),
                )
            )
            logfire.info(
                "Team member removed",
                pro_id=str(pro.id),
                member_id=str(member_id),
                role=before.role.value if before.role else None,
            )
            outcome = await self.guardian.on_account_changed(before, after)
            return outcome.account

    async def cleanup_orphaned_account(
        self, requester_id: AccountId, email: str
    ) -> AccountId:
        """Delete an identity that has no account document.

        Sign-ups that failed half way leave an identity behind that blocks the
        email from registering again.

        Returns:
            ID of the deleted identity

        Raises:
            ForbiddenError: If the requester is not a PRO
            InvalidStateError: If an account document uses the email
            NotFoundError: If no identity uses the email
        """
        with logfire.span(
            "team_service.cleanup_orphaned_account", requester_id=str(requester_id)
        ):
            pro = await self.require_pro(requester_id)
            if await self.account_repository.find_by_email(email) is not None:
                raise InvalidStateError(reasons.ACCOUNT_HAS_DOCUMENT)

            orphan_id = await self.identity_provider.lookup_by_email(email)
            await self.identity_provider.delete_account(orphan_id)

            await self.audit_log_repository.append(
                AuditEntry(
                    id=AuditEntryId(uuid4()),
                    action=AuditAction.CLEANUP_ORPHANED_ACCOUNT,
                    requester_id=pro.id,
                    subject_id=str(orphan_id),
                    pro_id=pro.id,
                    details={"email": email},
                    created_at=self.clock.now(),
                )
            )
            logfire.warn(
                "Orphaned identity deleted",
                requester_id=str(pro.id),
                orphan_id=str(orphan_id),
            )
            return orphan_id

    async def reconcile_team(self, requester_id: AccountId) -> ReconciliationResult:
        """Reconcile the requester's own team counters."""
        pro = await self.require_pro(requester_id)
        return await self.seat_ledger.reconcile(pro.id)
