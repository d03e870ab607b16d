"""Seat ledger domain service."""

from dataclasses import dataclass
from datetime import datetime

import logfire

from roster.domain.model import Account, Team
from roster.domain.repository import (
    AccountRepository,
    TeamRepository,
    TransactionRunner,
    TransactionScope,
)
from roster.domain.value import AccountId, MembershipStatus, ProStatus, Role
from roster.util.clock import Clock

from . import reasons
from .base import Service
from .seat_policy import SeatPolicy


@dataclass(frozen=True)
class SeatDecision:
    """Outcome of an admission check."""

    granted: bool
    reason: str | None = None
    count: int = 0
    limit: int = 0

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)


@dataclass(frozen=True)
class ReconciliationResult:
    """What a reconciliation pass changed on one team."""

    pro_id: AccountId
    staff_before: int | None
    staff_after: int
    athlete_before: int | None
    athlete_after: int
    created: bool = False

    @property
    def changed(self) -> bool:
        return (
            self.created
            or self.staff_before != self.staff_after
            or self.athlete_before != self.athlete_after
        )


class SeatLedger(Service):
    """Per-team seat counters and admission decisions.

    Counters on the Team document are the source of truth for admission.
    Redemption checks and increments them inside the same transaction as the
    membership write, so two joiners racing for the last seat cannot both be
    admitted. reconcile() repairs drift against live accounts.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        team_repository: TeamRepository,
        transaction_runner: TransactionRunner,
        seat_policy: SeatPolicy,
        clock: Clock,
    ) -> None:
        """Initialize seat ledger.

        Args:
            account_repository: Account repository (live counts)
            team_repository: Team repository (counters)
            transaction_runner: Runner for counter writes
            seat_policy: Role limits
            clock: Time source
        """
        self.account_repository = account_repository
        self.team_repository = team_repository
        self.transaction_runner = transaction_runner
        self.seat_policy = seat_policy
        self.clock = clock

    async def current_count(self, pro_id: AccountId, role: Role) -> int:
        """Seats taken for role on pro_id's team.

        Uses the team counter when the team exists, otherwise counts live
        accounts.
        """
        team = await self.team_repository.find_by_pro(pro_id)
        if team is not None:
            return team.count_for(role)
        return await self.account_repository.count_team_members(pro_id, role)

    async def try_reserve_seat(self, pro_id: AccountId, role: Role) -> SeatDecision:
        """Check whether pro_id's team can admit one more member in role.

        Read-only. Redemption repeats the check atomically with its writes
        through check_admission().
        """
        with logfire.span(
            "seat_ledger.try_reserve_seat", pro_id=str(pro_id), role=role.value
        ):
            pro = await self.account_repository.find_by_id(pro_id)
            count = await self.current_count(pro_id, role)
            decision = self.check_admission(pro, count, role)
            logfire.info(
                "Seat check",
                pro_id=str(pro_id),
                role=role.value,
                granted=decision.granted,
                count=decision.count,
                limit=decision.limit,
            )
            return decision

    def check_admission(
        self,
        pro: Account | None,
        count: int,
        role: Role,
        inactive_reason: str = reasons.PRO_NOT_ACTIVE,
    ) -> SeatDecision:
        """Admission decision against a snapshot of the PRO and the counter.

        Args:
            pro: PRO account as read in the caller's snapshot
            count: Seats currently taken for role
            role: Role being admitted
            inactive_reason: Reason reported when the PRO is not active

        Returns:
            Granted decision, or denied with a reason
        """
        limit = self.seat_policy.limit(role, pro.id if pro else None)
        if pro is None or pro.pro_status != ProStatus.ACTIVE:
            return SeatDecision(False, inactive_reason, count, limit)
        if count >= limit:
            return SeatDecision(False, reasons.seat_limit_reached(role), count, limit)
        return SeatDecision(True, None, count, limit)

    async def seed_team(self, pro_id: AccountId, now: datetime) -> Team:
        """New, unsaved team record with counters taken from live accounts."""
        return Team(
            pro_id=pro_id,
            staff_count=await self.account_repository.count_team_members(
                pro_id, Role.STAFF
            ),
            athlete_count=await self.account_repository.count_team_members(
                pro_id, Role.ATHLETE
            ),
            created_at=now,
            updated_at=now,
        )

    async def team_in(
        self, scope: TransactionScope, pro_id: AccountId, now: datetime
    ) -> Team:
        """Team as seen by scope, seeded from live counts when missing."""
        team = await scope.get_team(pro_id)
        if team is None:
            team = await self.seed_team(pro_id, now)
        return team

    def admit(self, team: Team, role: Role, now: datetime) -> Team:
        return team.with_count(role, team.count_for(role) + 1, now)

    def release(self, team: Team, role: Role, now: datetime) -> Team:
        return team.with_count(role, team.count_for(role) - 1, now)

    async def vacate(
        self, scope: TransactionScope, account: Account | None, now: datetime
    ) -> None:
        """Stage the release of the seat account currently holds, if any."""
        if (
            account is None
            or account.role is None
            or not account.role.is_member_role
            or account.pro_id is None
            or account.status != MembershipStatus.ACTIVE
        ):
            return
        team = await scope.get_team(account.pro_id)
        if team is not None:
            scope.put(self.release(team, account.role, now))

    async def reconcile(self, pro_id: AccountId) -> ReconciliationResult:
        """Set pro_id's counters to live account counts.

        Creates the team record for an active PRO that has none. Running it
        again without membership changes writes nothing.
        """
        with logfire.span("seat_ledger.reconcile", pro_id=str(pro_id)):

            async def work(scope: TransactionScope) -> ReconciliationResult:
                now = self.clock.now()
                team = await scope.get_team(pro_id)
                live = await self.seed_team(pro_id, now)

                if team is None:
                    pro = await scope.get_account(pro_id)
                    created = pro is not None and pro.pro_status == ProStatus.ACTIVE
                    if created:
                        scope.put(live)
                    return ReconciliationResult(
                        pro_id=pro_id,
                        staff_before=None,
                        staff_after=live.staff_count,
                        athlete_before=None,
                        athlete_after=live.athlete_count,
                        created=created,
                    )

                result = ReconciliationResult(
                    pro_id=pro_id,
                    staff_before=team.staff_count,
                    staff_after=live.staff_count,
                    athlete_before=team.athlete_count,
                    athlete_after=live.athlete_count,
                )
                if result.changed:
                    scope.put(
                        team.model_copy(
                            update={
                                "staff_count": live.staff_count,
                                "athlete_count": live.athlete_count,
                                "updated_at": now,
                            }
                        )
                    )
                return result

            result = await self.transaction_runner.run(work, name="reconcile_seats")
            if result.changed:
                logfire.warn(
                    "Seat counters reconciled",
                    pro_id=str(pro_id),
                    staff_before=result.staff_before,
                    staff_after=result.staff_after,
                    athlete_before=result.athlete_before,
                    athlete_after=result.athlete_after,
                    created=result.created,
                )
            return result

    async def reconcile_all(self) -> list[ReconciliationResult]:
        """Reconcile the team of every active PRO."""
        with logfire.span("seat_ledger.reconcile_all"):
            pros = await self.account_repository.find_active_pros()
            results = [await self.reconcile(pro.id) for pro in pros]
            logfire.info(
                "Seat reconciliation finished",
                teams=len(results),
                changed=sum(1 for r in results if r.changed),
            )
            return results
