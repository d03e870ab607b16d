"""Account domain service."""

import hmac
from datetime import datetime
from typing import Any

import logfire

from roster.config import ActivationSettings
from roster.domain.error import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from roster.domain.model import Account, Team
from roster.domain.repository import (
    AccountRepository,
    TransactionRunner,
    TransactionScope,
)
from roster.domain.value import (
    AccountId,
    AccountProfile,
    ActivationMethod,
    MembershipStatus,
    PaymentEvent,
    ProStatus,
    Role,
)
from roster.util.clock import Clock

from . import reasons
from .base import Service
from .consistency_guardian import ConsistencyGuardian, GuardianOutcome
from .seat_ledger import SeatLedger


class AccountService(Service):
    """Registration, PRO activation and self-healing account reads.

    Every mutation commits first and then hands the account to the
    ConsistencyGuardian.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        seat_ledger: SeatLedger,
        guardian: ConsistencyGuardian,
        transaction_runner: TransactionRunner,
        activation_settings: ActivationSettings,
        clock: Clock,
    ) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
            seat_ledger: Seat counters (released when a member turns PRO)
            guardian: Post-commit account hook
            transaction_runner: Runner for account writes
            activation_settings: Free access code
            clock: Time source
        """
        self.account_repository = account_repository
        self.seat_ledger = seat_ledger
        self.guardian = guardian
        self.transaction_runner = transaction_runner
        self.activation_settings = activation_settings
        self.clock = clock

    async def register(
        self, account_id: AccountId, profile: AccountProfile, role: Role
    ) -> GuardianOutcome:
        """Create the account document for a newly signed-up identity.

        PRO accounts start inactive and own themselves. STAFF and ATHLETE
        accounts start without a team; they join one by redeeming an invite.

        Raises:
            InvalidStateError: If the account already exists
        """
        with logfire.span(
            "account_service.register", account_id=str(account_id), role=role.value
        ):

            async def work(scope: TransactionScope) -> Account:
                if await scope.get_account(account_id) is not None:
                    raise InvalidStateError(reasons.ACCOUNT_EXISTS)
                now = self.clock.now()
                account = Account(
                    id=account_id,
                    role=role,
                    pro_id=account_id if role == Role.PRO else None,
                    pro_status=ProStatus.INACTIVE,
                    created_at=now,
                    updated_at=now,
                    **Account.profile_updates(profile),
                )
                scope.put(account)
                return account

            account = await self.transaction_runner.run(work, name="register")
            logfire.info(
                "Account registered", account_id=str(account_id), role=role.value
            )
            return await self.guardian.on_account_changed(None, account)

    async def get_account(self, account_id: AccountId) -> GuardianOutcome:
        """Read an account, repairing drift and re-mirroring claims if needed.

        Raises:
            NotFoundError: If the account does not exist
        """
        with logfire.span("account_service.get_account", account_id=str(account_id)):
            account = await self.account_repository.find_by_id(account_id)
            if account is None:
                raise NotFoundError("Account", str(account_id))
            return await self.guardian.on_account_changed(account, account)

    async def activate_pro(
        self,
        account_id: AccountId,
        method: ActivationMethod,
        free_access_code: str | None = None,
        payment_reference: str | None = None,
    ) -> GuardianOutcome:
        """Activate the PRO subscription of an account.

        free_access requires the configured code and can be used once per
        account. payment requires the processor's reference for the payment.

        Raises:
            ValidationError: If payment is used without a reference
            ForbiddenError: If the free access code does not match
            InvalidStateError: If free access is unavailable or used, or the
                account is already an active PRO
            NotFoundError: If the account does not exist
        """
        with logfire.span(
            "account_service.activate_pro",
            account_id=str(account_id),
            method=method.value,
        ):
            if method == ActivationMethod.FREE_ACCESS:
                self._check_free_access_code(free_access_code)
            elif not payment_reference:
                raise ValidationError(reasons.PAYMENT_REFERENCE_REQUIRED)

            async def work(scope: TransactionScope) -> tuple[Account, Account]:
                account = await scope.get_account(account_id)
                if account is None:
                    raise NotFoundError("Account", str(account_id))
                if account.pro_status == ProStatus.ACTIVE:
                    raise InvalidStateError(reasons.PRO_ALREADY_ACTIVE)
                if (
                    method == ActivationMethod.FREE_ACCESS
                    and account.free_access_activated_at is not None
                ):
                    raise InvalidStateError(reasons.FREE_ACCESS_ALREADY_USED)

                now = self.clock.now()
                updates: dict[str, Any] = {"activation_method": method}
                if method == ActivationMethod.FREE_ACCESS:
                    updates["free_access_activated_at"] = now
                activated = await self._promote(scope, account, now, updates)
                return account, activated

            before, after = await self.transaction_runner.run(
                work, name="activate_pro"
            )
            logfire.info(
                "PRO account activated",
                account_id=str(account_id),
                method=method.value,
            )
            return await self.guardian.on_account_changed(before, after)

    async def apply_payment_event(self, event: PaymentEvent) -> GuardianOutcome | None:
        """React to a completed payment.

        Only PRO upgrades change the account; repeated delivery of the same
        upgrade leaves an active PRO unchanged.

        Returns:
            Guardian outcome for upgraded accounts, None for ignored events
        """
        with logfire.span(
            "account_service.apply_payment_event",
            account_id=str(event.account_id),
            payment_kind=event.payment_kind.value,
        ):
            if not event.grants_pro:
                logfire.info(
                    "Payment event ignored",
                    account_id=str(event.account_id),
                    payment_kind=event.payment_kind.value,
                )
                return None

            async def work(scope: TransactionScope) -> tuple[Account, Account]:
                account = await scope.get_account(event.account_id)
                if account is None:
                    raise NotFoundError("Account", str(event.account_id))
                now = self.clock.now()
                if account.is_active_pro and account.pro_id == account.id:
                    await self._ensure_team(scope, account.id, now)
                    return account, account
                promoted = await self._promote(
                    scope,
                    account,
                    now,
                    {"activation_method": ActivationMethod.PAYMENT},
                )
                return account, promoted

            before, after = await self.transaction_runner.run(
                work, name="apply_payment_event"
            )
            logfire.info("PRO upgrade applied", account_id=str(event.account_id))
            return await self.guardian.on_account_changed(before, after)

    async def refresh_claims(self, account_id: AccountId) -> GuardianOutcome:
        """Push the account's claims to the identity provider unconditionally.

        Raises:
            NotFoundError: If the account does not exist
        """
        with logfire.span(
            "account_service.refresh_claims", account_id=str(account_id)
        ):
            account = await self.account_repository.find_by_id(account_id)
            if account is None:
                raise NotFoundError("Account", str(account_id))
            return await self.guardian.sync_claims(account, force=True)

    async def repair_pro_account(self, account_id: AccountId) -> GuardianOutcome:
        """Run the guardian over a PRO's own account on request.

        Raises:
            NotFoundError: If the account does not exist
            ForbiddenError: If the account is not a PRO
        """
        with logfire.span(
            "account_service.repair_pro_account", account_id=str(account_id)
        ):
            account = await self.account_repository.find_by_id(account_id)
            if account is None:
                raise NotFoundError("Account", str(account_id))
            if not account.is_pro_like:
                raise ForbiddenError(reasons.ONLY_PRO)
            return await self.guardian.ensure_consistent(account_id)

    def _check_free_access_code(self, code: str | None) -> None:
        expected = self.activation_settings.free_access_code
        if not expected:
            raise InvalidStateError(reasons.FREE_ACCESS_UNAVAILABLE)
        if not code or not hmac.compare_digest(code.encode(), expected.encode()):
            logfire.warn("Free access code rejected")
            raise ForbiddenError(reasons.FREE_ACCESS_INVALID_CODE)

    async def _promote(
        self,
        scope: TransactionScope,
        account: Account,
        now: datetime,
        updates: dict[str, Any],
    ) -> Account:
        """Stage account as an active PRO owning a team."""
        await self.seat_ledger.vacate(scope, account, now)
        await self._ensure_team(scope, account.id, now)
        promoted = account.model_copy(
            update={
                **updates,
                "role": Role.PRO,
                "pro_id": account.id,
                "pro_status": ProStatus.ACTIVE,
                "status": MembershipStatus.ACTIVE,
                "activated_at": now,
                "updated_at": now,
            }
        )
        scope.put(promoted)
        return promoted

    @staticmethod
    async def _ensure_team(
        scope: TransactionScope, pro_id: AccountId, now: datetime
    ) -> None:
        if await scope.get_team(pro_id) is None:
            scope.put(Team(pro_id=pro_id, created_at=now, updated_at=now))
