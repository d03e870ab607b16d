"""Consistency guardian domain service."""

import asyncio
from dataclasses import dataclass
from typing import Any

import logfire

from roster.config import IdentitySettings
from roster.domain.error import ConflictError, NotFoundError, UpstreamFailureError
from roster.domain.model import Account
from roster.domain.repository import TransactionRunner, TransactionScope
from roster.domain.value import AccountClaims, AccountId, ProStatus, Role
from roster.util.clock import Clock

from .base import Service
from .identity_provider import IdentityProvider


@dataclass(frozen=True)
class GuardianOutcome:
    """Result of a guardian pass over one account."""

    account: Account
    repaired: bool = False
    claims_synced: bool = True


class ConsistencyGuardian(Service):
    """Keeps PRO identity fields and the identity provider's claims in line.

    Invariants restored:
    - A PRO account's pro_id is its own id
    - An account with an active PRO subscription has role PRO
    - The provider's claims equal {role, proId, proStatus} of the account

    Every pass is idempotent: an account that is already consistent and whose
    claims are already mirrored causes no writes and no provider calls.
    """

    def __init__(
        self,
        identity_provider: IdentityProvider,
        transaction_runner: TransactionRunner,
        identity_settings: IdentitySettings,
        clock: Clock,
    ) -> None:
        """Initialize guardian.

        Args:
            identity_provider: Provider holding the claim mirror
            transaction_runner: Runner for account writes
            identity_settings: Claim mirror retry settings
            clock: Time source
        """
        self.identity_provider = identity_provider
        self.transaction_runner = transaction_runner
        self.identity_settings = identity_settings
        self.clock = clock

    def requires_repair(self, before: Account | None, after: Account | None) -> bool:
        """Whether a change to an account calls for a repair pass.

        True when the account became PRO (by role or by subscription) or when
        a PRO account's identity fields have drifted.
        """
        if after is None or not after.is_pro_like:
            return False
        if before is None or not before.is_pro_like:
            return True
        return self._repairs(after) != {}

    async def ensure_consistent(self, account_id: AccountId) -> GuardianOutcome:
        """Repair a PRO account's identity fields, then mirror its claims.

        Raises:
            NotFoundError: If the account does not exist
        """
        with logfire.span("guardian.ensure_consistent", account_id=str(account_id)):

            async def work(scope: TransactionScope) -> tuple[Account, bool]:
                account = await scope.get_account(account_id)
                if account is None:
                    raise NotFoundError("Account", str(account_id))
                if not account.is_pro_like:
                    return account, False
                updates = self._repairs(account)
                if not updates:
                    return account, False
                now = self.clock.now()
                repaired = account.model_copy(
                    update={
                        **updates,
                        "consistency_repaired_at": now,
                        "updated_at": now,
                    }
                )
                scope.put(repaired)
                return repaired, True

            account, repaired = await self.transaction_runner.run(
                work, name="ensure_consistent"
            )
            if repaired:
                logfire.warn(
                    "PRO account repaired",
                    account_id=str(account_id),
                    pro_id=str(account.pro_id),
                    role=account.role.value if account.role else None,
                )

            outcome = await self.sync_claims(account)
            return GuardianOutcome(
                account=outcome.account,
                repaired=repaired,
                claims_synced=outcome.claims_synced,
            )

    async def sync_claims(
        self, account: Account, force: bool = False
    ) -> GuardianOutcome:
        """Mirror the account's claims into the identity provider.

        Provider failures are retried with linear backoff and then logged;
        they are never raised, since the account document is authoritative and
        the next pass over the account retries the mirror.

        Args:
            account: Account whose claims to mirror
            force: Call the provider even when the recorded mirror matches

        Returns:
            Outcome with claims_synced=False if the provider could not be updated
        """
        claims = account.desired_claims()
        if not force and account.mirrored_claims == claims:
            return GuardianOutcome(account=account)

        with logfire.span(
            "guardian.sync_claims",
            account_id=str(account.id),
            role=claims.role.value if claims.role else None,
            pro_id=str(claims.pro_id) if claims.pro_id else None,
        ):
            if not await self._push_claims(account.id, claims):
                return GuardianOutcome(account=account, claims_synced=False)

            try:
                recorded = await self._record_claims(account.id, claims)
            except (ConflictError, UpstreamFailureError) as e:
                logfire.warn(
                    "Claims mirrored but not recorded",
                    account_id=str(account.id),
                    error=str(e),
                )
                return GuardianOutcome(account=account)

            logfire.info("Claims mirrored", account_id=str(account.id))
            return GuardianOutcome(account=recorded or account)

    async def on_account_changed(
        self, before: Account | None, after: Account
    ) -> GuardianOutcome:
        """Hook run after every committed account mutation.

        Repairs PRO identity drift when needed, otherwise just brings the claim
        mirror up to date.
        """
        if self.requires_repair(before, after):
            return await self.ensure_consistent(after.id)
        return await self.sync_claims(after)

    def _repairs(self, account: Account) -> dict[str, Any]:
        updates: dict[str, Any] = {}
        if account.pro_id != account.id:
            updates["pro_id"] = account.id
        if account.pro_status == ProStatus.ACTIVE and account.role != Role.PRO:
            updates["role"] = Role.PRO
        return updates

    async def _push_claims(self, account_id: AccountId, claims: AccountClaims) -> bool:
        attempts = max(1, self.identity_settings.claim_mirror_attempts)
        for attempt in range(1, attempts + 1):
            try:
                await self.identity_provider.set_claims(account_id, claims)
                return True
            except UpstreamFailureError as e:
                if attempt == attempts:
                    logfire.error(
                        "Claim mirroring failed",
                        account_id=str(account_id),
                        attempts=attempt,
                        error=str(e),
                    )
                    return False
                logfire.warn(
                    "Claim mirroring failed, retrying",
                    account_id=str(account_id),
                    attempt=attempt,
                    error=str(e),
                )
                await asyncio.sleep(
                    self.identity_settings.claim_mirror_backoff_seconds * attempt
                )
        return False

    async def _record_claims(
        self, account_id: AccountId, claims: AccountClaims
    ) -> Account | None:
        async def work(scope: TransactionScope) -> Account | None:
            current = await scope.get_account(account_id)
            # A newer mutation changed the claims; its own pass records them
            if current is None or current.desired_claims() != claims:
                return None
            now = self.clock.now()
            recorded = current.model_copy(
                update={"mirrored_claims": claims, "claims_synced_at": now}
            )
            scope.put(recorded)
            return recorded

        return await self.transaction_runner.run(work, name="record_claims")
