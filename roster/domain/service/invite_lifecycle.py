"""Invite lifecycle domain service.

Ephemeral invites: Pending -> Claimed, or Pending -> Expired once expires_at
passes. Expiry is evaluated when an invite is validated or redeemed.

Persistent invites: Active <-> Inactive. Redemption is only allowed while
active and increments redeemed_count; regeneration swaps the digest and
resets the count and the redemption log.

Redemption checks the seat counter, the invite and the joiner's account and
writes all of them in one transaction. Claims are mirrored afterwards.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from roster.config import InvitationSettings
from roster.domain.error import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from roster.domain.model import (
    Account,
    EphemeralInvite,
    EphemeralInviteState,
    Invite,
    PersistentInvite,
    Redemption,
)
from roster.domain.repository import (
    AccountRepository,
    EphemeralInviteRepository,
    PersistentInviteRepository,
    TransactionRunner,
    TransactionScope,
)
from roster.domain.value import (
    AccountId,
    AccountProfile,
    InviteId,
    InviteSecret,
    MembershipStatus,
    ProStatus,
    Role,
)
from roster.util.clock import Clock

from . import reasons
from .base import Service
from .consistency_guardian import ConsistencyGuardian
from .seat_ledger import SeatLedger
from .seat_policy import SeatPolicy
from .token_codec import TokenCodec

MEMBER_ROLES = (Role.STAFF, Role.ATHLETE)


def _preview(secret: str) -> str:
    return secret[:6] + "..."


@dataclass(frozen=True)
class IssuedEphemeralInvite:
    """Newly created ephemeral invite and its one-time plaintext secret."""

    invite: EphemeralInvite
    secret: InviteSecret


@dataclass(frozen=True)
class IssuedPersistentInvite:
    """Persistent invite; secret is set only when it was just minted."""

    invite: PersistentInvite
    secret: InviteSecret | None = None


@dataclass(frozen=True)
class InviteValidation:
    """Read-only verdict on a presented secret."""

    valid: bool
    reason: str | None = None
    invite: Invite | None = None
    pro: Account | None = None


@dataclass(frozen=True)
class RedemptionResult:
    """Outcome of a successful redemption."""

    role: Role
    pro_id: AccountId
    account: Account
    claims_synced: bool = True


class InviteLifecycleService(Service):
    """Creates, validates and redeems invites."""

    def __init__(
        self,
        token_codec: TokenCodec,
        seat_policy: SeatPolicy,
        seat_ledger: SeatLedger,
        guardian: ConsistencyGuardian,
        account_repository: AccountRepository,
        ephemeral_invite_repository: EphemeralInviteRepository,
        persistent_invite_repository: PersistentInviteRepository,
        transaction_runner: TransactionRunner,
        invitation_settings: InvitationSettings,
        clock: Clock,
    ) -> None:
        """Initialize invite lifecycle service.

        Args:
            token_codec: Secret minting and hashing
            seat_policy: Role limits
            seat_ledger: Seat counters
            guardian: Post-commit account hook
            account_repository: Account repository
            ephemeral_invite_repository: Ephemeral invite repository
            persistent_invite_repository: Persistent invite repository
            transaction_runner: Runner for redemption units of work
            invitation_settings: Invite TTL
            clock: Time source
        """
        self.token_codec = token_codec
        self.seat_policy = seat_policy
        self.seat_ledger = seat_ledger
        self.guardian = guardian
        self.account_repository = account_repository
        self.ephemeral_invite_repository = ephemeral_invite_repository
        self.persistent_invite_repository = persistent_invite_repository
        self.transaction_runner = transaction_runner
        self.invitation_settings = invitation_settings
        self.clock = clock

    # Ephemeral invites

    async def create_ephemeral(
        self, caller_id: AccountId, role: Role, email: str | None = None
    ) -> IssuedEphemeralInvite:
        """Create a single-use invite.

        Capacity is checked here and again at redemption; nothing is reserved
        for an invite that may expire unused.

        Args:
            caller_id: PRO issuing the invite
            role: Role the invite grants
            email: Optional address the invite is meant for

        Returns:
            The stored invite and its plaintext secret

        Raises:
            ValidationError: If role is not STAFF or ATHLETE
            ForbiddenError: If the caller is not a PRO
            InvalidStateError: If the PRO is inactive or the role is full
        """
        self._require_member_role(role)
        with logfire.span(
            "invite_lifecycle.create_ephemeral",
            caller_id=str(caller_id),
            role=role.value,
        ):
            pro = await self._require_pro(caller_id, active=True)
            decision = await self.seat_ledger.try_reserve_seat(pro.id, role)
            if not decision.granted:
                logfire.warn(
                    "Ephemeral invite refused",
                    pro_id=str(pro.id),
                    role=role.value,
                    reason=decision.reason,
                )
                raise InvalidStateError(decision.reason)

            now = self.clock.now()
            secret = self.token_codec.mint()
            invite = EphemeralInvite(
                id=InviteId(uuid4()),
                pro_id=pro.id,
                role=role,
                email=email,
                token_digest=self.token_codec.digest(secret),
                expires_at=now
                + timedelta(minutes=self.invitation_settings.ephemeral_ttl_minutes),
                created_by=caller_id,
                created_at=now,
            )
            saved = await self.ephemeral_invite_repository.save(invite)
            logfire.info(
                "Ephemeral invite created",
                invite_id=str(saved.id),
                pro_id=str(pro.id),
                role=role.value,
                expires_at=saved.expires_at.isoformat(),
            )
            return IssuedEphemeralInvite(invite=saved, secret=secret)

    async def validate_ephemeral(self, secret: str) -> InviteValidation:
        """Check whether a single-use secret could be redeemed right now."""
        with logfire.span("invite_lifecycle.validate_ephemeral"):
            invite = await self.ephemeral_invite_repository.find_by_digest(
                self.token_codec.digest(secret)
            )
            if invite is None:
                return InviteValidation(False, reasons.INVITE_NOT_FOUND)

            state = invite.state(self.clock.now())
            if state == EphemeralInviteState.CLAIMED:
                return InviteValidation(False, reasons.INVITE_ALREADY_CLAIMED, invite)
            if state == EphemeralInviteState.EXPIRED:
                return InviteValidation(False, reasons.INVITE_EXPIRED, invite)

            pro = await self.account_repository.find_by_id(invite.pro_id)
            count = await self.seat_ledger.current_count(invite.pro_id, invite.role)
            decision = self.seat_ledger.check_admission(pro, count, invite.role)
            if not decision.granted:
                return InviteValidation(False, decision.reason, invite, pro)

            return InviteValidation(True, None, invite, pro)

    async def redeem_ephemeral(
        self, secret: str, account_id: AccountId, profile: AccountProfile
    ) -> RedemptionResult:
        """Join a team with a single-use invite.

        The claim, the account upsert and the seat increment commit together
        or not at all. Of several concurrent redemptions of the same secret,
        exactly one succeeds.

        Raises:
            NotFoundError: If no invite matches the secret
            InvalidStateError: If the invite is claimed or expired, the PRO is
                inactive, the role is full or the joiner cannot join
            ConflictError: If contention outlasted every retry
        """
        digest = self.token_codec.digest(secret)

        async def work(scope: TransactionScope) -> tuple[Account | None, Account]:
            now = self.clock.now()
            invite = await scope.get_ephemeral_invite(digest)
            if invite is None:
                raise NotFoundError(
                    "Invite", _preview(secret), reasons.INVITE_NOT_FOUND
                )
            state = invite.state(now)
            if state == EphemeralInviteState.CLAIMED:
                raise InvalidStateError(reasons.INVITE_ALREADY_CLAIMED)
            if state == EphemeralInviteState.EXPIRED:
                raise InvalidStateError(reasons.INVITE_EXPIRED)

            pro = await scope.get_account(invite.pro_id)
            team = await self.seat_ledger.team_in(scope, invite.pro_id, now)
            decision = self.seat_ledger.check_admission(
                pro, team.count_for(invite.role), invite.role
            )
            if not decision.granted:
                raise InvalidStateError(decision.reason)

            existing = await scope.get_account(account_id)
            self._check_joiner(existing, invite.pro_id)
            joined = self._join(
                existing,
                account_id,
                invite.role,
                invite.pro_id,
                profile,
                invite.id,
                now,
            )

            scope.put(
                invite.model_copy(
                    update={"claimed": True, "claimed_by": account_id, "claimed_at": now}
                )
            )
            await self.seat_ledger.vacate(scope, existing, now)
            scope.put(self.seat_ledger.admit(team, invite.role, now))
            scope.put(joined)
            return existing, joined

        with logfire.span(
            "invite_lifecycle.redeem_ephemeral", account_id=str(account_id)
        ):
            before, after = await self.transaction_runner.run(
                work, name="redeem_ephemeral"
            )
            logfire.info(
                "Ephemeral invite redeemed",
                account_id=str(account_id),
                pro_id=str(after.pro_id),
                role=after.role.value if after.role else None,
            )
            return await self._finish_redemption(before, after)

    async def sweep_expired(self, now: datetime | None = None) -> int:
        """Delete ephemeral invites past their expiry.

        Only reclaims storage; expired invites are already unusable.
        """
        with logfire.span("invite_lifecycle.sweep_expired"):
            deleted = await self.ephemeral_invite_repository.delete_expired(
                now or self.clock.now()
            )
            logfire.info("Expired invites swept", deleted=deleted)
            return deleted

    # Persistent invites

    async def get_or_create_persistent(
        self, pro_id: AccountId, role: Role
    ) -> IssuedPersistentInvite:
        """Return the invite link for (pro_id, role), creating it on first use.

        Idempotent: repeated calls return the same invite. The plaintext
        secret is only available from the call that created it.
        """
        self._require_member_role(role)
        with logfire.span(
            "invite_lifecycle.get_or_create_persistent",
            pro_id=str(pro_id),
            role=role.value,
        ):
            existing = await self.persistent_invite_repository.find_by_pro_and_role(
                pro_id, role
            )
            if existing is not None:
                return IssuedPersistentInvite(invite=existing)

            secret = self.token_codec.mint()
            digest = self.token_codec.digest(secret)

            async def work(scope: TransactionScope) -> IssuedPersistentInvite:
                current = await scope.get_persistent_invite_for(pro_id, role)
                if current is not None:
                    return IssuedPersistentInvite(invite=current)
                now = self.clock.now()
                invite = PersistentInvite(
                    id=InviteId(uuid4()),
                    pro_id=pro_id,
                    role=role,
                    token_digest=digest,
                    max_redemptions=self.seat_policy.limit(role, pro_id),
                    created_at=now,
                    updated_at=now,
                )
                scope.put(invite)
                return IssuedPersistentInvite(invite=invite, secret=secret)

            issued = await self.transaction_runner.run(
                work, name="create_persistent_invite"
            )
            if issued.secret is not None:
                logfire.info(
                    "Persistent invite created",
                    invite_id=str(issued.invite.id),
                    pro_id=str(pro_id),
                    role=role.value,
                )
            return issued

    async def get_or_create_persistent_pair(
        self, caller_id: AccountId
    ) -> dict[Role, IssuedPersistentInvite]:
        """Both invite links of an active PRO's team."""
        pro = await self._require_pro(caller_id, active=True)
        return {
            role: await self.get_or_create_persistent(pro.id, role)
            for role in MEMBER_ROLES
        }

    async def validate_persistent(self, secret: str) -> InviteValidation:
        """Check whether an invite link could be redeemed right now."""
        with logfire.span("invite_lifecycle.validate_persistent"):
            invite = await self.persistent_invite_repository.find_by_digest(
                self.token_codec.digest(secret)
            )
            if invite is None:
                return InviteValidation(False, reasons.INVALID_INVITE_LINK)
            if not invite.active:
                return InviteValidation(False, reasons.INVITE_LINK_DEACTIVATED, invite)

            pro = await self.account_repository.find_by_id(invite.pro_id)
            count = await self.seat_ledger.current_count(invite.pro_id, invite.role)
            decision = self.seat_ledger.check_admission(
                pro, count, invite.role, inactive_reason=reasons.PRO_NO_LONGER_ACTIVE
            )
            if not decision.granted:
                return InviteValidation(False, decision.reason, invite, pro)
            if invite.is_exhausted:
                return InviteValidation(
                    False, reasons.invite_limit_reached(invite.role), invite, pro
                )

            return InviteValidation(True, None, invite, pro)

    async def redeem_persistent(
        self, secret: str, account_id: AccountId, profile: AccountProfile
    ) -> RedemptionResult:
        """Join a team through an invite link.

        Checks, in order: link active, PRO active, a seat free for the role,
        redemptions left on the link, joiner not already on the team. The
        redemption log entry, redeemed_count, the account and the seat counter
        commit together.

        Raises:
            NotFoundError: If no link matches the secret
            InvalidStateError: If any of the checks above fails
            ConflictError: If contention outlasted every retry
        """
        digest = self.token_codec.digest(secret)

        async def work(scope: TransactionScope) -> tuple[Account | None, Account]:
            now = self.clock.now()
            invite = await scope.get_persistent_invite(digest)
            if invite is None:
                raise NotFoundError(
                    "Invite link",
                    _preview(secret),
                    reasons.INVALID_INVITE_LINK,
                )
            if not invite.active:
                raise InvalidStateError(reasons.INVITE_LINK_DEACTIVATED)

            pro = await scope.get_account(invite.pro_id)
            team = await self.seat_ledger.team_in(scope, invite.pro_id, now)
            decision = self.seat_ledger.check_admission(
                pro,
                team.count_for(invite.role),
                invite.role,
                inactive_reason=reasons.PRO_NO_LONGER_ACTIVE,
            )
            if not decision.granted:
                raise InvalidStateError(decision.reason)
            if invite.is_exhausted:
                raise InvalidStateError(reasons.invite_limit_reached(invite.role))

            existing = await scope.get_account(account_id)
            self._check_joiner(existing, invite.pro_id)
            joined = self._join(
                existing,
                account_id,
                invite.role,
                invite.pro_id,
                profile,
                invite.id,
                now,
            )

            redemption = Redemption(
                account_id=account_id,
                email=joined.email,
                display_name=joined.display_name,
                redeemed_at=now,
            )
            scope.put(
                invite.model_copy(
                    update={
                        "redeemed_count": invite.redeemed_count + 1,
                        "redemptions": invite.redemptions + (redemption,),
                        "updated_at": now,
                    }
                )
            )
            await self.seat_ledger.vacate(scope, existing, now)
            scope.put(self.seat_ledger.admit(team, invite.role, now))
            scope.put(joined)
            return existing, joined

        with logfire.span(
            "invite_lifecycle.redeem_persistent", account_id=str(account_id)
        ):
            before, after = await self.transaction_runner.run(
                work, name="redeem_persistent"
            )
            logfire.info(
                "Invite link redeemed",
                account_id=str(account_id),
                pro_id=str(after.pro_id),
                role=after.role.value if after.role else None,
            )
            return await self._finish_redemption(before, after)

    async def regenerate(
        self, caller_id: AccountId, role: Role
    ) -> IssuedPersistentInvite:
        """Replace a link's secret and reset its redemptions.

        The previous secret stops working the moment this commits.

        Raises:
            ForbiddenError: If the caller is not a PRO
            InvalidStateError: If the PRO is not active
            NotFoundError: If the link was never created
        """
        self._require_member_role(role)
        with logfire.span(
            "invite_lifecycle.regenerate", caller_id=str(caller_id), role=role.value
        ):
            pro = await self._require_pro(caller_id, active=True)
            secret = self.token_codec.mint()
            digest = self.token_codec.digest(secret)

            async def work(scope: TransactionScope) -> PersistentInvite:
                invite = await scope.get_persistent_invite_for(pro.id, role)
                if invite is None:
                    raise NotFoundError("Invite link", f"{pro.id}/{role.value}")
                regenerated = invite.model_copy(
                    update={
                        "token_digest": digest,
                        "redeemed_count": 0,
                        "redemptions": (),
                        "updated_at": self.clock.now(),
                    }
                )
                scope.put(regenerated)
                return regenerated

            invite = await self.transaction_runner.run(work, name="regenerate_invite")
            logfire.info(
                "Invite link regenerated",
                invite_id=str(invite.id),
                pro_id=str(pro.id),
                role=role.value,
            )
            return IssuedPersistentInvite(invite=invite, secret=secret)

    async def set_active(
        self, caller_id: AccountId, role: Role, active: bool
    ) -> PersistentInvite:
        """Activate or deactivate a link. Counts and the log are untouched.

        Raises:
            ForbiddenError: If the caller is not a PRO
            NotFoundError: If the link was never created
        """
        self._require_member_role(role)
        with logfire.span(
            "invite_lifecycle.set_active",
            caller_id=str(caller_id),
            role=role.value,
            active=active,
        ):
            pro = await self._require_pro(caller_id, active=False)

            async def work(scope: TransactionScope) -> PersistentInvite:
                invite = await scope.get_persistent_invite_for(pro.id, role)
                if invite is None:
                    raise NotFoundError("Invite link", f"{pro.id}/{role.value}")
                if invite.active == active:
                    return invite
                toggled = invite.model_copy(
                    update={"active": active, "updated_at": self.clock.now()}
                )
                scope.put(toggled)
                return toggled

            invite = await self.transaction_runner.run(work, name="toggle_invite")
            logfire.info(
                "Invite link status set",
                invite_id=str(invite.id),
                pro_id=str(pro.id),
                role=role.value,
                active=active,
            )
            return invite

    # Helpers

    async def _require_pro(self, account_id: AccountId, active: bool) -> Account:
        account = await self.account_repository.find_by_id(account_id)
        if account is None:
            raise NotFoundError("Account", str(account_id))
        if account.role != Role.PRO:
            raise ForbiddenError(reasons.ONLY_PRO)
        if active and account.pro_status != ProStatus.ACTIVE:
            raise InvalidStateError(reasons.PRO_NOT_ACTIVE)
        return account

    @staticmethod
    def _require_member_role(role: Role) -> None:
        if role not in MEMBER_ROLES:
            raise ValidationError(reasons.invalid_role(role))

    @staticmethod
    def _check_joiner(existing: Account | None, pro_id: AccountId) -> None:
        if existing is None:
            return
        if existing.is_pro_like:
            raise InvalidStateError(reasons.PRO_CANNOT_JOIN)
        if existing.is_member_of(pro_id):
            raise InvalidStateError(reasons.ALREADY_JOINED)

    @staticmethod
    def _join(
        existing: Account | None,
        account_id: AccountId,
        role: Role,
        pro_id: AccountId,
        profile: AccountProfile,
        invite_id: InviteId,
        now: datetime,
    ) -> Account:
        """Joiner's account after redemption; created_at survives an upsert."""
        fields = {
            **Account.profile_updates(profile),
            "role": role,
            "pro_id": pro_id,
            "status": MembershipStatus.ACTIVE,
            "joined_via_invite": invite_id,
            "joined_at": now,
            "removed_at": None,
            "removed_by": None,
            "updated_at": now,
        }
        if existing is None:
            return Account(id=account_id, created_at=now, **fields)
        return existing.model_copy(update=fields)

    async def _finish_redemption(
        self, before: Account | None, after: Account
    ) -> RedemptionResult:
        outcome = await self.guardian.on_account_changed(before, after)
        return RedemptionResult(
            role=after.role,
            pro_id=after.pro_id,
            account=outcome.account,
            claims_synced=outcome.claims_synced,
        )
