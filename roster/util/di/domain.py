"""Domain layer DI providers."""

from dishka import Scope, provide

from roster.config import ActivationSettings, IdentitySettings, InvitationSettings
from roster.domain.repository import (
    AccountRepository,
    AuditLogRepository,
    EphemeralInviteRepository,
    PersistentInviteRepository,
    TeamRepository,
    TransactionRunner,
)
from roster.domain.service import (
    AccountService,
    ConsistencyGuardian,
    IdentityProvider,
    InviteLifecycleService,
    SeatLedger,
    SeatPolicy,
    TeamService,
    TokenCodec,
)
from roster.util.clock import Clock
from roster.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_token_codec(self) -> TokenCodec:
        """Provide invite secret codec."""
        return TokenCodec()

    @provide(scope=Scope.APP)
    def get_seat_policy(self, invitation_settings: InvitationSettings) -> SeatPolicy:
        """Provide seat limits per role."""
        return SeatPolicy(invitation_settings=invitation_settings)

    @provide
    def get_seat_ledger(
        self,
        account_repository: AccountRepository,
        team_repository: TeamRepository,
        transaction_runner: TransactionRunner,
        seat_policy: SeatPolicy,
        clock: Clock,
    ) -> SeatLedger:
        """Provide seat ledger."""
        return SeatLedger(
            account_repository=account_repository,
            team_repository=team_repository,
            transaction_runner=transaction_runner,
            seat_policy=seat_policy,
            clock=clock,
        )

    @provide
    def get_consistency_guardian(
        self,
        identity_provider: IdentityProvider,
        transaction_runner: TransactionRunner,
        identity_settings: IdentitySettings,
        clock: Clock,
    ) -> ConsistencyGuardian:
        """Provide consistency guardian."""
        return ConsistencyGuardian(
            identity_provider=identity_provider,
            transaction_runner=transaction_runner,
            identity_settings=identity_settings,
            clock=clock,
        )

    @provide
    def get_invite_lifecycle_service(
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
    ) -> InviteLifecycleService:
        """Provide invite lifecycle domain service."""
        return InviteLifecycleService(
            token_codec=token_codec,
            seat_policy=seat_policy,
            seat_ledger=seat_ledger,
            guardian=guardian,
            account_repository=account_repository,
            ephemeral_invite_repository=ephemeral_invite_repository,
            persistent_invite_repository=persistent_invite_repository,
            transaction_runner=transaction_runner,
            invitation_settings=invitation_settings,
            clock=clock,
        )

    @provide
    def get_account_service(
        self,
        account_repository: AccountRepository,
        seat_ledger: SeatLedger,
        guardian: ConsistencyGuardian,
        transaction_runner: TransactionRunner,
        activation_settings: ActivationSettings,
        clock: Clock,
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(
            account_repository=account_repository,
            seat_ledger=seat_ledger,
            guardian=guardian,
            transaction_runner=transaction_runner,
            activation_settings=activation_settings,
            clock=clock,
        )

    @provide
    def get_team_service(
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
    ) -> TeamService:
        """Provide team domain service."""
        return TeamService(
            account_repository=account_repository,
            team_repository=team_repository,
            audit_log_repository=audit_log_repository,
            seat_ledger=seat_ledger,
            seat_policy=seat_policy,
            guardian=guardian,
            identity_provider=identity_provider,
            transaction_runner=transaction_runner,
            clock=clock,
        )
