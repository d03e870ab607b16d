"""Application layer DI providers."""

from dishka import Scope, provide

from roster.application.usecase.account import (
    ActivateProUseCase,
    GetMyAccountUseCase,
    RefreshClaimsUseCase,
    RegisterAccountUseCase,
    RepairAccountUseCase,
)
from roster.application.usecase.invite import (
    CreateInviteUseCase,
    RedeemInviteUseCase,
    ValidateInviteUseCase,
)
from roster.application.usecase.invite_link import (
    GetInviteLinksUseCase,
    RedeemInviteLinkUseCase,
    RegenerateInviteLinkUseCase,
    SetInviteLinkStatusUseCase,
    ValidateInviteLinkUseCase,
)
from roster.application.usecase.maintenance import (
    ReconcileSeatsUseCase,
    SweepExpiredInvitesUseCase,
)
from roster.application.usecase.payment import ApplyPaymentEventUseCase
from roster.application.usecase.team import (
    CleanupOrphanedAccountUseCase,
    GetTeamUseCase,
    ReconcileTeamUseCase,
    RemoveMemberUseCase,
)
from roster.config import Settings
from roster.domain.service import (
    AccountService,
    InviteLifecycleService,
    SeatLedger,
    TeamService,
)
from roster.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Single-use invite use cases
    @provide
    def get_create_invite_use_case(
        self, invite_lifecycle_service: InviteLifecycleService, settings: Settings
    ) -> CreateInviteUseCase:
        """Provide create invite use case."""
        return CreateInviteUseCase(
            invite_lifecycle_service=invite_lifecycle_service, settings=settings
        )

    @provide
    def get_validate_invite_use_case(
        self, invite_lifecycle_service: InviteLifecycleService
    ) -> ValidateInviteUseCase:
        """Provide validate invite use case."""
        return ValidateInviteUseCase(invite_lifecycle_service)

    @provide
    def get_redeem_invite_use_case(
        self, invite_lifecycle_service: InviteLifecycleService
    ) -> RedeemInviteUseCase:
        """Provide redeem invite use case."""
        return RedeemInviteUseCase(invite_lifecycle_service)

    # Invite link use cases
    @provide
    def get_invite_links_use_case(
        self, invite_lifecycle_service: InviteLifecycleService, settings: Settings
    ) -> GetInviteLinksUseCase:
        """Provide get invite links use case."""
        return GetInviteLinksUseCase(
            invite_lifecycle_service=invite_lifecycle_service, settings=settings
        )

    @provide
    def get_regenerate_invite_link_use_case(
        self, invite_lifecycle_service: InviteLifecycleService, settings: Settings
    ) -> RegenerateInviteLinkUseCase:
        """Provide regenerate invite link use case."""
        return RegenerateInviteLinkUseCase(
            invite_lifecycle_service=invite_lifecycle_service, settings=settings
        )

    @provide
    def get_set_invite_link_status_use_case(
        self, invite_lifecycle_service: InviteLifecycleService, settings: Settings
    ) -> SetInviteLinkStatusUseCase:
        """Provide set invite link status use case."""
        return SetInviteLinkStatusUseCase(
            invite_lifecycle_service=invite_lifecycle_service, settings=settings
        )

    @provide
    def get_validate_invite_link_use_case(
        self, invite_lifecycle_service: InviteLifecycleService
    ) -> ValidateInviteLinkUseCase:
        """Provide validate invite link use case."""
        return ValidateInviteLinkUseCase(invite_lifecycle_service)

    @provide
    def get_redeem_invite_link_use_case(
        self, invite_lifecycle_service: InviteLifecycleService
    ) -> RedeemInviteLinkUseCase:
        """Provide redeem invite link use case."""
        return RedeemInviteLinkUseCase(invite_lifecycle_service)

    # Account use cases
    @provide
    def get_register_account_use_case(
        self, account_service: AccountService
    ) -> RegisterAccountUseCase:
        """Provide register account use case."""
        return RegisterAccountUseCase(account_service)

    @provide
    def get_my_account_use_case(
        self, account_service: AccountService
    ) -> GetMyAccountUseCase:
        """Provide get current account use case."""
        return GetMyAccountUseCase(account_service)

    @provide
    def get_activate_pro_use_case(
        self, account_service: AccountService
    ) -> ActivateProUseCase:
        """Provide activate PRO use case."""
        return ActivateProUseCase(account_service)

    @provide
    def get_refresh_claims_use_case(
        self, account_service: AccountService
    ) -> RefreshClaimsUseCase:
        """Provide refresh claims use case."""
        return RefreshClaimsUseCase(account_service)

    @provide
    def get_repair_account_use_case(
        self, account_service: AccountService
    ) -> RepairAccountUseCase:
        """Provide repair account use case."""
        return RepairAccountUseCase(account_service)

    # Team use cases
    @provide
    def get_team_use_case(self, team_service: TeamService) -> GetTeamUseCase:
        """Provide get team use case."""
        return GetTeamUseCase(team_service)

    @provide
    def get_remove_member_use_case(
        self, team_service: TeamService
    ) -> RemoveMemberUseCase:
        """Provide remove member use case."""
        return RemoveMemberUseCase(team_service)

    @provide
    def get_reconcile_team_use_case(
        self, team_service: TeamService
    ) -> ReconcileTeamUseCase:
        """Provide reconcile team use case."""
        return ReconcileTeamUseCase(team_service)

    @provide
    def get_cleanup_orphaned_account_use_case(
        self, team_service: TeamService
    ) -> CleanupOrphanedAccountUseCase:
        """Provide cleanup orphaned account use case."""
        return CleanupOrphanedAccountUseCase(team_service)

    # Payment use cases
    @provide
    def get_apply_payment_event_use_case(
        self, account_service: AccountService
    ) -> ApplyPaymentEventUseCase:
        """Provide apply payment event use case."""
        return ApplyPaymentEventUseCase(account_service)

    # Maintenance use cases
    @provide
    def get_sweep_expired_invites_use_case(
        self, invite_lifecycle_service: InviteLifecycleService
    ) -> SweepExpiredInvitesUseCase:
        """Provide sweep expired invites use case."""
        return SweepExpiredInvitesUseCase(invite_lifecycle_service)

    @provide
    def get_reconcile_seats_use_case(
        self, seat_ledger: SeatLedger
    ) -> ReconcileSeatsUseCase:
        """Provide reconcile seats use case."""
        return ReconcileSeatsUseCase(seat_ledger)
