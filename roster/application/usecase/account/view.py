"""Account representation shared by account use cases."""

from datetime import datetime

from roster.application.usecase.base import CamelModel
from roster.domain.model import Account
from roster.domain.service import GuardianOutcome
from roster.domain.value import ActivationMethod, MembershipStatus, ProStatus, Role


class AccountView(CamelModel):
    """Account as the API returns it."""

    id: str
    email: str | None
    display_name: str | None
    first_name: str | None
    last_name: str | None
    phone_number: str | None
    role: Role | None
    pro_id: str | None
    pro_status: ProStatus
    status: MembershipStatus
    joined_at: datetime | None
    activated_at: datetime | None
    activation_method: ActivationMethod | None
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountView":
        return cls(
            id=account.id,
            email=account.email,
            display_name=account.display_name,
            first_name=account.first_name,
            last_name=account.last_name,
            phone_number=account.phone_number,
            role=account.role,
            pro_id=account.pro_id,
            pro_status=account.pro_status,
            status=account.status,
            joined_at=account.joined_at,
            activated_at=account.activated_at,
            activation_method=account.activation_method,
            created_at=account.created_at,
        )


class AccountResponse(CamelModel):
    """Account plus what the consistency pass did to it."""

    account: AccountView
    repaired: bool
    claims_synced: bool

    @classmethod
    def from_outcome(cls, outcome: GuardianOutcome) -> "AccountResponse":
        return cls(
            account=AccountView.from_account(outcome.account),
            repaired=outcome.repaired,
            claims_synced=outcome.claims_synced,
        )
