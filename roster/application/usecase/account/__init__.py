"""Account use cases."""

from roster.application.usecase.account.activate_pro import (
    ActivateProRequest,
    ActivateProUseCase,
)
from roster.application.usecase.account.get_my_account import (
    GetMyAccountRequest,
    GetMyAccountUseCase,
)
from roster.application.usecase.account.refresh_claims import (
    RefreshClaimsRequest,
    RefreshClaimsUseCase,
)
from roster.application.usecase.account.register_account import (
    RegisterAccountRequest,
    RegisterAccountUseCase,
)
from roster.application.usecase.account.repair_account import (
    RepairAccountRequest,
    RepairAccountUseCase,
)
from roster.application.usecase.account.view import AccountResponse, AccountView

__all__ = [
    "AccountResponse",
    "AccountView",
    "ActivateProRequest",
    "ActivateProUseCase",
    "GetMyAccountRequest",
    "GetMyAccountUseCase",
    "RefreshClaimsRequest",
    "RefreshClaimsUseCase",
    "RegisterAccountRequest",
    "RegisterAccountUseCase",
    "RepairAccountRequest",
    "RepairAccountUseCase",
]
