"""Clean up orphaned account use case."""

import logfire
from pydantic import BaseModel

from roster.application.usecase.base import BaseUseCase, CamelModel
from roster.domain.service import TeamService
from roster.domain.value import AccountId


class CleanupOrphanedAccountRequest(BaseModel):
    """Cleanup orphaned account request."""

    caller_id: str
    email: str


class CleanupOrphanedAccountResponse(CamelModel):
    """Identity that was deleted."""

    deleted_account_id: str
    email: str


class CleanupOrphanedAccountUseCase(BaseUseCase):
    """Use case for deleting an identity left behind by a failed sign-up.

    Frees the email so the person can be invited and sign up again.
    """

    def __init__(self, team_service: TeamService) -> None:
        self.team_service = team_service

    async def execute(
        self, request: CleanupOrphanedAccountRequest
    ) -> CleanupOrphanedAccountResponse:
        """Delete the orphaned identity.

        Raises:
            ForbiddenError: If the caller is not a PRO
            InvalidStateError: If an account document uses the email
            NotFoundError: If no identity uses the email
        """
        with logfire.span("cleanup_orphaned_account", caller_id=request.caller_id):
            deleted = await self.team_service.cleanup_orphaned_account(
                AccountId(request.caller_id), request.email
            )
            return CleanupOrphanedAccountResponse(
                deleted_account_id=deleted, email=request.email
            )
