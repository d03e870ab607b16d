"""Test configuration and fixtures."""

from roster.domain.model import Account
from roster.domain.repository import AccountRepository
from roster.domain.value import AccountId, MembershipStatus, ProStatus, Role


async def make_pro(
    env,
    account_id: str = "pro-1",
    active: bool = True,
    email: str | None = None,
) -> Account:
    """Store a PRO account that owns its team.

    Args:
        env: Request-scoped test container
        account_id: Identity provider uid of the PRO
        active: Whether the PRO subscription is active
        email: Optional email address

    Returns:
        The stored account
    """
    account_repo = await env.get(AccountRepository)
    return await account_repo.save(
        Account(
            id=AccountId(account_id),
            email=email or f"{account_id}@example.com",
            display_name=account_id.title(),
            role=Role.PRO,
            pro_id=AccountId(account_id),
            pro_status=ProStatus.ACTIVE if active else ProStatus.INACTIVE,
        )
    )


async def make_member(
    env,
    account_id: str,
    pro_id: str,
    role: Role = Role.ATHLETE,
    status: MembershipStatus = MembershipStatus.ACTIVE,
) -> Account:
    """Store a STAFF or ATHLETE account already on a team."""
    account_repo = await env.get(AccountRepository)
    return await account_repo.save(
        Account(
            id=AccountId(account_id),
            email=f"{account_id}@example.com",
            role=role,
            pro_id=AccountId(pro_id),
            status=status,
        )
    )
