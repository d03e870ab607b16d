"""Bearer token authentication for routes."""

from roster.domain.error import UnauthenticatedError
from roster.domain.service import IdentityProvider
from roster.domain.value import AccountId


async def authenticate(
    identity_provider: IdentityProvider, authorization: str | None
) -> AccountId:
    """Resolve the caller from an Authorization header.

    Args:
        identity_provider: Identity provider from DI
        authorization: Raw Authorization header value

    Returns:
        Account ID of the caller

    Raises:
        UnauthenticatedError: If the header is missing, malformed or rejected
    """
    if not authorization:
        raise UnauthenticatedError("Not authenticated")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthenticatedError("Authorization header must be a bearer token")
    return await identity_provider.verify(token.strip())
