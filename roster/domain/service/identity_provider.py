"""Identity provider contract."""

from abc import ABC, abstractmethod

from roster.domain.value import AccountClaims, AccountId


class IdentityProvider(ABC):
    """External identity provider.

    Implementations live in roster.adapter.identity. Every call is bounded by
    a timeout and fails with UpstreamFailureError rather than blocking.
    """

    @abstractmethod
    async def verify(self, bearer_token: str) -> AccountId:
        """Verify a bearer token.

        Returns:
            The account ID the token was issued to

        Raises:
            UnauthenticatedError: If the token is missing, malformed or invalid
        """
        pass

    @abstractmethod
    async def set_claims(self, account_id: AccountId, claims: AccountClaims) -> None:
        """Replace the custom claims mirrored on an identity.

        Raises:
            UpstreamFailureError: If the provider rejected the call or timed out
        """
        pass

    @abstractmethod
    async def lookup_by_email(self, email: str) -> AccountId:
        """Find the identity registered with an email.

        Raises:
            NotFoundError: If no identity uses the email
        """
        pass

    @abstractmethod
    async def delete_account(self, account_id: AccountId) -> None:
        """Delete an identity from the provider."""
        pass
