"""Identity provider client.

Bearer tokens are verified locally with PyJWT. Claims, email lookups and
account deletion go through the provider's admin REST API:

- PUT    {admin_api_url}/accounts/{id}/claims
- GET    {admin_api_url}/accounts?email=...
- DELETE {admin_api_url}/accounts/{id}
"""

import secrets

import httpx
import jwt
import logfire

from roster.adapter.error import ProviderError
from roster.domain.error import NotFoundError, UnauthenticatedError
from roster.domain.service.identity_provider import IdentityProvider
from roster.domain.value import AccountClaims, AccountId


class RealIdentityClient(IdentityProvider):
    """Identity provider backed by JWT verification and an admin API."""

    def __init__(
        self,
        admin_api_url: str,
        admin_api_key: str,
        jwt_key: str,
        jwt_algorithm: str,
        jwt_audience: str | None = None,
        jwt_issuer: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize identity client.

        Args:
            admin_api_url: Base URL of the admin API
            admin_api_key: Bearer key for the admin API
            jwt_key: Shared secret or PEM public key for token verification
            jwt_algorithm: Expected signing algorithm
            jwt_audience: Expected aud claim, if any
            jwt_issuer: Expected iss claim, if any
            timeout: Timeout for every admin API call, in seconds
        """
        self.admin_api_url = admin_api_url.rstrip("/")
        self.admin_api_key = admin_api_key
        self.jwt_key = jwt_key
        self.jwt_algorithm = jwt_algorithm
        self.jwt_audience = jwt_audience
        self.jwt_issuer = jwt_issuer
        self.timeout = timeout

    async def verify(self, bearer_token: str) -> AccountId:
        """Verify a bearer token and return its subject.

        Raises:
            UnauthenticatedError: If the token is invalid, expired or has no subject
        """
        if not bearer_token:
            raise UnauthenticatedError("Missing authorization token")
        try:
            payload = jwt.decode(
                bearer_token,
                self.jwt_key,
                algorithms=[self.jwt_algorithm],
                audience=self.jwt_audience,
                issuer=self.jwt_issuer,
                options={"verify_aud": self.jwt_audience is not None},
            )
        except jwt.ExpiredSignatureError:
            raise UnauthenticatedError("Token has expired")
        except jwt.InvalidTokenError as e:
            logfire.warn("Bearer token rejected", error=str(e))
            raise UnauthenticatedError()

        subject = payload.get("sub") or payload.get("uid")
        if not subject:
            raise UnauthenticatedError("Token has no subject")
        return AccountId(str(subject))

    async def set_claims(self, account_id: AccountId, claims: AccountClaims) -> None:
        """Replace the custom claims of an identity.

        Raises:
            ProviderError: If the call failed or timed out
        """
        response = await self._request(
            "PUT",
            f"/accounts/{account_id}/claims",
            json={"claims": claims.as_payload()},
        )
        if response.status_code == 404:
            raise ProviderError(f"Identity {account_id} does not exist")
        self._raise_for_status(response, "set claims")

    async def lookup_by_email(self, email: str) -> AccountId:
        """Find the identity registered with an email.

        Raises:
            NotFoundError: If no identity uses the email
            ProviderError: If the call failed or timed out
        """
        response = await self._request("GET", "/accounts", params={"email": email})
        if response.status_code == 404:
            raise NotFoundError("Identity", email, "No identity uses this email")
        self._raise_for_status(response, "lookup by email")
        return AccountId(str(response.json()["id"]))

    async def delete_account(self, account_id: AccountId) -> None:
        """Delete an identity.

        Raises:
            NotFoundError: If the identity does not exist
            ProviderError: If the call failed or timed out
        """
        response = await self._request("DELETE", f"/accounts/{account_id}")
        if response.status_code == 404:
            raise NotFoundError("Identity", str(account_id))
        self._raise_for_status(response, "delete account")
        logfire.info("Identity deleted", account_id=str(account_id))

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.request(
                    method,
                    f"{self.admin_api_url}{path}",
                    headers={"Authorization": f"Bearer {self.admin_api_key}"},
                    **kwargs,
                )
        except httpx.TimeoutException as e:
            logfire.error("Identity provider timed out", method=method, path=path)
            raise ProviderError(f"Identity provider timed out: {e}")
        except httpx.HTTPError as e:
            logfire.error(
                "Identity provider HTTP error", method=method, path=path, error=str(e)
            )
            raise ProviderError(f"HTTP error calling identity provider: {e}")

    @staticmethod
    def _raise_for_status(response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        logfire.error(
            "Identity provider request failed",
            action=action,
            status_code=response.status_code,
            error=response.text,
        )
        raise ProviderError(
            f"Identity provider {action} failed: {response.status_code}"
        )


class MockIdentityClient(IdentityProvider):
    """In-memory identity provider for testing.

    Tokens are issued with issue_token(); claims writes are recorded and can
    be made to fail a number of times with fail_next_set_claims().
    """

    def __init__(self) -> None:
        """Initialize mock client without real provider configuration."""
        self.tokens: dict[str, AccountId] = {}
        self.claims: dict[AccountId, AccountClaims] = {}
        self.set_claims_calls: list[tuple[AccountId, AccountClaims]] = []
        self.identities: dict[str, AccountId] = {}
        self.deleted: list[AccountId] = []
        self._failures_left = 0

    def issue_token(self, account_id: str) -> str:
        """Issue a bearer token that verify() accepts for account_id."""
        token = secrets.token_urlsafe(16)
        self.tokens[token] = AccountId(account_id)
        return token

    def add_identity(self, email: str, account_id: str) -> None:
        self.identities[email.lower()] = AccountId(account_id)

    def fail_next_set_claims(self, times: int = 1) -> None:
        self._failures_left = times

    async def verify(self, bearer_token: str) -> AccountId:
        account_id = self.tokens.get(bearer_token)
        if account_id is None:
            raise UnauthenticatedError()
        return account_id

    async def set_claims(self, account_id: AccountId, claims: AccountClaims) -> None:
        self.set_claims_calls.append((account_id, claims))
        if self._failures_left > 0:
            self._failures_left -= 1
            raise ProviderError("Mock identity provider unavailable")
        self.claims[account_id] = claims

    async def lookup_by_email(self, email: str) -> AccountId:
        account_id = self.identities.get(email.lower())
        if account_id is None:
            raise NotFoundError("Identity", email, "No identity uses this email")
        return account_id

    async def delete_account(self, account_id: AccountId) -> None:
        emails = [e for e, uid in self.identities.items() if uid == account_id]
        if not emails:
            raise NotFoundError("Identity", str(account_id))
        for email in emails:
            del self.identities[email]
        self.deleted.append(account_id)
