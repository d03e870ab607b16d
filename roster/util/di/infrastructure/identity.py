"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from roster.adapter.identity import RealIdentityClient
from roster.config import IdentitySettings
from roster.domain.service import IdentityProvider
from roster.util.di.base import ProviderBase


class IdentityProviderComponent(ProviderBase):
    """Identity provider component base."""

    __mock_component__ = "identity"


class ProdIdentityProviderComponent(IdentityProviderComponent):
    """Production identity provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_provider(
        self, identity_settings: IdentitySettings
    ) -> IdentityProvider:
        """Provide identity provider client."""
        return RealIdentityClient(
            admin_api_url=identity_settings.admin_api_url,
            admin_api_key=identity_settings.admin_api_key,
            jwt_key=identity_settings.jwt_key,
            jwt_algorithm=identity_settings.jwt_algorithm,
            jwt_audience=identity_settings.jwt_audience,
            jwt_issuer=identity_settings.jwt_issuer,
            timeout=identity_settings.timeout_seconds,
        )
