"""Core DI providers."""

from dishka import Scope, provide

from roster.config import (
    ActivationSettings,
    IdentitySettings,
    InvitationSettings,
    PaymentSettings,
    Settings,
)
from roster.util.clock import Clock, SystemClock
from roster.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_identity_settings(self, settings: Settings) -> IdentitySettings:
        """Provide identity provider settings."""
        return settings.identity

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        """Provide invitation and seat settings."""
        return settings.invitations

    @provide(scope=Scope.APP)
    def provide_activation_settings(self, settings: Settings) -> ActivationSettings:
        """Provide PRO activation settings."""
        return settings.activation

    @provide(scope=Scope.APP)
    def provide_payment_settings(self, settings: Settings) -> PaymentSettings:
        """Provide payment event settings."""
        return settings.payments


class ClockProvider(ProviderBase):
    """Clock component base."""

    __mock_component__ = "clock"


class ProdClockProvider(ClockProvider):
    """Wall clock provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_clock(self) -> Clock:
        """Provide the system clock."""
        return SystemClock()
