"""Mock providers for testing."""

from .clock import FrozenClock, MockClockProvider
from .identity import MockIdentityProviderComponent
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "FrozenClock",
    "MockClockProvider",
    "MockIdentityProviderComponent",
    "MockPersistenceProvider",
    "build_test_container",
]
