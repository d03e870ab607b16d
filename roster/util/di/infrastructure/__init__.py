"""Infrastructure providers."""

# Import bases
from .identity import IdentityProviderComponent
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .identity import ProdIdentityProviderComponent  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "IdentityProviderComponent",
    "PersistenceProvider",
    "ProdIdentityProviderComponent",
    "ProdPersistenceProvider",
]
