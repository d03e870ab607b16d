"""Base models for all domain entities."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )


class VersionedModel(DomainModel):
    """Domain model stored as a versioned document.

    version is 0 for a document that has never been stored. Transactions
    compare the version they read with the stored one before writing, and
    every write stores version + 1.
    """

    version: int = Field(default=0, ge=0)
