"""Infrastructure layer errors."""

from roster.domain.error import UpstreamFailureError


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError, UpstreamFailureError):
    """External provider error.

    Surfaces to the domain as an upstream failure.
    """

    pass
