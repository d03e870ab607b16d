"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold roster rules that span several documents: invites,
    team counters and accounts.
    """

    pass
