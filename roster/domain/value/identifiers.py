"""Strongly typed identifiers for roster domain entities.

Account identifiers are issued by the identity provider and are opaque
strings; everything the roster creates itself is keyed by UUID.
"""

from typing import NewType
from uuid import UUID

AccountId = NewType("AccountId", str)
InviteId = NewType("InviteId", UUID)
AuditEntryId = NewType("AuditEntryId", UUID)
