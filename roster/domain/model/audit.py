"""Audit log entry."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from roster.domain.model.common import DomainModel, utc_now
from roster.domain.value import AccountId, AuditAction, AuditEntryId


class AuditEntry(DomainModel):
    """Record of a privileged roster action."""

    id: AuditEntryId
    action: AuditAction
    requester_id: AccountId
    subject_id: str
    pro_id: Optional[AccountId] = None
    details: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utc_now)
