"""Audit log entries as returned to admins."""
from datetime import datetime
from typing import Any
from pydantic import BaseModel


class AuditLogEntry(BaseModel):
    id: int
    category: str
    title: str
    message: str
    meta: dict[str, Any] | None
    actor_user_id: int | None
    actor_username: str | None
    ip_address: str | None
    created_at: datetime

    class Config:
        from_attributes = True
