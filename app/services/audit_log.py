"""Append-only audit log service. Never update or delete - immutable audit trail."""
from __future__ import annotations

import enum
from datetime import date, datetime
from typing import Any

from fastapi import Request
from sqlalchemy.orm import Session

from app.models.audit_log import AuditLog
from app.models.user import User

CATEGORY_VALUE_CHANGE = "value_change"
CATEGORY_FAILED_ATTEMPT = "failed_attempt"

# Column limits (match model)
_CATEGORY_LEN = 32
_TITLE_LEN = 255
_USERNAME_LEN = 255
_IP_LEN = 64
_USER_AGENT_LEN = 500
_MESSAGE_LEN = 100_000


def _sanitize_meta_value(v: Any) -> Any:
    """Convert to JSON-serializable value so meta never raises on INSERT."""
    if v is None:
        return None
    if isinstance(v, (str, int, float, bool)):
        return v
    if isinstance(v, (datetime, date)):
        return v.isoformat()
    if isinstance(v, enum.Enum):
        return getattr(v, "value", str(v))
    if isinstance(v, dict):
        return {str(k): _sanitize_meta_value(x) for k, x in v.items()}
    if isinstance(v, (list, tuple)):
        return [_sanitize_meta_value(x) for x in v]
    return str(v)


def create_log(
    db: Session,
    category: str,
    title: str,
    message: str,
    *,
    actor: User | None = None,
    actor_username: str | None = None,
    request: Request | None = None,
    meta: dict[str, Any] | None = None,
) -> AuditLog:
    """Append one audit log record to the session. Commit remains with the caller,
    so the entry lands in the same transaction as the change it describes."""
    cat = (category or "")[:_CATEGORY_LEN].strip() or CATEGORY_VALUE_CHANGE
    tit = (title or "")[:_TITLE_LEN].strip() or "-"
    msg = (message or "")[:_MESSAGE_LEN].strip() or "-"
    username = actor.username if actor is not None else actor_username
    ip = ua = None
    if request is not None:
        ip = request.client.host if request.client else None
        ua = (request.headers.get("user-agent") or "").strip() or None

    entry = AuditLog(
        category=cat,
        title=tit,
        message=msg,
        actor_user_id=actor.id if actor is not None else None,
        actor_username=username[:_USERNAME_LEN] if username else None,
        ip_address=ip[:_IP_LEN] if ip else None,
        user_agent=ua[:_USER_AGENT_LEN] if ua else None,
        meta={str(k): _sanitize_meta_value(v) for k, v in meta.items()} if meta else None,
    )
    db.add(entry)
    return entry


def list_logs(db: Session, limit: int = 100) -> list[AuditLog]:
    return (
        db.query(AuditLog)
        .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .limit(limit)
        .all()
    )
