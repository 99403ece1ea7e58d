"""Read-only view of the admin audit trail."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import require_admin
from app.schemas.audit_log import AuditLogEntry
from app.services.audit_log import list_logs

router = APIRouter(prefix="/admin/audit-logs", tags=["audit-logs"])


@router.get("", response_model=list[AuditLogEntry])
def list_audit_logs(
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user=Depends(require_admin),
):
    return [AuditLogEntry.model_validate(e) for e in list_logs(db, limit)]
