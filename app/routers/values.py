"""Admin management of configurable values, one URL segment per value type."""
from typing import Any
from fastapi import APIRouter, Body, Depends, Query, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import require_admin, valid_path
from app.models.user import User
from app.services import values as value_service

router = APIRouter(prefix="/admin/values/{path}", tags=["values"])


@router.get("", dependencies=[Depends(valid_path)])
def get_values_by_path(
    path: str,
    paths: str | None = Query(None, description="Comma-separated extra paths, e.g. weapon,business-role"),
    db: Session = Depends(get_db),
):
    return value_service.list_values(db, path, paths)


@router.post("", dependencies=[Depends(valid_path)])
def create_value_by_path(
    path: str,
    request: Request,
    body: Any = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return value_service.create_value(db, path, body, actor=current_user, request=request)


@router.put("/positions")
def update_positions(
    request: Request,
    body: Any = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Position of each id becomes its index in `ids`. Path is not used."""
    value_service.update_positions(db, body, actor=current_user, request=request)


@router.delete("/{id}", dependencies=[Depends(valid_path)])
def delete_value_by_path_and_id(
    path: str,
    id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> bool:
    return value_service.delete_value(db, path, id, actor=current_user, request=request)


@router.patch("/{id}", dependencies=[Depends(valid_path)])
def patch_value_by_path_and_id(
    path: str,
    id: str,
    request: Request,
    body: Any = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return value_service.update_value(db, path, id, body, actor=current_user, request=request)
