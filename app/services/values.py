"""Value administration: path-to-type resolution, per-type handlers and the CRUD operations.

Each ValueType with a side table gets a handler registered in HANDLERS; everything
else (including types nobody registered) goes through the generic handler, which
works directly on `config_values` rows filtered by type.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any

from fastapi import Request
from pydantic import BaseModel, ValidationError
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from app.exceptions import MalformedInputError, MissingFieldError, NotFoundError, ValueValidationError
from app.models.user import User
from app.models.value import (
    DepartmentValue,
    DivisionValue,
    DriversLicenseCategoryValue,
    EmployeeValue,
    PenalCode,
    StatusValue,
    Value,
    ValueType,
    VehicleValue,
    WeaponValue,
)
from app.schemas.value import (
    DepartmentValueResponse,
    DivisionValueResponse,
    DriversLicenseCategoryResponse,
    EmployeeValueResponse,
    HashedValueResponse,
    PenalCodePayload,
    PenalCodeResponse,
    StatusValueResponse,
    ValuePayload,
    ValueResponse,
    validation_detail,
)
from app.services.audit_log import CATEGORY_VALUE_CHANGE, create_log

log = logging.getLogger("uvicorn.error")

VALID_TYPES = frozenset(t.value for t in ValueType)


def type_from_path(path: str) -> str:
    """"business-role" -> "BUSINESS_ROLE". Only the first hyphen is replaced and the
    result is not checked against ValueType; see is_known_type."""
    return path.replace("-", "_", 1).upper()


def is_known_type(type_: str) -> bool:
    return type_ in VALID_TYPES


def _validate(schema: type[BaseModel], body: Any) -> Any:
    try:
        return schema.model_validate(body)
    except ValidationError as e:
        raise ValueValidationError(validation_detail(e))


@contextmanager
def _transaction(db: Session):
    try:
        yield
        db.commit()
    except Exception:
        db.rollback()
        raise


class ValueHandler:
    """Generic values: plain `config_values` rows of one type, ordered by position."""

    create_schema: type[BaseModel] = ValuePayload
    response: type[BaseModel] = ValueResponse
    not_found = "valueNotFound"

    def list(self, db: Session, type_: str) -> list:
        return (
            db.query(Value)
            .filter(Value.type == type_)
            .order_by(Value.position.asc().nulls_last(), Value.created_at.asc())
            .all()
        )

    def check(self, payload) -> None:
        """Raise MissingFieldError before anything is written."""

    def create(self, db: Session, type_: str, payload):
        value = Value(type=type_, value=payload.value, is_default=False)
        db.add(value)
        return value

    def update(self, db: Session, id: str, payload):
        value = db.get(Value, id)
        if value is None:
            raise NotFoundError(self.not_found)
        value.value = payload.value
        return value

    def delete(self, db: Session, id: str) -> None:
        value = db.get(Value, id)
        if value is None:
            raise NotFoundError(self.not_found)
        db.delete(value)

    def dump(self, record) -> dict:
        return self.response.model_validate(record).model_dump(mode="json", by_alias=True)

    def dump_created(self, record) -> dict:
        return self.dump(record)

    def dump_updated(self, record) -> dict:
        return self.dump(record)


class PenalCodeHandler(ValueHandler):
    """Penal codes are standalone rows. There is no dedicated update; PATCH falls
    through to the generic value update."""

    create_schema = PenalCodePayload
    response = PenalCodeResponse
    not_found = "penalCodeNotFound"

    def list(self, db: Session, type_: str) -> list:
        return db.query(PenalCode).all()

    def create(self, db: Session, type_: str, payload):
        code = PenalCode(title=payload.title, description=payload.description)
        db.add(code)
        return code

    def delete(self, db: Session, id: str) -> None:
        code = db.get(PenalCode, id)
        if code is None:
            raise NotFoundError(self.not_found)
        db.delete(code)

    def dump_updated(self, record) -> dict:
        return ValueResponse.model_validate(record).model_dump(mode="json", by_alias=True)


class ExtensionHandler(ValueHandler):
    """Types whose rows live in a side table owning exactly one base Value."""

    def __init__(self, model, response: type[BaseModel]):
        self.model = model
        self.response = response

    def load_options(self) -> list:
        return [joinedload(self.model.value)]

    def _get(self, db: Session, id: str):
        record = db.query(self.model).options(*self.load_options()).filter(self.model.id == id).first()
        if record is None:
            raise NotFoundError(self.not_found)
        return record

    def list(self, db: Session, type_: str) -> list:
        return db.query(self.model).options(*self.load_options()).all()

    def fields(self, payload) -> dict:
        """Extension columns written on create."""
        return {}

    def update_fields(self, payload) -> dict:
        """Extension columns written on update; defaults to the create set."""
        return self.fields(payload)

    def create(self, db: Session, type_: str, payload):
        value = super().create(db, type_, payload)
        record = self.model(value=value, **self.fields(payload))
        db.add(record)
        return record

    def update(self, db: Session, id: str, payload):
        record = self._get(db, id)
        record.value.value = payload.value
        for key, val in self.update_fields(payload).items():
            setattr(record, key, val)
        return record

    def delete(self, db: Session, id: str) -> None:
        record = self._get(db, id)
        value = record.value
        # Extension first; the base row is still referenced until then
        db.delete(record)
        db.flush()
        db.delete(value)


class HashedValueHandler(ExtensionHandler):
    """VEHICLE and WEAPON."""

    def __init__(self, model):
        super().__init__(model, HashedValueResponse)

    def fields(self, payload) -> dict:
        return {"hash": payload.hash or None}


class EmployeeValueHandler(ExtensionHandler):
    """BUSINESS_ROLE. The API answers with the bare Value on create and update."""

    def __init__(self):
        super().__init__(EmployeeValue, EmployeeValueResponse)

    def check(self, payload) -> None:
        if not payload.as_:
            raise MissingFieldError("asRequired")

    def fields(self, payload) -> dict:
        return {"as_": payload.as_}

    def update(self, db: Session, id: str, payload):
        # Accepts the Value id returned by create as well as the EmployeeValue id from listing
        record = (
            db.query(EmployeeValue)
            .options(joinedload(EmployeeValue.value))
            .filter(or_(EmployeeValue.id == id, EmployeeValue.value_id == id))
            .first()
        )
        if record is None:
            raise NotFoundError(self.not_found)
        record.value.value = payload.value
        return record

    def dump_created(self, record) -> dict:
        return ValueResponse.model_validate(record.value).model_dump(mode="json", by_alias=True)

    def dump_updated(self, record) -> dict:
        return self.dump_created(record)


class StatusValueHandler(ExtensionHandler):
    """CODES_10."""

    def __init__(self):
        super().__init__(StatusValue, StatusValueResponse)

    def check(self, payload) -> None:
        if not payload.should_do:
            raise MissingFieldError("codes10FieldsRequired")

    def fields(self, payload) -> dict:
        return {
            "what_pages": payload.what_pages or [],
            "should_do": payload.should_do,
            "position": payload.position,
            "color": payload.color or None,
        }

    def update_fields(self, payload) -> dict:
        data = self.fields(payload)
        # Absent keys keep their stored value
        if not payload.should_do:
            del data["should_do"]
        if payload.position is None:
            del data["position"]
        return data


class DriversLicenseCategoryHandler(ExtensionHandler):
    """Only the display string changes on update; `type` is required but not written."""

    def __init__(self):
        super().__init__(DriversLicenseCategoryValue, DriversLicenseCategoryResponse)

    def check(self, payload) -> None:
        if not payload.type:
            raise MissingFieldError("typeIsRequired")

    def fields(self, payload) -> dict:
        return {"type": payload.type}

    def update(self, db: Session, id: str, payload):
        self.check(payload)
        return super().update(db, id, payload)

    def update_fields(self, payload) -> dict:
        return {}


class DepartmentHandler(ExtensionHandler):
    def __init__(self):
        super().__init__(DepartmentValue, DepartmentValueResponse)

    def fields(self, payload) -> dict:
        return {"callsign": payload.callsign or None, "type": payload.type or None}

    def update_fields(self, payload) -> dict:
        data = {"callsign": payload.callsign or None}
        # Absent keeps the stored type; an empty string clears it
        if payload.type is not None:
            data["type"] = payload.type or None
        return data


class DivisionHandler(ExtensionHandler):
    not_found = "divisionNotFound"

    def __init__(self):
        super().__init__(DivisionValue, DivisionValueResponse)

    def load_options(self) -> list:
        return [
            joinedload(DivisionValue.value),
            joinedload(DivisionValue.department).joinedload(DepartmentValue.value),
        ]

    def check(self, payload) -> None:
        if not payload.department_id:
            raise MissingFieldError("departmentIdRequired")

    def _require_department(self, db: Session, department_id: str) -> DepartmentValue:
        department = db.get(DepartmentValue, department_id)
        if department is None:
            raise NotFoundError("departmentNotFound")
        return department

    def fields(self, payload) -> dict:
        return {"callsign": payload.callsign or None, "department_id": payload.department_id}

    def create(self, db: Session, type_: str, payload):
        self._require_department(db, payload.department_id)
        return super().create(db, type_, payload)

    def update(self, db: Session, id: str, payload):
        self.check(payload)
        record = self._get(db, id)
        department = self._require_department(db, payload.department_id)
        record.value.value = payload.value
        record.callsign = payload.callsign or None
        # Re-link to the requested department; the previous department row is left untouched
        record.department = department
        return record


HANDLERS: dict[str, ValueHandler] = {
    ValueType.VEHICLE: HashedValueHandler(VehicleValue),
    ValueType.WEAPON: HashedValueHandler(WeaponValue),
    ValueType.BUSINESS_ROLE: EmployeeValueHandler(),
    ValueType.CODES_10: StatusValueHandler(),
    ValueType.DRIVERSLICENSE_CATEGORY: DriversLicenseCategoryHandler(),
    ValueType.DEPARTMENT: DepartmentHandler(),
    ValueType.DIVISION: DivisionHandler(),
    ValueType.PENAL_CODE: PenalCodeHandler(),
}
_GENERIC = ValueHandler()


def handler_for(type_: str) -> ValueHandler:
    return HANDLERS.get(type_, _GENERIC)


def list_values(db: Session, path: str, raw_paths: str | None = None) -> list[dict]:
    """Values for `path` plus any comma-separated extra paths, deduplicated, in request order."""
    paths = [path]
    if isinstance(raw_paths, str):
        paths = list(dict.fromkeys([path, *(p for p in raw_paths.split(",") if p)]))
    out = []
    for p in paths:
        type_ = type_from_path(p)
        handler = handler_for(type_)
        out.append({"type": type_, "values": [handler.dump(r) for r in handler.list(db, type_)]})
    return out


def create_value(
    db: Session,
    path: str,
    body: Any,
    *,
    actor: User | None = None,
    request: Request | None = None,
) -> dict:
    type_ = type_from_path(path)
    handler = handler_for(type_)
    payload = _validate(handler.create_schema, body)
    handler.check(payload)
    with _transaction(db):
        record = handler.create(db, type_, payload)
        db.flush()
        create_log(
            db,
            CATEGORY_VALUE_CHANGE,
            "Value created",
            f"Created {type_} value {record.id}.",
            actor=actor,
            request=request,
            meta={"type": type_, "id": record.id},
        )
    log.info("Created %s value %s", type_, record.id)
    return handler.dump_created(record)


def update_value(
    db: Session,
    path: str,
    id: str,
    body: Any,
    *,
    actor: User | None = None,
    request: Request | None = None,
) -> dict:
    type_ = type_from_path(path)
    handler = handler_for(type_)
    # Every type, penal codes included, is checked against the generic value schema
    payload = _validate(ValuePayload, body)
    with _transaction(db):
        record = handler.update(db, id, payload)
        create_log(
            db,
            CATEGORY_VALUE_CHANGE,
            "Value updated",
            f"Updated {type_} value {id}.",
            actor=actor,
            request=request,
            meta={"type": type_, "id": id},
        )
    return handler.dump_updated(record)


def delete_value(
    db: Session,
    path: str,
    id: str,
    *,
    actor: User | None = None,
    request: Request | None = None,
) -> bool:
    type_ = type_from_path(path)
    with _transaction(db):
        handler_for(type_).delete(db, id)
        create_log(
            db,
            CATEGORY_VALUE_CHANGE,
            "Value deleted",
            f"Deleted {type_} value {id}.",
            actor=actor,
            request=request,
            meta={"type": type_, "id": id},
        )
    log.info("Deleted %s value %s", type_, id)
    return True


def update_positions(
    db: Session,
    body: Any,
    *,
    actor: User | None = None,
    request: Request | None = None,
) -> None:
    """Set each Value's position to its index in body["ids"]. All or nothing."""
    ids = body.get("ids") if isinstance(body, dict) else None
    if not isinstance(ids, list):
        raise MalformedInputError("mustBeArray")
    with _transaction(db):
        for idx, id in enumerate(ids):
            value = db.get(Value, str(id))
            if value is None:
                raise NotFoundError("valueNotFound")
            value.position = idx
        create_log(
            db,
            CATEGORY_VALUE_CHANGE,
            "Values reordered",
            f"Reordered {len(ids)} value(s).",
            actor=actor,
            request=request,
            meta={"ids": [str(i) for i in ids]},
        )
    log.info("Reordered %d value(s)", len(ids))
