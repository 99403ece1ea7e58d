"""
All SQLAlchemy models. Schema is the source of truth for new DBs.
Base.metadata.create_all() creates every table; no migration scripts needed for fresh installs.
"""
from app.models.user import User, UserRank
from app.models.value import (
    ValueType,
    Value,
    VehicleValue,
    WeaponValue,
    EmployeeValue,
    StatusValue,
    DriversLicenseCategoryValue,
    DepartmentValue,
    DivisionValue,
    PenalCode,
)
from app.models.audit_log import AuditLog

__all__ = [
    "User",
    "UserRank",
    "ValueType",
    "Value",
    "VehicleValue",
    "WeaponValue",
    "EmployeeValue",
    "StatusValue",
    "DriversLicenseCategoryValue",
    "DepartmentValue",
    "DivisionValue",
    "PenalCode",
    "AuditLog",
]
