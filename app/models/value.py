"""Configurable values (vehicle types, weapons, 10-codes, departments, ...) and their typed extensions."""
import enum
import uuid

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Text, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class ValueType(str, enum.Enum):
    LICENSE = "LICENSE"
    GENDER = "GENDER"
    ETHNICITY = "ETHNICITY"
    VEHICLE = "VEHICLE"
    WEAPON = "WEAPON"
    BLOOD_GROUP = "BLOOD_GROUP"
    BUSINESS_ROLE = "BUSINESS_ROLE"
    CODES_10 = "CODES_10"
    PENAL_CODE = "PENAL_CODE"
    DEPARTMENT = "DEPARTMENT"
    OFFICER_RANK = "OFFICER_RANK"
    DIVISION = "DIVISION"
    DRIVERSLICENSE_CATEGORY = "DRIVERSLICENSE_CATEGORY"
    IMPOUND_LOT = "IMPOUND_LOT"


class Value(Base):
    __tablename__ = "config_values"

    id = Column(String(36), primary_key=True, default=_new_id)
    # ValueType member name; kept as plain string so unknown types simply match nothing
    type = Column(String(64), nullable=False, index=True)
    value = Column(String(255), nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    # Display order inside a type; ties fall back to insertion order
    position = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class VehicleValue(Base):
    __tablename__ = "vehicle_values"

    id = Column(String(36), primary_key=True, default=_new_id)
    value_id = Column(String(36), ForeignKey("config_values.id"), unique=True, nullable=False)
    hash = Column(String(255), nullable=True)

    value = relationship("Value")


class WeaponValue(Base):
    __tablename__ = "weapon_values"

    id = Column(String(36), primary_key=True, default=_new_id)
    value_id = Column(String(36), ForeignKey("config_values.id"), unique=True, nullable=False)
    hash = Column(String(255), nullable=True)

    value = relationship("Value")


class EmployeeValue(Base):
    """BUSINESS_ROLE extension: which employee role the value grants."""
    __tablename__ = "employee_values"

    id = Column(String(36), primary_key=True, default=_new_id)
    value_id = Column(String(36), ForeignKey("config_values.id"), unique=True, nullable=False)
    as_ = Column("as", String(64), nullable=False)

    value = relationship("Value")


class StatusValue(Base):
    """CODES_10 extension."""
    __tablename__ = "status_values"

    id = Column(String(36), primary_key=True, default=_new_id)
    value_id = Column(String(36), ForeignKey("config_values.id"), unique=True, nullable=False)
    what_pages = Column(JSON, nullable=False, default=lambda: [])  # e.g. ["DISPATCH", "LEO"]
    should_do = Column(String(64), nullable=False)  # e.g. SET_OFF_DUTY, SET_STATUS
    position = Column(Integer, nullable=True)
    color = Column(String(32), nullable=True)

    value = relationship("Value")


class DriversLicenseCategoryValue(Base):
    __tablename__ = "drivers_license_category_values"

    id = Column(String(36), primary_key=True, default=_new_id)
    value_id = Column(String(36), ForeignKey("config_values.id"), unique=True, nullable=False)
    type = Column(String(64), nullable=False)  # AUTOMOTIVE, AVIATION, WATER

    value = relationship("Value")


class DepartmentValue(Base):
    __tablename__ = "department_values"

    id = Column(String(36), primary_key=True, default=_new_id)
    value_id = Column(String(36), ForeignKey("config_values.id"), unique=True, nullable=False)
    callsign = Column(String(64), nullable=True)
    type = Column(String(64), nullable=True)  # LEO, EMS_FD

    value = relationship("Value")
    divisions = relationship("DivisionValue", back_populates="department")


class DivisionValue(Base):
    __tablename__ = "division_values"

    id = Column(String(36), primary_key=True, default=_new_id)
    value_id = Column(String(36), ForeignKey("config_values.id"), unique=True, nullable=False)
    callsign = Column(String(64), nullable=True)
    department_id = Column(String(36), ForeignKey("department_values.id"), nullable=True)

    value = relationship("Value")
    department = relationship("DepartmentValue", back_populates="divisions")


class PenalCode(Base):
    """Standalone record; not an extension of Value."""
    __tablename__ = "penal_codes"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
