"""Value payloads and responses. JSON keys are camelCase (isDefault, valueId, shouldDo, ...)."""
from datetime import datetime
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel


class ValuePayload(BaseModel):
    """Body accepted by create/update for every type except PENAL_CODE.
    Only `value` is checked here; the fields each type requires are checked by its handler."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    value: str = Field(..., min_length=1, max_length=255)

    as_: str | None = Field(None, alias="as")  # BUSINESS_ROLE
    type: str | None = None  # DRIVERSLICENSE_CATEGORY, DEPARTMENT
    should_do: str | None = None  # CODES_10
    what_pages: list[str] | None = None
    position: int | None = None
    color: str | None = None
    hash: str | None = None  # VEHICLE, WEAPON
    callsign: str | None = None  # DEPARTMENT, DIVISION
    department_id: str | None = None  # DIVISION

    @field_validator("position", mode="before")
    @classmethod
    def empty_position(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class PenalCodePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=2, max_length=255)
    description: str | None = None


def validation_detail(exc: ValidationError | RequestValidationError) -> dict[str, str]:
    """Flatten pydantic (or FastAPI request) errors to {field: message}."""
    detail: dict[str, str] = {}
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "body"
        detail.setdefault(field, err["msg"])
    return detail


class _Out(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class ValueResponse(_Out):
    id: str
    type: str
    value: str
    is_default: bool
    position: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class HashedValueResponse(_Out):
    """VEHICLE and WEAPON."""
    id: str
    value_id: str
    hash: str | None
    value: ValueResponse


class EmployeeValueResponse(_Out):
    id: str
    value_id: str
    as_: str = Field(alias="as")
    value: ValueResponse


class StatusValueResponse(_Out):
    id: str
    value_id: str
    what_pages: list[str]
    should_do: str
    position: int | None
    color: str | None
    value: ValueResponse


class DriversLicenseCategoryResponse(_Out):
    id: str
    value_id: str
    type: str
    value: ValueResponse


class DepartmentValueResponse(_Out):
    id: str
    value_id: str
    callsign: str | None
    type: str | None
    value: ValueResponse


class DivisionValueResponse(_Out):
    id: str
    value_id: str
    callsign: str | None
    department_id: str | None
    value: ValueResponse
    department: DepartmentValueResponse | None = None


class PenalCodeResponse(_Out):
    id: str
    title: str
    description: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None
