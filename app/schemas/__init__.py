from app.schemas.auth import Token, UserLogin, UserResponse
from app.schemas.audit_log import AuditLogEntry
from app.schemas.value import (
    ValuePayload,
    PenalCodePayload,
    ValueResponse,
    HashedValueResponse,
    EmployeeValueResponse,
    StatusValueResponse,
    DriversLicenseCategoryResponse,
    DepartmentValueResponse,
    DivisionValueResponse,
    PenalCodeResponse,
)
