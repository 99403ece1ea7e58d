import pytest

from app.models.value import ValueType
from app.services.values import (
    DivisionHandler,
    EmployeeValueHandler,
    HashedValueHandler,
    PenalCodeHandler,
    ValueHandler,
    handler_for,
    is_known_type,
    type_from_path,
)


@pytest.mark.parametrize(
    "path, expected",
    [
        ("vehicle", "VEHICLE"),
        ("business-role", "BUSINESS_ROLE"),
        ("codes-10", "CODES_10"),
        ("penal-code", "PENAL_CODE"),
        ("driverslicense-category", "DRIVERSLICENSE_CATEGORY"),
        ("Blood-Group", "BLOOD_GROUP"),
    ],
)
def test_type_from_path(path, expected):
    assert type_from_path(path) == expected
    assert is_known_type(type_from_path(path))


def test_type_from_path_only_replaces_first_hyphen():
    assert type_from_path("a-b-c") == "A_B-C"


def test_type_from_path_does_not_validate():
    assert type_from_path("spaceships") == "SPACESHIPS"
    assert not is_known_type("SPACESHIPS")


def test_handler_for_registered_types():
    assert isinstance(handler_for(ValueType.VEHICLE), HashedValueHandler)
    assert isinstance(handler_for("WEAPON"), HashedValueHandler)
    assert isinstance(handler_for("BUSINESS_ROLE"), EmployeeValueHandler)
    assert isinstance(handler_for("DIVISION"), DivisionHandler)
    assert isinstance(handler_for("PENAL_CODE"), PenalCodeHandler)


def test_handler_for_falls_back_to_generic():
    handler = handler_for("GENDER")
    assert type(handler) is ValueHandler
    assert handler_for("SPACESHIPS") is handler
