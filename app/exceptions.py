"""Errors raised by the value services; rendered as JSON by the handler in app.main."""
from typing import Any


class ValueAdminError(Exception):
    """Base error. `detail` is sent to the client as-is."""

    status_code = 400

    def __init__(self, detail: Any):
        super().__init__(detail)
        self.detail = detail


class ValueValidationError(ValueAdminError):
    """Payload failed schema checks; detail maps field name to message."""


class MissingFieldError(ValueAdminError):
    """A field required by the value type is absent; detail is a fixed code."""


class MalformedInputError(ValueAdminError):
    pass


class NotFoundError(ValueAdminError):
    status_code = 404
