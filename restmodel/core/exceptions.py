from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorDetail:
    message: str
    code: str

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ErrorDetail(message={self.message!r}, code={self.code!r})"


class RestModelError(Exception):
    """Base exception for all restmodel errors."""

    default_detail: str = "A restmodel error occurred."
    default_code: str = "error"

    def __init__(self, detail: Optional[str] = None, code: Optional[str] = None):
        detail = detail if detail is not None else self.default_detail
        self.detail = ErrorDetail(detail, code or self.default_code)
        super().__init__(str(self.detail))

    @property
    def code(self) -> str:
        return self.detail.code


class ConfigurationError(RestModelError):
    """Error raised for unknown connections or an invalid registry setup."""

    default_detail = "Invalid restmodel configuration."
    default_code = "configuration_error"


class UnsupportedOperationError(RestModelError):
    """Error raised when the API behind a model does not support a builder call."""

    default_detail = "Operation not supported for this API."
    default_code = "unsupported_operation"


class InvalidInputError(RestModelError):
    """Error raised for malformed input, such as an unparsable dataset."""

    default_detail = "Invalid input."
    default_code = "invalid_input"


class NotImplementedOperationError(UnsupportedOperationError, NotImplementedError):
    """Error raised for builder calls the library does not implement yet."""

    default_detail = "Operation not implemented."
    default_code = "not_implemented"
