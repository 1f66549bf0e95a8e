"""Response shapes shared by query handlers.

Handlers return plain JSON-serializable dicts. Inline errors carry a short
message plus whatever the caller needs to retry (valid values, hints).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

INVALID_PATH = "Invalid path"


class ErrorResponse(BaseModel):
    """Pydantic model for inline error responses.

    Attributes:
        error: Error message
        error_type: Exception class name when the error came from an exception
        hint: How to recover
        valid: Valid values for an enum-like argument
        available: Valid identifiers (sources, documents, primitives)
        files: Files the caller can ask for instead
    """

    model_config = ConfigDict(strict=True)

    error: str
    error_type: str | None = None
    hint: str | None = None
    valid: list[str] | None = None
    available: list[str] | None = None
    files: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def error_response(error: str, **fields: Any) -> dict[str, Any]:
    """Build an inline error dict, dropping unset fields."""
    return ErrorResponse(error=error, **fields).to_dict()


def invalid_path() -> dict[str, Any]:
    """The single, uninformative response for any traversal attempt."""
    return error_response(INVALID_PATH)


def invalid_choice(argument: str, value: str, valid: list[str]) -> dict[str, Any]:
    return error_response(f'Unknown {argument} "{value}".', valid=valid)


def exception_response(exc: Exception) -> dict[str, Any]:
    """Convert an exception raised inside a handler into an inline error."""
    return error_response(str(exc) or exc.__class__.__name__, error_type=exc.__class__.__name__)
