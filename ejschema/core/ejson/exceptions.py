from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .validator import ValidationResult


class EJSONError(Exception):
    """
    Base exception for all Extended JSON schema failures.
    """

    pass


class EJSONSchemaError(EJSONError):
    """
    Raised when a schema cannot be compiled or the validation engine fails.

    The message embeds the offending schema, the document and the reason.
    This is the internal-error channel; ordinary validation failures are
    reported as a ValidationResult instead.
    """

    def __init__(self, message: str, *, schema: Any = None, document: Any = None, reason: str = ""):
        self.schema = schema
        self.document = document
        self.reason = reason
        super().__init__(message)


class EJSONValidationError(EJSONError):
    """
    Raised by validate_or_raise when a document does not match its schema.
    """

    def __init__(self, result: "ValidationResult"):
        self.result = result
        super().__init__(result.error or "validation failed")


class UnknownExtendedTypeError(EJSONError, KeyError):
    """
    Raised when a name outside the extended-type catalog is looked up.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown extended type: {name}")

    def __str__(self) -> str:
        return str(self.args[0])
