from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from .codec import stringify
from .exceptions import EJSONSchemaError, EJSONValidationError
from .rewriter import to_json_schema

log = logging.getLogger("ejschema.validator")


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one document.

    Invariants
    - error is set iff valid is False
    - error carries the first reported issue only
    """

    valid: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"valid": self.valid}
        if not self.valid:
            out["error"] = self.error
        return out


def _log_fields(concrete: Any, obj: Any) -> Dict[str, Any]:
    """Small, content-free fields for log records."""

    schema_type = concrete.get("type") if isinstance(concrete, Mapping) else None
    return {
        "schema_type": schema_type if isinstance(schema_type, str) else type(concrete).__name__,
        "document_type": type(obj).__name__,
        "document_keys": len(obj) if isinstance(obj, (Mapping, list)) else None,
    }


def _describe(value: Any) -> str:
    try:
        return stringify(value)
    except (TypeError, ValueError):
        return repr(value)


def validate(obj: Any, schema: Any) -> ValidationResult:
    """Validate a wire-form document against a shorthand schema.

    The schema is expanded with to_json_schema and checked with the
    jsonschema Draft 7 engine.

    Raises:
        EJSONSchemaError: the expanded schema is not a valid schema, or the
            engine raised while compiling or validating. The message embeds
            the schema, the document and the reason.
    """

    concrete = to_json_schema(schema)

    try:
        try:
            Draft7Validator.check_schema(concrete)
        except SchemaError as e:
            raise ValueError(f"Invalid schema. {e.message}") from e
        first = next(iter(Draft7Validator(concrete).iter_errors(obj)), None)
    except Exception as e:
        reason = str(e)
        log.warning("ejson_schema_error", extra={"reason": reason, **_log_fields(concrete, obj)})
        raise EJSONSchemaError(
            "Exception in compiling schema or validating ejson schema: "
            + _describe(concrete)
            + " data: "
            + _describe(obj)
            + " -- Reason: "
            + reason,
            schema=concrete,
            document=obj,
            reason=reason,
        ) from e

    if first is None:
        return ValidationResult(valid=True)

    log.debug(
        "ejson_validation_failed", extra={"error": first.message, **_log_fields(concrete, obj)}
    )
    return ValidationResult(valid=False, error=first.message)


def validate_or_raise(obj: Any, schema: Any) -> ValidationResult:
    """Like validate, but raise EJSONValidationError for invalid documents."""

    result = validate(obj, schema)
    if not result.valid:
        raise EJSONValidationError(result)
    return result
