"""Extended JSON schema helpers.

Documents may mix plain JSON with MongoDB Extended JSON types, each carried on
the wire as an object tagged with a ``$``-prefixed key (``{"$oid": "..."}``).
Shorthand schemas may name those types directly (``{"type": "ObjectId"}``).

Supported types: Date, DBRef, MaxKey, MinKey, Long, ObjectId, Regex,
Timestamp, Undefined. Binary is not supported.
"""

from .codec import deserialize, parse, serialize, stringify
from .coercion import coerce
from .exceptions import (
    EJSONError,
    EJSONSchemaError,
    EJSONValidationError,
    UnknownExtendedTypeError,
)
from .rewriter import to_json_schema
from .schemas import EJSON_SCHEMAS, ejson_schema, is_extended_type_name
from .types import (
    TYPES,
    UNDEFINED,
    ExtendedType,
    is_date,
    is_dbref,
    is_long,
    is_max_key,
    is_min_key,
    is_object_id,
    is_regex,
    is_timestamp,
    is_undefined,
    type_of,
)
from .validator import ValidationResult, validate, validate_or_raise

__all__ = [
    "ExtendedType",
    "TYPES",
    "UNDEFINED",
    "type_of",
    "is_date",
    "is_dbref",
    "is_max_key",
    "is_min_key",
    "is_long",
    "is_object_id",
    "is_regex",
    "is_timestamp",
    "is_undefined",
    "EJSON_SCHEMAS",
    "ejson_schema",
    "is_extended_type_name",
    "to_json_schema",
    "coerce",
    "validate",
    "validate_or_raise",
    "ValidationResult",
    "serialize",
    "deserialize",
    "parse",
    "stringify",
    "EJSONError",
    "EJSONSchemaError",
    "EJSONValidationError",
    "UnknownExtendedTypeError",
]
