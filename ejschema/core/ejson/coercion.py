from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from .codec import deserialize
from .types import ExtendedType

# Declared types whose string leaves are parsed as JSON literals.
_LITERAL_TYPES = frozenset({"number", "integer", "boolean"})


def _subschema(schema: Any, key: Any) -> Optional[Any]:
    return schema.get(key) if isinstance(schema, Mapping) else None


def _parse_literal(text: str) -> Any:
    """Parse a strict JSON literal. NaN and Infinity are not JSON."""

    def reject(name: str) -> Any:
        raise json.JSONDecodeError(f"Invalid JSON constant {name}", text, text.find(name))

    return json.loads(text, parse_constant=reject)


def _coerce_string(value: str, schema: Any) -> Any:
    schema_type = _subschema(schema, "type")
    if not isinstance(schema_type, str):
        return value

    if schema_type in _LITERAL_TYPES:
        # json.JSONDecodeError propagates to the caller.
        return _parse_literal(value)
    if schema_type == ExtendedType.OBJECT_ID.value:
        return deserialize({"$oid": value})
    if schema_type == ExtendedType.DATE.value:
        return deserialize({"$date": value})
    return value


def coerce(obj: Any, schema: Any = None) -> Any:
    """Return a copy of ``obj`` with string leaves converted per ``schema``.

    The document and the shorthand schema are walked together:
    - no schema: ``obj`` is returned unchanged
    - lists: every element is coerced against ``schema["items"]``
    - mappings: each value is coerced against ``schema["properties"][key]``
    - strings: parsed as a JSON literal for number/integer/boolean, decoded
      for ObjectId and Date, left alone otherwise
    - anything else is returned unchanged

    Containers are rebuilt, never mutated. Parse and decode errors propagate.
    """

    if not schema:
        return obj

    if isinstance(obj, (list, tuple)):
        items = _subschema(schema, "items")
        return [coerce(v, items) for v in obj]

    if isinstance(obj, Mapping):
        properties = _subschema(schema, "properties")
        return {k: coerce(v, _subschema(properties, k)) for k, v in obj.items()}

    if isinstance(obj, str):
        return _coerce_string(obj, schema)

    return obj
