from __future__ import annotations

from typing import Any, Mapping

from .schemas import ejson_schema, is_extended_type_name


def to_json_schema(schema: Any) -> Any:
    """Expand shorthand extended-type references into plain JSON Schema.

    A mapping whose ``type`` names a catalog entry (e.g. ``{"type": "ObjectId"}``)
    is replaced by that type's fragment; its sibling keys are discarded.
    Other mappings and lists are rebuilt with every value rewritten, and
    anything else (including unknown ``type`` strings such as ``"string"``)
    is returned as-is.

    The input is never mutated.
    """

    if isinstance(schema, (list, tuple)):
        return [to_json_schema(elem) for elem in schema]

    if isinstance(schema, Mapping):
        if is_extended_type_name(schema.get("type")):
            return ejson_schema(schema["type"])
        return {k: to_json_schema(v) for k, v in schema.items()}

    return schema
