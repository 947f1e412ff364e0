"""Extended-type schema catalog.

Each fragment is the JSON Schema for one type's wire shape: a single
``$``-prefixed tag key, optional sibling keys, and
``additionalProperties: false`` so a malformed or ambiguous tagged object
fails instead of passing as another type.

See https://www.mongodb.com/docs/manual/reference/mongodb-extended-json/
"""

from __future__ import annotations

import copy
from types import MappingProxyType
from typing import Any, Dict, Mapping

from .exceptions import UnknownExtendedTypeError
from .types import ExtendedType


def _tagged(tag: str, properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "required": [tag],
        "properties": properties,
        "additionalProperties": False,
    }


_SCHEMAS: Dict[str, Dict[str, Any]] = {
    ExtendedType.DATE.value: _tagged("$date", {"$date": {"type": "string"}}),
    ExtendedType.DBREF.value: _tagged(
        "$ref",
        {
            "$ref": {"type": "string"},
            # $id may hold any value.
            "$id": {},
        },
    ),
    ExtendedType.MAX_KEY.value: _tagged(
        "$maxKey", {"$maxKey": {"type": "number", "minimum": 1, "maximum": 1}}
    ),
    ExtendedType.MIN_KEY.value: _tagged(
        "$minKey", {"$minKey": {"type": "number", "minimum": 1, "maximum": 1}}
    ),
    ExtendedType.LONG.value: _tagged("$numberLong", {"$numberLong": {"type": "string"}}),
    ExtendedType.OBJECT_ID.value: _tagged("$oid", {"$oid": {"type": "string"}}),
    ExtendedType.REGEX.value: _tagged(
        "$regex",
        {
            "$regex": {"type": "string"},
            "$options": {"type": "string"},
        },
    ),
    ExtendedType.TIMESTAMP.value: _tagged(
        "$timestamp",
        {
            "$timestamp": {
                "type": "object",
                "properties": {
                    "t": {"type": "number"},
                    "i": {"type": "number"},
                },
                "additionalProperties": False,
            }
        },
    ),
    ExtendedType.UNDEFINED.value: _tagged("$undefined", {"$undefined": {"type": "boolean"}}),
}

# Read-only view. Hand out copies via ejson_schema() so callers cannot alter the catalog.
EJSON_SCHEMAS: Mapping[str, Mapping[str, Any]] = MappingProxyType(_SCHEMAS)


def is_extended_type_name(name: Any) -> bool:
    return isinstance(name, str) and name in _SCHEMAS


def ejson_schema(name: str) -> Dict[str, Any]:
    """Return a fresh copy of the catalog fragment for ``name``."""

    if not is_extended_type_name(name):
        raise UnknownExtendedTypeError(str(name))
    return copy.deepcopy(_SCHEMAS[name])
