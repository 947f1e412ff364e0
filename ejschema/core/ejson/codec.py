"""Extended JSON codec.

Thin wrappers over ``bson.json_util`` configured for the legacy wire shape
the schema catalog describes:

- ``{"$date": "2020-01-01T00:00:00Z"}``
- ``{"$numberLong": "42"}``
- ``{"$regex": "^a", "$options": "i"}``
- ``{"$timestamp": {"t": 1, "i": 2}}``
- ``{"$maxKey": 1}`` / ``{"$minKey": 1}``
- ``{"$ref": "coll", "$id": ...}``
- ``{"$undefined": true}``
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from bson import json_util
from bson.json_util import DatetimeRepresentation, JSONMode, JSONOptions

from .types import UNDEFINED

WIRE_JSON_OPTIONS = JSONOptions(
    json_mode=JSONMode.LEGACY,
    datetime_representation=DatetimeRepresentation.ISO8601,
    strict_number_long=True,
    tz_aware=True,
    tzinfo=timezone.utc,
)


def _format_date(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, for any year.

    json_util falls back to ``{"$numberLong": ...}`` before 1970, which the
    Date schema rejects, so dates are rendered here instead.
    """

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    d = value.astimezone(timezone.utc)
    millis = d.microsecond // 1000
    frac = f".{millis:03d}" if millis else ""
    return (
        f"{d.year:04d}-{d.month:02d}-{d.day:02d}"
        f"T{d.hour:02d}:{d.minute:02d}:{d.second:02d}{frac}Z"
    )


def _parse_date(text: str) -> datetime:
    # Accepts date-only and offset forms ("2020-01-01", "...+02:00"). Naive means UTC.
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    parsed = parsed.astimezone(timezone.utc)
    return parsed.replace(microsecond=parsed.microsecond // 1000 * 1000)


def _object_hook(dct: Dict[str, Any]) -> Any:
    # json_util maps $undefined to None; keep the marker distinct from null.
    if "$undefined" in dct:
        return UNDEFINED
    if len(dct) == 1 and isinstance(dct.get("$date"), str):
        try:
            return json_util.object_hook(dct, WIRE_JSON_OPTIONS)
        except ValueError:
            return _parse_date(dct["$date"])
    return json_util.object_hook(dct, WIRE_JSON_OPTIONS)


def _to_wire_shapes(value: Any) -> Any:
    """Pre-encode the values json_util would render off-catalog."""

    if value is UNDEFINED:
        return {"$undefined": True}
    if isinstance(value, datetime):
        return {"$date": _format_date(value)}
    if isinstance(value, Mapping):
        return {k: _to_wire_shapes(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_wire_shapes(v) for v in value]
    return value


def stringify(value: Any, **kwargs: Any) -> str:
    """Encode an in-memory value as Extended JSON text.

    Extra keyword arguments go to ``json.dumps`` (``indent``, ``sort_keys``...).
    """

    return json_util.dumps(_to_wire_shapes(value), json_options=WIRE_JSON_OPTIONS, **kwargs)


def parse(text: str) -> Any:
    """Decode Extended JSON text into in-memory values."""

    return json.loads(text, object_hook=_object_hook)


def serialize(value: Any) -> Any:
    """Convert an in-memory value into plain JSON with tagged wire objects."""

    return json.loads(stringify(value))


def deserialize(wire: Any) -> Any:
    """Convert wire objects (e.g. ``{"$oid": "..."}``) into in-memory values."""

    return parse(stringify(wire))
