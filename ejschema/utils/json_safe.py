from __future__ import annotations

import base64
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Mapping

from ejschema.core.ejson.codec import serialize
from ejschema.core.ejson.types import type_of


def to_jsonable(obj: Any) -> Any:
    """
    Convert common Python objects to JSON-serializable equivalents.

    - extended types are rendered in their wire form ({"$oid": ...}).
    - bytes are base64-encoded to avoid binary injection / encoding issues.
    - does NOT execute or import anything dynamically.

    """
    if obj is None or isinstance(obj, (str, bool, float)):
        return obj

    # Int64, datetime, ObjectId, ... -> tagged wire object
    if type_of(obj) is not None:
        return serialize(obj)

    if isinstance(obj, int):
        return obj

    if isinstance(obj, Path):
        return str(obj)

    if isinstance(obj, (bytes, bytearray)):
        return {"__bytes_b64__": base64.b64encode(bytes(obj)).decode("ascii")}

    if is_dataclass(obj) and not isinstance(obj, type):
        return to_jsonable(asdict(obj))

    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_jsonable(x) for x in obj]

    # fallback: string representation
    return str(obj)
