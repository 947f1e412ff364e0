from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from bson.dbref import DBRef
from bson.int64 import Int64
from bson.max_key import MaxKey
from bson.min_key import MinKey
from bson.objectid import ObjectId
from bson.regex import Regex
from bson.timestamp import Timestamp


class ExtendedType(str, Enum):
    """
    Enumerated Extended JSON type names.

    Values match the catalog keys and the shorthand ``type`` names.
    """

    DATE = "Date"
    DBREF = "DBRef"
    MAX_KEY = "MaxKey"
    MIN_KEY = "MinKey"
    LONG = "Long"
    OBJECT_ID = "ObjectId"
    REGEX = "Regex"
    TIMESTAMP = "Timestamp"
    UNDEFINED = "Undefined"


class _UndefinedType:
    """Absence marker for the ``Undefined`` extended type.

    There is exactly one instance (``UNDEFINED``). It is falsy and survives
    copying, so identity checks stay valid on copied documents.
    """

    _instance: Optional["_UndefinedType"] = None

    def __new__(cls) -> "_UndefinedType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_UndefinedType":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "_UndefinedType":
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _UndefinedType()


# Constructors for the supported types. Undefined has no constructor: use UNDEFINED.
TYPES: Dict[str, type] = {
    ExtendedType.DATE.value: datetime,
    ExtendedType.DBREF.value: DBRef,
    ExtendedType.MAX_KEY.value: MaxKey,
    ExtendedType.MIN_KEY.value: MinKey,
    ExtendedType.LONG.value: Int64,
    ExtendedType.OBJECT_ID.value: ObjectId,
    ExtendedType.REGEX.value: Regex,
    ExtendedType.TIMESTAMP.value: Timestamp,
}


def type_of(value: Any) -> Optional[ExtendedType]:
    """Classify a runtime value.

    Returns the ExtendedType of ``value``, or None for plain JSON values
    (and anything else that is not one of the supported types).

    Classification uses the runtime class only. Wire objects such as
    ``{"$oid": "..."}`` are plain mappings and classify as None.
    """

    if value is UNDEFINED:
        return ExtendedType.UNDEFINED
    # Int64 subclasses int, so it must be checked before anything numeric.
    if isinstance(value, Int64):
        return ExtendedType.LONG
    if isinstance(value, datetime):
        return ExtendedType.DATE
    if isinstance(value, ObjectId):
        return ExtendedType.OBJECT_ID
    if isinstance(value, DBRef):
        return ExtendedType.DBREF
    if isinstance(value, MaxKey):
        return ExtendedType.MAX_KEY
    if isinstance(value, MinKey):
        return ExtendedType.MIN_KEY
    if isinstance(value, (Regex, re.Pattern)):
        return ExtendedType.REGEX
    if isinstance(value, Timestamp):
        return ExtendedType.TIMESTAMP
    return None


def is_date(value: Any) -> bool:
    return type_of(value) is ExtendedType.DATE


def is_dbref(value: Any) -> bool:
    return type_of(value) is ExtendedType.DBREF


def is_max_key(value: Any) -> bool:
    return type_of(value) is ExtendedType.MAX_KEY


def is_min_key(value: Any) -> bool:
    return type_of(value) is ExtendedType.MIN_KEY


def is_long(value: Any) -> bool:
    return type_of(value) is ExtendedType.LONG


def is_object_id(value: Any) -> bool:
    return type_of(value) is ExtendedType.OBJECT_ID


def is_regex(value: Any) -> bool:
    return type_of(value) is ExtendedType.REGEX


def is_timestamp(value: Any) -> bool:
    return type_of(value) is ExtendedType.TIMESTAMP


def is_undefined(value: Any) -> bool:
    """True only for the UNDEFINED marker, never for ``{"$undefined": True}``."""
    return value is UNDEFINED
