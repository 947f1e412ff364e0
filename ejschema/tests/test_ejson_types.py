from __future__ import annotations

import re
from datetime import datetime, timezone

import pytest
from bson.dbref import DBRef
from bson.int64 import Int64
from bson.max_key import MaxKey
from bson.min_key import MinKey
from bson.objectid import ObjectId
from bson.regex import Regex
from bson.timestamp import Timestamp

from ejschema.core.ejson import (
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

SAMPLES = {
    "Date": datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    "DBRef": DBRef("users", ObjectId("507f1f77bcf86cd799439011")),
    "MaxKey": MaxKey(),
    "MinKey": MinKey(),
    "Long": Int64(42),
    "ObjectId": ObjectId("507f1f77bcf86cd799439011"),
    "Regex": Regex("^a", "i"),
    "Timestamp": Timestamp(1, 2),
    "Undefined": UNDEFINED,
}

PREDICATES = {
    "Date": is_date,
    "DBRef": is_dbref,
    "MaxKey": is_max_key,
    "MinKey": is_min_key,
    "Long": is_long,
    "ObjectId": is_object_id,
    "Regex": is_regex,
    "Timestamp": is_timestamp,
    "Undefined": is_undefined,
}


@pytest.mark.parametrize("name", sorted(PREDICATES))
def test_predicate_matches_only_its_own_type(name: str) -> None:
    predicate = PREDICATES[name]

    assert predicate(SAMPLES[name]) is True
    for other, value in SAMPLES.items():
        if other != name:
            assert predicate(value) is False, other
    assert predicate(None) is False
    assert predicate({}) is False
    assert predicate("x") is False


def test_predicates_ignore_wire_shapes() -> None:
    assert is_object_id({"$oid": "507f1f77bcf86cd799439011"}) is False
    assert is_date({"$date": "2020-01-01T00:00:00Z"}) is False
    assert is_undefined({"$undefined": True}) is False
    assert is_undefined(None) is False


def test_long_is_not_a_plain_int_or_bool() -> None:
    assert is_long(5) is False
    assert is_long(True) is False
    assert type_of(Int64(5)) is ExtendedType.LONG


def test_compiled_pattern_is_a_regex() -> None:
    assert is_regex(re.compile("^a")) is True


def test_type_of_plain_values_is_none() -> None:
    for value in (None, 1, 1.5, True, "s", [], {}, {"$oid": "x"}):
        assert type_of(value) is None


def test_extended_type_enum_blocks_typos() -> None:
    assert ExtendedType("ObjectId") is ExtendedType.OBJECT_ID

    with pytest.raises(ValueError):
        ExtendedType("ObjectID")


def test_types_map_constructs_matching_values() -> None:
    assert set(TYPES) == {t.value for t in ExtendedType} - {"Undefined"}
    assert is_object_id(TYPES["ObjectId"]())
    assert is_long(TYPES["Long"](7))
    assert is_timestamp(TYPES["Timestamp"](1, 1))


def test_undefined_marker_is_a_falsy_singleton() -> None:
    import copy

    assert not UNDEFINED
    assert copy.deepcopy(UNDEFINED) is UNDEFINED
    assert type(UNDEFINED)() is UNDEFINED
    assert repr(UNDEFINED) == "UNDEFINED"
