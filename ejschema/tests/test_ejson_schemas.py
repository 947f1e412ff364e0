import pytest

from ejschema.core.ejson import (
    EJSON_SCHEMAS,
    ExtendedType,
    UnknownExtendedTypeError,
    ejson_schema,
    is_extended_type_name,
)

TAGS = {
    "Date": "$date",
    "DBRef": "$ref",
    "MaxKey": "$maxKey",
    "MinKey": "$minKey",
    "Long": "$numberLong",
    "ObjectId": "$oid",
    "Regex": "$regex",
    "Timestamp": "$timestamp",
    "Undefined": "$undefined",
}


def test_catalog_covers_every_extended_type_and_nothing_else():
    assert set(EJSON_SCHEMAS) == {t.value for t in ExtendedType}
    assert "Binary" not in EJSON_SCHEMAS


@pytest.mark.parametrize("name", sorted(TAGS))
def test_fragments_are_strict_tagged_objects(name):
    frag = EJSON_SCHEMAS[name]

    assert frag["type"] == "object"
    assert frag["required"] == [TAGS[name]]
    assert TAGS[name] in frag["properties"]
    assert frag["additionalProperties"] is False


def test_fragment_value_constraints():
    assert EJSON_SCHEMAS["ObjectId"]["properties"] == {"$oid": {"type": "string"}}
    assert EJSON_SCHEMAS["Date"]["properties"] == {"$date": {"type": "string"}}
    assert EJSON_SCHEMAS["Long"]["properties"] == {"$numberLong": {"type": "string"}}
    assert EJSON_SCHEMAS["Undefined"]["properties"] == {"$undefined": {"type": "boolean"}}
    assert EJSON_SCHEMAS["DBRef"]["properties"] == {"$ref": {"type": "string"}, "$id": {}}
    assert EJSON_SCHEMAS["Regex"]["properties"] == {
        "$regex": {"type": "string"},
        "$options": {"type": "string"},
    }
    for name, tag in (("MaxKey", "$maxKey"), ("MinKey", "$minKey")):
        assert EJSON_SCHEMAS[name]["properties"] == {
            tag: {"type": "number", "minimum": 1, "maximum": 1}
        }
    assert EJSON_SCHEMAS["Timestamp"]["properties"]["$timestamp"] == {
        "type": "object",
        "properties": {"t": {"type": "number"}, "i": {"type": "number"}},
        "additionalProperties": False,
    }


def test_catalog_is_read_only_and_lookups_return_copies():
    with pytest.raises(TypeError):
        EJSON_SCHEMAS["Binary"] = {}  # type: ignore[index]

    frag = ejson_schema("ObjectId")
    frag["properties"]["$oid"]["type"] = "number"
    assert EJSON_SCHEMAS["ObjectId"]["properties"]["$oid"]["type"] == "string"


def test_unknown_type_lookup_raises():
    assert is_extended_type_name("ObjectId") is True
    assert is_extended_type_name("string") is False
    assert is_extended_type_name(["ObjectId"]) is False

    with pytest.raises(UnknownExtendedTypeError):
        ejson_schema("Binary")
    with pytest.raises(KeyError):
        ejson_schema("Binary")
