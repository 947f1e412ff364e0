from __future__ import annotations

import json
from pathlib import Path

from ejschema.cli.main import main

OID = "507f1f77bcf86cd799439011"


def _write(tmp_path: Path, name: str, obj) -> str:
    p = tmp_path / name
    p.write_text(json.dumps(obj), encoding="utf-8")
    return str(p)


def test_cli_validate_exit_codes(tmp_path: Path, capsys) -> None:
    schema = _write(tmp_path, "schema.json", {"type": "object", "properties": {"_id": {"type": "ObjectId"}}})
    good = _write(tmp_path, "good.json", {"_id": {"$oid": OID}})
    bad = _write(tmp_path, "bad.json", {"_id": {"$oid": 5}})

    assert main(["validate", good, "--schema", schema]) == 0
    assert capsys.readouterr().out.strip() == "valid"

    assert main(["validate", bad, "--schema", schema]) == 1
    assert capsys.readouterr().out.startswith("invalid: ")

    assert main(["validate", bad, "--schema", schema, "--json"]) == 1
    out = json.loads(capsys.readouterr().out)
    assert out["valid"] is False
    assert out["error"]


def test_cli_validate_schema_error(tmp_path: Path, capsys) -> None:
    schema = _write(tmp_path, "schema.json", {"type": "nonsense"})
    doc = _write(tmp_path, "doc.json", {})

    assert main(["validate", doc, "--schema", schema]) == 2
    assert "Exception in compiling schema" in capsys.readouterr().err


def test_cli_coerce_prints_extended_json(tmp_path: Path, capsys) -> None:
    schema = _write(
        tmp_path,
        "schema.json",
        {"type": "object", "properties": {"_id": {"type": "ObjectId"}, "n": {"type": "integer"}}},
    )
    doc = _write(tmp_path, "doc.json", {"_id": OID, "n": "3"})

    assert main(["coerce", doc, "--schema", schema]) == 0
    assert json.loads(capsys.readouterr().out) == {"_id": {"$oid": OID}, "n": 3}


def test_cli_coerce_failure(tmp_path: Path, capsys) -> None:
    schema = _write(tmp_path, "schema.json", {"type": "array", "items": {"type": "number"}})
    doc = _write(tmp_path, "doc.json", ["one"])

    assert main(["coerce", doc, "--schema", schema]) == 2
    assert "coercion failed" in capsys.readouterr().err


def test_cli_to_schema_and_types(tmp_path: Path, capsys) -> None:
    schema = _write(tmp_path, "schema.json", {"type": "Timestamp"})

    assert main(["to-schema", schema]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["required"] == ["$timestamp"]

    assert main(["types"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 9
    assert any(line.split() == ["ObjectId", "$oid"] for line in lines)

    assert main(["types", "--json"]) == 0
    assert set(json.loads(capsys.readouterr().out)) >= {"Date", "Undefined"}
