from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, List

from bson.errors import BSONError

from ejschema.core.ejson import (
    EJSON_SCHEMAS,
    EJSONSchemaError,
    coerce,
    stringify,
    to_json_schema,
    validate,
)
from ejschema.utils.json_safe import to_jsonable


def _read_json(path: str) -> Any:
    """Read a JSON file ('-' reads stdin)."""

    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _print_json(obj: Any) -> None:
    print(json.dumps(to_jsonable(obj), indent=2, sort_keys=True))


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a wire-form document.

    Exit codes: 0 valid, 1 invalid, 2 schema/engine error.
    """

    document = _read_json(args.document)
    schema = _read_json(args.schema)
    try:
        result = validate(document, schema)
    except EJSONSchemaError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.json:
        _print_json(result.to_dict())
    elif result.valid:
        print("valid")
    else:
        print(f"invalid: {result.error}")
    return 0 if result.valid else 1


def cmd_coerce(args: argparse.Namespace) -> int:
    """Coerce string leaves and print the document as Extended JSON."""

    document = _read_json(args.document)
    schema = _read_json(args.schema)
    try:
        coerced = coerce(document, schema)
    except (ValueError, BSONError) as e:
        print(f"error: coercion failed: {e}", file=sys.stderr)
        return 2
    print(stringify(coerced, indent=2, sort_keys=True))
    return 0


def cmd_to_schema(args: argparse.Namespace) -> int:
    """Print the concrete JSON Schema for a shorthand schema."""

    _print_json(to_json_schema(_read_json(args.schema)))
    return 0


def cmd_types(args: argparse.Namespace) -> int:
    if args.json:
        _print_json({name: to_json_schema({"type": name}) for name in EJSON_SCHEMAS})
        return 0
    for name in sorted(EJSON_SCHEMAS):
        tag = EJSON_SCHEMAS[name]["required"][0]
        print(f"{name:<10} {tag}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the ejschema API server.

    Binds to 127.0.0.1 by default.
    """

    try:
        import uvicorn
    except ImportError as e:
        print(f"error: uvicorn is required to serve the API: {e}", file=sys.stderr)
        return 2

    from ejschema.api.server import ServiceConfig, create_app

    app = create_app(ServiceConfig(max_body_bytes=args.max_body_bytes, log_level=args.log_level.upper()))
    uvicorn.run(app, host=args.host, port=int(args.port), log_level=args.log_level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ejschema", description="Extended JSON schema rewrite, coercion and validation"
    )
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    va = sub.add_parser("validate", help="Validate a wire-form JSON document")
    va.add_argument("document", help="Path to document JSON ('-' for stdin)")
    va.add_argument("--schema", required=True, help="Path to shorthand schema JSON")
    va.add_argument("--json", action="store_true", help="Print the result as JSON")
    va.set_defaults(func=cmd_validate)

    co = sub.add_parser("coerce", help="Coerce string leaves to the types the schema declares")
    co.add_argument("document", help="Path to document JSON ('-' for stdin)")
    co.add_argument("--schema", required=True, help="Path to shorthand schema JSON")
    co.set_defaults(func=cmd_coerce)

    ts = sub.add_parser("to-schema", help="Expand a shorthand schema into JSON Schema")
    ts.add_argument("schema", help="Path to shorthand schema JSON ('-' for stdin)")
    ts.set_defaults(func=cmd_to_schema)

    ty = sub.add_parser("types", help="List supported extended types")
    ty.add_argument("--json", action="store_true", help="Print the catalog schemas as JSON")
    ty.set_defaults(func=cmd_types)

    sv = sub.add_parser("serve", help="Run the ejschema FastAPI server")
    sv.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    sv.add_argument("--port", type=int, default=8080, help="Bind port (default: 8080)")
    sv.add_argument("--max-body-bytes", type=int, default=1024 * 1024, help="Max request body size")
    sv.add_argument("--log-level", default="info", help="Log level")
    sv.set_defaults(func=cmd_serve)

    return p


def main(argv: List[str] | None = None) -> int:
    """CLI entry."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
