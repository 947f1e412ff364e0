from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from bson.errors import BSONError
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.requests import Request

from ejschema.api.middleware import (
    AccessLogMiddleware,
    MaxBodySizeMiddleware,
    RequestIdMiddleware,
    request_id_of,
)
from ejschema.api.models import (
    ApiError,
    CoerceOut,
    DocumentIn,
    SchemaIn,
    SchemaOut,
    TypesOut,
    ValidateOut,
)
from ejschema.core.ejson import (
    EJSON_SCHEMAS,
    EJSONSchemaError,
    EJSONValidationError,
    coerce,
    serialize,
    to_json_schema,
    validate,
    validate_or_raise,
)

log = logging.getLogger("ejschema.api")


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    """Configuration for the API service."""

    max_body_bytes: int = 1024 * 1024
    log_level: str = "INFO"


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to default."""

    raw = os.environ.get(name, "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        return int(default)


def load_service_config() -> ServiceConfig:
    """Build ServiceConfig from EJSCHEMA_* environment variables."""

    return ServiceConfig(
        max_body_bytes=_env_int("EJSCHEMA_MAX_BODY_BYTES", 1024 * 1024),
        log_level=(os.environ.get("EJSCHEMA_LOG_LEVEL") or "INFO").strip().upper(),
    )


def _error_response(
    request: Request, status_code: int, error: str, detail: Optional[str], *, reason: str = ""
) -> JSONResponse:
    """Build an ApiError response and log it under the request's correlation id.

    The log record carries the error code and engine reason, never the request body.
    """

    log.warning(
        "api_error",
        extra={
            "request_id": request_id_of(request),
            "path": request.url.path,
            "status_code": status_code,
            "error": error,
            "reason": reason or None,
        },
    )
    return JSONResponse(ApiError(error=error, detail=detail).model_dump(), status_code=status_code)


def create_app(cfg: ServiceConfig | None = None) -> FastAPI:
    """Create the FastAPI app."""

    cfg = cfg or load_service_config()

    log.setLevel(cfg.log_level)
    logging.getLogger("ejschema.validator").setLevel(cfg.log_level)

    app = FastAPI(title="ejschema API", version="0.1")
    app.state.cfg = cfg

    app.add_middleware(MaxBodySizeMiddleware, max_bytes=cfg.max_body_bytes)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(AccessLogMiddleware)

    @app.exception_handler(EJSONSchemaError)
    async def schema_error_handler(request: Request, exc: EJSONSchemaError) -> JSONResponse:
        return _error_response(request, 422, "schema_error", str(exc), reason=exc.reason)

    @app.exception_handler(EJSONValidationError)
    async def invalid_document_handler(request: Request, exc: EJSONValidationError) -> JSONResponse:
        return _error_response(request, 422, "invalid_document", exc.result.error)

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"ok": True, "types": len(EJSON_SCHEMAS)}

    @app.get("/types", response_model=TypesOut)
    def types_endpoint() -> TypesOut:
        return TypesOut(
            types=sorted(EJSON_SCHEMAS),
            schemas={name: to_json_schema({"type": name}) for name in EJSON_SCHEMAS},
        )

    @app.post("/schema", response_model=SchemaOut)
    def schema_endpoint(body: SchemaIn) -> SchemaOut:
        return SchemaOut(concrete=to_json_schema(body.shorthand))

    @app.post(
        "/validate",
        response_model=ValidateOut,
        response_model_exclude_none=True,
        responses={422: {"model": ApiError}},
    )
    def validate_endpoint(body: DocumentIn, strict: bool = False) -> ValidateOut:
        """Validate a document.

        Invalid documents yield ``{"valid": false, "error": ...}``, or a 422
        ``invalid_document`` error when ``strict`` is set. Broken schemas
        always yield a 422 ``schema_error``.
        """

        if strict:
            result = validate_or_raise(body.document, body.shorthand)
        else:
            result = validate(body.document, body.shorthand)
        return ValidateOut(valid=result.valid, error=result.error)

    @app.post("/coerce", response_model=CoerceOut, responses={400: {"model": ApiError}})
    def coerce_endpoint(request: Request, body: DocumentIn):
        try:
            coerced = coerce(body.document, body.shorthand)
        except (ValueError, BSONError) as e:
            # json.JSONDecodeError, bad dates and bad ObjectId hex all land here.
            return _error_response(request, 400, "coercion_failed", str(e))
        return CoerceOut(document=serialize(coerced))

    return app


def app_from_env() -> FastAPI:
    """ASGI factory for ``uvicorn --factory ejschema.api.server:app_from_env``."""

    return create_app(load_service_config())
