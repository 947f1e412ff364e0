from __future__ import annotations

import logging
import re
import time
from typing import Callable, Optional
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

log = logging.getLogger("ejschema.api")


REQUEST_ID_HEADER = "X-Request-ID"

# Ids end up in log records; keep them to a safe token alphabet.
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def request_id_of(request: Request) -> Optional[str]:
    """Return the correlation id assigned by RequestIdMiddleware, if any."""

    return getattr(request.state, "request_id", None)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Assign a correlation id to every request and echo it on the response.

    A client-supplied X-Request-ID is reused when it matches a short token
    alphabet; anything else is replaced by a fresh uuid4 hex. Handlers read
    the id with request_id_of() to tag their log records.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        supplied = request.headers.get(REQUEST_ID_HEADER, "")
        rid = supplied if _REQUEST_ID_RE.match(supplied) else uuid4().hex
        request.state.request_id = rid
        response: Response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response


class MaxBodySizeMiddleware(BaseHTTPMiddleware):
    """Reject requests whose declared Content-Length exceeds max_bytes (413)."""

    def __init__(self, app, *, max_bytes: int):
        super().__init__(app)
        self._max_bytes = int(max_bytes)

    async def dispatch(self, request: Request, call_next: Callable):
        raw = request.headers.get("content-length")
        if raw is not None:
            try:
                declared = int(raw)
            except ValueError:
                return JSONResponse({"detail": "invalid_content_length"}, status_code=400)
            if declared > self._max_bytes:
                return JSONResponse({"detail": "body_too_large"}, status_code=413)
        return await call_next(request)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Structured access logging.

    Documents and schemas are never logged; only the request line, status
    and timing.

    """

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.monotonic()
        response: Optional[Response] = None
        try:
            response = await call_next(request)
            return response
        finally:
            dur_ms = int((time.monotonic() - start) * 1000)
            log.info(
                "api_request",
                extra={
                    "request_id": request_id_of(request),
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": getattr(response, "status_code", None),
                    "duration_ms": dur_ms,
                },
            )
