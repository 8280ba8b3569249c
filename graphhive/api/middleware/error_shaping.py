from __future__ import annotations

import logging
import traceback
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from graphhive.api.middleware.request_id import REQUEST_ID_HEADER
from graphhive.core.errors import GraphHiveError
from graphhive.observability.metrics import inc_named

log = logging.getLogger("graphhive.errors")


def _error_response(status: int, detail: str, rid: Optional[str], **extra) -> JSONResponse:
    body = {"detail": detail, **extra}
    if rid:
        body["request_id"] = rid
    resp = JSONResponse(status_code=status, content=body)
    if rid:
        resp.headers[REQUEST_ID_HEADER] = rid
    return resp


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """
    GraphHiveError (bad job configuration, catalog or profile failures)
    becomes a 400 carrying its message. Anything else becomes a 500 without a traceback; the
    traceback is only logged.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except GraphHiveError as e:
            rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
            log.warning("Rejected job configuration rid=%s path=%s: %s", rid, request.url.path, e)
            inc_named("errors_configuration")
            return _error_response(400, str(e), rid, error=type(e).__name__)
        except Exception as e:
            rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
            log.error(
                "Unhandled error: %s rid=%s path=%s\n%s",
                str(e),
                rid,
                request.url.path,
                traceback.format_exc(),
            )
            inc_named("errors_internal")
            return _error_response(500, "Internal Server Error", rid)
