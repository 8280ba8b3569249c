import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Match

from graphhive.observability.metrics import inc_http

REQUEST_ID_HEADER = "X-Request-Id"
UNMATCHED_PATH = "unmatched"


def route_label(request: Request) -> str:
    """Route template ("/api/v1/job-conf/compile"), never the raw path, to keep label cardinality bounded."""
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", UNMATCHED_PATH)
    return UNMATCHED_PATH


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = rid

        response: Response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        inc_http(request.method, route_label(request), response.status_code)
        return response
