"""Access log for the bolão API.

One line per request on the "bl.request" logger:

    INFO POST /api/v1/purchases 200 23ms ip=203.0.113.9 req=req_1f0c9a2b7e41

The request id is taken from an upstream X-Request-ID (load balancer, admin
panel) when it looks sane, otherwise generated. It is stored on
request.state for the ApiResponse envelope and echoed in the response
header. Health probes are logged at DEBUG; 5xx responses at WARNING.
"""

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.bl_gateway.rate_limit import client_ip

logger = logging.getLogger("bl.request")

REQUEST_ID_HEADER = "X-Request-ID"
_UPSTREAM_ID = re.compile(r"^[A-Za-z0-9._-]{8,64}$")
_QUIET_PATHS = frozenset({"/health"})


def resolve_request_id(request: Request) -> str:
    upstream = request.headers.get(REQUEST_ID_HEADER)
    if upstream and _UPSTREAM_ID.match(upstream):
        return upstream
    return f"req_{uuid.uuid4().hex[:12]}"


def _level_for(path: str, status_code: int) -> int:
    if status_code >= 500:
        return logging.WARNING
    if path in _QUIET_PATHS:
        return logging.DEBUG
    return logging.INFO


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request)
        request.state.request_id = request_id

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id
        path = request.url.path
        logger.log(
            _level_for(path, response.status_code),
            "%s %s %d %.0fms ip=%s req=%s",
            request.method,
            path,
            response.status_code,
            elapsed_ms,
            client_ip(request),
            request_id,
        )
        return response
