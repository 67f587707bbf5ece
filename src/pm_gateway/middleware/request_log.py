"""Request logging middleware.

Logs every HTTP request with method, path, caller, status code, latency and a
short request ID. The request_id is injected into request.state so routers and
the AppError handler can echo it in ApiResponse.

Log format:
    INFO [POST] /api/v1/markets/0/buy caller=alice → 200 (2ms) req_a1b2c3d4e5f6
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.pm_common.response import new_request_id
from src.pm_gateway.auth.dependencies import CALLER_HEADER

logger = logging.getLogger("pm.request")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.request_id = new_request_id()

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "[%s] %s caller=%s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            request.headers.get(CALLER_HEADER, "-"),
            response.status_code,
            elapsed_ms,
            request.state.request_id,
        )
        return response
