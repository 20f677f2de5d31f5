import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

log = logging.getLogger("middleware")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag every response with X-Request-ID, reusing the caller's id when it sent one."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)
        log.info("%s %s %s -> %s (%s ms)", request_id, request.method, request.url.path, response.status_code, latency_ms)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
