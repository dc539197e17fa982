"""Request correlation: one id per request, echoed back and bound to the logs."""

import time
from typing import Iterable
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware

from taste.core.logging import latency_bucket_ms, log_event, request_id_ctx_var


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Reuse the caller's x-request-id or mint one, expose it as
    request.state.request_id, and log "request.complete" with the
    latency bucket. Server errors log at warning; `quiet_paths` are not logged.
    """

    def __init__(self, app, header_name: str = "x-request-id", quiet_paths: Iterable[str] = ("/healthz",)):
        super().__init__(app)
        self.header_name = header_name
        self.quiet_paths = frozenset(quiet_paths)

    async def dispatch(self, request, call_next):
        rid = request.headers.get(self.header_name) or str(uuid4())
        request.state.request_id = rid
        token = request_id_ctx_var.set(rid)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            request_id_ctx_var.reset(token)
        elapsed_ms = (time.perf_counter() - start) * 1000

        response.headers[self.header_name] = rid
        if request.url.path not in self.quiet_paths:
            status = response.status_code
            log_event(
                "warning" if status >= 500 else "info",
                "request.complete",
                request_id=rid,
                user_id=request.query_params.get("user_id"),
                event_type="http_request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": status,
                    "latency_bucket": latency_bucket_ms(elapsed_ms),
                },
            )
        return response
