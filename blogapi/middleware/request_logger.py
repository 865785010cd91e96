"""ASGI middleware that logs every API request."""
import logging
import time
import uuid

from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)


class RequestLoggerMiddleware:
    """Logs method, path, status, response size and latency per request."""

    def __init__(self, app: ASGIApp, skip_paths: tuple = ("/",)):
        self.app = app
        self.skip_paths = skip_paths

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = uuid.uuid4().hex[:12]
        start_time = time.time()

        method = scope["method"]
        path = scope["path"]
        client = scope.get("client")
        ip_address = client[0] if client else None

        # Variables to capture from response
        status_code = 500
        response_size = 0

        async def send_with_capturing(message):
            nonlocal status_code, response_size
            if message["type"] == "http.response.start":
                status_code = message["status"]
            elif message["type"] == "http.response.body":
                response_size += len(message.get("body", b""))
            await send(message)

        try:
            await self.app(scope, receive, send_with_capturing)
        finally:
            # Skip health checks to reduce noise
            if path not in self.skip_paths:
                response_time_ms = int((time.time() - start_time) * 1000)
                log = logger.warning if status_code >= 400 else logger.info
                log(
                    "%s %s %s -> %d (%d bytes, %d ms) [%s]",
                    ip_address,
                    method,
                    path,
                    status_code,
                    response_size,
                    response_time_ms,
                    request_id,
                )
