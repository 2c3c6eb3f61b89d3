import time
import uuid
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("access")

# Probes and static receipt downloads are not worth an access line each
QUIET_PATHS = ("/health", "/uploads/")

class LoggingMiddleware(BaseHTTPMiddleware):
    """Access log with a per-request id echoed back in X-Request-ID"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        quiet = request.url.path.startswith(QUIET_PATHS)
        start_time = time.perf_counter()

        if not quiet:
            logger.info(
                f"[{request_id}] {request.method} {request.url.path} - "
                f"Client: {request.client.host if request.client else 'unknown'}"
            )

        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        if response.status_code >= 500:
            logger.error(
                f"[{request_id}] {request.method} {request.url.path} - "
                f"Status: {response.status_code} - Time: {process_time:.4f}s"
            )
        elif not quiet:
            logger.info(
                f"[{request_id}] {request.method} {request.url.path} - "
                f"Status: {response.status_code} - Time: {process_time:.4f}s"
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response
