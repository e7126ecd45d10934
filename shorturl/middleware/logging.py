"""
Request logging middleware for FastAPI using Loguru.

Logs one REQUEST-level line per HTTP request with timing, status and
caller details, and tags every response with an X-Request-ID header.
"""

import time
import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware


def get_client_ip(request: Request) -> str:
    """
    Extract the client IP address from a request.

    Checks X-Forwarded-For (first entry) and X-Real-IP before falling
    back to the peer address of the connection.
    """
    forwarded_for = request.headers.get("x-forwarded-for", "")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()
        if client_ip:
            return client_ip

    real_ip = request.headers.get("x-real-ip", "")
    if real_ip.strip():
        return real_ip.strip()

    return request.client.host if request.client else "unknown"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with a generated request ID."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Request-ID"] = request_id

        log_record = {
            "request_id": request_id,
            "client_ip": get_client_ip(request),
            "user_agent": request.headers.get("user-agent", ""),
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": round(process_time * 1000, 2),
        }
        if request.query_params:
            log_record["query_params"] = dict(request.query_params)

        logger.bind(**log_record).log(
            "REQUEST",
            f"{log_record['method']} {log_record['path']} "
            f"{log_record['status_code']} {log_record['process_time_ms']}ms",
        )

        return response
