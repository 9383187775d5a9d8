"""
Portfolio API - Request Logging Middleware
==========================================

What:  One access log entry for every HTTP request.
Why:   The portfolio owner needs to see who changed content: every write
       route is token-guarded, so the access line names the caller taken
       from the verified token claims next to the request ID.
How:   Times the downstream call and logs method, path, status, duration,
       request ID, caller and client IP on the `portfolio.access` logger.
       The fields are also attached as `extra` for JSON formatters.

Level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Caller:
    `sub`, else `email`, from request.state.claims (set by require_token);
    "-" for anonymous requests and rejected tokens.

Request bodies, tokens and the Authorization header are never logged.
"""

import logging
import time
from typing import Any, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from portfolio_api.config import settings
from portfolio_api.middleware.request_id import request_id_var

logger = logging.getLogger("portfolio.access")

ANONYMOUS = "-"


def describe_caller(claims: Optional[Dict[str, Any]]) -> str:
    """Short caller label for the access line."""
    if not claims:
        return ANONYMOUS
    for claim in ("sub", "email"):
        if claims.get(claim) not in (None, ""):
            return str(claims[claim])
    return "token"


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        # Read per request so ACCESS_LOG_SKIP_PATHS changes apply without a rebuild
        if path in settings.access_log_skip_paths_set:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        # The route shares this request's scope, so claims set by require_token are visible here
        caller = describe_caller(getattr(request.state, "claims", None))

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] by %s from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            caller,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "caller": caller,
                "client_ip": client_ip,
            },
        )
        return response
