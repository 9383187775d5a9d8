"""
Portfolio API - Request ID Middleware
=====================================

What:  Assigns a correlation ID to each request and echoes it back.
Why:   The portfolio frontend reports failures by request ID; the same ID
       shows up in the access line, in handler warnings and in every JSON
       error body, so one value ties a user report to the server logs.
How:   Accepts the client's X-Request-ID when it is a short token of safe
       characters, otherwise generates a short uuid4. The ID lives in a
       ContextVar for loggers and exception handlers, on `request.state`
       for route handlers, and in the X-Request-ID response header.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request ID
# Why ContextVar: concurrent requests share one thread under asyncio
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client IDs end up verbatim in log lines and error bodies
CLIENT_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def new_request_id() -> str:
    """8 hex chars: enough to correlate, short enough to read out loud."""
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value) -> str:
    """Use the client's ID when it is well-formed, otherwise mint one."""
    if header_value and CLIENT_REQUEST_ID.fullmatch(header_value):
        return header_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get("X-Request-ID"))

        # Not reset afterwards: the outermost 500 handler runs after dispatch
        # returns and still reports this ID
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
