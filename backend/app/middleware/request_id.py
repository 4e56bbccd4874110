"""
NoteShare Backend — Request ID Middleware
===========================================

What:  Assigns a correlation ID to each request and returns it in the
       X-Request-ID response header.
How:   Reuses a well-formed client-supplied X-Request-ID, otherwise
       generates one, and stores it in a ContextVar for loggers and
       exception handlers.

Error bodies are exactly {code, message}; a client quoting a failure
should quote this header.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Client IDs are echoed into logs and headers, so only short token-like values are accepted
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Sets `request.state.request_id`, the ContextVar, and the response header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        supplied = request.headers.get(REQUEST_ID_HEADER, "")
        rid = supplied if _VALID_REQUEST_ID.match(supplied) else new_request_id()

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
