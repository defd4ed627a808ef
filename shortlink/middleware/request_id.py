"""Request ID middleware."""

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from shortlink.core.logging_config import request_id_var

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an id.

    An id supplied by the client (or a proxy) in X-Request-ID is kept,
    otherwise a new one is generated. The id is stored on request.state,
    exposed to log records through request_id_var and echoed on the response.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def add_request_id_middleware(app):
    """
    Add request ID middleware to FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(RequestIDMiddleware)
