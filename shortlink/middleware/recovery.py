"""
Recovery Middleware

Turns any exception escaping the inner middleware or the router into a 500
envelope so that a single failing request never takes the process down. The
exception and its traceback go to the log; the client only sees a generic
message.
"""

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware

from shortlink.api.responses import GENERIC_ERROR_MESSAGE, send_json
from shortlink.api.schemas import Envelope
from shortlink.core.logging_config import get_logger
from shortlink.middleware.request_id import REQUEST_ID_HEADER

logger = get_logger(__name__)


class RecoveryMiddleware(BaseHTTPMiddleware):
    """Catch unhandled exceptions raised while handling a request."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            # Installed outside RequestIDMiddleware, the id is only on request.state
            request_id = getattr(request.state, "request_id", None)
            logger.exception(
                "unhandled error while serving %s %s request_id=%s",
                request.method,
                request.url.path,
                request_id or "-",
            )
            response = send_json(
                Envelope(error=GENERIC_ERROR_MESSAGE),
                status.HTTP_500_INTERNAL_SERVER_ERROR
            )
            if request_id:
                response.headers[REQUEST_ID_HEADER] = request_id
            return response


def add_recovery_middleware(app):
    """
    Add recovery middleware to FastAPI app. Call it after the other
    request middleware so it is the outermost of them.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(RecoveryMiddleware)
