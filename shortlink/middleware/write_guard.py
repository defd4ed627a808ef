"""
Write Guard Middleware

Pure ASGI middleware installed as the outermost layer. Once a response has
been handed to the server nothing more can reach the client, so an OSError
raised by the server's send is logged and the remaining messages of that
response are dropped instead of failing the request task.
"""

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from shortlink.core.exceptions import ResponseWriteError
from shortlink.core.logging_config import get_logger

logger = get_logger(__name__)


class WriteGuardMiddleware:
    """Log and swallow errors raised while sending a response."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        failed = False

        async def guarded_send(message: Message) -> None:
            nonlocal failed
            if failed:
                return
            try:
                await send(message)
            except OSError as e:
                failed = True
                error = ResponseWriteError(str(e), original_error=e)
                logger.error(
                    "failed to write response to client: %s (%s %s)",
                    error,
                    scope.get("method"),
                    scope.get("path"),
                )

        await self.app(scope, receive, guarded_send)


def add_write_guard_middleware(app):
    """
    Add write guard middleware to FastAPI app. Call it last so it wraps
    every other middleware.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(WriteGuardMiddleware)
