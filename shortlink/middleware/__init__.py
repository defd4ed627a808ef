"""Middleware wrapping the router: request ids, access logging, recovery, write guard."""

from shortlink.middleware.logging import LoggingMiddleware, add_logging_middleware
from shortlink.middleware.recovery import RecoveryMiddleware, add_recovery_middleware
from shortlink.middleware.request_id import RequestIDMiddleware, add_request_id_middleware
from shortlink.middleware.write_guard import WriteGuardMiddleware, add_write_guard_middleware

__all__ = [
    "LoggingMiddleware",
    "RecoveryMiddleware",
    "RequestIDMiddleware",
    "WriteGuardMiddleware",
    "add_logging_middleware",
    "add_recovery_middleware",
    "add_request_id_middleware",
    "add_write_guard_middleware",
]
