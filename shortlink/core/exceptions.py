"""
Custom Exceptions

This module defines the error taxonomy of the service. Each client-facing
exception carries the message that is returned in the response envelope.

Mapping to HTTP:
- InvalidBodyError -> 422
- InvalidURLError -> 400
- ShortCodeNotFoundError -> 404
- ResponseSerializationError -> 500 (generic message, detail is only logged)
- ResponseWriteError -> logged only, the response is already in flight
"""


class URLShortenerException(Exception):
    """Base exception for URL shortener service."""
    pass


class InvalidBodyError(URLShortenerException):
    """Raised when the request body cannot be decoded."""

    public_message = "invalid body"

    def __init__(self, reason: str = "Request body could not be decoded"):
        self.reason = reason
        super().__init__(reason)


class InvalidURLError(URLShortenerException):
    """Raised when URL validation fails."""

    public_message = "invalid url passed"

    def __init__(self, url: str, reason: str = "Invalid URL format"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class ShortCodeNotFoundError(URLShortenerException):
    """Raised when a short code is not present in the store."""

    public_message = "url not found"

    def __init__(self, short_code: str):
        self.short_code = short_code
        super().__init__(f"Short code '{short_code}' not found")


class ResponseSerializationError(URLShortenerException):
    """Raised when a response envelope cannot be encoded."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Serialization error: {message}")


class ResponseWriteError(URLShortenerException):
    """Raised when the response cannot be delivered to the client."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Write error: {message}")
