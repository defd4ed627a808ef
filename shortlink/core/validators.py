"""
Input Validators and Sanitizers

This module provides validation and sanitization functions for user inputs.

A target URL is accepted when it is syntactically parseable as an absolute
URL: it has a scheme and a network location, a numeric port if one is given,
and no whitespace or control characters. Any scheme is allowed, the service
does not fetch or resolve targets.
"""

import re
from typing import Optional
from urllib.parse import urlsplit

from shortlink.core.exceptions import InvalidURLError

MAX_URL_LENGTH = 2048

SHORT_CODE_LENGTH = 8

_SHORT_CODE_RE = re.compile(r"[0-9a-zA-Z]{%d}" % SHORT_CODE_LENGTH)
_FORBIDDEN_CHARS_RE = re.compile(r"[\s\x00-\x1f\x7f]")


def validate_url(url: str) -> str:
    """
    Validate that ``url`` is a parseable absolute URL.

    Args:
        url: The URL string to validate

    Returns:
        The URL unchanged

    Raises:
        InvalidURLError: If the URL is empty, too long, or cannot be parsed
    """
    if not url or not isinstance(url, str):
        raise InvalidURLError(str(url), reason="URL is empty")

    if len(url) > MAX_URL_LENGTH:
        raise InvalidURLError(
            url[:64] + "...",
            reason=f"URL is longer than {MAX_URL_LENGTH} characters"
        )

    if _FORBIDDEN_CHARS_RE.search(url):
        raise InvalidURLError(url, reason="URL contains whitespace or control characters")

    try:
        result = urlsplit(url)
        # Accessing .port validates it; urlsplit alone does not.
        result.port
    except ValueError as e:
        raise InvalidURLError(url, reason=str(e)) from e

    if not result.scheme:
        raise InvalidURLError(url, reason="URL has no scheme")
    if not result.netloc or not result.hostname:
        raise InvalidURLError(url, reason="URL has no host")

    return url


def is_valid_url(url: str) -> bool:
    """Predicate form of :func:`validate_url`."""
    try:
        validate_url(url)
    except InvalidURLError:
        return False
    return True


def sanitize_short_code(short_code: str) -> Optional[str]:
    """
    Sanitize and validate short code format.

    Issued codes are always exactly SHORT_CODE_LENGTH base62 characters, so
    anything else can be rejected without consulting the store.

    Args:
        short_code: The short code taken from the request path

    Returns:
        The short code if well formed, None otherwise
    """
    if not short_code or not isinstance(short_code, str):
        return None

    if not _SHORT_CODE_RE.fullmatch(short_code):
        return None

    return short_code
