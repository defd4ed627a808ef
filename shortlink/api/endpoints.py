"""
FastAPI Endpoints for URL Shortener Service

This module defines the REST API endpoints with minimal logic.
Endpoints only handle:
- Request decoding (Pydantic models)
- Error handling and HTTP responses
- Delegating to the code store

Routes:
- POST /api/shorten: store a URL, answer with its code
- GET /{code}: permanent redirect to the stored URL
"""

from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError
from starlette.responses import PlainTextResponse, Response

from shortlink.api.responses import PermanentRedirectResponse, send_json
from shortlink.api.schemas import Envelope, ShortenRequest
from shortlink.core.exceptions import (
    InvalidBodyError,
    InvalidURLError,
    ShortCodeNotFoundError,
)
from shortlink.core.logging_config import get_logger
from shortlink.core.validators import sanitize_short_code, validate_url
from shortlink.services.code_store import CodeStore

logger = get_logger(__name__)

router = APIRouter()

HTTP_422_INVALID_BODY = 422


def get_code_store(request: Request) -> CodeStore:
    """Dependency returning the store owned by the application."""
    return request.app.state.code_store


async def decode_shorten_request(request: Request) -> ShortenRequest:
    """
    Decode the shorten body as JSON whatever Content-Type the client sent.

    Raises:
        InvalidBodyError: If the body is not JSON or does not match ShortenRequest
    """
    raw = await request.body()
    try:
        return ShortenRequest.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidBodyError(reason=str(e)) from e


@router.post(
    "/api/shorten",
    status_code=status.HTTP_201_CREATED,
    summary="Create a short URL",
    description="Takes a long URL and returns an 8-character code for it",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": ShortenRequest.model_json_schema()}
            },
        }
    },
)
async def create_short_url(
    request: Request,
    store: CodeStore = Depends(get_code_store)
) -> Response:
    """
    Create a new short code for a long URL.

    Returns:
        201 with {"data": code}, 422 with {"error": "invalid body"},
        or 400 with {"error": "invalid url passed"}
    """
    try:
        body = await decode_shorten_request(request)
    except InvalidBodyError as e:
        logger.info("invalid_body reason=%s", e.reason)
        return send_json(
            Envelope(error=InvalidBodyError.public_message),
            HTTP_422_INVALID_BODY
        )

    try:
        validate_url(body.url)
    except InvalidURLError as e:
        logger.info("invalid_url url=%r reason=%s", e.url, e.reason)
        return send_json(
            Envelope(error=InvalidURLError.public_message),
            status.HTTP_400_BAD_REQUEST
        )

    code = store.create(body.url)
    return send_json(Envelope(data=code), status.HTTP_201_CREATED)


@router.get(
    "/{code}",
    status_code=status.HTTP_308_PERMANENT_REDIRECT,
    summary="Redirect to original URL",
    description="Takes a short code and permanently redirects to the original URL"
)
async def redirect_to_url(
    code: str,
    store: CodeStore = Depends(get_code_store)
) -> Response:
    """
    Redirect to the original URL for a given short code.

    Returns:
        308 to the stored URL, or 404 with a plain text body
    """
    short_code = sanitize_short_code(code)
    if short_code is None:
        logger.info("redirect_not_found code=%r reason=malformed", code)
        return PlainTextResponse(
            ShortCodeNotFoundError.public_message,
            status_code=status.HTTP_404_NOT_FOUND
        )

    try:
        target = store.resolve(short_code)
    except ShortCodeNotFoundError:
        return PlainTextResponse(
            ShortCodeNotFoundError.public_message,
            status_code=status.HTTP_404_NOT_FOUND
        )

    logger.info("redirect code=%s to=%s", short_code, target)
    return PermanentRedirectResponse(target)
