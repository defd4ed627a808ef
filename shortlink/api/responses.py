"""
Response Helpers

Encodes response envelopes for the JSON routes. Failures while writing to
the client are handled once for the whole app by WriteGuardMiddleware.
"""

from pydantic_core import PydanticSerializationError
from starlette.responses import RedirectResponse, Response

from shortlink.api.schemas import Envelope
from shortlink.core.exceptions import ResponseSerializationError
from shortlink.core.logging_config import get_logger

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "something went wrong"


class EnvelopeResponse(Response):
    media_type = "application/json"


class PermanentRedirectResponse(RedirectResponse):

    def __init__(self, url: str, **kwargs):
        super().__init__(url, status_code=308, **kwargs)


def encode_envelope(envelope: Envelope) -> bytes:
    """
    Encode an envelope, leaving out unset fields.

    Raises:
        ResponseSerializationError: If the payload is not JSON serializable
    """
    try:
        return envelope.model_dump_json(exclude_none=True).encode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise ResponseSerializationError(str(e), original_error=e) from e


def send_json(envelope: Envelope, status_code: int) -> Response:
    """
    Build a JSON response for ``envelope``.

    An envelope that cannot be encoded is logged and replaced by a generic
    500 so that no internal detail reaches the client.
    """
    try:
        body = encode_envelope(envelope)
    except ResponseSerializationError:
        logger.exception("failed to marshal json data")
        body = encode_envelope(Envelope(error=GENERIC_ERROR_MESSAGE))
        status_code = 500
    return EnvelopeResponse(content=body, status_code=status_code)
