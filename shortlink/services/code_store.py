"""
Code Store

Holds the mapping from short codes to target URLs for the lifetime of the
process and generates new codes.

Design:
- Random codes: 8 independent draws from [a-zA-Z0-9], 62^8 possible codes
- Collisions are retried with a fresh draw until a free code is found
- A single lock serializes every read and write of the mapping, so the
  uniqueness check and the insert in create() happen as one step
- The random source is injected, tests pass a scripted one
"""

import string
import random
import threading
from typing import Dict, Optional, Protocol, Sequence

from shortlink.core.exceptions import ShortCodeNotFoundError
from shortlink.core.logging_config import get_logger
from shortlink.core.validators import SHORT_CODE_LENGTH, validate_url

logger = get_logger(__name__)

ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


class RandomSource(Protocol):
    """Anything exposing ``choice`` the way ``random.Random`` does."""

    def choice(self, seq: Sequence[str]) -> str:
        ...


class CodeStore:
    """
    Thread-safe in-memory store of short code -> target URL mappings.

    The underlying dict is never handed out; callers go through create()
    and resolve() only. Mappings are never updated or removed.
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        code_length: int = SHORT_CODE_LENGTH,
    ):
        """
        Initialize an empty store.

        Args:
            rng: Random source used to draw code characters
                (default: ``random.SystemRandom()``)
            code_length: Number of characters per code (default: 8)
        """
        self._rng = rng if rng is not None else random.SystemRandom()
        self._code_length = code_length
        self._mappings: Dict[str, str] = {}
        self._lock = threading.Lock()

        self._total_collisions = 0

    def _generate_code(self) -> str:
        return "".join(self._rng.choice(ALPHABET) for _ in range(self._code_length))

    def create(self, target: str) -> str:
        """
        Store ``target`` under a newly generated code.

        Args:
            target: The URL to shorten

        Returns:
            The new short code

        Raises:
            InvalidURLError: If ``target`` is not a parseable URL
        """
        validate_url(target)

        with self._lock:
            code = self._generate_code()
            while code in self._mappings:
                self._total_collisions += 1
                logger.warning("code_collision code=%s", code)
                code = self._generate_code()
            self._mappings[code] = target

        logger.info("shorten_created code=%s url=%s", code, target)
        return code

    def resolve(self, code: str) -> str:
        """
        Look up the target stored under ``code``.

        Raises:
            ShortCodeNotFoundError: If the code was never issued
        """
        with self._lock:
            target = self._mappings.get(code)

        if target is None:
            logger.info("redirect_not_found code=%s", code)
            raise ShortCodeNotFoundError(code)
        return target

    def __len__(self) -> int:
        with self._lock:
            return len(self._mappings)

    def get_stats(self) -> dict:
        """Store statistics for monitoring."""
        with self._lock:
            return {
                "mappings": len(self._mappings),
                "total_collisions": self._total_collisions,
            }
