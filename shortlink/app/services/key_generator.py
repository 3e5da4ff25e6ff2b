"""
Link Key Generator

Produces short, URL-safe keys that are unique among existing links.
"""

import logging
import re
import string
from typing import Iterable, Optional

from libs.result import Error, Result, Return
from shortlink.app.repositories.link_repository import ILinkRepository
from shortlink.app.services.random_source import RandomSource
from shortlink.domain.entities import ErrorCode

logger = logging.getLogger(__name__)

DEFAULT_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


class KeyGenerator:
    """
    Collision-resistant key generation.

    Business Rules:
    - A caller-supplied key skips random drawing but not the uniqueness check
    - A colliding caller key fails at once with KEY_ALREADY_EXISTS (no retry)
    - Random keys are retried up to max_attempts draws in total,
      then KEY_GENERATION_EXHAUSTED
    - Characters are drawn by rejection sampling (no modulo bias)
    - Reserved keys are never handed out
    """

    def __init__(
        self,
        links: ILinkRepository,
        random_source: RandomSource,
        length: int = 8,
        alphabet: str = DEFAULT_ALPHABET,
        max_attempts: int = 10,
        reserved: Optional[Iterable[str]] = None,
    ):
        if length < 1:
            raise ValueError("Key length must be at least 1")
        # Duplicate characters would skew the distribution
        alphabet = "".join(dict.fromkeys(alphabet))
        if not alphabet:
            raise ValueError("Key alphabet cannot be empty")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.links = links
        self.random_source = random_source
        self.length = length
        self.alphabet = alphabet
        self.max_attempts = max_attempts
        self.reserved = frozenset(reserved or ())

        # Smallest bit mask covering every alphabet index
        self._bits = max(1, (len(alphabet) - 1).bit_length())
        self._mask = (1 << self._bits) - 1
        self._byte_count = (self._bits + 7) // 8

    async def generate(self, override: Optional[str] = None) -> Result[str]:
        """
        Generate a key unique within the link namespace.

        Args:
            override: Caller-chosen key; random generation is used when empty

        Returns:
            Result with the key, or Error INVALID_KEY / KEY_ALREADY_EXISTS /
            KEY_GENERATION_EXHAUSTED
        """
        if override:
            return await self._check_override(override)

        candidate = None
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.draw()
            if candidate in self.reserved:
                logger.debug(f"Drew reserved key on attempt {attempt}")
                continue
            if not await self.links.exists(candidate):
                return Return.ok(candidate)
            logger.debug(f"Key collision on attempt {attempt}/{self.max_attempts}")

        logger.error(
            f"Failed to generate a unique link key after {self.max_attempts} attempts "
            f"(length={self.length}, alphabet size={len(self.alphabet)}, "
            f"last candidate='{candidate}')"
        )
        return Return.err(
            Error(
                ErrorCode.KEY_GENERATION_EXHAUSTED,
                f"Could not generate a unique key in {self.max_attempts} attempts",
            )
        )

    def draw(self) -> str:
        """Draw one random candidate of `length` characters"""
        return "".join(self.alphabet[self._random_index()] for _ in range(self.length))

    def validate_override(self, key: str) -> Optional[Error]:
        if not KEY_PATTERN.fullmatch(key):
            return Error(
                ErrorCode.INVALID_KEY,
                "Key must be 1-64 characters of letters, digits, '-' or '_'",
            )
        if key in self.reserved:
            return Error(ErrorCode.INVALID_KEY, f"Key '{key}' is reserved")
        return None

    async def _check_override(self, key: str) -> Result[str]:
        error = self.validate_override(key)
        if error is not None:
            return Return.err(error)
        if await self.links.exists(key):
            return Return.err(
                Error(ErrorCode.KEY_ALREADY_EXISTS, f"Key '{key}' already exists")
            )
        return Return.ok(key)

    def _random_index(self) -> int:
        size = len(self.alphabet)
        while True:
            value = int.from_bytes(self.random_source.token_bytes(self._byte_count), "big")
            value &= self._mask
            if value < size:
                return value
