"""Utility functions and the allocator for record identifiers."""

import secrets
import string
import time
from collections.abc import Iterable
from uuid import uuid4

from loguru import logger

from event_server.constants import ID_STRATEGY_SHORT, ID_STRATEGY_UUID


def generate_short_id(length: int = 16) -> str:
    """Generate a short ID with the specified length.

    The ID consists of:
    - Current timestamp in base36 (8-10 chars)
    - Random string (remaining chars)

    Args:
        length: The length of the ID to generate (default: 16)

    Returns:
        A string containing the generated ID
    """
    timestamp = to_base36(int(time.time() * 1000))

    random_chars = string.ascii_letters + string.digits
    random_part = "".join(secrets.choice(random_chars) for _ in range(length))

    # Combine and ensure exactly the specified length
    return (timestamp + random_part)[:length].ljust(length, "0")


def generate_uuid() -> str:
    """Generate a random UUID4 in its canonical text form."""
    return str(uuid4())


def to_base36(number: int) -> str:
    """Convert a number to base36 representation.

    Args:
        number: The number to convert

    Returns:
        A string containing the base36 representation
    """
    alphabet = string.digits + string.ascii_lowercase
    base36 = ""

    while number:
        number, i = divmod(number, 36)
        base36 = alphabet[i] + base36

    return base36 or "0"


class IdAllocator:
    """Hands out opaque string identifiers that are never repeated.

    Every issued identifier is remembered; a generated value that was already
    issued or reserved is discarded and generated again. Identifiers do not
    depend on the contents of any collection.
    """

    def __init__(self, strategy: str = ID_STRATEGY_UUID, length: int = 16):
        if strategy not in (ID_STRATEGY_UUID, ID_STRATEGY_SHORT):
            raise ValueError(f"Unknown id strategy: {strategy}")
        self.strategy = strategy
        self.length = length
        self._issued: set[str] = set()

    def _generate(self) -> str:
        if self.strategy == ID_STRATEGY_SHORT:
            return generate_short_id(self.length)
        return generate_uuid()

    def new_id(self) -> str:
        """Return a fresh identifier."""
        candidate = self._generate()
        while candidate in self._issued:
            logger.trace(f"Discarding duplicate id {candidate}")
            candidate = self._generate()
        self._issued.add(candidate)
        return candidate

    def reserve(self, identifiers: Iterable[str | int]) -> None:
        """Mark existing identifiers so they are never handed out.

        Args:
            identifiers: Identifiers already present in the store, compared by string form
        """
        self._issued.update(str(identifier) for identifier in identifiers)

    def is_issued(self, identifier: str | int) -> bool:
        """Check whether an identifier was issued or reserved."""
        return str(identifier) in self._issued
