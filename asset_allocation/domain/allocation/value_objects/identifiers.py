"""Identifier generation for allocation domain entities.

Identifiers are ULIDs: 26 characters of Crockford base32 carrying a 48-bit
millisecond timestamp followed by 80 bits of randomness. They sort by creation
time as plain strings, so entities can be ordered by id without a separate
sequence.
"""

import os
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

from ...shared.exceptions import IdentifierCollisionError

CROCKFORD_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
ULID_LENGTH = 26

_TIMESTAMP_BITS = 48
_RANDOM_BITS = 80
_MAX_TIMESTAMP = (1 << _TIMESTAMP_BITS) - 1
_MAX_RANDOM = (1 << _RANDOM_BITS) - 1


def encode_crockford(value: int, length: int = ULID_LENGTH) -> str:
    chars = []
    for _ in range(length):
        chars.append(CROCKFORD_ALPHABET[value & 0x1F])
        value >>= 5
    return "".join(reversed(chars))


def ulid_timestamp_ms(identifier: str) -> int:
    """Recover the millisecond timestamp embedded in a ULID."""
    value = 0
    for char in identifier[:10]:
        value = (value << 5) | CROCKFORD_ALPHABET.index(char)
    return value


class IdentifierGenerator(ABC):
    """Produces globally unique, opaque entity identifiers."""

    @abstractmethod
    def next(self) -> str:
        pass


class UlidGenerator(IdentifierGenerator):
    """
    Monotonic ULID generator.

    Identifiers issued within the same millisecond reuse the previous random
    component incremented by one, so successive identifiers from one generator
    are strictly increasing even when the clock stalls or steps backwards.
    Exhausting the random space inside one millisecond raises
    IdentifierCollisionError; the caller may retry the whole operation.
    """

    def __init__(
        self,
        clock_ms: Callable[[], int] | None = None,
        randomness: Callable[[int], bytes] | None = None,
    ):
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._randomness = randomness or os.urandom
        self._lock = threading.Lock()
        self._last_timestamp = -1
        self._last_random = 0

    def next(self) -> str:
        with self._lock:
            timestamp = self._clock_ms()
            if timestamp > _MAX_TIMESTAMP or timestamp < 0:
                raise ValueError(f"Timestamp out of ULID range: {timestamp}")

            if timestamp <= self._last_timestamp:
                timestamp = self._last_timestamp
                random_part = self._last_random + 1
                if random_part > _MAX_RANDOM:
                    raise IdentifierCollisionError(
                        "Identifier space exhausted within one millisecond"
                    )
            else:
                random_part = int.from_bytes(self._randomness(10), "big")

            self._last_timestamp = timestamp
            self._last_random = random_part

        return encode_crockford((timestamp << _RANDOM_BITS) | random_part)
