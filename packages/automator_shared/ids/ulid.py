"""ULID generation helpers.

Record identifiers are canonical 26-character Crockford Base32 ULID strings so
they sort by creation time and stay URL-safe in resource paths.
"""

from __future__ import annotations

import secrets
import time

ULID_STR_LENGTH = 26

_ULID_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
_ULID_CHARS = frozenset(_ULID_ALPHABET)


def generate_ulid_str(*, timestamp_ms: int | None = None) -> str:
    """Generate a new ULID in canonical 26-char string format.

    Timestamp occupies the high 48 bits (milliseconds since epoch), and the
    remaining 80 bits are cryptographically secure random entropy.
    """
    ts_ms = int(time.time() * 1000) if timestamp_ms is None else int(timestamp_ms)
    if ts_ms < 0 or ts_ms >= (1 << 48):
        raise ValueError("timestamp_ms out of ULID 48-bit range")

    entropy = int.from_bytes(secrets.token_bytes(10), byteorder="big", signed=False)
    number = (ts_ms << 80) | entropy
    chars: list[str] = []
    for _ in range(ULID_STR_LENGTH):
        number, remainder = divmod(number, 32)
        chars.append(_ULID_ALPHABET[remainder])
    return "".join(reversed(chars))


def is_ulid_str(value: object) -> bool:
    """Return whether one value is a canonical uppercase ULID string."""
    if not isinstance(value, str) or len(value) != ULID_STR_LENGTH:
        return False
    # 26 base32 chars encode 130 bits; canonical ULIDs leave the top two unset.
    return value[0] in "01234567" and all(char in _ULID_CHARS for char in value)
