"""Shared ULID primitives for record identifiers."""

from packages.automator_shared.ids.ulid import (
    ULID_STR_LENGTH,
    generate_ulid_str,
    is_ulid_str,
)

__all__ = [
    "ULID_STR_LENGTH",
    "generate_ulid_str",
    "is_ulid_str",
]
