"""Tests for shared ULID generation and validation semantics."""

from __future__ import annotations

import pytest

from packages.automator_shared.ids import (
    ULID_STR_LENGTH,
    generate_ulid_str,
    is_ulid_str,
)


def test_generated_ulids_are_canonical() -> None:
    """Generated ids are 26 uppercase Crockford characters."""
    value = generate_ulid_str()

    assert len(value) == ULID_STR_LENGTH
    assert is_ulid_str(value)


def test_ulid_string_order_follows_timestamp() -> None:
    """Earlier timestamps must sort before later ones."""
    earlier = generate_ulid_str(timestamp_ms=1_700_000_000_000)
    later = generate_ulid_str(timestamp_ms=1_700_000_000_001)

    assert earlier < later


def test_ulid_rejects_out_of_range_timestamp() -> None:
    with pytest.raises(ValueError):
        generate_ulid_str(timestamp_ms=-1)


@pytest.mark.parametrize(
    "value",
    ["", "not-a-ulid", "8" + "0" * 25, "0" * 25 + "I", "0" * 25 + "u", None, 42],
)
def test_is_ulid_str_rejects_malformed_values(value) -> None:
    assert is_ulid_str(value) is False
