"""Pydantic request-validation models for Calendar Authority Service API."""

from __future__ import annotations

import re

from pydantic import Field, StrictBool, ValidationInfo, field_validator

from packages.automator_shared.validation import (
    QueryModel,
    RangeEnd,
    RangeStart,
    RequestModel,
    Timestamp,
)

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_NAMED_COLOR_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9-]{0,31}$")


def _check_color(value: str | None) -> str | None:
    """Accept ``#rgb``/``#rrggbb``/``#rrggbbaa`` hex codes or a named token."""
    if value is None:
        return None
    if _HEX_COLOR_RE.match(value) or _NAMED_COLOR_RE.match(value):
        return value
    raise ValueError("color must be a hex code like #3b82f6 or a named color")


class CreateEventRequest(RequestModel):
    """Validated create-event request shape."""

    title: str = Field(min_length=1)
    description: str | None = None
    start_time: Timestamp
    end_time: Timestamp
    all_day: StrictBool = False
    color: str | None = None

    @field_validator("color")
    @classmethod
    def _validate_color(cls, value: str | None) -> str | None:
        return _check_color(value)


class UpdateEventRequest(RequestModel):
    """Validated partial update; ``description`` and ``color`` accept ``null``."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    start_time: Timestamp | None = None
    end_time: Timestamp | None = None
    all_day: StrictBool | None = None
    color: str | None = None

    @field_validator("title", "start_time", "end_time", "all_day", mode="before")
    @classmethod
    def _reject_explicit_null(cls, value: object, info: ValidationInfo) -> object:
        """Reject ``null`` for fields that cannot be cleared."""
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @field_validator("color")
    @classmethod
    def _validate_color(cls, value: str | None) -> str | None:
        return _check_color(value)


class ListEventsRequest(QueryModel):
    """Validated list-events query; date-only bounds cover whole UTC days."""

    start_date: RangeStart | None = None
    end_date: RangeEnd | None = None
