"""Shared pydantic request-validation primitives for service APIs."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Mapping, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from packages.automator_shared.errors import ErrorDetail, codes, validation_error
from packages.automator_shared.timestamps import (
    ensure_utc,
    parse_range_boundary,
    parse_timestamp,
)

TRequest = TypeVar("TRequest", bound=BaseModel)

_MISSING_ERROR_TYPES = frozenset({"missing"})


class RequestModel(BaseModel):
    """Base request model with strict shape and camelCase wire names."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class QueryModel(RequestModel):
    """Query-string model; parameters it does not declare are ignored."""

    model_config = ConfigDict(extra="ignore")


def _coerce_timestamp(value: object) -> object:
    """Accept ISO-8601 strings with timezone and already-parsed datetimes."""
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str):
        return parse_timestamp(value)
    raise ValueError("must be an ISO-8601 date-time string")


def _coerce_range_start(value: object) -> object:
    """Parse an inclusive range start given as date or date-time."""
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str):
        return parse_range_boundary(value, end_of_day=False)
    raise ValueError("must be an ISO-8601 date or date-time string")


def _coerce_range_end(value: object) -> object:
    """Parse an inclusive range end given as date or date-time."""
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str):
        return parse_range_boundary(value, end_of_day=True)
    raise ValueError("must be an ISO-8601 date or date-time string")


Timestamp = Annotated[datetime, BeforeValidator(_coerce_timestamp)]
RangeStart = Annotated[datetime, BeforeValidator(_coerce_range_start)]
RangeEnd = Annotated[datetime, BeforeValidator(_coerce_range_end)]


def validate_request(
    *,
    model: type[TRequest],
    payload: Mapping[str, Any] | object | None,
) -> tuple[TRequest | None, list[ErrorDetail]]:
    """Validate one request payload, reporting every violated field at once."""
    try:
        return model.model_validate({} if payload is None else payload), []
    except ValidationError as exc:
        return None, [_field_error(err) for err in exc.errors()]


def _field_error(err: Mapping[str, Any]) -> ErrorDetail:
    """Map one pydantic error entry into a shared validation error."""
    field = ".".join(str(part) for part in err.get("loc", ())) or "body"
    code = (
        codes.MISSING_REQUIRED_FIELD
        if err.get("type") in _MISSING_ERROR_TYPES
        else codes.INVALID_ARGUMENT
    )
    return validation_error(
        str(err.get("msg", "invalid value")),
        code=code,
        metadata={"field": field},
    )


def range_order_errors(
    *,
    start: datetime | None,
    end: datetime | None,
    field: str,
    message: str,
    strict: bool = False,
) -> list[ErrorDetail]:
    """Return one validation error when ``end`` precedes (or, strict, equals) ``start``."""
    if start is None or end is None:
        return []
    if end > start or (not strict and end == start):
        return []
    return [
        validation_error(message, code=codes.INVALID_ARGUMENT, metadata={"field": field})
    ]
