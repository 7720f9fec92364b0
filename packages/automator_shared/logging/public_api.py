"""Composable instrumentation helpers for public service API methods.

Every public service method is decorated once; concerns receive invocation and
completion hooks so structured logging (and any later observability concern)
shares one stable callsite contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from time import perf_counter
from typing import Any, Callable, Mapping, Protocol, Sequence

from . import fields
from .context import log_context


@dataclass(frozen=True)
class InvocationContext:
    """Structured metadata describing one public API invocation."""

    component_id: str
    api_name: str
    trace_id: str | None
    envelope_id: str | None
    principal: str | None
    references: Mapping[str, str]


@dataclass(frozen=True)
class CompletionContext:
    """Structured metadata describing one completed public API invocation."""

    invocation: InvocationContext
    success: bool
    duration_ms: float
    errors: list[str]


class PublicApiInstrumentationConcern(Protocol):
    """Hook contract for one public API instrumentation concern."""

    def on_invocation(self, context: InvocationContext) -> None:
        """Handle invocation-start event for one method call."""

    def on_completion(self, context: CompletionContext) -> None:
        """Handle completion event for one method call."""


class PublicApiLoggingConcern:
    """Logging concern implementation for invocation/completion events."""

    def __init__(self, *, logger: Any) -> None:
        self._logger = logger

    def on_invocation(self, context: InvocationContext) -> None:
        """Emit standardized structured invocation-start log."""
        with log_context(_invocation_log_context(context)):
            self._logger.debug("Public API invocation")

    def on_completion(self, context: CompletionContext) -> None:
        """Emit standardized structured completion log."""
        payload = _invocation_log_context(context.invocation)
        payload.update(
            {
                fields.EVENT: fields.PUBLIC_API_COMPLETION_EVENT,
                fields.SUCCESS: context.success,
                fields.DURATION_MS: context.duration_ms,
                fields.ERRORS: context.errors,
            }
        )
        with log_context(payload):
            if context.success:
                self._logger.info("Public API completion")
            else:
                self._logger.warning("Public API completion")


def public_api_instrumented(
    *,
    component_id: str,
    api_name: str | None = None,
    id_fields: tuple[str, ...] = (),
    concerns: Sequence[PublicApiInstrumentationConcern] | None = None,
    logger: Any | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorate one public API method with composable instrumentation concerns."""

    resolved_concerns: tuple[PublicApiInstrumentationConcern, ...] = tuple(
        concerns or ()
    )
    if logger is not None:
        resolved_concerns = (PublicApiLoggingConcern(logger=logger), *resolved_concerns)
    if len(resolved_concerns) == 0:
        raise ValueError("public_api_instrumented requires at least one concern")

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        method_name = api_name or func.__name__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            meta = kwargs.get("meta")
            references = {
                name: str(kwargs[name])
                for name in id_fields
                if kwargs.get(name) not in (None, "")
            }
            invocation = InvocationContext(
                component_id=component_id,
                api_name=method_name,
                trace_id=_attr_or_none(meta, "trace_id"),
                envelope_id=_attr_or_none(meta, "envelope_id"),
                principal=_attr_or_none(meta, "principal"),
                references=references,
            )
            _emit_invocation(
                concerns=resolved_concerns,
                context=invocation,
                logger=logger,
            )

            started = perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:  # noqa: BLE001
                completion = CompletionContext(
                    invocation=invocation,
                    success=False,
                    duration_ms=round((perf_counter() - started) * 1000.0, 3),
                    errors=[f"{type(exc).__name__}: {exc}"],
                )
                _emit_completion(
                    concerns=resolved_concerns,
                    context=completion,
                    logger=logger,
                )
                raise

            success, errors = _result_summary(result)
            completion = CompletionContext(
                invocation=invocation,
                success=success,
                duration_ms=round((perf_counter() - started) * 1000.0, 3),
                errors=errors,
            )
            _emit_completion(
                concerns=resolved_concerns,
                context=completion,
                logger=logger,
            )
            return result

        return wrapper

    return decorator


def _attr_or_none(obj: object | None, name: str) -> str | None:
    """Return string attribute value from object when present."""
    if obj is None:
        return None
    value = getattr(obj, name, None)
    if value in (None, ""):
        return None
    return str(value)


def _result_summary(result: object) -> tuple[bool, list[str]]:
    """Infer success and sanitized error summaries from a result value."""
    errors = _sanitize_errors(getattr(result, "errors", []))
    ok_value = getattr(result, "ok", None)
    if isinstance(ok_value, bool):
        return ok_value, errors
    return len(errors) == 0, errors


def _sanitize_errors(errors: object) -> list[str]:
    """Return safe one-line error summaries for logs."""
    if not isinstance(errors, list):
        return []
    summaries: list[str] = []
    for item in errors:
        code = getattr(item, "code", None)
        message = getattr(item, "message", None)
        if message in (None, ""):
            continue
        if code in (None, ""):
            summaries.append(str(message))
        else:
            summaries.append(f"{code}: {message}")
    return summaries


def _invocation_log_context(context: InvocationContext) -> dict[str, object]:
    """Build common structured fields for one invocation event."""
    return {
        fields.EVENT: fields.PUBLIC_API_INVOCATION_EVENT,
        fields.COMPONENT_ID: context.component_id,
        fields.API_NAME: context.api_name,
        fields.TRACE_ID: context.trace_id,
        fields.ENVELOPE_ID: context.envelope_id,
        fields.PRINCIPAL: context.principal,
        **context.references,
    }


def _emit_invocation(
    *,
    concerns: Sequence[PublicApiInstrumentationConcern],
    context: InvocationContext,
    logger: Any | None,
) -> None:
    """Dispatch invocation event to concerns with failure isolation."""
    for concern in concerns:
        try:
            concern.on_invocation(context)
        except Exception as exc:  # noqa: BLE001
            _log_concern_failure(
                logger=logger,
                stage="invocation",
                concern=type(concern).__name__,
                exc=exc,
                invocation=context,
            )


def _emit_completion(
    *,
    concerns: Sequence[PublicApiInstrumentationConcern],
    context: CompletionContext,
    logger: Any | None,
) -> None:
    """Dispatch completion event to concerns with failure isolation."""
    for concern in concerns:
        try:
            concern.on_completion(context)
        except Exception as exc:  # noqa: BLE001
            _log_concern_failure(
                logger=logger,
                stage="completion",
                concern=type(concern).__name__,
                exc=exc,
                invocation=context.invocation,
            )


def _log_concern_failure(
    *,
    logger: Any | None,
    stage: str,
    concern: str,
    exc: Exception,
    invocation: InvocationContext,
) -> None:
    """Best-effort warning log for instrumentation concern hook failures."""
    if logger is None:
        return
    with log_context(
        {
            fields.EVENT: fields.PUBLIC_API_INSTRUMENTATION_FAILURE_EVENT,
            fields.COMPONENT_ID: invocation.component_id,
            fields.API_NAME: invocation.api_name,
            fields.STAGE: stage,
            fields.CONCERN: concern,
            fields.ERRORS: [f"{type(exc).__name__}: {exc}"],
        }
    ):
        logger.warning("Public API instrumentation concern failed")
