"""Public shared envelope API for Task Automator services."""

from .builders import failure, success
from .envelope import Envelope
from .meta import EnvelopeKind, EnvelopeMeta, new_meta
from .validate import validate_meta

__all__ = [
    "Envelope",
    "EnvelopeKind",
    "EnvelopeMeta",
    "failure",
    "new_meta",
    "success",
    "validate_meta",
]
