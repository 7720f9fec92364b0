"""Error taxonomy carried by every service envelope.

Validation and not-found errors reach clients as 400 and 404 responses;
dependency and internal errors are logged and rendered opaquely as 500.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class ErrorCategory(str, Enum):
    """Error categories shared across service boundaries."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    DEPENDENCY = "dependency"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ErrorDetail:
    """Structured error object carried by envelope results."""

    code: str
    message: str
    category: ErrorCategory
    retryable: bool = False
    metadata: Mapping[str, str] = field(default_factory=dict)
