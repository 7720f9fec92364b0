"""Machine-readable error codes emitted by Task Automator services.

Codes travel in ``details[].code`` of 400 responses; the remaining codes stay
server-side in logs and envelope errors.
"""

# Validation
INVALID_ARGUMENT = "INVALID_ARGUMENT"
MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

# Not found
RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

# Dependency / external system
DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"
DEPENDENCY_UNAVAILABLE = "DEPENDENCY_UNAVAILABLE"
CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"

# Internal
INTERNAL_ERROR = "INTERNAL_ERROR"
UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"
