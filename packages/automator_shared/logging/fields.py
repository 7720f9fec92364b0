"""Canonical logging field names shared by every component.

Keeping names centralized prevents drift between the HTTP layer, services,
and any downstream log processing.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Envelope/correlation fields.
TRACE_ID = "trace_id"
ENVELOPE_ID = "envelope_id"
SOURCE = "source"
PRINCIPAL = "principal"

# HTTP request fields.
REQUEST_ID = "request_id"
HTTP_METHOD = "http_method"
HTTP_PATH = "http_path"
STATUS_CODE = "status_code"
HTTP_REQUEST_EVENT = "http_request"

# Public API invocation fields.
COMPONENT_ID = "component_id"
API_NAME = "api_name"
PUBLIC_API_INVOCATION_EVENT = "public_api_invocation"
PUBLIC_API_COMPLETION_EVENT = "public_api_completion"
PUBLIC_API_INSTRUMENTATION_FAILURE_EVENT = "public_api_instrumentation_failure"
SUCCESS = "success"
DURATION_MS = "duration_ms"
ERRORS = "errors"
STAGE = "stage"
CONCERN = "concern"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
