"""Constants for observability layer."""

# HTTP header for correlation ID propagation
CORRELATION_ID_HEADER = "X-Correlation-ID"

# Service identifier for logs
SERVICE_NAME = "athey-chat"


# Log event names following the pattern: {domain}.{action}.{result}
class LogEvents:
    """Standardized log event names."""

    # Chat events
    CHAT_REQUEST_STARTED = "chat.request.started"
    CHAT_REQUEST_COMPLETED = "chat.request.completed"
    CHAT_REQUEST_FAILED = "chat.request.failed"
    CHAT_REQUEST_TIMEOUT = "chat.request.timeout"

    # Context aggregation events
    CONTEXT_BUILD_STARTED = "context.build.started"
    CONTEXT_BUILD_COMPLETED = "context.build.completed"
    CONTEXT_PROVIDER_TIMEOUT = "context.provider.timeout"
    CONTEXT_PROVIDER_CRASHED = "context.provider.crashed"

    # Provider events
    PROVIDER_FETCH_COMPLETED = "provider.fetch.completed"
    PROVIDER_FETCH_FAILED = "provider.fetch.failed"
    PROVIDER_CREDENTIAL_MISSING = "provider.credential.missing"

    # Generation events
    GENERATION_STREAM_STARTED = "generation.stream.started"
    GENERATION_STREAM_COMPLETED = "generation.stream.completed"
    GENERATION_STREAM_UNAVAILABLE = "generation.stream.unavailable"
    GENERATION_STREAM_INTERRUPTED = "generation.stream.interrupted"

    # Citation parsing
    CITATIONS_MISSING = "citations.parse.missing"
    CITATIONS_MALFORMED = "citations.parse.malformed"

    # Request lifecycle events
    REQUEST_STARTED = "request.started"
    REQUEST_COMPLETED = "request.completed"
    REQUEST_FAILED = "request.failed"

    # Service lifecycle
    SERVICE_STARTED = "service.lifecycle.started"
    SERVICE_STOPPED = "service.lifecycle.stopped"
    SERVICE_CREDENTIALS_MISSING = "service.credentials.missing"


# Fields that should be redacted in logs
SENSITIVE_FIELDS = frozenset({
    # Authentication
    "password",
    "secret",
    # Tokens
    "token",
    "access_token",
    "api_key",
    "apikey",
    "bearer",
    "authorization",
    "auth",
    # Prompt content
    "system_prompt",
    "instruction",
})

# Fields to redact (case-insensitive patterns)
SENSITIVE_FIELD_PATTERNS = frozenset({
    "password",
    "secret",
    "token",
    "key",
    "credential",
    "auth",
})

# Query parameters carrying provider credentials
SENSITIVE_QUERY_PARAMS = frozenset({"apikey", "api_key", "key"})

# Redaction placeholder
REDACTED_VALUE = "[REDACTED]"
