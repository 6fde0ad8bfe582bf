"""Sensitive data sanitization for logging.

Recursively redacts sensitive fields from data structures before logging.
"""

from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from athey.observability.constants import (
    REDACTED_VALUE,
    SENSITIVE_FIELD_PATTERNS,
    SENSITIVE_FIELDS,
    SENSITIVE_QUERY_PARAMS,
)


def _is_sensitive_field(field_name: str) -> bool:
    field_lower = field_name.lower()

    # Check exact matches first (faster)
    if field_lower in SENSITIVE_FIELDS:
        return True

    return any(pattern in field_lower for pattern in SENSITIVE_FIELD_PATTERNS)


def sanitize(data: Any, max_depth: int = 10) -> Any:
    """Recursively sanitize sensitive data from a structure.

    Args:
        data: The data to sanitize (dict, list, or scalar).
        max_depth: Maximum recursion depth to prevent infinite loops.

    Returns:
        Sanitized copy of the data with sensitive fields redacted.
    """
    if max_depth <= 0:
        return REDACTED_VALUE

    if isinstance(data, dict):
        return {
            k: REDACTED_VALUE if _is_sensitive_field(k) else sanitize(v, max_depth - 1)
            for k, v in data.items()
        }

    if isinstance(data, list):
        return [sanitize(item, max_depth - 1) for item in data]

    if isinstance(data, tuple):
        return tuple(sanitize(item, max_depth - 1) for item in data)

    return data


def sanitize_headers(headers: dict[str, str]) -> dict[str, str]:
    """Sanitize HTTP headers, redacting sensitive ones."""
    sensitive_headers = {"authorization", "cookie", "x-api-key", "x-auth-token"}

    return {k: REDACTED_VALUE if k.lower() in sensitive_headers else v for k, v in headers.items()}


def sanitize_url(url: str) -> str:
    """Redact credential values from a URL before it is logged.

    Handles regular query strings as well as N2YO's ``/...&apiKey=...`` form,
    where the credential is appended to the path.
    """
    parts = urlsplit(url)
    path = parts.path
    if "&" in path:
        head, _, tail = path.partition("&")
        path = f"{head}&{_redact_query(tail)}"
    return urlunsplit(parts._replace(path=path, query=_redact_query(parts.query)))


def _redact_query(query: str) -> str:
    if not query:
        return query
    pairs = [
        (k, REDACTED_VALUE if k.lower() in SENSITIVE_QUERY_PARAMS else v)
        for k, v in parse_qsl(query, keep_blank_values=True)
    ]
    return urlencode(pairs, safe="[]")


def truncate_body(body: Any, max_length: int = 1000) -> Any:
    """Truncate request/response body for logging."""
    if isinstance(body, str) and len(body) > max_length:
        return body[:max_length] + f"... [truncated, {len(body)} total bytes]"

    if isinstance(body, bytes) and len(body) > max_length:
        return f"[binary data, {len(body)} bytes]"

    if isinstance(body, dict):
        return {k: truncate_body(v, max_length) for k, v in body.items()}

    if isinstance(body, list):
        if len(body) > 100:
            return [truncate_body(item, max_length) for item in body[:100]] + [
                f"... [{len(body) - 100} more items]"
            ]
        return [truncate_body(item, max_length) for item in body]

    return body
