"""Readable descriptions for vendor API HTTP failures."""

from __future__ import annotations

HTTP_ERROR_DESCRIPTIONS: dict[int, str] = {
    400: "Bad Request - Invalid payload or parameters",
    401: "Unauthorized - Token expired or invalid credentials",
    403: "Forbidden - Access denied or insufficient permissions",
    404: "Not Found - Webhook URL is invalid or deleted",
    405: "Method Not Allowed - Incorrect HTTP method",
    408: "Request Timeout - Server took too long to respond",
    429: "Too Many Requests - Rate limited, slow down",
    500: "Internal Server Error - Server-side issue",
    502: "Bad Gateway - Upstream server error",
    503: "Service Unavailable - Server is down or overloaded",
    504: "Gateway Timeout - Server did not respond in time",
}

_MAX_DETAILS = 200


def describe_http_error(status: int, response_text: str = "") -> str:
    """Return ``[status] description`` plus a truncated response body."""
    description = HTTP_ERROR_DESCRIPTIONS.get(status, f"Unknown Error (HTTP {status})")
    summary = f"[{status}] {description}"
    if response_text and response_text.strip():
        return f"{summary}\nDetails: {response_text[:_MAX_DETAILS]}"
    return summary
