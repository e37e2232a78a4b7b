"""
Constants for the Coach Proxy application.
"""


class ErrorMessages:
    """User-facing error messages returned in JSON error bodies."""

    MESSAGES_REQUIRED = "messages[] is required"
    USER_ID_REQUIRED = "userId query param is required"
    INVALID_SYNC_PAYLOAD = "Invalid payload: { userId, conversations[] } required"
    UPSTREAM_FAILURE = "Server error talking to OpenAI"
    UPSTREAM_TIMEOUT = "Upstream completion timed out after {timeout:g}s"
    UPSTREAM_NOT_CONFIGURED = "OPENAI_API_KEY is not configured"
    UPSTREAM_MALFORMED = "Malformed completion response from upstream"
    SERVER_ERROR = "Server error"
