"""
Application errors for clean API error handling.

Services raise these; the API layer maps them to HTTP responses. Use
ConfigurationError for missing settings, AuthenticationError when no credential
could be obtained, and the Downstream* errors for the knowledge-base call.
"""


class RelayError(Exception):
    """Base class for errors raised while relaying a question."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(RelayError):
    """Raised when a required setting (endpoint, project, key) is not configured."""


class AuthenticationError(RelayError):
    """Raised when the managed identity token could not be acquired in time."""


class DownstreamStatusError(RelayError):
    """Raised when the knowledge-base API answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Language service error: {status_code}")


class DownstreamTimeoutError(RelayError):
    """Raised when the knowledge-base API does not answer within the request timeout."""


class DownstreamUnavailableError(RelayError):
    """Raised when no response was received at all (DNS, connect, protocol errors)."""
