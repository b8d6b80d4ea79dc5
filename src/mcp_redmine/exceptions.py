"""Exceptions raised by the Redmine client."""


class MCPRedmineError(Exception):
    """Base class for errors raised while talking to Redmine."""


class MCPRedmineHTTPError(MCPRedmineError):
    """Raised when Redmine answers with a non-2xx status code."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP {status_code}: {body}")


class MCPRedmineAuthenticationError(MCPRedmineHTTPError):
    """Raised when Redmine rejects the API key (401/403)."""


class MCPRedmineConnectionError(MCPRedmineError):
    """Raised when a request times out or the connection fails."""
