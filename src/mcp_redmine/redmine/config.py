"""Configuration module for Redmine API interactions."""

import logging
import os
from dataclasses import dataclass

from .constants import DEFAULT_TIMEOUT

logger = logging.getLogger("mcp-redmine.redmine.config")


def _parse_positive_int(name: str, raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    try:
        value = int(raw)
    except ValueError:
        error_msg = f"{name} must be a valid number if provided"
        raise ValueError(error_msg) from None
    if value <= 0:
        error_msg = f"{name} must be a positive integer"
        raise ValueError(error_msg)
    return value


def _parse_timeout(raw: str | None) -> float:
    if raw is None or raw.strip() == "":
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        error_msg = "REDMINE_TIMEOUT must be a number of seconds"
        raise ValueError(error_msg) from None
    if value <= 0:
        error_msg = "REDMINE_TIMEOUT must be greater than zero"
        raise ValueError(error_msg)
    return value


@dataclass(frozen=True)
class RedmineConfig:
    """Redmine API configuration.

    Built once at startup and passed into every client. Instances are frozen;
    per-request variants are created with ``dataclasses.replace``.
    """

    url: str  # Base URL of the Redmine instance
    api_key: str  # REST API key sent as X-Redmine-API-Key
    timeout: float = DEFAULT_TIMEOUT  # Seconds before a request is abandoned
    ssl_verify: bool = True  # Whether to verify SSL certificates
    default_project_id: int | None = None  # Fallback project for create_issue
    http_proxy: str | None = None  # HTTP proxy URL
    https_proxy: str | None = None  # HTTPS proxy URL

    @property
    def base_url(self) -> str:
        """The configured URL with exactly one trailing slash."""
        return self.url if self.url.endswith("/") else f"{self.url}/"

    @classmethod
    def from_env(cls) -> "RedmineConfig":
        """Create configuration from environment variables.

        Returns:
            RedmineConfig with values from environment variables

        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        url = os.getenv("REDMINE_URL")
        api_key = os.getenv("REDMINE_API_KEY")
        if not url or not api_key:
            error_msg = "Missing required REDMINE_URL or REDMINE_API_KEY environment variable"
            raise ValueError(error_msg)

        timeout = _parse_timeout(os.getenv("REDMINE_TIMEOUT"))

        ssl_verify_env = os.getenv("REDMINE_SSL_VERIFY", "true").lower()
        ssl_verify = ssl_verify_env not in ("false", "0", "no")

        default_project_id = _parse_positive_int(
            "REDMINE_DEFAULT_PROJECT_ID", os.getenv("REDMINE_DEFAULT_PROJECT_ID")
        )

        http_proxy = os.getenv("REDMINE_HTTP_PROXY", os.getenv("HTTP_PROXY"))
        https_proxy = os.getenv("REDMINE_HTTPS_PROXY", os.getenv("HTTPS_PROXY"))

        return cls(
            url=url,
            api_key=api_key,
            timeout=timeout,
            ssl_verify=ssl_verify,
            default_project_id=default_project_id,
            http_proxy=http_proxy,
            https_proxy=https_proxy,
        )

    def is_auth_configured(self) -> bool:
        """Check if the configuration is complete enough to make API calls."""
        if not self.url or not self.api_key:
            logger.warning("Redmine URL or API key is empty in RedmineConfig")
            return False
        return True
