"""Base client module for Redmine API interactions."""

import json
import logging
from typing import Any, Literal

import requests
from requests import Session

from mcp_redmine.exceptions import (
    MCPRedmineAuthenticationError,
    MCPRedmineConnectionError,
    MCPRedmineHTTPError,
)
from mcp_redmine.utils.ssl import configure_ssl_verification

from .config import RedmineConfig
from .constants import API_KEY_HEADER, JSON_CONTENT_TYPE

logger = logging.getLogger("mcp-redmine")

HttpMethod = Literal["GET", "POST", "PUT"]


class RedmineClient:
    """Base client for Redmine API interactions."""

    config: RedmineConfig
    session: Session

    def __init__(self, config: RedmineConfig | None = None) -> None:
        """Initialize the Redmine client with configuration options.

        Args:
            config: Optional configuration object (will use env vars if not provided)

        Raises:
            ValueError: If configuration is invalid or required credentials are missing
        """
        self.config = config or RedmineConfig.from_env()

        self.session = Session()
        self.session.headers.update(
            {
                API_KEY_HEADER: self.config.api_key,
                "Content-Type": JSON_CONTENT_TYPE,
            }
        )

        proxies = {}
        if self.config.http_proxy:
            proxies["http"] = self.config.http_proxy
        if self.config.https_proxy:
            proxies["https"] = self.config.https_proxy
        if proxies:
            self.session.proxies.update(proxies)

        configure_ssl_verification(
            service_name="Redmine",
            url=self.config.url,
            session=self.session,
            ssl_verify=self.config.ssl_verify,
        )

    def _request(
        self,
        method: HttpMethod,
        endpoint: str,
        data: Any = None,
        headers: dict[str, str] | None = None,
        raw_body: bool = False,
    ) -> Any:
        """
        Send one request to Redmine and decode the response.

        Args:
            method: The HTTP method
            endpoint: Path relative to the base URL, including any query string
            data: Payload; JSON-encoded unless raw_body is set
            headers: Extra headers merged over the session defaults
            raw_body: Send data as-is instead of JSON-encoding it

        Returns:
            The decoded JSON document when Redmine answers with a JSON body,
            otherwise the response text

        Raises:
            MCPRedmineAuthenticationError: If Redmine answers 401 or 403
            MCPRedmineHTTPError: If Redmine answers with any other non-2xx status
            MCPRedmineConnectionError: If the request times out or cannot connect
        """
        url = f"{self.config.base_url}{endpoint}"
        logger.debug(f"{method} request to endpoint: {endpoint}")

        if data is None:
            body = None
        elif raw_body:
            body = data
        else:
            body = json.dumps(data)

        try:
            response = self.session.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"API request failed: {url}: {e}")
            raise MCPRedmineConnectionError(
                f"Request to {url} failed: {e}"
            ) from e

        if not response.ok:
            logger.error(f"API request failed: {url}: HTTP {response.status_code}")
            if response.status_code in (401, 403):
                raise MCPRedmineAuthenticationError(
                    response.status_code, response.text
                )
            raise MCPRedmineHTTPError(response.status_code, response.text)

        content_type = response.headers.get("content-type", "")
        if JSON_CONTENT_TYPE in content_type and response.content:
            return response.json()
        return response.text
