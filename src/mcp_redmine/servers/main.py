"""Main FastMCP server setup for Redmine integration."""

import hmac
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Literal

from fastmcp import FastMCP
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from mcp_redmine.redmine.config import RedmineConfig
from mcp_redmine.redmine.constants import API_KEY_HEADER
from mcp_redmine.utils.environment import is_redmine_configured
from mcp_redmine.utils.io import is_read_only_mode
from mcp_redmine.utils.logging import log_config_param, mask_sensitive

from .context import MainAppContext

logger = logging.getLogger("mcp-redmine.server.main")

HEALTH_CHECK_PATH = "/healthz"
MCP_API_KEY_HEADER = "X-MCP-API-Key"


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    logger.info("Main Redmine MCP server lifespan starting...")
    read_only = is_read_only_mode()

    loaded_redmine_config: RedmineConfig | None = None
    config_error: str | None = None
    if is_redmine_configured():
        try:
            redmine_config = RedmineConfig.from_env()
            if redmine_config.is_auth_configured():
                loaded_redmine_config = redmine_config
                log_config_param(logger, "URL", redmine_config.url)
                log_config_param(
                    logger, "API key", redmine_config.api_key, sensitive=True
                )
                log_config_param(
                    logger,
                    "default project id",
                    str(redmine_config.default_project_id)
                    if redmine_config.default_project_id
                    else None,
                )
            else:
                logger.warning(
                    "Redmine URL found, but authentication is not fully configured. Redmine tools will be unavailable."
                )
        except Exception as e:
            config_error = str(e)
            logger.error(f"Failed to load Redmine configuration: {e}", exc_info=True)
    else:
        logger.warning(
            "REDMINE_URL and REDMINE_API_KEY are required. Redmine tools will report the tracker as unavailable."
        )

    app_context = MainAppContext(
        full_redmine_config=loaded_redmine_config,
        read_only=read_only,
        config_error=config_error,
    )
    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
    yield {"app_lifespan_context": app_context}
    logger.info("Main Redmine MCP server lifespan shutting down.")


class RedmineMCP(FastMCP[MainAppContext]):
    """Custom FastMCP server class that installs request authentication on HTTP transports."""

    def http_app(
        self,
        path: str | None = None,
        middleware: list[Middleware] | None = None,
        transport: Literal["streamable-http", "sse"] = "streamable-http",
        **kwargs: Any,
    ) -> "Starlette":
        auth_mw = Middleware(RequestAuthMiddleware, api_key=os.getenv("MCP_API_KEY"))
        final_middleware_list = [auth_mw]
        if middleware:
            final_middleware_list.extend(middleware)
        return super().http_app(
            path=path, middleware=final_middleware_list, transport=transport, **kwargs
        )


def _extract_mcp_api_key(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip()
    header_key = request.headers.get(MCP_API_KEY_HEADER)
    return header_key.strip() if header_key else None


class RequestAuthMiddleware(BaseHTTPMiddleware):
    """Middleware guarding the HTTP transports.

    When a server API key is configured, every request except the health check
    must present it as ``Authorization: Bearer <key>`` or ``X-MCP-API-Key``.
    A caller may also send ``X-Redmine-API-Key`` to act as another Redmine
    user; the key is stored on ``request.state`` for the fetcher dependency.
    """

    def __init__(self, app: Any, api_key: str | None = None) -> None:
        super().__init__(app)
        self.api_key = api_key or None
        if not self.api_key:
            logger.warning(
                "MCP_API_KEY is not set. HTTP transport requests will not be authenticated."
            )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_path = request.url.path.rstrip("/")
        if request_path == HEALTH_CHECK_PATH:
            return await call_next(request)

        if self.api_key:
            supplied_key = _extract_mcp_api_key(request)
            if not supplied_key or not hmac.compare_digest(
                supplied_key.encode(), self.api_key.encode()
            ):
                logger.warning(
                    f"Rejected request to {request.url.path}: invalid MCP API key {mask_sensitive(supplied_key)}"
                )
                return JSONResponse(
                    {"error": "Unauthorized: missing or invalid MCP API key"},
                    status_code=401,
                )

        user_redmine_key = request.headers.get(API_KEY_HEADER)
        if user_redmine_key and user_redmine_key.strip():
            request.state.user_redmine_api_key = user_redmine_key.strip()
            logger.debug(
                f"RequestAuthMiddleware: per-request Redmine API key {mask_sensitive(user_redmine_key.strip())}"
            )

        return await call_next(request)


main_mcp = RedmineMCP(
    name="Redmine MCP",
    instructions="Provides tools for reading and updating issues in a Redmine issue tracker.",
    lifespan=main_lifespan,
)


@main_mcp.custom_route(HEALTH_CHECK_PATH, methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)
