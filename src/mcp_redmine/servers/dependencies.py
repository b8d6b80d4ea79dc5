"""Dependency provider for RedmineFetcher with context awareness.

Provides get_redmine_fetcher for use in tool functions.
"""

from __future__ import annotations

import dataclasses
import logging

from fastmcp import Context
from fastmcp.server.dependencies import get_http_request
from starlette.requests import Request

from mcp_redmine.redmine import RedmineConfig, RedmineFetcher
from mcp_redmine.servers.context import MainAppContext
from mcp_redmine.utils.logging import mask_sensitive

logger = logging.getLogger("mcp-redmine.servers.dependencies")


def _get_app_context(ctx: Context) -> MainAppContext | None:
    lifespan_ctx_dict = ctx.request_context.lifespan_context  # type: ignore
    return (
        lifespan_ctx_dict.get("app_lifespan_context")
        if isinstance(lifespan_ctx_dict, dict)
        else None
    )


def _create_user_config_for_fetcher(
    base_config: RedmineConfig, api_key: str
) -> RedmineConfig:
    """Copy the global configuration with a caller-supplied API key.

    Args:
        base_config: The global RedmineConfig (URL, TLS, timeout, proxies).
        api_key: The API key sent by the caller.

    Returns:
        RedmineConfig with the caller's API key.

    Raises:
        ValueError: If the API key is empty.
    """
    if not api_key:
        raise ValueError("User Redmine API key found in request but is empty.")
    return dataclasses.replace(base_config, api_key=api_key)


async def get_redmine_fetcher(ctx: Context) -> RedmineFetcher:
    """Returns a RedmineFetcher instance appropriate for the current request context.

    Over HTTP transports a per-request ``X-Redmine-API-Key`` header (stored
    on ``request.state`` by the middleware) takes precedence over the
    configured key. Everything else comes from the global configuration.

    Args:
        ctx: The FastMCP context.

    Returns:
        RedmineFetcher instance for the current user or global config.

    Raises:
        ValueError: If configuration is not available. When loading it failed
            at startup, the message carries the reason.
    """
    app_lifespan_ctx = _get_app_context(ctx)
    base_config = app_lifespan_ctx.full_redmine_config if app_lifespan_ctx else None

    try:
        request: Request = get_http_request()
        user_api_key = getattr(request.state, "user_redmine_api_key", None)
        if user_api_key:
            if base_config is None:
                raise ValueError(
                    "Redmine global configuration (URL) is not available from lifespan context."
                )
            logger.debug(
                f"get_redmine_fetcher: Using per-request API key {mask_sensitive(user_api_key)}"
            )
            return RedmineFetcher(
                config=_create_user_config_for_fetcher(base_config, user_api_key)
            )
    except RuntimeError:
        logger.debug("Not in an HTTP request context. Using global RedmineFetcher.")

    if base_config is not None:
        return RedmineFetcher(config=base_config)
    logger.error("Redmine configuration could not be resolved.")
    if app_lifespan_ctx is not None and app_lifespan_ctx.config_error:
        raise ValueError(
            f"Redmine client not available. Invalid configuration: {app_lifespan_ctx.config_error}"
        )
    raise ValueError(
        "Redmine client not available. Ensure REDMINE_URL and REDMINE_API_KEY are configured."
    )
