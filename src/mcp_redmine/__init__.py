import asyncio
import logging
import os
import sys
from typing import Any

import click
from dotenv import load_dotenv

from mcp_redmine.utils.logging import setup_logging

__version__ = "0.1.0"

TRANSPORTS = ("stdio", "sse", "streamable-http")
TRUTHY = ("true", "1", "yes")

# CLI option -> environment variable read by RedmineConfig and the server
OPTION_ENV_VARS = {
    "redmine_url": "REDMINE_URL",
    "redmine_api_key": "REDMINE_API_KEY",
    "redmine_timeout": "REDMINE_TIMEOUT",
    "redmine_ssl_verify": "REDMINE_SSL_VERIFY",
    "default_project_id": "REDMINE_DEFAULT_PROJECT_ID",
    "read_only": "READ_ONLY_MODE",
    "api_key": "MCP_API_KEY",
}

logger = setup_logging(
    logging.DEBUG
    if os.getenv("MCP_VERBOSE", "").lower() in TRUTHY
    else logging.WARNING
)


def _logging_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    if os.getenv("MCP_VERY_VERBOSE", "false").lower() in TRUTHY:
        return logging.DEBUG
    if os.getenv("MCP_VERBOSE", "false").lower() in TRUTHY:
        return logging.INFO
    return logging.WARNING


def _option_given(ctx: click.Context | None, name: str) -> bool:
    if ctx is None:
        return False
    return ctx.get_parameter_source(name) not in (
        click.core.ParameterSource.DEFAULT,
        click.core.ParameterSource.DEFAULT_MAP,
    )


def _env_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def _export_options(ctx: click.Context | None, options: dict[str, Any]) -> None:
    """Copy explicitly given options into the environment for RedmineConfig."""
    for option, env_var in OPTION_ENV_VARS.items():
        if _option_given(ctx, option) and options[option] is not None:
            os.environ[env_var] = _env_value(options[option])
            logger.debug(f"{env_var} set from --{option.replace('_', '-')}")


def _run_kwargs(
    ctx: click.Context | None,
    transport: str,
    port: int,
    host: str,
    path: str | None,
    level: int,
) -> dict[str, Any]:
    """Resolve transport settings; explicit options beat environment variables."""
    final_transport = os.getenv("TRANSPORT", "stdio").lower()
    if _option_given(ctx, "transport"):
        final_transport = transport
    if final_transport not in TRANSPORTS:
        logger.warning(
            f"Invalid transport '{final_transport}' from env/default, using 'stdio'."
        )
        final_transport = "stdio"

    if final_transport == "stdio":
        logger.info("Starting server with STDIO transport.")
        return {"transport": final_transport}

    env_port = os.getenv("PORT", "")
    final_port = int(env_port) if env_port.isdigit() else 8000
    if _option_given(ctx, "port"):
        final_port = port

    final_host = os.getenv("HOST", "0.0.0.0")  # noqa: S104
    if _option_given(ctx, "host"):
        final_host = host

    final_path = os.getenv("STREAMABLE_HTTP_PATH") or None
    if _option_given(ctx, "path"):
        final_path = path

    run_kwargs: dict[str, Any] = {
        "transport": final_transport,
        "host": final_host,
        "port": final_port,
        "log_level": logging.getLevelName(level).lower(),
    }
    if final_path is not None:
        run_kwargs["path"] = final_path

    display_path = final_path or ("/sse" if final_transport == "sse" else "/mcp")
    logger.info(
        f"Starting server with {final_transport.upper()} transport on http://{final_host}:{final_port}{display_path}"
    )
    return run_kwargs


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--transport",
    type=click.Choice(TRANSPORTS),
    default="stdio",
    help="Transport type (stdio, sse, or streamable-http)",
)
@click.option(
    "--port",
    default=8000,
    help="Port to listen on for SSE or Streamable HTTP transport",
)
@click.option(
    "--host",
    default="0.0.0.0",  # noqa: S104
    help="Host to bind to for SSE or Streamable HTTP transport (default: 0.0.0.0)",
)
@click.option(
    "--path",
    default="/mcp",
    help="Path for Streamable HTTP transport (e.g., /mcp).",
)
@click.option("--redmine-url", help="Redmine URL (e.g., https://redmine.example.com)")
@click.option("--redmine-api-key", help="Redmine REST API key")
@click.option(
    "--redmine-timeout",
    type=float,
    help="Seconds before a Redmine request is abandoned (default: 30)",
)
@click.option(
    "--redmine-ssl-verify/--no-redmine-ssl-verify",
    default=True,
    help="Verify SSL certificates for Redmine (default: verify)",
)
@click.option(
    "--default-project-id",
    type=int,
    help="Project id used by create_issue when no project_id is given",
)
@click.option(
    "--read-only",
    is_flag=True,
    help="Run in read-only mode (disables all write operations)",
)
@click.option("--api-key", help="API key clients must present on the HTTP transports")
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    port: int,
    host: str,
    path: str | None,
    **redmine_options: Any,
) -> None:
    """MCP Redmine Server - Redmine issue tracking for MCP

    Exposes Redmine issues, projects, trackers, statuses, users and
    attachments as MCP tools, authenticated with a Redmine REST API key.
    """
    global logger
    level = _logging_level(verbose)
    logger = setup_logging(level)
    logger.debug(f"Logging level set to: {logging.getLevelName(level)}")

    if env_file:
        logger.debug(f"Loading environment from file: {env_file}")
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    click_ctx = click.get_current_context(silent=True)
    _export_options(click_ctx, redmine_options)
    run_kwargs = _run_kwargs(click_ctx, transport, port, host, path, level)

    from mcp_redmine.servers import main_mcp

    try:
        asyncio.run(main_mcp.run_async(**run_kwargs))
    except KeyboardInterrupt:
        logger.info("Server stopped.")
        sys.exit(0)


__all__ = ["main", "__version__"]

if __name__ == "__main__":
    main()
