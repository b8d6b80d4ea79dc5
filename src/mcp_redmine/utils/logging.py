"""Logging utilities for MCP Redmine.

All output goes to stderr so that the stdio transport keeps stdout for
protocol messages only.
"""

import logging
import sys

LOG_FORMAT = "%(levelname)s - %(name)s - %(message)s"

# Loggers whose level follows the configured one
MANAGED_LOGGERS = ("mcp-redmine", "mcp.server", "mcp.server.lowlevel.server")


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Route all logging through one stderr handler at the given level.

    Handlers installed earlier on the root logger are dropped, so calling
    this again (e.g. once the CLI knows the verbosity) does not duplicate
    output.

    Args:
        level: The minimum logging level to display (default: WARNING)

    Returns:
        The ``mcp-redmine`` logger
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in MANAGED_LOGGERS:
        logging.getLogger(name).setLevel(level)

    return logging.getLogger("mcp-redmine")


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Mask a secret for logging, keeping ``keep_chars`` at each end.

    Values too short to keep both ends are masked completely.
    """
    if not value:
        return "Not Provided"
    hidden = len(value) - keep_chars * 2
    if hidden <= 0:
        return "*" * len(value)
    return f"{value[:keep_chars]}{'*' * hidden}{value[-keep_chars:]}"


def log_config_param(
    logger: logging.Logger,
    param: str,
    value: str | None,
    sensitive: bool = False,
) -> None:
    """Logs a Redmine configuration parameter, masking it if sensitive."""
    display_value = mask_sensitive(value) if sensitive else (value or "Not Provided")
    logger.info(f"Redmine {param}: {display_value}")
