"""I/O utility functions for MCP Redmine."""

import os


def is_read_only_mode() -> bool:
    """Check if the server is running in read-only mode.

    Read-only mode disables every tool that writes to Redmine (create,
    update, notes, transitions, attachments) while keeping the read tools.

    Returns:
        True if read-only mode is enabled, False otherwise
    """
    value = os.getenv("READ_ONLY_MODE", "false")
    return value.lower() in ("true", "1", "yes", "y", "on")
