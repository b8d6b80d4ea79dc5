"""Server implementation for MCP Redmine."""

from . import redmine  # noqa: F401  registers the Redmine tools
from .main import main_mcp

__all__ = ["main_mcp"]
