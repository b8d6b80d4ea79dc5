"""
Utility functions for the MCP Redmine integration.
"""

from .environment import is_redmine_configured
from .io import is_read_only_mode
from .logging import mask_sensitive, setup_logging
from .ssl import SSLIgnoreAdapter, configure_ssl_verification

__all__ = [
    "SSLIgnoreAdapter",
    "configure_ssl_verification",
    "is_read_only_mode",
    "is_redmine_configured",
    "mask_sensitive",
    "setup_logging",
]
