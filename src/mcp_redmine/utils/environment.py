"""Utility functions related to environment checking."""

import logging
import os

logger = logging.getLogger("mcp-redmine.utils.environment")


def is_redmine_configured() -> bool:
    """Check whether the environment carries enough settings to reach Redmine."""
    url = os.getenv("REDMINE_URL")
    api_key = os.getenv("REDMINE_API_KEY")
    if url and api_key:
        logger.info("Using Redmine API key authentication")
        return True
    logger.info("Redmine is not configured or required environment variables are missing.")
    return False
