"""Utility functions specific to Redmine operations."""

import logging
from typing import Any
from urllib.parse import quote, urlencode

logger = logging.getLogger("mcp-redmine")


def validate_positive_id(name: str, value: Any) -> int:
    """
    Ensure an id is a positive integer.

    Args:
        name: Parameter name used in the error message
        value: The value to check

    Returns:
        The id as an int

    Raises:
        ValueError: If the value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value


def build_query_string(params: dict[str, Any]) -> str:
    """
    Encode query parameters, skipping ``None`` values.

    Values are percent-encoded (spaces become ``%20``).

    Args:
        params: Parameters in the order they should appear

    Returns:
        The encoded query string without the leading ``?``
    """
    defined = [(key, str(value)) for key, value in params.items() if value is not None]
    return urlencode(defined, quote_via=quote)


def with_query(endpoint: str, params: dict[str, Any]) -> str:
    """Append the encoded parameters to an endpoint, if there are any."""
    query = build_query_string(params)
    return f"{endpoint}?{query}" if query else endpoint


def expect_object(result: Any, key: str, operation: str) -> Any:
    """
    Extract ``key`` from a JSON object response.

    Raises:
        TypeError: If the response is not a JSON object or lacks the key
    """
    if not isinstance(result, dict) or key not in result:
        msg = f"Unexpected response from {operation}: expected an object with '{key}', got {type(result).__name__}"
        logger.error(msg)
        raise TypeError(msg)
    return result[key]
