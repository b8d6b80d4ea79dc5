"""
Root pytest configuration file for MCP Redmine tests.
"""

import pytest


@pytest.fixture
def anyio_backend():
    """Run anyio-marked tests on asyncio only."""
    return "asyncio"
