"""Test fixtures for Redmine unit tests."""

import os
from unittest.mock import MagicMock, patch

import pytest

from mcp_redmine.redmine import RedmineFetcher
from mcp_redmine.redmine.config import RedmineConfig
from tests.fixtures.redmine_mocks import make_response


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for testing."""
    with patch.dict(
        os.environ,
        {
            "REDMINE_URL": "https://redmine.example.com",
            "REDMINE_API_KEY": "test_api_key",
        },
        clear=True,
    ):
        yield


@pytest.fixture
def redmine_config():
    """Create a RedmineConfig instance."""
    return RedmineConfig(
        url="https://redmine.example.com",
        api_key="test_api_key",
    )


@pytest.fixture
def redmine_fetcher(redmine_config):
    """Create a RedmineFetcher whose HTTP session is mocked."""
    fetcher = RedmineFetcher(config=redmine_config)
    fetcher.session = MagicMock()
    fetcher.session.request.return_value = make_response(json_data={})
    return fetcher
