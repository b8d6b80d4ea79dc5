"""
Test fixtures for model testing.
"""

import copy
from typing import Any

import pytest

from tests.fixtures.redmine_mocks import (
    MOCK_REDMINE_ISSUE_RESPONSE,
    MOCK_REDMINE_ISSUE_WITH_INCLUDES_RESPONSE,
    MOCK_REDMINE_SEARCH_RESPONSE,
)


@pytest.fixture
def redmine_issue_data() -> dict[str, Any]:
    """Return mock Redmine issue data without related records."""
    return copy.deepcopy(MOCK_REDMINE_ISSUE_RESPONSE["issue"])


@pytest.fixture
def redmine_issue_with_includes_data() -> dict[str, Any]:
    """Return mock Redmine issue data including attachments and journals."""
    return copy.deepcopy(MOCK_REDMINE_ISSUE_WITH_INCLUDES_RESPONSE["issue"])


@pytest.fixture
def redmine_search_data() -> dict[str, Any]:
    """Return a mock page of Redmine issues."""
    return copy.deepcopy(MOCK_REDMINE_SEARCH_RESPONSE)
