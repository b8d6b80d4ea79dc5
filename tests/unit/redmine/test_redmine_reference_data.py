"""Tests for projects, users, trackers, statuses and priorities."""

import pytest

from mcp_redmine.exceptions import MCPRedmineHTTPError
from mcp_redmine.models.redmine import (
    RedminePriority,
    RedmineProject,
    RedmineStatus,
    RedmineTracker,
    RedmineUser,
)
from tests.fixtures.redmine_mocks import (
    MOCK_REDMINE_PRIORITIES_RESPONSE,
    MOCK_REDMINE_PROJECTS_RESPONSE,
    MOCK_REDMINE_STATUSES_RESPONSE,
    MOCK_REDMINE_TRACKERS_RESPONSE,
    MOCK_REDMINE_USERS_RESPONSE,
    last_request,
    make_response,
)


def test_get_projects(redmine_fetcher):
    redmine_fetcher.session.request.return_value = make_response(
        json_data=MOCK_REDMINE_PROJECTS_RESPONSE
    )

    projects = redmine_fetcher.get_projects()

    _, url, _ = last_request(redmine_fetcher.session)
    assert url == "https://redmine.example.com/projects.json"
    assert all(isinstance(project, RedmineProject) for project in projects)
    assert [project.identifier for project in projects] == ["website", "website-api"]
    assert projects[1].parent.name == "Website"


def test_get_users_assembles_display_name(redmine_fetcher):
    redmine_fetcher.session.request.return_value = make_response(
        json_data=MOCK_REDMINE_USERS_RESPONSE
    )

    users = redmine_fetcher.get_users()

    _, url, _ = last_request(redmine_fetcher.session)
    assert url == "https://redmine.example.com/users.json"
    assert isinstance(users[0], RedmineUser)
    assert users[0].name == "Jane Doe"
    assert users[1].login == "jsmith"


def test_get_users_forbidden_for_non_admin(redmine_fetcher):
    """users.json is admin-only; the 403 surfaces to the caller."""
    redmine_fetcher.session.request.return_value = make_response(
        status_code=403, text="Forbidden", content_type="text/plain"
    )

    with pytest.raises(MCPRedmineHTTPError, match="HTTP 403"):
        redmine_fetcher.get_users()


def test_get_trackers(redmine_fetcher):
    redmine_fetcher.session.request.return_value = make_response(
        json_data=MOCK_REDMINE_TRACKERS_RESPONSE
    )

    trackers = redmine_fetcher.get_trackers()

    _, url, _ = last_request(redmine_fetcher.session)
    assert url == "https://redmine.example.com/trackers.json"
    assert all(isinstance(tracker, RedmineTracker) for tracker in trackers)
    assert [tracker.name for tracker in trackers] == ["Bug", "Feature", "Support"]


def test_get_issue_statuses(redmine_fetcher):
    redmine_fetcher.session.request.return_value = make_response(
        json_data=MOCK_REDMINE_STATUSES_RESPONSE
    )

    statuses = redmine_fetcher.get_issue_statuses()

    _, url, _ = last_request(redmine_fetcher.session)
    assert url == "https://redmine.example.com/issue_statuses.json"
    assert all(isinstance(status, RedmineStatus) for status in statuses)
    assert statuses[-1].is_closed is True


def test_get_issue_priorities(redmine_fetcher):
    redmine_fetcher.session.request.return_value = make_response(
        json_data=MOCK_REDMINE_PRIORITIES_RESPONSE
    )

    priorities = redmine_fetcher.get_issue_priorities()

    _, url, _ = last_request(redmine_fetcher.session)
    assert url == "https://redmine.example.com/enumerations/issue_priorities.json"
    assert all(isinstance(priority, RedminePriority) for priority in priorities)
    assert [priority.name for priority in priorities if priority.is_default] == [
        "Normal"
    ]


def test_get_trackers_wrong_key(redmine_fetcher):
    redmine_fetcher.session.request.return_value = make_response(
        json_data={"issue_statuses": []}
    )

    with pytest.raises(TypeError, match="get_trackers"):
        redmine_fetcher.get_trackers()
