"""Module for Redmine trackers, issue statuses and issue priorities."""

import logging

from ..models.redmine import RedminePriority, RedmineStatus, RedmineTracker
from .client import RedmineClient
from .utils import expect_object

logger = logging.getLogger("mcp-redmine")


class EnumerationsMixin(RedmineClient):
    """Mixin for Redmine reference data used to fill issue fields."""

    def get_trackers(self) -> list[RedmineTracker]:
        """Get all trackers."""
        result = self._request("GET", "trackers.json")
        trackers = expect_object(result, "trackers", "get_trackers")
        return [RedmineTracker.from_api_response(tracker) for tracker in trackers]

    def get_issue_statuses(self) -> list[RedmineStatus]:
        """Get all issue statuses."""
        result = self._request("GET", "issue_statuses.json")
        statuses = expect_object(result, "issue_statuses", "get_issue_statuses")
        return [RedmineStatus.from_api_response(status) for status in statuses]

    def get_issue_priorities(self) -> list[RedminePriority]:
        """
        Get all issue priorities.

        Some Redmine configurations do not expose this enumeration over the
        REST API; callers that can live without it should treat failures as
        "no priorities".
        """
        result = self._request("GET", "enumerations/issue_priorities.json")
        priorities = expect_object(result, "issue_priorities", "get_issue_priorities")
        return [RedminePriority.from_api_response(priority) for priority in priorities]
