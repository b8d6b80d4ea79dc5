"""Module for Redmine status transition operations."""

import logging
from typing import Any

from .client import RedmineClient
from .utils import validate_positive_id

logger = logging.getLogger("mcp-redmine")


class TransitionsMixin(RedmineClient):
    """Mixin for Redmine issue status changes."""

    def transition_issue(
        self, issue_id: int, status_id: int, notes: str | None = None
    ) -> None:
        """
        Move an issue to another status, optionally with a note.

        Redmine applies its workflow rules on the server side; a transition the
        workflow forbids comes back as an HTTP 422 error.

        Args:
            issue_id: The issue id
            status_id: The target status id
            notes: Optional note recorded with the change
        """
        validate_positive_id("issue_id", issue_id)
        validate_positive_id("status_id", status_id)

        issue: dict[str, Any] = {"status_id": status_id}
        if notes:
            issue["notes"] = notes

        logger.info(f"Transitioning issue {issue_id} to status {status_id}")
        self._request("PUT", f"issues/{issue_id}.json", {"issue": issue})
