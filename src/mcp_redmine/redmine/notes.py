"""Module for Redmine issue note operations."""

import logging

from .client import RedmineClient
from .utils import validate_positive_id

logger = logging.getLogger("mcp-redmine")


class NotesMixin(RedmineClient):
    """Mixin for Redmine issue notes (journal comments)."""

    def add_issue_note(self, issue_id: int, notes: str) -> None:
        """
        Add a note to an issue.

        Args:
            issue_id: The issue id
            notes: Note text, sent as-is
        """
        validate_positive_id("issue_id", issue_id)
        self._request("PUT", f"issues/{issue_id}.json", {"issue": {"notes": notes}})
