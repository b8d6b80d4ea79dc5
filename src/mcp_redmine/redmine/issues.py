"""Module for Redmine issue operations."""

import logging

from ..models.redmine import IssueCreateParams, IssueUpdateParams, RedmineIssue
from .client import RedmineClient
from .utils import expect_object, validate_positive_id, with_query

logger = logging.getLogger("mcp-redmine")


class IssuesMixin(RedmineClient):
    """Mixin for Redmine issue operations."""

    def get_issue(
        self, issue_id: int, include: list[str] | None = None
    ) -> RedmineIssue:
        """
        Get a Redmine issue by id.

        Args:
            issue_id: The issue id
            include: Related data to embed (e.g. ``["attachments", "journals"]``)

        Returns:
            RedmineIssue model

        Raises:
            ValueError: If the id is not a positive integer
            MCPRedmineHTTPError: If Redmine rejects the request
        """
        validate_positive_id("issue_id", issue_id)
        params = {"include": ",".join(include) if include else None}
        result = self._request("GET", with_query(f"issues/{issue_id}.json", params))
        return RedmineIssue.from_api_response(expect_object(result, "issue", "get_issue"))

    def create_issue(self, params: IssueCreateParams) -> RedmineIssue:
        """
        Create a new issue.

        The project id must already be present in ``params``; applying a
        default project is left to the caller.

        Args:
            params: The issue fields

        Returns:
            The created issue as returned by Redmine
        """
        payload = params.to_payload()
        logger.info(
            f"Creating issue in project {params.project_id}: {params.subject!r}"
        )
        result = self._request("POST", "issues.json", {"issue": payload})
        return RedmineIssue.from_api_response(
            expect_object(result, "issue", "create_issue")
        )

    def update_issue(self, issue_id: int, params: IssueUpdateParams) -> None:
        """
        Update fields of an existing issue.

        Redmine answers with an empty body; callers re-read the issue when
        they need its new state.

        Args:
            issue_id: The issue id
            params: The fields to change; unset fields are left untouched
        """
        validate_positive_id("issue_id", issue_id)
        self._request("PUT", f"issues/{issue_id}.json", {"issue": params.to_payload()})
