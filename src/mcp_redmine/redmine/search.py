"""Module for Redmine search operations."""

import logging

from ..models.redmine import IssueSearchParams, RedmineSearchResult
from .client import RedmineClient
from .utils import with_query

logger = logging.getLogger("mcp-redmine")


class SearchMixin(RedmineClient):
    """Mixin for Redmine search operations."""

    def search_issues(self, params: IssueSearchParams) -> RedmineSearchResult:
        """
        Search issues with optional filters and pagination.

        Only the filters set on ``params`` end up in the query string.

        Args:
            params: Filters (project, status, tracker, assignee, query) and
                pagination (limit, offset)

        Returns:
            RedmineSearchResult with the matching page of issues
        """
        endpoint = with_query("issues.json", params.to_query())
        result = self._request("GET", endpoint)
        if not isinstance(result, dict):
            msg = f"Unexpected return value type from issue search: {type(result)}"
            logger.error(msg)
            raise TypeError(msg)
        return RedmineSearchResult.from_api_response(result)
