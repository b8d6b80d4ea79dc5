"""
Redmine issue search result model.
"""

import logging
from typing import Any

from pydantic import Field

from ..base import ApiModel
from .issue import RedmineIssue

logger = logging.getLogger(__name__)


class RedmineSearchResult(ApiModel):
    """
    One page of issues returned by ``issues.json``.
    """

    issues: list[RedmineIssue] = Field(default_factory=list)
    total_count: int = 0
    offset: int = 0
    limit: int = 0

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "RedmineSearchResult":
        """
        Create a RedmineSearchResult from a Redmine API response.

        Args:
            data: The search response from the Redmine API

        Returns:
            A RedmineSearchResult instance
        """
        if not data or not isinstance(data, dict):
            logger.debug("Received empty or non-dictionary search data")
            return cls()

        issues = [
            RedmineIssue.from_api_response(issue)
            for issue in data.get("issues") or []
            if isinstance(issue, dict)
        ]

        return cls(
            issues=issues,
            total_count=int(data.get("total_count", len(issues))),
            offset=int(data.get("offset", 0)),
            limit=int(data.get("limit", len(issues))),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "issues": [issue.to_simplified_dict() for issue in self.issues],
            "total_count": self.total_count,
            "offset": self.offset,
            "limit": self.limit,
        }
