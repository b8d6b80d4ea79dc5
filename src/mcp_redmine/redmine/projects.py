"""Module for Redmine project operations."""

import logging

from ..models.redmine import RedmineProject
from .client import RedmineClient
from .utils import expect_object

logger = logging.getLogger("mcp-redmine")


class ProjectsMixin(RedmineClient):
    """Mixin for Redmine project operations."""

    def get_projects(self) -> list[RedmineProject]:
        """
        Get all projects visible to the API key.

        Returns:
            List of RedmineProject models
        """
        result = self._request("GET", "projects.json")
        projects = expect_object(result, "projects", "get_projects")
        return [RedmineProject.from_api_response(project) for project in projects]
