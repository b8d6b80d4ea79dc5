"""Module for Redmine user operations."""

import logging

from ..models.redmine import RedmineUser
from .client import RedmineClient
from .utils import expect_object

logger = logging.getLogger("mcp-redmine")


class UsersMixin(RedmineClient):
    """Mixin for Redmine user operations."""

    def get_users(self) -> list[RedmineUser]:
        """
        Get the users of the Redmine instance.

        Redmine only lists users for administrator keys; other keys get a 403.

        Returns:
            List of RedmineUser models
        """
        result = self._request("GET", "users.json")
        users = expect_object(result, "users", "get_users")
        return [RedmineUser.from_api_response(user) for user in users]
