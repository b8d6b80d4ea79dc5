"""Redmine API module for mcp_redmine.

This module provides the Redmine REST API client implementations.
"""

from .attachments import AttachmentsMixin
from .client import RedmineClient
from .config import RedmineConfig
from .enumerations import EnumerationsMixin
from .issues import IssuesMixin
from .notes import NotesMixin
from .projects import ProjectsMixin
from .search import SearchMixin
from .transitions import TransitionsMixin
from .users import UsersMixin


class RedmineFetcher(
    IssuesMixin,
    SearchMixin,
    ProjectsMixin,
    EnumerationsMixin,
    UsersMixin,
    NotesMixin,
    TransitionsMixin,
    AttachmentsMixin,
):
    """
    The main Redmine client class providing access to all Redmine operations.

    This class inherits from mixins that each cover one area of the API:
    - IssuesMixin: Read, create and update issues
    - SearchMixin: Filtered issue listing
    - ProjectsMixin: Projects
    - EnumerationsMixin: Trackers, issue statuses and priorities
    - UsersMixin: Users
    - NotesMixin: Issue notes
    - TransitionsMixin: Status changes
    - AttachmentsMixin: Binary upload and attachment
    """

    pass


__all__ = ["RedmineFetcher", "RedmineConfig", "RedmineClient"]
