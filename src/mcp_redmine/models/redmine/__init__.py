"""
Redmine data models.
"""

from .common import (
    RedmineAttachment,
    RedmineJournal,
    RedminePriority,
    RedmineProject,
    RedmineReference,
    RedmineStatus,
    RedmineTracker,
    RedmineUpload,
    RedmineUser,
)
from .issue import RedmineIssue
from .params import IssueCreateParams, IssueSearchParams, IssueUpdateParams
from .search import RedmineSearchResult

__all__ = [
    "IssueCreateParams",
    "IssueSearchParams",
    "IssueUpdateParams",
    "RedmineAttachment",
    "RedmineIssue",
    "RedmineJournal",
    "RedminePriority",
    "RedmineProject",
    "RedmineReference",
    "RedmineSearchResult",
    "RedmineStatus",
    "RedmineTracker",
    "RedmineUpload",
    "RedmineUser",
]
