"""
Pydantic models for Redmine API responses and request parameters.
"""

from .base import ApiModel
from .constants import EMPTY_STRING, REDMINE_DEFAULT_ID, UNKNOWN
from .redmine import (
    IssueCreateParams,
    IssueSearchParams,
    IssueUpdateParams,
    RedmineAttachment,
    RedmineIssue,
    RedmineJournal,
    RedminePriority,
    RedmineProject,
    RedmineReference,
    RedmineSearchResult,
    RedmineStatus,
    RedmineTracker,
    RedmineUpload,
    RedmineUser,
)

__all__ = [
    "ApiModel",
    "EMPTY_STRING",
    "REDMINE_DEFAULT_ID",
    "UNKNOWN",
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
