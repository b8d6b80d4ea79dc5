"""
Redmine issue models.
"""

import logging
from typing import Any

from pydantic import Field

from ..base import ApiModel
from ..constants import EMPTY_STRING, REDMINE_DEFAULT_ID
from .common import RedmineAttachment, RedmineJournal, RedmineReference

logger = logging.getLogger(__name__)

REFERENCE_FIELDS = (
    "project",
    "tracker",
    "status",
    "priority",
    "author",
    "assigned_to",
    "parent",
)


class RedmineIssue(ApiModel):
    """
    Model representing a Redmine issue.

    References to other objects (project, tracker, status, ...) are kept as
    ``{id, name}`` pairs exactly as Redmine returns them.
    """

    id: int = REDMINE_DEFAULT_ID
    project: RedmineReference | None = None
    tracker: RedmineReference | None = None
    status: RedmineReference | None = None
    priority: RedmineReference | None = None
    author: RedmineReference | None = None
    assigned_to: RedmineReference | None = None
    parent: RedmineReference | None = None
    subject: str = EMPTY_STRING
    description: str | None = None
    start_date: str | None = None
    due_date: str | None = None
    done_ratio: int | None = None
    estimated_hours: float | None = None
    created_on: str | None = None
    updated_on: str | None = None
    closed_on: str | None = None
    attachments: list[RedmineAttachment] = Field(default_factory=list)
    journals: list[RedmineJournal] = Field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "RedmineIssue":
        """
        Create a RedmineIssue from a Redmine API response.

        Args:
            data: The ``issue`` object from the Redmine API

        Returns:
            A RedmineIssue instance
        """
        if not data or not isinstance(data, dict):
            logger.debug("Received empty or non-dictionary issue data")
            return cls()

        references: dict[str, RedmineReference | None] = {}
        for field_name in REFERENCE_FIELDS:
            ref_data = data.get(field_name)
            # parent is returned as {"id": N} without a name
            if isinstance(ref_data, dict) and ref_data:
                references[field_name] = RedmineReference.from_api_response(ref_data)
            else:
                references[field_name] = None

        attachments = [
            RedmineAttachment.from_api_response(attachment)
            for attachment in data.get("attachments") or []
            if isinstance(attachment, dict)
        ]
        journals = [
            RedmineJournal.from_api_response(journal)
            for journal in data.get("journals") or []
            if isinstance(journal, dict)
        ]

        return cls(
            id=int(data.get("id", REDMINE_DEFAULT_ID)),
            subject=str(data.get("subject", EMPTY_STRING)),
            description=data.get("description"),
            start_date=data.get("start_date"),
            due_date=data.get("due_date"),
            done_ratio=data.get("done_ratio"),
            estimated_hours=data.get("estimated_hours"),
            created_on=data.get("created_on"),
            updated_on=data.get("updated_on"),
            closed_on=data.get("closed_on"),
            attachments=attachments,
            journals=journals,
            **references,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to a dictionary, leaving out unset fields and empty lists."""
        result = self.model_dump(exclude_none=True)
        if not self.attachments:
            result.pop("attachments", None)
        if not self.journals:
            result.pop("journals", None)
        return result
