"""
Common Redmine entity models.

This module provides Pydantic models for the reference data Redmine exposes
(projects, trackers, statuses, users, priorities) and for the small records
embedded in issues (id/name references, attachments, journals, uploads).
"""

import logging
from typing import Any

from pydantic import Field

from ..base import ApiModel
from ..constants import EMPTY_STRING, REDMINE_DEFAULT_ID, UNKNOWN

logger = logging.getLogger(__name__)


def _to_int(value: Any, default: int = REDMINE_DEFAULT_ID) -> int:
    try:
        return int(value) if value is not None else default
    except (ValueError, TypeError):
        return default


class RedmineReference(ApiModel):
    """
    An ``{id, name}`` pair pointing at another Redmine object.
    """

    id: int = REDMINE_DEFAULT_ID
    name: str = UNKNOWN

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "RedmineReference":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(
            id=_to_int(data.get("id")),
            name=str(data.get("name", UNKNOWN)),
        )


class RedmineProject(ApiModel):
    """
    Model representing a Redmine project.
    """

    id: int = REDMINE_DEFAULT_ID
    name: str = UNKNOWN
    identifier: str = EMPTY_STRING
    description: str | None = None
    status: int | None = None
    parent: RedmineReference | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "RedmineProject":
        """
        Create a RedmineProject from a Redmine API response.

        Args:
            data: The project data from the Redmine API

        Returns:
            A RedmineProject instance
        """
        if not data or not isinstance(data, dict):
            logger.debug("Received empty or non-dictionary project data")
            return cls()

        parent = None
        if parent_data := data.get("parent"):
            parent = RedmineReference.from_api_response(parent_data)

        return cls(
            id=_to_int(data.get("id")),
            name=str(data.get("name", UNKNOWN)),
            identifier=str(data.get("identifier", EMPTY_STRING)),
            description=data.get("description"),
            status=data.get("status"),
            parent=parent,
        )


class RedmineTracker(ApiModel):
    """
    Model representing a Redmine tracker (issue type).
    """

    id: int = REDMINE_DEFAULT_ID
    name: str = UNKNOWN

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "RedmineTracker":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(id=_to_int(data.get("id")), name=str(data.get("name", UNKNOWN)))


class RedmineStatus(ApiModel):
    """
    Model representing a Redmine issue status.
    """

    id: int = REDMINE_DEFAULT_ID
    name: str = UNKNOWN
    is_closed: bool | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "RedmineStatus":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(
            id=_to_int(data.get("id")),
            name=str(data.get("name", UNKNOWN)),
            is_closed=data.get("is_closed"),
        )


class RedminePriority(ApiModel):
    """
    Model representing a Redmine issue priority.
    """

    id: int = REDMINE_DEFAULT_ID
    name: str = UNKNOWN
    is_default: bool | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "RedminePriority":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(
            id=_to_int(data.get("id")),
            name=str(data.get("name", UNKNOWN)),
            is_default=data.get("is_default"),
        )


class RedmineUser(ApiModel):
    """
    Model representing a Redmine user.
    """

    id: int = REDMINE_DEFAULT_ID
    login: str | None = None
    firstname: str | None = None
    lastname: str | None = None
    name: str = UNKNOWN
    mail: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "RedmineUser":
        """
        Create a RedmineUser from a Redmine API response.

        ``users.json`` returns first and last names separately, so the display
        name is assembled from them when the response carries no ``name``.

        Args:
            data: The user data from the Redmine API

        Returns:
            A RedmineUser instance
        """
        if not data or not isinstance(data, dict):
            return cls()

        firstname = data.get("firstname")
        lastname = data.get("lastname")
        name = data.get("name")
        if not name:
            name = " ".join(part for part in (firstname, lastname) if part) or UNKNOWN

        return cls(
            id=_to_int(data.get("id")),
            login=data.get("login"),
            firstname=firstname,
            lastname=lastname,
            name=str(name),
            mail=data.get("mail"),
        )


class RedmineAttachment(ApiModel):
    """
    Model representing a file attached to a Redmine issue.
    """

    id: int = REDMINE_DEFAULT_ID
    filename: str = EMPTY_STRING
    filesize: int | None = None
    content_type: str | None = None
    description: str | None = None
    content_url: str | None = None
    author: RedmineReference | None = None
    created_on: str | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "RedmineAttachment":
        if not data or not isinstance(data, dict):
            return cls()

        author = None
        if author_data := data.get("author"):
            author = RedmineReference.from_api_response(author_data)

        return cls(
            id=_to_int(data.get("id")),
            filename=str(data.get("filename", EMPTY_STRING)),
            filesize=data.get("filesize"),
            content_type=data.get("content_type"),
            description=data.get("description") or None,
            content_url=data.get("content_url"),
            author=author,
            created_on=data.get("created_on"),
        )


class RedmineJournal(ApiModel):
    """
    Model representing one journal entry (note and/or field changes) of an issue.
    """

    id: int = REDMINE_DEFAULT_ID
    user: RedmineReference | None = None
    notes: str | None = None
    created_on: str | None = None
    details: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "RedmineJournal":
        if not data or not isinstance(data, dict):
            return cls()

        user = None
        if user_data := data.get("user"):
            user = RedmineReference.from_api_response(user_data)

        details = data.get("details") or []
        if not isinstance(details, list):
            logger.debug(f"Unexpected journal details format: {type(details)}")
            details = []

        return cls(
            id=_to_int(data.get("id")),
            user=user,
            notes=data.get("notes") or None,
            created_on=data.get("created_on"),
            details=details,
        )


class RedmineUpload(ApiModel):
    """
    An uploaded binary waiting to be attached to an issue.

    ``token`` comes from ``uploads.json``; the remaining fields describe the
    attachment that the token becomes once referenced by an issue update.
    """

    token: str
    id: int | None = None
    filename: str | None = None
    content_type: str | None = None
    description: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "RedmineUpload":
        """
        Create a RedmineUpload from an ``uploads.json`` response.

        Args:
            data: The ``upload`` object of the response
            **kwargs: Optional filename, content_type and description

        Returns:
            A RedmineUpload instance

        Raises:
            ValueError: If the response carries no token
        """
        if not isinstance(data, dict) or not data.get("token"):
            raise ValueError(f"Upload response did not contain a token: {data!r}")
        return cls(
            token=str(data["token"]),
            id=data.get("id"),
            filename=kwargs.get("filename"),
            content_type=kwargs.get("content_type"),
            description=kwargs.get("description"),
        )

    def to_attachment_payload(self) -> dict[str, Any]:
        """Return the entry expected in an issue update's ``uploads`` list."""
        return self.model_dump(
            include={"token", "filename", "content_type", "description"},
            exclude_none=True,
        )
