"""
Parameter records for Redmine write and search operations.

Numeric ids must be positive integers and dates use ``YYYY-MM-DD``. Free text
(subject, description, query) is passed to Redmine unchanged; Redmine itself
validates it.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt

from ..constants import MAX_SEARCH_LIMIT


class _IssueFields(BaseModel):
    model_config = ConfigDict(extra="forbid")

    subject: str | None = None
    description: str | None = None
    tracker_id: PositiveInt | None = None
    status_id: PositiveInt | None = None
    priority_id: PositiveInt | None = None
    assigned_to_id: PositiveInt | None = None
    start_date: date | None = None
    due_date: date | None = None
    done_ratio: int | None = Field(default=None, ge=0, le=100)

    def to_payload(self) -> dict[str, Any]:
        """Return only the fields that were given, JSON-ready."""
        return self.model_dump(mode="json", exclude_none=True)


class IssueCreateParams(_IssueFields):
    """Fields for ``POST issues.json``."""

    project_id: PositiveInt
    subject: str


class IssueUpdateParams(_IssueFields):
    """Fields for ``PUT issues/{id}.json``; every field is optional."""


class IssueSearchParams(BaseModel):
    """Filters and pagination for ``GET issues.json``."""

    model_config = ConfigDict(extra="forbid")

    project_id: PositiveInt | None = None
    status_id: PositiveInt | None = None
    tracker_id: PositiveInt | None = None
    assigned_to_id: PositiveInt | None = None
    query: str | None = None
    limit: int | None = Field(default=None, ge=1, le=MAX_SEARCH_LIMIT)
    offset: NonNegativeInt | None = None

    def to_query(self) -> dict[str, Any]:
        """Return the filters that were given, in declaration order."""
        return self.model_dump(exclude_none=True)
