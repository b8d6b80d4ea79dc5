"""Redmine tool definitions for the FastMCP server."""

import asyncio
import base64
import binascii
import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Annotated, Any

from fastmcp import Context
from pydantic import Field, PositiveInt

from mcp_redmine.models import (
    ApiModel,
    IssueCreateParams,
    IssueSearchParams,
    IssueUpdateParams,
)
from mcp_redmine.models.constants import MAX_SEARCH_LIMIT
from mcp_redmine.redmine.constants import DEFAULT_ISSUE_INCLUDES
from mcp_redmine.servers.dependencies import get_redmine_fetcher
from mcp_redmine.utils.decorators import check_write_access, handle_tool_errors

from .main import main_mcp

logger = logging.getLogger(__name__)

MISSING_PROJECT_MESSAGE = (
    "Missing required project_id. Set REDMINE_DEFAULT_PROJECT_ID or pass project_id explicitly."
)


def _dumps(result: Any) -> str:
    return json.dumps(result, indent=2, ensure_ascii=False)


_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")


def _decode_base64(data: str) -> bytes:
    """Decode standard or URL-safe base64, wrapped or unpadded."""
    compact = "".join(data.split()).translate(_URLSAFE_TO_STANDARD)
    compact += "=" * (-len(compact) % 4)
    return base64.b64decode(compact, validate=True)


def _parse_include(include: str | None) -> list[str] | None:
    if not include:
        return None
    return [item.strip() for item in include.split(",") if item.strip()] or None


@dataclass(frozen=True)
class SubFetchResult:
    """Outcome of one sub-fetch of an aggregate tool.

    Either ``value`` holds the fetched records or ``error`` holds the failure.
    """

    name: str
    value: list[dict[str, Any]] | None = None
    error: Exception | None = None

    @property
    def available(self) -> bool:
        return self.error is None


async def _sub_fetch(
    name: str, fetch: Callable[[], Sequence[ApiModel]]
) -> SubFetchResult:
    # Sibling sub-fetches share one requests.Session across worker threads;
    # each only issues a single GET and never mutates session state.
    try:
        items = await asyncio.to_thread(fetch)
    except Exception as e:
        return SubFetchResult(name=name, error=e)
    return SubFetchResult(name=name, value=[item.to_simplified_dict() for item in items])


async def _fetch_all(
    required: dict[str, Callable[[], Sequence[ApiModel]]],
    optional: dict[str, Callable[[], Sequence[ApiModel]]] | None = None,
) -> dict[str, list[dict[str, Any]]]:
    """Run independent reads concurrently and merge them by name.

    The first unavailable required read (in declaration order) is raised once
    every read has settled. Unavailable optional reads become empty lists.
    """
    optional = optional or {}
    fetches = {**required, **optional}
    results = await asyncio.gather(
        *(_sub_fetch(name, fetch) for name, fetch in fetches.items())
    )

    merged: dict[str, list[dict[str, Any]]] = {}
    for result in results:
        if result.available:
            merged[result.name] = result.value or []
        elif result.name in optional:
            logger.info(
                f"Optional Redmine data '{result.name}' unavailable, using empty list: {result.error}"
            )
            merged[result.name] = []
        else:
            raise result.error  # type: ignore[misc]
    return merged


@main_mcp.tool(tags={"redmine", "write"})
@handle_tool_errors
@check_write_access
async def create_issue(
    ctx: Context,
    subject: Annotated[str, Field(description="Subject (title) of the issue")],
    project_id: Annotated[
        PositiveInt | None,
        Field(
            description="Project id. Falls back to the server's default project when omitted."
        ),
    ] = None,
    description: Annotated[
        str | None, Field(description="Issue description")
    ] = None,
    tracker_id: Annotated[PositiveInt | None, Field(description="Tracker id")] = None,
    status_id: Annotated[PositiveInt | None, Field(description="Status id")] = None,
    priority_id: Annotated[
        PositiveInt | None, Field(description="Priority id")
    ] = None,
    assigned_to_id: Annotated[
        PositiveInt | None, Field(description="Id of the user to assign")
    ] = None,
    start_date: Annotated[
        str | None, Field(description="Start date (YYYY-MM-DD)")
    ] = None,
    due_date: Annotated[str | None, Field(description="Due date (YYYY-MM-DD)")] = None,
    done_ratio: Annotated[
        int | None, Field(description="Percent done (0-100)", ge=0, le=100)
    ] = None,
) -> str:
    """Create a new Redmine issue.

    Args:
        ctx: The FastMCP context.
        subject: Subject of the issue.
        project_id: Project id, or None to use the configured default project.
        description: Issue description.
        tracker_id: Tracker id.
        status_id: Status id.
        priority_id: Priority id.
        assigned_to_id: Assignee user id.
        start_date: Start date.
        due_date: Due date.
        done_ratio: Percent done.

    Returns:
        JSON string representing the created issue.

    Raises:
        ValueError: If no project id is given and no default project is configured.
    """
    redmine = await get_redmine_fetcher(ctx)

    if project_id is None:
        project_id = redmine.config.default_project_id
    if project_id is None:
        raise ValueError(MISSING_PROJECT_MESSAGE)

    params = IssueCreateParams(
        project_id=project_id,
        subject=subject,
        description=description,
        tracker_id=tracker_id,
        status_id=status_id,
        priority_id=priority_id,
        assigned_to_id=assigned_to_id,
        start_date=start_date,
        due_date=due_date,
        done_ratio=done_ratio,
    )
    issue = await asyncio.to_thread(redmine.create_issue, params)
    return _dumps(issue.to_simplified_dict())


@main_mcp.tool(tags={"redmine", "write"})
@handle_tool_errors
@check_write_access
async def update_issue(
    ctx: Context,
    issue_id: Annotated[PositiveInt, Field(description="Id of the issue to update")],
    subject: Annotated[str | None, Field(description="New subject")] = None,
    description: Annotated[str | None, Field(description="New description")] = None,
    tracker_id: Annotated[PositiveInt | None, Field(description="Tracker id")] = None,
    status_id: Annotated[PositiveInt | None, Field(description="Status id")] = None,
    priority_id: Annotated[
        PositiveInt | None, Field(description="Priority id")
    ] = None,
    assigned_to_id: Annotated[
        PositiveInt | None, Field(description="Id of the user to assign")
    ] = None,
    start_date: Annotated[
        str | None, Field(description="Start date (YYYY-MM-DD)")
    ] = None,
    due_date: Annotated[str | None, Field(description="Due date (YYYY-MM-DD)")] = None,
    done_ratio: Annotated[
        int | None, Field(description="Percent done (0-100)", ge=0, le=100)
    ] = None,
) -> str:
    """Update an existing Redmine issue and return its new state.

    Only the fields that are provided are changed.

    Returns:
        JSON string representing the updated issue.
    """
    params = IssueUpdateParams(
        subject=subject,
        description=description,
        tracker_id=tracker_id,
        status_id=status_id,
        priority_id=priority_id,
        assigned_to_id=assigned_to_id,
        start_date=start_date,
        due_date=due_date,
        done_ratio=done_ratio,
    )
    redmine = await get_redmine_fetcher(ctx)
    await asyncio.to_thread(redmine.update_issue, issue_id, params)
    issue = await asyncio.to_thread(redmine.get_issue, issue_id, DEFAULT_ISSUE_INCLUDES)
    return _dumps(issue.to_simplified_dict())


@main_mcp.tool(tags={"redmine", "read"})
@handle_tool_errors
async def read_issue(
    ctx: Context,
    issue_id: Annotated[PositiveInt, Field(description="Id of the issue")],
    include: Annotated[
        str | None,
        Field(
            description=(
                "Comma-separated related data to include, e.g. 'attachments,journals'. "
                "Use an empty string for the issue fields only."
            )
        ),
    ] = ",".join(DEFAULT_ISSUE_INCLUDES),
) -> str:
    """Read a Redmine issue.

    Args:
        ctx: The FastMCP context.
        issue_id: Id of the issue.
        include: Related data to include.

    Returns:
        JSON string representing the issue.
    """
    redmine = await get_redmine_fetcher(ctx)
    issue = await asyncio.to_thread(
        redmine.get_issue, issue_id, _parse_include(include)
    )
    return _dumps(issue.to_simplified_dict())


@main_mcp.tool(tags={"redmine", "read"})
@handle_tool_errors
async def find_issues(
    ctx: Context,
    project_id: Annotated[
        PositiveInt | None, Field(description="Only issues of this project")
    ] = None,
    status_id: Annotated[
        PositiveInt | None, Field(description="Only issues with this status")
    ] = None,
    tracker_id: Annotated[
        PositiveInt | None, Field(description="Only issues of this tracker")
    ] = None,
    assigned_to_id: Annotated[
        PositiveInt | None, Field(description="Only issues assigned to this user")
    ] = None,
    query: Annotated[
        str | None, Field(description="Free-text query passed to Redmine")
    ] = None,
    limit: Annotated[
        int | None,
        Field(description="Maximum number of issues (1-100)", ge=1, le=MAX_SEARCH_LIMIT),
    ] = None,
    offset: Annotated[
        int | None, Field(description="Number of issues to skip (0-based)", ge=0)
    ] = None,
) -> str:
    """Find Redmine issues matching the given filters.

    Filters that are not provided are not sent to Redmine.

    Returns:
        JSON string with ``issues``, ``total_count``, ``offset`` and ``limit``.
    """
    params = IssueSearchParams(
        project_id=project_id,
        status_id=status_id,
        tracker_id=tracker_id,
        assigned_to_id=assigned_to_id,
        query=query,
        limit=limit,
        offset=offset,
    )
    redmine = await get_redmine_fetcher(ctx)
    search_result = await asyncio.to_thread(redmine.search_issues, params)
    return _dumps(search_result.to_simplified_dict())


@main_mcp.tool(tags={"redmine", "read"})
@handle_tool_errors
async def list_projects(ctx: Context) -> str:
    """List all Redmine projects visible to the API key.

    Returns:
        JSON string representing a list of projects.
    """
    redmine = await get_redmine_fetcher(ctx)
    projects = await asyncio.to_thread(redmine.get_projects)
    return _dumps([project.to_simplified_dict() for project in projects])


@main_mcp.tool(tags={"redmine", "read"})
@handle_tool_errors
async def list_trackers_statuses(ctx: Context) -> str:
    """List Redmine trackers and issue statuses.

    Returns:
        JSON string with ``trackers`` and ``statuses`` lists.
    """
    redmine = await get_redmine_fetcher(ctx)
    merged = await _fetch_all(
        {
            "trackers": redmine.get_trackers,
            "statuses": redmine.get_issue_statuses,
        }
    )
    return _dumps(merged)


@main_mcp.tool(tags={"redmine", "read"})
@handle_tool_errors
async def get_metadata(ctx: Context) -> str:
    """Get the reference data needed to fill issue fields.

    Priorities are fetched on a best-effort basis: when the tracker does not
    expose them the list is empty.

    Returns:
        JSON string with ``projects``, ``trackers``, ``statuses``, ``users``
        and ``priorities`` lists.
    """
    redmine = await get_redmine_fetcher(ctx)
    merged = await _fetch_all(
        {
            "projects": redmine.get_projects,
            "trackers": redmine.get_trackers,
            "statuses": redmine.get_issue_statuses,
            "users": redmine.get_users,
        },
        optional={"priorities": redmine.get_issue_priorities},
    )
    return _dumps(merged)


@main_mcp.tool(tags={"redmine", "write"})
@handle_tool_errors
@check_write_access
async def add_issue_note(
    ctx: Context,
    issue_id: Annotated[PositiveInt, Field(description="Id of the issue")],
    notes: Annotated[str, Field(description="Note text to add")],
) -> str:
    """Add a note to a Redmine issue and return the updated issue.

    Returns:
        JSON string representing the updated issue.
    """
    redmine = await get_redmine_fetcher(ctx)
    await asyncio.to_thread(redmine.add_issue_note, issue_id, notes)
    issue = await asyncio.to_thread(redmine.get_issue, issue_id, DEFAULT_ISSUE_INCLUDES)
    return _dumps(issue.to_simplified_dict())


@main_mcp.tool(tags={"redmine", "write"})
@handle_tool_errors
@check_write_access
async def transition_issue(
    ctx: Context,
    issue_id: Annotated[PositiveInt, Field(description="Id of the issue")],
    status_id: Annotated[PositiveInt, Field(description="Id of the target status")],
    notes: Annotated[
        str | None, Field(description="Optional note recorded with the change")
    ] = None,
) -> str:
    """Change the status of a Redmine issue.

    Use list_trackers_statuses to find status ids.

    Returns:
        JSON string representing the updated issue.
    """
    redmine = await get_redmine_fetcher(ctx)
    await asyncio.to_thread(redmine.transition_issue, issue_id, status_id, notes)
    issue = await asyncio.to_thread(redmine.get_issue, issue_id, DEFAULT_ISSUE_INCLUDES)
    return _dumps(issue.to_simplified_dict())


@main_mcp.tool(tags={"redmine", "write"})
@handle_tool_errors
@check_write_access
async def add_attachment(
    ctx: Context,
    issue_id: Annotated[PositiveInt, Field(description="Id of the issue")],
    filename: Annotated[str, Field(description="File name shown in Redmine")],
    data_base64: Annotated[str, Field(description="File content, base64 encoded")],
    content_type: Annotated[
        str | None, Field(description="MIME type, e.g. 'text/plain'")
    ] = None,
    description: Annotated[
        str | None, Field(description="Attachment description")
    ] = None,
) -> str:
    """Upload a file and attach it to a Redmine issue.

    Args:
        ctx: The FastMCP context.
        issue_id: Id of the issue.
        filename: File name.
        data_base64: Base64 encoded content.
        content_type: MIME type.
        description: Attachment description.

    Returns:
        JSON string representing the updated issue, including its attachments.

    Raises:
        ValueError: If the content is not valid base64 or is empty.
    """
    try:
        content = _decode_base64(data_base64)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 data for '{filename}': {e}") from e
    if not content:
        raise ValueError(f"Attachment '{filename}' is empty.")

    redmine = await get_redmine_fetcher(ctx)
    upload = await asyncio.to_thread(redmine.upload_binary, content, filename)
    upload = upload.model_copy(
        update={
            "filename": filename,
            "content_type": content_type,
            "description": description,
        }
    )
    await asyncio.to_thread(redmine.add_attachment, issue_id, [upload])
    issue = await asyncio.to_thread(redmine.get_issue, issue_id, DEFAULT_ISSUE_INCLUDES)
    return _dumps(issue.to_simplified_dict())
