from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_redmine.redmine.config import RedmineConfig


@dataclass(frozen=True)
class MainAppContext:
    """
    Context holding the Redmine configuration loaded from environment
    variables at server startup, plus server-wide flags.
    """

    full_redmine_config: RedmineConfig | None = None
    read_only: bool = False
    config_error: str | None = None
