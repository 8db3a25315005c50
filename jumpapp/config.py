"""Invocation options and derivation of match criteria.

jumpapp reads no configuration files and keeps no state between runs. The
options of one invocation come from the command line (and JUMPAPP_VERBOSE),
are validated here, and turned into an immutable MatchCriteria.
"""

import logging
import os
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .models import Direction, MatchCriteria, validate_title_pattern

logger = logging.getLogger(__name__)


class JumpOptions(BaseModel):
    """Options for one jumpapp invocation."""
    model_config = {"frozen": True}

    command: str = Field(..., min_length=1, description="Command to launch if no window is found")
    args: List[str] = Field(default_factory=list, description="Passthrough arguments for COMMAND")

    reverse: bool = Field(False, description="Cycle through windows in reverse order")
    force: bool = Field(False, description="Launch even if a process is found but no window")
    fork: bool = Field(True, description="Launch in the background instead of replacing jumpapp")
    passthrough: bool = Field(False, description="Launch instead of focusing when ARGs are given")
    list_only: bool = Field(False, description="List matching windows and exit")

    title: Optional[str] = Field(None, description="Regex the window title must match")
    class_name: Optional[str] = Field(None, min_length=1, description="WM_CLASS to match instead of COMMAND")
    command_name: Optional[str] = Field(None, min_length=1, description="Process name to match instead of COMMAND")
    current_workspace_only: bool = Field(False, description="Only match windows on the active workspace")

    bring_here: bool = Field(False, description="Move the window to the current workspace when raising")
    minimize: bool = Field(False, description="Minimize the only matching window if it is focused")

    @field_validator("title")
    @classmethod
    def validate_title_regex(cls, v: Optional[str]) -> Optional[str]:
        return validate_title_pattern(v)

    @property
    def command_basename(self) -> str:
        return os.path.basename(self.command) or self.command

    @property
    def class_identifier(self) -> str:
        return self.class_name if self.class_name is not None else self.command_basename

    @property
    def command_identifier(self) -> str:
        return self.command_name if self.command_name is not None else self.command_basename

    @property
    def effective_force(self) -> bool:
        """Passthrough mode implies force."""
        return self.force or self.passthrough

    @property
    def direction(self) -> Direction:
        return Direction.BACKWARD if self.reverse else Direction.FORWARD


def build_criteria(options: JumpOptions, current_workspace: Optional[int] = None) -> MatchCriteria:
    """
    Derive match criteria from invocation options.

    Args:
        options: Validated invocation options
        current_workspace: Active workspace, used when current_workspace_only is set

    Returns:
        Immutable MatchCriteria for this invocation
    """
    workspace_filter = None
    if options.current_workspace_only:
        if current_workspace is None:
            logger.warning("Active workspace unknown; not restricting matches by workspace")
        workspace_filter = current_workspace

    criteria = MatchCriteria(
        class_identifier=options.class_identifier,
        command_identifier=options.command_identifier,
        title_pattern=options.title,
        workspace_filter=workspace_filter,
    )
    logger.debug(f"Match criteria: {criteria.model_dump()}")
    return criteria
