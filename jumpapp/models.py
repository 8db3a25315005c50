"""
Data models for window resolution and focus-or-launch decisions.

This module defines the core data structures for:
- WindowRecord: One live top-level window, parsed from the window directory
- MatchCriteria: What identifies the target application for one invocation
- SelectionContext: Live stacking order and active window at selection time
- Action: Outcome of the activation/launch decision

Records are snapshots. Nothing here is cached across invocations and any of it
may be stale by the time an action is taken.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


def validate_title_pattern(v: Optional[str]) -> Optional[str]:
    """Ensure title pattern is valid regex"""
    if v is None:
        return v
    try:
        re.compile(v)
    except re.error as e:
        raise ValueError(f"Invalid title pattern '{v}': {e}")
    return v


# _NET_WM_WINDOW_TYPE tags (lower-cased suffix) that a focusable application window may carry
FOCUSABLE_WINDOW_TYPES = frozenset({"normal", "dialog"})


class Direction(Enum):
    """Cycling direction through matching windows."""
    FORWARD = "forward"  # Bottom-to-top stacking order
    BACKWARD = "backward"  # Top-to-bottom stacking order


class WindowRecord(BaseModel):
    """A top-level window as reported by the window directory"""
    model_config = {"frozen": True}

    id: int = Field(..., gt=0)
    hostname: str = ""
    pid: Optional[int] = Field(default=None, gt=0)
    workspace: int = 0
    window_class: str = ""
    title: str = ""
    window_types: FrozenSet[str] = Field(default_factory=frozenset)

    @field_validator("window_types")
    @classmethod
    def normalize_window_types(cls, v: FrozenSet[str]) -> FrozenSet[str]:
        """Store type tags lower-cased"""
        return frozenset(t.lower() for t in v)

    @property
    def hex_id(self) -> str:
        """Window ID in wmctrl notation (0x%08x)."""
        return f"0x{self.id:08x}"

    @property
    def is_sticky(self) -> bool:
        """True if the window appears on every workspace."""
        return self.workspace < 0

    @property
    def is_focusable_type(self) -> bool:
        """True if the window's type tags mark it as an application window.

        No tags at all is treated as "normal".
        """
        if not self.window_types:
            return True
        return bool(self.window_types & FOCUSABLE_WINDOW_TYPES)


class MatchCriteria(BaseModel):
    """Identity of the target application, derived once per invocation.

    Attributes:
        class_identifier: Compared case-insensitively against WindowRecord.window_class
        command_identifier: Prefix looked up in the process table
        title_pattern: Optional regex the window title must contain a match for
        workspace_filter: Optional workspace the window must be on (sticky windows always pass)
    """
    model_config = {"frozen": True}

    class_identifier: str = Field(..., min_length=1)
    command_identifier: str = Field(..., min_length=1)
    title_pattern: Optional[str] = None
    workspace_filter: Optional[int] = None

    @field_validator("title_pattern")
    @classmethod
    def validate_regex(cls, v: Optional[str]) -> Optional[str]:
        return validate_title_pattern(v)

    def matches_title(self, title: str) -> bool:
        """Unanchored search of the title pattern; always True when unset."""
        if self.title_pattern is None:
            return True
        return re.search(self.title_pattern, title) is not None

    def matches_class(self, window_class: str) -> bool:
        return window_class.lower() == self.class_identifier.lower()


@dataclass(frozen=True)
class SelectionContext:
    """Live window-system state consulted when choosing the next window."""
    stacking_order: Tuple[int, ...]  # Bottom-most first
    active_window_id: Optional[int] = None


class ActionKind(Enum):
    """Possible outcomes of one invocation."""
    FOCUS = "focus"
    MINIMIZE = "minimize"
    REPORT_NO_WINDOW = "report_no_window"
    LAUNCH = "launch"


@dataclass(frozen=True)
class Action:
    """Decision result: what to do, and to which window."""
    kind: ActionKind
    window_id: Optional[int] = None
    pids: FrozenSet[int] = field(default_factory=frozenset)

    @classmethod
    def focus(cls, window_id: int) -> "Action":
        return cls(ActionKind.FOCUS, window_id=window_id)

    @classmethod
    def minimize(cls, window_id: int) -> "Action":
        return cls(ActionKind.MINIMIZE, window_id=window_id)

    @classmethod
    def report_no_window(cls, pids: FrozenSet[int]) -> "Action":
        return cls(ActionKind.REPORT_NO_WINDOW, pids=frozenset(pids))

    @classmethod
    def launch(cls) -> "Action":
        return cls(ActionKind.LAUNCH)
