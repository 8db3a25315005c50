"""
Match filter pipeline.

Narrows the window directory down to the windows of the target application.
The pipeline is an ordered list of named stages, each a predicate over one
WindowRecord. Stages run in list order on the survivors of the previous stage:

1. title           - title regex (cheap, often very selective)
2. class_or_pid    - WM_CLASS match, or local pid owned by the command
3. workspace       - current workspace or sticky
4. window_type     - one xprop query per survivor, so it must stay last

The output keeps input order. Records that reach the window_type stage come
out carrying the type tags fetched for them. An empty result is a normal
outcome ("no window found"); no stage raises.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Set

from ..models import MatchCriteria, WindowRecord

logger = logging.getLogger(__name__)

WindowTypeLookup = Callable[[int], Set[str]]


@dataclass(frozen=True)
class FilterStage:
    """One named filter predicate, optionally preceded by a record enrichment."""
    name: str
    predicate: Callable[[WindowRecord], bool]
    enrich: Optional[Callable[[WindowRecord], WindowRecord]] = None

    def apply(self, windows: Iterable[WindowRecord]) -> List[WindowRecord]:
        if self.enrich is not None:
            windows = [self.enrich(w) for w in windows]
        return [w for w in windows if self.predicate(w)]


def title_stage(criteria: MatchCriteria) -> FilterStage:
    return FilterStage("title", lambda w: criteria.matches_title(w.title))


def class_or_pid_stage(
    criteria: MatchCriteria,
    candidate_pids: Set[int],
    local_hostname: str,
) -> FilterStage:
    """
    Keep windows whose class matches, or that belong to a matching local process.

    PIDs are only comparable on the host that owns them, so a window from a
    remote client can only match by class.
    """
    local_host = local_hostname.lower()

    def predicate(window: WindowRecord) -> bool:
        if criteria.matches_class(window.window_class):
            return True
        return (
            window.hostname.lower() == local_host
            and window.pid is not None
            and window.pid in candidate_pids
        )

    return FilterStage("class_or_pid", predicate)


def workspace_stage(criteria: MatchCriteria) -> FilterStage:
    def predicate(window: WindowRecord) -> bool:
        if criteria.workspace_filter is None:
            return True
        return window.is_sticky or window.workspace == criteria.workspace_filter

    return FilterStage("workspace", predicate)


def window_type_stage(window_types: Optional[WindowTypeLookup]) -> FilterStage:
    """
    Reject docks, splash screens, tooltips and other non-application windows.

    Type tags already present on the record are used as-is; otherwise they
    are fetched through window_types (a live query) and stored on the
    returned record.
    """
    def enrich(window: WindowRecord) -> WindowRecord:
        if window.window_types or window_types is None:
            return window
        tags = window_types(window.id)
        if not tags:
            return window
        return window.model_copy(update={"window_types": frozenset(t.lower() for t in tags)})

    return FilterStage("window_type", lambda w: w.is_focusable_type, enrich)


def build_filter_stages(
    criteria: MatchCriteria,
    candidate_pids: Set[int],
    local_hostname: str,
    window_types: Optional[WindowTypeLookup] = None,
) -> List[FilterStage]:
    """Filter stages in execution order."""
    return [
        title_stage(criteria),
        class_or_pid_stage(criteria, candidate_pids, local_hostname),
        workspace_stage(criteria),
        window_type_stage(window_types),
    ]


def run_stages(windows: Sequence[WindowRecord], stages: Sequence[FilterStage]) -> List[WindowRecord]:
    remaining = list(windows)
    for stage in stages:
        remaining = stage.apply(remaining)
        logger.debug(f"Filter stage '{stage.name}': {len(remaining)} window(s) remain")
        if not remaining:
            break
    return remaining


def filter_windows(
    all_windows: Sequence[WindowRecord],
    criteria: MatchCriteria,
    candidate_pids: Set[int],
    local_hostname: str,
    window_types: Optional[WindowTypeLookup] = None,
) -> List[WindowRecord]:
    """
    Select the windows that belong to the target application.

    Args:
        all_windows: Window directory snapshot
        criteria: Target application identity
        candidate_pids: PIDs from the process directory for criteria.command_identifier
        local_hostname: Hostname of this machine
        window_types: Live type-tag lookup by window ID (None uses record tags only)

    Returns:
        Matching windows, in input order
    """
    stages = build_filter_stages(criteria, candidate_pids, local_hostname, window_types)
    matches = run_stages(all_windows, stages)
    logger.info(
        f"{len(matches)} of {len(all_windows)} window(s) match "
        f"class '{criteria.class_identifier}' / command '{criteria.command_identifier}'"
    )
    return matches
