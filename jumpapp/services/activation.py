"""
Activation/launch decision and per-invocation orchestration.

decide() is the pure rule set:

1. matching windows exist and passthrough is not forcing a launch -> FOCUS
2. a matching process runs but has no window, and no force         -> REPORT_NO_WINDOW
3. otherwise                                                        -> LAUNCH

Rule 2 keeps jumpapp from starting a second instance of an application that
is minimized to the tray or still starting up.

JumpService wires the collaborators together for one invocation: process
lookup, window filtering, selection, decision, and finally activation or
launch. Every query is made fresh; nothing is cached between steps.
"""

import logging
from typing import Callable, Collection, List, Optional, Sequence, Set

from ..config import JumpOptions, build_criteria
from ..errors import ProcessFoundNoWindow
from ..models import Action, ActionKind, MatchCriteria, WindowRecord
from .launcher import Launcher
from .process_directory import ProcessDirectory
from .stacking_selector import StackingOrderSelector
from .window_directory import REQUIRED_TOOLS, WindowDirectory, check_prerequisites, get_local_hostname
from .window_filter import filter_windows

logger = logging.getLogger(__name__)

WindowSelector = Callable[[Set[int]], Optional[int]]


def _first_match(window_ids: Set[int], ordered: Sequence[WindowRecord]) -> Optional[int]:
    for window in ordered:
        if window.id in window_ids:
            return window.id
    return None


def decide(
    matches: Sequence[WindowRecord],
    pids: Collection[int],
    force: bool,
    passthrough_args: Sequence[str],
    passthrough: bool = False,
    select: Optional[WindowSelector] = None,
) -> Action:
    """
    Choose between focusing a window, reporting a windowless process, and launching.

    Args:
        matches: Windows that passed the filter pipeline
        pids: Running processes of the target command
        force: Launch even when a process is running
        passthrough_args: Arguments that would be passed to the launched command
        passthrough: Passthrough mode; with arguments present it forces a launch
        select: Picks the window to focus from the match IDs
            (defaults to the first match in directory order, which is also
            the fallback when the selector yields nothing)

    Returns:
        Action to take
    """
    launch_for_args = passthrough and bool(passthrough_args)

    if matches and not launch_for_args:
        window_ids = {w.id for w in matches}
        if select is None:
            window_id = _first_match(window_ids, matches)
        else:
            window_id = select(window_ids)
            if window_id is None:
                # None of the matches is in the stacking order
                logger.info("No match in the stacking order, focusing first match")
                window_id = _first_match(window_ids, matches)

        return Action.focus(window_id)

    if pids and not (force or passthrough):
        return Action.report_no_window(frozenset(pids))

    return Action.launch()


def ensure_prerequisites(options: JumpOptions) -> None:
    """Fail before any work if a needed tool is missing."""
    tools = list(REQUIRED_TOOLS)
    if options.minimize:
        tools.append("xdotool")
    check_prerequisites(tools)


class JumpService:
    """Runs one focus-or-launch invocation."""

    def __init__(
        self,
        options: JumpOptions,
        window_directory: Optional[WindowDirectory] = None,
        process_directory: Optional[ProcessDirectory] = None,
        launcher: Optional[Launcher] = None,
        local_hostname: Optional[str] = None,
    ):
        """Initialize service.

        Args:
            options: Validated invocation options
            window_directory: Window system queries/activation (X11 by default)
            process_directory: Process table queries (psutil by default)
            launcher: Application launcher
            local_hostname: This machine's hostname (auto-detected if None)
        """
        self.options = options
        self.window_directory = window_directory or WindowDirectory()
        self.process_directory = process_directory or ProcessDirectory()
        self.launcher = launcher or Launcher()
        self.local_hostname = local_hostname or get_local_hostname()
        self.selector = StackingOrderSelector(self.window_directory)

    def build_criteria(self) -> MatchCriteria:
        current_workspace = None
        if self.options.current_workspace_only:
            current_workspace = self.window_directory.get_current_workspace()
        return build_criteria(self.options, current_workspace)

    def find_matches(self, criteria: MatchCriteria, pids: Set[int]) -> List[WindowRecord]:
        return filter_windows(
            self.window_directory.list_windows(),
            criteria,
            pids,
            self.local_hostname,
            window_types=self.window_directory.get_window_types,
        )

    def list_matches(self) -> List[WindowRecord]:
        """Matching windows for -L, in window directory order."""
        criteria = self.build_criteria()
        pids = self.process_directory.list_pids_for_command(criteria.command_identifier)
        return self.find_matches(criteria, pids)

    def plan(self) -> Action:
        """Query the window system and decide what to do."""
        criteria = self.build_criteria()
        pids = self.process_directory.list_pids_for_command(criteria.command_identifier)
        matches = self.find_matches(criteria, pids)

        action = decide(
            matches,
            pids,
            force=self.options.effective_force,
            passthrough_args=self.options.args,
            passthrough=self.options.passthrough,
            select=lambda ids: self.selector.select_next(ids, self.options.direction),
        )

        if (
            action.kind == ActionKind.FOCUS
            and self.options.minimize
            and len(matches) == 1
            and self.window_directory.get_active_window() == action.window_id
        ):
            action = Action.minimize(action.window_id)

        logger.info(f"Decision for '{self.options.command}': {action.kind.value}")
        return action

    def execute(self, action: Action) -> None:
        """
        Carry out a decision.

        Raises:
            ProcessFoundNoWindow: For REPORT_NO_WINDOW
            ActivationFailed: If the window could not be raised or minimized
            CommandNotFound: If the command to launch cannot be resolved
        """
        if action.kind == ActionKind.FOCUS:
            self.window_directory.activate_window(action.window_id, bring_here=self.options.bring_here)
        elif action.kind == ActionKind.MINIMIZE:
            self.window_directory.minimize_window(action.window_id)
        elif action.kind == ActionKind.REPORT_NO_WINDOW:
            raise ProcessFoundNoWindow(self.options.command_identifier, sorted(action.pids))
        elif action.kind == ActionKind.LAUNCH:
            self.launcher.launch(self.options.command, self.options.args, fork=self.options.fork)
        else:
            raise ValueError(f"Unknown action: {action.kind}")

    def run(self) -> Action:
        action = self.plan()
        self.execute(action)
        return action
