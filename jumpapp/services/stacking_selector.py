"""
Stacking-order selector.

Chooses which of the matching windows to focus. The window manager's global
stacking order is the only recency signal available: the top-most window is
the one raised most recently.

Forward traversal walks the stacking order bottom-to-top, backward traversal
walks it top-to-bottom. Given the active window:

- active window is a match: step to the next match after it in the traversal,
  wrapping around to the first match at the end
- otherwise (another app or nothing focused): take the top-most match, the
  one raised most recently, whatever the direction

Matches that do not appear in the stacking order are ignored.
"""

import logging
from typing import Collection, Optional, Sequence

from ..models import Direction, SelectionContext

logger = logging.getLogger(__name__)


def _format_id(window_id: Optional[int]) -> str:
    return "none" if window_id is None else f"0x{window_id:08x}"


def next_in_order(
    stacking_order: Sequence[int],
    matches: Collection[int],
    active_window_id: Optional[int],
    direction: Direction = Direction.FORWARD,
) -> Optional[int]:
    """
    Pick the next match relative to the active window.

    Args:
        stacking_order: Window IDs, bottom-most first
        matches: Candidate window IDs (unordered)
        active_window_id: Currently focused window, or None
        direction: Cycling direction; only orients the step from an active match

    Returns:
        Window ID to focus, or None if no match is in the stacking order
    """
    stacked_matches = [window_id for window_id in stacking_order if window_id in matches]
    if not stacked_matches:
        return None

    # No anchor: nothing focused, another app focused, or the active match
    # is missing from the stacking order
    if active_window_id not in stacked_matches:
        return stacked_matches[-1]

    if direction == Direction.BACKWARD:
        stacked_matches.reverse()

    position = stacked_matches.index(active_window_id)
    return stacked_matches[(position + 1) % len(stacked_matches)]


class StackingOrderSelector:
    """Selects the next window using live stacking order and focus queries."""

    def __init__(self, window_directory):
        """Initialize selector.

        Args:
            window_directory: Source of get_stacking_order() and get_active_window()
        """
        self.window_directory = window_directory

    def query_context(self) -> SelectionContext:
        """Fetch active window and stacking order from the window manager."""
        active = self.window_directory.get_active_window()
        stacking = tuple(self.window_directory.get_stacking_order())
        return SelectionContext(stacking_order=stacking, active_window_id=active)

    def select_next(
        self,
        matches: Collection[int],
        direction: Direction = Direction.FORWARD,
    ) -> Optional[int]:
        """
        Choose the window to focus next.

        Args:
            matches: IDs of the windows that passed the filter pipeline
            direction: Cycling direction

        Returns:
            Window ID, or None if there is nothing to focus
        """
        if not matches:
            return None

        context = self.query_context()
        selected = next_in_order(
            context.stacking_order,
            set(matches),
            context.active_window_id,
            direction,
        )

        logger.debug(
            f"Selected {_format_id(selected)} from {len(matches)} match(es) "
            f"(direction={direction.value}, active={_format_id(context.active_window_id)})"
        )
        return selected
