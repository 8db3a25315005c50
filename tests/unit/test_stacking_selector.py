"""Unit tests for stacking-order window selection."""

import itertools

import pytest

from jumpapp.models import Direction
from jumpapp.services.stacking_selector import StackingOrderSelector, next_in_order

A, B, C, D = 0xA, 0xB, 0xC, 0xD
STACKING = [A, B, C]  # A bottom-most, C top-most


class TestNextInOrder:
    """Pure selection over the bottom-first stacking order."""

    def test_active_match_wraps_to_first(self):
        """Active window is the top-most match: forward wraps to the bottom-most."""
        assert next_in_order(STACKING, {A, C}, active_window_id=C) == A

    def test_active_match_steps_forward(self):
        assert next_in_order(STACKING, {A, C}, active_window_id=A) == C

    def test_steps_skip_non_matches(self):
        assert next_in_order([A, B, C, D], {A, D}, active_window_id=A) == D

    def test_active_elsewhere_picks_most_recent_match(self):
        assert next_in_order(STACKING, {A, C}, active_window_id=B) == C

    def test_no_active_window_picks_most_recent_match(self):
        assert next_in_order(STACKING, {A, B}, active_window_id=None) == B

    def test_empty_matches(self):
        assert next_in_order(STACKING, set(), active_window_id=A) is None

    def test_matches_missing_from_stacking_order(self):
        assert next_in_order(STACKING, {D}, active_window_id=None) is None

    def test_active_match_missing_from_stacking_order(self):
        assert next_in_order(STACKING, {A, C, D}, active_window_id=D) == C

    @pytest.mark.parametrize("active", [None, A, B, C])
    def test_single_match_is_stable(self, active):
        for order in (STACKING, list(reversed(STACKING))):
            assert next_in_order(order, {B}, active_window_id=active) == B

    def test_cycling_visits_every_match(self):
        order = [A, B, C, D]
        matches = {A, B, D}
        active = B
        seen = []
        for _ in range(len(matches)):
            active = next_in_order(order, matches, active)
            seen.append(active)
        assert seen == [D, A, B]

    def test_backward_steps_down_the_stack(self):
        assert next_in_order(STACKING, {A, C}, C, Direction.BACKWARD) == A
        assert next_in_order(STACKING, {A, C}, A, Direction.BACKWARD) == C

    @pytest.mark.parametrize("direction", list(Direction))
    def test_no_anchor_picks_top_most_match_in_either_direction(self, direction):
        assert next_in_order(STACKING, {A, C}, B, direction) == C
        assert next_in_order(STACKING, {A, C}, None, direction) == C


class TestStackingOrderSelector:
    """Selector with live queries against a fake window directory."""

    def test_forward_wrap_scenario(self, window_directory_factory):
        directory = window_directory_factory(stacking_order=STACKING, active_window=C)
        assert StackingOrderSelector(directory).select_next({A, C}, Direction.FORWARD) == A

    def test_active_not_in_matches_scenario(self, window_directory_factory):
        directory = window_directory_factory(stacking_order=STACKING, active_window=B)
        assert StackingOrderSelector(directory).select_next({A, C}, Direction.FORWARD) == C

    def test_backward_steps_down_the_stack(self, window_directory_factory):
        directory = window_directory_factory(stacking_order=STACKING, active_window=C)
        assert StackingOrderSelector(directory).select_next({A, C}, Direction.BACKWARD) == A
        directory.active_window = A
        assert StackingOrderSelector(directory).select_next({A, C}, Direction.BACKWARD) == C

    def test_backward_without_anchor_takes_top_most_match(self, window_directory_factory):
        """Another window is focused: reverse still jumps to the most recent match."""
        directory = window_directory_factory(stacking_order=STACKING, active_window=B)
        assert StackingOrderSelector(directory).select_next({A, C}, Direction.BACKWARD) == C

    def test_empty_matches_skip_queries(self, window_directory_factory):
        directory = window_directory_factory(stacking_order=STACKING, active_window=A)
        directory.get_stacking_order = None  # would fail if called
        assert StackingOrderSelector(directory).select_next(set(), Direction.FORWARD) is None

    def test_context_is_queried_each_time(self, window_directory_factory):
        directory = window_directory_factory(stacking_order=STACKING, active_window=A)
        selector = StackingOrderSelector(directory)
        assert selector.select_next({A, C}) == C
        directory.active_window = C
        assert selector.select_next({A, C}) == A

    @pytest.mark.parametrize("matches,active", [
        (set(s), active)
        for r in range(1, 5)
        for s in itertools.combinations([A, B, C, D], r)
        for active in s
    ])
    def test_backward_equals_forward_on_reversed_stack(self, window_directory_factory, matches, active):
        """Stepping from an active match is symmetric under reversing the stack."""
        order = [A, B, C, D]
        backward = StackingOrderSelector(
            window_directory_factory(stacking_order=order, active_window=active)
        ).select_next(matches, Direction.BACKWARD)
        forward_reversed = StackingOrderSelector(
            window_directory_factory(stacking_order=list(reversed(order)), active_window=active)
        ).select_next(matches, Direction.FORWARD)
        assert backward == forward_reversed

    @pytest.mark.parametrize("active", [None, B, D])
    def test_anchor_fallback_never_empty(self, window_directory_factory, active):
        directory = window_directory_factory(stacking_order=[A, B, C, D], active_window=active)
        assert StackingOrderSelector(directory).select_next({A, C}, Direction.FORWARD) == C
