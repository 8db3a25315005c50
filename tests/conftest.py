"""
Pytest configuration and shared fixtures for jumpapp tests.

Provides in-memory stand-ins for the window directory, process directory and
launcher so the core pipeline can be exercised without an X server.
"""

from typing import Dict, Iterable, List, Optional, Set

import pytest

from jumpapp.errors import ActivationFailed
from jumpapp.models import WindowRecord

LOCAL_HOST = "workstation"


class FakeWindowDirectory:
    """Window directory backed by plain lists; records every action."""

    def __init__(
        self,
        windows: Iterable[WindowRecord] = (),
        stacking_order: Optional[List[int]] = None,
        active_window: Optional[int] = None,
        window_types: Optional[Dict[int, Set[str]]] = None,
        current_workspace: Optional[int] = 0,
    ):
        self.windows = list(windows)
        self.stacking_order = (
            list(stacking_order) if stacking_order is not None else [w.id for w in self.windows]
        )
        self.active_window = active_window
        self.window_types = window_types or {}
        self.current_workspace = current_workspace

        self.type_queries: List[int] = []
        self.activated: List[tuple] = []
        self.minimized: List[int] = []
        self.fail_activation = False

    def list_windows(self) -> List[WindowRecord]:
        return list(self.windows)

    def get_current_workspace(self) -> Optional[int]:
        return self.current_workspace

    def get_stacking_order(self) -> List[int]:
        return list(self.stacking_order)

    def get_active_window(self) -> Optional[int]:
        return self.active_window

    def get_window_types(self, window_id: int) -> Set[str]:
        self.type_queries.append(window_id)
        return set(self.window_types.get(window_id, set()))

    def activate_window(self, window_id: int, bring_here: bool = False) -> None:
        if self.fail_activation:
            raise ActivationFailed(window_id, "BadWindow")
        self.activated.append((window_id, bring_here))
        self.active_window = window_id

    def minimize_window(self, window_id: int) -> None:
        self.minimized.append(window_id)


class FakeProcessDirectory:
    def __init__(self, pids_by_command: Optional[Dict[str, Set[int]]] = None):
        self.pids_by_command = pids_by_command or {}
        self.queries: List[str] = []

    def list_pids_for_command(self, command_identifier: str) -> Set[int]:
        self.queries.append(command_identifier)
        return set(self.pids_by_command.get(command_identifier, set()))


class FakeLauncher:
    def __init__(self):
        self.launches: List[tuple] = []

    def launch(self, command, args=(), fork=True) -> None:
        self.launches.append((command, list(args), fork))


@pytest.fixture
def make_window():
    """
    Factory for WindowRecord with sensible defaults.

    Returns:
        Callable accepting WindowRecord fields as keyword arguments
    """
    def _make(window_id: int, **fields) -> WindowRecord:
        fields.setdefault("hostname", LOCAL_HOST)
        fields.setdefault("workspace", 0)
        fields.setdefault("window_class", "Firefox")
        fields.setdefault("title", f"Window {window_id}")
        return WindowRecord(id=window_id, **fields)

    return _make


@pytest.fixture
def local_hostname() -> str:
    return LOCAL_HOST


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def window_directory_factory():
    """Constructor for FakeWindowDirectory."""
    return FakeWindowDirectory


@pytest.fixture
def process_directory_factory():
    """Constructor for FakeProcessDirectory."""
    return FakeProcessDirectory
