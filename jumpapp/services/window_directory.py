"""
X11 window directory: EWMH queries and window activation.

Wraps the wmctrl, xprop and xdotool command-line tools. All parsing of their
text output happens here; the rest of jumpapp only sees WindowRecord objects
and integer window IDs.

Queries used:
- wmctrl -l -p -x                         window list
- wmctrl -d                               workspace list (current one flagged '*')
- xprop -root _NET_CLIENT_LIST_STACKING   stacking order, bottom-most first
- xprop -root _NET_ACTIVE_WINDOW          focused window
- xprop -id <id> _NET_WM_WINDOW_TYPE      window type atoms
"""

import logging
import re
import shutil
import socket
import subprocess
from typing import List, Optional, Sequence, Set

from ..errors import ActivationFailed, PrerequisiteMissing, WindowQueryError
from ..models import WindowRecord

logger = logging.getLogger(__name__)

REQUIRED_TOOLS = ("wmctrl", "xprop")

_WINDOW_ID_RE = re.compile(r"0x[0-9a-fA-F]+")
_WINDOW_TYPE_PREFIX = "_NET_WM_WINDOW_TYPE_"


def check_prerequisites(tools: Sequence[str] = REQUIRED_TOOLS) -> None:
    """
    Verify that the external query tools are installed.

    Args:
        tools: Executable names to look up in PATH

    Raises:
        PrerequisiteMissing: If any of them cannot be found
    """
    missing = [tool for tool in tools if shutil.which(tool) is None]
    if missing:
        logger.error(f"Missing prerequisites: {missing}")
        raise PrerequisiteMissing(missing)


def get_local_hostname() -> str:
    """Hostname wmctrl reports for windows owned by local processes."""
    return socket.gethostname()


def parse_window_id(text: str) -> int:
    """Parse a hexadecimal window ID such as 0x03a00004."""
    return int(text, 16)


def parse_class_pair(class_pair: str) -> str:
    """
    Extract the class half of a WM_CLASS "instance.Class" pair.

    The instance part may itself contain dots (org.gnome.Nautilus.Org.gnome.Nautilus),
    so the class is taken after the last dot.

    Args:
        class_pair: Dot-joined instance and class as printed by wmctrl -x

    Returns:
        Class identifier, or the whole string if it contains no dot
    """
    if class_pair == "N/A":
        return ""
    return class_pair.rsplit(".", 1)[-1]


def parse_wmctrl_line(line: str) -> Optional[WindowRecord]:
    """
    Parse one line of `wmctrl -l -p -x` output.

    Format: ID DESKTOP PID INSTANCE.CLASS HOST TITLE
    The title may be empty or contain any whitespace.

    Args:
        line: Raw output line

    Returns:
        WindowRecord, or None if the line is not a window entry
    """
    parts = line.split(None, 5)
    if len(parts) < 5 or not _WINDOW_ID_RE.fullmatch(parts[0]):
        return None

    try:
        window_id = parse_window_id(parts[0])
        workspace = int(parts[1])
        pid = int(parts[2])
    except ValueError:
        logger.debug(f"Skipping malformed wmctrl line: {line!r}")
        return None

    if window_id <= 0:
        return None

    return WindowRecord(
        id=window_id,
        workspace=workspace,
        pid=pid if pid > 0 else None,
        window_class=parse_class_pair(parts[3]),
        hostname=parts[4] if parts[4] != "N/A" else "",
        title=parts[5] if len(parts) > 5 else "",
    )


def parse_wmctrl_windows(output: str) -> List[WindowRecord]:
    """Parse full `wmctrl -l -p -x` output, preserving its order."""
    windows = []
    for line in output.splitlines():
        record = parse_wmctrl_line(line)
        if record is not None:
            windows.append(record)
    return windows


def parse_current_workspace(output: str) -> Optional[int]:
    """
    Find the current workspace in `wmctrl -d` output.

    Each line starts with the workspace number followed by '*' for the
    current workspace and '-' for the others.
    """
    for line in output.splitlines():
        parts = line.split()
        if len(parts) >= 2 and parts[1] == "*":
            try:
                return int(parts[0])
            except ValueError:
                return None
    return None


def parse_xprop_window_list(output: str) -> List[int]:
    """
    Parse a WINDOW-typed root property into window IDs.

    Example:
        _NET_CLIENT_LIST_STACKING(WINDOW): window id # 0x1a00003, 0x2c00001
    """
    if "#" not in output:
        return []
    _, _, values = output.partition("#")
    return [parse_window_id(m) for m in _WINDOW_ID_RE.findall(values)]


def parse_xprop_active_window(output: str) -> Optional[int]:
    """
    Parse _NET_ACTIVE_WINDOW; 0x0 (focus on the root/desktop) means no window.
    """
    ids = parse_xprop_window_list(output)
    if not ids or ids[0] == 0:
        return None
    return ids[0]


def parse_xprop_window_types(output: str) -> Set[str]:
    """
    Parse _NET_WM_WINDOW_TYPE atoms into lower-case tags.

    Example:
        _NET_WM_WINDOW_TYPE(ATOM) = _NET_WM_WINDOW_TYPE_NORMAL, _NET_WM_WINDOW_TYPE_DIALOG
        -> {"normal", "dialog"}

    A "not found." reply yields an empty set.
    """
    if "=" not in output:
        return set()
    _, _, values = output.partition("=")
    types = set()
    for atom in values.split(","):
        atom = atom.strip()
        if atom.startswith(_WINDOW_TYPE_PREFIX):
            atom = atom[len(_WINDOW_TYPE_PREFIX):]
        if atom:
            types.add(atom.lower())
    return types


class WindowDirectory:
    """Live queries against the X11 window manager.

    No results are cached: each call runs the underlying tool again.
    """

    def _run(self, argv: List[str]) -> subprocess.CompletedProcess:
        logger.debug(f"Running: {' '.join(argv)}")
        return subprocess.run(argv, capture_output=True, text=True, check=False)

    def _query(self, argv: List[str]) -> str:
        """Run a mandatory query; a failure is fatal."""
        try:
            result = self._run(argv)
        except FileNotFoundError:
            raise PrerequisiteMissing([argv[0]])

        if result.returncode != 0:
            reason = result.stderr.strip() or f"exit status {result.returncode}"
            logger.error(f"Query {argv} failed: {reason}")
            raise WindowQueryError(argv, reason)

        return result.stdout

    def list_windows(self) -> List[WindowRecord]:
        """Snapshot of all managed top-level windows."""
        windows = parse_wmctrl_windows(self._query(["wmctrl", "-l", "-p", "-x"]))
        logger.debug(f"Window directory lists {len(windows)} windows")
        return windows

    def get_current_workspace(self) -> Optional[int]:
        return parse_current_workspace(self._query(["wmctrl", "-d"]))

    def get_stacking_order(self) -> List[int]:
        """Window IDs from bottom-most to top-most."""
        return parse_xprop_window_list(
            self._query(["xprop", "-root", "_NET_CLIENT_LIST_STACKING"])
        )

    def get_active_window(self) -> Optional[int]:
        return parse_xprop_active_window(
            self._query(["xprop", "-root", "_NET_ACTIVE_WINDOW"])
        )

    def get_window_types(self, window_id: int) -> Set[str]:
        """
        Window type tags for one window.

        A window that disappeared since it was listed makes xprop fail; that
        is reported as an empty set (treated as "normal") and left for the
        activation step to surface.
        """
        result = self._run(["xprop", "-id", hex(window_id), "_NET_WM_WINDOW_TYPE"])
        if result.returncode != 0:
            logger.debug(
                f"Window type query failed for 0x{window_id:08x}: {result.stderr.strip()}"
            )
            return set()
        return parse_xprop_window_types(result.stdout)

    def activate_window(self, window_id: int, bring_here: bool = False) -> None:
        """
        Raise and focus a window.

        Args:
            window_id: Window to activate
            bring_here: Move the window to the current workspace instead of
                switching to the window's workspace

        Raises:
            ActivationFailed: If wmctrl could not activate the window
        """
        flag = "-R" if bring_here else "-a"
        logger.info(f"Activating window 0x{window_id:08x} (wmctrl {flag})")

        result = self._run(["wmctrl", "-i", flag, f"0x{window_id:08x}"])
        if result.returncode != 0:
            reason = result.stderr.strip() or f"wmctrl exited with status {result.returncode}"
            logger.error(f"Failed to activate window 0x{window_id:08x}: {reason}")
            raise ActivationFailed(window_id, reason)

    def minimize_window(self, window_id: int) -> None:
        """
        Minimize (iconify) a window.

        Raises:
            ActivationFailed: If xdotool could not minimize the window
        """
        logger.info(f"Minimizing window 0x{window_id:08x}")

        try:
            result = self._run(["xdotool", "windowminimize", str(window_id)])
        except FileNotFoundError:
            raise PrerequisiteMissing(["xdotool"])

        if result.returncode != 0:
            reason = result.stderr.strip() or f"xdotool exited with status {result.returncode}"
            logger.error(f"Failed to minimize window 0x{window_id:08x}: {reason}")
            raise ActivationFailed(window_id, reason, operation="minimize")
