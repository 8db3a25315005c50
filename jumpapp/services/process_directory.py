"""
Process directory: find running processes by invoked command name.

The command name is the process's own argv[0]. It is self-reported and not
verified by the kernel, so matching is a heuristic:

- any leading directory is stripped (/usr/lib/firefox/firefox -> firefox)
- the identifier only has to be a prefix of what remains

Some programs rewrite argv[0] to include their arguments
("chrome --type=renderer ..."); the prefix match still finds them. It also
means "fire" matches "firefox". That looseness is intended.
"""

import logging
import os
from typing import Iterable, List, Optional, Set

import psutil

logger = logging.getLogger(__name__)


def strip_command_path(argv0: str) -> str:
    """
    Remove the directory prefix from a self-reported command name.

    The path ends at the first " -", so directories containing spaces are
    stripped while slashes inside options appended to argv[0] are left alone.

    Example:
        >>> strip_command_path("/opt/google/chrome/chrome --type=renderer --dir=/tmp/x")
        'chrome --type=renderer --dir=/tmp/x'
        >>> strip_command_path("/opt/My Apps/foo")
        'foo'
    """
    index = argv0.find(" -")
    if index < 0:
        head, rest = argv0, ""
    else:
        head, rest = argv0[:index], argv0[index:]
    return head.rsplit("/", 1)[-1] + rest


def command_matches(cmdline: Optional[List[str]], command_identifier: str) -> bool:
    """True if the process's path-stripped argv[0] starts with the identifier."""
    if not cmdline or not cmdline[0]:
        return False
    return strip_command_path(cmdline[0]).startswith(command_identifier)


class ProcessDirectory:
    """Snapshot queries against the process table."""

    def _iter_processes(self) -> Iterable[psutil.Process]:
        return psutil.process_iter(["pid", "cmdline"])

    def list_pids_for_command(self, command_identifier: str) -> Set[int]:
        """
        Find live processes started as the given command.

        Args:
            command_identifier: Command name prefix to look for

        Returns:
            Set of matching process IDs (never includes this process)
        """
        own_pid = os.getpid()
        pids = set()

        for proc in self._iter_processes():
            # process_iter() fills unreadable attributes with None
            info = proc.info
            pid = info.get("pid")
            if pid is None or pid == own_pid:
                continue

            if command_matches(info.get("cmdline"), command_identifier):
                pids.add(pid)

        logger.debug(f"Processes matching '{command_identifier}': {sorted(pids)}")
        return pids
