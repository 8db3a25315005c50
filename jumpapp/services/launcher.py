"""
Application launcher.

Starts COMMAND either as a detached background process (the default) or by
replacing the current process image (no-fork mode). The command is resolved
against PATH first so that an unknown command is reported before anything is
started. Launched applications are not waited on; their exit status and
output are not observed.
"""

import logging
import os
import shutil
import subprocess
from typing import List, Sequence

from ..errors import CommandNotFound

logger = logging.getLogger(__name__)


def resolve_command(command: str) -> str:
    """
    Resolve a command to an executable path.

    Args:
        command: Command name or path

    Returns:
        Absolute path of the executable

    Raises:
        CommandNotFound: If the command is not an executable in PATH
    """
    path = shutil.which(command)
    if path is None:
        logger.error(f"Command not found: {command}")
        raise CommandNotFound(command)
    return path


def build_argv(command: str, args: Sequence[str]) -> List[str]:
    """argv for the new process; argv[0] keeps the name the user typed."""
    return [command, *args]


class Launcher:
    """Starts the target application."""

    def launch(self, command: str, args: Sequence[str] = (), fork: bool = True) -> None:
        """
        Launch command with arguments.

        Args:
            command: Command to run
            args: Arguments passed through to the command
            fork: Start detached and return (True), or replace this process (False)

        Raises:
            CommandNotFound: If the command cannot be resolved
        """
        path = resolve_command(command)
        argv = build_argv(command, args)

        if fork:
            self.spawn_detached(path, argv)
        else:
            self.exec_replace(path, argv)

    def spawn_detached(self, path: str, argv: List[str]) -> None:
        """Start a child in its own session with stdio discarded; do not wait."""
        logger.info(f"Launching {argv} in background")
        subprocess.Popen(
            argv,
            executable=path,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )

    def exec_replace(self, path: str, argv: List[str]) -> None:
        """Replace the current process image. Does not return on success."""
        logger.info(f"Executing {argv} in place of jumpapp")
        os.execv(path, argv)
