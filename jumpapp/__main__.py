"""
jumpapp CLI

Jump to (focus) an open window of an application if it is running. Otherwise
launch COMMAND (with optional ARGs) to start the application.

Usage:
    jumpapp [OPTION]... COMMAND [ARG]...

Examples:
    jumpapp firefox                     focus Firefox, cycling on repeat
    jumpapp -r firefox                  cycle in the other direction
    jumpapp -c Gnome-terminal gnome-terminal
    jumpapp -t 'Mail' -c Thunderbird thunderbird
    jumpapp -p chromium --incognito     always launch when ARGs are given
    jumpapp -L firefox                  list matching windows

Exit codes:
  0 - Window focused, windows listed, application launched, or help shown
  1 - Any failure
"""

import logging
import sys
from typing import Optional, Tuple

import click
from pydantic import ValidationError
from rich.console import Console
from rich.text import Text

from . import __version__
from .config import JumpOptions
from .displays import window_display
from .errors import JumpappError
from .services.activation import JumpService, ensure_prerequisites

logger = logging.getLogger("jumpapp")


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbose: Enable verbose (DEBUG) logging
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )


def report_error(error: JumpappError) -> None:
    """Print a single diagnostic line to stderr."""
    err_console = Console(stderr=True)
    err_console.print(Text(f"Error: {error.message}", style="red"), soft_wrap=True)
    if error.suggestion:
        logger.debug(f"Suggestion: {error.suggestion}")


def _options_from_cli(command: str, args: Tuple[str, ...], **flags) -> JumpOptions:
    try:
        return JumpOptions(command=command, args=list(args), **flags)
    except ValidationError as e:
        messages = "; ".join(err["msg"] for err in e.errors())
        raise click.UsageError(messages)


@click.command(
    context_settings={
        "help_option_names": ["-h", "--help"],
        # Everything after COMMAND belongs to COMMAND, even "-x" style tokens
        "allow_interspersed_args": False,
    }
)
@click.option("-r", "reverse", is_flag=True, help="Cycle through windows in reverse order.")
@click.option("-f", "force", is_flag=True, help="Launch COMMAND even if a process is found but no window.")
@click.option("-n", "no_fork", is_flag=True, help="Do not fork into the background when launching COMMAND.")
@click.option("-p", "passthrough", is_flag=True,
              help="Always launch COMMAND when ARGs are passed (implies -f).")
@click.option("-L", "list_only", is_flag=True, help="List matching windows for COMMAND and quit.")
@click.option("-t", "title", metavar="NAME", help="Window title has to match NAME (regex).")
@click.option("-c", "class_name", metavar="NAME", help="Find windows using NAME as WM_CLASS instead of COMMAND.")
@click.option("-i", "command_name", metavar="NAME",
              help="Find processes using NAME as the command name instead of COMMAND.")
@click.option("-w", "current_workspace_only", is_flag=True, help="Only find windows on the active workspace.")
@click.option("-R", "bring_here", is_flag=True,
              help="Bring the window to the current workspace instead of switching to its workspace.")
@click.option("-m", "minimize", is_flag=True,
              help="Minimize the window if it is the only match and already focused (needs xdotool).")
@click.option("--json", "output_json", is_flag=True, help="With -L, output JSON instead of a table.")
@click.option("-v", "--verbose", is_flag=True, envvar="JUMPAPP_VERBOSE", help="Log debug output to stderr.")
@click.version_option(__version__, "--version", prog_name="jumpapp")
@click.argument("command")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def cli(
    command: str,
    args: Tuple[str, ...],
    reverse: bool,
    force: bool,
    no_fork: bool,
    passthrough: bool,
    list_only: bool,
    title: Optional[str],
    class_name: Optional[str],
    command_name: Optional[str],
    current_workspace_only: bool,
    bring_here: bool,
    minimize: bool,
    output_json: bool,
    verbose: bool,
):
    """
    Jump to (focus) the first open window for an application, if it's running.
    Otherwise, launch COMMAND (with optional ARGs) to start the application.
    """
    setup_logging(verbose)

    if output_json and not list_only:
        raise click.UsageError("--json requires -L")

    options = _options_from_cli(
        command,
        args,
        reverse=reverse,
        force=force,
        fork=not no_fork,
        passthrough=passthrough,
        list_only=list_only,
        title=title,
        class_name=class_name,
        command_name=command_name,
        current_workspace_only=current_workspace_only,
        bring_here=bring_here,
        minimize=minimize,
    )

    try:
        ensure_prerequisites(options)
        service = JumpService(options)

        if options.list_only:
            windows = service.list_matches()
            if output_json:
                click.echo(window_display.format_windows_json(windows))
            else:
                window_display.display_windows(windows, Console())
            return

        service.run()

    except JumpappError as e:
        logger.debug(f"Failed with {e.code.name}: {e.to_dict()}")
        report_error(e)
        sys.exit(1)


def main() -> None:
    """Console script entry point; every failure, usage errors included, exits 1."""
    try:
        exit_code = cli.main(prog_name="jumpapp", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    sys.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == "__main__":
    main()
