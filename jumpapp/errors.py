"""
Error handling for jumpapp.

Every fatal condition is a JumpappError subclass carrying a structured code.
The CLI prints a single diagnostic line for it and exits with status 1.
"""

from enum import Enum
from typing import Optional, Dict, Any, Sequence


class ErrorCode(Enum):
    """
    Error codes for jumpapp.

    Ranges:
    - 100-199: Environment errors (missing tools, no display)
    - 200-299: Window errors
    - 300-399: Launch errors
    """

    # Environment errors (100-199)
    PREREQUISITE_MISSING = 100
    WINDOW_QUERY_FAILED = 101

    # Window errors (200-299)
    PROCESS_FOUND_NO_WINDOW = 200
    ACTIVATION_FAILED = 201

    # Launch errors (300-399)
    COMMAND_NOT_FOUND = 300


class JumpappError(Exception):
    """Base exception for jumpapp failures."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize jumpapp error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class PrerequisiteMissing(JumpappError):
    """A required external tool is not installed."""

    def __init__(self, missing: Sequence[str]):
        """
        Initialize prerequisite error.

        Args:
            missing: Names of the executables that could not be found in PATH
        """
        super().__init__(
            code=ErrorCode.PREREQUISITE_MISSING,
            message=f"Required program(s) not found in PATH: {', '.join(missing)}",
            suggestion=f"Install {', '.join(missing)} and try again",
            context={"missing": list(missing)}
        )


class WindowQueryError(JumpappError):
    """A mandatory window system query failed."""

    def __init__(self, command: Sequence[str], reason: str):
        """
        Initialize window query error.

        Args:
            command: Query command that failed
            reason: Reason for failure (usually the tool's stderr)
        """
        super().__init__(
            code=ErrorCode.WINDOW_QUERY_FAILED,
            message=f"Window query '{' '.join(command)}' failed: {reason}",
            suggestion="Ensure an X11 session is running and DISPLAY is set",
            context={"command": list(command), "reason": reason}
        )


class ProcessFoundNoWindow(JumpappError):
    """A matching process is running but presents no matching window."""

    def __init__(self, command_identifier: str, pids: Sequence[int]):
        """
        Initialize process-without-window error.

        Args:
            command_identifier: Identifier used to find the processes
            pids: Process IDs that were found
        """
        super().__init__(
            code=ErrorCode.PROCESS_FOUND_NO_WINDOW,
            message=f"found running process for '{command_identifier}', but found no window to jump to",
            suggestion="Pass -f to launch a new instance anyway",
            context={"command_identifier": command_identifier, "pids": sorted(pids)}
        )


class ActivationFailed(JumpappError):
    """The chosen window could not be raised or minimized."""

    def __init__(self, window_id: int, reason: str, operation: str = "activate"):
        """
        Initialize activation error.

        Args:
            window_id: Window that could not be acted upon
            reason: Reason for failure
            operation: Operation that failed ("activate" or "minimize")
        """
        super().__init__(
            code=ErrorCode.ACTIVATION_FAILED,
            message=f"Failed to {operation} window 0x{window_id:08x}: {reason}",
            suggestion="The window may have closed; try again",
            context={"window_id": window_id, "operation": operation, "reason": reason}
        )


class CommandNotFound(JumpappError):
    """The launch target cannot be resolved."""

    def __init__(self, command: str):
        """
        Initialize command-not-found error.

        Args:
            command: Command that could not be resolved
        """
        super().__init__(
            code=ErrorCode.COMMAND_NOT_FOUND,
            message=f"Command not found: {command}",
            suggestion="Check the command name and your PATH",
            context={"command": command}
        )
