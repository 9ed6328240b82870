"""
Error types for the eww workspace widget.

Every failure carries a structured code, a human-readable message, an
optional recovery suggestion and a context dict for log output.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for eww-workspaces.

    - 1100-1199: Configuration errors
    - 1200-1299: Monitors file errors
    - 1400-1499: Window manager command errors
    - 1500-1599: Parse errors
    """

    # Configuration errors (1100-1199)
    CONFIG_INVALID = 1100

    # Monitors file errors (1200-1299)
    FILE_TIMEOUT = 1200
    MONITOR_NOT_FOUND = 1201

    # Window manager command errors (1400-1499)
    COMMAND_FAILED = 1400
    COMMAND_TIMEOUT = 1401
    SUBSCRIPTION_CLOSED = 1402

    # Parse errors (1500-1599)
    PARSE_FAILED = 1500


class WorkspacesError(Exception):
    """Base exception for all eww-workspaces errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize error.

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
        Convert error to a dictionary for structured logging.

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


class ConfigError(WorkspacesError):
    """Invalid or missing configuration value."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            code=ErrorCode.CONFIG_INVALID,
            message=message,
            suggestion="Check command-line flags and environment variables",
            context={"field": field} if field else None
        )


class FileTimeoutError(WorkspacesError):
    """Monitors file never became readable or parseable within the bound."""

    def __init__(self, path: str, timeout: float, stage: str = "waiting for"):
        """
        Initialize file timeout error.

        Args:
            path: Path to the monitors file
            timeout: Bound that elapsed, in seconds
            stage: "waiting for" or "parsing", used in the message
        """
        super().__init__(
            code=ErrorCode.FILE_TIMEOUT,
            message=f"Timeout {stage} file {path} after {timeout:.1f}s",
            suggestion="Ensure the monitors file is written by the bar launcher",
            context={"path": path, "timeout": timeout, "stage": stage}
        )


class MonitorNotFoundError(WorkspacesError):
    """Monitors file parsed but has no entry for the requested monitor."""

    def __init__(self, monitor: str, path: str, known: Optional[list] = None):
        super().__init__(
            code=ErrorCode.MONITOR_NOT_FOUND,
            message=f"Monitor {monitor!r} not found in {path}",
            suggestion=f"Known monitors: {', '.join(known)}" if known else None,
            context={"monitor": monitor, "path": path}
        )


class CommandError(WorkspacesError):
    """Window manager CLI failed to start, timed out or exited non-zero."""

    def __init__(
        self,
        command: str,
        reason: str,
        code: ErrorCode = ErrorCode.COMMAND_FAILED,
        returncode: Optional[int] = None
    ):
        """
        Initialize command error.

        Args:
            command: Executable that failed (e.g. "swaymsg")
            reason: Reason for failure
            code: Specific command error code
            returncode: Exit status of the process, if it ran
        """
        context = {"command": command, "reason": reason}
        if returncode is not None:
            context["returncode"] = returncode

        super().__init__(
            code=code,
            message=f"{command} failed: {reason}",
            suggestion="Ensure sway or i3 is running and its IPC socket is accessible",
            context=context
        )
        self.returncode = returncode


class ParseError(WorkspacesError):
    """Malformed JSON from the monitors file or a window manager reply."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            code=ErrorCode.PARSE_FAILED,
            message=f"Failed to parse {source}: {reason}",
            context={"source": source, "reason": reason}
        )
