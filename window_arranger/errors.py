"""
Error handling for the window arranger.

Every failure raised while loading a layout or applying a rule is an
ArrangerError carrying a structured code, so the sequencer can log it and
skip the smallest unit of work instead of aborting the run.
"""

from enum import Enum
from typing import Optional, Dict, Any, List


class ErrorCode(Enum):
    """
    Error codes for the window arranger.

    Ranges:
    - 1000-1099: Configuration errors
    - 1100-1199: Lookup (not found) errors
    - 1200-1299: Geometry errors
    - 1400-1499: Platform IPC errors
    """

    # Configuration errors (1000-1099)
    CONFIG_LOAD_FAILED = 1000
    CONFIG_NOT_FOUND = 1001
    SYNTAX_ERROR = 1002
    INVALID_RECORD = 1003

    # Lookup errors (1100-1199)
    MONITOR_NOT_FOUND = 1100
    WORKSPACE_NOT_FOUND = 1101
    WINDOW_NOT_FOUND = 1102

    # Geometry errors (1200-1299)
    INVALID_GEOMETRY = 1200

    # Platform IPC errors (1400-1499)
    PLATFORM_NOT_RUNNING = 1400
    PLATFORM_COMMAND_FAILED = 1401


class ArrangerError(Exception):
    """Base exception for window arranger errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize arranger error.

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
        Convert error to a dictionary for JSON output.

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


class ConfigLoadError(ArrangerError):
    """The layout resource could not be read at all."""

    def __init__(self, file_path: str, reason: str, code: ErrorCode = ErrorCode.CONFIG_LOAD_FAILED):
        """
        Initialize configuration load error.

        Args:
            file_path: Path to configuration file
            reason: Reason for load failure
            code: More specific error code, if known
        """
        super().__init__(
            code=code,
            message=f"Failed to load layout from {file_path}: {reason}",
            suggestion="Check file syntax and permissions",
            context={"file_path": file_path, "reason": reason}
        )


class RuleValidationError(ArrangerError):
    """A single layout record is missing fields or has invalid values."""

    def __init__(self, position: int, reason: str, window: Optional[str] = None):
        context: Dict[str, Any] = {"position": position}
        if window:
            context["window"] = window

        super().__init__(
            code=ErrorCode.INVALID_RECORD,
            message=f"Layout record {position} is invalid: {reason}",
            suggestion="Each record needs 'window', 'screen', 'workspace' and known 'actions'",
            context=context
        )


class MonitorNotFoundError(ArrangerError):
    """Normalized monitor index has no mapping entry."""

    def __init__(self, custom_index: int, available: int):
        super().__init__(
            code=ErrorCode.MONITOR_NOT_FOUND,
            message=f"Invalid custom screen index: {custom_index} ({available} monitors connected)",
            suggestion=f"Use a screen index between 0 and {max(available - 1, 0)}",
            context={"custom_index": custom_index, "available": available}
        )


class WorkspaceNotFoundError(ArrangerError):
    """Workspace index is outside the platform's workspace set."""

    def __init__(self, workspace_index: int):
        super().__init__(
            code=ErrorCode.WORKSPACE_NOT_FOUND,
            message=f"Workspace {workspace_index} not found",
            context={"workspace_index": workspace_index}
        )


class WindowNotFoundError(ArrangerError):
    """No open window resolves to the requested class."""

    def __init__(self, window_class: str, reason: Optional[str] = None):
        message = f"No window found for class '{window_class}'"
        if reason:
            message = f"{message}: {reason}"

        super().__init__(
            code=ErrorCode.WINDOW_NOT_FOUND,
            message=message,
            suggestion="Run 'window-arranger windows' to list the classes of open windows",
            context={"window_class": window_class}
        )


class InvalidGeometryError(ArrangerError):
    """Computed bounds fail the x>=0, y>=0, width>0, height>0 check."""

    def __init__(self, x: float, y: float, width: float, height: float, subject: str = "geometry"):
        super().__init__(
            code=ErrorCode.INVALID_GEOMETRY,
            message=(
                f"Invalid {subject} dimensions or position: "
                f"x={x}, y={y}, width={width}, height={height}"
            ),
            context={"x": x, "y": y, "width": width, "height": height}
        )


class PlatformError(ArrangerError):
    """Window manager IPC communication error."""

    def __init__(self, operation: str, reason: str, code: ErrorCode = ErrorCode.PLATFORM_COMMAND_FAILED):
        """
        Initialize platform error.

        Args:
            operation: IPC operation that failed
            reason: Reason for failure
            code: More specific error code, if known
        """
        super().__init__(
            code=code,
            message=f"Window manager {operation} failed: {reason}",
            suggestion="Ensure i3 or Sway is running and its IPC socket is accessible",
            context={"operation": operation, "reason": reason}
        )


def summarize_errors(errors: List[ArrangerError]) -> List[Dict[str, Any]]:
    """Convert a list of errors to dictionaries for JSON output."""
    return [error.to_dict() for error in errors]
