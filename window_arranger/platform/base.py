"""
Platform port for window arrangement.

The arranger never talks to a window manager directly; it receives a
WindowPlatform and only uses the operations declared here. Implementations
must return fresh snapshots on every query.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import (
    Geometry,
    MaximizeFlags,
    MonitorDescriptor,
    WindowHandle,
    WorkspaceHandle,
)


class WindowPlatform(ABC):
    """Window, monitor and workspace access for the arranger."""

    @abstractmethod
    async def get_monitors(self) -> List[MonitorDescriptor]:
        """Get all monitors in platform enumeration order."""

    @abstractmethod
    async def get_windows(self) -> List[WindowHandle]:
        """Get all open windows in platform enumeration order."""

    @abstractmethod
    async def get_workspace_by_index(self, index: int) -> Optional[WorkspaceHandle]:
        """
        Look up a workspace by zero-based index.

        Returns:
            WorkspaceHandle or None if the index does not exist
        """

    @abstractmethod
    async def get_window_workspace(self, window: WindowHandle) -> Optional[int]:
        """Get the zero-based workspace index a window is on, if known."""

    @abstractmethod
    async def change_workspace(self, window: WindowHandle, workspace: WorkspaceHandle) -> None:
        """Move a window to a workspace."""

    @abstractmethod
    async def get_window_monitor(self, window: WindowHandle) -> Optional[MonitorDescriptor]:
        """Get the monitor a window is currently shown on, if known."""

    @abstractmethod
    async def move_frame(self, window: WindowHandle, x: float, y: float) -> None:
        """Move a window's frame so its origin is at (x, y)."""

    @abstractmethod
    async def move_resize_frame(self, window: WindowHandle, geometry: Geometry) -> None:
        """Move and resize a window's frame."""

    @abstractmethod
    async def maximize(self, window: WindowHandle, flags: MaximizeFlags) -> None:
        """Maximize a window along the given axes."""

    @abstractmethod
    async def unmaximize(self, window: WindowHandle, flags: MaximizeFlags) -> None:
        """Clear maximize state along the given axes."""

    @abstractmethod
    async def stick(self, window: WindowHandle) -> None:
        """Make a window visible on all workspaces."""

    @abstractmethod
    async def activate(self, window: WindowHandle) -> None:
        """Focus and raise a window."""
