"""
Pytest configuration and fixtures for Window Arranger tests.

Provides an in-memory WindowPlatform that records every mutation, so the
engine can be exercised without a running window manager.
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

import pytest

# Add the package root to Python path for runs without installation
package_root = Path(__file__).parent.parent
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))

from window_arranger.errors import PlatformError  # noqa: E402
from window_arranger.models import (  # noqa: E402
    ArrangerSettings,
    Geometry,
    MaximizeFlags,
    MonitorDescriptor,
    WindowHandle,
    WorkspaceHandle,
)
from window_arranger.platform.base import WindowPlatform  # noqa: E402


def make_monitor(index: int, x: int, y: int, width: int = 1920, height: int = 1080,
                 name: Optional[str] = None) -> MonitorDescriptor:
    return MonitorDescriptor(
        index=index, x=x, y=y, width=width, height=height, name=name or f"OUT-{index}"
    )


def make_window(window_id: int, window_class: Optional[str] = None,
                instance: Optional[str] = None, title: str = "") -> WindowHandle:
    return WindowHandle(
        id=window_id, wm_class_instance=instance, wm_class=window_class, title=title
    )


class FakePlatform(WindowPlatform):
    """In-memory window manager that records calls."""

    def __init__(
        self,
        monitors: List[MonitorDescriptor],
        windows: List[WindowHandle],
        workspace_count: int = 4,
    ):
        self.monitors = list(monitors)
        self.windows = list(windows)
        self.workspace_count = workspace_count

        self.window_workspace: Dict[int, int] = {}
        self.window_monitor: Dict[int, str] = {}
        self.frames: Dict[int, Geometry] = {}
        self.maximized: Dict[int, MaximizeFlags] = {}
        self.sticky: Set[int] = set()
        self.calls: List[Tuple] = []

        # operation name -> window ids whose call raises PlatformError
        self.fail_on: Dict[str, Set[int]] = {}

    def _check(self, operation: str, window: WindowHandle) -> None:
        if window.id in self.fail_on.get(operation, set()):
            raise PlatformError(operation, f"window {window.id} no longer exists")

    def _monitor_at(self, x: float, y: float) -> Optional[MonitorDescriptor]:
        for monitor in self.monitors:
            if monitor.contains(x, y):
                return monitor
        return None

    def mutations_for(self, window_id: int) -> List[str]:
        return [call[0] for call in self.calls if call[1] == window_id]

    async def get_monitors(self) -> List[MonitorDescriptor]:
        return list(self.monitors)

    async def get_windows(self) -> List[WindowHandle]:
        return list(self.windows)

    async def get_workspace_by_index(self, index: int) -> Optional[WorkspaceHandle]:
        if 0 <= index < self.workspace_count:
            return WorkspaceHandle(index=index, number=index + 1, name=str(index + 1))
        return None

    async def get_window_workspace(self, window: WindowHandle) -> Optional[int]:
        return self.window_workspace.get(window.id)

    async def change_workspace(self, window: WindowHandle, workspace: WorkspaceHandle) -> None:
        self._check("change_workspace", window)
        self.calls.append(("change_workspace", window.id, workspace.index))
        self.window_workspace[window.id] = workspace.index

    async def get_window_monitor(self, window: WindowHandle) -> Optional[MonitorDescriptor]:
        name = self.window_monitor.get(window.id)
        for monitor in self.monitors:
            if monitor.name == name:
                return monitor
        return None

    async def move_frame(self, window: WindowHandle, x: float, y: float) -> None:
        self._check("move_frame", window)
        self.calls.append(("move_frame", window.id, x, y))
        monitor = self._monitor_at(x, y)
        if monitor is not None:
            self.window_monitor[window.id] = monitor.name

    async def move_resize_frame(self, window: WindowHandle, geometry: Geometry) -> None:
        self._check("move_resize_frame", window)
        self.calls.append(("move_resize_frame", window.id, geometry))
        self.frames[window.id] = geometry

    async def maximize(self, window: WindowHandle, flags: MaximizeFlags) -> None:
        self._check("maximize", window)
        self.calls.append(("maximize", window.id, flags))
        self.maximized[window.id] = flags

    async def unmaximize(self, window: WindowHandle, flags: MaximizeFlags) -> None:
        self._check("unmaximize", window)
        self.calls.append(("unmaximize", window.id, flags))
        self.maximized.pop(window.id, None)

    async def stick(self, window: WindowHandle) -> None:
        self._check("stick", window)
        self.calls.append(("stick", window.id))
        self.sticky.add(window.id)

    async def activate(self, window: WindowHandle) -> None:
        self.calls.append(("activate", window.id))


@pytest.fixture
def settings() -> ArrangerSettings:
    """Settings without any real waiting."""
    return ArrangerSettings(
        settle_delay=0,
        settle_timeout=0,
        poll_interval=0.01,
        initial_delay=0,
    )


@pytest.fixture
def two_monitors() -> List[MonitorDescriptor]:
    """Two side-by-side monitors, enumerated right one first."""
    return [
        make_monitor(0, 1920, 0, name="DP-2"),
        make_monitor(1, 0, 0, name="DP-1"),
    ]


@pytest.fixture
def platform(two_monitors) -> FakePlatform:
    return FakePlatform(two_monitors, [])


@pytest.fixture
def layout_file(tmp_path) -> Path:
    """Write a JSON layout with settings and three rules."""
    path = tmp_path / "layout.json"
    path.write_text("""
{
  "settings": {"settle_delay": 0, "settle_timeout": 0, "initial_delay": 0},
  "rules": [
    {"window": "A", "screen": 0, "workspace": 2, "actions": ["sticky"]},
    {"window": "B", "screen": 1, "workspace": 0, "actions": ["fullscreen"]},
    {"window": "C", "screen": 1, "workspace": 1, "actions": ["leftHalf"]}
  ]
}
""")
    return path
