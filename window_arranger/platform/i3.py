"""
i3 / Sway implementation of the platform port.

Uses direct i3ipc.aio calls. Workspace index i maps to workspace number i + 1.
i3 has no per-axis maximize, so maximize maps to fullscreen and unmaximize
drops fullscreen and floats the window (tiled windows ignore resize/move).
"""

import logging
from typing import List, Optional

from i3ipc.aio import Con, Connection

from ..errors import ErrorCode, PlatformError
from ..models import (
    Geometry,
    MaximizeFlags,
    MonitorDescriptor,
    WindowHandle,
    WorkspaceHandle,
)
from .base import WindowPlatform

logger = logging.getLogger(__name__)


def _is_floating(con: Con) -> bool:
    """Check floating state on both i3 (floating flag) and Sway (floating_con)."""
    if getattr(con, "type", None) == "floating_con":
        return True
    return getattr(con, "floating", None) in ("auto_on", "user_on")


def window_from_con(con: Con) -> WindowHandle:
    """
    Build a WindowHandle from an i3ipc container.

    X11 windows expose WM_CLASS instance and class; native Wayland windows on
    Sway only carry app_id, which then stands in for the class.
    """
    instance = getattr(con, "window_instance", None)
    window_class = getattr(con, "window_class", None) or getattr(con, "app_id", None)
    return WindowHandle(
        id=con.id,
        wm_class_instance=instance or None,
        wm_class=window_class or None,
        title=con.name or "",
    )


class I3Platform(WindowPlatform):
    """WindowPlatform backed by an i3/Sway IPC connection."""

    def __init__(self, connection: Optional[Connection] = None, workspace_count: int = 10):
        """
        Initialize the i3 platform.

        Args:
            connection: Async i3ipc Connection (created by connect() if None)
            workspace_count: Number of addressable workspaces
        """
        self.conn = connection
        self.workspace_count = workspace_count

    async def connect(self) -> "I3Platform":
        """Open the IPC connection if none was injected."""
        if self.conn is None:
            try:
                self.conn = await Connection(auto_reconnect=True).connect()
            except Exception as e:
                raise PlatformError("connect", str(e), code=ErrorCode.PLATFORM_NOT_RUNNING)
            logger.info("Connected to window manager IPC")
        return self

    def _require_connection(self) -> Connection:
        if self.conn is None:
            raise PlatformError(
                "query", "not connected", code=ErrorCode.PLATFORM_NOT_RUNNING
            )
        return self.conn

    async def get_monitors(self) -> List[MonitorDescriptor]:
        conn = self._require_connection()
        outputs = await conn.get_outputs()

        monitors = []
        for output in outputs:
            if not output.active:
                continue
            monitors.append(MonitorDescriptor(
                index=len(monitors),
                x=output.rect.x,
                y=output.rect.y,
                width=output.rect.width,
                height=output.rect.height,
                name=output.name,
            ))
        return monitors

    async def get_windows(self) -> List[WindowHandle]:
        conn = self._require_connection()
        tree = await conn.get_tree()
        return [window_from_con(con) for con in tree.leaves()]

    async def get_workspace_by_index(self, index: int) -> Optional[WorkspaceHandle]:
        if index < 0 or index >= self.workspace_count:
            return None

        number = index + 1
        name = str(number)
        conn = self._require_connection()
        for workspace in await conn.get_workspaces():
            if workspace.num == number:
                name = workspace.name
                break

        return WorkspaceHandle(index=index, number=number, name=name)

    async def _find_con(self, window: WindowHandle) -> Con:
        conn = self._require_connection()
        tree = await conn.get_tree()
        con = tree.find_by_id(window.id)
        if con is None:
            raise PlatformError("lookup", f"window {window.id} no longer exists")
        return con

    async def get_window_workspace(self, window: WindowHandle) -> Optional[int]:
        con = await self._find_con(window)
        workspace = con.workspace()
        if workspace is None or workspace.num is None or workspace.num < 1:
            return None
        return workspace.num - 1

    async def get_window_monitor(self, window: WindowHandle) -> Optional[MonitorDescriptor]:
        con = await self._find_con(window)
        workspace = con.workspace()
        if workspace is None:
            return None

        conn = self._require_connection()
        output_name = None
        for reply in await conn.get_workspaces():
            if reply.name == workspace.name:
                output_name = reply.output
                break

        if output_name is None:
            return None

        for monitor in await self.get_monitors():
            if monitor.name == output_name:
                return monitor
        return None

    async def _command(self, window: WindowHandle, command: str) -> None:
        """
        Run a command scoped to one container.

        Raises:
            PlatformError: If any reply reports failure
        """
        conn = self._require_connection()
        full_command = f"[con_id={window.id}] {command}"
        replies = await conn.command(full_command)
        for reply in replies or []:
            if not reply.success:
                raise PlatformError(command, reply.error or "command rejected")
        logger.debug(f"Ran: {full_command}")

    async def change_workspace(self, window: WindowHandle, workspace: WorkspaceHandle) -> None:
        await self._command(window, f"move container to workspace number {workspace.number}")

    async def move_frame(self, window: WindowHandle, x: float, y: float) -> None:
        con = await self._find_con(window)
        if _is_floating(con):
            await self._command(window, f"move absolute position {int(x)} px {int(y)} px")
            return

        # Tiled containers cannot be positioned. Moving the container to an
        # output would re-parent it onto that output's visible workspace, so
        # move the window's workspace instead.
        for monitor in await self.get_monitors():
            if monitor.contains(x, y):
                await self._command(window, f"move workspace to output {monitor.name}")
                return

        raise PlatformError("move", f"no output contains point ({x}, {y})")

    async def move_resize_frame(self, window: WindowHandle, geometry: Geometry) -> None:
        await self._command(
            window,
            f"floating enable, "
            f"resize set {round(geometry.width)} px {round(geometry.height)} px, "
            f"move absolute position {round(geometry.x)} px {round(geometry.y)} px"
        )

    async def maximize(self, window: WindowHandle, flags: MaximizeFlags) -> None:
        if flags:
            await self._command(window, "fullscreen enable")

    async def unmaximize(self, window: WindowHandle, flags: MaximizeFlags) -> None:
        if flags:
            await self._command(window, "fullscreen disable, floating enable")

    async def stick(self, window: WindowHandle) -> None:
        await self._command(window, "sticky enable")

    async def activate(self, window: WindowHandle) -> None:
        await self._command(window, "focus")
