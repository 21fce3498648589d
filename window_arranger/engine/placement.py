"""
Region placement relative to a monitor.

Geometry is expressed as four fractions of the monitor's bounds:
x offset, y offset, width and height. Factors are not clamped, so values
outside [0, 1] produce frames outside or overlapping the monitor.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..errors import ArrangerError, InvalidGeometryError
from ..models import ActionTag, Geometry, MaximizeFlags, MonitorDescriptor, WindowHandle
from ..platform.base import WindowPlatform
from .dispatch import apply_to_first_match_only

logger = logging.getLogger(__name__)

# (x_factor, y_factor, width_factor, height_factor)
PRESET_FACTORS: Dict[ActionTag, Tuple[float, float, float, float]] = {
    ActionTag.LEFT_HALF: (0, 0, 0.5, 1),
    ActionTag.RIGHT_HALF: (0.5, 0, 0.5, 1),
    ActionTag.TOP_LEFT: (0, 0, 0.5, 0.5),
    ActionTag.TOP_RIGHT: (0.5, 0, 0.5, 0.5),
    ActionTag.LOW_LEFT: (0, 0.5, 0.5, 0.5),
    ActionTag.LOW_RIGHT: (0.5, 0.5, 0.5, 0.5),
}


def compute_geometry(
    monitor: MonitorDescriptor,
    x_factor: float,
    y_factor: float,
    width_factor: float,
    height_factor: float,
) -> Geometry:
    """
    Compute a frame as fractions of a monitor.

    Args:
        monitor: Monitor whose bounds the factors refer to
        x_factor: Left edge offset as a fraction of monitor width
        y_factor: Top edge offset as a fraction of monitor height
        width_factor: Width as a fraction of monitor width
        height_factor: Height as a fraction of monitor height

    Returns:
        Geometry in global pixel coordinates
    """
    return Geometry(
        x=monitor.x + monitor.width * x_factor,
        y=monitor.y + monitor.height * y_factor,
        width=monitor.width * width_factor,
        height=monitor.height * height_factor,
    )


def preset_geometry(monitor: MonitorDescriptor, preset: ActionTag) -> Geometry:
    """
    Compute the frame of a canonical preset.

    Raises:
        KeyError: If preset is not a resize preset
    """
    return compute_geometry(monitor, *PRESET_FACTORS[preset])


class PlacementEngine:
    """Applies resize presets to windows."""

    def __init__(self, platform: WindowPlatform):
        self.platform = platform

    async def move_resize(
        self,
        window: WindowHandle,
        preset: ActionTag,
        fallback_monitor: MonitorDescriptor,
    ) -> Geometry:
        """
        Unmaximize a window and fit it to a preset region.

        The region is computed against the monitor the window is on now;
        fallback_monitor is used when the platform cannot tell.

        Raises:
            InvalidGeometryError: If the computed frame has no area
        """
        window_class = window.resolved_class
        logger.info(f"Unmaximizing window: {window_class}")
        # Resizing a maximized window is a no-op, so clear both axes first
        await self.platform.unmaximize(window, MaximizeFlags.HORIZONTAL | MaximizeFlags.VERTICAL)

        monitor = await self.platform.get_window_monitor(window) or fallback_monitor
        geometry = preset_geometry(monitor, preset)
        if not geometry.has_area():
            raise InvalidGeometryError(
                geometry.x, geometry.y, geometry.width, geometry.height, subject="preset frame"
            )

        logger.info(
            f"New position and size: x={geometry.x}, y={geometry.y}, "
            f"width={geometry.width}, height={geometry.height}"
        )
        await self.platform.move_resize_frame(window, geometry)
        await self.platform.activate(window)
        logger.info(f"Window moved and resized: {window_class}")
        return geometry

    async def apply_preset(
        self,
        windows: List[WindowHandle],
        preset: ActionTag,
        fallback_monitor: MonitorDescriptor,
        errors: Optional[List[ArrangerError]] = None,
    ) -> int:
        """
        Apply a resize preset to the first matching window only.

        Returns:
            Number of windows resized (0 or 1)
        """
        async def resize(window: WindowHandle) -> Geometry:
            return await self.move_resize(window, preset, fallback_monitor)

        return await apply_to_first_match_only(windows, resize, preset.value, errors)
