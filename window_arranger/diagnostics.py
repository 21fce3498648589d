"""
Pre-run diagnostics written to the log.

Logging monitors and window classes before a run makes it easy to find the
class strings and screen indices to put in a layout file.
"""

import logging

from .platform.base import WindowPlatform

logger = logging.getLogger(__name__)


async def log_monitor_geometries(platform: WindowPlatform) -> None:
    logger.info("Listing monitor geometries, indices, and names:")
    for monitor in await platform.get_monitors():
        logger.info(
            f"Monitor {monitor.index}: name={monitor.name}, x={monitor.x}, y={monitor.y}, "
            f"width={monitor.width}, height={monitor.height}"
        )


async def log_window_titles(platform: WindowPlatform) -> None:
    logger.info("Listing all open windows with their titles:")
    for window in await platform.get_windows():
        logger.info(f"Window title: {window.title}")


async def log_window_classes(platform: WindowPlatform) -> None:
    logger.info("Listing WM_CLASS properties of all open windows:")
    for window in await platform.get_windows():
        logger.info(f"Window WM_CLASS: {window.resolved_class}")


async def log_environment(platform: WindowPlatform) -> None:
    """Log monitors, window titles and window classes."""
    await log_monitor_geometries(platform)
    await log_window_titles(platform)
    await log_window_classes(platform)

