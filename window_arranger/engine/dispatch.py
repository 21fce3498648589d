"""
Fan-out of one window action over the windows matching a rule.

Tags and workspace moves go to every match. Resize presets deliberately go
to the first match only, so windows sharing a class do not get stacked on
the same region.
"""

import logging
from typing import Awaitable, Callable, List, Optional

from ..errors import ArrangerError, PlatformError
from ..models import WindowHandle

logger = logging.getLogger(__name__)

WindowAction = Callable[[WindowHandle], Awaitable[object]]


async def _apply_one(
    window: WindowHandle,
    action: WindowAction,
    label: str,
    errors: Optional[List[ArrangerError]],
) -> bool:
    try:
        await action(window)
        return True
    except ArrangerError as e:
        logger.warning(f"{label} skipped for window {window.id} ({window.resolved_class}): {e.message}")
        if errors is not None:
            errors.append(e)
        return False
    except Exception as e:
        logger.warning(f"{label} failed for window {window.id} ({window.resolved_class}): {e}", exc_info=True)
        if errors is not None:
            errors.append(PlatformError(label, str(e)))
        return False


async def apply_to_all_matches(
    windows: List[WindowHandle],
    action: WindowAction,
    label: str,
    errors: Optional[List[ArrangerError]] = None,
) -> int:
    """
    Apply an action to every window, one after another.

    Args:
        windows: Matching windows in enumeration order
        action: Coroutine function applied to each window
        label: Action name used in log messages
        errors: Collects errors of skipped windows, if given

    Returns:
        Number of windows the action succeeded on
    """
    applied = 0
    for window in windows:
        if await _apply_one(window, action, label, errors):
            applied += 1
    return applied


async def apply_to_first_match_only(
    windows: List[WindowHandle],
    action: WindowAction,
    label: str,
    errors: Optional[List[ArrangerError]] = None,
) -> int:
    """
    Apply an action to the first window only.

    Returns:
        1 if the action succeeded on the first window, else 0
    """
    if not windows:
        return 0
    if len(windows) > 1:
        logger.debug(f"{label}: {len(windows) - 1} further matching windows left untouched")
    return 1 if await _apply_one(windows[0], action, label, errors) else 0
