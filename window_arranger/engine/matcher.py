"""
Window matching by class.
"""

import logging
from typing import List

from ..models import WindowHandle
from ..platform.base import WindowPlatform

logger = logging.getLogger(__name__)


class WindowMatcher:
    """Finds open windows by resolved class."""

    def __init__(self, platform: WindowPlatform):
        self.platform = platform

    async def find_by_class(self, class_id: str, case_insensitive: bool = False) -> List[WindowHandle]:
        """
        Find every open window whose class equals class_id.

        Args:
            class_id: Class identifier to match
            case_insensitive: Compare lower-cased classes instead of exact strings

        Returns:
            All matching windows in platform enumeration order
        """
        wanted = class_id.lower() if case_insensitive else class_id

        matches = []
        for window in await self.platform.get_windows():
            window_class = window.resolved_class
            logger.debug(f"Checking window: {window_class}")
            candidate = window_class.lower() if case_insensitive else window_class
            if candidate == wanted:
                logger.debug(f"Found window: {window_class} ({window.id})")
                matches.append(window)

        return matches
