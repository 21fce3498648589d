"""
Monitor index normalization.

The platform enumerates outputs in an arbitrary order. Layouts address
monitors by a reading-order index instead: sorted by x, then y, so index 0 is
the leftmost (topmost on ties) monitor. The mapping is only valid for the
monitor set observed in the same pass and is recomputed every time.
"""

import logging
from typing import Dict, List

from ..errors import MonitorNotFoundError
from ..models import MonitorDescriptor
from ..platform.base import WindowPlatform

logger = logging.getLogger(__name__)


class MonitorLayout:
    """Monitors of one normalization pass, in reading order."""

    def __init__(self, raw: List[MonitorDescriptor]):
        """
        Build the normalized order.

        Args:
            raw: Monitors in platform enumeration order
        """
        self.raw = list(raw)
        # sorted() is stable, so equal (x, y) keep their platform order
        order = sorted(range(len(self.raw)), key=lambda i: (self.raw[i].x, self.raw[i].y))
        self.monitors = [self.raw[i] for i in order]
        self.mapping: Dict[int, int] = {}

        for custom_index, original_index in enumerate(order):
            monitor = self.raw[original_index]
            self.mapping[custom_index] = original_index
            logger.debug(
                f"Custom index {custom_index} assigned to monitor with original index "
                f"{original_index} (x={monitor.x}, y={monitor.y})"
            )

    def __len__(self) -> int:
        return len(self.monitors)

    def raw_index(self, custom_index: int) -> int:
        """
        Map a normalized index back to the platform's enumeration index.

        Raises:
            MonitorNotFoundError: If no monitor has this normalized index
        """
        if custom_index not in self.mapping:
            raise MonitorNotFoundError(custom_index, len(self.monitors))
        return self.mapping[custom_index]

    def resolve(self, custom_index: int) -> MonitorDescriptor:
        """
        Get the monitor for a normalized index.

        Raises:
            MonitorNotFoundError: If no monitor has this normalized index
        """
        return self.raw[self.raw_index(custom_index)]


class MonitorIndexNormalizer:
    """Produces a fresh MonitorLayout from the platform on every call."""

    def __init__(self, platform: WindowPlatform):
        self.platform = platform

    async def normalize(self) -> MonitorLayout:
        monitors = await self.platform.get_monitors()
        return MonitorLayout(monitors)
