"""
Settle points between window manager mutations.

Window managers apply some changes asynchronously. Where the new state can
be observed, the settler polls for it with a bounded timeout; otherwise it
falls back to a fixed pause.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ..models import ArrangerSettings

logger = logging.getLogger(__name__)

Condition = Callable[[], Awaitable[bool]]


class Settler:
    """Waits for platform state to converge."""

    def __init__(self, settings: Optional[ArrangerSettings] = None):
        self.settings = settings or ArrangerSettings()

    async def pause(self, seconds: Optional[float] = None) -> None:
        """Sleep for a fixed interval (settle_delay by default)."""
        delay = self.settings.settle_delay if seconds is None else seconds
        if delay > 0:
            await asyncio.sleep(delay)

    async def settle(self, condition: Optional[Condition] = None, reason: str = "") -> bool:
        """
        Wait until condition holds, or for the fixed settle delay.

        Args:
            condition: Coroutine function reporting whether the state converged
            reason: Description used in log messages

        Returns:
            False if the condition timed out, True otherwise
        """
        if condition is None or not self.settings.wait_for_state:
            await self.pause()
            return True

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.settings.settle_timeout

        while True:
            if await condition():
                return True

            remaining = deadline - loop.time()
            if remaining <= 0:
                logger.warning(
                    f"Timed out after {self.settings.settle_timeout}s waiting for {reason or 'state change'}"
                )
                return False

            await asyncio.sleep(min(self.settings.poll_interval, remaining))
