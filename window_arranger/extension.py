"""
Activation lifecycle for the window arranger.

init() and disable() hold no state. enable() performs one complete run:
load the rules, connect to the window manager, log the environment, pause
briefly, then hand the rules to the sequencer.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import ConfigLoader
from .diagnostics import log_environment
from .engine import RunReport, Sequencer, Settler
from .errors import ArrangerError, ConfigLoadError
from .models import ArrangerSettings, PlacementRule
from .platform import I3Platform, WindowPlatform

logger = logging.getLogger(__name__)


class LayoutExtension:
    """Applies a layout once per enable()."""

    def __init__(
        self,
        platform: Optional[WindowPlatform] = None,
        config_path: Optional[Path] = None,
        rules: Optional[List[PlacementRule]] = None,
        settings: Optional[ArrangerSettings] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the extension.

        Args:
            platform: Window manager access (an I3Platform is connected if None)
            config_path: Layout file, used when rules is None
            rules: Literal rule list, bypassing the layout file
            settings: Timing settings; replaces the layout file's settings
            overrides: Individual settings applied on top of either
        """
        self.platform = platform
        self.loader = ConfigLoader(config_path)
        self.rules = rules
        self.settings = settings
        self.overrides = overrides or {}

    def init(self) -> None:
        logger.debug("Window arranger initialized")

    def _resolve_layout(self) -> Tuple[List[PlacementRule], ArrangerSettings]:
        """
        Get the rules and settings for this run.

        Raises:
            ConfigLoadError: If the layout file cannot be read
        """
        if self.rules is not None:
            rules = list(self.rules)
            settings = self.settings or ArrangerSettings()
        else:
            config = self.loader.load()
            if config.rejected:
                logger.warning(f"Skipping {len(config.rejected)} invalid layout records")
            rules = config.rules
            settings = self.settings or config.settings

        if self.overrides:
            settings = settings.model_copy(update=self.overrides)
        return rules, settings

    async def _resolve_platform(self, settings: ArrangerSettings) -> WindowPlatform:
        if self.platform is None:
            self.platform = await I3Platform(workspace_count=settings.workspace_count).connect()
        return self.platform

    async def enable(self) -> Optional[RunReport]:
        """
        Run the layout once.

        Returns:
            RunReport, or None if the run was aborted before any mutation
        """
        try:
            rules, settings = self._resolve_layout()
        except ConfigLoadError as e:
            logger.error(f"Aborting: {e.message}")
            return None

        try:
            platform = await self._resolve_platform(settings)
        except ArrangerError as e:
            logger.error(f"Aborting: {e.message}")
            return None
        except Exception as e:
            logger.error(f"Aborting: could not reach the window manager: {e}", exc_info=True)
            return None

        settler = Settler(settings)
        try:
            await log_environment(platform)
        except ArrangerError as e:
            logger.warning(f"Could not list the environment: {e.message}")
        except Exception as e:
            logger.warning(f"Could not list the environment: {e}", exc_info=True)
        await settler.pause(settings.initial_delay)

        sequencer = Sequencer(platform, settings=settings, settler=settler)
        return await sequencer.run(rules)

    def disable(self) -> None:
        logger.debug("Window arranger disabled")
