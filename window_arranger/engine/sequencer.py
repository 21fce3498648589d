"""
Sequential application of placement rules.

Rules run strictly one after another, and so do the steps inside a rule:

1. Resolve the rule's monitor from the normalized index.
2. For every matching window: change workspace, settle, move to the
   monitor origin, activate, settle.
3. Apply tags in fixed order: sticky, fullscreen, then at most one resize
   preset (first match only).

Any failure is logged and skips the smallest unit of work (one window, one
action or one rule). A run never aborts because of a single rule.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..errors import (
    ArrangerError,
    InvalidGeometryError,
    MonitorNotFoundError,
    PlatformError,
    WindowNotFoundError,
    WorkspaceNotFoundError,
)
from ..models import (
    RESIZE_PRESETS,
    ActionTag,
    ArrangerSettings,
    MaximizeFlags,
    MonitorDescriptor,
    PlacementRule,
    WindowHandle,
)
from ..platform.base import WindowPlatform
from .dispatch import apply_to_all_matches
from .matcher import WindowMatcher
from .monitors import MonitorIndexNormalizer
from .placement import PlacementEngine
from .settle import Settler

logger = logging.getLogger(__name__)


class RuleStatus(str, Enum):
    """Outcome of one rule."""
    APPLIED = "applied"
    NO_WINDOWS = "no_windows"
    FAILED = "failed"


@dataclass
class RuleOutcome:
    """What a rule did to the windows it matched."""

    rule: PlacementRule
    status: RuleStatus = RuleStatus.APPLIED
    windows_matched: int = 0
    windows_moved: int = 0
    actions_applied: Dict[str, int] = field(default_factory=dict)
    errors: List[ArrangerError] = field(default_factory=list)

    def fail(self, error: ArrangerError) -> "RuleOutcome":
        self.status = RuleStatus.FAILED
        self.errors.append(error)
        return self


@dataclass
class RunReport:
    """Outcomes of one run, in rule order."""

    outcomes: List[RuleOutcome] = field(default_factory=list)

    @property
    def applied(self) -> int:
        return sum(1 for o in self.outcomes if o.status == RuleStatus.APPLIED)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status == RuleStatus.FAILED)

    @property
    def errors(self) -> List[ArrangerError]:
        return [error for outcome in self.outcomes for error in outcome.errors]


class Sequencer:
    """Drives an ordered list of placement rules against a platform."""

    def __init__(
        self,
        platform: WindowPlatform,
        settings: Optional[ArrangerSettings] = None,
        settler: Optional[Settler] = None,
    ):
        """
        Initialize sequencer.

        Args:
            platform: Window manager access
            settings: Timing settings (defaults if None)
            settler: Settle strategy (built from settings if None)
        """
        self.platform = platform
        self.settings = settings or ArrangerSettings()
        self.settler = settler or Settler(self.settings)
        self.normalizer = MonitorIndexNormalizer(platform)
        self.matcher = WindowMatcher(platform)
        self.placement = PlacementEngine(platform)

    async def run(self, rules: Sequence[PlacementRule]) -> RunReport:
        """
        Apply rules in order, each to completion before the next starts.

        Args:
            rules: Ordered placement rules

        Returns:
            RunReport with one outcome per rule
        """
        report = RunReport()
        logger.info(f"Applying {len(rules)} placement rules")

        for position, rule in enumerate(rules):
            try:
                outcome = await self.apply_rule(rule)
            except ArrangerError as e:
                logger.error(f"Rule {position} ({rule.window}) failed: {e.message}")
                outcome = RuleOutcome(rule=rule).fail(e)
            except Exception as e:
                logger.error(f"Rule {position} ({rule.window}) failed unexpectedly: {e}", exc_info=True)
                outcome = RuleOutcome(rule=rule).fail(PlatformError("rule application", str(e)))
            report.outcomes.append(outcome)

        logger.info(
            f"Run complete: {report.applied} applied, {report.failed} failed, "
            f"{len(report.outcomes) - report.applied - report.failed} without windows"
        )
        return report

    @staticmethod
    def case_insensitive(rule: PlacementRule, placement: bool) -> bool:
        """
        Decide the class comparison for one step of a rule.

        Workspace/monitor placement compares lower-cased classes while tag
        actions compare exactly, unless the rule sets match_case.
        """
        if rule.match_case is not None:
            return not rule.match_case
        return placement

    async def apply_rule(self, rule: PlacementRule) -> RuleOutcome:
        """Apply one rule: monitor lookup, placement, then tags."""
        outcome = RuleOutcome(rule=rule)
        logger.info(
            f"Placing '{rule.window}' on screen {rule.screen}, workspace {rule.workspace}, "
            f"actions {[a.value for a in rule.actions]}"
        )

        layout = await self.normalizer.normalize()
        try:
            monitor = layout.resolve(rule.screen)
        except MonitorNotFoundError as e:
            logger.warning(e.message)
            return outcome.fail(e)

        windows = await self.matcher.find_by_class(
            rule.window, case_insensitive=self.case_insensitive(rule, placement=True)
        )
        if not windows:
            error = WindowNotFoundError(rule.window)
            logger.info(error.message)
            outcome.status = RuleStatus.NO_WINDOWS
            outcome.errors.append(error)
            return outcome

        outcome.windows_matched = len(windows)

        async def place(window: WindowHandle) -> None:
            await self._place_window(window, rule, monitor, outcome)

        await apply_to_all_matches(windows, place, "placement", outcome.errors)
        logger.info(
            f"Moved {outcome.windows_moved} windows to workspace {rule.workspace} "
            f"and monitor {rule.screen}"
        )

        await self._apply_tags(rule, monitor, outcome)
        return outcome

    async def _place_window(
        self,
        window: WindowHandle,
        rule: PlacementRule,
        monitor: MonitorDescriptor,
        outcome: RuleOutcome,
    ) -> None:
        workspace = await self.platform.get_workspace_by_index(rule.workspace)
        if workspace is None:
            raise WorkspaceNotFoundError(rule.workspace)

        logger.info(f"Moving window {window.resolved_class} to workspace: {rule.workspace}")
        await self.platform.change_workspace(window, workspace)

        async def on_workspace() -> bool:
            return await self.platform.get_window_workspace(window) == workspace.index

        await self.settler.settle(on_workspace, reason=f"window {window.id} to reach workspace {workspace.index}")

        if not monitor.has_valid_bounds():
            raise InvalidGeometryError(
                monitor.x, monitor.y, monitor.width, monitor.height, subject="monitor"
            )

        logger.info(f"Moving window to monitor at x={monitor.x}, y={monitor.y}")
        await self.platform.move_frame(window, monitor.x, monitor.y)
        await self.platform.activate(window)
        outcome.windows_moved += 1

        async def on_monitor() -> bool:
            current = await self.platform.get_window_monitor(window)
            return current is not None and current.name == monitor.name

        await self.settler.settle(on_monitor, reason=f"window {window.id} to reach monitor {monitor.name}")

    async def _apply_tags(
        self,
        rule: PlacementRule,
        monitor: MonitorDescriptor,
        outcome: RuleOutcome,
    ) -> None:
        case_insensitive = self.case_insensitive(rule, placement=False)

        if rule.has_action(ActionTag.STICKY):
            windows = await self.matcher.find_by_class(rule.window, case_insensitive=case_insensitive)
            outcome.actions_applied[ActionTag.STICKY.value] = await apply_to_all_matches(
                windows, self._make_sticky, ActionTag.STICKY.value, outcome.errors
            )
            await self.settler.settle()

        if rule.has_action(ActionTag.FULLSCREEN):
            windows = await self.matcher.find_by_class(rule.window, case_insensitive=case_insensitive)
            outcome.actions_applied[ActionTag.FULLSCREEN.value] = await apply_to_all_matches(
                windows, self._make_fullscreen, ActionTag.FULLSCREEN.value, outcome.errors
            )
            await self.settler.settle()

        preset = rule.resize_preset()
        if preset is None:
            return

        listed = [tag.value for tag in RESIZE_PRESETS if tag in rule.actions]
        if len(listed) > 1:
            logger.warning(f"Rule for '{rule.window}' lists several resize presets {listed}; applying {preset.value}")

        windows = await self.matcher.find_by_class(rule.window, case_insensitive=case_insensitive)
        outcome.actions_applied[preset.value] = await self.placement.apply_preset(
            windows, preset, monitor, outcome.errors
        )
        await self.settler.settle()

    async def _make_sticky(self, window: WindowHandle) -> None:
        logger.info(f"Making window sticky: {window.resolved_class}")
        await self.platform.stick(window)
        await self.platform.activate(window)

    async def _make_fullscreen(self, window: WindowHandle) -> None:
        logger.info(f"Making window fullscreen: {window.resolved_class}")
        await self.platform.maximize(window, MaximizeFlags.BOTH)
        await self.platform.activate(window)
