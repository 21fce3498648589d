"""
Sequencer tests.

Runs placement rules end to end against the in-memory platform: ordering,
the per-window and per-rule failure scopes, tag application and the class
comparison policy.
"""

from unittest.mock import AsyncMock, patch

import pytest

from conftest import FakePlatform, make_monitor, make_window
from window_arranger.engine.sequencer import RuleStatus, Sequencer
from window_arranger.errors import (
    ErrorCode,
    InvalidGeometryError,
    MonitorNotFoundError,
    PlatformError,
    WindowNotFoundError,
    WorkspaceNotFoundError,
)
from window_arranger.models import ActionTag, Geometry, PlacementRule


def rule(window, screen=0, workspace=0, actions=(), match_case=None):
    return PlacementRule(
        window=window, screen=screen, workspace=workspace,
        actions=list(actions), match_case=match_case,
    )


class TestPlacement:
    """Test workspace and monitor placement."""

    @pytest.mark.asyncio
    async def test_sticky_on_workspace(self, two_monitors, settings):
        """A single window goes to its workspace and monitor and becomes sticky."""
        platform = FakePlatform(two_monitors, [
            make_window(1, window_class="A"),
            make_window(2, window_class="Z"),
        ])

        report = await Sequencer(platform, settings).run([
            rule("A", screen=0, workspace=2, actions=[ActionTag.STICKY]),
        ])

        outcome = report.outcomes[0]
        assert outcome.status == RuleStatus.APPLIED
        assert outcome.windows_moved == 1
        assert platform.window_workspace[1] == 2
        assert platform.window_monitor[1] == "DP-1"
        assert platform.sticky == {1}
        assert platform.mutations_for(2) == []

    @pytest.mark.asyncio
    async def test_moves_to_monitor_origin(self, two_monitors, settings):
        """Screen 1 is the right monitor even though it is enumerated first."""
        platform = FakePlatform(two_monitors, [make_window(1, window_class="A")])

        await Sequencer(platform, settings).run([rule("A", screen=1)])

        assert ("move_frame", 1, 1920, 0) in platform.calls
        assert platform.window_monitor[1] == "DP-2"

    @pytest.mark.asyncio
    async def test_step_order_for_one_window(self, two_monitors, settings):
        platform = FakePlatform(two_monitors, [make_window(1, window_class="A")])

        await Sequencer(platform, settings).run([
            rule("A", actions=[ActionTag.STICKY, ActionTag.FULLSCREEN]),
        ])

        assert platform.mutations_for(1) == [
            "change_workspace", "move_frame", "activate",
            "stick", "activate",
            "maximize", "activate",
        ]

    @pytest.mark.asyncio
    async def test_invalid_workspace_skips_move(self, two_monitors, settings):
        """An unknown workspace skips the move but still applies tags."""
        platform = FakePlatform(two_monitors, [make_window(1, window_class="A")], workspace_count=4)

        report = await Sequencer(platform, settings).run([
            rule("A", workspace=7, actions=[ActionTag.STICKY]),
        ])

        outcome = report.outcomes[0]
        assert outcome.windows_moved == 0
        assert any(isinstance(e, WorkspaceNotFoundError) for e in outcome.errors)
        assert "change_workspace" not in platform.mutations_for(1)
        assert "move_frame" not in platform.mutations_for(1)
        assert platform.sticky == {1}

    @pytest.mark.asyncio
    async def test_invalid_monitor_bounds_skip_move(self, settings):
        """A monitor left of the origin fails the bounds check."""
        monitors = [
            make_monitor(0, -1920, 0, name="LEFT"),
            make_monitor(1, 0, 0, name="MAIN"),
        ]
        platform = FakePlatform(monitors, [make_window(1, window_class="A")])

        report = await Sequencer(platform, settings).run([rule("A", screen=0, workspace=1)])

        outcome = report.outcomes[0]
        assert platform.window_workspace[1] == 1
        assert "move_frame" not in platform.mutations_for(1)
        assert outcome.windows_moved == 0
        assert isinstance(outcome.errors[0], InvalidGeometryError)

    @pytest.mark.asyncio
    async def test_failing_window_does_not_stop_others(self, two_monitors, settings):
        """A platform error on one window skips only that window."""
        platform = FakePlatform(two_monitors, [
            make_window(1, window_class="B"),
            make_window(2, window_class="B"),
        ])
        platform.fail_on["change_workspace"] = {1}

        report = await Sequencer(platform, settings).run([rule("B", workspace=1)])

        outcome = report.outcomes[0]
        assert outcome.windows_matched == 2
        assert outcome.windows_moved == 1
        assert platform.window_workspace == {2: 1}
        assert isinstance(outcome.errors[0], PlatformError)


    @pytest.mark.asyncio
    async def test_unexpected_window_error_skips_window_only(self, two_monitors, settings):
        """A raw exception on one window leaves the other matches and tags intact."""
        platform = FakePlatform(two_monitors, [
            make_window(1, window_class="B"),
            make_window(2, window_class="B"),
        ])
        change_workspace = platform.change_workspace

        async def flaky_change_workspace(window, workspace):
            if window.id == 1:
                raise OSError("bad file descriptor")
            await change_workspace(window, workspace)

        with patch.object(platform, "change_workspace", flaky_change_workspace):
            report = await Sequencer(platform, settings).run([
                rule("B", screen=0, workspace=1, actions=[ActionTag.STICKY]),
            ])

        outcome = report.outcomes[0]
        assert outcome.status == RuleStatus.APPLIED
        assert platform.window_workspace == {2: 1}
        assert platform.sticky == {1, 2}
        assert isinstance(outcome.errors[0], PlatformError)
        assert "bad file descriptor" in outcome.errors[0].message


class TestRuleFailures:
    """Test rule-level failure scope."""

    @pytest.mark.asyncio
    async def test_unknown_screen_skips_rule(self, two_monitors, settings):
        """Screen 99 with two monitors fails that rule only."""
        platform = FakePlatform(two_monitors, [
            make_window(1, window_class="B"),
            make_window(2, window_class="A"),
        ])

        report = await Sequencer(platform, settings).run([
            rule("B", screen=99, actions=[ActionTag.STICKY]),
            rule("A", screen=0, workspace=1),
        ])

        first, second = report.outcomes
        assert first.status == RuleStatus.FAILED
        assert isinstance(first.errors[0], MonitorNotFoundError)
        assert platform.mutations_for(1) == []
        assert second.status == RuleStatus.APPLIED
        assert platform.window_workspace[2] == 1

    @pytest.mark.asyncio
    async def test_no_matching_windows(self, two_monitors, settings):
        platform = FakePlatform(two_monitors, [make_window(1, window_class="A")])

        report = await Sequencer(platform, settings).run([rule("thunderbird")])

        outcome = report.outcomes[0]
        assert outcome.status == RuleStatus.NO_WINDOWS
        assert isinstance(outcome.errors[0], WindowNotFoundError)
        assert platform.calls == []

    @pytest.mark.asyncio
    async def test_unexpected_exception_contained(self, two_monitors, settings):
        """A non-arranger exception fails its rule and the run goes on."""
        platform = FakePlatform(two_monitors, [make_window(1, window_class="A")])
        monitors = AsyncMock(side_effect=[RuntimeError("socket closed"), two_monitors])

        with patch.object(platform, "get_monitors", monitors):
            report = await Sequencer(platform, settings).run([
                rule("A", workspace=1),
                rule("A", workspace=2),
            ])

        first, second = report.outcomes
        assert first.status == RuleStatus.FAILED
        assert first.errors[0].code == ErrorCode.PLATFORM_COMMAND_FAILED
        assert "socket closed" in first.errors[0].message
        assert second.status == RuleStatus.APPLIED
        assert platform.window_workspace[1] == 2

    @pytest.mark.asyncio
    async def test_rules_run_in_order(self, two_monitors, settings):
        """Every call of a rule happens before the next rule starts."""
        platform = FakePlatform(two_monitors, [
            make_window(1, window_class="A"),
            make_window(2, window_class="B"),
        ])

        await Sequencer(platform, settings).run([
            rule("B", actions=[ActionTag.STICKY]),
            rule("A", actions=[ActionTag.STICKY]),
        ])

        window_order = [call[1] for call in platform.calls]
        assert window_order == sorted(window_order, reverse=True)
        assert window_order[0] == 2

    @pytest.mark.asyncio
    async def test_report_counts(self, two_monitors, settings):
        platform = FakePlatform(two_monitors, [make_window(1, window_class="A")])

        report = await Sequencer(platform, settings).run([
            rule("A"),
            rule("A", screen=5),
            rule("missing"),
        ])

        assert report.applied == 1
        assert report.failed == 1
        assert len(report.errors) == 2


class TestTags:
    """Test sticky, fullscreen and resize presets."""

    @pytest.mark.asyncio
    async def test_resize_first_match_tags_all(self, two_monitors, settings):
        """Two windows of one class: both get tags, only the first is resized."""
        platform = FakePlatform(two_monitors, [
            make_window(1, window_class="B"),
            make_window(2, window_class="B"),
        ])

        report = await Sequencer(platform, settings).run([
            rule("B", screen=1, actions=[ActionTag.STICKY, ActionTag.FULLSCREEN, ActionTag.LEFT_HALF]),
        ])

        outcome = report.outcomes[0]
        assert outcome.actions_applied == {"sticky": 2, "fullscreen": 2, "leftHalf": 1}
        assert platform.sticky == {1, 2}
        assert [call[1] for call in platform.calls if call[0] == "maximize"] == [1, 2]
        assert list(platform.frames) == [1]
        assert platform.frames[1] == Geometry(x=1920, y=0, width=960, height=1080)
        # resize unmaximized the first window only
        assert list(platform.maximized) == [2]

    @pytest.mark.asyncio
    async def test_several_presets_first_wins(self, two_monitors, settings, caplog):
        """Only one preset is applied, the first in preset order."""
        platform = FakePlatform(two_monitors, [make_window(1, window_class="B")])

        report = await Sequencer(platform, settings).run([
            rule("B", actions=[ActionTag.LOW_RIGHT, ActionTag.LEFT_HALF]),
        ])

        assert report.outcomes[0].actions_applied == {"leftHalf": 1}
        assert platform.frames[1] == Geometry(x=0, y=0, width=960, height=1080)
        assert "several resize presets" in caplog.text

    @pytest.mark.asyncio
    async def test_tag_failure_skips_window_only(self, two_monitors, settings):
        platform = FakePlatform(two_monitors, [
            make_window(1, window_class="B"),
            make_window(2, window_class="B"),
        ])
        platform.fail_on["stick"] = {1}

        report = await Sequencer(platform, settings).run([
            rule("B", actions=[ActionTag.STICKY, ActionTag.FULLSCREEN]),
        ])

        outcome = report.outcomes[0]
        assert outcome.actions_applied == {"sticky": 1, "fullscreen": 2}
        assert platform.sticky == {2}


class TestCasePolicy:
    """Test the class comparison used by each step."""

    @pytest.fixture
    def platform(self, two_monitors):
        return FakePlatform(two_monitors, [make_window(1, window_class="Slack")])

    @pytest.mark.asyncio
    async def test_default_policy(self, platform, settings):
        """Placement ignores case, tags compare exactly."""
        report = await Sequencer(platform, settings).run([
            rule("slack", workspace=1, actions=[ActionTag.STICKY]),
        ])

        outcome = report.outcomes[0]
        assert outcome.windows_moved == 1
        assert outcome.actions_applied == {"sticky": 0}
        assert platform.sticky == set()

    @pytest.mark.asyncio
    async def test_match_case_false(self, platform, settings):
        """Case-insensitive for every step."""
        await Sequencer(platform, settings).run([
            rule("slack", actions=[ActionTag.STICKY], match_case=False),
        ])

        assert platform.sticky == {1}

    @pytest.mark.asyncio
    async def test_match_case_true(self, platform, settings):
        """Exact for every step, so placement finds nothing."""
        report = await Sequencer(platform, settings).run([
            rule("slack", actions=[ActionTag.STICKY], match_case=True),
        ])

        assert report.outcomes[0].status == RuleStatus.NO_WINDOWS
        assert platform.calls == []

    def test_case_insensitive_flag(self):
        assert Sequencer.case_insensitive(rule("x"), placement=True) is True
        assert Sequencer.case_insensitive(rule("x"), placement=False) is False
        assert Sequencer.case_insensitive(rule("x", match_case=True), placement=True) is False
        assert Sequencer.case_insensitive(rule("x", match_case=False), placement=False) is True
