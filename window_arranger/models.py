"""
Pydantic data models for window arrangement.

Defines monitors, windows, workspaces, geometry and placement rules, plus
the settings and load results of a layout configuration.
"""

from enum import Enum, IntFlag
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Enumerations

class ActionTag(str, Enum):
    """Action a placement rule applies to every window of its class."""
    STICKY = "sticky"
    FULLSCREEN = "fullscreen"
    LEFT_HALF = "leftHalf"
    RIGHT_HALF = "rightHalf"
    TOP_LEFT = "topLeft"
    TOP_RIGHT = "topRight"
    LOW_LEFT = "lowLeft"
    LOW_RIGHT = "lowRight"


# Resize presets in precedence order; a rule applies at most one of them.
RESIZE_PRESETS = (
    ActionTag.LEFT_HALF,
    ActionTag.RIGHT_HALF,
    ActionTag.TOP_LEFT,
    ActionTag.TOP_RIGHT,
    ActionTag.LOW_LEFT,
    ActionTag.LOW_RIGHT,
)


class MaximizeFlags(IntFlag):
    """Axes to maximize or unmaximize."""
    HORIZONTAL = 1
    VERTICAL = 2
    BOTH = HORIZONTAL | VERTICAL


# Platform snapshots

class MonitorDescriptor(BaseModel):
    """Immutable snapshot of one display output."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Raw platform enumeration index")
    x: int = Field(..., description="Left edge in global coordinates")
    y: int = Field(..., description="Top edge in global coordinates")
    width: int = Field(..., description="Width in pixels")
    height: int = Field(..., description="Height in pixels")
    name: str = Field("", description="Connector name (e.g. DP-1)")

    def has_valid_bounds(self) -> bool:
        """Check the monitor can be used as a move target."""
        return self.x >= 0 and self.y >= 0 and self.width > 0 and self.height > 0

    def contains(self, x: float, y: float) -> bool:
        """Check whether a global point lies on this monitor."""
        return (
            self.x <= x < self.x + self.width
            and self.y <= y < self.y + self.height
        )


class WindowHandle(BaseModel):
    """Reference to a live platform window, owned by the window manager."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Platform container ID")
    wm_class_instance: Optional[str] = Field(None, description="Primary class identifier")
    wm_class: Optional[str] = Field(None, description="Fallback class identifier")
    title: str = Field("", description="Window title")

    @property
    def resolved_class(self) -> str:
        """Class used for matching: primary identifier, else the fallback."""
        return self.wm_class_instance or self.wm_class or ""


class WorkspaceHandle(BaseModel):
    """Virtual desktop addressed by zero-based index."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description="Zero-based workspace index")
    number: int = Field(..., description="Platform workspace number")
    name: str = Field("", description="Platform workspace name")


class Geometry(BaseModel):
    """Target frame in pixels."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float

    def is_valid(self) -> bool:
        """Check the frame can be used for a move."""
        return self.x >= 0 and self.y >= 0 and self.width > 0 and self.height > 0

    def has_area(self) -> bool:
        return self.width > 0 and self.height > 0


# Configuration entities

class PlacementRule(BaseModel):
    """One step of a layout: where a window class goes and what is applied to it."""

    model_config = ConfigDict(frozen=True)

    window: str = Field(..., description="Window class match key")
    screen: int = Field(..., ge=0, description="Normalized monitor index")
    workspace: int = Field(..., ge=0, description="Zero-based workspace index")
    actions: List[ActionTag] = Field(default_factory=list, description="Action tags to apply")
    match_case: Optional[bool] = Field(
        None,
        description="Force exact (true) or case-insensitive (false) class matching for every step"
    )

    @field_validator('window')
    @classmethod
    def validate_window(cls, v: str) -> str:
        """Validate window class is not empty."""
        if not v.strip():
            raise ValueError("Window class cannot be empty")
        return v.strip()

    def has_action(self, tag: ActionTag) -> bool:
        return tag in self.actions

    def resize_preset(self) -> Optional[ActionTag]:
        """
        Get the resize preset this rule applies.

        Returns:
            First preset in RESIZE_PRESETS order listed by the rule, or None
        """
        for preset in RESIZE_PRESETS:
            if preset in self.actions:
                return preset
        return None


class ArrangerSettings(BaseModel):
    """Timing and platform settings for one activation."""

    settle_delay: float = Field(0.5, ge=0, description="Fixed pause between mutations (seconds)")
    settle_timeout: float = Field(2.0, ge=0, description="Upper bound when waiting for state (seconds)")
    poll_interval: float = Field(0.1, gt=0, description="Delay between state polls (seconds)")
    wait_for_state: bool = Field(True, description="Poll platform state instead of sleeping where possible")
    initial_delay: float = Field(0.5, ge=0, description="Pause after diagnostics, before the first rule")
    workspace_count: int = Field(10, ge=1, le=99, description="Number of addressable workspaces")


# Load results

class RejectedRecord(BaseModel):
    """Layout record skipped during load."""

    position: int
    window: Optional[str] = None
    message: str


class LayoutConfig(BaseModel):
    """Result of loading a layout resource."""

    settings: ArrangerSettings = Field(default_factory=ArrangerSettings)
    rules: List[PlacementRule] = Field(default_factory=list)
    rejected: List[RejectedRecord] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.rejected
