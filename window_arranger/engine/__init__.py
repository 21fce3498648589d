"""
Placement engine for window arrangement.

Modules:
- monitors: Reading-order monitor index normalization
- matcher: Window lookup by class
- placement: Fractional geometry and resize presets
- dispatch: All-matches vs first-match-only application
- settle: Wait-for-state and fixed settle pauses
- sequencer: Ordered, sequential rule application
"""

from .dispatch import apply_to_all_matches, apply_to_first_match_only
from .matcher import WindowMatcher
from .monitors import MonitorIndexNormalizer, MonitorLayout
from .placement import PRESET_FACTORS, PlacementEngine, compute_geometry, preset_geometry
from .sequencer import RuleOutcome, RuleStatus, RunReport, Sequencer
from .settle import Settler

__all__ = [
    "apply_to_all_matches",
    "apply_to_first_match_only",
    "WindowMatcher",
    "MonitorIndexNormalizer",
    "MonitorLayout",
    "PRESET_FACTORS",
    "PlacementEngine",
    "compute_geometry",
    "preset_geometry",
    "RuleOutcome",
    "RuleStatus",
    "RunReport",
    "Sequencer",
    "Settler",
]
