"""
Window manager access for the arranger.

Modules:
- base: WindowPlatform port consumed by the engine
- i3: i3/Sway implementation over i3ipc.aio
"""

from .base import WindowPlatform
from .i3 import I3Platform

__all__ = [
    "WindowPlatform",
    "I3Platform",
]
