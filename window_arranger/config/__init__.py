"""
Configuration subsystem for window arrangement.

Modules:
- loader: Load and validate layout files (JSON/TOML)
"""

from .loader import DEFAULT_CONFIG_PATH, ConfigLoader

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigLoader",
]
