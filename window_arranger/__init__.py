"""
Window Arranger

Places running application windows onto monitors, workspaces and screen
regions from a declarative layout, one rule at a time.
"""

__version__ = "1.0.0"
__author__ = "NixOS Configuration Team"
