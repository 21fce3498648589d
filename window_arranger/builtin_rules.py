"""
Built-in layout, used with `window-arranger apply --builtin`.

Same engine and semantics as a layout file; only the rule source differs.
"""

from typing import List

from .models import ActionTag, PlacementRule

WEBEX = "crx_jmlfbgamfhbhiiimabijjiphfihdajkk"
TAIA = "crx_blolepeanghapmhjfpjfbegpakcjphkb"
JIRA = "crx_dgpbecgflcafkafpebakapmjffajbdkc"

BUILTIN_RULES: List[PlacementRule] = [
    PlacementRule(window=WEBEX, screen=1, workspace=0,
                  actions=[ActionTag.STICKY, ActionTag.FULLSCREEN]),
    PlacementRule(window="slack", screen=1, workspace=0,
                  actions=[ActionTag.FULLSCREEN, ActionTag.STICKY]),
    PlacementRule(window="keepassxc", screen=1, workspace=0,
                  actions=[ActionTag.FULLSCREEN, ActionTag.STICKY]),
    PlacementRule(window="Google-chrome", screen=1, workspace=0,
                  actions=[ActionTag.FULLSCREEN, ActionTag.STICKY]),
    PlacementRule(window=TAIA, screen=3, workspace=0,
                  actions=[ActionTag.FULLSCREEN, ActionTag.STICKY]),
    PlacementRule(window=JIRA, screen=2, workspace=0,
                  actions=[ActionTag.FULLSCREEN]),
    PlacementRule(window="thunderbird", screen=0, workspace=0,
                  actions=[ActionTag.FULLSCREEN]),
    PlacementRule(window="jetbrains-idea", screen=2, workspace=1,
                  actions=[ActionTag.FULLSCREEN]),
    PlacementRule(window="Wfica", screen=0, workspace=2),
    PlacementRule(window="selfservice", screen=1, workspace=2,
                  actions=[ActionTag.TOP_RIGHT]),
    PlacementRule(window="code - insiders", screen=3, workspace=3,
                  actions=[ActionTag.STICKY]),
]
