"""
config.py — Application Settings
=================================
Static knobs shared by the generators, the playback engine and the Flask
app.  Flask picks up the `Config` class via `app.config.from_object`.
"""

import os
import secrets


# ---------------------------------------------------------------------------
# Layout — coordinate space for generated graphs
# ---------------------------------------------------------------------------
CANVAS_WIDTH  = 580
CANVAS_HEIGHT = 380
PADDING       = 20

# ---------------------------------------------------------------------------
# Input ranges
# ---------------------------------------------------------------------------
MIN_VALUE                = 5       # smallest value in a generated / custom array
MAX_VALUE                = 100
MIN_ARRAY_SIZE           = 4
DEFAULT_ARRAY_SIZE       = 8       # merge / quick sort (tree views get wide fast)
DEFAULT_BLOCK_ARRAY_SIZE = 15      # selection sort
MAX_TREE_ARRAY_SIZE      = 8
MAX_BLOCK_ARRAY_SIZE     = 30

MIN_FIBONACCI     = 0
MAX_FIBONACCI     = 8
DEFAULT_FIBONACCI = 5

GRAPH_TYPES        = ("default", "tree", "grid", "random")
DEFAULT_GRAPH_TYPE = "default"
DEFAULT_START_NODE = "A"

PIVOT_STRATEGIES       = ("first", "last", "random", "median")
DEFAULT_PIVOT_STRATEGY = "last"

# ---------------------------------------------------------------------------
# Playback (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.15,
    "turbo":  0.05,
}
DEFAULT_SPEED = "medium"
MIN_PERIOD    = 0.005


class Config:
    SECRET_KEY = os.environ.get("VISUALIZER_SECRET_KEY") or secrets.token_hex(32)
    LOG_LEVEL  = os.environ.get("VISUALIZER_LOG_LEVEL", "INFO")
    JSON_SORT_KEYS = False


class TestingConfig(Config):
    TESTING   = True
    SECRET_KEY = "testing"
