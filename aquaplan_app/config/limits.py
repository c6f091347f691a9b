"""
Planning limits and defaults for the seeding scheduler.

Values follow the production planner used on the farm: a growth curve is
never searched past week 20, and an unreachable target weight falls back to
a 12-week cycle so that sparse curve data cannot produce unbounded plans.
"""

from __future__ import annotations

# Last curve week scanned when converting a target weight into weeks
GROWTH_SEARCH_CEILING_WEEKS = 20

# Weeks returned when the target weight is not reached within the ceiling
GROWTH_CAPPED_WEEKS = 12

# Individual weight (g) reported for a genetic line without curve data
DEFAULT_WEIGHT_G = 1.0

# Default planning horizon (weeks)
DEFAULT_MAX_WEEKS = 52

# Multi-cycle cadence defaults (weeks)
DEFAULT_PREFERRED_INTERVAL_WEEKS = 2
DEFAULT_MAX_INTERVAL_WEEKS = 6
DEFAULT_MIN_GAP_WEEKS = 1

# An interval above preferred * LONG_GAP_FACTOR is reported as a long gap
LONG_GAP_FACTOR = 2

# Floating-point tolerance
EPS = 1e-9
