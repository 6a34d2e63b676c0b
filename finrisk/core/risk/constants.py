"""
Central risk threshold constants.

All severity boundaries are defined here as the single source of truth.
Import from this module instead of hardcoding values.
"""

# --- Scenario severity tiers (score on a 0-10 scale, lower bound inclusive) ---
TIER_CRITICAL_MIN = 8   # >= 8: Critical
TIER_HIGH_MIN = 6       # >= 6: High
TIER_MEDIUM_MIN = 4     # >= 4: Medium (below 4: Low)

# --- Impact / probability scale ---
SCORE_MIN = 1
SCORE_MAX = 10

# Severity score = impact * probability / SEVERITY_DIVISOR (range 0.1-10)
SEVERITY_DIVISOR = 10

# --- Risk-matrix grid tiers (raw impact * probability, range 1-100) ---
# NOTE: Not the scenario thresholds scaled by 10. 64/10 = 6.4 is only High
# for classify(); the grid and scenario tiers are deliberately kept apart.
GRID_CRITICAL_MIN = 64
GRID_HIGH_MIN = 36
GRID_MEDIUM_MIN = 16

# How many leading catalogue entries are shown as headline risks
HEADLINE_RISK_COUNT = 2
