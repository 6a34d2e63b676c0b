"""
Severity classification.

Scenario tiers (used for impact level, probability level and severity):
    score >= 8: Critical
    score >= 6: High
    score >= 4: Medium
    otherwise:  Low

Severity score:
    impact * probability / 10   (impact, probability in 1..10)

Risk-matrix grid tiers use the raw product instead:
    z >= 64: Critical, z >= 36: High, z >= 16: Medium, otherwise Low
"""

from enum import Enum
from functools import total_ordering

from finrisk.core.risk.constants import (
    GRID_CRITICAL_MIN,
    GRID_HIGH_MIN,
    GRID_MEDIUM_MIN,
    SCORE_MAX,
    SCORE_MIN,
    SEVERITY_DIVISOR,
    TIER_CRITICAL_MIN,
    TIER_HIGH_MIN,
    TIER_MEDIUM_MIN,
)


@total_ordering
class SeverityTier(Enum):
    """Ordered severity tiers: LOW < MEDIUM < HIGH < CRITICAL."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SeverityTier):
            return NotImplemented
        return self.rank < other.rank

    def __str__(self) -> str:
        return self.value


_TIER_ORDER = (
    SeverityTier.LOW,
    SeverityTier.MEDIUM,
    SeverityTier.HIGH,
    SeverityTier.CRITICAL,
)


def classify(score: float) -> SeverityTier:
    """
    Classify a 0-10 score into a severity tier.

    Boundaries are inclusive on the lower bound of each tier:
    classify(4) is Medium, classify(8) is Critical.
    """
    if score >= TIER_CRITICAL_MIN:
        return SeverityTier.CRITICAL
    elif score >= TIER_HIGH_MIN:
        return SeverityTier.HIGH
    elif score >= TIER_MEDIUM_MIN:
        return SeverityTier.MEDIUM
    else:
        return SeverityTier.LOW


def validate_score(value: int, name: str = "score") -> int:
    """
    Check that an impact or probability lies on the 1-10 scale.

    Raises:
        ValueError: If value is not an integer in range
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not SCORE_MIN <= value <= SCORE_MAX:
        raise ValueError(f"{name} must be between {SCORE_MIN} and {SCORE_MAX}, got {value}")
    return value


def severity_score(impact: int, probability: int) -> float:
    """Combined 0-10 score: impact * probability / 10."""
    return impact * probability / SEVERITY_DIVISOR


def calculate_severity(impact: int, probability: int) -> SeverityTier:
    """Severity tier of an impact/probability pair."""
    return classify(severity_score(impact, probability))


def classify_grid_value(z: float) -> SeverityTier:
    """Tier of a risk-matrix cell from its raw impact * probability product."""
    if z >= GRID_CRITICAL_MIN:
        return SeverityTier.CRITICAL
    elif z >= GRID_HIGH_MIN:
        return SeverityTier.HIGH
    elif z >= GRID_MEDIUM_MIN:
        return SeverityTier.MEDIUM
    else:
        return SeverityTier.LOW
