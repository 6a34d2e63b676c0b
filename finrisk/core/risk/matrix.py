"""
Risk-matrix grid.

All 100 cells of (probability, impact) in [1..10] x [1..10], each tagged with
z = probability * impact and a tier from the raw-product thresholds
(64 / 36 / 16). Cells are ordered impact-major: impact 1..10 in the outer
loop, probability 1..10 in the inner loop.

The grid tiers are NOT the scenario tiers scaled by 10: a cell at z = 64 is
Critical on the grid while classify(6.4) is High. Both behaviours are kept.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from finrisk.core.risk.constants import SCORE_MAX, SCORE_MIN
from finrisk.core.risk.evaluator import RiskAssessment
from finrisk.core.risk.severity import SeverityTier, classify_grid_value


@dataclass(frozen=True)
class MatrixCell:
    x: int  # probability
    y: int  # impact
    z: int  # probability * impact
    tier: SeverityTier

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z, "tier": self.tier.value}


def risk_matrix() -> list[MatrixCell]:
    """Build the 10 x 10 risk-matrix grid."""
    cells = []
    for impact in range(SCORE_MIN, SCORE_MAX + 1):
        for probability in range(SCORE_MIN, SCORE_MAX + 1):
            z = impact * probability
            cells.append(MatrixCell(x=probability, y=impact, z=z, tier=classify_grid_value(z)))
    return cells


def cell_at(cells: Iterable[MatrixCell], probability: int, impact: int) -> Optional[MatrixCell]:
    """Find the cell at a (probability, impact) position."""
    for cell in cells:
        if cell.x == probability and cell.y == impact:
            return cell
    return None


def place_risks(assessments: Iterable[RiskAssessment]) -> dict[tuple[int, int], list[int]]:
    """Map (probability, impact) positions to the ids of risks plotted there."""
    placed: dict[tuple[int, int], list[int]] = {}
    for assessment in assessments:
        key = (assessment.probability, assessment.impact)
        placed.setdefault(key, []).append(assessment.id)
    return placed
