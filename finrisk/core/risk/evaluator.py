"""
Risk Evaluator.

Turns the static scenario catalogue into risk assessments. For each scenario:

    impact_level      = classify(impact)
    probability_level = classify(probability)
    severity          = classify(impact * probability / 10)
    coordinates       = (x=probability, y=impact)

The current and previous ratio sets do NOT change impact or probability.
They are bound to each assessment's related ratios (current value, previous
value, trend) so the presentation layer can show the supporting figures.

Note that high narrative risks can land in a modest tier: Insolvency
(9 x 6 / 10 = 5.4) and Liquidity (8 x 7 / 10 = 5.6) are both Medium.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from finrisk.core.ratios.definitions import RatioName
from finrisk.core.ratios.engine import RatioEngine, RatioSet, compute_trend
from finrisk.core.risk.catalogue import RISK_CATALOGUE, RiskScenario
from finrisk.core.risk.constants import HEADLINE_RISK_COUNT
from finrisk.core.risk.severity import SeverityTier, calculate_severity, classify, severity_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatioBinding:
    """Current/previous values of a related ratio and their trend."""

    name: RatioName
    current: Optional[float]
    previous: Optional[float]
    trend: Optional[float]

    def to_dict(self) -> dict[str, Any]:
        return {
            "current": self.current,
            "previous": self.previous,
            "trend": self.trend,
        }


@dataclass(frozen=True)
class RiskAssessment:
    """
    One evaluated risk scenario.

    Attributes:
        id: Catalogue identifier
        title: Scenario title
        description: Narrative summary
        impact: Impact score, 1-10
        impact_level: Tier of the impact score
        probability: Probability score, 1-10
        probability_level: Tier of the probability score
        severity: Tier of impact * probability / 10
        factors: Key factors, in order
        mitigation: Mitigation strategies, in order
        related_ratios: Ratios supporting the scenario
        ratio_values: Current/previous/trend binding per related ratio
    """

    id: int
    title: str
    description: str
    impact: int
    impact_level: SeverityTier
    probability: int
    probability_level: SeverityTier
    severity: SeverityTier
    factors: tuple[str, ...]
    mitigation: tuple[str, ...]
    related_ratios: tuple[RatioName, ...]
    ratio_values: tuple[RatioBinding, ...] = ()

    @property
    def score(self) -> float:
        """Severity score on the 0-10 scale."""
        return severity_score(self.impact, self.probability)

    @property
    def coordinates(self) -> dict[str, int]:
        """Position on the risk matrix: x = probability, y = impact."""
        return {"x": self.probability, "y": self.impact}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "impact_level": self.impact_level.value,
            "probability": self.probability,
            "probability_level": self.probability_level.value,
            "severity": self.severity.value,
            "score": round(self.score, 2),
            "factors": list(self.factors),
            "mitigation": list(self.mitigation),
            "related_ratios": [r.value for r in self.related_ratios],
            "ratio_values": {b.name.value: b.to_dict() for b in self.ratio_values},
            "coordinates": self.coordinates,
        }


def _finite(ratios: Optional[RatioSet], name: RatioName) -> Optional[float]:
    if ratios is None:
        return None
    value = ratios[name]
    return value if math.isfinite(value) else None


def assess(
    scenario: RiskScenario,
    current: Optional[RatioSet] = None,
    previous: Optional[RatioSet] = None,
) -> RiskAssessment:
    """Evaluate a single catalogue scenario."""
    bindings = tuple(
        RatioBinding(
            name=name,
            current=_finite(current, name),
            previous=_finite(previous, name),
            trend=compute_trend(current, previous, name),
        )
        for name in scenario.related_ratios
    )
    return RiskAssessment(
        id=scenario.id,
        title=scenario.title,
        description=scenario.description,
        impact=scenario.impact,
        impact_level=classify(scenario.impact),
        probability=scenario.probability,
        probability_level=classify(scenario.probability),
        severity=calculate_severity(scenario.impact, scenario.probability),
        factors=scenario.factors,
        mitigation=scenario.mitigation,
        related_ratios=scenario.related_ratios,
        ratio_values=bindings,
    )


def evaluate_risks(
    current: Optional[RatioSet],
    previous: Optional[RatioSet] = None,
    catalogue: Sequence[RiskScenario] = RISK_CATALOGUE,
) -> list[RiskAssessment]:
    """
    Evaluate every scenario in catalogue order.

    Always returns one assessment per catalogue entry whatever the ratio
    values are; the ratios only feed each assessment's ratio_values.

    Args:
        current: Ratio set for the selected year
        previous: Ratio set for the comparison year (optional)
        catalogue: Scenarios to evaluate, defaults to the built-in five

    Returns:
        List of RiskAssessment in catalogue order
    """
    assessments = [assess(scenario, current, previous) for scenario in catalogue]
    logger.debug(
        "Evaluated %d risks (current=%s, previous=%s)",
        len(assessments),
        getattr(current, "year", None),
        getattr(previous, "year", None),
    )
    return assessments


def top_risks(
    assessments: Sequence[RiskAssessment], count: int = HEADLINE_RISK_COUNT
) -> list[RiskAssessment]:
    """Leading catalogue entries, shown as headline risks."""
    return list(assessments[:count])


def remaining_risks(
    assessments: Sequence[RiskAssessment], count: int = HEADLINE_RISK_COUNT
) -> list[RiskAssessment]:
    """Catalogue entries after the headline risks."""
    return list(assessments[count:])


def highest_severity(assessments: Iterable[RiskAssessment]) -> Optional[SeverityTier]:
    """Most severe tier among the assessments, None if empty."""
    tiers = [a.severity for a in assessments]
    return max(tiers) if tiers else None


class RiskEvaluator:
    """
    Year-level risk evaluation over a RatioEngine.

    Usage:
        evaluator = RiskEvaluator(RatioEngine())
        risks = evaluator.evaluate(2017, 2016)
        risks[0].title      # "Insolvency Risk"
        risks[0].severity   # SeverityTier.MEDIUM
    """

    def __init__(self, engine: Optional[RatioEngine] = None):
        self.engine = engine if engine is not None else RatioEngine()

    def evaluate(self, current_year: int, previous_year: Optional[int] = None) -> list[RiskAssessment]:
        """
        Evaluate the catalogue for a pair of fiscal years.

        Raises:
            MissingYearError: If either year is not in the dataset
        """
        current = self.engine.ratios(current_year)
        previous = self.engine.ratios(previous_year) if previous_year is not None else None
        return evaluate_risks(current, previous)
