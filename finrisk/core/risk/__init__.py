"""Risk evaluator: scenario catalogue, severity tiers and risk matrix."""

from finrisk.core.risk.catalogue import RISK_CATALOGUE, RiskScenario
from finrisk.core.risk.evaluator import (
    RatioBinding,
    RiskAssessment,
    RiskEvaluator,
    assess,
    evaluate_risks,
    highest_severity,
    remaining_risks,
    top_risks,
)
from finrisk.core.risk.matrix import MatrixCell, cell_at, place_risks, risk_matrix
from finrisk.core.risk.severity import (
    SeverityTier,
    calculate_severity,
    classify,
    classify_grid_value,
    severity_score,
    validate_score,
)

__all__ = [
    # Catalogue
    "RISK_CATALOGUE",
    "RiskScenario",
    # Severity
    "SeverityTier",
    "calculate_severity",
    "classify",
    "classify_grid_value",
    "severity_score",
    "validate_score",
    # Evaluator
    "RatioBinding",
    "RiskAssessment",
    "RiskEvaluator",
    "assess",
    "evaluate_risks",
    "highest_severity",
    "remaining_risks",
    "top_risks",
    # Matrix
    "MatrixCell",
    "cell_at",
    "place_risks",
    "risk_matrix",
]
