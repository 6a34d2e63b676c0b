"""Ratio engine: fifteen financial ratios, trends and DuPont decomposition."""

from finrisk.core.ratios.definitions import (
    RATIO_DEFINITIONS,
    RatioCategory,
    RatioDefinition,
    RatioName,
    RatioUnit,
    get_definition,
    ratios_by_category,
)
from finrisk.core.ratios.dupont import DuPontResult, dupont
from finrisk.core.ratios.engine import (
    RatioEngine,
    RatioSet,
    compute_ratios,
    compute_trend,
    compute_trends,
)

__all__ = [
    # Catalogue
    "RATIO_DEFINITIONS",
    "RatioCategory",
    "RatioDefinition",
    "RatioName",
    "RatioUnit",
    "get_definition",
    "ratios_by_category",
    # Engine
    "RatioEngine",
    "RatioSet",
    "compute_ratios",
    "compute_trend",
    "compute_trends",
    # DuPont
    "DuPontResult",
    "dupont",
]
