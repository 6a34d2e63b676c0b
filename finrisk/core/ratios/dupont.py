"""
DuPont decomposition of return on equity.

    ROE = EBT Margin x Asset Turnover x Financial Leverage
        = (EBT / Sales) x (Sales / Total Assets) x (Total Assets / Equity)

The identity holds by construction whenever all three factors are defined.
Shows whether ROE is driven by operating efficiency (margin, turnover) or
by leverage.
"""

import math
from dataclasses import dataclass
from typing import Optional

from finrisk.core.ratios.definitions import RatioName
from finrisk.core.ratios.engine import RatioSet

# Leverage above this multiple means ROE is mostly a leverage effect
HIGH_LEVERAGE_MULTIPLE = 5.0


@dataclass(frozen=True)
class DuPontResult:
    """Three DuPont factors and the ROE they reconstruct."""

    ebt_margin: float
    asset_turnover: float
    financial_leverage: float
    return_on_equity: float
    year: Optional[int] = None

    @property
    def is_defined(self) -> bool:
        return all(
            math.isfinite(v)
            for v in (self.ebt_margin, self.asset_turnover, self.financial_leverage)
        )

    @property
    def reconstructed_roe(self) -> float:
        """Product of the three factors (NaN if any factor is undefined)."""
        if not self.is_defined:
            return math.nan
        return self.ebt_margin * self.asset_turnover * self.financial_leverage

    @property
    def return_on_assets(self) -> float:
        """EBT margin x asset turnover, i.e. ROE before the leverage effect."""
        if not (math.isfinite(self.ebt_margin) and math.isfinite(self.asset_turnover)):
            return math.nan
        return self.ebt_margin * self.asset_turnover

    @property
    def leverage_driven(self) -> bool:
        """True when leverage, rather than operations, drives ROE."""
        return (
            math.isfinite(self.financial_leverage)
            and self.financial_leverage >= HIGH_LEVERAGE_MULTIPLE
        )

    def to_dict(self) -> dict[str, Optional[float]]:
        def clean(value: float) -> Optional[float]:
            return value if math.isfinite(value) else None

        return {
            "year": self.year,
            "ebt_margin": clean(self.ebt_margin),
            "asset_turnover": clean(self.asset_turnover),
            "financial_leverage": clean(self.financial_leverage),
            "return_on_equity": clean(self.return_on_equity),
            "reconstructed_roe": clean(self.reconstructed_roe),
            "leverage_driven": self.leverage_driven,
        }


def dupont(ratios: RatioSet) -> DuPontResult:
    """Decompose a ratio set's return on equity into its DuPont factors."""
    return DuPontResult(
        ebt_margin=ratios[RatioName.EBT_MARGIN],
        asset_turnover=ratios[RatioName.ASSET_TURNOVER],
        financial_leverage=ratios[RatioName.FINANCIAL_LEVERAGE],
        return_on_equity=ratios[RatioName.RETURN_ON_EQUITY],
        year=ratios.year,
    )
