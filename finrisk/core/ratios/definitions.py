"""
Ratio catalogue.

The fifteen ratios the engine derives, with display metadata. This is the
single source of truth for ratio names; import RatioName instead of
hardcoding strings.
"""

from dataclasses import dataclass
from enum import Enum


class RatioName(str, Enum):
    """Names of the fifteen ratios, in display order."""

    # Structure and solvency
    EQUITY_STRENGTH = "equity_strength"
    SOLVENCY_CAPACITY = "solvency_capacity"
    FINANCIAL_LEVERAGE = "financial_leverage"
    # Liquidity
    CURRENT_LIQUIDITY = "current_liquidity"
    QUICK_LIQUIDITY = "quick_liquidity"
    IMMEDIATE_LIQUIDITY = "immediate_liquidity"
    WORKING_CAPITAL = "working_capital"
    # Profitability
    RETURN_ON_EQUITY = "return_on_equity"
    RETURN_ON_ASSETS = "return_on_assets"
    OPERATING_RETURN_ON_ASSETS = "operating_return_on_assets"
    # Margins
    GROSS_MARGIN = "gross_margin"
    EBIT_MARGIN = "ebit_margin"
    EBT_MARGIN = "ebt_margin"
    # Efficiency
    ASSET_TURNOVER = "asset_turnover"
    # Debt capacity
    DEBT_SERVICE_CAPACITY = "debt_service_capacity"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "str | RatioName") -> "RatioName":
        """
        Resolve a ratio name from its value, member name or hyphenated form.

        Raises:
            ValueError: If the name is not one of the fifteen ratios
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            valid = ", ".join(r.value for r in cls)
            raise ValueError(f"Unknown ratio '{value}'. Valid ratios: {valid}") from None


class RatioCategory(str, Enum):
    STRUCTURE = "Structure & Solvency"
    LIQUIDITY = "Liquidity"
    PROFITABILITY = "Profitability"
    MARGINS = "Margins"
    EFFICIENCY = "Efficiency"
    DEBT_CAPACITY = "Debt Capacity"


class RatioUnit(str, Enum):
    """How a ratio value is displayed. Values are always stored un-scaled."""

    PERCENT = "%"
    TIMES = "x"
    CURRENCY = "EUR"


@dataclass(frozen=True)
class RatioDefinition:
    name: RatioName
    label: str
    category: RatioCategory
    formula: str
    unit: RatioUnit
    higher_is_better: bool = True


RATIO_DEFINITIONS: dict[RatioName, RatioDefinition] = {
    d.name: d
    for d in (
        RatioDefinition(
            RatioName.EQUITY_STRENGTH, "Equity Strength", RatioCategory.STRUCTURE,
            "Equity / Total Assets", RatioUnit.PERCENT,
        ),
        RatioDefinition(
            RatioName.SOLVENCY_CAPACITY, "Solvency", RatioCategory.STRUCTURE,
            "Total Assets / Total Liabilities", RatioUnit.TIMES,
        ),
        RatioDefinition(
            RatioName.FINANCIAL_LEVERAGE, "Financial Leverage", RatioCategory.STRUCTURE,
            "Total Assets / Equity", RatioUnit.TIMES, higher_is_better=False,
        ),
        RatioDefinition(
            RatioName.CURRENT_LIQUIDITY, "Current Liquidity", RatioCategory.LIQUIDITY,
            "Current Assets / Current Liabilities", RatioUnit.TIMES,
        ),
        RatioDefinition(
            RatioName.QUICK_LIQUIDITY, "Quick Liquidity", RatioCategory.LIQUIDITY,
            "(Current Assets - Inventory) / Current Liabilities", RatioUnit.TIMES,
        ),
        RatioDefinition(
            RatioName.IMMEDIATE_LIQUIDITY, "Immediate Liquidity", RatioCategory.LIQUIDITY,
            "Cash / Current Liabilities", RatioUnit.TIMES,
        ),
        RatioDefinition(
            RatioName.WORKING_CAPITAL, "Working Capital", RatioCategory.LIQUIDITY,
            "Current Assets - Current Liabilities", RatioUnit.CURRENCY,
        ),
        RatioDefinition(
            RatioName.RETURN_ON_EQUITY, "ROE", RatioCategory.PROFITABILITY,
            "EBT / Equity", RatioUnit.PERCENT,
        ),
        RatioDefinition(
            RatioName.RETURN_ON_ASSETS, "ROA", RatioCategory.PROFITABILITY,
            "EBT / Total Assets", RatioUnit.PERCENT,
        ),
        RatioDefinition(
            RatioName.OPERATING_RETURN_ON_ASSETS, "Operating ROA", RatioCategory.PROFITABILITY,
            "EBIT / Total Assets", RatioUnit.PERCENT,
        ),
        RatioDefinition(
            RatioName.GROSS_MARGIN, "Gross Margin", RatioCategory.MARGINS,
            "(Sales - Cost of Sales) / Sales", RatioUnit.PERCENT,
        ),
        RatioDefinition(
            RatioName.EBIT_MARGIN, "EBIT Margin", RatioCategory.MARGINS,
            "EBIT / Sales", RatioUnit.PERCENT,
        ),
        RatioDefinition(
            RatioName.EBT_MARGIN, "EBT Margin", RatioCategory.MARGINS,
            "EBT / Sales", RatioUnit.PERCENT,
        ),
        RatioDefinition(
            RatioName.ASSET_TURNOVER, "Asset Turnover", RatioCategory.EFFICIENCY,
            "Sales / Total Assets", RatioUnit.TIMES,
        ),
        RatioDefinition(
            RatioName.DEBT_SERVICE_CAPACITY, "Debt Service Capacity", RatioCategory.DEBT_CAPACITY,
            "EBITDA / Financial Debt", RatioUnit.TIMES,
        ),
    )
}


def get_definition(name: "str | RatioName") -> RatioDefinition:
    """Look up display metadata for a ratio."""
    return RATIO_DEFINITIONS[RatioName.parse(name)]


def ratios_by_category() -> dict[RatioCategory, list[RatioDefinition]]:
    """Group definitions by category, preserving display order."""
    grouped: dict[RatioCategory, list[RatioDefinition]] = {c: [] for c in RatioCategory}
    for definition in RATIO_DEFINITIONS.values():
        grouped[definition.category].append(definition)
    return grouped
