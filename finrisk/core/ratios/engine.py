"""
Financial Ratio Engine.

Derives fifteen ratios from one fiscal year's statement figures and computes
year-over-year trends between two ratio sets.

Definitions:
    EBITDA         = EBIT + Depreciation
    Financial Debt = Long-term Liabilities + Short-term Financial Debt

Ratios (values are un-scaled: 0.0899 means 8.99%):
    Structure & Solvency
        equity_strength            = Equity / Total Assets
        solvency_capacity          = Total Assets / Total Liabilities
        financial_leverage         = Total Assets / Equity
    Liquidity
        current_liquidity          = Current Assets / Current Liabilities
        quick_liquidity            = (Current Assets - Inventory) / Current Liabilities
        immediate_liquidity        = Cash / Current Liabilities
        working_capital            = Current Assets - Current Liabilities
    Profitability
        return_on_equity           = EBT / Equity
        return_on_assets           = EBT / Total Assets
        operating_return_on_assets = EBIT / Total Assets
    Margins
        gross_margin               = (Sales - Cost of Sales) / Sales
        ebit_margin                = EBIT / Sales
        ebt_margin                 = EBT / Sales
    Efficiency
        asset_turnover             = Sales / Total Assets
    Debt Capacity
        debt_service_capacity      = EBITDA / Financial Debt

Division by zero is a normal outcome: the ratio is NaN ("undefined") and is
propagated as such to trends and formatting. The engine only raises when the
statement figures themselves are missing.

Trend:
    trend = (current / previous - 1) * 100
    None when either value is missing or non-finite, or previous == 0.
"""

import logging
import math
from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Iterator, Optional, Union

from finrisk.core.data.dataset import FinancialDataset
from finrisk.core.data.exceptions import MissingYearError
from finrisk.core.data.statements import StatementFigures
from finrisk.core.ratios.definitions import RatioName

logger = logging.getLogger(__name__)

UNDEFINED = math.nan


class RatioSet(Mapping):
    """
    Immutable mapping of RatioName -> float for one fiscal year.

    Always holds exactly the fifteen ratios. Undefined ratios (zero
    denominator) are NaN. Keys may be given as RatioName members or their
    string values.
    """

    __slots__ = ("_values", "year")

    def __init__(self, values: Mapping[RatioName, float], year: Optional[int] = None):
        missing = [name.value for name in RatioName if name not in values]
        if missing:
            raise ValueError(f"RatioSet is missing ratios: {', '.join(missing)}")
        self._values = MappingProxyType({name: float(values[name]) for name in RatioName})
        self.year = year

    def __getitem__(self, name: Union[str, RatioName]) -> float:
        try:
            key = RatioName.parse(name)
        except ValueError:
            raise KeyError(name) from None
        return self._values[key]

    def __iter__(self) -> Iterator[RatioName]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"RatioSet(year={self.year}, defined={len(self.defined)}/{len(self)})"

    def is_defined(self, name: Union[str, RatioName]) -> bool:
        return math.isfinite(self[name])

    @property
    def defined(self) -> dict[RatioName, float]:
        """Ratios with a finite value."""
        return {k: v for k, v in self._values.items() if math.isfinite(v)}

    @property
    def undefined(self) -> list[RatioName]:
        """Ratios whose denominator was zero."""
        return [k for k, v in self._values.items() if not math.isfinite(v)]

    def to_dict(self) -> dict[str, Optional[float]]:
        """Convert to a JSON-friendly dict; undefined ratios become None."""
        return {k.value: (v if math.isfinite(v) else None) for k, v in self._values.items()}


def _divide(numerator: float, denominator: float, name: RatioName) -> float:
    if denominator == 0:
        logger.debug("Denominator is zero, %s is undefined", name.value)
        return UNDEFINED
    return numerator / denominator


def compute_ratios(figures: Optional[StatementFigures], year: Optional[int] = None) -> RatioSet:
    """
    Compute the fifteen ratios for one fiscal year.

    Pure function: never mutates ``figures`` and returns identical results for
    identical inputs.

    Args:
        figures: Statement figures for the year
        year: Fiscal year, recorded on the result for display

    Returns:
        RatioSet with all fifteen ratios (NaN where undefined)

    Raises:
        MissingYearError: If figures is None
    """
    if figures is None:
        raise MissingYearError(year)

    total_assets = figures.total_assets
    current_assets = figures.current_assets
    current_liabilities = figures.current_liabilities
    equity = figures.equity
    inventory = figures.assets.current.inventory
    cash = figures.assets.current.cash_and_equivalents
    income = figures.income
    sales = income.sales

    values = {
        RatioName.EQUITY_STRENGTH: _divide(equity, total_assets, RatioName.EQUITY_STRENGTH),
        RatioName.SOLVENCY_CAPACITY: _divide(
            total_assets, figures.total_liabilities, RatioName.SOLVENCY_CAPACITY
        ),
        RatioName.FINANCIAL_LEVERAGE: _divide(total_assets, equity, RatioName.FINANCIAL_LEVERAGE),
        RatioName.CURRENT_LIQUIDITY: _divide(
            current_assets, current_liabilities, RatioName.CURRENT_LIQUIDITY
        ),
        RatioName.QUICK_LIQUIDITY: _divide(
            current_assets - inventory, current_liabilities, RatioName.QUICK_LIQUIDITY
        ),
        RatioName.IMMEDIATE_LIQUIDITY: _divide(
            cash, current_liabilities, RatioName.IMMEDIATE_LIQUIDITY
        ),
        RatioName.WORKING_CAPITAL: current_assets - current_liabilities,
        RatioName.RETURN_ON_EQUITY: _divide(income.ebt, equity, RatioName.RETURN_ON_EQUITY),
        RatioName.RETURN_ON_ASSETS: _divide(income.ebt, total_assets, RatioName.RETURN_ON_ASSETS),
        RatioName.OPERATING_RETURN_ON_ASSETS: _divide(
            income.ebit, total_assets, RatioName.OPERATING_RETURN_ON_ASSETS
        ),
        RatioName.GROSS_MARGIN: _divide(income.gross_profit, sales, RatioName.GROSS_MARGIN),
        RatioName.EBIT_MARGIN: _divide(income.ebit, sales, RatioName.EBIT_MARGIN),
        RatioName.EBT_MARGIN: _divide(income.ebt, sales, RatioName.EBT_MARGIN),
        RatioName.ASSET_TURNOVER: _divide(sales, total_assets, RatioName.ASSET_TURNOVER),
        RatioName.DEBT_SERVICE_CAPACITY: _divide(
            income.ebitda, figures.financial_debt, RatioName.DEBT_SERVICE_CAPACITY
        ),
    }

    result = RatioSet(values, year=year)
    if result.undefined:
        logger.debug(
            "Ratios for %s: %d undefined (%s)",
            year if year is not None else "figures",
            len(result.undefined),
            ", ".join(r.value for r in result.undefined),
        )
    return result


def _value(ratios: Optional[Mapping], name: RatioName) -> Optional[float]:
    if ratios is None:
        return None
    value = ratios.get(name)
    if value is None:
        value = ratios.get(name.value)
    if value is None or not math.isfinite(value):
        return None
    return value


def compute_trend(
    current: Optional[Mapping],
    previous: Optional[Mapping],
    name: Union[str, RatioName],
) -> Optional[float]:
    """
    Percentage change of a ratio between two ratio sets.

    Args:
        current: Ratio set for the current year
        previous: Ratio set for the comparison year
        name: Ratio to compare

    Returns:
        (current / previous - 1) * 100, or None when either value is missing
        or non-finite, or the previous value is zero
    """
    ratio = RatioName.parse(name)
    current_value = _value(current, ratio)
    previous_value = _value(previous, ratio)
    if current_value is None or previous_value is None:
        return None
    if previous_value == 0:
        return None
    # A zero current value is a full decline (-100), not an undefined trend
    return (current_value / previous_value - 1) * 100


def compute_trends(
    current: Optional[Mapping], previous: Optional[Mapping]
) -> dict[RatioName, Optional[float]]:
    """Trend for every ratio, in catalogue order."""
    return {name: compute_trend(current, previous, name) for name in RatioName}


class RatioEngine:
    """
    Year-level access to ratios and trends over a FinancialDataset.

    Ratio sets are memoized per year. Memoization is a performance
    optimization only: results are identical with or without it.

    Usage:
        engine = RatioEngine(FinancialDataset.default())

        ratios = engine.ratios(2017)
        ratios[RatioName.EQUITY_STRENGTH]                    # 0.0899
        engine.trend(RatioName.EQUITY_STRENGTH, 2017, 2016)   # -10.39
    """

    def __init__(self, dataset: Optional[FinancialDataset] = None):
        self.dataset = dataset if dataset is not None else FinancialDataset.default()
        self._cached_ratios = lru_cache(maxsize=None)(self._compute_year)

    def _compute_year(self, year: int) -> RatioSet:
        figures = self.dataset[year]
        logger.debug("Computing ratios for %s", year)
        return compute_ratios(figures, year=year)

    def ratios(self, year: int) -> RatioSet:
        """
        Ratio set for a fiscal year.

        Raises:
            MissingYearError: If the year is not in the dataset
        """
        return self._cached_ratios(year)

    def trend(
        self, name: Union[str, RatioName], current_year: int, previous_year: int
    ) -> Optional[float]:
        """
        Percentage change of a ratio between two fiscal years.

        Raises:
            MissingYearError: If either year is not in the dataset
        """
        return compute_trend(self.ratios(current_year), self.ratios(previous_year), name)

    def trends(self, current_year: int, previous_year: int) -> dict[RatioName, Optional[float]]:
        """Trend for every ratio between two fiscal years."""
        return compute_trends(self.ratios(current_year), self.ratios(previous_year))

    def clear_cache(self) -> None:
        self._cached_ratios.cache_clear()

    def cache_info(self):
        return self._cached_ratios.cache_info()
