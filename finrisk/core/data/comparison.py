"""Side-by-side statement comparison between two fiscal years."""

from dataclasses import dataclass
from typing import Optional

from finrisk.core.data.dataset import FinancialDataset
from finrisk.core.data.statements import StatementFigures

BALANCE_SECTION = "Balance Sheet"
INCOME_SECTION = "Income Statement"


@dataclass(frozen=True)
class ComparisonRow:
    section: str
    label: str
    previous: float
    current: float

    @property
    def change(self) -> float:
        return self.current - self.previous

    @property
    def change_pct(self) -> Optional[float]:
        """Percentage change, None when the previous amount is zero."""
        if self.previous == 0:
            return None
        return (self.current / self.previous - 1) * 100


def _balance_masses(figures: StatementFigures) -> list[tuple[str, float]]:
    return [
        ("Non-current Assets", figures.assets.non_current.total),
        ("Current Assets", figures.assets.current.total),
        ("Equity", figures.equity),
        ("Long-term Liabilities", figures.liabilities.long_term),
        ("Current Liabilities", figures.liabilities.short_term.total),
    ]


def _income_lines(figures: StatementFigures) -> list[tuple[str, float]]:
    return [
        ("Sales", figures.income.sales),
        ("EBIT", figures.income.ebit),
        ("EBT", figures.income.ebt),
    ]


def compare_statements(
    dataset: FinancialDataset, current_year: int, previous_year: int
) -> list[ComparisonRow]:
    """
    Compare balance-sheet masses and income lines between two years.

    Raises:
        MissingYearError: If either year is not in the dataset
    """
    current = dataset[current_year]
    previous = dataset[previous_year]

    rows = []
    for section, extract in ((BALANCE_SECTION, _balance_masses), (INCOME_SECTION, _income_lines)):
        for (label, prev_value), (_, curr_value) in zip(extract(previous), extract(current)):
            rows.append(ComparisonRow(section, label, prev_value, curr_value))
    return rows


def balance_composition(figures: StatementFigures) -> dict[str, float]:
    """
    Share of each balance-sheet mass in the sum of all five masses.

    Assets and financing both appear, so each side sums to roughly 0.5.
    Returns zeros when every mass is zero.
    """
    masses = _balance_masses(figures)
    total = sum(value for _, value in masses)
    if total == 0:
        return {label: 0.0 for label, _ in masses}
    return {label: value / total for label, value in masses}
