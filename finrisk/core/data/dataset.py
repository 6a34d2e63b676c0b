"""
Per-year financial dataset.

A read-only mapping from fiscal year to StatementFigures. The built-in case
holds the 2016 and 2017 accounts of a Spanish food retailer (figures in
thousands of euros). Other datasets can be loaded from JSON files with the
same structure, keyed by year:

    {
        "2017": {"assets": {...}, "equity": 325983, "liabilities": {...}, "income": {...}},
        "2016": {...}
    }
"""

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Union

from finrisk.core.data.exceptions import DatasetError, MissingYearError
from finrisk.core.data.statements import StatementFigures

logger = logging.getLogger(__name__)

# Tolerance when comparing totals to the sum of their children
TOTAL_TOLERANCE = 0.5

DEFAULT_FIGURES: dict[int, dict[str, Any]] = {
    2017: {
        "assets": {
            "nonCurrent": {
                "intangibleAssets": 595838,
                "tangibleAssets": 1363963,
                "longTermFinancialInvestments": 149071,
                "deferredTaxAssets": 253983,
                "total": 2362855,
            },
            "current": {
                "nonCurrentAssetsHeldForSale": 39663,
                "inventory": 569644,
                "accountsReceivable": 286932,
                "shortTermFinancialInvestments": 19500,
                "cashAndEquivalents": 347580,
                "total": 1263319,
            },
            "total": 3626174,
        },
        "equity": 325983,
        "liabilities": {
            "longTerm": 1009198,
            "shortTerm": {
                "suppliers": 1807433,
                "shortTermFinancialDebt": 483560,
                "total": 2290993,
            },
            "total": 3300191,
        },
        "income": {
            "sales": 8620550,
            "costOfSales": 6808596,
            "personnelCosts": 808943,
            "otherOperatingCosts": 645071,
            "depreciation": 235512,
            "ebit": 122428,
            "extraordinaryResults": 128941,
            "financialExpenses": 65334,
            "ebt": 186035,
        },
    },
    2016: {
        "assets": {
            "nonCurrent": {
                "intangibleAssets": 595323,
                "tangibleAssets": 1469078,
                "longTermFinancialInvestments": 128588,
                "deferredTaxAssets": 314273,
                "total": 2507262,
            },
            "current": {
                "nonCurrentAssetsHeldForSale": 0,
                "inventory": 669592,
                "accountsReceivable": 340781,
                "shortTermFinancialInvestments": 25954,
                "cashAndEquivalents": 372740,
                "total": 1409067,
            },
            "total": 3916329,
        },
        "equity": 392883,
        "liabilities": {
            "longTerm": 1154223,
            "shortTerm": {
                "suppliers": 2053847,
                "shortTermFinancialDebt": 315376,
                "total": 2369223,
            },
            "total": 3523446,
        },
        "income": {
            "sales": 8867621,
            "costOfSales": 6942007,
            "personnelCosts": 846103,
            "otherOperatingCosts": 653549,
            "depreciation": 232953,
            "ebit": 193009,
            "extraordinaryResults": 109572,
            "financialExpenses": 59928,
            "ebt": 242653,
        },
    },
}


@dataclass(frozen=True)
class IntegrityIssue:
    """A total that does not match the sum of its children."""

    year: int
    field: str
    reported: float
    expected: float

    @property
    def difference(self) -> float:
        return self.reported - self.expected

    def __str__(self) -> str:
        return (
            f"{self.year} {self.field}: reported {self.reported:,.0f}, "
            f"components sum to {self.expected:,.0f} ({self.difference:+,.0f})"
        )


class FinancialDataset(Mapping):
    """
    Read-only mapping of fiscal year -> StatementFigures.

    Lookups for unknown years raise MissingYearError (a KeyError subclass),
    so ``year in dataset`` and ``dataset.get(year)`` behave as for a dict.

    Usage:
        dataset = FinancialDataset.default()
        figures = dataset[2017]
        dataset.years          # [2016, 2017]
        dataset.check_integrity()
    """

    def __init__(self, figures: Mapping[int, StatementFigures]):
        self._figures = MappingProxyType(dict(figures))

    @classmethod
    def from_dict(cls, data: Mapping[Any, Any]) -> "FinancialDataset":
        """
        Build a dataset from raw per-year dictionaries.

        Args:
            data: Mapping of year (int or numeric string) to statement dicts

        Returns:
            FinancialDataset instance

        Raises:
            DatasetError: If a year key is not an integer or a value is malformed
        """
        figures: dict[int, StatementFigures] = {}
        for key, value in data.items():
            year = _parse_year(key)
            if year in figures:
                raise DatasetError(f"Duplicate fiscal year {year}")
            figures[year] = StatementFigures.from_dict(value)
        return cls(figures)

    @classmethod
    def default(cls) -> "FinancialDataset":
        """Return the built-in two-year case."""
        return cls.from_dict(DEFAULT_FIGURES)

    def __getitem__(self, year: int) -> StatementFigures:
        try:
            return self._figures[year]
        except KeyError:
            raise MissingYearError(year, self._figures.keys()) from None

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._figures))

    def __len__(self) -> int:
        return len(self._figures)

    def __repr__(self) -> str:
        return f"FinancialDataset(years={self.years})"

    @property
    def years(self) -> list[int]:
        """Available fiscal years, ascending."""
        return sorted(self._figures)

    @property
    def latest_year(self) -> int:
        if not self._figures:
            raise MissingYearError(None)
        return max(self._figures)

    def previous_year(self, year: int) -> int:
        """
        Return the closest available year before ``year``.

        Raises:
            MissingYearError: If ``year`` is unknown or has no predecessor
        """
        if year not in self._figures:
            raise MissingYearError(year, self._figures.keys())
        earlier = [y for y in self._figures if y < year]
        if not earlier:
            raise MissingYearError(year - 1, self._figures.keys())
        return max(earlier)

    def check_integrity(self) -> list[IntegrityIssue]:
        """
        Report totals that do not equal the sum of their children.

        The data is never rejected; every mismatch is logged as a warning
        and returned for display.
        """
        issues: list[IntegrityIssue] = []
        for year in self.years:
            figures = self._figures[year]
            checks = [
                ("assets.non_current.total", figures.assets.non_current.total,
                 figures.assets.non_current.components_sum),
                ("assets.current.total", figures.assets.current.total,
                 figures.assets.current.components_sum),
                ("assets.total", figures.assets.total,
                 figures.assets.non_current.total + figures.assets.current.total),
                ("liabilities.short_term.total", figures.liabilities.short_term.total,
                 figures.liabilities.short_term.components_sum),
                ("liabilities.total", figures.liabilities.total,
                 figures.liabilities.long_term + figures.liabilities.short_term.total),
                ("equity_and_liabilities", figures.assets.total,
                 figures.equity + figures.liabilities.total),
            ]
            for name, reported, expected in checks:
                if not math.isclose(reported, expected, abs_tol=TOTAL_TOLERANCE):
                    issue = IntegrityIssue(year, name, reported, expected)
                    logger.warning("Integrity mismatch: %s", issue)
                    issues.append(issue)
            for path in figures.negative_fields:
                logger.warning("Negative amount in %s for %s", path, year)
        return issues


def _parse_year(key: Any) -> int:
    if isinstance(key, bool):
        raise DatasetError(f"Invalid fiscal year key: {key!r}")
    if isinstance(key, int):
        return key
    try:
        return int(str(key).strip())
    except ValueError:
        raise DatasetError(f"Invalid fiscal year key: {key!r}") from None


def load_dataset(path: Union[str, Path]) -> FinancialDataset:
    """
    Load a dataset from a JSON file.

    Args:
        path: Path to a JSON object keyed by fiscal year

    Returns:
        FinancialDataset instance

    Raises:
        DatasetError: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as fh:
            raw = json.load(fh)
    except FileNotFoundError:
        raise DatasetError("Dataset file not found", source=str(path)) from None
    except (OSError, json.JSONDecodeError) as e:
        raise DatasetError(f"Cannot read dataset: {e}", source=str(path)) from e

    if not isinstance(raw, dict):
        raise DatasetError("Dataset must be a JSON object keyed by year", source=str(path))

    try:
        dataset = FinancialDataset.from_dict(raw)
    except DatasetError as e:
        raise DatasetError(str(e), source=str(path)) from e

    logger.info("Loaded %d fiscal years from %s", len(dataset), path)
    return dataset
