"""
Statement figures for a single fiscal year.

Models the balance sheet (assets, equity, liabilities) and the income
statement as frozen dataclasses. Every field is mandatory in the record;
the loader (``StatementFigures.from_dict``) defaults absent fields to zero,
so the engines never deal with optional values.

Input dictionaries may use snake_case keys or the camelCase keys of the
built-in case data (``nonCurrent``, ``cashAndEquivalents``, ...).

Totals are expected to equal the sum of their children. This is NOT enforced
here; see ``FinancialDataset.check_integrity`` for the report.
"""

import math
import re
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Mapping, Optional

from finrisk.core.data.exceptions import DatasetError

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

# Fields that may legitimately be negative (results)
SIGNED_FIELDS = frozenset({"ebit", "ebt", "extraordinary_results"})


def _snake(key: str) -> str:
    """Convert a camelCase key to snake_case."""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _normalize_keys(data: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    if not data:
        return {}
    return {_snake(k): v for k, v in data.items()}


def _amount(data: Mapping[str, Any], name: str, context: str) -> float:
    """Read a monetary field, defaulting to zero when absent."""
    value = data.get(name)
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise DatasetError(f"{context}.{name} must be numeric, got {value!r}")
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise DatasetError(f"{context}.{name} must be numeric, got {value!r}") from None
    if not math.isfinite(amount):
        raise DatasetError(f"{context}.{name} must be finite, got {value!r}")
    return amount


def _section(cls, data: Optional[Mapping[str, Any]], context: str):
    """Build a flat section dataclass from a (possibly camelCase) mapping."""
    normalized = _normalize_keys(data)
    return cls(**{f.name: _amount(normalized, f.name, context) for f in fields(cls)})


@dataclass(frozen=True)
class NonCurrentAssets:
    """Long-lived assets (activo no corriente)."""

    intangible_assets: float = 0.0
    tangible_assets: float = 0.0
    long_term_financial_investments: float = 0.0
    deferred_tax_assets: float = 0.0
    total: float = 0.0

    @property
    def components_sum(self) -> float:
        return (
            self.intangible_assets
            + self.tangible_assets
            + self.long_term_financial_investments
            + self.deferred_tax_assets
        )


@dataclass(frozen=True)
class CurrentAssets:
    """Short-term assets (activo corriente)."""

    non_current_assets_held_for_sale: float = 0.0
    inventory: float = 0.0
    accounts_receivable: float = 0.0
    short_term_financial_investments: float = 0.0
    cash_and_equivalents: float = 0.0
    total: float = 0.0

    @property
    def components_sum(self) -> float:
        return (
            self.non_current_assets_held_for_sale
            + self.inventory
            + self.accounts_receivable
            + self.short_term_financial_investments
            + self.cash_and_equivalents
        )


@dataclass(frozen=True)
class Assets:
    """Total assets split into non-current and current masses."""

    non_current: NonCurrentAssets = field(default_factory=NonCurrentAssets)
    current: CurrentAssets = field(default_factory=CurrentAssets)
    total: float = 0.0

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Assets":
        normalized = _normalize_keys(data)
        return cls(
            non_current=_section(
                NonCurrentAssets, normalized.get("non_current"), "assets.non_current"
            ),
            current=_section(CurrentAssets, normalized.get("current"), "assets.current"),
            total=_amount(normalized, "total", "assets"),
        )


@dataclass(frozen=True)
class ShortTermLiabilities:
    """Current liabilities (pasivo corriente)."""

    suppliers: float = 0.0
    short_term_financial_debt: float = 0.0
    total: float = 0.0

    @property
    def components_sum(self) -> float:
        return self.suppliers + self.short_term_financial_debt


@dataclass(frozen=True)
class Liabilities:
    """Long-term and short-term liabilities."""

    long_term: float = 0.0
    short_term: ShortTermLiabilities = field(default_factory=ShortTermLiabilities)
    total: float = 0.0

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Liabilities":
        normalized = _normalize_keys(data)
        return cls(
            long_term=_amount(normalized, "long_term", "liabilities"),
            short_term=_section(
                ShortTermLiabilities, normalized.get("short_term"), "liabilities.short_term"
            ),
            total=_amount(normalized, "total", "liabilities"),
        )


@dataclass(frozen=True)
class IncomeStatement:
    """
    Income statement lines.

    ebit, ebt and extraordinary_results may be negative; every other line
    is expected to be non-negative.
    """

    sales: float = 0.0
    cost_of_sales: float = 0.0
    personnel_costs: float = 0.0
    other_operating_costs: float = 0.0
    depreciation: float = 0.0
    ebit: float = 0.0
    extraordinary_results: float = 0.0
    financial_expenses: float = 0.0
    ebt: float = 0.0

    @property
    def ebitda(self) -> float:
        """EBIT plus depreciation."""
        return self.ebit + self.depreciation

    @property
    def gross_profit(self) -> float:
        return self.sales - self.cost_of_sales


@dataclass(frozen=True)
class StatementFigures:
    """
    Balance sheet and income statement for one fiscal year.

    Immutable once loaded. Use ``from_dict`` to build from raw data; absent
    fields default to zero.
    """

    assets: Assets = field(default_factory=Assets)
    equity: float = 0.0
    liabilities: Liabilities = field(default_factory=Liabilities)
    income: IncomeStatement = field(default_factory=IncomeStatement)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StatementFigures":
        """
        Create StatementFigures from a nested dictionary.

        Args:
            data: Dictionary with ``assets``, ``equity``, ``liabilities`` and
                ``income`` keys, in snake_case or camelCase.

        Returns:
            StatementFigures instance

        Raises:
            DatasetError: If a value is not numeric or data is not a mapping
        """
        if not isinstance(data, Mapping):
            raise DatasetError(f"Statement figures must be a mapping, got {type(data).__name__}")
        normalized = _normalize_keys(data)
        return cls(
            assets=Assets.from_dict(normalized.get("assets")),
            equity=_amount(normalized, "equity", "statement"),
            liabilities=Liabilities.from_dict(normalized.get("liabilities")),
            income=_section(IncomeStatement, normalized.get("income"), "income"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a nested snake_case dictionary."""
        return asdict(self)

    # Convenience accessors used by the ratio engine

    @property
    def total_assets(self) -> float:
        return self.assets.total

    @property
    def current_assets(self) -> float:
        return self.assets.current.total

    @property
    def current_liabilities(self) -> float:
        return self.liabilities.short_term.total

    @property
    def total_liabilities(self) -> float:
        return self.liabilities.total

    @property
    def financial_debt(self) -> float:
        """Long-term liabilities plus short-term financial debt."""
        return self.liabilities.long_term + self.liabilities.short_term.short_term_financial_debt

    @property
    def negative_fields(self) -> list[str]:
        """Dotted names of non-result fields holding negative amounts."""
        found = []
        for path, value in _walk(self.to_dict()):
            leaf = path.rsplit(".", 1)[-1]
            if value < 0 and leaf not in SIGNED_FIELDS:
                found.append(path)
        return found


def _walk(data: Mapping[str, Any], prefix: str = ""):
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping):
            yield from _walk(value, path)
        else:
            yield path, value
