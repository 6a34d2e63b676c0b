"""Statement figures, the per-year dataset, and the exception hierarchy."""

from finrisk.core.data.comparison import (
    ComparisonRow,
    balance_composition,
    compare_statements,
)
from finrisk.core.data.dataset import FinancialDataset, IntegrityIssue, load_dataset
from finrisk.core.data.exceptions import (
    ConfigError,
    DatasetError,
    FinRiskError,
    MissingYearError,
)
from finrisk.core.data.statements import (
    Assets,
    CurrentAssets,
    IncomeStatement,
    Liabilities,
    NonCurrentAssets,
    ShortTermLiabilities,
    StatementFigures,
)

__all__ = [
    # Statements
    "Assets",
    "CurrentAssets",
    "IncomeStatement",
    "Liabilities",
    "NonCurrentAssets",
    "ShortTermLiabilities",
    "StatementFigures",
    # Dataset
    "FinancialDataset",
    "IntegrityIssue",
    "load_dataset",
    # Comparison
    "ComparisonRow",
    "balance_composition",
    "compare_statements",
    # Exceptions
    "ConfigError",
    "DatasetError",
    "FinRiskError",
    "MissingYearError",
]
