"""
Custom exceptions for FinRisk.

Provides a hierarchy of exceptions rooted at FinRiskError. Numeric edge cases
(zero denominators, undefined trends) are NOT exceptions: they are represented
as NaN ratios and None trends. Only structurally missing or malformed input is
surfaced to the caller.
"""

from typing import Iterable, Optional


class FinRiskError(Exception):
    """Base exception for all FinRisk errors."""

    pass


class MissingYearError(FinRiskError, KeyError):
    """
    Raised when a fiscal year is not present in the dataset.

    Not recovered internally: the caller decides which fallback year to use.
    """

    def __init__(self, year: Optional[int], available: Iterable[int] = ()):
        self.year = year
        self.available = sorted(available)
        if year is None:
            message = "No statement figures supplied"
        else:
            message = f"Fiscal year {year} is not in the dataset"
        if self.available:
            message += f" (available: {', '.join(str(y) for y in self.available)})"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]


class DatasetError(FinRiskError):
    """
    Raised when a dataset file cannot be read or is malformed.

    Occurs for unreadable JSON, year keys that are not integers, and
    statement values that are not numeric.
    """

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{message} [{source}]"
        super().__init__(message)


class ConfigError(FinRiskError):
    """Raised when configuration values are inconsistent or invalid."""

    pass
