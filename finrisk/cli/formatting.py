"""Centralized formatting utilities for CLI output.

Provides consistent colors, indicators, and number formatting across all
CLI commands. Ratio values arrive un-scaled (0.0899 for 8.99%); scaling to
percent happens here and nowhere else.
"""

import math
from numbers import Real
from typing import Any, Optional

from rich.console import Console

from finrisk.core.ratios.definitions import RatioUnit, get_definition
from finrisk.core.risk.severity import SeverityTier


# =============================================================================
# Standard Padding & Borders
# =============================================================================

PANEL_PADDING = (1, 2)
TABLE_PADDING = (0, 2)

BORDER_PRIMARY = "blue"      # Main content panels
BORDER_METADATA = "dim"      # Secondary/metadata panels
BORDER_WARNING = "yellow"    # Warning panels
BORDER_ERROR = "red"         # Error/alert panels

# Placeholder for undefined or non-numeric values
MISSING = "-"

# Decimals used for ratios displayed as multiples
TIMES_DECIMALS = 2


# =============================================================================
# Number Formatting
# =============================================================================


def is_number(value: Any) -> bool:
    """True for finite real numbers (bools excluded)."""
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def format_number(value: Any, decimals: int = 1, unit: str = "") -> str:
    """
    Format a number for display.

    Args:
        value: Number to format; anything non-finite or non-numeric renders MISSING
        decimals: Digits after the decimal point
        unit: Suffix; "%" multiplies the value by 100 first

    Examples:
        >>> format_number(0.0899, 1, "%")
        "9.0%"
        >>> format_number(-1027674, 0, " EUR")
        "-1,027,674 EUR"
        >>> format_number(float("nan"))
        "-"
    """
    if not is_number(value):
        return MISSING
    multiplier = 100 if unit == "%" else 1
    return f"{value * multiplier:,.{decimals}f}{unit}"


def format_ratio(name, value: Any, decimals: int = 1) -> str:
    """Format a ratio value according to its display unit."""
    unit = get_definition(name).unit
    if unit == RatioUnit.PERCENT:
        return format_number(value, decimals, "%")
    if unit == RatioUnit.CURRENCY:
        return format_number(value, 0, " EUR")
    return format_number(value, TIMES_DECIMALS)


def format_trend(trend: Optional[float], decimals: int = 1) -> str:
    """Render a trend as '^ 3.2%' / 'v 10.4%', or MISSING when undefined."""
    if not is_number(trend):
        return MISSING
    arrow = Signals.ARROW_UP if trend >= 0 else Signals.ARROW_DOWN
    return f"{arrow} {abs(trend):.{decimals}f}%"


def get_trend_color(trend: Optional[float], higher_is_better: bool = True) -> str:
    """Green for favourable moves, red for unfavourable, dim when undefined."""
    if not is_number(trend):
        return "dim"
    if trend == 0:
        return "white"
    improving = trend > 0 if higher_is_better else trend < 0
    return "green" if improving else "red"


# =============================================================================
# Severity Colors
# =============================================================================


TIER_COLORS = {
    SeverityTier.CRITICAL: "red",
    SeverityTier.HIGH: "dark_orange",
    SeverityTier.MEDIUM: "yellow",
    SeverityTier.LOW: "green",
}


def get_tier_color(tier: Optional[SeverityTier]) -> str:
    """Get Rich color for a severity tier."""
    return TIER_COLORS.get(tier, "white")


def format_tier(tier: SeverityTier) -> str:
    """Tier label wrapped in its Rich color."""
    color = get_tier_color(tier)
    return f"[{color}]{tier.value}[/{color}]"


# =============================================================================
# Signal Indicators (ASCII-safe for Windows compatibility)
# =============================================================================


class Signals:
    """ASCII signal indicators for CLI display."""

    ARROW_UP = "^"
    ARROW_DOWN = "v"
    BULLET = "*"
    WARNING = "!"
    MARKER = "#"


def make_progress_bar(value: float, max_value: float, width: int = 10) -> str:
    """Create a text-based progress bar using ASCII characters."""
    if not is_number(value) or max_value <= 0:
        return "-" * width
    filled = max(0, min(width, int((value / max_value) * width)))
    return "#" * filled + "-" * (width - filled)


# =============================================================================
# Helper Functions for Consistent Output
# =============================================================================


def print_next_steps(console: Console, steps: list[tuple[str, str]]) -> None:
    """
    Print standardized next-step hints.

    Args:
        console: Rich console instance
        steps: List of (label, command) tuples
    """
    console.print()
    console.print("[dim]Next steps:[/dim]")
    for label, cmd in steps:
        console.print(f"  [dim]{label}:[/dim]  {cmd}")
