"""Shared command plumbing: dataset loading and year resolution.

The dataset is loaded lazily on first use inside a command, so loading errors
surface through handle_cli_errors like any other command error.
"""

import logging
from typing import Optional

import click

from finrisk.config import Config
from finrisk.core.data.dataset import FinancialDataset, load_dataset
from finrisk.core.data.exceptions import MissingYearError
from finrisk.core.ratios.engine import RatioEngine

logger = logging.getLogger(__name__)


def get_config(ctx: click.Context) -> Config:
    return ctx.obj["config"]


def get_engine(ctx: click.Context) -> RatioEngine:
    """Return the RatioEngine for this invocation, loading the dataset once."""
    engine = ctx.obj.get("engine")
    if engine is None:
        cfg = get_config(ctx)
        cfg.validate()
        path = ctx.obj.get("dataset_path") or cfg.dataset_path
        if path:
            dataset = load_dataset(path)
        else:
            dataset = FinancialDataset.default()
        engine = RatioEngine(dataset)
        ctx.obj["engine"] = engine
    return engine


def resolve_year(ctx: click.Context, year: Optional[int]) -> int:
    """
    Resolve the selected year.

    An explicit year is used as given (an unknown one raises MissingYearError
    later). The default is the configured current year when the dataset holds
    it, otherwise the latest year.
    """
    if year is not None:
        return year
    cfg = get_config(ctx)
    dataset = get_engine(ctx).dataset
    year = cfg.current_year if cfg.current_year in dataset else dataset.latest_year
    logger.debug("Using default year %s", year)
    return year


def resolve_compare_year(ctx: click.Context, year: int, compare: Optional[int]) -> int:
    """
    Resolve the comparison year for a selected year.

    Raises:
        MissingYearError: If no default comparison year exists
    """
    if compare is not None:
        return compare
    cfg = get_config(ctx)
    dataset = get_engine(ctx).dataset
    # Selecting the configured previous year compares it against the
    # configured current year, as when switching years in a dashboard.
    candidates = [y for y in (cfg.previous_year, cfg.current_year) if y in dataset and y != year]
    compare = candidates[0] if candidates else dataset.previous_year(year)
    logger.debug("Using default comparison year %s", compare)
    return compare


def optional_compare_year(ctx: click.Context, year: int) -> Optional[int]:
    """Default comparison year, or None when the dataset has no other year."""
    try:
        return resolve_compare_year(ctx, year, None)
    except MissingYearError:
        logger.debug("No comparison year for %s", year)
        return None


def resolve_years(
    ctx: click.Context, year: Optional[int], compare: Optional[int]
) -> tuple[int, int]:
    """
    Resolve the selected and comparison years.

    Defaults come from configuration when the dataset holds them, otherwise
    the latest year and its predecessor.
    """
    year = resolve_year(ctx, year)
    return year, resolve_compare_year(ctx, year, compare)
