"""
Pytest configuration and shared fixtures for FinRisk tests.

This module provides common fixtures used across all test modules,
including the built-in two-year case, ratio sets, and edge-case figures.
"""

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from finrisk.core.data.dataset import DEFAULT_FIGURES, FinancialDataset
from finrisk.core.data.statements import StatementFigures
from finrisk.core.ratios.engine import RatioEngine, RatioSet


# ==============================================================================
# Autouse Fixtures - Run automatically for all tests
# ==============================================================================


@pytest.fixture(autouse=True)
def set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear FinRisk environment variables so tests use defaults."""
    for name in (
        "FINRISK_DATASET_PATH",
        "FINRISK_CURRENT_YEAR",
        "FINRISK_PREVIOUS_YEAR",
        "FINRISK_LOG_LEVEL",
        "FINRISK_DECIMALS",
    ):
        monkeypatch.delenv(name, raising=False)


# ==============================================================================
# Dataset Fixtures
# ==============================================================================


@pytest.fixture
def raw_2017() -> dict[str, Any]:
    """Raw camelCase figures for 2017 (deep copy, safe to mutate)."""
    return copy.deepcopy(DEFAULT_FIGURES[2017])


@pytest.fixture
def raw_2016() -> dict[str, Any]:
    """Raw camelCase figures for 2016 (deep copy, safe to mutate)."""
    return copy.deepcopy(DEFAULT_FIGURES[2016])


@pytest.fixture
def dataset() -> FinancialDataset:
    """The built-in 2016/2017 case."""
    return FinancialDataset.default()


@pytest.fixture
def engine(dataset: FinancialDataset) -> RatioEngine:
    return RatioEngine(dataset)


@pytest.fixture
def ratios_2017(engine: RatioEngine) -> RatioSet:
    return engine.ratios(2017)


@pytest.fixture
def ratios_2016(engine: RatioEngine) -> RatioSet:
    return engine.ratios(2016)


@pytest.fixture
def zero_figures() -> StatementFigures:
    """Figures with every amount zero: every division is undefined."""
    return StatementFigures()


@pytest.fixture
def no_equity_figures(raw_2017: dict[str, Any]) -> StatementFigures:
    """
    2017 figures with zero equity.

    Undefined: financial_leverage, return_on_equity.
    Everything else stays finite.
    """
    raw_2017["equity"] = 0
    return StatementFigures.from_dict(raw_2017)


@pytest.fixture
def dataset_file(tmp_path: Path, raw_2017: dict[str, Any], raw_2016: dict[str, Any]) -> Path:
    """JSON dataset file with string year keys, as written by hand."""
    path = tmp_path / "case.json"
    path.write_text(json.dumps({"2017": raw_2017, "2016": raw_2016}), encoding="utf-8")
    return path
