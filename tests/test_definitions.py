"""Tests for the ratio catalogue metadata."""

import pytest

from finrisk.core.ratios.definitions import (
    RATIO_DEFINITIONS,
    RatioCategory,
    RatioName,
    RatioUnit,
    get_definition,
    ratios_by_category,
)


class TestRatioName:
    """Tests for RatioName parsing."""

    def test_fifteen_names(self):
        assert len(RatioName) == 15

    @pytest.mark.parametrize(
        "raw", ["equity_strength", "EQUITY_STRENGTH", "equity-strength", " equity_strength "]
    )
    def test_parse(self, raw):
        assert RatioName.parse(raw) is RatioName.EQUITY_STRENGTH

    def test_parse_member(self):
        assert RatioName.parse(RatioName.GROSS_MARGIN) is RatioName.GROSS_MARGIN

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Valid ratios"):
            RatioName.parse("altman_z")

    def test_str(self):
        assert str(RatioName.EBIT_MARGIN) == "ebit_margin"


class TestDefinitions:
    """Tests for RATIO_DEFINITIONS."""

    def test_every_ratio_defined(self):
        assert list(RATIO_DEFINITIONS) == list(RatioName)

    def test_units(self):
        assert get_definition(RatioName.EQUITY_STRENGTH).unit == RatioUnit.PERCENT
        assert get_definition(RatioName.CURRENT_LIQUIDITY).unit == RatioUnit.TIMES
        assert get_definition(RatioName.WORKING_CAPITAL).unit == RatioUnit.CURRENCY

    def test_leverage_lower_is_better(self):
        assert get_definition("financial_leverage").higher_is_better is False
        assert get_definition("equity_strength").higher_is_better is True

    def test_by_category(self):
        grouped = ratios_by_category()

        assert list(grouped) == list(RatioCategory)
        assert sum(len(v) for v in grouped.values()) == 15
        assert [d.name for d in grouped[RatioCategory.LIQUIDITY]] == [
            RatioName.CURRENT_LIQUIDITY,
            RatioName.QUICK_LIQUIDITY,
            RatioName.IMMEDIATE_LIQUIDITY,
            RatioName.WORKING_CAPITAL,
        ]
        assert [d.name for d in grouped[RatioCategory.DEBT_CAPACITY]] == [
            RatioName.DEBT_SERVICE_CAPACITY
        ]
