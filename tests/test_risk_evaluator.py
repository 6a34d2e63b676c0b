"""
Tests for the risk evaluator.

Tests cover:
- The five catalogue scenarios, in order
- Impact/probability levels and severity tiers
- Static content independent of ratio values
- Ratio bindings (current, previous, trend)
- Headline / remaining split
"""

import dataclasses
import math

import pytest

from finrisk.core.data.exceptions import MissingYearError
from finrisk.core.ratios.definitions import RatioName
from finrisk.core.ratios.engine import compute_ratios
from finrisk.core.risk.catalogue import RISK_CATALOGUE, RiskScenario
from finrisk.core.risk.evaluator import (
    RiskEvaluator,
    assess,
    evaluate_risks,
    highest_severity,
    remaining_risks,
    top_risks,
)
from finrisk.core.risk.severity import SeverityTier


@pytest.fixture
def assessments(ratios_2017, ratios_2016):
    return evaluate_risks(ratios_2017, ratios_2016)


class TestCatalogue:
    """Tests for the static scenario catalogue."""

    def test_five_scenarios(self):
        assert [s.id for s in RISK_CATALOGUE] == [1, 2, 3, 4, 5]

    def test_scores(self):
        assert [(s.impact, s.probability) for s in RISK_CATALOGUE] == [
            (9, 6),
            (8, 7),
            (7, 8),
            (6, 7),
            (7, 6),
        ]

    def test_every_scenario_has_content(self):
        for scenario in RISK_CATALOGUE:
            assert scenario.title
            assert scenario.description
            assert scenario.factors
            assert scenario.mitigation
            assert scenario.related_ratios

    def test_invalid_impact_rejected(self):
        with pytest.raises(ValueError, match="impact"):
            RiskScenario(9, "Bad", "", 11, 5, (), (), ())

    def test_duplicate_related_ratio_rejected(self):
        with pytest.raises(ValueError, match="twice"):
            RiskScenario(
                9, "Bad", "", 5, 5, (), (),
                (RatioName.EBIT_MARGIN, RatioName.EBIT_MARGIN),
            )


class TestEvaluateRisks:
    """Tests for evaluate_risks on the 2017 vs 2016 case."""

    def test_titles_in_order(self, assessments):
        assert [a.title for a in assessments] == [
            "Insolvency Risk",
            "Liquidity Risk",
            "Operating Profitability Deterioration",
            "Refinancing Risk",
            "Market Risk",
        ]

    def test_insolvency(self, assessments):
        insolvency = assessments[0]

        assert insolvency.impact == 9
        assert insolvency.impact_level == SeverityTier.CRITICAL
        assert insolvency.probability == 6
        assert insolvency.probability_level == SeverityTier.HIGH
        assert insolvency.score == pytest.approx(5.4)
        assert insolvency.severity == SeverityTier.MEDIUM

    def test_liquidity(self, assessments):
        liquidity = assessments[1]

        assert liquidity.impact_level == SeverityTier.CRITICAL
        assert liquidity.probability_level == SeverityTier.HIGH
        assert liquidity.score == pytest.approx(5.6)
        assert liquidity.severity == SeverityTier.MEDIUM
        assert len(liquidity.mitigation) == 5

    def test_operating(self, assessments):
        operating = assessments[2]
        assert operating.impact_level == SeverityTier.HIGH
        assert operating.probability_level == SeverityTier.CRITICAL
        assert operating.severity == SeverityTier.MEDIUM

    def test_all_medium(self, assessments):
        assert {a.severity for a in assessments} == {SeverityTier.MEDIUM}
        assert highest_severity(assessments) == SeverityTier.MEDIUM

    def test_coordinates(self, assessments):
        assert assessments[0].coordinates == {"x": 6, "y": 9}
        assert assessments[2].coordinates == {"x": 8, "y": 7}

    def test_content_independent_of_ratios(self, assessments, zero_figures):
        undefined = compute_ratios(zero_figures)
        other = evaluate_risks(undefined, undefined)

        for a, b in zip(assessments, other):
            assert (a.impact, a.probability, a.severity) == (b.impact, b.probability, b.severity)
            assert a.factors == b.factors
            assert a.mitigation == b.mitigation

    def test_without_ratios(self):
        assessments = evaluate_risks(None)

        assert len(assessments) == 5
        for a in assessments:
            for binding in a.ratio_values:
                assert binding.current is None
                assert binding.trend is None

    def test_immutable(self, assessments):
        with pytest.raises(dataclasses.FrozenInstanceError):
            assessments[0].impact = 1

    def test_custom_catalogue(self, ratios_2017):
        scenario = RiskScenario(
            7, "Concentration Risk", "Single supplier", 3, 3, ("f",), ("m",),
            (RatioName.GROSS_MARGIN,),
        )
        [assessment] = evaluate_risks(ratios_2017, catalogue=(scenario,))
        assert assessment.severity == SeverityTier.LOW


class TestRatioBindings:
    """Related ratios are bound to their current/previous values and trend."""

    def test_insolvency_bindings(self, assessments, ratios_2017, ratios_2016):
        bindings = {b.name: b for b in assessments[0].ratio_values}

        assert list(bindings) == [RatioName.EQUITY_STRENGTH, RatioName.FINANCIAL_LEVERAGE]
        equity = bindings[RatioName.EQUITY_STRENGTH]
        assert equity.current == ratios_2017[RatioName.EQUITY_STRENGTH]
        assert equity.previous == ratios_2016[RatioName.EQUITY_STRENGTH]
        assert equity.trend == pytest.approx(-10.3888, abs=0.01)

    def test_liquidity_bindings(self, assessments):
        names = [b.name for b in assessments[1].ratio_values]
        assert names == [
            RatioName.CURRENT_LIQUIDITY,
            RatioName.QUICK_LIQUIDITY,
            RatioName.IMMEDIATE_LIQUIDITY,
        ]

    def test_undefined_ratio_binds_none(self, ratios_2016, no_equity_figures):
        current = compute_ratios(no_equity_figures)
        [insolvency] = evaluate_risks(current, ratios_2016)[:1]
        leverage = next(
            b for b in insolvency.ratio_values if b.name == RatioName.FINANCIAL_LEVERAGE
        )

        assert leverage.current is None
        assert leverage.previous is not None and math.isfinite(leverage.previous)
        assert leverage.trend is None

    def test_to_dict(self, assessments):
        data = assessments[0].to_dict()

        assert data["title"] == "Insolvency Risk"
        assert data["severity"] == "Medium"
        assert data["impact_level"] == "Critical"
        assert data["probability_level"] == "High"
        assert data["score"] == 5.4
        assert data["related_ratios"] == ["equity_strength", "financial_leverage"]
        assert data["ratio_values"]["equity_strength"]["trend"] == pytest.approx(
            -10.3888, abs=0.01
        )
        assert data["coordinates"] == {"x": 6, "y": 9}


class TestHeadlineSplit:
    """Tests for top_risks / remaining_risks."""

    def test_top_risks(self, assessments):
        assert [a.id for a in top_risks(assessments)] == [1, 2]

    def test_remaining_risks(self, assessments):
        assert [a.id for a in remaining_risks(assessments)] == [3, 4, 5]

    def test_custom_count(self, assessments):
        assert len(top_risks(assessments, 3)) == 3
        assert len(remaining_risks(assessments, 3)) == 2

    def test_highest_severity_empty(self):
        assert highest_severity([]) is None


class TestRiskEvaluator:
    """Tests for RiskEvaluator year access."""

    def test_evaluate(self, engine):
        risks = RiskEvaluator(engine).evaluate(2017, 2016)

        assert len(risks) == 5
        assert risks[0].ratio_values[0].trend == pytest.approx(-10.3888, abs=0.01)

    def test_evaluate_without_previous(self, engine):
        risks = RiskEvaluator(engine).evaluate(2017)
        assert all(b.trend is None for a in risks for b in a.ratio_values)

    def test_unknown_year(self, engine):
        with pytest.raises(MissingYearError):
            RiskEvaluator(engine).evaluate(2015, 2016)

    def test_default_engine(self):
        assert RiskEvaluator().evaluate(2017, 2016)[0].id == 1

    def test_assess_single(self, ratios_2017):
        assessment = assess(RISK_CATALOGUE[3], ratios_2017)
        assert assessment.title == "Refinancing Risk"
        assert assessment.ratio_values[0].current == pytest.approx(0.239784, abs=1e-5)
