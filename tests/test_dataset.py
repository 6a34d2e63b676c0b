"""
Tests for FinancialDataset and load_dataset.

Tests cover:
- Built-in case structure
- Year lookup and MissingYearError
- Previous/latest year resolution
- Integrity checks (reported, never rejected)
- Loading JSON files and malformed input
"""

import json
import logging

import pytest

from finrisk.core.data.dataset import FinancialDataset, IntegrityIssue, load_dataset
from finrisk.core.data.exceptions import DatasetError, FinRiskError, MissingYearError
from finrisk.core.data.statements import StatementFigures


class TestDefaultDataset:
    """Tests for the built-in two-year case."""

    def test_years(self, dataset):
        assert dataset.years == [2016, 2017]
        assert len(dataset) == 2

    def test_iteration_is_sorted(self, dataset):
        assert list(dataset) == [2016, 2017]

    def test_lookup(self, dataset):
        figures = dataset[2017]
        assert isinstance(figures, StatementFigures)
        assert figures.equity == 325983

    def test_contains(self, dataset):
        assert 2017 in dataset
        assert 2015 not in dataset

    def test_get_unknown_year_returns_default(self, dataset):
        assert dataset.get(2015) is None

    def test_latest_year(self, dataset):
        assert dataset.latest_year == 2017

    def test_previous_year(self, dataset):
        assert dataset.previous_year(2017) == 2016

    def test_default_is_consistent(self, dataset):
        assert dataset.check_integrity() == []

    def test_repr(self, dataset):
        assert "2016" in repr(dataset) and "2017" in repr(dataset)


class TestMissingYear:
    """Tests for lookups of unknown years."""

    def test_getitem_raises(self, dataset):
        with pytest.raises(MissingYearError) as exc_info:
            dataset[2015]

        assert exc_info.value.year == 2015
        assert exc_info.value.available == [2016, 2017]
        assert "2015" in str(exc_info.value)
        assert "available: 2016, 2017" in str(exc_info.value)

    def test_is_key_error(self, dataset):
        with pytest.raises(KeyError):
            dataset[2015]

    def test_is_finrisk_error(self, dataset):
        with pytest.raises(FinRiskError):
            dataset[2015]

    def test_previous_year_of_earliest(self, dataset):
        with pytest.raises(MissingYearError):
            dataset.previous_year(2016)

    def test_previous_year_of_unknown(self, dataset):
        with pytest.raises(MissingYearError):
            dataset.previous_year(2020)

    def test_latest_year_of_empty_dataset(self):
        with pytest.raises(MissingYearError, match="No statement figures"):
            FinancialDataset({}).latest_year

    def test_previous_year_skips_gaps(self, raw_2017, raw_2016):
        dataset = FinancialDataset.from_dict({2014: raw_2016, 2017: raw_2017})
        assert dataset.previous_year(2017) == 2014


class TestFromDict:
    """Tests for FinancialDataset.from_dict."""

    def test_string_year_keys(self, raw_2017):
        dataset = FinancialDataset.from_dict({"2017": raw_2017})
        assert dataset.years == [2017]

    def test_invalid_year_key(self, raw_2017):
        with pytest.raises(DatasetError, match="Invalid fiscal year"):
            FinancialDataset.from_dict({"FY17": raw_2017})

    def test_boolean_year_key(self, raw_2017):
        with pytest.raises(DatasetError):
            FinancialDataset.from_dict({True: raw_2017})

    def test_duplicate_year(self, raw_2017):
        with pytest.raises(DatasetError, match="Duplicate"):
            FinancialDataset.from_dict({2017: raw_2017, "2017": raw_2017})

    def test_read_only(self, dataset):
        with pytest.raises(TypeError):
            dataset[2018] = dataset[2017]


class TestIntegrity:
    """Totals that disagree with their components are reported, not rejected."""

    def test_mismatched_current_total(self, raw_2017):
        raw_2017["assets"]["current"]["total"] = 1263000
        dataset = FinancialDataset.from_dict({2017: raw_2017})

        issues = dataset.check_integrity()

        fields = [i.field for i in issues]
        assert "assets.current.total" in fields
        issue = next(i for i in issues if i.field == "assets.current.total")
        assert issue.year == 2017
        assert issue.reported == 1263000
        assert issue.expected == 1263319
        assert issue.difference == -319

    def test_data_still_usable(self, raw_2017):
        raw_2017["liabilities"]["total"] = 1
        dataset = FinancialDataset.from_dict({2017: raw_2017})

        assert dataset.check_integrity()
        assert dataset[2017].liabilities.total == 1

    def test_balance_identity(self, raw_2017):
        raw_2017["equity"] = 300000
        dataset = FinancialDataset.from_dict({2017: raw_2017})

        fields = [i.field for i in dataset.check_integrity()]
        assert fields == ["equity_and_liabilities"]

    def test_rounding_tolerated(self, raw_2017):
        raw_2017["assets"]["total"] = 3626174.4
        dataset = FinancialDataset.from_dict({2017: raw_2017})
        assert dataset.check_integrity() == []

    def test_mismatch_logged(self, raw_2017, caplog):
        raw_2017["assets"]["nonCurrent"]["total"] = 0
        dataset = FinancialDataset.from_dict({2017: raw_2017})

        with caplog.at_level(logging.WARNING, logger="finrisk.core.data.dataset"):
            dataset.check_integrity()

        assert "assets.non_current.total" in caplog.text

    def test_issue_str(self):
        issue = IntegrityIssue(2017, "assets.total", 100.0, 90.0)
        assert str(issue) == "2017 assets.total: reported 100, components sum to 90 (+10)"


class TestLoadDataset:
    """Tests for loading datasets from JSON files."""

    def test_load(self, dataset_file, dataset):
        loaded = load_dataset(dataset_file)

        assert loaded.years == [2016, 2017]
        assert loaded[2017] == dataset[2017]

    def test_load_accepts_str_path(self, dataset_file):
        assert load_dataset(str(dataset_file)).years == [2016, 2017]

    def test_missing_file(self, tmp_path):
        path = tmp_path / "absent.json"
        with pytest.raises(DatasetError, match="not found") as exc_info:
            load_dataset(path)
        assert exc_info.value.source == str(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DatasetError, match="Cannot read dataset"):
            load_dataset(path)

    def test_top_level_list(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        with pytest.raises(DatasetError, match="JSON object"):
            load_dataset(path)

    def test_overflowing_number_rejected(self, tmp_path):
        # json reads 1e999 as float("inf")
        path = tmp_path / "overflow.json"
        path.write_text('{"2017": {"income": {"sales": 1e999}}}', encoding="utf-8")
        with pytest.raises(DatasetError, match="must be finite") as exc_info:
            load_dataset(path)
        assert str(path) in str(exc_info.value)

    def test_malformed_values_name_source(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"2017": {"equity": "n/a"}}), encoding="utf-8")
        with pytest.raises(DatasetError) as exc_info:
            load_dataset(path)
        assert "equity" in str(exc_info.value)
        assert str(path) in str(exc_info.value)
