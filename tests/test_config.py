"""Tests for configuration management."""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from finrisk.config import Config
from finrisk.core.data.exceptions import ConfigError


class TestConfigDefaults:
    """Tests for default configuration values."""

    def test_default_years(self):
        with patch.dict(os.environ, {}, clear=True):
            cfg = Config()
            assert cfg.current_year == 2017
            assert cfg.previous_year == 2016

    def test_default_dataset(self):
        with patch.dict(os.environ, {}, clear=True):
            cfg = Config()
            assert cfg.dataset_path is None
            assert cfg.has_custom_dataset is False

    def test_default_log_level(self):
        with patch.dict(os.environ, {}, clear=True):
            cfg = Config()
            assert cfg.log_level == "WARNING"
            assert cfg.log_level_value == logging.WARNING

    def test_default_decimals(self):
        with patch.dict(os.environ, {}, clear=True):
            assert Config().decimals == 1

    def test_defaults_validate(self):
        with patch.dict(os.environ, {}, clear=True):
            Config().validate()


class TestConfigFromEnv:
    """Tests for configuration from environment variables."""

    def test_custom_dataset_path(self):
        with patch.dict(os.environ, {"FINRISK_DATASET_PATH": "/data/case.json"}):
            cfg = Config()
            assert cfg.dataset_path == Path("/data/case.json")
            assert cfg.has_custom_dataset is True

    def test_empty_dataset_path_is_unset(self):
        with patch.dict(os.environ, {"FINRISK_DATASET_PATH": ""}):
            assert Config().dataset_path is None

    def test_custom_years(self):
        with patch.dict(
            os.environ, {"FINRISK_CURRENT_YEAR": "2016", "FINRISK_PREVIOUS_YEAR": "2017"}
        ):
            cfg = Config()
            assert cfg.current_year == 2016
            assert cfg.previous_year == 2017

    def test_log_level_uppercased(self):
        with patch.dict(os.environ, {"FINRISK_LOG_LEVEL": "debug"}):
            cfg = Config()
            assert cfg.log_level == "DEBUG"
            assert cfg.log_level_value == logging.DEBUG

    def test_custom_decimals(self):
        with patch.dict(os.environ, {"FINRISK_DECIMALS": "3"}):
            assert Config().decimals == 3

    def test_non_integer_year(self):
        with patch.dict(os.environ, {"FINRISK_CURRENT_YEAR": "FY17"}):
            with pytest.raises(ValueError):
                Config()

    def test_each_instance_reads_environment(self):
        with patch.dict(os.environ, {"FINRISK_CURRENT_YEAR": "2017"}):
            first = Config()
        with patch.dict(os.environ, {"FINRISK_CURRENT_YEAR": "2018"}):
            second = Config()
        assert (first.current_year, second.current_year) == (2017, 2018)

    def test_no_module_level_instance(self):
        import finrisk.config

        assert not hasattr(finrisk.config, "config")

    def test_string_path_converted(self):
        cfg = Config(dataset_path="case.json")
        assert cfg.dataset_path == Path("case.json")


class TestConfigValidation:
    """Tests for Config.validate."""

    def test_equal_years(self):
        cfg = Config(current_year=2017, previous_year=2017)
        with pytest.raises(ConfigError, match="both 2017"):
            cfg.validate()

    def test_invalid_log_level(self):
        cfg = Config(log_level="verbose")
        with pytest.raises(ConfigError, match="FINRISK_LOG_LEVEL"):
            cfg.validate()

    def test_negative_decimals(self):
        cfg = Config(decimals=-1)
        with pytest.raises(ConfigError, match="FINRISK_DECIMALS"):
            cfg.validate()
