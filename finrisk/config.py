"""
Configuration management for FinRisk.

Centralizes all configuration from environment variables with sensible defaults.
This is the SINGLE SOURCE OF TRUTH for all application configuration.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _optional_path(value: Optional[str]) -> Optional[Path]:
    return Path(value) if value else None


@dataclass
class Config:
    """
    Application configuration loaded from environment variables.

    Optional:
        FINRISK_DATASET_PATH: JSON dataset keyed by year (default: built-in case)
        FINRISK_CURRENT_YEAR: Default selected year (default: 2017)
        FINRISK_PREVIOUS_YEAR: Default comparison year (default: 2016)
        FINRISK_LOG_LEVEL: Root log level for the CLI (default: WARNING)
        FINRISK_DECIMALS: Decimals for percentage display (default: 1)
    """

    dataset_path: Optional[Path] = field(
        default_factory=lambda: _optional_path(os.getenv("FINRISK_DATASET_PATH"))
    )

    current_year: int = field(
        default_factory=lambda: int(os.getenv("FINRISK_CURRENT_YEAR", "2017"))
    )
    previous_year: int = field(
        default_factory=lambda: int(os.getenv("FINRISK_PREVIOUS_YEAR", "2016"))
    )

    log_level: str = field(
        default_factory=lambda: os.getenv("FINRISK_LOG_LEVEL", "WARNING").upper()
    )

    # Ratios shown as "times" always use 2 decimals; this applies to percentages
    decimals: int = field(
        default_factory=lambda: int(os.getenv("FINRISK_DECIMALS", "1"))
    )

    def __post_init__(self) -> None:
        """Convert string paths to Path objects if needed."""
        if isinstance(self.dataset_path, str):
            self.dataset_path = _optional_path(self.dataset_path)
        self.log_level = self.log_level.upper()

    def validate(self) -> None:
        """
        Validate configuration.

        Raises:
            ConfigError: If configuration is inconsistent or invalid.
        """
        from finrisk.core.data.exceptions import ConfigError

        if self.current_year == self.previous_year:
            raise ConfigError(
                f"FINRISK_CURRENT_YEAR and FINRISK_PREVIOUS_YEAR are both {self.current_year}. "
                "Choose two different fiscal years to compare."
            )

        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigError(
                f"Invalid FINRISK_LOG_LEVEL: {self.log_level}. "
                f"Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

        if self.decimals < 0:
            raise ConfigError(f"FINRISK_DECIMALS must be >= 0, got {self.decimals}")

    @property
    def has_custom_dataset(self) -> bool:
        """Check if a dataset file is configured."""
        return self.dataset_path is not None

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level, logging.WARNING)

