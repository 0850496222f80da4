"""
Reporting Configuration Schema.

Formatting and default options for report generation.  Account
classification is not configured here; it comes from the frozen
``ifrs_config`` section table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from ifrs_kernel.logging_config import get_logger

logger = get_logger("reports.config")


@dataclass
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    Controls the reporting currency used when none is given and the
    number of decimal places printed by the renderer.
    """

    # Currency schedules filter on when the caller passes none
    default_currency: str | None = None

    # Rounding precision for display
    display_precision: int = 2

    def __post_init__(self):
        if self.display_precision < 0:
            raise ValueError("display_precision cannot be negative")
        if self.default_currency is not None and len(self.default_currency) != 3:
            raise ValueError("default_currency must be a 3-letter ISO 4217 code")

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary."""
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)
