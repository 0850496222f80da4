"""Tests for ReportingConfig."""

import pytest

from ifrs_reports import ReportingConfig


class TestReportingConfig:

    def test_defaults(self):
        config = ReportingConfig.with_defaults()
        assert config.default_currency is None
        assert config.display_precision == 2

    def test_from_dict(self):
        config = ReportingConfig.from_dict({"default_currency": "EUR", "display_precision": 4})
        assert config.default_currency == "EUR"
        assert config.display_precision == 4

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(TypeError):
            ReportingConfig.from_dict({"rounding": "HALF_UP"})

    def test_negative_precision_rejected(self):
        with pytest.raises(ValueError, match="display_precision"):
            ReportingConfig(display_precision=-1)

    @pytest.mark.parametrize("currency", ["", "EURO", "E"])
    def test_currency_must_be_iso_code(self, currency):
        with pytest.raises(ValueError, match="ISO 4217"):
            ReportingConfig(default_currency=currency)
