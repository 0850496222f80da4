"""Tests for reporting currency normalization (ifrs_engines.exchange)."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from ifrs_engines.exchange import normalize
from ifrs_kernel.domain.records import ExchangeRate
from ifrs_kernel.exceptions import InvalidRate


class TestNormalize:

    def test_divides_by_rate(self):
        assert normalize(Decimal("110"), ExchangeRate(Decimal("1.1"), "EUR")) == Decimal("100")

    def test_unit_rate_is_identity(self):
        assert normalize(Decimal("232"), ExchangeRate(Decimal("1"))) == Decimal("232")

    def test_negative_amounts_keep_sign(self):
        assert normalize(Decimal("-50"), ExchangeRate(Decimal("2"))) == Decimal("-25")

    @pytest.mark.parametrize("rate", [Decimal("0"), Decimal("-0.5")])
    def test_non_positive_rate_raises(self, rate):
        with pytest.raises(InvalidRate) as exc_info:
            normalize(Decimal("10"), SimpleNamespace(rate=rate))
        assert exc_info.value.rate == str(rate)
