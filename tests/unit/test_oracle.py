"""Tests for PriceOracle."""

from fractions import Fraction

import pytest

from dex.constants import PRICE_SCALE
from dex.errors import NoLiquidity
from dex.oracle import PriceOracle, price_oracle


class TestPriceOracle:
    def test_exact_price(self):
        assert price_oracle.get_price(100, 200) == Fraction(2)
        assert price_oracle.get_price(3, 1) == Fraction(1, 3)

    def test_scaling_invariant(self):
        """Proportional reserves give an identical price."""
        assert price_oracle.get_price(100, 200) == price_oracle.get_price(150, 300)
        assert price_oracle.get_price(7, 11) == price_oracle.get_price(7 * 10**30, 11 * 10**30)

    def test_truncated_price(self):
        """Integer projection truncates toward zero."""
        assert price_oracle.get_price_truncated(100, 200) == 2
        assert price_oracle.get_price_truncated(200, 100) == 0
        assert price_oracle.get_price_truncated(100, 299) == 2

    def test_scaled_price(self):
        assert price_oracle.get_price_scaled(100, 200) == 2 * PRICE_SCALE
        assert price_oracle.get_price_scaled(3, 1) == PRICE_SCALE // 3
        assert PriceOracle().get_price_scaled(4, 1, scale=100) == 25

    def test_empty_pool_raises(self):
        with pytest.raises(NoLiquidity):
            price_oracle.get_price(0, 0)
        with pytest.raises(NoLiquidity):
            price_oracle.get_price_truncated(0, 0)
        with pytest.raises(NoLiquidity):
            price_oracle.get_price_scaled(0, 0)
