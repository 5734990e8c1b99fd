"""
Tests for INR formatting.
"""

import pytest

from price_engine.formatting import format_inr, format_inr_short


class TestFormatINR:

    @pytest.mark.parametrize("amount, expected", [
        (0, "₹0"),
        (999, "₹999"),
        (1000, "₹1,000"),
        (100000, "₹1,00,000"),
        (1234567, "₹12,34,567"),
        (12345678, "₹1,23,45,678"),
        (999.6, "₹1,000"),
        (-5000, "-₹5,000"),
    ])
    def test_indian_grouping(self, amount, expected):
        assert format_inr(amount) == expected


class TestFormatINRShort:

    @pytest.mark.parametrize("amount, expected", [
        (12_500_000, "₹1.25 Cr"),
        (10_000_000, "₹1.00 Cr"),
        (450_000, "₹4.50 L"),
        (100_000, "₹1.00 L"),
        (12_000, "₹12K"),
        (950, "₹950"),
        (0, "₹0"),
        (-1_200_000, "-₹12.00 L"),
    ])
    def test_units(self, amount, expected):
        assert format_inr_short(amount) == expected

    @pytest.mark.parametrize("amount, expected", [
        (-12_500_000, "-₹1.25 Cr"),
        (-450_000, "-₹4.50 L"),
        (-12_000, "-₹12K"),
        (-950, "-₹950"),
    ])
    def test_negative_amounts_keep_sign_and_unit(self, amount, expected):
        assert format_inr_short(amount) == expected
