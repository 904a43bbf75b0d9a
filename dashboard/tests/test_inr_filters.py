"""Tests for Indian rupee template filters."""

from decimal import Decimal

from dashboard.templatetags.inr_filters import inr, inr_words


class TestInr:
    def test_indian_grouping(self):
        assert inr(Decimal("1234567.891")) == "₹12,34,567.89"

    def test_small_amounts(self):
        assert inr(999) == "₹999.00"
        assert inr(0) == "₹0.00"

    def test_crore(self):
        assert inr(120000000) == "₹12,00,00,000.00"

    def test_no_decimals(self):
        assert inr(Decimal("1770.5"), 0) == "₹1,771"

    def test_negative(self):
        assert inr(-1500) == "-₹1,500.00"

    def test_non_number_passes_through(self):
        assert inr("n/a") == "n/a"


class TestInrWords:
    def test_zero(self):
        assert inr_words(0) == "Rupees Zero Only"

    def test_thousands(self):
        assert inr_words(1770) == "Rupees One Thousand Seven Hundred Seventy Only"

    def test_lakh_with_paise(self):
        assert inr_words(Decimal("250000.50")) == "Rupees Two Lakh Fifty Thousand and Fifty Paise Only"

    def test_crore(self):
        assert inr_words(123456789) == (
            "Rupees Twelve Crore Thirty Four Lakh Fifty Six Thousand Seven Hundred Eighty Nine Only"
        )

    def test_teens(self):
        assert inr_words(115) == "Rupees One Hundred Fifteen Only"
