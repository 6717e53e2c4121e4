"""Unit tests for Indian amount-in-words conversion"""

import pytest
from decimal import Decimal

from src.domain.amount_in_words import to_words


class TestToWords:
    """Test rupee/paise words with Crore/Lakh/Thousand grouping"""

    def test_zero(self):
        """Test zero still yields a Rupees phrase"""
        assert to_words(0) == "Zero Rupees"

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (1, "One Rupees"),
            (15, "Fifteen Rupees"),
            (20, "Twenty Rupees"),
            (115, "One Hundred Fifteen Rupees"),
            (4720, "Four Thousand Seven Hundred Twenty Rupees"),
            (100000, "One Lakh Rupees"),
            (10000000, "One Crore Rupees"),
        ],
    )
    def test_whole_rupees(self, amount, expected):
        assert to_words(amount) == expected

    def test_lakh_and_paise(self):
        """Test a full Indian-grouped amount with paise"""
        assert to_words(Decimal("1234567.50")) == (
            "Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven Rupees and Fifty Paise"
        )

    def test_crore_grouping(self):
        """Test crore, lakh and thousand blocks together"""
        assert to_words(Decimal("98765432")) == (
            "Nine Crore Eighty Seven Lakh Sixty Five Thousand Four Hundred Thirty Two Rupees"
        )

    def test_more_than_999_crore(self):
        """Test crore counts are themselves grouped"""
        assert to_words(10_000_000_000) == "One Thousand Crore Rupees"

    def test_rupees_and_paise_from_float(self):
        """Test 1500.50 mentions both Rupees and Paise"""
        # Act
        words = to_words(1500.50)

        # Assert
        assert words == "One Thousand Five Hundred Rupees and Fifty Paise"

    def test_paise_only(self):
        """Test amounts below one rupee"""
        assert to_words(Decimal("0.75")) == "Zero Rupees and Seventy Five Paise"

    def test_paise_are_rounded_half_up(self):
        """Test fractional paise round to the nearest paisa"""
        assert to_words(Decimal("10.005")) == "Ten Rupees and One Paise"

    def test_teen_paise(self):
        assert to_words(Decimal("2.13")) == "Two Rupees and Thirteen Paise"

    def test_negative_amount(self):
        """Test credit notes read as Minus"""
        assert to_words(-5) == "Minus Five Rupees"
