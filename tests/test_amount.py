import sys
import os
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from amount import Amount, MAX_UNITS, MAX_VALUE
from exceptions import InvalidAmount


class TestAmountConstruction:
    def test_from_decimal_truncates(self):
        assert Amount.from_decimal(Decimal("12345.67891")) == Amount(123456789)
        assert Amount.from_decimal(Decimal("0.99999")) == Amount(9999)

    def test_from_float(self):
        assert Amount.from_decimal(123_456.78912345) == Amount(1_234_567_891)
        assert Amount.from_decimal(2345.9789) == Amount(23459789)

    def test_from_int_and_string(self):
        assert Amount.from_decimal(3) == Amount(30000)
        assert Amount.parse(" 1.5 ") == Amount(15000)
        assert Amount.parse("1e2") == Amount(1000000)

    def test_negative_rejected(self):
        with pytest.raises(InvalidAmount):
            Amount.from_decimal(Decimal("-0.0001"))

    def test_negative_zero_is_zero(self):
        assert Amount.parse("-0") == Amount.ZERO

    def test_tiny_exponent_floors_to_zero(self):
        assert Amount.parse("1e-999999999") == Amount.ZERO
        assert Amount.parse("1234567e-7") == Amount(1234)

    @pytest.mark.parametrize("text", ["", "abc", "NaN", "Infinity", "1.2.3"])
    def test_not_a_number_rejected(self, text):
        with pytest.raises(InvalidAmount):
            Amount.parse(text)

    def test_out_of_range_rejected(self):
        assert Amount.from_decimal(MAX_VALUE) == Amount(MAX_UNITS)
        with pytest.raises(InvalidAmount):
            Amount.from_decimal(MAX_VALUE + Decimal("0.0001"))

    def test_bool_rejected(self):
        with pytest.raises(InvalidAmount):
            Amount.from_decimal(True)

    def test_negative_units_rejected(self):
        with pytest.raises(InvalidAmount):
            Amount(-1)

    def test_invalid_amount_is_value_error(self):
        assert issubclass(InvalidAmount, ValueError)


class TestAmountConversion:
    @pytest.mark.parametrize("text, expected", [
        ("0", "0.0000"),
        ("1.5", "1.5000"),
        ("12345.67891", "12345.6789"),
        ("0.00009", "0.0000"),
        ("1844674407370955.1615", "1844674407370955.1615"),
    ])
    def test_to_decimal_is_truncated_input(self, text, expected):
        amount = Amount.parse(text)
        assert amount.to_decimal() == Decimal(expected)
        assert str(amount) == expected

    def test_repr(self):
        assert repr(Amount(15000)) == "Amount(1.5000)"


class TestAmountArithmetic:
    def test_add_is_exact(self):
        assert Amount(1) + Amount(2) == Amount(3)
        assert Amount(MAX_UNITS) + Amount(1) == Amount(MAX_UNITS + 1)

    def test_checked_sub(self):
        assert Amount(10).checked_sub(Amount(4)) == Amount(6)
        assert Amount(10).checked_sub(Amount(10)) == Amount.ZERO
        assert Amount(10).checked_sub(Amount(11)) is None

    def test_saturating_sub(self):
        assert Amount(10).saturating_sub(Amount(4)) == Amount(6)
        assert Amount(10).saturating_sub(Amount(11)) == Amount.ZERO

    def test_ordering(self):
        assert Amount(1) < Amount(2)
        assert min(Amount(5), Amount(3)) == Amount(3)
        assert sorted([Amount(3), Amount(1), Amount(2)]) == [Amount(1), Amount(2), Amount(3)]
