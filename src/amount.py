from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_DOWN, localcontext
from typing import Optional, Union

from exceptions import InvalidAmount

SCALE = 10_000
DECIMAL_PLACES = 4

# Inputs are capped at what an unsigned 64-bit count of ten-thousandths can hold.
# Sums are plain Python ints and never overflow.
MAX_UNITS = 2**64 - 1
MAX_VALUE = Decimal(MAX_UNITS).scaleb(-DECIMAL_PLACES)
QUANTUM = Decimal(1).scaleb(-DECIMAL_PLACES)


@dataclass(frozen=True, order=True)
class Amount:
    """
    Non-negative money value with exactly 4 decimal digits.
    Stored as an integer count of ten-thousandths, never as a float.
    """

    units: int = 0

    def __post_init__(self):
        if not isinstance(self.units, int) or isinstance(self.units, bool):
            raise InvalidAmount(f"units must be an int, got {self.units!r}")
        if self.units < 0:
            raise InvalidAmount(f"amount cannot be negative: {self.units} units")

    @classmethod
    def from_decimal(cls, value: Union[Decimal, int, float, str]) -> "Amount":
        """
        Build an Amount, flooring to 4 decimal places.

        Floats go through their shortest repr so 2345.9789 stays 2345.9789
        instead of its binary neighbour 2345.97889999...

        Raises:
            InvalidAmount: value is negative, NaN/infinite, not a number,
                or larger than MAX_VALUE.
        """
        if isinstance(value, bool):
            raise InvalidAmount(f"not a numeric amount: {value!r}")
        try:
            if isinstance(value, float):
                value = Decimal(repr(value))
            elif not isinstance(value, Decimal):
                value = Decimal(value)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidAmount(f"not a numeric amount: {value!r}") from None

        if not value.is_finite():
            raise InvalidAmount(f"amount must be finite: {value}")
        if value < 0:
            raise InvalidAmount(f"amount cannot be negative: {value}")
        if value > MAX_VALUE:
            raise InvalidAmount(f"amount exceeds {MAX_VALUE}: {value}")

        # Floors without expanding the exponent; the range check keeps the result within 20 digits.
        with localcontext() as ctx:
            ctx.prec = 28
            floored = value.quantize(QUANTUM, rounding=ROUND_DOWN)
            return cls(int(floored.scaleb(DECIMAL_PLACES)))

    @classmethod
    def parse(cls, text: str) -> "Amount":
        return cls.from_decimal(text.strip())

    def to_decimal(self) -> Decimal:
        return Decimal(str(self))

    def checked_sub(self, other: "Amount") -> Optional["Amount"]:
        """Return self - other, or None when other is larger (insufficient funds)."""
        if other.units > self.units:
            return None
        return Amount(self.units - other.units)

    def saturating_sub(self, other: "Amount") -> "Amount":
        return Amount(max(self.units - other.units, 0))

    def __add__(self, other: "Amount") -> "Amount":
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.units + other.units)

    def __str__(self) -> str:
        whole, fraction = divmod(self.units, SCALE)
        return f"{whole}.{fraction:0{DECIMAL_PLACES}d}"

    def __repr__(self) -> str:
        return f"Amount({self})"


Amount.ZERO = Amount(0)
