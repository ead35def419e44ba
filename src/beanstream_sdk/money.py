"""Money formatting for wire amounts."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Money = Union[int, Decimal]

CENTS = Decimal("0.01")


def is_money(value) -> bool:
    return isinstance(value, (int, Decimal)) and not isinstance(value, bool)


def format_amount(money: Optional[Money]) -> Optional[str]:
    """Render an amount with two fractional digits.

    Integers are minor units (1234 -> "12.34"); Decimals are major units
    (Decimal("12.3") -> "12.30"). Floats are rejected.
    """
    if money is None:
        return None
    if not is_money(money):
        raise TypeError(
            f"money amount must be an integer in cents or a Decimal, got {type(money).__name__}"
        )
    if isinstance(money, int):
        value = Decimal(money) / 100
    else:
        value = money
    return str(value.quantize(CENTS, rounding=ROUND_HALF_UP))
