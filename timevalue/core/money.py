"""Decimal helpers shared by the money-valued calculators."""

from __future__ import annotations

from decimal import Decimal
from typing import Union

from timevalue.errors import InvalidInputError

Number = Union[Decimal, int, float, str]

HUNDRED = Decimal(100)


def to_decimal(value: Number) -> Decimal:
    """Convert via ``str`` so that ``7.1`` becomes ``Decimal("7.1")``, not its binary expansion."""
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise InvalidInputError([f"expected a number, got {value!r}"])
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except ArithmeticError:
            raise InvalidInputError([f"expected a number, got {value!r}"]) from None
    else:
        raise InvalidInputError([f"expected a number, got {type(value).__name__}"])

    if not result.is_finite():
        raise InvalidInputError([f"expected a finite number, got {value!r}"])
    return result


def percent_of(part: Decimal, whole: Decimal) -> Decimal:
    # A zero base reports 0% instead of dividing by zero.
    if whole == 0:
        return Decimal(0)
    return part / whole * HUNDRED
