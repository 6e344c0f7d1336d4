"""Simple return measures used alongside XIRR."""

from __future__ import annotations

import datetime as dt
import math
from decimal import Decimal
from typing import Optional

from timevalue.core.money import Number, percent_of, to_decimal

# Calendar-average year, used for holding-period lengths.
DAYS_PER_YEAR = 365.25


def cagr(begin_value: Number, end_value: Number, years: float) -> float:
    """Compound annual growth rate as a percentage (12.5 means 12.5%)."""
    begin = float(to_decimal(begin_value))
    end = float(to_decimal(end_value))
    if begin <= 0 or years <= 0 or end < 0:
        return 0.0
    try:
        result = ((end / begin) ** (1.0 / years) - 1.0) * 100.0
    except OverflowError:
        return 0.0
    return result if math.isfinite(result) else 0.0


def absolute_return(invested: Number, current_value: Number) -> Decimal:
    invested = to_decimal(invested)
    if invested <= 0:
        return Decimal(0)
    return percent_of(to_decimal(current_value) - invested, invested)


def years_between(start: dt.date, end: Optional[dt.date] = None) -> float:
    end = end or dt.date.today()
    return (end - start).days / DAYS_PER_YEAR
