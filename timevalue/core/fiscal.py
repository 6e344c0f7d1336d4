"""Financial year (April to March) arithmetic."""

from __future__ import annotations

import datetime as dt
from typing import Iterator, Tuple

from timevalue.schemas.recurring import FinancialYear

FY_START_MONTH = 4


def financial_year_for(day: dt.date) -> FinancialYear:
    """Financial year containing ``day``; January to March belong to the previous start year."""
    start_year = day.year if day.month >= FY_START_MONTH else day.year - 1
    return financial_year_starting(start_year)


def financial_year_starting(start_year: int) -> FinancialYear:
    end_year = start_year + 1
    return FinancialYear(
        label=f"{start_year}-{str(end_year)[-2:]}",
        start_year=start_year,
        end_year=end_year,
        start=dt.date(start_year, FY_START_MONTH, 1),
        end=dt.date(end_year, FY_START_MONTH - 1, 31),
    )


def fy_months(fy: FinancialYear) -> Iterator[Tuple[int, int]]:
    """(year, month) pairs from April through March."""
    for offset in range(12):
        month = (FY_START_MONTH - 1 + offset) % 12 + 1
        year = fy.start_year if month >= FY_START_MONTH else fy.end_year
        yield year, month
