from __future__ import annotations

from datetime import date
from decimal import Decimal
from math import isclose

from timevalue.core.returns import absolute_return, cagr, years_between


def test_cagr_doubling_over_two_years():
    assert isclose(cagr(1000, 2000, 2), (2 ** 0.5 - 1) * 100, rel_tol=1e-12)


def test_cagr_degenerate_inputs_are_zero():
    assert cagr(0, 2000, 2) == 0.0
    assert cagr(1000, 2000, 0) == 0.0
    assert cagr(-5, 2000, 1) == 0.0


def test_absolute_return():
    assert absolute_return(1000, 1250) == Decimal(25)
    assert absolute_return(0, 1250) == 0


def test_years_between_uses_calendar_average_year():
    assert isclose(years_between(date(2020, 1, 1), date(2024, 1, 1)), 1461 / 365.25)
