from __future__ import annotations

from datetime import date
from decimal import Decimal
from math import isclose

from timevalue.core.compound import (
    calculate_fixed_income_value,
    compound_value,
    elapsed_years,
)
from timevalue.core.frequency import CompoundingFrequency


def buy(day: date, amount) -> dict:
    return {"transaction_date": day, "type": "BUY", "total_amount": amount}


def sell(day: date, amount) -> dict:
    return {"transaction_date": day, "type": "SELL", "total_amount": amount}


def test_lump_sum_one_year_annual():
    """100,000 at 7.1% compounded annually for exactly 365 days."""
    result = calculate_fixed_income_value(
        [buy(date(2022, 1, 1), 100000)], 7.1, as_of=date(2023, 1, 1)
    )

    assert result.principal == Decimal(100000)
    assert isclose(float(result.current_value), 107100.0, abs_tol=1e-6)
    assert isclose(float(result.interest), 7100.0, abs_tol=1e-6)
    assert isclose(float(result.interest_percent), 7.1, abs_tol=1e-9)


def test_quarterly_compounding_beats_annual():
    start, end = date(2022, 1, 1), date(2023, 1, 1)
    annual = compound_value(10000, 8, start, end, CompoundingFrequency.ANNUAL)
    quarterly = compound_value(10000, 8, start, end, CompoundingFrequency.QUARTERLY)

    assert isclose(float(quarterly), 10000 * (1 + 0.08 / 4) ** 4, rel_tol=1e-12)
    assert quarterly > annual


def test_zero_elapsed_time_keeps_principal():
    for rate in (0, 3.5, 7.1, 25):
        result = calculate_fixed_income_value(
            [buy(date(2024, 6, 1), 5000)], rate, as_of=date(2024, 6, 1)
        )
        assert result.current_value == result.principal == Decimal(5000)
        assert result.interest == 0


def test_future_dated_deposit_does_not_grow():
    result = calculate_fixed_income_value(
        [buy(date(2025, 1, 1), 1000)], 7.1, as_of=date(2024, 1, 1)
    )
    assert result.current_value == Decimal(1000)
    assert elapsed_years(date(2025, 1, 1), date(2024, 1, 1)) == 0


def test_empty_history_is_all_zero():
    result = calculate_fixed_income_value([], 7.1, as_of=date(2024, 1, 1))

    assert result.principal == result.current_value == result.interest == 0
    assert result.interest_percent == 0


def test_zero_principal_reports_zero_percent():
    result = calculate_fixed_income_value(
        [buy(date(2020, 1, 1), 0)], 7.1, as_of=date(2024, 1, 1)
    )
    assert result.principal == 0
    assert result.interest_percent == 0


def test_non_positive_rate_means_no_growth():
    history = [buy(date(2020, 1, 1), 2500)]
    for rate in (0, -2):
        result = calculate_fixed_income_value(history, rate, as_of=date(2024, 1, 1))
        assert result.current_value == Decimal(2500)
        assert result.interest == 0


def test_value_strictly_increases_with_rate():
    history = [buy(date(2021, 3, 15), 10000), buy(date(2022, 7, 1), 4000)]
    values = [
        calculate_fixed_income_value(history, rate, as_of=date(2024, 3, 15)).current_value
        for rate in (1, 4, 7.1, 9, 12)
    ]
    assert all(lower < higher for lower, higher in zip(values, values[1:]))


def test_sell_removes_grown_principal():
    """A sale on the deposit date cancels that deposit entirely."""
    history = [
        buy(date(2022, 1, 1), 1000),
        buy(date(2022, 1, 1), 1000),
        sell(date(2022, 1, 1), 1000),
    ]
    result = calculate_fixed_income_value(history, 10, as_of=date(2023, 1, 1))

    assert result.principal == Decimal(1000)
    assert isclose(float(result.current_value), 1100.0, abs_tol=1e-9)


def test_partial_sale_grows_from_its_own_date():
    history = [buy(date(2022, 1, 1), 1000), sell(date(2023, 1, 1), 500)]
    result = calculate_fixed_income_value(history, 10, as_of=date(2024, 1, 1))

    expected = 1000 * 1.1 ** (730 / 365) - 500 * 1.1 ** (365 / 365)
    assert result.principal == Decimal(500)
    assert isclose(float(result.current_value), expected, rel_tol=1e-12)


def test_input_order_does_not_matter_and_repeats_are_identical():
    history = [
        buy(date(2023, 2, 1), 700),
        buy(date(2021, 5, 9), 300),
        sell(date(2022, 8, 30), 100),
    ]
    first = calculate_fixed_income_value(history, 6.5, as_of=date(2024, 1, 1))
    second = calculate_fixed_income_value(list(reversed(history)), 6.5, as_of=date(2024, 1, 1))
    third = calculate_fixed_income_value(history, 6.5, as_of=date(2024, 1, 1))

    assert first == second == third
