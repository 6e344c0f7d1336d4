from __future__ import annotations

from datetime import date
from decimal import Decimal
from math import isclose

from timevalue.domain.valuation import (
    FixedIncomeAsset,
    Holding,
    ValuationMethod,
    display_xirr,
    summarize_assets,
    value_fixed_income,
)

AS_OF = date(2023, 5, 10)


def deposit(day: date, amount) -> dict:
    return {"transaction_date": day, "type": "BUY", "total_amount": amount}


def test_ppf_with_history_uses_the_fy_schedule():
    asset = FixedIncomeAsset(asset_type="PPF", interest_rate=12, start_date=date(2022, 4, 1))
    valuation = value_fixed_income(asset, [deposit(date(2022, 4, 1), 12000)], AS_OF)

    assert valuation.method is ValuationMethod.RECURRING
    assert valuation.deposited == Decimal("12000")
    assert valuation.current_value == Decimal("13440")
    assert valuation.interest == Decimal("1440")
    assert not valuation.needs_transactions


def test_fd_with_history_compounds_quarterly():
    asset = FixedIncomeAsset(asset_type="FD", interest_rate=8)
    valuation = value_fixed_income(asset, [deposit(date(2022, 1, 1), 10000)], date(2023, 1, 1))

    assert valuation.method is ValuationMethod.COMPOUND
    assert isclose(float(valuation.current_value), 10000 * 1.02 ** 4, rel_tol=1e-12)


def test_principal_only_fd_is_treated_as_one_deposit():
    asset = FixedIncomeAsset(
        asset_type="NSC", interest_rate=7.1, principal=100000, start_date=date(2022, 1, 1)
    )
    valuation = value_fixed_income(asset, [], date(2023, 1, 1))

    assert valuation.method is ValuationMethod.COMPOUND
    assert isclose(float(valuation.current_value), 107100.0, abs_tol=1e-6)


def test_principal_only_ppf_asks_for_transactions():
    asset = FixedIncomeAsset(asset_type="PPF", interest_rate=7.1, principal=50000)
    valuation = value_fixed_income(asset, [], AS_OF)

    assert valuation.needs_transactions
    assert valuation.current_value == valuation.deposited == Decimal(50000)
    assert valuation.interest == 0


def test_missing_rate_falls_back_to_default(settings):
    asset = FixedIncomeAsset(asset_type="KVP")
    valuation = value_fixed_income(
        asset, [deposit(date(2022, 1, 1), 100000)], date(2023, 1, 1), settings
    )
    assert isclose(float(valuation.current_value), 107100.0, abs_tol=1e-6)


def test_nothing_to_value():
    valuation = value_fixed_income(FixedIncomeAsset(asset_type="FD"), [], AS_OF)
    assert valuation.method is ValuationMethod.NONE
    assert valuation.current_value == 0


def test_xirr_hidden_for_short_holdings():
    shown = display_xirr([deposit(date(2023, 4, 1), 1000)], 1010, as_of=date(2023, 4, 20))

    assert not shown.valid
    assert shown.rate_percent is None
    assert shown.holding_days == 19


def test_xirr_displayed_as_percentage():
    shown = display_xirr([deposit(date(2023, 1, 1), 1000)], 1100, as_of=date(2024, 1, 1))

    assert shown.valid and not shown.capped
    assert isclose(shown.rate_percent, 10.0, abs_tol=1e-4)


def test_extreme_xirr_is_capped_for_display():
    shown = display_xirr([deposit(date(2023, 1, 1), 1)], 1000, as_of=date(2024, 1, 1))

    assert shown.valid and shown.capped
    assert shown.rate_percent == 999.99


def test_one_bad_asset_does_not_stop_the_others():
    holdings = [
        Holding(
            asset_id="ppf-1",
            asset=FixedIncomeAsset(asset_type="PPF", interest_rate=12),
            transactions=[deposit(date(2022, 4, 1), 12000)],
        ),
        Holding(
            asset_id="fd-broken",
            asset=FixedIncomeAsset(asset_type="FD", interest_rate=7),
            transactions=[{"transaction_date": "2023-02-30", "type": "BUY", "total_amount": 10}],
        ),
        Holding(
            asset_id="fd-2",
            asset=FixedIncomeAsset(asset_type="FD", interest_rate=8),
            transactions=[deposit(date(2022, 1, 1), 10000)],
            current_value=Decimal("10900"),
        ),
    ]

    summaries = summarize_assets(holdings, as_of=AS_OF)

    assert [s.asset_id for s in summaries] == ["ppf-1", "fd-broken", "fd-2"]
    assert summaries[0].error is None
    assert summaries[0].valuation.current_value == Decimal("13440")
    assert summaries[0].xirr.valid

    assert summaries[1].valuation is None
    assert "transaction_date" in summaries[1].error

    assert summaries[2].error is None
    assert summaries[2].xirr.valid
