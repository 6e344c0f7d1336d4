"""Compound interest accrual for lump-sum and multi-deposit fixed-income holdings."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Iterable, Optional

from timevalue.config import EngineSettings, load_settings
from timevalue.core.frequency import CompoundingFrequency
from timevalue.core.money import HUNDRED, Number, percent_of, to_decimal
from timevalue.schemas.interest import InterestAccrualResult
from timevalue.schemas.transactions import (
    TransactionKind,
    TransactionLike,
    parse_transactions,
    sort_by_date,
)


def elapsed_years(start: dt.date, end: dt.date, day_count_basis: int = 365) -> Decimal:
    """Actual days between the dates over the basis; never negative."""
    days = (end - start).days
    if days <= 0:
        return Decimal(0)
    return Decimal(days) / Decimal(day_count_basis)


def compound_value(
    principal: Number,
    annual_rate_percent: Number,
    start: dt.date,
    as_of: dt.date,
    frequency: int = CompoundingFrequency.ANNUAL,
    settings: Optional[EngineSettings] = None,
) -> Decimal:
    """A = P * (1 + r/n)^(n*t) for a single deposit made on ``start``."""
    settings = settings or load_settings()
    principal = to_decimal(principal)
    rate = to_decimal(annual_rate_percent) / HUNDRED

    years = elapsed_years(start, as_of, settings.day_count_basis)
    if years == 0 or rate <= 0:
        return principal

    periods = Decimal(int(frequency))
    return principal * (1 + rate / periods) ** (periods * years)


def calculate_fixed_income_value(
    transactions: Iterable[TransactionLike],
    annual_rate_percent: Number,
    as_of: Optional[dt.date] = None,
    frequency: int = CompoundingFrequency.ANNUAL,
    settings: Optional[EngineSettings] = None,
) -> InterestAccrualResult:
    """
    Accrued value of a transaction history at ``as_of`` (default: today).

    Each BUY compounds from its own date. A SELL is grown the same way and
    subtracted, i.e. it removes principal that would otherwise have kept
    compounding. Transactions after ``as_of`` count at face value.
    """
    settings = settings or load_settings()
    as_of = as_of or dt.date.today()
    history = sort_by_date(parse_transactions(transactions))
    if not history:
        return InterestAccrualResult.zero()

    principal = Decimal(0)
    current_value = Decimal(0)
    for txn in history:
        grown = compound_value(
            txn.amount, annual_rate_percent, txn.date, as_of, frequency, settings
        )
        if txn.kind is TransactionKind.BUY:
            principal += txn.amount
            current_value += grown
        else:
            principal -= txn.amount
            current_value -= grown

    interest = current_value - principal
    return InterestAccrualResult(
        principal=principal,
        current_value=current_value,
        interest=interest,
        interest_percent=percent_of(interest, principal),
    )
