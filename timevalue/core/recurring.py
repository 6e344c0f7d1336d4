"""
Financial-year schedule for PPF-style recurring deposit accounts.

Interest is computed monthly on the lowest balance held between the cutoff
day (the 5th by default) and month end, accumulated over the financial year
and credited to the balance only when the year closes on March 31.
"""

from __future__ import annotations

import datetime as dt
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from timevalue.config import EngineSettings, load_settings
from timevalue.core.fiscal import financial_year_for, financial_year_starting, fy_months
from timevalue.core.money import HUNDRED, Number, percent_of, to_decimal
from timevalue.logging_setup import get_logger
from timevalue.schemas.recurring import (
    FinancialYearEntry,
    FinancialYearStatus,
    RecurringDepositSummary,
)
from timevalue.schemas.transactions import (
    Transaction,
    TransactionKind,
    TransactionLike,
    parse_transactions,
    sort_by_date,
)

logger = get_logger(__name__)

MONTHS_PER_YEAR = Decimal(12)


def _balance_delta(txn: Transaction) -> Decimal:
    return txn.amount if txn.kind is TransactionKind.BUY else -txn.amount


def _walk_month(
    balance: Decimal, month_txns: Sequence[Transaction], cutoff_day: int
) -> Tuple[Decimal, Decimal]:
    """Apply one month of transactions.

    Returns the closing balance and the interest-bearing minimum balance.
    Deposits after the cutoff day cannot raise the minimum; withdrawals on
    any day can lower it.
    """
    for txn in month_txns:
        if txn.date.day <= cutoff_day:
            balance += _balance_delta(txn)

    minimum = balance
    for txn in month_txns:
        if txn.date.day > cutoff_day:
            balance += _balance_delta(txn)
            minimum = min(minimum, balance)

    return balance, max(minimum, Decimal(0))


def _empty_summary() -> RecurringDepositSummary:
    zero = Decimal(0)
    return RecurringDepositSummary(
        total_deposited=zero,
        total_withdrawn=zero,
        current_value=zero,
        estimated_value=zero,
        total_interest=zero,
        interest_percent=zero,
        current_fy_accrued_interest=zero,
        schedule=[],
    )


def generate_recurring_deposit_schedule(
    transactions: Iterable[TransactionLike],
    annual_rate_percent: Number,
    account_start_date: Optional[dt.date] = None,
    as_of: Optional[dt.date] = None,
    include_accrued: bool = False,
    settings: Optional[EngineSettings] = None,
) -> RecurringDepositSummary:
    """
    Build the FY ledger from the account start through the FY containing ``as_of``.

    ``current_value`` only carries interest credited at closed financial
    years; the open year's accrual is reported separately and added into
    ``estimated_value``. ``total_interest`` uses the credited figure unless
    ``include_accrued`` is set.

    Transactions dated after ``as_of`` are added to the balance but earn
    nothing and do not appear in the schedule.
    """
    settings = settings or load_settings()
    as_of = as_of or dt.date.today()
    history = sort_by_date(parse_transactions(transactions))
    if not history:
        return _empty_summary()

    rate = to_decimal(annual_rate_percent) / HUNDRED
    monthly_rate = rate / MONTHS_PER_YEAR if rate > 0 else Decimal(0)
    cutoff_day = settings.ppf_deposit_cutoff_day

    total_deposited = sum(
        (txn.amount for txn in history if txn.kind is TransactionKind.BUY), Decimal(0)
    )
    total_withdrawn = sum(
        (txn.amount for txn in history if txn.kind is TransactionKind.SELL), Decimal(0)
    )

    by_month: Dict[Tuple[int, int], List[Transaction]] = defaultdict(list)
    pending: List[Transaction] = []
    for txn in history:
        if txn.date <= as_of:
            by_month[(txn.date.year, txn.date.month)].append(txn)
        else:
            pending.append(txn)

    first_day = history[0].date
    if account_start_date is not None and account_start_date < first_day:
        first_day = account_start_date
    first_fy = financial_year_for(first_day)
    current_fy = financial_year_for(as_of)
    as_of_month = (as_of.year, as_of.month)

    balance = Decimal(0)
    open_fy_interest = Decimal(0)
    schedule: List[FinancialYearEntry] = []

    for start_year in range(first_fy.start_year, current_fy.start_year + 1):
        fy = financial_year_starting(start_year)
        is_current = start_year == current_fy.start_year

        opening = balance
        deposits = Decimal(0)
        withdrawals = Decimal(0)
        interest = Decimal(0)

        for year, month in fy_months(fy):
            if is_current and (year, month) > as_of_month:
                break
            month_txns = by_month.get((year, month), [])
            balance, minimum = _walk_month(balance, month_txns, cutoff_day)
            for txn in month_txns:
                if txn.kind is TransactionKind.BUY:
                    deposits += txn.amount
                else:
                    withdrawals += txn.amount
            interest += minimum * monthly_rate

        if is_current:
            open_fy_interest = interest
            closing = balance + interest
        else:
            balance += interest
            closing = balance

        schedule.append(
            FinancialYearEntry(
                label=fy.label,
                start=fy.start,
                end=fy.end,
                status=FinancialYearStatus.CURRENT if is_current else FinancialYearStatus.COMPLETED,
                opening_balance=opening,
                deposits=deposits,
                withdrawals=withdrawals,
                interest_earned=interest,
                interest_credited=not is_current,
                closing_balance=closing,
            )
        )

    for txn in pending:
        balance += _balance_delta(txn)

    current_value = balance
    estimated_value = current_value + open_fy_interest
    net_principal = total_deposited - total_withdrawn
    total_interest = (estimated_value if include_accrued else current_value) - net_principal

    logger.debug(
        "recurring_schedule.generated",
        financial_years=len(schedule),
        pending_transactions=len(pending),
        as_of=as_of.isoformat(),
    )

    return RecurringDepositSummary(
        total_deposited=total_deposited,
        total_withdrawn=total_withdrawn,
        current_value=current_value,
        estimated_value=estimated_value,
        total_interest=total_interest,
        interest_percent=percent_of(total_interest, net_principal),
        current_fy_accrued_interest=open_fy_interest,
        schedule=schedule,
    )
