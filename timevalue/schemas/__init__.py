"""Pydantic data contracts shared by the engine and the valuation layer."""

from timevalue.schemas.interest import InterestAccrualResult
from timevalue.schemas.recurring import (
    FinancialYear,
    FinancialYearEntry,
    FinancialYearStatus,
    RecurringDepositSummary,
)
from timevalue.schemas.transactions import (
    CashFlow,
    Transaction,
    TransactionKind,
    parse_cash_flows,
    parse_transactions,
    sort_by_date,
)
from timevalue.schemas.xirr import XirrBreakdown

__all__ = [
    "CashFlow",
    "FinancialYear",
    "FinancialYearEntry",
    "FinancialYearStatus",
    "InterestAccrualResult",
    "RecurringDepositSummary",
    "Transaction",
    "TransactionKind",
    "XirrBreakdown",
    "parse_cash_flows",
    "parse_transactions",
    "sort_by_date",
]
