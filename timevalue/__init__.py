"""Compound interest, PPF-style recurring deposit schedules and XIRR."""

from timevalue.config import EngineSettings, load_settings
from timevalue.core import (
    AssetType,
    CompoundingFrequency,
    calculate_fixed_income_value,
    explain_xirr,
    financial_year_for,
    find_rate,
    generate_recurring_deposit_schedule,
    resolve_compounding_frequency,
    xirr,
    xirr_from_transactions,
)
from timevalue.errors import ConvergenceError, EngineError, InvalidInputError, NoSignChangeError
from timevalue.schemas import (
    CashFlow,
    InterestAccrualResult,
    RecurringDepositSummary,
    Transaction,
    TransactionKind,
)

__all__ = [
    "AssetType",
    "CashFlow",
    "CompoundingFrequency",
    "ConvergenceError",
    "EngineError",
    "EngineSettings",
    "InterestAccrualResult",
    "InvalidInputError",
    "NoSignChangeError",
    "RecurringDepositSummary",
    "Transaction",
    "TransactionKind",
    "calculate_fixed_income_value",
    "explain_xirr",
    "financial_year_for",
    "find_rate",
    "generate_recurring_deposit_schedule",
    "load_settings",
    "resolve_compounding_frequency",
    "xirr",
    "xirr_from_transactions",
]
