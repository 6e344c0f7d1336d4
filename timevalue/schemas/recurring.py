"""Data contracts for financial-year recurring deposit schedules."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict


class FinancialYear(BaseModel):
    """April 1 to March 31 accounting year, labelled like ``2023-24``."""

    model_config = ConfigDict(frozen=True)

    label: str
    start_year: int
    end_year: int
    start: dt.date
    end: dt.date


class FinancialYearStatus(str, Enum):
    COMPLETED = "completed"
    CURRENT = "current"


class FinancialYearEntry(BaseModel):
    """One row of the FY ledger.

    ``closing_balance`` always includes the year's interest; for the open
    year that interest has not been credited yet (``interest_credited`` is
    False) and the closing balance is a projection.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    start: dt.date
    end: dt.date
    status: FinancialYearStatus
    opening_balance: Decimal
    deposits: Decimal
    withdrawals: Decimal
    interest_earned: Decimal
    interest_credited: bool
    closing_balance: Decimal


class RecurringDepositSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_deposited: Decimal
    total_withdrawn: Decimal
    current_value: Decimal
    estimated_value: Decimal
    total_interest: Decimal
    interest_percent: Decimal
    current_fy_accrued_interest: Decimal
    schedule: List[FinancialYearEntry] = []
