"""Diagnostic breakdown of an XIRR computation."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from timevalue.schemas.transactions import CashFlow


class XirrBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    cash_flows: List[CashFlow]
    total_invested: Decimal
    total_sold: Decimal
    current_value: Decimal
    net_invested: Decimal
    total_returns: Decimal
    absolute_return: Decimal
    rate: Optional[float]
    first_date: Optional[dt.date]
    last_date: Optional[dt.date]
    transaction_count: int
