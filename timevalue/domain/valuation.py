"""
Valuation-layer composition over the engine.

Chooses the recurring-deposit scheduler or the compound calculator per
asset type, synthesizes a lump-sum deposit for assets that only record a
principal, and applies the display policy for XIRR (minimum holding
period, clamping). Failures are contained per asset.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from timevalue.config import EngineSettings, load_settings
from timevalue.core.compound import calculate_fixed_income_value
from timevalue.core.frequency import AssetType, parse_asset_type, resolve_compounding_frequency
from timevalue.core.money import Number, to_decimal
from timevalue.core.recurring import generate_recurring_deposit_schedule
from timevalue.core.xirr import xirr_from_transactions
from timevalue.errors import EngineError
from timevalue.logging_setup import get_logger
from timevalue.schemas.transactions import (
    Transaction,
    TransactionKind,
    TransactionLike,
    parse_transactions,
    sort_by_date,
)

logger = get_logger(__name__)

RECURRING_DEPOSIT_TYPES: FrozenSet[AssetType] = frozenset(
    {AssetType.PPF, AssetType.RD, AssetType.EPF, AssetType.VPF, AssetType.SSY}
)


class FixedIncomeAsset(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    asset_type: str
    interest_rate: Optional[Decimal] = None
    principal: Optional[Decimal] = Field(default=None, ge=0)
    start_date: Optional[dt.date] = None


class ValuationMethod(str, Enum):
    RECURRING = "recurring"
    COMPOUND = "compound"
    NONE = "none"


class FixedIncomeValuation(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: ValuationMethod
    deposited: Decimal
    current_value: Decimal
    interest: Decimal
    interest_percent: Decimal
    # recurring account known only by its principal; ask for the deposit history
    needs_transactions: bool = False


class XirrDisplay(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate_percent: Optional[float]
    valid: bool
    capped: bool
    holding_days: int


class Holding(BaseModel):
    """One asset as handed over by the valuation layer."""

    asset_id: str
    asset: FixedIncomeAsset
    transactions: List[Union[Transaction, Dict[str, Any]]] = []
    current_value: Optional[Decimal] = None


class AssetSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    asset_id: str
    valuation: Optional[FixedIncomeValuation] = None
    xirr: Optional[XirrDisplay] = None
    error: Optional[str] = None


def _unvalued(method: ValuationMethod, amount: Decimal, needs_transactions: bool) -> FixedIncomeValuation:
    return FixedIncomeValuation(
        method=method,
        deposited=amount,
        current_value=amount,
        interest=Decimal(0),
        interest_percent=Decimal(0),
        needs_transactions=needs_transactions,
    )


def value_fixed_income(
    asset: FixedIncomeAsset,
    transactions: Iterable[TransactionLike],
    as_of: Optional[dt.date] = None,
    settings: Optional[EngineSettings] = None,
) -> FixedIncomeValuation:
    settings = settings or load_settings()
    as_of = as_of or dt.date.today()
    history = parse_transactions(transactions)
    is_recurring = parse_asset_type(asset.asset_type) in RECURRING_DEPOSIT_TYPES

    if is_recurring and history and asset.interest_rate:
        summary = generate_recurring_deposit_schedule(
            history,
            asset.interest_rate,
            account_start_date=asset.start_date,
            as_of=as_of,
            settings=settings,
        )
        return FixedIncomeValuation(
            method=ValuationMethod.RECURRING,
            deposited=summary.total_deposited,
            current_value=summary.current_value,
            interest=summary.total_interest,
            interest_percent=summary.interest_percent,
        )

    rate = asset.interest_rate if asset.interest_rate is not None else to_decimal(settings.default_interest_rate)
    frequency = resolve_compounding_frequency(asset.asset_type)

    if not history and asset.principal:
        if is_recurring:
            return _unvalued(ValuationMethod.NONE, asset.principal, needs_transactions=True)
        history = [
            Transaction(
                date=asset.start_date or as_of,
                kind=TransactionKind.BUY,
                amount=asset.principal,
            )
        ]

    if not history:
        return _unvalued(ValuationMethod.NONE, Decimal(0), needs_transactions=False)

    result = calculate_fixed_income_value(history, rate, as_of, frequency, settings)
    return FixedIncomeValuation(
        method=ValuationMethod.COMPOUND,
        deposited=result.principal,
        current_value=result.current_value,
        interest=result.interest,
        interest_percent=result.interest_percent,
    )


def display_xirr(
    transactions: Iterable[TransactionLike],
    current_value: Number,
    as_of: Optional[dt.date] = None,
    settings: Optional[EngineSettings] = None,
) -> XirrDisplay:
    """XIRR as a clamped percentage, hidden for short or unsolvable histories."""
    settings = settings or load_settings()
    as_of = as_of or dt.date.today()
    history = sort_by_date(parse_transactions(transactions))
    holding_days = (as_of - history[0].date).days if history else 0

    hidden = XirrDisplay(rate_percent=None, valid=False, capped=False, holding_days=holding_days)
    if to_decimal(current_value) <= 0 or holding_days < settings.xirr_min_holding_days:
        return hidden

    rate = xirr_from_transactions(history, current_value, as_of, settings)
    if rate is None:
        return hidden

    cap = settings.xirr_display_cap
    percent = rate * 100.0
    return XirrDisplay(
        rate_percent=max(-cap, min(percent, cap)),
        valid=True,
        capped=abs(percent) > cap,
        holding_days=holding_days,
    )


def summarize_assets(
    holdings: Iterable[Holding],
    as_of: Optional[dt.date] = None,
    settings: Optional[EngineSettings] = None,
) -> List[AssetSummary]:
    """Value every holding; a bad one is reported on its own summary and skipped."""
    settings = settings or load_settings()
    as_of = as_of or dt.date.today()
    summaries: List[AssetSummary] = []

    for holding in holdings:
        try:
            valuation = value_fixed_income(holding.asset, holding.transactions, as_of, settings)
            market_value = (
                holding.current_value
                if holding.current_value is not None
                else valuation.current_value
            )
            performance = display_xirr(holding.transactions, market_value, as_of, settings)
        except EngineError as exc:
            logger.warning(
                "valuation.asset_failed",
                asset_id=holding.asset_id,
                error=type(exc).__name__,
                detail=str(exc),
            )
            summaries.append(AssetSummary(asset_id=holding.asset_id, error=str(exc)))
            continue

        summaries.append(
            AssetSummary(asset_id=holding.asset_id, valuation=valuation, xirr=performance)
        )

    return summaries
