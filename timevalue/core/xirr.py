"""
Money-weighted annualised return (XIRR) over irregularly dated cash flows.

Solves  f(r) = sum(CF_i / (1 + r) ** (days_i / basis)) = 0  for r with
Newton-Raphson, falling back to bisection on a configured bracket when
Newton diverges or its derivative flattens out. Rates are fractions
(0.1 is 10%) and are never clamped here.
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional, Union

from timevalue.config import EngineSettings, load_settings
from timevalue.core.money import Number, percent_of, to_decimal
from timevalue.errors import ConvergenceError, NoSignChangeError
from timevalue.logging_setup import get_logger
from timevalue.schemas.transactions import (
    CashFlow,
    TransactionKind,
    TransactionLike,
    parse_cash_flows,
    parse_transactions,
    sort_by_date,
)
from timevalue.schemas.xirr import XirrBreakdown

logger = get_logger(__name__)

CashFlowLike = Union[CashFlow, Mapping[str, Any]]


@dataclass(frozen=True)
class _Flow:
    years: float
    amount: float


def _prepare(cash_flows: List[CashFlow], day_count_basis: int) -> List[_Flow]:
    ordered = sorted(cash_flows, key=lambda cf: cf.date)
    origin = ordered[0].date
    return [
        _Flow(years=(cf.date - origin).days / day_count_basis, amount=float(cf.amount))
        for cf in ordered
    ]


def _discount(amount: float, rate: float, exponent: float) -> float:
    try:
        return amount / (1.0 + rate) ** exponent
    except OverflowError:
        # discount factor too large to represent; the term vanishes
        return 0.0
    except ZeroDivisionError:
        return math.copysign(math.inf, amount) if amount else 0.0


def _npv(rate: float, flows: List[_Flow]) -> float:
    return sum(_discount(flow.amount, rate, flow.years) for flow in flows)


def _npv_derivative(rate: float, flows: List[_Flow]) -> float:
    return sum(-flow.years * _discount(flow.amount, rate, flow.years + 1.0) for flow in flows)


def _newton(flows: List[_Flow], settings: EngineSettings) -> Optional[float]:
    """Newton-Raphson from the configured guess; None when it cannot be trusted."""
    tolerance = settings.xirr_tolerance
    rate = settings.xirr_initial_guess

    for iteration in range(settings.xirr_max_iterations):
        value = _npv(rate, flows)
        if abs(value) < tolerance:
            return rate

        slope = _npv_derivative(rate, flows)
        if not math.isfinite(slope) or abs(slope) < settings.xirr_derivative_floor:
            logger.debug("xirr.newton_flat_derivative", iteration=iteration, rate=rate)
            return None

        candidate = rate - value / slope
        if not math.isfinite(candidate) or candidate <= -1.0:
            logger.debug("xirr.newton_out_of_domain", iteration=iteration, rate=rate)
            return None
        if abs(candidate - rate) < tolerance:
            return candidate
        rate = candidate

    logger.debug("xirr.newton_exhausted", iterations=settings.xirr_max_iterations, rate=rate)
    return None


def _bisect(flows: List[_Flow], settings: EngineSettings) -> float:
    tolerance = settings.xirr_tolerance
    low, high = settings.xirr_bracket_low, settings.xirr_bracket_high
    f_low, f_high = _npv(low, flows), _npv(high, flows)

    if f_low == 0:
        return low
    if f_high == 0:
        return high
    if (f_low > 0) == (f_high > 0):
        raise NoSignChangeError(
            f"no root of the NPV function between {low} and {high}",
            context={"npv_low": f_low, "npv_high": f_high},
        )

    mid = low
    for _ in range(settings.xirr_bisection_max_iterations):
        mid = (low + high) / 2.0
        f_mid = _npv(mid, flows)
        if abs(f_mid) < tolerance or (high - low) / 2.0 < tolerance:
            return mid
        if (f_mid > 0) == (f_low > 0):
            low, f_low = mid, f_mid
        else:
            high = mid

    raise ConvergenceError(
        "bisection did not converge",
        iterations=settings.xirr_bisection_max_iterations,
        last_rate=mid,
    )


def find_rate(
    cash_flows: Iterable[CashFlowLike],
    settings: Optional[EngineSettings] = None,
) -> float:
    """Strict solver: raises ``NoSignChangeError`` or ``ConvergenceError``."""
    settings = settings or load_settings()
    flows = parse_cash_flows(cash_flows)

    has_outflow = any(cf.amount < 0 for cf in flows)
    has_inflow = any(cf.amount > 0 for cf in flows)
    if not (has_outflow and has_inflow):
        raise NoSignChangeError(
            "cash flows need at least one outflow and one inflow",
            context={"count": len(flows)},
        )

    prepared = _prepare(flows, settings.day_count_basis)
    if all(flow.years == 0 for flow in prepared):
        raise NoSignChangeError(
            "all cash flows fall on one date; no rate can be determined",
            context={"count": len(prepared)},
        )
    rate = _newton(prepared, settings)
    if rate is None:
        logger.info("xirr.bisection_fallback", flows=len(prepared))
        rate = _bisect(prepared, settings)
    return rate


def xirr(
    cash_flows: Iterable[CashFlowLike],
    settings: Optional[EngineSettings] = None,
) -> Optional[float]:
    """Fractional XIRR, or None when the flows have no determinable rate."""
    try:
        return find_rate(cash_flows, settings)
    except (NoSignChangeError, ConvergenceError) as exc:
        logger.info("xirr.indeterminate", reason=str(exc), error=type(exc).__name__)
        return None


def build_cash_flows(
    transactions: Iterable[TransactionLike],
    current_value: Number,
    as_of: dt.date,
) -> List[CashFlow]:
    """BUYs become outflows and SELLs inflows; a positive ``current_value`` is the terminal inflow."""
    flows = [
        CashFlow(date=txn.date, amount=txn.signed_amount)
        for txn in sort_by_date(parse_transactions(transactions))
        if txn.amount > 0
    ]
    terminal = to_decimal(current_value)
    if terminal > 0:
        flows.append(CashFlow(date=as_of, amount=terminal))
    return flows


def xirr_from_transactions(
    transactions: Iterable[TransactionLike],
    current_value: Number,
    as_of: Optional[dt.date] = None,
    settings: Optional[EngineSettings] = None,
) -> Optional[float]:
    as_of = as_of or dt.date.today()
    return xirr(build_cash_flows(transactions, current_value, as_of), settings)


def explain_xirr(
    transactions: Iterable[TransactionLike],
    current_value: Number,
    as_of: Optional[dt.date] = None,
    settings: Optional[EngineSettings] = None,
) -> XirrBreakdown:
    """Cash flows and totals behind an XIRR figure, for inspecting odd results."""
    as_of = as_of or dt.date.today()
    history = sort_by_date(parse_transactions(transactions))
    terminal = to_decimal(current_value)

    total_invested = sum(
        (txn.amount for txn in history if txn.kind is TransactionKind.BUY), Decimal(0)
    )
    total_sold = sum(
        (txn.amount for txn in history if txn.kind is TransactionKind.SELL), Decimal(0)
    )
    total_returns = terminal + total_sold - total_invested

    flows = sorted(build_cash_flows(history, terminal, as_of), key=lambda cf: cf.date)
    return XirrBreakdown(
        cash_flows=flows,
        total_invested=total_invested,
        total_sold=total_sold,
        current_value=terminal,
        net_invested=total_invested - total_sold,
        total_returns=total_returns,
        absolute_return=percent_of(total_returns, total_invested),
        rate=xirr(flows, settings),
        first_date=flows[0].date if flows else None,
        last_date=flows[-1].date if flows else None,
        transaction_count=len(history),
    )
