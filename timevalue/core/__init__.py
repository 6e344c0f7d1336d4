"""Pure calculation functions: no I/O, no shared state."""

from timevalue.core.compound import calculate_fixed_income_value, compound_value, elapsed_years
from timevalue.core.fiscal import financial_year_for, financial_year_starting
from timevalue.core.frequency import (
    COMPOUNDING_BY_ASSET_TYPE,
    AssetType,
    CompoundingFrequency,
    parse_asset_type,
    resolve_compounding_frequency,
)
from timevalue.core.recurring import generate_recurring_deposit_schedule
from timevalue.core.returns import absolute_return, cagr, years_between
from timevalue.core.xirr import (
    build_cash_flows,
    explain_xirr,
    find_rate,
    xirr,
    xirr_from_transactions,
)

__all__ = [
    "COMPOUNDING_BY_ASSET_TYPE",
    "AssetType",
    "CompoundingFrequency",
    "absolute_return",
    "build_cash_flows",
    "cagr",
    "calculate_fixed_income_value",
    "compound_value",
    "elapsed_years",
    "explain_xirr",
    "financial_year_for",
    "financial_year_starting",
    "find_rate",
    "generate_recurring_deposit_schedule",
    "parse_asset_type",
    "resolve_compounding_frequency",
    "xirr",
    "xirr_from_transactions",
    "years_between",
]
