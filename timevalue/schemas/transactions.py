"""Data contracts for the transaction history fed into the engine."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Mapping, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from timevalue.errors import InvalidInputError


class TransactionKind(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class Transaction(BaseModel):
    """A dated BUY or SELL of a non-negative amount.

    Aliases accept the valuation layer's record shape
    (``transaction_date`` / ``type`` / ``total_amount``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    date: dt.date = Field(alias="transaction_date")
    kind: TransactionKind = Field(default=TransactionKind.BUY, alias="type")
    amount: Decimal = Field(ge=0, alias="total_amount")

    @field_validator("date", mode="before")
    @classmethod
    def _strip_time(cls, value: Any) -> Any:
        if isinstance(value, dt.datetime):
            return value.date()
        return value

    @field_validator("kind", mode="before")
    @classmethod
    def _default_kind(cls, value: Any) -> Any:
        # Records without a type are deposits.
        if value is None or value == "":
            return TransactionKind.BUY
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def signed_amount(self) -> Decimal:
        return -self.amount if self.kind is TransactionKind.BUY else self.amount


class CashFlow(BaseModel):
    """Signed dated amount: negative is money paid in, positive is money returned."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    amount: Decimal


TransactionLike = Union[Transaction, Mapping[str, Any]]


def parse_transactions(records: Iterable[TransactionLike]) -> List[Transaction]:
    """Validate raw records into ``Transaction`` objects.

    Every malformed record is reported, not only the first one.
    """
    parsed: List[Transaction] = []
    errors: List[str] = []

    for index, record in enumerate(records):
        if isinstance(record, Transaction):
            parsed.append(record)
            continue
        try:
            parsed.append(Transaction.model_validate(record))
        except ValidationError as exc:
            for err in exc.errors():
                location = ".".join(str(part) for part in err["loc"]) or "record"
                errors.append(f"transaction {index}: {location}: {err['msg']}")

    if errors:
        raise InvalidInputError(errors, context={"count": index + 1})
    return parsed


def sort_by_date(transactions: Sequence[Transaction]) -> List[Transaction]:
    """Stable ascending sort; same-day records keep their input order."""
    return sorted(transactions, key=lambda txn: txn.date)


def parse_cash_flows(records: Iterable[Union[CashFlow, Mapping[str, Any]]]) -> List[CashFlow]:
    parsed: List[CashFlow] = []
    errors: List[str] = []

    for index, record in enumerate(records):
        if isinstance(record, CashFlow):
            parsed.append(record)
            continue
        try:
            parsed.append(CashFlow.model_validate(record))
        except ValidationError as exc:
            for err in exc.errors():
                location = ".".join(str(part) for part in err["loc"]) or "record"
                errors.append(f"cash flow {index}: {location}: {err['msg']}")

    if errors:
        raise InvalidInputError(errors)
    return parsed
