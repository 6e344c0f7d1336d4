"""Result contract for compound-interest accrual."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class InterestAccrualResult(BaseModel):
    """Principal and accrued value of a fixed-income holding."""

    model_config = ConfigDict(frozen=True)

    principal: Decimal
    current_value: Decimal
    interest: Decimal
    interest_percent: Decimal

    @classmethod
    def zero(cls) -> "InterestAccrualResult":
        return cls(
            principal=Decimal(0),
            current_value=Decimal(0),
            interest=Decimal(0),
            interest_percent=Decimal(0),
        )
