from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .types import (
    NUMBER_BUCKETS,
    Amount,
    BetType,
    ColorTotals,
    SizeTotals,
    TotalsSnapshot,
)


def _zero_if_missing(value: Any) -> Any:
    return 0 if value is None else value


class PeriodsResponse(BaseModel):
    periods: List[str] = Field(default_factory=list)

    @field_validator("periods", mode="before")
    @classmethod
    def validate_periods(cls, value: Any) -> Any:
        if value is None:
            return []
        return [str(item) for item in value] if isinstance(value, list) else value


class BigSmallTotals(BaseModel):
    big: Amount = 0
    small: Amount = 0
    total: Amount = 0

    @field_validator("big", "small", "total", mode="before")
    @classmethod
    def validate_amount(cls, value: Any) -> Any:
        return _zero_if_missing(value)


class ColorTotalsPayload(BaseModel):
    red: Amount = 0
    green: Amount = 0
    violet: Amount = 0

    @field_validator("red", "green", "violet", mode="before")
    @classmethod
    def validate_amount(cls, value: Any) -> Any:
        return _zero_if_missing(value)


class TotalsPayload(BaseModel):
    big_small: BigSmallTotals = Field(default_factory=BigSmallTotals)
    color: ColorTotalsPayload = Field(default_factory=ColorTotalsPayload)
    number: Dict[str, Optional[Amount]] = Field(default_factory=dict)

    @field_validator("big_small", "color", "number", mode="before")
    @classmethod
    def validate_category(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_snapshot(self, period_id: str) -> TotalsSnapshot:
        numbers = {key: _zero_if_missing(self.number.get(key)) for key in NUMBER_BUCKETS}
        return TotalsSnapshot(
            period_id=period_id,
            big_small=SizeTotals(
                big=self.big_small.big,
                small=self.big_small.small,
                total=self.big_small.total,
            ),
            color=ColorTotals(
                red=self.color.red,
                green=self.color.green,
                violet=self.color.violet,
            ),
            number=numbers,
        )


class TotalsResponse(BaseModel):
    totals: TotalsPayload = Field(default_factory=TotalsPayload)

    @field_validator("totals", mode="before")
    @classmethod
    def validate_totals(cls, value: Any) -> Any:
        return {} if value is None else value


class BetRequest(BaseModel):
    period_id: str = Field(..., min_length=1)
    bet_type: BetType
    selection: str
    amount: int = Field(..., gt=0)
