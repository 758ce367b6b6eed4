from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Union

Amount = Union[int, float]

NUMBER_BUCKETS = tuple(str(i) for i in range(10))
SIZE_CLASSES = ("big", "small")
COLORS = ("red", "green", "violet")


class BetType(str, Enum):
    BIG_SMALL = "big_small"
    COLOR = "color"
    NUMBER = "number"


@dataclass(frozen=True)
class WagerRecord:
    period_id: str
    bet_type: BetType
    selection: str
    amount: int

    def __post_init__(self) -> None:
        if not self.period_id:
            raise ValueError("wager requires a period id")
        if isinstance(self.amount, bool) or not isinstance(self.amount, int) or self.amount <= 0:
            raise ValueError(f"wager amount must be a positive integer, got {self.amount!r}")

    def to_payload(self) -> dict:
        return {
            "period_id": self.period_id,
            "bet_type": self.bet_type.value,
            "selection": self.selection,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class SizeTotals:
    big: Amount = 0
    small: Amount = 0
    total: Amount = 0


@dataclass(frozen=True)
class ColorTotals:
    red: Amount = 0
    green: Amount = 0
    violet: Amount = 0


def _zero_buckets() -> Dict[str, Amount]:
    return {key: 0 for key in NUMBER_BUCKETS}


@dataclass(frozen=True)
class TotalsSnapshot:
    """Aggregated wager totals for exactly one period."""

    period_id: str
    big_small: SizeTotals = SizeTotals()
    color: ColorTotals = ColorTotals()
    number: Mapping[str, Amount] = field(default_factory=_zero_buckets)

    def number_amount(self, bucket: str) -> Amount:
        return self.number.get(bucket, 0)
