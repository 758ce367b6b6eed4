from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

RUPEE = "₹"


def _group_indian(digits: str) -> str:
    # Lakh/crore grouping: last three digits, then pairs.
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_inr(amount: Any) -> str:
    """Render `amount` as whole rupees, e.g. 150000 -> '₹1,50,000'.

    Never raises; anything that is not a finite number is shown as-is.
    """
    try:
        if isinstance(amount, bool):
            raise TypeError("bool is not an amount")
        value = Decimal(str(amount))
        if not value.is_finite():
            raise ValueError("amount is not finite")
        rounded = int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except (InvalidOperation, TypeError, ValueError):
        return f"{RUPEE}{amount}"
    sign = "-" if rounded < 0 else ""
    return f"{sign}{RUPEE}{_group_indian(str(abs(rounded)))}"
