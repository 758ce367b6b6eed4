from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .types import TotalsSnapshot

PERIODS_SOURCE = "periods"
TOTALS_SOURCE = "totals"


@dataclass(frozen=True)
class ErrorBanner:
    source: str
    message: str


@dataclass
class DashboardState:
    """Everything the dashboard shows, owned by the event loop thread.

    The synchronizers and the seeder mutate this container; the view layer only
    reads it. `totals` is kept only while it belongs to `selected`.
    """

    periods: List[str] = field(default_factory=list)
    selected: Optional[str] = None
    totals: Optional[TotalsSnapshot] = None
    error: Optional[ErrorBanner] = None
    alert: Optional[str] = None
    busy: bool = False
    setup_message: Optional[str] = None

    def select(self, period: Optional[str]) -> bool:
        """Set the selection; returns True when it actually changed."""
        period = period or None
        if period == self.selected:
            return False
        self.selected = period
        if self.totals is not None and self.totals.period_id != period:
            self.totals = None
        return True

    def set_error(self, source: str, message: str) -> None:
        self.error = ErrorBanner(source=source, message=message)

    def clear_error(self, source: Optional[str] = None) -> None:
        if source is None or (self.error is not None and self.error.source == source):
            self.error = None

    def visible_totals(self) -> Optional[TotalsSnapshot]:
        if self.totals is None or self.totals.period_id != self.selected:
            return None
        return self.totals
