import asyncio
import datetime as dt
from typing import Dict, Iterable, List, Optional

from wingo_admin.config import BackendSettings, DashboardSettings
from wingo_admin.errors import FetchFailure
from wingo_admin.gateway.base import BackendGateway
from wingo_admin.types import ColorTotals, SizeTotals, TotalsSnapshot, WagerRecord

FIXED_NOW = dt.datetime(2025, 11, 13, 12, 1, 30, tzinfo=dt.timezone.utc)


def make_settings(url: str = "http://backend.test", **overrides) -> DashboardSettings:
    base = DashboardSettings(
        backend=BackendSettings(url=url, timeout_seconds=1),
        period_poll_seconds=60,
        totals_poll_seconds=60,
    )
    return base.copy(**overrides)


def make_snapshot(period_id: str, big: int = 15000) -> TotalsSnapshot:
    return TotalsSnapshot(
        period_id=period_id,
        big_small=SizeTotals(big=big, small=9000, total=big + 9000),
        color=ColorTotals(red=7000, green=3000, violet=1200),
        number={str(i): 500 + i * 350 for i in range(10)},
    )


async def settle(rounds: int = 20) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeGateway(BackendGateway):
    def __init__(
        self,
        periods: Optional[Iterable[str]] = None,
        totals: Optional[Dict[str, TotalsSnapshot]] = None,
    ) -> None:
        self.periods: List[str] = list(periods or [])
        self.totals: Dict[str, TotalsSnapshot] = dict(totals or {})
        self.period_calls = 0
        self.totals_calls: List[str] = []
        self.wagers: List[WagerRecord] = []
        self.fail_periods = False
        self.fail_totals = False
        self.fail_selections: set = set()
        self.gates: Dict[str, asyncio.Event] = {}
        self.wager_gate: Optional[asyncio.Event] = None
        self.closed = False

    async def list_periods(self) -> List[str]:
        self.period_calls += 1
        if self.fail_periods:
            raise FetchFailure("periods unavailable")
        return list(self.periods)

    async def get_totals(self, period: str) -> TotalsSnapshot:
        self.totals_calls.append(period)
        gate = self.gates.get(period)
        if gate is not None:
            await gate.wait()
        if self.fail_totals:
            raise FetchFailure("totals unavailable")
        return self.totals.get(period, TotalsSnapshot(period_id=period))

    async def submit_wager(self, record: WagerRecord) -> None:
        self.wagers.append(record)
        if self.wager_gate is not None:
            await self.wager_gate.wait()
        if record.selection in self.fail_selections:
            raise FetchFailure(f"rejected {record.selection}")
        if record.period_id not in self.periods:
            self.periods.append(record.period_id)
        self.totals.setdefault(record.period_id, make_snapshot(record.period_id))

    async def close(self) -> None:
        self.closed = True
