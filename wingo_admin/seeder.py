from __future__ import annotations

import asyncio
import datetime as dt
import logging
import random
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from .config import SETUP_MESSAGE, DashboardSettings
from .errors import ConfigurationError, SeedFailure
from .gateway import BackendGateway
from .periods import PeriodSynchronizer
from .state import DashboardState
from .totals import TotalsSynchronizer
from .types import NUMBER_BUCKETS, BetType, WagerRecord

SEED_FAILED_ALERT = "Failed to seed demo data"

SIZE_CLASS_AMOUNTS = (("big", 15000), ("small", 9000))
COLOR_AMOUNTS = (("red", 7000), ("green", 3000), ("violet", 1200))


@dataclass(frozen=True)
class SeedResult:
    period_id: str
    submitted: int
    failed: int


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def mint_period_id(now: dt.datetime, existing: Iterable[str] = ()) -> str:
    """Format `now` as YYYY-MM-DD-HH-MM-SS, suffixed if already taken."""
    base = now.strftime("%Y-%m-%d-%H-%M-%S")
    taken = set(existing)
    candidate = base
    suffix = 0
    while candidate in taken:
        suffix += 1
        candidate = f"{base}-{suffix}"
    return candidate


def build_demo_batch(
    period_id: str,
    rng: random.Random,
    amount_min: int = 500,
    amount_max: int = 4500,
) -> List[WagerRecord]:
    if amount_min <= 0 or amount_max <= amount_min:
        raise ValueError("demo amount range must be positive and non-empty")

    batch = [
        WagerRecord(period_id, BetType.BIG_SMALL, selection, amount)
        for selection, amount in SIZE_CLASS_AMOUNTS
    ]
    batch.extend(
        WagerRecord(period_id, BetType.COLOR, selection, amount)
        for selection, amount in COLOR_AMOUNTS
    )
    batch.extend(
        WagerRecord(period_id, BetType.NUMBER, bucket, rng.randrange(amount_min, amount_max))
        for bucket in NUMBER_BUCKETS
    )
    return batch


class DemoSeeder:
    """Writes a synthetic batch for a fresh period and switches the dashboard to it."""

    def __init__(
        self,
        settings: DashboardSettings,
        gateway: BackendGateway,
        state: DashboardState,
        periods: PeriodSynchronizer,
        totals: TotalsSynchronizer,
        select: Callable[[Optional[str]], None],
        rng: Optional[random.Random] = None,
        clock: Callable[[], dt.datetime] = utc_now,
        is_closed: Callable[[], bool] = lambda: False,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._settings = settings
        self._gateway = gateway
        self._state = state
        self._periods = periods
        self._totals = totals
        self._select = select
        self._rng = rng or random.Random()
        self._clock = clock
        self._is_closed = is_closed
        self._logger = logger or logging.getLogger("wingo.admin.seeder")

    async def seed(self) -> Optional[SeedResult]:
        state = self._state
        if self._is_closed():
            self._logger.info("Dashboard torn down; not seeding.")
            return None
        if state.busy:
            self._logger.info("Seeding already in progress; ignoring request.")
            return None
        if not self._settings.backend.configured:
            state.alert = SETUP_MESSAGE
            raise ConfigurationError(SETUP_MESSAGE)

        state.alert = None
        state.busy = True
        try:
            return await self._seed()
        except Exception as exc:
            self._logger.exception("Demo seeding failed: %s", exc)
            if not self._is_closed():
                state.alert = SEED_FAILED_ALERT
            if isinstance(exc, SeedFailure):
                raise
            raise SeedFailure(SEED_FAILED_ALERT) from exc
        finally:
            if not self._is_closed():
                state.busy = False

    async def _seed(self) -> Optional[SeedResult]:
        period_id = mint_period_id(self._clock(), self._state.periods)
        batch = build_demo_batch(
            period_id,
            self._rng,
            self._settings.demo_amount_min,
            self._settings.demo_amount_max,
        )
        self._logger.info("Seeding %d demo wagers for period %s", len(batch), period_id)

        outcomes = await asyncio.gather(
            *(self._gateway.submit_wager(record) for record in batch),
            return_exceptions=True,
        )
        if self._is_closed():
            self._logger.info("Dropping demo seed for %s; dashboard torn down.", period_id)
            return None
        failed = 0
        for record, outcome in zip(batch, outcomes):
            if isinstance(outcome, BaseException):
                failed += 1
                self._logger.warning(
                    "Demo wager %s/%s failed: %s", record.bet_type.value, record.selection, outcome
                )
        if failed == len(batch):
            raise SeedFailure(f"No demo wagers were accepted for period {period_id}")

        await self._periods.refresh()
        if period_id not in self._state.periods:
            self._logger.warning("Period list does not include seeded period %s yet", period_id)
        self._select(period_id)
        await self._totals.refresh()

        self._logger.info(
            "Seeded period %s (%d submitted, %d failed)", period_id, len(batch) - failed, failed
        )
        return SeedResult(period_id=period_id, submitted=len(batch) - failed, failed=failed)
