from __future__ import annotations

import asyncio
import datetime as dt
import logging
import random
from typing import Callable, Optional

from .config import SETUP_MESSAGE, DashboardSettings
from .gateway import BackendGateway
from .periods import PeriodSynchronizer
from .seeder import DemoSeeder, SeedResult, utc_now
from .state import DashboardState
from .totals import TotalsSynchronizer
from .view import DashboardView, build_view


class Dashboard:
    """Owns the state container and wires the synchronizers and seeder to it.

    All methods must run on the event loop that called `mount()`.
    """

    def __init__(
        self,
        settings: DashboardSettings,
        gateway: BackendGateway,
        state: Optional[DashboardState] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], dt.datetime] = utc_now,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.settings = settings
        self.state = state or DashboardState()
        self._gateway = gateway
        self._logger = logger or logging.getLogger("wingo.admin.dashboard")
        self._mounted = False
        self._torn_down = False

        self.periods = PeriodSynchronizer(settings, gateway, self.state, on_select=self.select)
        self.totals = TotalsSynchronizer(settings, gateway, self.state)
        self.seeder = DemoSeeder(
            settings,
            gateway,
            self.state,
            self.periods,
            self.totals,
            select=self.select,
            rng=rng,
            clock=clock,
            is_closed=lambda: self._torn_down,
        )

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    def mount(self) -> None:
        if self._mounted or self._torn_down:
            return
        self._mounted = True
        if not self.settings.backend.configured:
            self._logger.warning("%s; network activity disabled.", SETUP_MESSAGE)
            self.state.setup_message = SETUP_MESSAGE
            return
        self.periods.start()
        self.totals.start()

    def select(self, period: Optional[str]) -> None:
        if self._torn_down:
            return
        if self.state.select(period):
            self._logger.debug("Selected period %s", period)
            if self._mounted and self.settings.backend.configured:
                self.totals.restart()

    async def refresh(self) -> None:
        if self._torn_down or not self.settings.backend.configured:
            return
        await asyncio.gather(self.periods.refresh(), self.totals.refresh())

    async def seed_demo(self) -> Optional[SeedResult]:
        if self._torn_down:
            return None
        return await self.seeder.seed()

    def view(self) -> DashboardView:
        return build_view(self.state, self.settings.backend.url)

    async def teardown(self) -> None:
        if self._torn_down:
            return
        self._torn_down = True
        await self.periods.close()
        await self.totals.close()
        await self._gateway.close()
