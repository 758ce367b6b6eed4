from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .config import DashboardSettings
from .errors import ConfigurationError, FetchFailure
from .gateway import BackendGateway
from .polling import PollingSynchronizer
from .state import PERIODS_SOURCE, DashboardState

PERIODS_ERROR = "Unable to load periods"


class PeriodSynchronizer(PollingSynchronizer):
    """Keeps the period list current and picks a default selection."""

    name = "periods"

    def __init__(
        self,
        settings: DashboardSettings,
        gateway: BackendGateway,
        state: DashboardState,
        on_select: Optional[Callable[[Optional[str]], None]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(
            settings.period_poll_seconds,
            logger or logging.getLogger("wingo.admin.periods"),
        )
        self._gateway = gateway
        self._state = state
        self._on_select = on_select or state.select

    async def refresh(self) -> bool:
        if self._closed:
            return False
        try:
            periods = await self._gateway.list_periods()
        except ConfigurationError as exc:
            if not self._closed:
                self._state.set_error(PERIODS_SOURCE, str(exc))
            return False
        except FetchFailure as exc:
            self._logger.warning("Period fetch failed: %s", exc)
            if not self._closed:
                self._state.set_error(PERIODS_SOURCE, PERIODS_ERROR)
            return False

        if self._closed:
            self._logger.debug("Dropping period list that arrived after teardown.")
            return False
        self._apply(periods)
        return True

    def _apply(self, periods: List[str]) -> None:
        state = self._state
        state.periods = list(periods)
        state.clear_error(PERIODS_SOURCE)

        if not periods:
            # Nothing can be displayed; a later non-empty list selects afresh.
            state.totals = None
            if state.selected is not None:
                self._on_select(None)
            return

        if state.selected is None:
            self._logger.info("No period selected; defaulting to %s", periods[0])
            self._on_select(periods[0])
