from __future__ import annotations

import logging
from typing import Optional

from .config import DashboardSettings
from .errors import ConfigurationError, FetchFailure
from .gateway import BackendGateway
from .polling import PollingSynchronizer
from .state import TOTALS_SOURCE, DashboardState

TOTALS_ERROR = "Unable to load totals"


class TotalsSynchronizer(PollingSynchronizer):
    """Keeps the totals snapshot of the selected period current."""

    name = "totals"

    def __init__(
        self,
        settings: DashboardSettings,
        gateway: BackendGateway,
        state: DashboardState,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(
            settings.totals_poll_seconds,
            logger or logging.getLogger("wingo.admin.totals"),
        )
        self._gateway = gateway
        self._state = state

    def _is_current(self, period: str) -> bool:
        return not self._closed and self._state.selected == period

    async def refresh(self) -> bool:
        # Each request is tagged with the period it was issued for and only
        # applied if that period is still selected when it resolves.
        period = self._state.selected
        if self._closed or not period:
            return False

        try:
            snapshot = await self._gateway.get_totals(period)
        except ConfigurationError as exc:
            if self._is_current(period):
                self._state.set_error(TOTALS_SOURCE, str(exc))
            return False
        except FetchFailure as exc:
            self._logger.warning("Totals fetch for %s failed: %s", period, exc)
            if self._is_current(period):
                self._state.set_error(TOTALS_SOURCE, TOTALS_ERROR)
            return False

        if not self._is_current(period):
            self._logger.debug(
                "Discarding totals for %s; selection is now %s", period, self._state.selected
            )
            return False

        self._state.totals = snapshot
        self._state.clear_error()
        return True
