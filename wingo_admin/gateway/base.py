from __future__ import annotations

import abc
from typing import List

from ..types import TotalsSnapshot, WagerRecord


class BackendGateway(abc.ABC):
    """Abstract access to the period totals backend."""

    @abc.abstractmethod
    async def list_periods(self) -> List[str]:
        """Return known period ids in backend order.

        Implementations raise `ConfigurationError` when no backend is
        configured and `FetchFailure` when the call itself fails.
        """

    @abc.abstractmethod
    async def get_totals(self, period: str) -> TotalsSnapshot:
        """Return aggregated totals for `period`, zero-filled where absent."""

    @abc.abstractmethod
    async def submit_wager(self, record: WagerRecord) -> None:
        """Submit one wager record."""

    async def close(self) -> None:
        """Optional hook for gateways that hold connections."""
        return None
