from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional
from urllib.parse import quote

import requests
from pydantic import ValidationError

from ..config import SETUP_MESSAGE, BackendSettings
from ..errors import ConfigurationError, FetchFailure
from ..schemas import BetRequest, PeriodsResponse, TotalsResponse
from ..types import TotalsSnapshot, WagerRecord
from .base import BackendGateway


@dataclass(frozen=True)
class HttpBackendGatewayConfig:
    """Where the backend lives and how long to wait for it."""

    base_url: str
    timeout_seconds: float = 10

    @classmethod
    def from_settings(cls, settings: BackendSettings) -> "HttpBackendGatewayConfig":
        return cls(base_url=settings.url, timeout_seconds=settings.timeout_seconds)


class HttpBackendGateway(BackendGateway):
    """Talk to the backend's JSON HTTP API."""

    def __init__(
        self,
        config: HttpBackendGatewayConfig,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._config = config
        self._base_url = config.base_url.strip().rstrip("/")
        self._logger = logger or logging.getLogger("wingo.admin.gateway")

    @property
    def configured(self) -> bool:
        return bool(self._base_url)

    async def list_periods(self) -> List[str]:
        url = self._url("/api/periods")
        payload = await asyncio.to_thread(self._get_json, url, self._config.timeout_seconds)
        try:
            return PeriodsResponse.model_validate(payload).periods
        except ValidationError as exc:
            raise FetchFailure("Invalid periods payload") from exc

    async def get_totals(self, period: str) -> TotalsSnapshot:
        if not period:
            raise ValueError("get_totals requires a period id")
        url = self._url(f"/api/periods/{quote(period, safe='')}/totals")
        payload = await asyncio.to_thread(self._get_json, url, self._config.timeout_seconds)
        try:
            response = TotalsResponse.model_validate(payload)
        except ValidationError as exc:
            raise FetchFailure(f"Invalid totals payload for period {period}") from exc
        return response.totals.to_snapshot(period)

    async def submit_wager(self, record: WagerRecord) -> None:
        url = self._url("/api/bets")
        body = BetRequest(**record.to_payload()).model_dump(mode="json")
        await asyncio.to_thread(self._post_json, url, body, self._config.timeout_seconds)

    def _url(self, path: str) -> str:
        # Raised before any I/O so the caller can tell setup problems from outages.
        if not self._base_url:
            raise ConfigurationError(SETUP_MESSAGE)
        return f"{self._base_url}{path}"

    def _get_json(self, url: str, timeout_seconds: float) -> Mapping[str, Any]:
        self._logger.debug("GET %s", url)
        try:
            resp = requests.get(url, timeout=timeout_seconds)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as exc:
            raise FetchFailure(f"GET {url} failed: {exc}") from exc
        except ValueError as exc:
            raise FetchFailure(f"GET {url} returned invalid JSON") from exc
        if not isinstance(data, Mapping):
            raise FetchFailure(f"GET {url} returned non-object payload")
        return data

    def _post_json(self, url: str, body: Mapping[str, Any], timeout_seconds: float) -> None:
        self._logger.debug("POST %s %s", url, body)
        try:
            resp = requests.post(url, json=body, timeout=timeout_seconds)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchFailure(f"POST {url} failed: {exc}") from exc
