from __future__ import annotations

import asyncio
import json
import logging
import threading
from typing import Any, Awaitable, Optional
from urllib.parse import urlencode

from flask import Blueprint, Flask, current_app, jsonify, render_template, request
from werkzeug.exceptions import HTTPException

from .dashboard import Dashboard
from .errors import ConfigurationError, SeedFailure
from .view import DashboardView

RUNTIME_KEY = "WINGO_DASHBOARD_RUNTIME"

logger = logging.getLogger("wingo.admin.web")


class DashboardRuntime:
    """Runs a `Dashboard` on a private event loop thread.

    Flask handles requests on its own threads; every read or write of the
    dashboard state is shipped to the loop so the state has a single owner.
    """

    def __init__(self, dashboard: Dashboard) -> None:
        self.dashboard = dashboard
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        loop = asyncio.new_event_loop()
        self._loop = loop
        self._thread = threading.Thread(
            target=self._run_loop, args=(loop,), name="wingo-dashboard-loop", daemon=True
        )
        self._thread.start()
        self.call(self._mount())

    @staticmethod
    def _run_loop(loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        loop.run_forever()

    async def _mount(self) -> None:
        self.dashboard.mount()

    async def _view(self) -> DashboardView:
        return self.dashboard.view()

    async def _select(self, period: str) -> bool:
        if period not in self.dashboard.state.periods:
            return False
        self.dashboard.select(period)
        return True

    def call(self, coro: Awaitable[Any], timeout: Optional[float] = None) -> Any:
        if self._loop is None:
            raise RuntimeError("Dashboard runtime is not started")
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        return future.result(timeout)

    def view(self) -> DashboardView:
        return self.call(self._view())

    def select(self, period: str) -> bool:
        return self.call(self._select(period))

    def refresh(self) -> None:
        self.call(self.dashboard.refresh())

    def seed_demo(self):
        return self.call(self.dashboard.seed_demo())

    def stop(self) -> None:
        loop, thread = self._loop, self._thread
        if loop is None or thread is None:
            return
        self.call(self.dashboard.teardown())
        loop.call_soon_threadsafe(loop.stop)
        thread.join()
        loop.close()
        self._loop = None
        self._thread = None


def api_example_url(backend_url: str) -> str:
    body = {"period_id": "2025-11-13-1201", "bet_type": "big_small", "selection": "big", "amount": 5000}
    query = urlencode(
        {
            "method": "POST",
            "url": f"{backend_url or 'BACKEND'}/api/bets",
            "body": json.dumps(body, indent=2),
            "headers": "Content-Type: application/json",
        }
    )
    return f"https://httpie.io/run?{query}"


bp = Blueprint("dashboard", __name__)


def _runtime() -> DashboardRuntime:
    return current_app.config[RUNTIME_KEY]


@bp.get("/")
def index():
    view = _runtime().view()
    return render_template("dashboard.html", view=view, api_example=api_example_url(view.backend_url))


@bp.get("/api/state")
def get_state():
    return jsonify(_runtime().view().to_dict())


@bp.post("/api/refresh")
def refresh():
    runtime = _runtime()
    runtime.refresh()
    return jsonify(runtime.view().to_dict())


@bp.post("/api/select")
def select_period():
    payload = request.get_json(force=True, silent=True) or {}
    period = payload.get("period")
    if not isinstance(period, str) or not period:
        return jsonify({"error": "period is required"}), 400
    runtime = _runtime()
    if not runtime.select(period):
        return jsonify({"error": f"unknown period {period}"}), 404
    return jsonify(runtime.view().to_dict())


@bp.post("/api/seed")
def seed_demo():
    runtime = _runtime()
    try:
        result = runtime.seed_demo()
    except ConfigurationError as exc:
        return jsonify({"error": str(exc)}), 400
    except SeedFailure as exc:
        current_app.logger.warning("Demo seeding failed: %s", exc)
        return jsonify({"error": runtime.view().alert or str(exc)}), 502
    if result is None:
        return jsonify({"error": "seeding already in progress"}), 409
    return jsonify(
        {
            "period_id": result.period_id,
            "submitted": result.submitted,
            "failed": result.failed,
            "state": runtime.view().to_dict(),
        }
    )


def create_app(runtime: DashboardRuntime) -> Flask:
    app = Flask(__name__)
    app.config[RUNTIME_KEY] = runtime
    app.register_blueprint(bp)

    @app.errorhandler(Exception)
    def handle_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify({"error": str(exc)}), 500

    return app
