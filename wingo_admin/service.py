from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional

from .config import DashboardSettings, load_config
from .dashboard import Dashboard
from .errors import ConfigurationError, SeedFailure
from .gateway import HttpBackendGateway, HttpBackendGatewayConfig
from .view import render_text
from .web import DashboardRuntime, create_app


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )


def build_gateway(settings: DashboardSettings) -> HttpBackendGateway:
    return HttpBackendGateway(HttpBackendGatewayConfig.from_settings(settings.backend))


def build_dashboard(settings: DashboardSettings) -> Dashboard:
    return Dashboard(settings, build_gateway(settings))


async def run_once(settings: DashboardSettings, seed_demo: bool = False) -> str:
    """Fetch (and optionally seed) once without starting the poll loops."""
    dashboard = build_dashboard(settings)
    logger = logging.getLogger("wingo.admin")
    try:
        if not settings.backend.configured:
            dashboard.mount()
            return render_text(dashboard.view())
        if seed_demo:
            try:
                result = await dashboard.seed_demo()
            except (ConfigurationError, SeedFailure) as exc:
                logger.error("Demo seeding failed: %s", exc)
            else:
                if result:
                    logger.info(
                        "Seeded period=%s submitted=%s failed=%s",
                        result.period_id,
                        result.submitted,
                        result.failed,
                    )
        else:
            await dashboard.periods.refresh()
            await dashboard.totals.refresh()
        return render_text(dashboard.view())
    finally:
        await dashboard.teardown()


def serve(settings: DashboardSettings, seed_demo: bool = False) -> None:
    runtime = DashboardRuntime(build_dashboard(settings))
    runtime.start()
    try:
        if seed_demo and settings.backend.configured:
            try:
                runtime.seed_demo()
            except (ConfigurationError, SeedFailure) as exc:
                logging.getLogger("wingo.admin").error("Demo seeding failed: %s", exc)
        app = create_app(runtime)
        app.run(host=settings.host, port=settings.port, threaded=True, use_reloader=False)
    finally:
        runtime.stop()


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Wingo period totals admin dashboard")
    parser.add_argument("--env-file", type=str, default=None, help="Path to .env file with WINGO_BACKEND_URL")
    parser.add_argument("--once", action="store_true", help="Fetch once, print the dashboard and exit.")
    parser.add_argument("--seed-demo", action="store_true", help="Load demo data before showing the dashboard.")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging (default INFO)."
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(args.verbose)
    settings = load_config(args.env_file)
    try:
        if args.once:
            print(asyncio.run(run_once(settings, seed_demo=args.seed_demo)))
            return
        serve(settings, seed_demo=args.seed_demo)
    except KeyboardInterrupt:
        print("Dashboard stopped by user.")


if __name__ == "__main__":
    main()
