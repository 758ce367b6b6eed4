from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import List, Optional, Tuple

from .formatting import format_inr
from .state import DashboardState
from .types import NUMBER_BUCKETS

MODE_SETUP = "setup"
MODE_EMPTY = "empty"
MODE_LOADING = "loading"
MODE_TOTALS = "totals"

Cell = Tuple[str, str]


@dataclass(frozen=True)
class DashboardView:
    """Render-ready snapshot of the dashboard state."""

    mode: str
    periods: List[str] = field(default_factory=list)
    selected: Optional[str] = None
    error: Optional[str] = None
    alert: Optional[str] = None
    busy: bool = False
    setup_message: Optional[str] = None
    backend_url: str = ""
    size_cards: List[Cell] = field(default_factory=list)
    color_cards: List[Cell] = field(default_factory=list)
    number_cells: List[Cell] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def build_view(state: DashboardState, backend_url: str = "") -> DashboardView:
    common = dict(
        periods=list(state.periods),
        selected=state.selected,
        error=state.error.message if state.error else None,
        alert=state.alert,
        busy=state.busy,
        setup_message=state.setup_message,
        backend_url=backend_url,
    )
    if state.setup_message:
        return DashboardView(mode=MODE_SETUP, **common)

    totals = state.visible_totals()
    if totals is None:
        mode = MODE_LOADING if state.periods else MODE_EMPTY
        return DashboardView(mode=mode, **common)

    size = totals.big_small
    color = totals.color
    return DashboardView(
        mode=MODE_TOTALS,
        size_cards=[
            ("Big", format_inr(size.big)),
            ("Small", format_inr(size.small)),
            ("Total", format_inr(size.total)),
        ],
        color_cards=[
            ("Red", format_inr(color.red)),
            ("Green", format_inr(color.green)),
            ("Violet", format_inr(color.violet)),
        ],
        number_cells=[(bucket, format_inr(totals.number_amount(bucket))) for bucket in NUMBER_BUCKETS],
        **common,
    )


def render_text(view: DashboardView) -> str:
    lines = ["Wingo Admin Panel", "=" * 17]
    if view.mode == MODE_SETUP:
        lines.append(f"Setup required: {view.setup_message}")
        return "\n".join(lines)

    if view.periods:
        lines.append(f"Periods: {', '.join(view.periods)}")
        lines.append(f"Selected: {view.selected or '-'}")
    if view.busy:
        lines.append("Seeding demo data...")
    if view.alert:
        lines.append(f"ALERT: {view.alert}")
    if view.error:
        lines.append(f"ERROR: {view.error}")

    if view.mode == MODE_EMPTY:
        lines.append("No data yet. Start sending bets to the backend or load demo data.")
        lines.append(f"Backend: {view.backend_url}")
    elif view.mode == MODE_LOADING:
        lines.append("Loading totals...")
    else:
        lines.append("")
        lines.append("Big / Small")
        lines.extend(f"  {label:<7}{value:>14}" for label, value in view.size_cards)
        lines.append("Numbers")
        lines.extend(f"  {label:<7}{value:>14}" for label, value in view.number_cells)
        lines.append("Colours")
        lines.extend(f"  {label:<7}{value:>14}" for label, value in view.color_cards)
    return "\n".join(lines)
