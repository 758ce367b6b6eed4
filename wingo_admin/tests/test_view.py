import unittest
from decimal import Decimal

from wingo_admin.formatting import format_inr
from wingo_admin.schemas import TotalsResponse
from wingo_admin.state import DashboardState
from wingo_admin.types import TotalsSnapshot
from wingo_admin.view import MODE_EMPTY, MODE_LOADING, MODE_SETUP, MODE_TOTALS, build_view, render_text

SCENARIO_TOTALS = {
    "totals": {
        "big_small": {"big": 15000, "small": 9000, "total": 24000},
        "color": {"red": 7000, "green": 3000, "violet": 1200},
        "number": {str(i): 4000 if i == 9 else 500 + i * 350 for i in range(10)},
    }
}


class FormatInrTests(unittest.TestCase):
    def test_indian_grouping(self):
        self.assertEqual(format_inr(0), "₹0")
        self.assertEqual(format_inr(999), "₹999")
        self.assertEqual(format_inr(15000), "₹15,000")
        self.assertEqual(format_inr(150000), "₹1,50,000")
        self.assertEqual(format_inr(12345678), "₹1,23,45,678")

    def test_rounds_to_whole_rupees(self):
        self.assertEqual(format_inr(1234.5), "₹1,235")
        self.assertEqual(format_inr(Decimal("99.4")), "₹99")
        self.assertEqual(format_inr("2500"), "₹2,500")

    def test_negative_amounts(self):
        self.assertEqual(format_inr(-1500), "-₹1,500")

    def test_falls_back_for_non_numbers(self):
        self.assertEqual(format_inr("n/a"), "₹n/a")
        self.assertEqual(format_inr(None), "₹None")
        self.assertEqual(format_inr(float("nan")), "₹nan")


class BuildViewTests(unittest.TestCase):
    def test_scenario_totals_render(self):
        snapshot = TotalsResponse.model_validate(SCENARIO_TOTALS).totals.to_snapshot("r1")
        state = DashboardState(periods=["r1", "r2"], selected="r1", totals=snapshot)

        view = build_view(state, "http://backend.test")

        self.assertEqual(view.mode, MODE_TOTALS)
        self.assertEqual(dict(view.size_cards)["Big"], "₹15,000")
        self.assertEqual(dict(view.size_cards)["Total"], "₹24,000")
        self.assertEqual(dict(view.color_cards), {"Red": "₹7,000", "Green": "₹3,000", "Violet": "₹1,200"})
        self.assertEqual([label for label, _ in view.number_cells], [str(i) for i in range(10)])
        self.assertTrue(all(value for _, value in view.number_cells))
        self.assertEqual(dict(view.number_cells)["9"], "₹4,000")

    def test_absent_categories_render_as_zero(self):
        state = DashboardState(periods=["r1"], selected="r1", totals=TotalsSnapshot(period_id="r1"))

        view = build_view(state)

        self.assertEqual(len(view.number_cells), 10)
        self.assertEqual({value for _, value in view.number_cells}, {"₹0"})
        self.assertEqual([value for _, value in view.size_cards], ["₹0", "₹0", "₹0"])
        self.assertEqual([value for _, value in view.color_cards], ["₹0", "₹0", "₹0"])

    def test_snapshot_for_other_period_is_not_shown(self):
        state = DashboardState(periods=["r1", "r2"], selected="r2", totals=TotalsSnapshot(period_id="r1"))

        view = build_view(state)

        self.assertEqual(view.mode, MODE_LOADING)
        self.assertEqual(view.number_cells, [])

    def test_empty_and_setup_modes(self):
        self.assertEqual(build_view(DashboardState()).mode, MODE_EMPTY)
        self.assertEqual(build_view(DashboardState(setup_message="configure me")).mode, MODE_SETUP)

    def test_error_and_alert_are_exposed(self):
        state = DashboardState(alert="Failed to seed demo data", busy=True)
        state.set_error("periods", "Unable to load periods")

        view = build_view(state)
        text = render_text(view)

        self.assertEqual(view.error, "Unable to load periods")
        self.assertIn("ALERT: Failed to seed demo data", text)
        self.assertIn("ERROR: Unable to load periods", text)
        self.assertIn("Seeding demo data", text)

    def test_render_text_lists_numbers(self):
        state = DashboardState(periods=["r1"], selected="r1", totals=TotalsSnapshot(period_id="r1"))

        text = render_text(build_view(state))

        self.assertIn("Selected: r1", text)
        self.assertIn("Numbers", text)
        self.assertEqual(text.count("₹0"), 16)


class DashboardStateTests(unittest.TestCase):
    def test_select_reports_change_and_drops_other_snapshot(self):
        state = DashboardState(periods=["r1", "r2"], totals=TotalsSnapshot(period_id="r1"))

        self.assertTrue(state.select("r1"))
        self.assertFalse(state.select("r1"))
        self.assertTrue(state.select("r2"))
        self.assertIsNone(state.totals)
        self.assertTrue(state.select(""))
        self.assertIsNone(state.selected)

    def test_clear_error_by_source(self):
        state = DashboardState()
        state.set_error("totals", "Unable to load totals")

        state.clear_error("periods")
        self.assertIsNotNone(state.error)
        state.clear_error()
        self.assertIsNone(state.error)


if __name__ == "__main__":
    unittest.main()
