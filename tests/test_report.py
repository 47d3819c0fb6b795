"""Tests for report formatting and rendering."""

import pytest
from takehome_jp import MonthlyCostPolicy, SavingsTimeframe, calculate_take_home
from takehome_jp.report import (
    SECTIONS,
    format_millions,
    format_pct,
    format_yen,
    parse_sections,
    render_breakdown,
    render_comparison_table,
    render_report,
)
from takehome_jp.scenarios import IncomeScenario, run_scenarios


class TestFormatters:
    def test_yen(self):
        assert format_yen(1_234_567) == "¥1,234,567"
        assert format_yen(0) == "¥0"
        assert format_yen(999) == "¥999"

    def test_negative_yen(self):
        assert format_yen(-13_000) == "-¥13,000"

    def test_pct(self):
        assert format_pct(16.57134) == "16.57%"
        assert format_pct(None) == "N/A"

    def test_millions(self):
        assert format_millions(15_000_000) == "¥15M"
        assert format_millions(100_000_000) == "¥100M"


class TestParseSections:
    def test_all(self):
        assert parse_sections("all") == SECTIONS

    def test_empty(self):
        assert parse_sections("") == ()
        assert parse_sections("none") == ()

    def test_subset(self):
        assert parse_sections("tax, summary") == ("tax", "summary")

    def test_unknown(self):
        with pytest.raises(ValueError, match="unknown section"):
            parse_sections("tax,bogus")


class TestRenderBreakdown:
    def setup_method(self):
        self.result = calculate_take_home(15_000_000, 2)

    def test_filter_insurance(self):
        lines = render_breakdown(self.result, ("insurance",))
        assert lines == [
            "Health Insurance: ¥890,000",
            "Pension Insurance: ¥65,303",
            "Unemployment Insurance: ¥75,720",
        ]

    def test_nothing_requested(self):
        assert render_breakdown(self.result, ()) == []

    def test_canonical_order(self):
        lines = render_breakdown(self.result, ("summary", "deductions"))
        assert lines[0] == "Earned Income Deduction: ¥1,950,000"
        assert lines[-1] == "Monthly Take Home: ¥840,418"

    def test_tax_section(self):
        lines = render_breakdown(self.result, ("tax",))
        assert "National Tax Basis: ¥12,570,000" in lines
        assert "National Tax Due: ¥2,636,954" in lines
        assert "Total Tax: ¥3,883,954" in lines

    def test_zero_income_percentages(self):
        lines = render_breakdown(calculate_take_home(0), ("summary",))
        assert "Percentage of Net Pay: N/A" in lines


class TestComparisonTable:
    def setup_method(self):
        self.timeframes = (SavingsTimeframe(3, "3 Months"), SavingsTimeframe(12, "1 Year"))

    def test_header_has_timeframes(self):
        table = render_comparison_table(run_scenarios(), self.timeframes)
        header = table.splitlines()[0]
        assert "Saved in 3 Months" in header
        assert "Saved in 1 Year" in header
        assert set(table.splitlines()[1]) == {"-"}

    def test_row_values(self):
        rows = run_scenarios(
            [IncomeScenario(15_000_000, MonthlyCostPolicy(750_000, 0.0))], dependents=2,
        )
        line = render_comparison_table(rows, self.timeframes).splitlines()[2]
        cells = [c.strip() for c in line.split("|")]
        assert cells == [
            "¥15M", "¥1,250,000", "¥840,418", "¥0 (0.00%)",
            "¥750,000 (¥0)", "¥90,418", "¥271,254", "¥1,085,016",
        ]

    def test_no_costs_shows_na(self):
        rows = run_scenarios([IncomeScenario(15_000_000)], baseline_income=None)
        line = render_comparison_table(rows, self.timeframes).splitlines()[2]
        cells = [c.strip() for c in line.split("|")]
        assert cells[4:] == ["N/A", "N/A", "N/A", "N/A"]

    def test_zero_baseline_shows_na(self):
        rows = run_scenarios([IncomeScenario(15_000_000)], baseline_income=0)
        line = render_comparison_table(rows).splitlines()[2]
        assert "¥840,418 (N/A)" in line


class TestRenderReport:
    def test_table_only(self):
        rows = run_scenarios()
        assert render_report(rows) == render_comparison_table(rows)

    def test_with_sections(self):
        rows = run_scenarios([IncomeScenario(15_000_000)])
        out = render_report(rows, sections=("summary",))
        assert out.startswith("=== ¥15,000,000 (2 dependents) ===")
        assert "Net Pay: ¥10,085,023" in out
