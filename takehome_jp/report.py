"""Text rendering of take-home results.

Everything here consumes finished TakeHomeResult records; nothing feeds back
into the calculation.
"""

from takehome_jp.params import SavingsTimeframe
from takehome_jp.scenarios import ScenarioRow
from takehome_jp.takehome import TakeHomeResult, project_savings

SECTIONS = ("deductions", "tax", "insurance", "summary")

# ---------------------------------------------------------------------------
# Format helpers
# ---------------------------------------------------------------------------

def format_yen(amount: int) -> str:
    """1234567 → "¥1,234,567", -1234 → "-¥1,234" """
    if amount < 0:
        return f"-¥{-amount:,}"
    return f"¥{amount:,}"


def format_pct(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.2f}%"


def format_millions(amount: int) -> str:
    """15000000 → "¥15M" """
    return f"¥{amount // 1_000_000}M"


def parse_sections(s: str) -> tuple[str, ...]:
    """Parse "tax,summary" / "all" / "" into a tuple of known section names."""
    s = s.strip().lower()
    if not s or s == "none":
        return ()
    if s == "all":
        return SECTIONS
    sections = tuple(part.strip() for part in s.split(",") if part.strip())
    unknown = [name for name in sections if name not in SECTIONS]
    if unknown:
        raise ValueError(f"unknown section(s): {', '.join(unknown)} (choose from {', '.join(SECTIONS)})")
    return sections


# ---------------------------------------------------------------------------
# Per-result breakdown
# ---------------------------------------------------------------------------

def _deduction_lines(r: TakeHomeResult) -> list[str]:
    return [f"Earned Income Deduction: {format_yen(r.earned_income_deduction)}"]


def _tax_lines(r: TakeHomeResult) -> list[str]:
    return [
        f"Income After Earned Income Deduction: {format_yen(r.income_after_deduction)}",
        f"National Exemption: {format_yen(r.national_exemption)}",
        f"National Tax Basis: {format_yen(r.national_tax_basis)}",
        f"Gross National Tax Liability: {format_yen(r.gross_national_tax)}",
        f"National Surtax: {format_yen(r.national_surtax)}",
        "------",
        f"National Tax Due: {format_yen(r.national_tax)}",
        "",
        f"Local Exemption: {format_yen(r.local_exemption)}",
        f"Local Tax Basis: {format_yen(r.local_tax_basis)}",
        f"Prefectural Tax: {format_yen(r.prefectural_tax)}",
        f"Municipal Tax: {format_yen(r.municipal_tax)}",
        f"Local Tax: {format_yen(r.local_tax)}",
        "------",
        f"Total Tax: {format_yen(r.total_tax)}",
    ]


def _insurance_lines(r: TakeHomeResult) -> list[str]:
    return [
        f"Health Insurance: {format_yen(r.health_insurance)}",
        f"Pension Insurance: {format_yen(r.pension_insurance)}",
        f"Unemployment Insurance: {format_yen(r.unemployment_insurance)}",
    ]


def _summary_lines(r: TakeHomeResult) -> list[str]:
    return [
        f"Total Insurance: {format_yen(r.total_insurance)}",
        f"Total Tax and Insurance: {format_yen(r.total_tax_and_insurance)}",
        f"Percentage of Tax and Insurance: {format_pct(r.tax_and_insurance_pct)}"
        f" ({format_pct(r.tax_pct)} tax, {format_pct(r.insurance_pct)} insurance)",
        f"Net Pay: {format_yen(r.net_pay)}",
        f"Percentage of Net Pay: {format_pct(r.net_pct)}",
        f"Monthly Take Home: {format_yen(r.monthly_take_home)}",
    ]


_SECTION_RENDERERS = {
    "deductions": _deduction_lines,
    "tax": _tax_lines,
    "insurance": _insurance_lines,
    "summary": _summary_lines,
}


def render_breakdown(result: TakeHomeResult, sections=SECTIONS) -> list[str]:
    """Lines for the requested sections only, in canonical section order."""
    lines: list[str] = []
    for name in SECTIONS:
        if name in sections:
            lines.extend(_SECTION_RENDERERS[name](result))
    return lines


# ---------------------------------------------------------------------------
# Comparison table
# ---------------------------------------------------------------------------

def _costs_cell(r: TakeHomeResult) -> str:
    if r.monthly_costs is None:
        return "N/A"
    return f"{format_yen(r.monthly_costs)} ({format_yen(r.variable_costs)})"


def _increase_cell(row: ScenarioRow) -> str:
    c = row.comparison
    if c is None:
        return f"{format_yen(0)} ({format_pct(0.0)})"
    return f"{format_yen(c.difference)} ({format_pct(c.percentage_change)})"


def render_comparison_table(rows: list[ScenarioRow], timeframes=()) -> str:
    """Scenario table: salary, take-home, increase vs baseline, costs, savings."""
    header = (
        f"{'Annual Salary':<13} | {'Monthly Salary':<16} | {'Monthly Takehome':<16} | "
        f"{'Takehome Increase (%)':<24} | {'Total Costs (Variable)':<23} | {'After Costs':<15}"
    )
    for t in timeframes:
        header += f" | {'Saved in ' + t.label:<18}"
    lines = [header, "-" * len(header)]

    for row in rows:
        r = row.result
        after_costs = "N/A" if r.monthly_after_costs is None else format_yen(r.monthly_after_costs)
        line = (
            f"{format_millions(r.gross_income):<13} | "
            f"{format_yen(r.monthly_salary):<16} | "
            f"{format_yen(r.monthly_take_home):<16} | "
            f"{_increase_cell(row):<24} | "
            f"{_costs_cell(r):<23} | "
            f"{after_costs:<15}"
        )
        if r.monthly_after_costs is None:
            savings = ["N/A"] * len(timeframes)
        else:
            savings = [format_yen(v) for v in project_savings(r.monthly_after_costs, list(timeframes))]
        for cell in savings:
            line += f" | {cell:<18}"
        lines.append(line)
    return "\n".join(lines)


def render_report(
    rows: list[ScenarioRow],
    timeframes: tuple[SavingsTimeframe, ...] = (),
    sections=(),
) -> str:
    """Breakdown blocks (if any sections are requested) followed by the table."""
    parts = []
    if sections:
        for row in rows:
            r = row.result
            parts.append(f"=== {format_yen(r.gross_income)} ({r.dependents} dependents) ===")
            parts.extend(render_breakdown(r, sections))
            parts.append("")
    parts.append(render_comparison_table(rows, timeframes))
    return "\n".join(parts)
