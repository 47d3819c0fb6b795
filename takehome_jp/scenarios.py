"""Demonstration income scenarios and multi-scenario execution."""

from dataclasses import dataclass

from takehome_jp.params import DEFAULT_REGIME, MonthlyCostPolicy, SavingsTimeframe, TaxRegime
from takehome_jp.takehome import Comparison, TakeHomeResult, calculate_take_home, compare_monthly

DEFAULT_DEPENDENTS = 2
DEFAULT_BASELINE = 15_000_000  # 比較基準の年収
DEFAULT_FIXED_COSTS = 750_000  # 月額固定費

SAVINGS_TIMEFRAMES = (
    SavingsTimeframe(3, "3 Months"),
    SavingsTimeframe(6, "6 Months"),
    SavingsTimeframe(12, "1 Year"),
    SavingsTimeframe(24, "2 Years"),
    SavingsTimeframe(60, "5 Years"),
)


@dataclass(frozen=True)
class IncomeScenario:
    annual_income: int
    costs: MonthlyCostPolicy | None = None


INCOME_SCENARIOS = (
    IncomeScenario(15_000_000, MonthlyCostPolicy(DEFAULT_FIXED_COSTS, 0.0)),
    IncomeScenario(18_000_000, MonthlyCostPolicy(DEFAULT_FIXED_COSTS, 10.0)),
    IncomeScenario(20_000_000, MonthlyCostPolicy(DEFAULT_FIXED_COSTS, 10.0)),
    IncomeScenario(22_000_000, MonthlyCostPolicy(DEFAULT_FIXED_COSTS, 10.0)),
    IncomeScenario(25_000_000, MonthlyCostPolicy(DEFAULT_FIXED_COSTS, 10.0)),
    IncomeScenario(30_000_000, MonthlyCostPolicy(DEFAULT_FIXED_COSTS, 10.0)),
    IncomeScenario(100_000_000, MonthlyCostPolicy(DEFAULT_FIXED_COSTS, 10.0)),
)


@dataclass(frozen=True)
class ScenarioRow:
    """One scenario result, with its comparison against the baseline income."""

    result: TakeHomeResult
    comparison: Comparison | None = None


def run_scenarios(
    scenarios=INCOME_SCENARIOS,
    dependents: int = DEFAULT_DEPENDENTS,
    baseline_income: int | None = DEFAULT_BASELINE,
    regime: TaxRegime = DEFAULT_REGIME,
) -> list[ScenarioRow]:
    """Evaluate every scenario.

    baseline_income: income each scenario is compared against, evaluated with
    the scenario's own cost policy. None disables the comparison.
    """
    rows = []
    for scenario in scenarios:
        result = calculate_take_home(scenario.annual_income, dependents, scenario.costs, regime)
        comparison = None
        if baseline_income is not None:
            baseline = calculate_take_home(baseline_income, dependents, scenario.costs, regime)
            comparison = compare_monthly(result.monthly_take_home, baseline.monthly_take_home)
        rows.append(ScenarioRow(result=result, comparison=comparison))
    return rows
