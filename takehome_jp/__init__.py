"""Japanese take-home pay calculation package."""

from takehome_jp.brackets import (
    UNBOUNDED,
    BracketTable,
    ConfigurationError,
    DeductionBracketTier,
    ExemptionBracketTier,
    TaxBracketTier,
    resolve,
)
from takehome_jp.params import (
    DEFAULT_REGIME,
    MonthlyCostPolicy,
    SavingsTimeframe,
    TaxRegime,
)
from takehome_jp.tax import (
    LocalTax,
    NationalTax,
    earned_income_deduction,
    local_tax,
    national_tax,
    personal_exemptions,
    progressive_tax,
)
from takehome_jp.insurance import (
    health_insurance,
    pension_insurance,
    unemployment_insurance,
)
from takehome_jp.takehome import (
    Comparison,
    TakeHomeResult,
    calculate_take_home,
    compare_take_home,
    project_savings,
)
from takehome_jp.scenarios import (
    INCOME_SCENARIOS,
    SAVINGS_TIMEFRAMES,
    IncomeScenario,
    ScenarioRow,
    run_scenarios,
)

__all__ = [
    "UNBOUNDED",
    "BracketTable",
    "ConfigurationError",
    "DeductionBracketTier",
    "ExemptionBracketTier",
    "TaxBracketTier",
    "resolve",
    "DEFAULT_REGIME",
    "MonthlyCostPolicy",
    "SavingsTimeframe",
    "TaxRegime",
    "LocalTax",
    "NationalTax",
    "earned_income_deduction",
    "local_tax",
    "national_tax",
    "personal_exemptions",
    "progressive_tax",
    "health_insurance",
    "pension_insurance",
    "unemployment_insurance",
    "Comparison",
    "TakeHomeResult",
    "calculate_take_home",
    "compare_take_home",
    "project_savings",
    "INCOME_SCENARIOS",
    "SAVINGS_TIMEFRAMES",
    "IncomeScenario",
    "ScenarioRow",
    "run_scenarios",
]
