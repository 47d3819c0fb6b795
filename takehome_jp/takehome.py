"""Take-home aggregation and comparative analysis."""

from dataclasses import dataclass

from takehome_jp.insurance import health_insurance, pension_insurance, unemployment_insurance
from takehome_jp.params import DEFAULT_REGIME, MonthlyCostPolicy, SavingsTimeframe, TaxRegime
from takehome_jp.tax import (
    earned_income_deduction,
    local_tax,
    national_tax,
    personal_exemptions,
)

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class TakeHomeResult:
    """Fully itemized breakdown for one (income, dependents, costs) input."""

    gross_income: int
    dependents: int

    # Deductions
    earned_income_deduction: int
    income_after_deduction: int
    national_exemption: int
    local_exemption: int
    national_tax_basis: int
    local_tax_basis: int

    # Tax
    gross_national_tax: int
    national_surtax: int
    national_tax: int
    prefectural_tax: int
    municipal_tax: int
    local_tax: int

    # Insurance
    health_insurance: int
    pension_insurance: int
    unemployment_insurance: int

    # Totals
    total_tax: int
    total_insurance: int
    total_tax_and_insurance: int
    net_pay: int
    monthly_salary: int
    monthly_take_home: int
    monthly_costs: int | None = None
    monthly_after_costs: int | None = None
    variable_costs: int | None = None

    # Display-only percentages of gross (None when gross is 0)
    tax_pct: float | None = None
    insurance_pct: float | None = None
    tax_and_insurance_pct: float | None = None
    net_pct: float | None = None


@dataclass(frozen=True)
class Comparison:
    monthly_take_home: int
    baseline_monthly_take_home: int
    difference: int
    percentage_change: float | None  # None when the baseline is 0


def _validate_amount(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def _pct(amount: int, gross: int) -> float | None:
    if gross == 0:
        return None
    return amount / gross * 100


def calculate_take_home(
    gross_income: int,
    dependents: int = 0,
    costs: MonthlyCostPolicy | None = None,
    regime: TaxRegime = DEFAULT_REGIME,
) -> TakeHomeResult:
    """Compute the full tax/insurance/net breakdown for one gross annual income.

    Taxable bases are floored at 0. A zero base is not assessed, so the tax
    or premiums computed on it are 0; positive bases keep the unclamped
    fixed-reduction arithmetic (tax may go negative).

    net_pay is therefore not continuous where a base crosses 0 → 1. At 2
    dependents, 980,000 → 980,001 drops net_pay from 980,000 to 863,801
    (dependent health amounts and the per-capita levy start), and
    1,030,000 → 1,030,001 raises it from 898,180 to 928,181 (the national
    fixed reduction starts).
    """
    _validate_amount("gross_income", gross_income)
    _validate_amount("dependents", dependents)

    deduction = earned_income_deduction(gross_income, regime)
    income_after_deduction = gross_income - deduction
    national_exemption, local_exemption = personal_exemptions(gross_income, regime)

    national_tax_basis = max(0, income_after_deduction - national_exemption)
    if national_tax_basis > 0:
        national = national_tax(national_tax_basis, regime)
        gross_national, surtax, national_total = national.gross, national.surtax, national.total
    else:
        gross_national = surtax = national_total = 0

    local_tax_basis = max(0, income_after_deduction - local_exemption)
    if local_tax_basis > 0:
        local = local_tax(local_tax_basis, regime)
        prefectural, municipal, local_total = local.prefectural, local.municipal, local.total
        health = health_insurance(local_tax_basis, dependents, regime)
        pension = pension_insurance(local_tax_basis, regime)
        unemployment = unemployment_insurance(local_tax_basis, regime)
    else:
        prefectural = municipal = local_total = 0
        health = pension = unemployment = 0

    total_tax = national_total + local_total
    total_insurance = health + pension + unemployment
    total_tax_and_insurance = total_tax + total_insurance
    net_pay = gross_income - total_tax_and_insurance
    monthly_take_home = net_pay // MONTHS_PER_YEAR

    monthly_costs = monthly_after_costs = variable_costs = None
    if costs is not None:
        variable_costs = costs.variable_costs(monthly_take_home)
        monthly_costs = costs.total(monthly_take_home)
        monthly_after_costs = monthly_take_home - monthly_costs

    return TakeHomeResult(
        gross_income=gross_income,
        dependents=dependents,
        earned_income_deduction=deduction,
        income_after_deduction=income_after_deduction,
        national_exemption=national_exemption,
        local_exemption=local_exemption,
        national_tax_basis=national_tax_basis,
        local_tax_basis=local_tax_basis,
        gross_national_tax=gross_national,
        national_surtax=surtax,
        national_tax=national_total,
        prefectural_tax=prefectural,
        municipal_tax=municipal,
        local_tax=local_total,
        health_insurance=health,
        pension_insurance=pension,
        unemployment_insurance=unemployment,
        total_tax=total_tax,
        total_insurance=total_insurance,
        total_tax_and_insurance=total_tax_and_insurance,
        net_pay=net_pay,
        monthly_salary=gross_income // MONTHS_PER_YEAR,
        monthly_take_home=monthly_take_home,
        monthly_costs=monthly_costs,
        monthly_after_costs=monthly_after_costs,
        variable_costs=variable_costs,
        tax_pct=_pct(total_tax, gross_income),
        insurance_pct=_pct(total_insurance, gross_income),
        tax_and_insurance_pct=_pct(total_tax_and_insurance, gross_income),
        net_pct=_pct(net_pay, gross_income),
    )


def compare_monthly(monthly_take_home: int, baseline_monthly_take_home: int) -> Comparison:
    difference = monthly_take_home - baseline_monthly_take_home
    if baseline_monthly_take_home == 0:
        percentage = None
    else:
        percentage = difference / baseline_monthly_take_home * 100
    return Comparison(
        monthly_take_home=monthly_take_home,
        baseline_monthly_take_home=baseline_monthly_take_home,
        difference=difference,
        percentage_change=percentage,
    )


def compare_take_home(
    income: int,
    baseline_income: int,
    dependents: int = 0,
    costs: MonthlyCostPolicy | None = None,
    regime: TaxRegime = DEFAULT_REGIME,
) -> Comparison:
    """Monthly take-home of ``income`` relative to ``baseline_income``.

    Dependents and cost policy are held fixed. ``percentage_change`` is None
    when the baseline take-home is 0.
    """
    result = calculate_take_home(income, dependents, costs, regime)
    baseline = calculate_take_home(baseline_income, dependents, costs, regime)
    return compare_monthly(result.monthly_take_home, baseline.monthly_take_home)


def project_savings(monthly_amount: int, timeframes: list[SavingsTimeframe]) -> list[int]:
    """Cumulative savings of ``monthly_amount`` over each timeframe."""
    return [monthly_amount * t.months for t in timeframes]
