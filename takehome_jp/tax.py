"""Deductions, exemptions, national income tax and resident tax (円, integer)."""

from dataclasses import dataclass

from takehome_jp.brackets import BracketTable, TaxBracketTier
from takehome_jp.params import BASIS_POINTS, DEFAULT_REGIME, TaxRegime


@dataclass(frozen=True)
class NationalTax:
    gross: int    # 累進税額
    surtax: int   # 復興特別所得税
    total: int    # gross + surtax - 定額減税 (may be negative)


@dataclass(frozen=True)
class LocalTax:
    prefectural: int
    municipal: int
    total: int    # 県民税 + 市民税 - 定額減税 - 均等割 (may be negative)


def _check_non_negative(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def earned_income_deduction(gross_income: int, regime: TaxRegime = DEFAULT_REGIME) -> int:
    """Earned income deduction (給与所得控除) for a gross annual income.

    Single-tier lookup: the matched tier's formula applies to the whole income.
    A rate of 0 means the tier's adjustment is the deduction itself.
    """
    tier = regime.earned_income_deduction_brackets.resolve(gross_income)
    if tier.rate == 0:
        return tier.adjustment
    return gross_income * tier.rate // BASIS_POINTS + tier.adjustment


def personal_exemptions(
    gross_income: int, regime: TaxRegime = DEFAULT_REGIME,
) -> tuple[int, int]:
    """Return (national, local) personal exemptions (基礎控除).

    Both phase out to 0 above the top threshold.
    """
    tier = regime.personal_exemption_brackets.resolve(gross_income)
    return tier.national, tier.local


def progressive_tax(taxable_base: int, table: BracketTable[TaxBracketTier]) -> int:
    """Marginal tax on ``taxable_base``.

    Lower tiers are taxed in full at their own rate and the residual inside
    the applicable tier at its rate. The basis-point sum is divided by 10,000
    once at the end.
    """
    _check_non_negative("taxable_base", taxable_base)
    total = 0
    previous_upper = 0
    for tier in table.tiers:
        if taxable_base > tier.upper_bound:
            total += (tier.upper_bound - previous_upper) * tier.rate
            previous_upper = tier.upper_bound
            continue
        total += (taxable_base - previous_upper) * tier.rate
        break
    return total // BASIS_POINTS


def national_tax(taxable_base: int, regime: TaxRegime = DEFAULT_REGIME) -> NationalTax:
    """National income tax with surtax, less the fixed reduction. Not clamped at 0."""
    gross = progressive_tax(taxable_base, regime.income_tax_brackets)
    surtax = gross * regime.surtax_rate // BASIS_POINTS
    return NationalTax(
        gross=gross,
        surtax=surtax,
        total=gross + surtax - regime.national_fixed_reduction,
    )


def local_tax(local_taxable_base: int, regime: TaxRegime = DEFAULT_REGIME) -> LocalTax:
    """Resident tax: flat prefectural + municipal rates on the full base."""
    _check_non_negative("local_taxable_base", local_taxable_base)
    prefectural = local_taxable_base * regime.prefectural_tax_rate // BASIS_POINTS
    municipal = local_taxable_base * regime.municipal_tax_rate // BASIS_POINTS
    return LocalTax(
        prefectural=prefectural,
        municipal=municipal,
        total=prefectural + municipal - regime.local_fixed_reduction - regime.per_capita_levy,
    )
