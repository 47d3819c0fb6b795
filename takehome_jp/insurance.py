"""Social insurance premiums assessed on the resident-tax base."""

from takehome_jp.params import BASIS_POINTS, DEFAULT_REGIME, TaxRegime


def _check_base(base: int) -> None:
    if base < 0:
        raise ValueError(f"assessed base must be non-negative, got {base}")


def health_insurance(base: int, dependents: int, regime: TaxRegime = DEFAULT_REGIME) -> int:
    """National health insurance premium (基礎分 + 支援金分).

    Each portion is rate-then-cap: income share plus per-dependent amount,
    capped independently before summing.
    """
    _check_base(base)
    if dependents < 0:
        raise ValueError(f"dependents must be non-negative, got {dependents}")
    basic = (
        base * regime.health_basic_rate // BASIS_POINTS
        + dependents * regime.health_basic_dependent_amount
    )
    support = (
        base * regime.health_support_rate // BASIS_POINTS
        + dependents * regime.health_support_dependent_amount
    )
    return min(basic, regime.health_basic_cap) + min(support, regime.health_support_cap)


def pension_insurance(base: int, regime: TaxRegime = DEFAULT_REGIME) -> int:
    """Pension premium: base capped first, then the rate applied (cap-then-rate)."""
    _check_base(base)
    return min(base, regime.pension_cap) * regime.pension_rate // BASIS_POINTS


def unemployment_insurance(base: int, regime: TaxRegime = DEFAULT_REGIME) -> int:
    _check_base(base)
    return base * regime.unemployment_rate // BASIS_POINTS
