"""Regime constants and caller-side cost policy."""

import math
from dataclasses import dataclass, field, fields

from takehome_jp.brackets import (
    UNBOUNDED,
    BracketTable,
    ConfigurationError,
    DeductionBracketTier,
    ExemptionBracketTier,
    TaxBracketTier,
)

BASIS_POINTS = 10_000  # 10,000 = 100%

# 所得税の速算表（上限は閾値を含む, 税率はbp）
# ¥0-1,949,999: 5% / -3,299,999: 10% / -6,949,999: 20% / -8,999,999: 23%
# -17,999,999: 33% / -39,999,999: 40% / ¥40,000,000以上: 45%
_INCOME_TAX_BRACKETS = (
    TaxBracketTier(1_949_999, 500),
    TaxBracketTier(3_299_999, 1000),
    TaxBracketTier(6_949_999, 2000),
    TaxBracketTier(8_999_999, 2300),
    TaxBracketTier(17_999_999, 3300),
    TaxBracketTier(39_999_999, 4000),
    TaxBracketTier(UNBOUNDED, 4500),
)

# 給与所得控除 (上限, 率bp, 加算額)
_EARNED_INCOME_DEDUCTION_BRACKETS = (
    DeductionBracketTier(1_624_999, 0, 550_000),       # 一律55万
    DeductionBracketTier(1_799_999, 4000, -100_000),   # 40% - 10万
    DeductionBracketTier(3_599_999, 3000, 80_000),     # 30% + 8万
    DeductionBracketTier(6_599_999, 2000, 440_000),    # 20% + 44万
    DeductionBracketTier(8_499_999, 1000, 1_100_000),  # 10% + 110万
    DeductionBracketTier(UNBOUNDED, 0, 1_950_000),     # 上限195万
)

# 基礎控除 (上限, 所得税, 住民税)
_PERSONAL_EXEMPTION_BRACKETS = (
    ExemptionBracketTier(23_999_999, 480_000, 430_000),
    ExemptionBracketTier(24_499_999, 320_000, 290_000),
    ExemptionBracketTier(24_999_999, 160_000, 150_000),
    ExemptionBracketTier(UNBOUNDED, 0, 0),
)

# TaxRegimeのテーブル項目 → ティア型
TABLE_TIER_TYPES = {
    "income_tax_brackets": TaxBracketTier,
    "earned_income_deduction_brackets": DeductionBracketTier,
    "personal_exemption_brackets": ExemptionBracketTier,
}


@dataclass(frozen=True)
class TaxRegime:
    """Every constant of the modeled regime (rates in basis points, amounts in yen)."""

    income_tax_brackets: BracketTable[TaxBracketTier] = field(
        default_factory=lambda: BracketTable(_INCOME_TAX_BRACKETS)
    )
    earned_income_deduction_brackets: BracketTable[DeductionBracketTier] = field(
        default_factory=lambda: BracketTable(_EARNED_INCOME_DEDUCTION_BRACKETS)
    )
    personal_exemption_brackets: BracketTable[ExemptionBracketTier] = field(
        default_factory=lambda: BracketTable(_PERSONAL_EXEMPTION_BRACKETS)
    )

    # National income tax
    surtax_rate: int = 210  # 復興特別所得税 2.1%
    national_fixed_reduction: int = 30_000  # 定額減税（所得税）

    # Resident tax (flat, non-marginal)
    prefectural_tax_rate: int = 400
    municipal_tax_rate: int = 600
    per_capita_levy: int = 5_000  # 均等割
    local_fixed_reduction: int = 10_000  # 定額減税（住民税）

    # 国民健康保険（世田谷区）
    health_basic_rate: int = 869
    health_support_rate: int = 280
    health_basic_dependent_amount: int = 49_100
    health_support_dependent_amount: int = 16_500
    health_basic_cap: int = 650_000
    health_support_cap: int = 240_000

    pension_rate: int = 915
    pension_cap: int = 713_700

    unemployment_rate: int = 60

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in TABLE_TIER_TYPES:
                tier_type = TABLE_TIER_TYPES[f.name]
                if not isinstance(value, BracketTable) or type(value.tiers[0]) is not tier_type:
                    raise ConfigurationError(
                        f"{f.name} must be a BracketTable of {tier_type.__name__}"
                    )
            elif isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{f.name} must be an integer, got {value!r}")
            elif value < 0:
                raise ConfigurationError(f"{f.name} must be non-negative, got {value}")


DEFAULT_REGIME = TaxRegime()


@dataclass(frozen=True)
class MonthlyCostPolicy:
    """Monthly spending: fixed yen plus a percentage of monthly take-home."""

    fixed_amount: int = 0
    variable_rate_percent: float = 0.0

    def __post_init__(self):
        if isinstance(self.fixed_amount, bool) or not isinstance(self.fixed_amount, int):
            raise TypeError(
                f"fixed_amount must be an integer, got {type(self.fixed_amount).__name__}"
            )
        if isinstance(self.variable_rate_percent, bool) or not isinstance(
            self.variable_rate_percent, (int, float)
        ):
            raise TypeError(
                "variable_rate_percent must be a number, "
                f"got {type(self.variable_rate_percent).__name__}"
            )
        if self.fixed_amount < 0:
            raise ValueError(f"fixed_amount must be non-negative, got {self.fixed_amount}")
        if self.variable_rate_percent < 0:
            raise ValueError(
                f"variable_rate_percent must be non-negative, got {self.variable_rate_percent}"
            )

    def variable_costs(self, monthly_take_home: int) -> int:
        return math.floor(monthly_take_home * self.variable_rate_percent / 100)

    def total(self, monthly_take_home: int) -> int:
        return self.fixed_amount + self.variable_costs(monthly_take_home)


@dataclass(frozen=True)
class SavingsTimeframe:
    months: int
    label: str  # e.g. "1 Year"
