"""Bracket tables and tier lookup shared by every tiered rule."""

import math
from bisect import bisect_left
from dataclasses import dataclass, fields
from typing import Generic, TypeVar

UNBOUNDED = math.inf  # 最上位ティアの上限


class ConfigurationError(ValueError):
    """A bracket table or regime setting violates its invariants."""


@dataclass(frozen=True)
class TaxBracketTier:
    """Marginal tier: rate (basis points) applies to the slice inside the tier."""

    upper_bound: float
    rate: int


@dataclass(frozen=True)
class DeductionBracketTier:
    """Single-tier formula: income × rate / 10,000 + adjustment (rate 0 = flat)."""

    upper_bound: float
    rate: int
    adjustment: int


@dataclass(frozen=True)
class ExemptionBracketTier:
    upper_bound: float
    national: int
    local: int


T = TypeVar("T", TaxBracketTier, DeductionBracketTier, ExemptionBracketTier)

TIER_TYPES = (TaxBracketTier, DeductionBracketTier, ExemptionBracketTier)
_SIGNED_FIELDS = {"adjustment"}  # 給与所得控除の加算額は負もあり得る


def _check_tiers(tiers: tuple) -> None:
    if not tiers:
        return
    tier_type = type(tiers[0])
    if tier_type not in TIER_TYPES:
        raise ConfigurationError(f"unsupported tier type {tier_type.__name__}")
    for i, tier in enumerate(tiers):
        if type(tier) is not tier_type:
            raise ConfigurationError(
                f"tier {i}: expected {tier_type.__name__}, got {type(tier).__name__}"
            )
        for f in fields(tier):
            if f.name == "upper_bound":
                continue
            value = getattr(tier, f.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"tier {i}: {f.name} must be an integer, got {value!r}")
            if value < 0 and f.name not in _SIGNED_FIELDS:
                raise ConfigurationError(f"tier {i}: {f.name} must be non-negative, got {value}")


def _check_bounds(bounds: list[float]) -> None:
    if not bounds:
        raise ConfigurationError("bracket table must have at least one tier")
    if bounds[-1] != UNBOUNDED:
        raise ConfigurationError(
            f"last tier must be unbounded, got upper bound {bounds[-1]!r}"
        )
    previous = -1
    for i, bound in enumerate(bounds[:-1]):
        if isinstance(bound, bool) or not isinstance(bound, int):
            raise ConfigurationError(
                f"tier {i}: upper bound must be an integer, got {bound!r}"
            )
        if bound <= previous:
            raise ConfigurationError(
                f"tier {i}: upper bound {bound} must be greater than {previous}"
            )
        previous = bound


@dataclass(frozen=True)
class BracketTable(Generic[T]):
    """Ascending tiers partitioning [0, ∞) by inclusive upper bound."""

    tiers: tuple[T, ...]

    def __post_init__(self):
        object.__setattr__(self, "tiers", tuple(self.tiers))
        _check_tiers(self.tiers)
        _check_bounds([tier.upper_bound for tier in self.tiers])

    @property
    def bounds(self) -> tuple[float, ...]:
        return tuple(tier.upper_bound for tier in self.tiers)

    def resolve(self, amount: int) -> T:
        """Return the first tier whose upper bound is >= amount."""
        if amount < 0:
            raise ValueError(f"amount must be non-negative, got {amount}")
        return self.tiers[bisect_left(self.bounds, amount)]

    def __len__(self) -> int:
        return len(self.tiers)


def resolve(amount: int, table: BracketTable[T]) -> T:
    """Look up the tier covering ``amount`` in ``table``."""
    return table.resolve(amount)
