"""TOML config loader with CLI > config > default resolution."""

import argparse
import dataclasses
import math
import sys
import tomllib
from pathlib import Path

from takehome_jp.brackets import (
    UNBOUNDED,
    BracketTable,
    ConfigurationError,
)
from takehome_jp.params import TABLE_TIER_TYPES, MonthlyCostPolicy, TaxRegime
from takehome_jp.scenarios import (
    DEFAULT_BASELINE,
    DEFAULT_DEPENDENTS,
    DEFAULT_FIXED_COSTS,
    INCOME_SCENARIOS,
    IncomeScenario,
)

DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {
    "dependents": DEFAULT_DEPENDENTS,
    "baseline": DEFAULT_BASELINE,
    "incomes": [],
    "fixed_costs": DEFAULT_FIXED_COSTS,
    "variable_costs": 10.0,
    "show": "",
    "chart": "",
}


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"設定ファイルの読み込みに失敗: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    # Normalize baseline: false / "none" → None
    if "baseline" in raw:
        v = raw["baseline"]
        if v is False or (isinstance(v, str) and v.strip().lower() == "none"):
            raw["baseline"] = None
    # Normalize incomes: single integer → list
    if "incomes" in raw and isinstance(raw["incomes"], int):
        raw["incomes"] = [raw["incomes"]]
    return raw


def parse_baseline(value) -> int | None:
    """Normalize a baseline setting: integer yen, "none" or None."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    s = str(value).strip().lower()
    if s in ("", "none"):
        return None
    return parse_yen(s)


def parse_yen(s: str) -> int:
    """Parse "15,000,000" / "15_000_000" / "15000000" → 15000000."""
    return int(s.strip().replace(",", "").replace("_", ""))


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared take-home flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="設定ファイルパス (default: config.toml)")
    parser.add_argument("--dependents", type=int, default=None, help=f"扶養人数 (default: {d['dependents']})")
    parser.add_argument("--baseline", type=str, default=None, help=f"比較基準の額面年収・円（noneで比較なし）(default: {d['baseline']:,})")
    parser.add_argument("--income", type=parse_yen, action="append", default=None, dest="incomes", help="試算する額面年収・円（複数指定可、default: 組み込みシナリオ一覧）")
    parser.add_argument("--fixed-costs", type=parse_yen, default=None, help=f"月額固定費・円 (default: {d['fixed_costs']:,})")
    parser.add_argument("--variable-costs", type=float, default=None, help=f"変動費（月額手取りに対する%%）(default: {d['variable_costs']})")
    parser.add_argument("--show", type=str, default=None, help="内訳表示: deductions,tax,insurance,summary のカンマ区切り、またはall (default: 表示なし)")
    parser.add_argument("--chart", type=str, default=None, help="手取りグラフPNGの出力ディレクトリ")
    return parser


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def _parse_bound(value) -> float:
    if isinstance(value, float) and math.isinf(value) and value > 0:
        return UNBOUNDED
    return value


def _build_table(key: str, rows) -> BracketTable:
    tier_type = TABLE_TIER_TYPES[key]
    arity = len(dataclasses.fields(tier_type))
    if not isinstance(rows, list):
        raise ConfigurationError(f"regime.{key} must be an array of tiers")
    tiers = []
    for i, row in enumerate(rows):
        if not isinstance(row, list) or len(row) != arity:
            raise ConfigurationError(
                f"regime.{key}[{i}] must have {arity} values, got {row!r}"
            )
        if any(isinstance(v, bool) or not isinstance(v, int) for v in row[1:]):
            raise ConfigurationError(f"regime.{key}[{i}] values must be integers, got {row!r}")
        tiers.append(tier_type(_parse_bound(row[0]), *row[1:]))
    return BracketTable(tuple(tiers))


def build_regime(config: dict) -> TaxRegime:
    """Build TaxRegime from the optional [regime] table of a loaded config."""
    overrides = config.get("regime", {})
    if not isinstance(overrides, dict):
        raise ConfigurationError(f"regime must be a table, got {overrides!r}")
    field_names = {f.name for f in dataclasses.fields(TaxRegime)}
    unknown = sorted(set(overrides) - field_names)
    if unknown:
        raise ConfigurationError(f"unknown regime setting(s): {', '.join(unknown)}")
    kwargs = {}
    for key, value in overrides.items():
        if key in TABLE_TIER_TYPES:
            kwargs[key] = _build_table(key, value)
        elif isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"regime.{key} must be an integer, got {value!r}")
        else:
            kwargs[key] = value
    return TaxRegime(**kwargs)


def build_scenarios(r: dict) -> tuple[IncomeScenario, ...]:
    """Scenarios from resolved config: explicit incomes, else the built-in list.

    The built-in list keeps its own per-scenario costs unless fixed_costs or
    variable_costs differ from DEFAULTS, in which case every built-in income
    uses the resolved cost policy.
    """
    costs = MonthlyCostPolicy(r["fixed_costs"], r["variable_costs"])
    incomes = r["incomes"]
    if incomes:
        return tuple(IncomeScenario(income, costs) for income in incomes)
    if (r["fixed_costs"], r["variable_costs"]) == (DEFAULTS["fixed_costs"], DEFAULTS["variable_costs"]):
        return INCOME_SCENARIOS
    return tuple(IncomeScenario(s.annual_income, costs) for s in INCOME_SCENARIOS)


def parse_args(description: str) -> tuple[dict, TaxRegime, argparse.Namespace]:
    """Parse CLI args, load config, resolve values.

    Returns (resolved_dict, regime, namespace). Raises ConfigurationError for
    a malformed [regime] table.
    """
    parser = create_parser(description)
    args = parser.parse_args()
    config = load_config(args.config)
    r = resolve(args, config)
    regime = build_regime(config)
    return r, regime, args
