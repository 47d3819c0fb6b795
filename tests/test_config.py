"""Tests for TOML config loading and CLI/config/default resolution."""

import argparse

import pytest
from takehome_jp import DEFAULT_REGIME, MonthlyCostPolicy
from takehome_jp.brackets import UNBOUNDED, ConfigurationError
from takehome_jp.config import (
    DEFAULTS,
    build_regime,
    build_scenarios,
    create_parser,
    load_config,
    parse_baseline,
    parse_yen,
    resolve,
)
from takehome_jp.scenarios import INCOME_SCENARIOS


def _namespace(**kwargs) -> argparse.Namespace:
    ns = argparse.Namespace(**{k: None for k in DEFAULTS})
    for key, value in kwargs.items():
        setattr(ns, key, value)
    return ns


class TestLoadConfig:
    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path / "nope.toml") == {}

    def test_values(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('dependents = 1\nincomes = [12000000, 20000000]\n', encoding="utf-8")
        assert load_config(path) == {"dependents": 1, "incomes": [12_000_000, 20_000_000]}

    def test_single_income_normalized(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("incomes = 12000000\n", encoding="utf-8")
        assert load_config(path)["incomes"] == [12_000_000]

    def test_baseline_disabled(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("baseline = false\n", encoding="utf-8")
        assert load_config(path)["baseline"] is None

    def test_malformed(self, tmp_path, capsys):
        path = tmp_path / "config.toml"
        path.write_text("dependents = = 2\n", encoding="utf-8")
        with pytest.raises(SystemExit):
            load_config(path)
        assert "設定ファイルの読み込みに失敗" in capsys.readouterr().err


class TestResolve:
    def test_defaults(self):
        r = resolve(_namespace(), {})
        assert r == DEFAULTS

    def test_config_over_default(self):
        r = resolve(_namespace(), {"dependents": 0})
        assert r["dependents"] == 0

    def test_cli_over_config(self):
        r = resolve(_namespace(dependents=3), {"dependents": 0})
        assert r["dependents"] == 3

    def test_parser_roundtrip(self):
        args = create_parser("test").parse_args(
            ["--income", "18,000,000", "--income", "20000000", "--baseline", "none", "--dependents", "1"]
        )
        r = resolve(args, {"baseline": 15_000_000})
        assert r["incomes"] == [18_000_000, 20_000_000]
        assert parse_baseline(r["baseline"]) is None
        assert r["dependents"] == 1


class TestParsers:
    def test_parse_yen(self):
        assert parse_yen("15,000,000") == 15_000_000
        assert parse_yen("15_000_000") == 15_000_000

    def test_parse_baseline(self):
        assert parse_baseline(None) is None
        assert parse_baseline("none") is None
        assert parse_baseline(15_000_000) == 15_000_000
        assert parse_baseline("18,000,000") == 18_000_000

    def test_parse_baseline_invalid(self):
        with pytest.raises(ValueError):
            parse_baseline("lots")


class TestBuildRegime:
    def test_no_overrides(self):
        assert build_regime({}) == DEFAULT_REGIME

    def test_scalar_override(self):
        regime = build_regime({"regime": {"pension_cap": 800_000}})
        assert regime.pension_cap == 800_000
        assert regime.pension_rate == DEFAULT_REGIME.pension_rate

    def test_table_override_from_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            "[regime]\nincome_tax_brackets = [[1000000, 500], [inf, 1000]]\n",
            encoding="utf-8",
        )
        regime = build_regime(load_config(path))
        assert regime.income_tax_brackets.bounds == (1_000_000, UNBOUNDED)

    def test_unsorted_table_rejected(self):
        config = {"regime": {"income_tax_brackets": [[2_000_000, 500], [1_000_000, 1000], [float("inf"), 2000]]}}
        with pytest.raises(ConfigurationError):
            build_regime(config)

    def test_bounded_last_tier_rejected(self):
        config = {"regime": {"personal_exemption_brackets": [[1_000_000, 480_000, 430_000]]}}
        with pytest.raises(ConfigurationError, match="unbounded"):
            build_regime(config)

    def test_wrong_arity(self):
        config = {"regime": {"earned_income_deduction_brackets": [[float("inf"), 0]]}}
        with pytest.raises(ConfigurationError, match="3 values"):
            build_regime(config)

    def test_non_integer_rate(self):
        config = {"regime": {"income_tax_brackets": [[float("inf"), 5.5]]}}
        with pytest.raises(ConfigurationError, match="integers"):
            build_regime(config)

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError, match="unknown regime"):
            build_regime({"regime": {"vat_rate": 1000}})

    def test_non_integer_scalar(self):
        with pytest.raises(ConfigurationError):
            build_regime({"regime": {"pension_rate": 9.15}})

    def test_regime_not_a_table(self):
        with pytest.raises(ConfigurationError, match="must be a table"):
            build_regime({"regime": 5})

    def test_negative_scalar(self):
        with pytest.raises(ConfigurationError, match="non-negative"):
            build_regime({"regime": {"health_basic_cap": -1}})

    def test_negative_tier_rate(self):
        config = {"regime": {"income_tax_brackets": [[1_000_000, 500], [float("inf"), -500]]}}
        with pytest.raises(ConfigurationError, match="non-negative"):
            build_regime(config)


class TestBuildScenarios:
    def test_defaults_to_builtin(self):
        assert build_scenarios(DEFAULTS) == INCOME_SCENARIOS

    def test_explicit_incomes(self):
        r = dict(DEFAULTS, incomes=[12_000_000], fixed_costs=500_000, variable_costs=5.0)
        scenarios = build_scenarios(r)
        assert len(scenarios) == 1
        assert scenarios[0].annual_income == 12_000_000
        assert scenarios[0].costs == MonthlyCostPolicy(500_000, 5.0)

    def test_configured_costs_apply_to_builtin(self):
        """incomes未指定でも設定した生活費は組み込みシナリオに反映"""
        r = dict(DEFAULTS, fixed_costs=500_000)
        scenarios = build_scenarios(r)
        assert [s.annual_income for s in scenarios] == [s.annual_income for s in INCOME_SCENARIOS]
        assert all(s.costs == MonthlyCostPolicy(500_000, 10.0) for s in scenarios)

    def test_float_fixed_costs(self):
        with pytest.raises(TypeError, match="fixed_amount"):
            build_scenarios(dict(DEFAULTS, incomes=[12_000_000], fixed_costs=750_000.5))
