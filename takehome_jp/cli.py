"""CLI entry point: take-home comparison across income scenarios."""

import sys
from pathlib import Path

from takehome_jp.brackets import ConfigurationError
from takehome_jp.config import build_scenarios, parse_args, parse_baseline
from takehome_jp.report import parse_sections, render_report
from takehome_jp.scenarios import SAVINGS_TIMEFRAMES, run_scenarios


def main() -> int:
    """Run all scenarios and print the report. Returns the exit status."""
    try:
        r, regime, _ = parse_args("手取り年収シミュレーション")
    except ConfigurationError as e:
        print(f"税制設定が不正です: {e}", file=sys.stderr)
        return 1

    try:
        sections = parse_sections(r["show"])
        scenarios = build_scenarios(r)
        rows = run_scenarios(
            scenarios,
            dependents=r["dependents"],
            baseline_income=parse_baseline(r["baseline"]),
            regime=regime,
        )
    except (TypeError, ValueError) as e:
        print(f"入力値が不正です: {e}", file=sys.stderr)
        return 1

    print(render_report(rows, SAVINGS_TIMEFRAMES, sections))

    if r["chart"]:
        from takehome_jp.charts import plot_take_home

        print("手取りグラフ生成中...", file=sys.stderr)
        path = plot_take_home([row.result for row in rows], Path(r["chart"]), name=str(r["dependents"]))
        print(f"  → {path}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
