"""Chart generation for take-home scenario results."""

import platform
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from takehome_jp.takehome import MONTHS_PER_YEAR, TakeHomeResult

COMPONENT_COLORS = {
    "tax": "#d62728",        # red
    "insurance": "#ff7f0e",  # orange
    "take_home": "#2ca02c",  # green
}


def _setup_japanese_font():
    """Configure matplotlib to use a Japanese font (¥ and labels)."""
    system = platform.system()
    if system == "Darwin":
        font_family = "Hiragino Sans"
    elif system == "Linux":
        font_family = "Noto Sans CJK JP"
    else:
        font_family = "sans-serif"
    plt.rcParams["font.family"] = font_family
    plt.rcParams["axes.unicode_minus"] = False


def _format_man_axis(ax: plt.Axes):
    """Y axis in yen with 万円 labels on the right."""
    ax.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: f"¥{x:,.0f}")
    )
    ax_right = ax.secondary_yaxis("right")
    ax_right.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: f"{x / 10000:,.0f}万" if x != 0 else "0")
    )


def plot_take_home(results: list[TakeHomeResult], output_path: Path, name: str = "") -> Path:
    """Generate a stacked bar chart of monthly tax / insurance / take-home.

    Args:
        results: one TakeHomeResult per income scenario.
        output_path: directory to save the PNG.
        name: optional suffix for the output filename (e.g. "2" → "takehome-2.png").

    Returns:
        Path to the generated PNG file.
    """
    if not results:
        raise ValueError("No results for take-home chart")
    _setup_japanese_font()

    labels = [f"¥{r.gross_income // 1_000_000}M" for r in results]
    tax = [r.total_tax / MONTHS_PER_YEAR for r in results]
    insurance = [r.total_insurance / MONTHS_PER_YEAR for r in results]
    take_home = [r.monthly_take_home for r in results]

    fig, ax = plt.subplots(figsize=(12, 7))
    x = range(len(results))
    ax.bar(x, take_home, color=COMPONENT_COLORS["take_home"], label="手取り")
    ax.bar(x, insurance, bottom=take_home, color=COMPONENT_COLORS["insurance"], label="社会保険料")
    ax.bar(
        x, tax,
        bottom=[t + i for t, i in zip(take_home, insurance)],
        color=COMPONENT_COLORS["tax"], label="税金",
    )

    for i, r in enumerate(results):
        if r.net_pct is not None:
            ax.annotate(
                f"{r.net_pct:.1f}%",
                xy=(i, take_home[i] / 2),
                ha="center", va="center", fontsize=10, color="white", fontweight="bold",
            )

    ax.set_xticks(list(x))
    ax.set_xticklabels(labels)
    ax.set_xlabel("額面年収")
    ax.set_ylabel("月額（円）")
    ax.set_title(f"月額の内訳（扶養{results[0].dependents}人）")
    ax.legend(loc="upper left")
    ax.grid(True, axis="y", alpha=0.3)
    _format_man_axis(ax)

    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"takehome{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath
