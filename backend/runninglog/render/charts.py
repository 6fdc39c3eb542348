import logging
import os
from typing import Optional

from runninglog.schemas.stats import MonthlyRecord, YearlyRecord
from runninglog.services.run_service import monthly_records, yearly_records

logger = logging.getLogger(__name__)

BAR_COLOR = "tab:green"
LINE_COLOR = "tab:orange"


def _pyplot():
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    return plt


def _style(dark_mode: bool) -> str:
    return "dark_background" if dark_mode else "ggplot"


def _save(plt, fig, out_path: str) -> str:
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    try:
        fig.tight_layout()
        fig.savefig(out_path, dpi=150)
    finally:
        plt.close(fig)
    logger.info("Wrote chart %s", out_path)
    return out_path


def _monthly_figure(plt, records: list[MonthlyRecord], title: Optional[str]):
    fig, ax = plt.subplots(figsize=(12, 5))

    months = [r.month for r in records]
    ax.bar(months, [r.total_distance for r in records], color=BAR_COLOR, label="Monthly distance (km)")
    ax.set_ylabel("Distance (km)")
    ax.tick_params(axis="x", labelrotation=45)

    ax2 = ax.twinx()
    ax2.plot(
        months,
        [r.cumulative_distance for r in records],
        color=LINE_COLOR,
        marker="o",
        linewidth=1.8,
        label="Cumulative (km)",
    )
    ax2.set_ylabel("Cumulative (km)")
    ax2.grid(False)

    for i, r in enumerate(records):
        ax.annotate(str(r.days_run), (i, r.total_distance), ha="center", va="bottom", fontsize=7)

    ax.set_title(title or "Monthly distance")
    handles = ax.get_legend_handles_labels()
    handles2 = ax2.get_legend_handles_labels()
    ax.legend(handles[0] + handles2[0], handles[1] + handles2[1], loc="upper left")
    return fig


def _yearly_figure(plt, records: list[YearlyRecord]):
    fig, ax = plt.subplots(figsize=(8, 5))

    years = [str(r.year) for r in records]
    ax.bar(years, [r.total_distance for r in records], color=BAR_COLOR, label="Distance (km)")
    ax.set_ylabel("Distance (km)")

    ax2 = ax.twinx()
    ax2.plot(years, [r.days_run for r in records], color=LINE_COLOR, marker="s", label="Days run")
    ax2.set_ylabel("Days run")
    ax2.grid(False)

    ax.set_title("Yearly distance")
    handles = ax.get_legend_handles_labels()
    handles2 = ax2.get_legend_handles_labels()
    ax.legend(handles[0] + handles2[0], handles[1] + handles2[1], loc="upper left")
    return fig


def draw_monthly_chart(
    records: list[MonthlyRecord],
    out_path: str,
    dark_mode: bool = False,
    title: Optional[str] = None,
) -> str:
    """Monthly distance bars with the cumulative distance on a second axis."""
    plt = _pyplot()
    # Style applies to this figure only; global rcParams stay untouched
    with plt.style.context(_style(dark_mode)):
        fig = _monthly_figure(plt, records, title)
        return _save(plt, fig, out_path)


def draw_yearly_chart(records: list[YearlyRecord], out_path: str, dark_mode: bool = False) -> str:
    """Yearly distance bars with days run on a second axis."""
    plt = _pyplot()
    with plt.style.context(_style(dark_mode)):
        fig = _yearly_figure(plt, records)
        return _save(plt, fig, out_path)


def render_charts(db, out_dir: str, year: Optional[int] = None, dark_mode: bool = False) -> list[str]:
    """Render the monthly and yearly charts; charts with no data are skipped."""
    paths = []
    monthly = monthly_records(db, year)
    if monthly:
        name = f"monthly_{year}.png" if year else "monthly.png"
        title = f"Monthly distance {year}" if year else None
        paths.append(draw_monthly_chart(monthly, os.path.join(out_dir, name), dark_mode, title))
    yearly = yearly_records(db)
    if yearly:
        paths.append(draw_yearly_chart(yearly, os.path.join(out_dir, "yearly.png"), dark_mode))
    return paths
