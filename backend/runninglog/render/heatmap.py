"""Calendar heatmap of one year of running, GitHub contribution style.

Layout and color mapping are plain functions so they can be checked
without drawing anything; :func:`draw_heatmap` turns them into a PNG.
"""
import calendar
import logging
import math
import os
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from matplotlib import colors as mcolors

from runninglog.core.constants import (
    CELL_PADDING,
    CELL_SIZE,
    DARK_PALETTE,
    DAY_LABEL_WIDTH,
    HEATMAP_DPI,
    LEGEND_HEIGHT,
    LIGHT_PALETTE,
    MONTH_LABELS,
    TOP_LABEL_HEIGHT,
    WEEKDAY_LABELS,
)
from runninglog.services.run_service import daily_distances

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cell:
    date: date
    col: int
    row: int  # 0 = Monday
    x: int
    y: int


def days_in_year(year: int) -> int:
    return 366 if calendar.isleap(year) else 365


def first_weekday(year: int) -> int:
    """Weekday of Jan 1 with Monday = 0."""
    return date(year, 1, 1).weekday()


def column_count(year: int) -> int:
    return math.ceil((first_weekday(year) + days_in_year(year)) / 7)


def cell_origin(col: int, row: int) -> tuple[int, int]:
    step = CELL_SIZE + CELL_PADDING
    return DAY_LABEL_WIDTH + col * step, TOP_LABEL_HEIGHT + row * step


def layout_year(year: int) -> list[Cell]:
    """Place every day of the year on the week grid, Jan 1 first."""
    offset = first_weekday(year)
    start = date(year, 1, 1)
    cells = []
    for i in range(days_in_year(year)):
        col, row = divmod(i + offset, 7)
        x, y = cell_origin(col, row)
        cells.append(Cell(start + timedelta(days=i), col, row, x, y))
    return cells


def month_label_columns(year: int) -> list[tuple[str, int]]:
    """Column of each month label: the first column whose Monday is in that month."""
    offset = first_weekday(year)
    start = date(year, 1, 1)
    labels = []
    for month in range(1, 13):
        days_before = (date(year, month, 1) - start).days
        labels.append((MONTH_LABELS[month - 1], math.ceil((offset + days_before) / 7)))
    return labels


def image_size(year: int) -> tuple[int, int]:
    step = CELL_SIZE + CELL_PADDING
    width = DAY_LABEL_WIDTH + column_count(year) * step + CELL_PADDING
    height = TOP_LABEL_HEIGHT + 7 * step + LEGEND_HEIGHT
    return width, height


def palette(dark_mode: bool) -> dict:
    return DARK_PALETTE if dark_mode else LIGHT_PALETTE


def interpolate_color(low: str, high: str, t: float) -> str:
    """Linear interpolation between two colors, t in [0, 1]."""
    t = min(1.0, max(0.0, t))
    lo = mcolors.to_rgb(low)
    hi = mcolors.to_rgb(high)
    return mcolors.to_hex(tuple(a + (b - a) * t for a, b in zip(lo, hi)))


def distance_bucket(distance: float, max_distance: float, levels: int) -> int:
    """0 for no running, otherwise 1..levels by share of the year's best day."""
    if distance <= 0 or max_distance <= 0:
        return 0
    ratio = min(1.0, distance / max_distance)
    return max(1, math.ceil(ratio * levels))


def cell_color(distance: float, max_distance: float, levels: int = 4, dark_mode: bool = False) -> str:
    colors = palette(dark_mode)
    bucket = distance_bucket(distance, max_distance, levels)
    if bucket == 0:
        return colors["empty"]
    return interpolate_color(colors["low"], colors["high"], (bucket - 1) / (levels - 1))


def draw_heatmap(
    year: int,
    distances: dict[date, float],
    out_path: str,
    levels: int = 4,
    dark_mode: bool = False,
    title: Optional[str] = None,
) -> str:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    from matplotlib.patches import Rectangle

    colors = palette(dark_mode)
    max_distance = max(distances.values(), default=0.0)
    width, height = image_size(year)

    fig = plt.figure(figsize=(width / HEATMAP_DPI, height / HEATMAP_DPI), dpi=HEATMAP_DPI)
    fig.patch.set_facecolor(colors["background"])
    # One axes covering the whole figure, in pixel units with y pointing down
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.axis("off")

    text_kw = {"color": colors["text"], "fontsize": 7}

    for row, label in WEEKDAY_LABELS.items():
        _, y = cell_origin(0, row)
        ax.text(2, y + CELL_SIZE / 2, label, va="center", ha="left", **text_kw)

    for label, col in month_label_columns(year):
        x, _ = cell_origin(col, 0)
        ax.text(x, TOP_LABEL_HEIGHT - 6, label, va="bottom", ha="left", **text_kw)

    if title:
        ax.text(DAY_LABEL_WIDTH, 4, title, va="top", ha="left", color=colors["text"], fontsize=8)

    for cell in layout_year(year):
        color = cell_color(distances.get(cell.date, 0.0), max_distance, levels, dark_mode)
        ax.add_patch(Rectangle((cell.x, cell.y), CELL_SIZE, CELL_SIZE, facecolor=color, linewidth=0))

    # Legend: Less [] [] [] More
    legend_y = height - LEGEND_HEIGHT + (LEGEND_HEIGHT - CELL_SIZE) / 2
    step = CELL_SIZE + CELL_PADDING
    legend_x = width - (levels + 1) * step - 30
    ax.text(legend_x - 4, legend_y + CELL_SIZE / 2, "Less", va="center", ha="right", **text_kw)
    swatches = [colors["empty"]] + [
        interpolate_color(colors["low"], colors["high"], i / (levels - 1)) for i in range(levels)
    ]
    for i, color in enumerate(swatches):
        ax.add_patch(Rectangle((legend_x + i * step, legend_y), CELL_SIZE, CELL_SIZE, facecolor=color, linewidth=0))
    ax.text(legend_x + len(swatches) * step + 2, legend_y + CELL_SIZE / 2, "More", va="center", ha="left", **text_kw)

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    try:
        fig.savefig(out_path, dpi=HEATMAP_DPI, facecolor=fig.get_facecolor())
    finally:
        plt.close(fig)
    logger.info("Wrote heatmap for %s to %s", year, out_path)
    return out_path


def heatmap_title(year: int, distances: dict[date, float]) -> str:
    total = sum(distances.values())
    return f"{year}: {total:.1f} km over {len(distances)} days"


def render_year_heatmap(db, year: int, out_dir: str, levels: int = 4, dark_mode: bool = False) -> str:
    distances = daily_distances(db, year)
    out_path = os.path.join(out_dir, f"heatmap_{year}.png")
    return draw_heatmap(
        year,
        distances,
        out_path,
        levels=levels,
        dark_mode=dark_mode,
        title=heatmap_title(year, distances),
    )
