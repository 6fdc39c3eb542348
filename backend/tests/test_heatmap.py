from datetime import date

import pytest

from runninglog.core.constants import LIGHT_PALETTE, DARK_PALETTE
from runninglog.render.heatmap import (
    cell_color,
    column_count,
    distance_bucket,
    draw_heatmap,
    interpolate_color,
    layout_year,
    month_label_columns,
)


def _by_date(year):
    return {c.date: c for c in layout_year(year)}


def test_year_starting_monday():
    # 2024-01-01 was a Monday and 2024 is a leap year
    cells = _by_date(2024)
    assert len(cells) == 366
    assert (cells[date(2024, 1, 1)].col, cells[date(2024, 1, 1)].row) == (0, 0)
    assert (cells[date(2024, 12, 31)].col, cells[date(2024, 12, 31)].row) == (52, 1)
    assert column_count(2024) == 53


def test_year_starting_sunday_puts_jan_first_at_bottom():
    cells = _by_date(2023)
    assert len(cells) == 365
    assert (cells[date(2023, 1, 1)].col, cells[date(2023, 1, 1)].row) == (0, 6)
    assert (cells[date(2023, 1, 2)].col, cells[date(2023, 1, 2)].row) == (1, 0)


def test_leap_year_starting_sunday_needs_54_columns():
    # 2012-01-01 was a Sunday; Dec 31 is a Monday in a 54th column
    assert column_count(2012) == 54
    last = _by_date(2012)[date(2012, 12, 31)]
    assert (last.col, last.row) == (53, 0)


def test_rows_match_weekday_and_cells_are_unique():
    cells = layout_year(2025)
    assert all(c.row == c.date.weekday() for c in cells)
    assert len({(c.col, c.row) for c in cells}) == len(cells)
    assert max(c.col for c in cells) == column_count(2025) - 1


def test_pixel_origin_steps_by_cell_and_padding():
    cells = _by_date(2024)
    a = cells[date(2024, 1, 1)]
    b = cells[date(2024, 1, 8)]
    c = cells[date(2024, 1, 2)]
    assert b.x - a.x == c.y - a.y == 14
    assert b.y == a.y


def test_month_labels_start_at_first_full_week():
    labels = dict(month_label_columns(2024))
    assert labels["Jan"] == 0
    # Feb 1 2024 is a Thursday; the next Monday (Feb 5) is column 5
    assert labels["Feb"] == 5
    assert dict(month_label_columns(2023))["Jan"] == 1
    cols = [col for _, col in month_label_columns(2025)]
    assert cols == sorted(cols)


def test_distance_buckets():
    assert distance_bucket(0, 10, 4) == 0
    assert distance_bucket(1, 10, 4) == 1
    assert distance_bucket(5, 10, 4) == 2
    assert distance_bucket(10, 10, 4) == 4
    assert distance_bucket(3, 0, 4) == 0


def test_cell_color_endpoints():
    assert cell_color(0, 10) == LIGHT_PALETTE["empty"]
    assert cell_color(0.5, 10) == LIGHT_PALETTE["low"]
    assert cell_color(10, 10) == LIGHT_PALETTE["high"]
    assert cell_color(0, 10, dark_mode=True) == DARK_PALETTE["empty"]
    assert cell_color(10, 10, dark_mode=True) == DARK_PALETTE["high"]


def test_cell_colors_distinct_per_bucket():
    colors = {cell_color(d, 10, levels=4) for d in (1, 4, 7, 10)}
    assert len(colors) == 4


def test_interpolate_color_clamps():
    assert interpolate_color("#000000", "#ffffff", 0) == "#000000"
    assert interpolate_color("#000000", "#ffffff", 1) == "#ffffff"
    assert interpolate_color("#000000", "#ffffff", 5) == "#ffffff"
    assert interpolate_color("#000000", "#ffffff", -1) == "#000000"


@pytest.mark.parametrize("dark_mode", [False, True])
def test_draw_heatmap_writes_png(tmp_path, dark_mode):
    out = tmp_path / "img" / "heatmap.png"
    distances = {date(2024, 3, 1): 10.0, date(2024, 3, 2): 5.5}
    path = draw_heatmap(2024, distances, str(out), dark_mode=dark_mode, title="2024")
    assert path == str(out)
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_draw_heatmap_with_no_runs(tmp_path):
    out = tmp_path / "empty.png"
    draw_heatmap(2025, {}, str(out))
    assert out.exists()
