"""Shared application constants.

Heatmap geometry is in pixels at 100 dpi so the numbers match what ends up
in the PNG.
"""

# Time-of-day buckets, keyed by the first hour that belongs to them
TIME_OF_DAY_STARTS = [
    (0, "early_morning"),
    (9, "morning"),
    (12, "afternoon"),
    (18, "evening"),
]

# Heatmap cell layout
CELL_SIZE = 12
CELL_PADDING = 2
DAY_LABEL_WIDTH = 30
TOP_LABEL_HEIGHT = 30
LEGEND_HEIGHT = 24
HEATMAP_DPI = 100

# Monday-first, only these rows get a label
WEEKDAY_LABELS = {0: "Mon", 2: "Wed", 4: "Fri"}
MONTH_LABELS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

# Colors as (empty, low, high, text, background)
LIGHT_PALETTE = {
    "empty": "#ebedf0",
    "low": "#9be9a8",
    "high": "#216e39",
    "text": "#24292f",
    "background": "#ffffff",
}
DARK_PALETTE = {
    "empty": "#2d333b",
    "low": "#0e4429",
    "high": "#39d353",
    "text": "#c9d1d9",
    "background": "#0d1117",
}

# Columns written by the CSV exporter, in order
CSV_COLUMNS = [
    "date",
    "distance_km",
    "duration",
    "pace",
    "cadence",
    "heart_rate",
    "heart_rate_max",
    "vo2max",
    "temperature",
    "humidity",
    "time_of_day",
    "place",
    "notes",
]
