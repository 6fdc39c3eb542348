"""CSV import/export of the run log.

The CSV file is what gets committed to the data repository, so the export
is stable: ordered by date then id, ISO dates, HH:MM:SS durations.
"""
import csv
import logging
from datetime import date

from pydantic import ValidationError
from sqlalchemy.orm import Session

from runninglog.core.constants import CSV_COLUMNS
from runninglog.core.errors import CsvFormatError
from runninglog.core.time_utils import seconds_to_hhmmss
from runninglog.models.run import RunData
from runninglog.schemas.run import RunCreate
from runninglog.services.run_service import build_run

logger = logging.getLogger(__name__)


def _fmt(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def run_to_row(run: RunData) -> dict[str, str]:
    return {
        "date": run.date.isoformat(),
        "distance_km": f"{float(run.distance_km):.2f}",
        "duration": seconds_to_hhmmss(run.duration_seconds),
        "pace": _fmt(run.pace),
        "cadence": _fmt(run.cadence),
        "heart_rate": _fmt(run.heart_rate),
        "heart_rate_max": _fmt(run.heart_rate_max),
        "vo2max": _fmt(run.vo2max),
        "temperature": _fmt(run.temperature),
        "humidity": _fmt(run.humidity),
        "time_of_day": _fmt(run.time_of_day),
        "place": _fmt(run.place),
        "notes": _fmt(run.notes),
    }


def export_runs_csv(db: Session, path: str) -> int:
    runs = db.query(RunData).order_by(RunData.date, RunData.id).all()
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for run in runs:
            writer.writerow(run_to_row(run))
    logger.info("Exported %d runs to %s", len(runs), path)
    return len(runs)


def row_to_payload(row: dict[str, str]) -> RunCreate:
    # Blank cells mean "not recorded"
    cleaned = {k: v.strip() for k, v in row.items() if k in CSV_COLUMNS and v and v.strip()}
    if "date" not in cleaned or "distance_km" not in cleaned or "duration" not in cleaned:
        raise ValueError("date, distance_km and duration are required")
    cleaned["date"] = date.fromisoformat(cleaned["date"])
    return RunCreate(**cleaned)


def import_runs_csv(db: Session, path: str) -> int:
    """Insert every row of a CSV export. All-or-nothing."""
    runs = []
    reader = None
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            if not reader.fieldnames or "date" not in reader.fieldnames:
                raise CsvFormatError(1, "missing header row")
            # Header is line 1, first record line 2
            for line, row in enumerate(reader, start=2):
                try:
                    runs.append(build_run(row_to_payload(row)))
                except (ValueError, ValidationError) as e:
                    raise CsvFormatError(line, str(e)) from e
    except (UnicodeDecodeError, csv.Error) as e:
        # The failing line is the one after the last fully read line
        line = reader.line_num + 1 if reader is not None else 1
        raise CsvFormatError(line, f"unreadable CSV: {e}") from e

    db.add_all(runs)
    db.commit()
    logger.info("Imported %d runs from %s", len(runs), path)
    return len(runs)
