"""Data access for logged runs and the statistics derived from them.

Routers, the CLI and the renderers all go through these functions so the
validation rules (positive distance, parseable duration, computed pace)
live in one place.
"""
import logging
import math
from collections import defaultdict
from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from runninglog.core.errors import RunNotFoundError
from runninglog.core.time_utils import compute_pace, hhmmss_to_seconds, seconds_to_hhmmss
from runninglog.models.run import RunData
from runninglog.schemas.run import RunCreate, RunRead, RunUpdate
from runninglog.schemas.stats import MonthlyRecord, RunSummary, YearlyRecord

logger = logging.getLogger(__name__)


def _year_bounds(year: int) -> tuple[date, date]:
    # [Jan 1, next Jan 1)
    return date(year, 1, 1), date(year + 1, 1, 1)


def to_read(run: RunData) -> RunRead:
    return RunRead(
        id=run.id,
        date=run.date,
        distance_km=float(run.distance_km),
        duration=seconds_to_hhmmss(run.duration_seconds),
        pace=run.pace or compute_pace(run.duration_seconds, float(run.distance_km)),
        cadence=run.cadence,
        heart_rate=run.heart_rate,
        heart_rate_max=run.heart_rate_max,
        vo2max=run.vo2max,
        temperature=run.temperature,
        humidity=run.humidity,
        time_of_day=run.time_of_day,
        place=run.place,
        notes=run.notes,
    )


def build_run(payload: RunCreate) -> RunData:
    """Validate a payload and turn it into an unsaved row."""
    if not math.isfinite(payload.distance_km) or payload.distance_km <= 0:
        raise ValueError("distance_km must be a number > 0")
    duration_seconds = hhmmss_to_seconds(payload.duration)

    return RunData(
        date=payload.date,
        distance_km=payload.distance_km,
        duration_seconds=duration_seconds,
        pace=payload.pace or compute_pace(duration_seconds, payload.distance_km),
        cadence=payload.cadence,
        heart_rate=payload.heart_rate,
        heart_rate_max=payload.heart_rate_max,
        vo2max=payload.vo2max,
        temperature=payload.temperature,
        humidity=payload.humidity,
        time_of_day=payload.time_of_day.value if payload.time_of_day else None,
        place=payload.place,
        notes=payload.notes,
    )


def create_run(db: Session, payload: RunCreate) -> RunData:
    run = build_run(payload)
    db.add(run)
    db.commit()
    db.refresh(run)
    logger.info("Logged run %s: %.2f km on %s", run.id, float(run.distance_km), run.date)
    return run


def get_run(db: Session, run_id: int) -> RunData:
    run = db.query(RunData).filter(RunData.id == run_id).first()
    if not run:
        raise RunNotFoundError(run_id)
    return run


def update_run(db: Session, run_id: int, payload: RunUpdate) -> RunData:
    run = get_run(db, run_id)
    update_data = payload.model_dump(exclude_unset=True)

    distance = update_data.get("distance_km")
    if distance is not None and (not math.isfinite(distance) or distance <= 0):
        raise ValueError("distance_km must be a number > 0")

    recompute_pace = "pace" not in update_data and (
        "distance_km" in update_data or "duration" in update_data
    )

    # Required columns can be left alone but not cleared
    for key in ("date", "distance_km", "duration"):
        if key in update_data and update_data[key] is None:
            del update_data[key]

    duration = update_data.pop("duration", None)
    if duration is not None:
        run.duration_seconds = hhmmss_to_seconds(duration)
    if update_data.get("time_of_day") is not None:
        update_data["time_of_day"] = update_data["time_of_day"].value

    # Set other fields directly
    for key, value in update_data.items():
        setattr(run, key, value)

    if recompute_pace:
        run.pace = compute_pace(run.duration_seconds, float(run.distance_km))

    db.commit()
    db.refresh(run)
    return run


def delete_run(db: Session, run_id: int) -> bool:
    run = db.query(RunData).filter(RunData.id == run_id).first()
    if not run:
        return False
    db.delete(run)
    db.commit()
    logger.info("Deleted run %s", run_id)
    return True


def delete_last_run(db: Session) -> Optional[RunData]:
    """Undo the most recent insert. Returns the deleted row, or None if empty."""
    run = db.query(RunData).order_by(RunData.id.desc()).first()
    if not run:
        return None
    db.delete(run)
    db.commit()
    logger.info("Undid run %s (%s)", run.id, run.date)
    return run


def list_runs(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[RunData]:
    query = db.query(RunData)
    if start_date is not None:
        query = query.filter(RunData.date >= start_date)
    if end_date is not None:
        query = query.filter(RunData.date <= end_date)

    # Most recent first
    return query.order_by(RunData.date.desc(), RunData.id.desc()).all()


def load_year(db: Session, year: int) -> dict[date, list[RunData]]:
    start, end = _year_bounds(year)
    runs = (
        db.query(RunData)
        .filter(RunData.date >= start)
        .filter(RunData.date < end)
        .order_by(RunData.date, RunData.id)
        .all()
    )
    grouped: dict[date, list[RunData]] = defaultdict(list)
    for run in runs:
        grouped[run.date].append(run)
    return dict(grouped)


def daily_distances(db: Session, year: int) -> dict[date, float]:
    """Total distance per day for one year; days without runs are absent."""
    start, end = _year_bounds(year)
    rows = (
        db.query(RunData.date, func.sum(RunData.distance_km))
        .filter(RunData.date >= start)
        .filter(RunData.date < end)
        .group_by(RunData.date)
        .all()
    )
    return {d: float(total or 0.0) for d, total in rows}


def year_has_data(db: Session, year: int) -> bool:
    start, end = _year_bounds(year)
    count = (
        db.query(func.count(RunData.id))
        .filter(RunData.date >= start)
        .filter(RunData.date < end)
        .scalar()
    )
    return bool(count)


def summary(db: Session) -> RunSummary:
    total, avg, lo, hi = db.query(
        func.sum(RunData.distance_km),
        func.avg(RunData.distance_km),
        func.min(RunData.distance_km),
        func.max(RunData.distance_km),
    ).one()
    days_run = db.query(func.count(func.distinct(RunData.date))).scalar() or 0

    return RunSummary(
        days_run=days_run,
        total_distance=round(float(total or 0.0), 2),
        avg_distance=round(float(avg or 0.0), 2),
        min_distance=round(float(lo or 0.0), 2),
        max_distance=round(float(hi or 0.0), 2),
    )


def _per_day(db: Session, year: Optional[int] = None) -> dict[date, float]:
    query = db.query(RunData.date, func.sum(RunData.distance_km)).group_by(RunData.date)
    if year is not None:
        start, end = _year_bounds(year)
        query = query.filter(RunData.date >= start).filter(RunData.date < end)
    return {d: float(total or 0.0) for d, total in query.all()}


def monthly_records(db: Session, year: Optional[int] = None) -> list[MonthlyRecord]:
    """Per-month totals with running cumulative values, oldest month first.

    Grouping happens in Python so it works the same on any database backend.
    """
    days: dict[str, int] = defaultdict(int)
    distance: dict[str, float] = defaultdict(float)
    for d, total in _per_day(db, year).items():
        key = f"{d.year:04d}-{d.month:02d}"
        days[key] += 1
        distance[key] += total

    records: list[MonthlyRecord] = []
    cum_days = 0
    cum_distance = 0.0
    for month in sorted(days):
        cum_days += days[month]
        cum_distance += distance[month]
        records.append(
            MonthlyRecord(
                month=month,
                days_run=days[month],
                cumulative_days_run=cum_days,
                total_distance=round(distance[month], 2),
                cumulative_distance=round(cum_distance, 2),
            )
        )
    return records


def yearly_records(db: Session) -> list[YearlyRecord]:
    days: dict[int, int] = defaultdict(int)
    distance: dict[int, float] = defaultdict(float)
    for d, total in _per_day(db).items():
        days[d.year] += 1
        distance[d.year] += total

    records: list[YearlyRecord] = []
    cum_days = 0
    cum_distance = 0.0
    for year in sorted(days):
        cum_days += days[year]
        cum_distance += distance[year]
        records.append(
            YearlyRecord(
                year=year,
                days_run=days[year],
                cumulative_days_run=cum_days,
                total_distance=round(distance[year], 2),
                cumulative_distance=round(cum_distance, 2),
            )
        )
    return records
