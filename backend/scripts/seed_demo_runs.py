from datetime import date, timedelta
import random

from runninglog.db import SessionLocal, init_db
from runninglog.models.run import RunData
from runninglog.core.time_utils import compute_pace


def clear_recent_runs(db, days: int = 120) -> None:
    """Delete runs in the last N days so we can reseed cleanly."""
    cutoff = date.today() - timedelta(days=days)
    db.query(RunData).filter(RunData.date >= cutoff).delete()
    db.commit()


def seed_demo_runs(db, weeks: int = 12) -> None:
    """Insert a block of demo runs: easy Tue, tempo Thu, long Sun."""
    today = date.today()
    start_day = today - timedelta(weeks=weeks - 1)

    runs_to_add = []

    for week in range(weeks):
        week_start = start_day + timedelta(weeks=week)

        for offset, lo, hi, pace_s, time_of_day, notes in [
            (1, 6.0, 10.0, 330, "early_morning", "Easy aerobic run."),
            (3, 8.0, 14.0, 290, "evening", "Tempo."),
            (6, 16.0, 30.0, 345, "morning", "Long run."),
        ]:
            d = week_start + timedelta(days=offset)
            # Skip future days
            if d > today:
                continue

            dist = round(random.uniform(lo, hi), 2)
            duration_seconds = int(dist * pace_s)

            runs_to_add.append(
                RunData(
                    date=d,
                    distance_km=dist,
                    duration_seconds=duration_seconds,
                    pace=compute_pace(duration_seconds, dist),
                    heart_rate=random.randint(135, 165),
                    cadence=random.randint(168, 182),
                    time_of_day=time_of_day,
                    notes=notes,
                )
            )

    if runs_to_add:
        db.add_all(runs_to_add)
        db.commit()

    print(f"Seeded {len(runs_to_add)} demo runs")


def main():
    init_db()
    db = SessionLocal()
    try:
        clear_recent_runs(db, days=150)
        seed_demo_runs(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
