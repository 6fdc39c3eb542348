#!/usr/bin/env python3
"""
Command-line front end for the running log.

Usage examples:
  runninglog add 2025-03-01 10.2 00:52:10 --hr 148 --cadence 176 --place Park
  runninglog undo
  runninglog render --year 2025
  runninglog summary
  runninglog export running_log.csv
  runninglog import old_log.csv
  runninglog sync
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime

from runninglog.core.config import settings
from runninglog.core.errors import RunningLogError
from runninglog.core.logging_setup import configure_logging
from runninglog.core.time_utils import time_of_day_for
from runninglog.db import SessionLocal, init_db
from runninglog.schemas.run import RunCreate
from runninglog.services import run_service
from runninglog.services.publish import publish, render_all
from runninglog.storage.csv_io import export_runs_csv, import_runs_csv

logger = logging.getLogger("runninglog")


def cmd_add(db, args) -> int:
    payload = RunCreate(
        date=date.fromisoformat(args.date),
        distance_km=args.distance,
        duration=args.duration,
        pace=args.pace,
        cadence=args.cadence,
        heart_rate=args.hr,
        heart_rate_max=args.hr_max,
        vo2max=args.vo2max,
        temperature=args.temperature,
        humidity=args.humidity,
        time_of_day=args.time_of_day or time_of_day_for(datetime.now().hour),
        place=args.place,
        notes=args.notes,
    )
    run = run_service.create_run(db, payload)
    read = run_service.to_read(run)
    print(f"#{read.id} {read.date} {read.distance_km:.2f} km in {read.duration} ({read.pace})")
    return 0


def cmd_undo(db, args) -> int:
    run = run_service.delete_last_run(db)
    if not run:
        print("Nothing to undo", file=sys.stderr)
        return 1
    print(f"Removed #{run.id} ({run.date}, {float(run.distance_km):.2f} km)")
    return 0


def cmd_render(db, args) -> int:
    for path in render_all(db, settings, args.year):
        print(path)
    return 0


def cmd_summary(db, args) -> int:
    s = run_service.summary(db)
    print(f"Days run:       {s.days_run}")
    print(f"Total distance: {s.total_distance:.2f} km")
    print(f"Average:        {s.avg_distance:.2f} km")
    print(f"Shortest:       {s.min_distance:.2f} km")
    print(f"Longest:        {s.max_distance:.2f} km")
    for r in run_service.yearly_records(db):
        print(f"  {r.year}: {r.total_distance:8.2f} km  {r.days_run:3d} days")
    return 0


def cmd_export(db, args) -> int:
    count = export_runs_csv(db, args.path)
    print(f"Exported {count} runs to {args.path}")
    return 0


def cmd_import(db, args) -> int:
    count = import_runs_csv(db, args.path)
    print(f"Imported {count} runs from {args.path}")
    return 0


def cmd_sync(db, args) -> int:
    results = publish(db, settings, args.year)
    if not results:
        print("No repository configured", file=sys.stderr)
        return 1
    for repo, committed in results.items():
        print(f"{repo}: {'committed' if committed else 'up to date'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="runninglog", description="Log runs and render heatmaps")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Log a run")
    add.add_argument("date", help="YYYY-MM-DD")
    add.add_argument("distance", type=float, help="Distance in km")
    add.add_argument("duration", help="HH:MM:SS or MM:SS")
    add.add_argument("--pace")
    add.add_argument("--cadence", type=int)
    add.add_argument("--hr", type=float, help="Average heart rate")
    add.add_argument("--hr-max", type=float)
    add.add_argument("--vo2max")
    add.add_argument("--temperature", type=float)
    add.add_argument("--humidity", type=float)
    add.add_argument("--time-of-day", choices=["early_morning", "morning", "afternoon", "evening"])
    add.add_argument("--place", help=f"e.g. {', '.join(settings.places)}")
    add.add_argument("--notes")
    add.set_defaults(func=cmd_add)

    sub.add_parser("undo", help="Delete the last logged run").set_defaults(func=cmd_undo)
    sub.add_parser("summary", help="Print totals").set_defaults(func=cmd_summary)

    render = sub.add_parser("render", help="Render heatmap and charts")
    render.add_argument("--year", type=int)
    render.set_defaults(func=cmd_render)

    export = sub.add_parser("export", help="Write all runs to CSV")
    export.add_argument("path")
    export.set_defaults(func=cmd_export)

    imp = sub.add_parser("import", help="Load runs from CSV")
    imp.add_argument("path")
    imp.set_defaults(func=cmd_import)

    sync = sub.add_parser("sync", help="Render, commit and push to the configured repositories")
    sync.add_argument("--year", type=int)
    sync.set_defaults(func=cmd_sync)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    init_db()
    db = SessionLocal()
    try:
        return args.func(db, args)
    except (RunningLogError, ValueError) as e:
        logger.error("%s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
