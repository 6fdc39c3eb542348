"""Render every output and push it to the configured repositories."""
import logging
import os
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from runninglog.core.config import Settings
from runninglog.render.charts import render_charts
from runninglog.render.heatmap import render_year_heatmap
from runninglog.services.git_service import GitService
from runninglog.services.run_service import year_has_data
from runninglog.storage.csv_io import export_runs_csv

logger = logging.getLogger(__name__)

CSV_NAME = "running_log.csv"


def render_all(db: Session, settings: Settings, year: Optional[int] = None) -> list[str]:
    year = year or date.today().year
    out_dir = settings.resolved_images_dir
    paths = []
    if year_has_data(db, year):
        paths.append(
            render_year_heatmap(
                db, year, out_dir, levels=settings.heatmap_levels, dark_mode=settings.is_dark_mode
            )
        )
    else:
        logger.info("No runs in %s, skipping heatmap", year)
    paths.extend(render_charts(db, out_dir, year=year, dark_mode=settings.is_dark_mode))
    return paths


def export_csv(db: Session, settings: Settings) -> str:
    os.makedirs(settings.data_dir, exist_ok=True)
    path = os.path.join(settings.data_dir, CSV_NAME)
    export_runs_csv(db, path)
    return path


def publish(db: Session, settings: Settings, year: Optional[int] = None) -> dict[str, bool]:
    """Returns, per configured repository, whether a commit was made."""
    message = f"Update running log {date.today().isoformat()}"
    results: dict[str, bool] = {}

    if settings.repo_dir:
        csv_path = export_csv(db, settings)
        results[settings.repo_dir] = GitService(settings.repo_dir).sync([csv_path], message)
    if settings.miles_repo_dir:
        images = render_all(db, settings, year)
        results[settings.miles_repo_dir] = GitService(settings.miles_repo_dir).sync(images, message)
    if not results:
        logger.warning("No repository configured; set RUNLOG_REPO_DIR or RUNLOG_MILES_REPO_DIR")
    return results
