from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from runninglog.core.config import Settings, get_settings
from runninglog.db import get_db
from runninglog.render.charts import render_charts
from runninglog.render.heatmap import render_year_heatmap
from runninglog.services.run_service import year_has_data

router = APIRouter(prefix="/images", tags=["images"])


def _heatmap(db: Session, settings: Settings, year: int, dark_mode: Optional[bool]) -> str:
    if not year_has_data(db, year):
        raise HTTPException(status_code=404, detail=f"No runs in {year}")
    return render_year_heatmap(
        db,
        year,
        settings.resolved_images_dir,
        levels=settings.heatmap_levels,
        dark_mode=settings.is_dark_mode if dark_mode is None else dark_mode,
    )


@router.post("/heatmap/{year}")
def render_heatmap(
    year: int,
    dark_mode: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return {"path": _heatmap(db, settings, year, dark_mode)}


@router.get("/heatmap/{year}")
def get_heatmap(
    year: int,
    dark_mode: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return FileResponse(_heatmap(db, settings, year, dark_mode), media_type="image/png")


@router.post("/charts")
def render_trend_charts(
    year: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    paths = render_charts(db, settings.resolved_images_dir, year=year, dark_mode=settings.is_dark_mode)
    return {"paths": paths}
