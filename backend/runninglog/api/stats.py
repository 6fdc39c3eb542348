from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from runninglog.db import get_db
from runninglog.schemas.run import DailyDistance, YearDistances
from runninglog.schemas.stats import MonthlyRecord, RunSummary, YearlyRecord
from runninglog.services import run_service

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/summary", response_model=RunSummary)
def get_summary(db: Session = Depends(get_db)):
    return run_service.summary(db)


@router.get("/monthly", response_model=list[MonthlyRecord])
def get_monthly(year: Optional[int] = Query(None), db: Session = Depends(get_db)):
    return run_service.monthly_records(db, year)


@router.get("/yearly", response_model=list[YearlyRecord])
def get_yearly(db: Session = Depends(get_db)):
    return run_service.yearly_records(db)


@router.get("/years/{year}", response_model=YearDistances)
def get_year(year: int, db: Session = Depends(get_db)):
    distances = run_service.daily_distances(db, year)
    return YearDistances(
        year=year,
        has_data=bool(distances),
        days=[DailyDistance(date=d, distance_km=v) for d, v in sorted(distances.items())],
    )
