from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.orm import Session

from runninglog.core.errors import RunNotFoundError
from runninglog.db import get_db
from runninglog.schemas.run import RunCreate, RunRead, RunUpdate
from runninglog.services import run_service

router = APIRouter(prefix="/runs", tags=["runs"])


@router.post("/", response_model=RunRead)
def create_run(payload: RunCreate, db: Session = Depends(get_db)):
    try:
        run = run_service.create_run(db, payload)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return run_service.to_read(run)


@router.get("/", response_model=list[RunRead])
def list_runs(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    """
    List runs, optionally filtered by [start_date, end_date], newest first.
    """
    runs = run_service.list_runs(db, start_date, end_date)
    return [run_service.to_read(run) for run in runs]


@router.post("/undo", response_model=RunRead)
def undo_last_run(db: Session = Depends(get_db)):
    run = run_service.delete_last_run(db)
    if not run:
        raise HTTPException(status_code=404, detail="No runs to undo")
    return run_service.to_read(run)


@router.put("/{run_id}", response_model=RunRead)
def update_run(run_id: int, payload: RunUpdate, db: Session = Depends(get_db)):
    try:
        run = run_service.update_run(db, run_id, payload)
    except RunNotFoundError:
        raise HTTPException(status_code=404, detail="Run not found")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return run_service.to_read(run)


@router.delete("/{run_id}")
def delete_run(run_id: int, db: Session = Depends(get_db)):
    if not run_service.delete_run(db, run_id):
        raise HTTPException(status_code=404, detail="Run not found")
    return {"message": "Run deleted"}
