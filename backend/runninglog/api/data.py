import os
import shutil
import tempfile

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from runninglog.core.config import Settings, get_settings
from runninglog.core.errors import CsvFormatError
from runninglog.db import get_db
from runninglog.services.publish import export_csv
from runninglog.storage.csv_io import import_runs_csv

router = APIRouter(prefix="/data", tags=["data"])


@router.post("/export")
def export_data(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    return {"path": export_csv(db, settings)}


@router.post("/import")
def import_data(file: UploadFile = File(...), db: Session = Depends(get_db)):
    fd, tmp_path = tempfile.mkstemp(suffix=".csv")
    try:
        with os.fdopen(fd, "wb") as out:
            shutil.copyfileobj(file.file, out)
        try:
            count = import_runs_csv(db, tmp_path)
        except CsvFormatError as e:
            raise HTTPException(status_code=422, detail=str(e))
    finally:
        os.remove(tmp_path)
    return {"imported": count}
