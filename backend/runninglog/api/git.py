from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from runninglog.core.config import Settings, get_settings
from runninglog.core.errors import GitError
from runninglog.db import get_db
from runninglog.services.git_service import GitService
from runninglog.services.publish import publish

router = APIRouter(prefix="/git", tags=["git"])


@router.get("/status")
def git_status(settings: Settings = Depends(get_settings)):
    repos = {}
    for repo_dir in (settings.repo_dir, settings.miles_repo_dir):
        if not repo_dir:
            continue
        git = GitService(repo_dir)
        if not git.is_git_repository():
            repos[repo_dir] = {"is_repository": False}
            continue
        try:
            repos[repo_dir] = {
                "is_repository": True,
                "status": git.status(),
                "unpushed": git.unpushed_commits() if git.has_upstream() else "",
            }
        except GitError as e:
            raise HTTPException(status_code=502, detail=str(e))
    return repos


@router.post("/sync")
def git_sync(
    year: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    if not (settings.repo_dir or settings.miles_repo_dir):
        raise HTTPException(status_code=400, detail="No repository configured")
    try:
        committed = publish(db, settings, year)
    except GitError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"committed": committed}
