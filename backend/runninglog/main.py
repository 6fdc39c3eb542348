from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from runninglog.api.runs import router as runs_router
from runninglog.api.stats import router as stats_router
from runninglog.api.images import router as images_router
from runninglog.api.data import router as data_router
from runninglog.api.git import router as git_router
from runninglog.db import init_db
from runninglog.core.config import Settings, get_settings, settings
from runninglog.core.logging_setup import configure_logging
import os


configure_logging(settings.log_level)

# Ensure data and images directories exist before sqlite opens its file
os.makedirs(settings.data_dir, exist_ok=True)
os.makedirs(settings.resolved_images_dir, exist_ok=True)

app = FastAPI(title="Running Log")

# Allow CORS for the local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create the run_data table on startup
init_db()

app.include_router(runs_router)
app.include_router(stats_router)
app.include_router(images_router)
app.include_router(data_router)
app.include_router(git_router)


@app.get("/")
def root():
    return {"message": "Running log is running"}


@app.get("/config")
def get_config(current: Settings = Depends(get_settings)):
    return {"is_dark_mode": current.is_dark_mode, "places": current.places}
