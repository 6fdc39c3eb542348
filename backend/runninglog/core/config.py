import os

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RUNLOG_", env_file=".env", extra="ignore")

    # Everything generated (db, images, csv exports) lives under here
    data_dir: str = "data"
    # If None, a sqlite file inside data_dir is used
    database_url: str | None = None
    images_dir: str | None = None

    is_dark_mode: bool = True

    # Optional git repositories: one for the log data, one for the images
    repo_dir: str | None = None
    miles_repo_dir: str | None = None

    # Quick-pick places offered by the UI
    places: list[str] = ["Place 1", "Place 2"]

    heatmap_levels: int = 4
    log_level: str = "INFO"

    # Allow empty env strings for optional fields
    @field_validator("database_url", "images_dir", "repo_dir", "miles_repo_dir", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v in ("", None, "null", "None"):
            return None
        return v

    @field_validator("heatmap_levels")
    @classmethod
    def _at_least_two_levels(cls, v):
        if v < 2:
            raise ValueError("heatmap_levels must be >= 2")
        return v

    @property
    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{os.path.join(self.data_dir, 'running_log.db')}"

    @property
    def resolved_images_dir(self) -> str:
        return self.images_dir or os.path.join(self.data_dir, "images")


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency; tests override it with their own Settings."""
    return settings
