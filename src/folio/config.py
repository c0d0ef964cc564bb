"""Application configuration: settings schema, config.yaml loader, and logging setup"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseModel):
    app_name:          str = "Portfolio API"
    db_url:            str = "sqlite:///folio.db"
    admin_email:       str = Field(default="", description="The single email allowed to manage content")
    secret_key:        str = Field(default="", description="HS256 key for admin session tokens; unset rejects every token")
    token_ttl_minutes: int = Field(default=60 * 12, ge=1, description="Lifetime of issued admin tokens")
    media_dir:         str = Field(default="media", description="Directory for locally stored uploads")
    media_url:         str = Field(default="/media", description="Public URL prefix for stored uploads")
    max_upload_bytes:  int = Field(default=10 * 1024 * 1024, ge=1, description="Upload size ceiling")
    resume_url:        str = Field(default="", description="Public URL of the current resume PDF")
    log_level:         str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    cors_origins:      str = Field(default="*", description="Comma-separated allowed CORS origins")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then FOLIO_<FIELD> env vars, then non-None overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"FOLIO_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)
