"""Request-scoped dependencies resolved from application state"""

from typing import Iterator

from fastapi import Request
from sqlmodel import Session

from folio.config import Settings
from folio.media import MediaStore


def get_session(request: Request) -> Iterator[Session]:
    """One session per request; routes commit explicitly after a successful write."""
    with Session(request.app.state.engine) as session:
        yield session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_media_store(request: Request) -> MediaStore:
    return request.app.state.media_store
