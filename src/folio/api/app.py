"""FastAPI application factory: state wiring, routers, and error mapping"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from folio.api import blogs, media, projects
from folio.api.auth import admin_predicate
from folio.config import Settings, configure_logging, load_config
from folio.crud.database import init_db, make_engine
from folio.errors import (
    ContentValidationError,
    NotFoundError,
    SlugConflictError,
    UnauthorizedError,
    UploadRejectedError,
)
from folio.media import LocalMediaStore, MediaStore


logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, details: Optional[list] = None) -> JSONResponse:
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ContentValidationError)
    async def _validation_failed(request: Request, exc: ContentValidationError):
        return _error(400, "Validation failed", [e.as_dict() for e in exc.errors])

    @app.exception_handler(RequestValidationError)
    async def _request_invalid(request: Request, exc: RequestValidationError):
        details = [
            {"path": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        return _error(400, "Validation failed", details)

    @app.exception_handler(UploadRejectedError)
    async def _upload_rejected(request: Request, exc: UploadRejectedError):
        return _error(400, str(exc))

    @app.exception_handler(UnauthorizedError)
    async def _unauthorized(request: Request, exc: UnauthorizedError):
        return _error(401, str(exc))

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        return _error(404, str(exc))

    @app.exception_handler(SlugConflictError)
    async def _slug_conflict(request: Request, exc: SlugConflictError):
        return _error(409, "Blog post with this slug already exists")

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _error(500, "Internal server error")


def create_app(
    settings: Optional[Settings] = None,
    engine=None,
    media_store: Optional[MediaStore] = None,
    ) -> FastAPI:
    """Build the API. Missing collaborators are created from settings."""
    settings = settings or load_config()
    configure_logging(settings.log_level)

    engine = engine if engine is not None else make_engine(settings.db_url)
    init_db(engine)
    if media_store is None:
        media_store = LocalMediaStore(root=Path(settings.media_dir), base_url=settings.media_url)

    app = FastAPI(
        title=settings.app_name,
        description="Blog and project content for the portfolio site",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.media_store = media_store
    app.state.is_authorized = admin_predicate(settings.admin_email)

    origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(blogs.router)
    app.include_router(media.router)
    app.include_router(projects.router)

    if isinstance(media_store, LocalMediaStore) and settings.media_url.startswith("/"):
        app.mount(settings.media_url, StaticFiles(directory=str(media_store.root), check_dir=False), name="media")

    _register_error_handlers(app)
    if not settings.admin_email:
        logger.warning("No admin email configured; all write operations will be rejected")
    if not settings.secret_key:
        logger.warning("No secret key configured; admin tokens cannot be issued or verified")
    return app
