"""Upload routes for project images and the resume PDF"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from folio.api.auth import require_admin
from folio.api.deps import get_media_store, get_settings
from folio.config import Settings
from folio.errors import NotFoundError, UploadRejectedError
from folio.media import IMAGE_TYPES, PDF_TYPES, MediaStore, check_upload


logger = logging.getLogger(__name__)

router = APIRouter(tags=["Media"])


def _store_upload(
    file: Optional[UploadFile],
    allowed: dict[str, str],
    kind: str,
    folder: str,
    settings: Settings,
    store: MediaStore,
    ) -> dict[str, str]:
    if file is None:
        raise UploadRejectedError("No file provided")
    # at most max_upload_bytes + 1 bytes are read
    data = file.file.read(settings.max_upload_bytes + 1)
    extension = check_upload(file.content_type, len(data), allowed, settings.max_upload_bytes, kind)
    url = store.save(data, folder, extension)
    logger.info("Uploaded %s %s -> %s", kind, file.filename, url)
    return {"url": url}


@router.post("/api/projects/images/upload")
def upload_project_image(
    admin: str = Depends(require_admin),
    file: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
    store: MediaStore = Depends(get_media_store),
    ):
    return _store_upload(file, IMAGE_TYPES, "image", "projects", settings, store)


@router.get("/api/resume")
def get_resume(settings: Settings = Depends(get_settings)):
    if not settings.resume_url:
        raise NotFoundError("Resume not available")
    return {"url": settings.resume_url}


@router.post("/api/resume/upload")
def upload_resume(
    admin: str = Depends(require_admin),
    file: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
    store: MediaStore = Depends(get_media_store),
    ):
    return _store_upload(file, PDF_TYPES, "resume", "resume", settings, store)
