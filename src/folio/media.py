"""Media uploads: type/size checks and the stores that hold uploaded bytes"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional
from uuid import uuid4

from folio.errors import UploadRejectedError


logger = logging.getLogger(__name__)

IMAGE_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/jpg":  "jpg",
    "image/png":  "png",
    "image/gif":  "gif",
    "image/webp": "webp",
}
PDF_TYPES: dict[str, str] = {"application/pdf": "pdf"}


def _size_label(n: int) -> str:
    mb = 1024 * 1024
    return f"{n // mb}MB" if n >= mb and n % mb == 0 else f"{n} bytes"


def check_upload(
    content_type: Optional[str],
    size: int,
    allowed: Mapping[str, str],
    max_bytes: int,
    kind: str = "file",
    ) -> str:
    """Return the file extension for content_type, or raise UploadRejectedError."""
    if content_type not in allowed:
        labels = ", ".join(sorted({ext.upper() for ext in allowed.values()}))
        raise UploadRejectedError(f"Invalid {kind} type. Only {labels} files are allowed.")
    if size > max_bytes:
        raise UploadRejectedError(f"File size exceeds {_size_label(max_bytes)} limit")
    if size == 0:
        raise UploadRejectedError("Uploaded file is empty")
    return allowed[content_type]


class MediaStore(ABC):
    @abstractmethod
    def save(self, data: bytes, folder: str, extension: str) -> str:
        """Persist data and return its public URL."""
        raise NotImplementedError


@dataclass
class LocalMediaStore(MediaStore):
    """Writes uploads under root/<folder>/ and serves them below base_url."""
    root: Path
    base_url: str = "/media"

    def save(self, data: bytes, folder: str, extension: str) -> str:
        name = f"{uuid4().hex}.{extension}"
        dest = Path(self.root) / folder / name
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(data)
        logger.info("Stored upload %s (%d bytes)", dest, len(data))
        return f"{self.base_url.rstrip('/')}/{folder}/{name}"


@dataclass
class MemoryMediaStore(MediaStore):
    """Keeps uploads in a dict keyed by URL."""
    base_url: str = "memory://media"
    files: dict[str, bytes] = field(default_factory=dict)

    def save(self, data: bytes, folder: str, extension: str) -> str:
        url = f"{self.base_url.rstrip('/')}/{folder}/{uuid4().hex}.{extension}"
        self.files[url] = data
        return url
