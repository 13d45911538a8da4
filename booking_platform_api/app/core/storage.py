"""
Local file storage for uploaded images.

Uploads are written to ``settings.upload_dir`` under a unique,
timestamp‑based name that keeps the original extension.  Records only
keep the public path ``/uploads/<name>``; the application mounts the
upload directory under that prefix.
"""

import logging
import os
import time
import uuid
from pathlib import Path
from typing import List

from fastapi import UploadFile

from .config import settings


ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/gif"}
PUBLIC_PREFIX = "/uploads"
MAX_FILES_PER_REQUEST = 10

logger = logging.getLogger(__name__)


def get_upload_dir() -> Path:
    """Return the upload directory, creating it if needed."""
    path = Path(settings.upload_dir)
    if not path.is_absolute():
        path = Path(__file__).resolve().parent.parent.parent.parent / path
    path.mkdir(parents=True, exist_ok=True)
    return path


async def save_upload(file: UploadFile) -> str:
    """Validate and persist one uploaded image, returning its public path.

    Raises ``ValueError`` when the content type is not an accepted image
    type or the file exceeds ``settings.max_upload_size``.
    """
    if file.content_type not in ALLOWED_CONTENT_TYPES:
        raise ValueError("Only image uploads are allowed (jpg, png, gif)")
    content = await file.read()
    if len(content) > settings.max_upload_size:
        raise ValueError(
            f"File {file.filename} exceeds the {settings.max_upload_size} byte limit"
        )
    extension = os.path.splitext(file.filename or "")[1].lower()
    name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{extension}"
    (get_upload_dir() / name).write_bytes(content)
    logger.info("Stored upload %s (%d bytes)", name, len(content))
    return f"{PUBLIC_PREFIX}/{name}"


async def save_uploads(files: List[UploadFile]) -> List[str]:
    """Persist several uploads.

    Content types of the whole batch are checked before anything is
    written to disk.
    """
    if len(files) > MAX_FILES_PER_REQUEST:
        raise ValueError(f"At most {MAX_FILES_PER_REQUEST} files per request")
    for f in files:
        if f.content_type not in ALLOWED_CONTENT_TYPES:
            raise ValueError("Only image uploads are allowed (jpg, png, gif)")
    return [await save_upload(f) for f in files]
