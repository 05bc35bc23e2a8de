# utils/storage.py
import logging
import shutil
import uuid
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urljoin

from fastapi import HTTPException, Request, UploadFile

from config import settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}
PUBLIC_PREFIX = "/uploads"


def upload_root() -> Path:
    return Path(settings.UPLOAD_DIR)


def full_url(request: Request, path: Union[str, None]) -> Union[str, None]:
    if not path:
        return None
    if path.startswith("http://") or path.startswith("https://"):
        return path
    return urljoin(str(request.base_url), path.lstrip("/"))


def _extension(filename: Optional[str]) -> str:
    if not filename or "." not in filename:
        return "bin"
    return filename.rsplit(".", 1)[-1].lower()


def save_upload(file: UploadFile, owner_id: int) -> str:
    """Store an uploaded image under ``<UPLOAD_DIR>/<owner_id>/`` and return its public path."""
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(status_code=400, detail="Invalid file type")

    folder = upload_root() / str(owner_id)
    folder.mkdir(parents=True, exist_ok=True)

    unique_filename = f"{uuid.uuid4()}.{_extension(file.filename)}"
    save_path = folder / unique_filename
    max_bytes = settings.MAX_UPLOAD_MB * 1024 * 1024

    try:
        with open(save_path, "wb") as buffer:
            shutil.copyfileobj(file.file, buffer)
    except OSError as e:
        logger.exception("Failed to store upload %s", save_path)
        raise HTTPException(status_code=500, detail=f"File save error: {e}")
    finally:
        file.file.close()

    if save_path.stat().st_size > max_bytes:
        save_path.unlink()
        raise HTTPException(status_code=400, detail=f"File larger than {settings.MAX_UPLOAD_MB} MB")

    return f"{PUBLIC_PREFIX}/{owner_id}/{unique_filename}"


def owned_upload_path(url: Optional[str], owner_id: int) -> Optional[Path]:
    """Map a public upload URL to its file, only when it lives in ``owner_id``'s folder.

    Foreign URLs, paths escaping the upload root and files stored by another
    profile all map to None.
    """
    if not url or PUBLIC_PREFIX + "/" not in url:
        return None
    relative = url.split(PUBLIC_PREFIX + "/", 1)[1].split("?", 1)[0].split("#", 1)[0]
    owner_dir = (upload_root() / str(owner_id)).resolve()
    path = (upload_root() / relative).resolve()
    if path.parent != owner_dir:
        return None
    return path


def delete_upload(url: Optional[str], owner_id: int) -> bool:
    """Remove a file this app stored for ``owner_id``. Anything else is left alone."""
    path = owned_upload_path(url, owner_id)
    if path is None:
        if url and PUBLIC_PREFIX + "/" in url:
            logger.warning("Refusing to delete %s for profile %s", url, owner_id)
        return False
    if path.is_file():
        path.unlink()
        return True
    return False
