# clubsite/storage.py
"""Object storage for sponsor logos.

Logos live in the `UPLOAD_FOLDER` directory under a generated name and are
served back at `/uploads/<name>`; the sponsor row only keeps that URL.
"""
import logging
import os
import uuid
from typing import Optional

from flask import current_app, url_for
from werkzeug.datastructures import FileStorage

from .exceptions import StoreWriteError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_LOGO_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
}
LOGO_SIGNATURES = {
    "image/jpeg": b"\xff\xd8\xff",
    "image/png": b"\x89PNG\r\n\x1a\n",
}
UPLOAD_ENDPOINT = "uploaded_file"


def _upload_folder() -> str:
    folder = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(folder, exist_ok=True)
    return folder

def validate_logo(file: Optional[FileStorage], max_bytes: int) -> bytes:
    """Return the file body, or raise ValidationError before anything is stored."""
    if file is None or not file.filename:
        raise ValidationError({"logo": "Please upload a logo image."})
    if file.mimetype not in ALLOWED_LOGO_TYPES:
        raise ValidationError({"logo": "Please upload a valid image file (JPEG or PNG)."})
    data = file.read()
    if not data.startswith(LOGO_SIGNATURES[file.mimetype]):
        raise ValidationError({"logo": "Please upload a valid image file (JPEG or PNG)."})
    if len(data) > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        raise ValidationError({"logo": f"Image size should be less than {limit_mb:g}MB."})
    return data

def save_logo(file: Optional[FileStorage]) -> str:
    """Validate and store an uploaded logo; return its public URL."""
    data = validate_logo(file, current_app.config["MAX_LOGO_BYTES"])
    name = f"{uuid.uuid4().hex}.{ALLOWED_LOGO_TYPES[file.mimetype]}"
    path = os.path.join(_upload_folder(), name)
    try:
        with open(path, "wb") as fh:
            fh.write(data)
    except OSError as e:
        logger.error(f"Error writing logo {name}: {e}")
        raise StoreWriteError("Failed to upload logo", details={"name": name}) from e
    logger.info(f"Stored logo {name} ({len(data)} bytes)")
    return url_for(UPLOAD_ENDPOINT, name=name)

def object_name_from_url(url: Optional[str]) -> Optional[str]:
    """Name of the stored object behind one of our URLs, or None for external URLs."""
    if not url:
        return None
    prefix = url_for(UPLOAD_ENDPOINT, name="_")[:-1]  # "/uploads/" under any script root
    if not url.startswith(prefix):
        return None
    name = url[len(prefix):]
    if not name or "/" in name or name.startswith("."):
        return None
    return name

def delete_logo(url: Optional[str]) -> bool:
    """Remove a logo we stored. External URLs and missing objects are left alone."""
    name = object_name_from_url(url)
    if name is None:
        return False
    path = os.path.join(_upload_folder(), name)
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning(f"Logo {name} already gone")
        return False
    logger.info(f"Deleted logo {name}")
    return True
