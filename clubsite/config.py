# clubsite/config.py
import os
from typing import Optional

from dotenv import load_dotenv

# Pick up a local `.env` without overriding variables already set.
load_dotenv(override=False)

DEFAULT_MAX_LOGO_BYTES = 5 * 1024 * 1024
DEFAULT_PAGE_SIZE = 12
# Room for the other sponsor form fields around the logo.
FORM_OVERHEAD_BYTES = 64 * 1024


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


class Config:
    """Settings read from CLUB_* environment variables.

    Paths that default into the instance folder are left as None here and
    filled in by `create_app` once the instance path is known.
    """

    def __init__(self):
        self.SECRET_KEY = os.getenv("CLUB_SECRET_KEY", "dev")
        self.SQLALCHEMY_DATABASE_URI: Optional[str] = os.getenv("CLUB_DATABASE_URL")
        self.SQLALCHEMY_TRACK_MODIFICATIONS = False
        self.UPLOAD_FOLDER: Optional[str] = os.getenv("CLUB_UPLOAD_FOLDER")
        self.MAX_LOGO_BYTES = _env_int("CLUB_MAX_LOGO_BYTES", DEFAULT_MAX_LOGO_BYTES)
        self.MAX_CONTENT_LENGTH = self.MAX_LOGO_BYTES + FORM_OVERHEAD_BYTES
        self.FIXTURES_PAGE_SIZE = _env_int("CLUB_FIXTURES_PAGE_SIZE", DEFAULT_PAGE_SIZE)
        self.LOG_LEVEL = os.getenv("CLUB_LOG_LEVEL", "INFO")
        self.LOG_DIR: Optional[str] = os.getenv("CLUB_LOG_DIR")
        self.CLUB_NAME = os.getenv("CLUB_NAME", "Prague Spartans Cricket Club")
        self.SITE_URL = os.getenv("CLUB_SITE_URL", "http://localhost:5000")

    def as_dict(self) -> dict:
        return {k: v for k, v in vars(self).items() if k.isupper()}
