"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent


class Settings:
    ENV: str
    HOST: str
    PORT: int
    DATABASE_URL: str
    LOG_LEVEL: str
    ALLOW_CORS: bool
    CORS_ALLOW_ORIGIN_REGEX: str

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.HOST = os.getenv("HOST", "0.0.0.0")
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'cv.db'}")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_CORS = os.getenv("ALLOW_CORS", "true").lower() == "true"
        # reflected back to the caller, so credentials work with any origin
        self.CORS_ALLOW_ORIGIN_REGEX = os.getenv("CORS_ALLOW_ORIGIN_REGEX", ".*")
        raw_port = os.getenv("PORT", "3001")
        try:
            self.PORT = int(raw_port)
        except ValueError:
            raise RuntimeError(f"PORT must be an integer, got {raw_port!r}")
        self._validate()

    def _validate(self):
        if not 0 < self.PORT < 65536:
            raise RuntimeError(f"PORT must be between 1 and 65535, got {self.PORT}")
        if not self.DATABASE_URL.strip():
            raise RuntimeError("DATABASE_URL must not be empty")


settings = Settings()
