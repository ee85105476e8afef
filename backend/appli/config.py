"""Application settings and validation."""

import os


def _env_flag(name: str, default: str) -> bool:
    raw = os.getenv(name, default).strip().lower()
    if raw not in ("true", "false"):
        raise RuntimeError(f"{name} must be 'true' or 'false', got {raw!r}")
    return raw == "true"


class Settings:
    ENV: str
    HOST: str
    PORT: int
    DATABASE_URL: str
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool
    SQL_ECHO: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.HOST = os.getenv("APPLI_HOST", "127.0.0.1")
        try:
            self.PORT = int(os.getenv("APPLI_PORT", "8080"))
        except ValueError:
            raise RuntimeError("APPLI_PORT must be an integer")
        # default is an in-memory database living as long as the process
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = _env_flag("ALLOW_DEV_CORS", "true")
        self.SQL_ECHO = _env_flag("SQL_ECHO", "false")
        self._validate()

    def _validate(self):
        if not 0 < self.PORT < 65536:
            raise RuntimeError(f"APPLI_PORT out of range: {self.PORT}")
        if not self.DATABASE_URL:
            raise RuntimeError("DATABASE_URL must not be empty")
        if self.LOG_LEVEL not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise RuntimeError(f"unknown LOG_LEVEL: {self.LOG_LEVEL}")


settings = Settings()
