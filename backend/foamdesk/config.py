"""Runtime configuration read from the environment (and ``.env`` files)."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_backend_dir = Path(__file__).resolve().parent.parent
_project_root = _backend_dir.parent

STORAGE_FILE = "file"
STORAGE_MEMORY = "memory"

DEFAULT_DATA_DIR = Path.home() / ".foamdesk"
DEFAULT_CORS_ORIGINS = ("http://localhost:3000",)


@dataclass(frozen=True)
class AppConfig:
    """Where records live and how the HTTP surface is exposed.

    Environment variables:
        FOAMDESK_DATA_DIR: Directory for the JSON record files.
        FOAMDESK_STORAGE: ``file`` (default) or ``memory``.
        FOAMDESK_CORS_ORIGINS: Comma-separated allowed origins.
        FOAMDESK_LOG_LEVEL: Logging level name, default ``INFO``.
    """

    data_dir: Path = DEFAULT_DATA_DIR
    storage: str = STORAGE_FILE
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppConfig:
        env = os.environ if environ is None else environ

        storage = env.get("FOAMDESK_STORAGE", STORAGE_FILE).strip().lower()
        if storage not in (STORAGE_FILE, STORAGE_MEMORY):
            msg = (
                f"FOAMDESK_STORAGE must be '{STORAGE_FILE}' or '{STORAGE_MEMORY}', "
                f"got '{storage}'"
            )
            raise ValueError(msg)

        data_dir = env.get("FOAMDESK_DATA_DIR")
        origins = env.get("FOAMDESK_CORS_ORIGINS")
        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
            storage=storage,
            cors_origins=(
                tuple(o.strip() for o in origins.split(",") if o.strip())
                if origins
                else DEFAULT_CORS_ORIGINS
            ),
            log_level=env.get("FOAMDESK_LOG_LEVEL", "INFO").upper(),
        )


def load_config() -> AppConfig:
    """Load ``.env`` from the project root or ``backend/``, then read the environment."""
    load_dotenv(_project_root / ".env")
    load_dotenv(_backend_dir / ".env")
    return AppConfig.from_env()


def configure_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
