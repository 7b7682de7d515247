from __future__ import annotations

import importlib
import importlib.util
import logging
import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKFLOW"
DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_DATA_DIR = "~/.taskflow"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv() -> None:
    if importlib.util.find_spec("dotenv") is None:
        return
    dotenv = importlib.import_module("dotenv")
    dotenv.load_dotenv()


def _env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _env_level(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


@dataclass
class Settings:
    api_url: str
    data_dir: Path
    log_level: int


def load_settings() -> Settings:
    _load_dotenv()
    return Settings(
        api_url=_env(_k("API_URL"), DEFAULT_API_URL).rstrip("/"),
        data_dir=Path(_env(_k("DATA_DIR"), DEFAULT_DATA_DIR)).expanduser(),
        log_level=_env_level(_k("LOG_LEVEL"), logging.WARNING),
    )
