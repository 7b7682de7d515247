from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

TOKEN_FILENAME = "auth.json"


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False))


def read_json(path: Path) -> Any:
    return json.loads(path.read_text())


class TokenStore:
    """Keeps the API bearer token in ``<data_dir>/auth.json``."""

    def __init__(self, data_dir: Path) -> None:
        self.path = data_dir / TOKEN_FILENAME

    def load(self) -> str | None:
        if not self.path.exists():
            return None
        try:
            payload = read_json(self.path)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable token file %s", self.path)
            return None
        if not isinstance(payload, dict):
            return None
        return payload.get("auth_token") or None

    def save(self, token: str) -> None:
        ensure_dir(self.path.parent)
        write_json(self.path, {"auth_token": token})

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.info("Removed stored auth token")
