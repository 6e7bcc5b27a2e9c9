"""File-backed stand-in for browser localStorage.

One JSON object on disk maps keys to string values, exactly as localStorage
would hold them; list helpers take care of the JSON encoding of arrays.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Optional

log = logging.getLogger(__name__)

PLAYERS_KEY = "basketballPlayers"
WORKOUTS_KEY = "basketballWorkouts"
STATS_KEY = "basketballStats"
LIFTS_KEY = "basketballLifts"
USER_EMAIL_KEY = "tideHoopsUserEmail"


class LocalStorage:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        raw = self.path.read_text(encoding="utf-8").strip() or "{}"
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Could not parse {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a JSON object")
        return data

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile("w", dir=self.path.parent, delete=False, encoding="utf-8") as tmp:
            tmp.write(json.dumps(data, indent=2, sort_keys=True) + "\n")
            temp_path = Path(tmp.name)
        temp_path.replace(self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def load_list(self, key: str) -> list[Any]:
        saved = self.get_item(key)
        if not saved:
            return []
        try:
            items = json.loads(saved)
        except json.JSONDecodeError:
            log.warning("discarding unreadable %s entry in %s", key, self.path)
            return []
        return items if isinstance(items, list) else []

    def save_list(self, key: str, items: list[Any]) -> None:
        self.set_item(key, json.dumps(items, default=str))
