"""
Persistent key/value storage for the notes client (browser localStorage
equivalent), backed by a small JSON file.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Dict, Optional

from inotebook.core.config import settings

_log = logging.getLogger("inotebook.client.storage")

TOKEN_KEY = "token"

TokenProvider = Callable[[], Optional[str]]


class LocalStorage:
    """String key/value store persisted to `path`; every read hits the file."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else Path(settings.notes_storage_file)

    def _load(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(raw or "{}")
        except json.JSONDecodeError:
            _log.warning("Ignoring corrupt storage file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = str(value)
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)

    def token_provider(self, key: str = TOKEN_KEY) -> TokenProvider:
        """Provider that re-reads `key` on every call (never cached)."""
        return lambda: self.get_item(key)


def static_token(token: Optional[str]) -> TokenProvider:
    return lambda: token
