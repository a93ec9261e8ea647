# storefront/client/storage.py
import json
import logging
from pathlib import Path
from typing import Any

from storefront.database import read_json, write_json

logger = logging.getLogger(__name__)


class LocalStorage:
    """
    Key/value store with browser localStorage semantics.

    Values are JSON strings keyed by name. With a `path` the whole map is
    persisted to a JSON file on every change; without one it lives in memory.

    `read` / `write` / `remove` never raise: failures are logged and
    `read` falls back to the given default.
    """

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path is not None else None
        self._memory: dict[str, str] = {}

    # ---- raw string API (localStorage.getItem/setItem/removeItem) ----

    def _items(self) -> dict[str, str]:
        if self.path is None:
            return self._memory
        data = read_json(self.path, {})
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a key/value object")
        return data

    def _save(self, items: dict[str, str]) -> None:
        if self.path is None:
            self._memory = items
        else:
            write_json(self.path, items)

    def get_item(self, key: str) -> str | None:
        return self._items().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = dict(self._items())
        items[key] = value
        self._save(items)

    def remove_item(self, key: str) -> None:
        items = dict(self._items())
        if items.pop(key, None) is not None:
            self._save(items)

    # ---- JSON helpers ----

    def read(self, key: str, fallback: Any = None) -> Any:
        try:
            raw = self.get_item(key)
            if not raw:
                return fallback
            return json.loads(raw)
        except (OSError, ValueError) as e:
            logger.warning("Cannot read %r from local storage: %s", key, e)
            return fallback

    def write(self, key: str, value: Any) -> None:
        try:
            self.set_item(key, json.dumps(value, ensure_ascii=False))
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Cannot write %r to local storage: %s", key, e)

    def remove(self, key: str) -> None:
        try:
            self.remove_item(key)
        except (OSError, ValueError) as e:
            logger.warning("Cannot remove %r from local storage: %s", key, e)
