# storefront/database.py
import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from fastapi import Depends

from storefront.core.config import Settings, get_settings

# ---------------------------------------------------------
# Flat JSON file store
#
# Every collection is a single JSON array on disk. Mutations are
# read-modify-write of the whole file, so each file gets its own
# lock: two concurrent appends on orders.json are serialized
# instead of overwriting each other's intermediate state.
# ---------------------------------------------------------

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.Lock()
        return lock


def _read_unlocked(path: Path, fallback: Any) -> Any:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        _write_unlocked(path, fallback)
        return fallback
    return json.loads(raw)


def _write_unlocked(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(data, indent=2, ensure_ascii=False)

    # Write next to the target, then swap in atomically
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_json(path: Path, fallback: Any) -> Any:
    """
    Load a JSON document.

    A missing file is created with `fallback` and `fallback` is returned.
    Any other I/O or decoding error propagates.
    """
    with _lock_for(path):
        return _read_unlocked(path, fallback)


def write_json(path: Path, data: Any) -> None:
    """Replace the whole document at `path`."""
    with _lock_for(path):
        _write_unlocked(path, data)


class JsonCollection:
    """
    Append-only collection backed by a JSON array file.

    - Pure file operations, no FastAPI, no business logic.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def ensure(self) -> None:
        """Create the file with an empty array if it does not exist yet."""
        read_json(self.path, [])

    def all(self) -> list[Any]:
        return read_json(self.path, [])

    def append(self, entry: Any) -> Any:
        with _lock_for(self.path):
            collection = _read_unlocked(self.path, [])
            collection.append(entry)
            _write_unlocked(self.path, collection)
        return entry


def create_data_files(settings: Settings) -> None:
    """
    Make sure the writable collections exist.

    This is called once on application startup. products.json is
    never written by the API, only read.
    """
    JsonCollection(settings.orders_file).ensure()
    JsonCollection(settings.messages_file).ensure()


def get_products_collection(settings: Settings = Depends(get_settings)) -> JsonCollection:
    return JsonCollection(settings.products_file)


def get_orders_collection(settings: Settings = Depends(get_settings)) -> JsonCollection:
    return JsonCollection(settings.orders_file)


def get_messages_collection(settings: Settings = Depends(get_settings)) -> JsonCollection:
    return JsonCollection(settings.messages_file)
