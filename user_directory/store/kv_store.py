"""Local key-value stores holding string values.

`JsonFileStore` keeps every key in one JSON object on disk, similar to how a
browser keeps its local storage per origin. `MemoryStore` is the same
contract without a file.
"""

from __future__ import annotations

import contextlib
import json
import os
from typing import Protocol

from ..errors import PersistenceError
from ..logger import get_logger

_logger = get_logger("kv_store")


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStore:
    """File-backed store; every write rewrites the whole file.

    Reads and writes raise PersistenceError on I/O failure or when the file is
    not a JSON object of strings.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def _read_all(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            raise PersistenceError(f"cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError(f"{self.path} does not hold a JSON object")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: dict[str, str]) -> None:
        tmp_path = f"{self.path}.tmp"
        try:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                os.remove(tmp_path)
            raise PersistenceError(f"cannot write {self.path}: {e}") from e
        _logger.debug("store written: %s (%d keys)", self.path, len(items))

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            items = self._read_all()
        except PersistenceError as e:
            # a corrupt file is replaced rather than blocking every later write
            _logger.warning("discarding unreadable store: %s", e)
            items = {}
        items[key] = str(value)
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if items.pop(key, None) is not None:
            self._write_all(items)
