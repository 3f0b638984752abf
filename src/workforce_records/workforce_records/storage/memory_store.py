from __future__ import annotations

import json
from typing import Any, Optional

from .base import KeyValueStore


class MemoryStore(KeyValueStore):
    """Process-local store. Values are round-tripped through JSON like the on-disk backends."""

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, Any]:
        return {k: json.loads(v) for k, v in self._data.items()}
