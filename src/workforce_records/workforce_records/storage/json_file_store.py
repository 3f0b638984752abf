from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from ..core.exceptions import StoreCorruptedError
from .base import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileStore(KeyValueStore):
    """Single JSON document on disk holding every key.

    Each write rewrites the whole file through a temp file + rename. Concurrent
    writers from other processes are not serialized: last write wins.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        text = self._path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StoreCorruptedError(f"Store file {self._path} is not valid JSON") from e
        if not isinstance(data, dict):
            raise StoreCorruptedError(f"Store file {self._path} must hold a JSON object")
        return data

    def _dump(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self._path)

    def get(self, key: str) -> Optional[Any]:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)
        logger.debug("store write key=%s path=%s", key, self._path)

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)
