from __future__ import annotations

from typing import Any, Optional, Protocol


class KeyValueStore(Protocol):
    """Persistence interface: string key to JSON-serializable value.

    Note: the record repository depends on this interface, never on a concrete backend.
    """

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError
