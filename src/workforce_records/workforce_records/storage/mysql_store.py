from __future__ import annotations

import json
from typing import Any, Optional

from ..core.exceptions import StoreCorruptedError
from ..database.bootstrap import require_identifier
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .base import KeyValueStore


class MySQLStore(KeyValueStore):
    """Key/value rows in a single MySQL table, values stored as JSON text."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._table = require_identifier(conn_factory.config.table)

    def get(self, key: str) -> Optional[Any]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT v FROM `{self._table}` WHERE k=%s", (key,))
            row = fetchone(cur)
            if not row:
                return None
            try:
                return json.loads(row["v"])
            except json.JSONDecodeError as e:
                raise StoreCorruptedError(f"Value for key {key!r} is not valid JSON") from e

    def set(self, key: str, value: Any) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO `{self._table}`(k, v) VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE v=VALUES(v)
                """,
                (key, json.dumps(value)),
            )

    def delete(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM `{self._table}` WHERE k=%s", (key,))
