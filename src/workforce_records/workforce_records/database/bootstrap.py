from __future__ import annotations

import logging
import re

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z0-9_]+$")


def require_identifier(value: str) -> str:
    # Database and table names are interpolated into DDL, so only plain identifiers are allowed.
    if not _IDENTIFIER_RE.match(value):
        raise ValueError(f"Invalid SQL identifier: {value!r}")
    return value


def ensure_database_exists(config: DBConfig) -> None:
    database = require_identifier(config.database)
    conn = mysql.connector.connect(
        host=config.host,
        port=config.port,
        user=config.user,
        password=config.password,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(config: DBConfig) -> None:
    """Create the key/value table (idempotent: CREATE IF NOT EXISTS)."""
    ensure_database_exists(config)
    table = require_identifier(config.table)

    conn = mysql.connector.connect(
        host=config.host,
        port=config.port,
        user=config.user,
        password=config.password,
        database=config.database,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"""
            CREATE TABLE IF NOT EXISTS `{table}` (
                k VARCHAR(191) NOT NULL PRIMARY KEY,
                v LONGTEXT NOT NULL,
                updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
            ) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
            """
        )
        conn.commit()
    finally:
        conn.close()
    logger.info("key/value schema ready db=%s table=%s", config.database, table)
