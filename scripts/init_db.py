from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.workforce_records.workforce_records.database.bootstrap import apply_schema
from src.workforce_records.workforce_records.database.connection import DBConfig


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))

    apply_schema(config)
    print(f"OK: key/value table ready -> {config.user}@{config.host}:{config.port}/{config.database}.{config.table}")


if __name__ == "__main__":
    main()
