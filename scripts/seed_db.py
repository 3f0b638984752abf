from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.workforce_records.workforce_records.container import build_store
from src.workforce_records.workforce_records.records.repository import RecordRepository


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = build_store(
        settings.STORE_BACKEND,
        store_path=getattr(settings, "STORE_PATH", None),
        db_config=getattr(settings, "DB_CONFIG", None),
        auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
    )
    records = RecordRepository(store)

    # First reads write the default dataset back to an empty store.
    users = records.list_users()
    requests = records.list_time_off()
    print(f"OK: Seeded store ({settings.STORE_BACKEND}) -> users={len(users)} time_off={len(requests)}")


if __name__ == "__main__":
    main()
