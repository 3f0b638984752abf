"""Backup the record store.

Note: writes every collection plus the session snapshot to one JSON file,
whatever backend is configured.
"""

from __future__ import annotations

import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.workforce_records.workforce_records.container import build_store
from src.workforce_records.workforce_records.core.constants import ATTENDANCE_KEY, SESSION_KEY, TIMEOFF_KEY, USERS_KEY


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = build_store(
        settings.STORE_BACKEND,
        store_path=getattr(settings, "STORE_PATH", None),
        db_config=getattr(settings, "DB_CONFIG", None),
    )

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"hrms_store_{ts}.json"

    data = {key: store.get(key) for key in (USERS_KEY, ATTENDANCE_KEY, TIMEOFF_KEY, SESSION_KEY)}
    out_file.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
