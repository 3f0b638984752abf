import os


class Config:
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "hrms_db")
    DB_TABLE = os.environ.get("DB_TABLE", "kv_store")


def _optional(name: str):
    value = os.environ.get(name)
    return value if value not in (None, "") else None


def policy_from_env() -> dict:
    """Policy overrides; unset options fall back to PolicyConfig defaults."""
    return {
        "paidAllocationDays": _optional("PAID_ALLOCATION_DAYS"),
        "sickAllocationDays": _optional("SICK_ALLOCATION_DAYS"),
        "standardShiftHours": _optional("STANDARD_SHIFT_HOURS"),
        "standardAllowanceAmount": _optional("STANDARD_ALLOWANCE_AMOUNT"),
        "defaultWorkingDays": _optional("DEFAULT_WORKING_DAYS"),
    }


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
    "table": Config.DB_TABLE,
}
