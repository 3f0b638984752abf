import os

from config.config import DB_CONFIG, policy_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

STORE_BACKEND = os.getenv("STORE_BACKEND", "json")
STORE_PATH = os.getenv("STORE_PATH", "instance/hrms_store.json")

# If enabled with the mysql backend, the key/value table is created on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

POLICY = policy_from_env()
OTP_TTL_MINUTES = int(os.getenv("OTP_TTL_MINUTES", "10"))
