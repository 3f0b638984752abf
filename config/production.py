import os

from config.config import DB_CONFIG, policy_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
STORE_PATH = os.getenv("STORE_PATH", "instance/hrms_store.json")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

POLICY = policy_from_env()
OTP_TTL_MINUTES = int(os.getenv("OTP_TTL_MINUTES", "10"))
