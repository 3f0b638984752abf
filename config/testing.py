SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

STORE_BACKEND = "memory"
STORE_PATH = None
DB_CONFIG = {}
AUTO_INIT_DB = False

POLICY = {}
OTP_TTL_MINUTES = 10
