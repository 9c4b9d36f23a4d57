import os

from .config import Config, db_config_from

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from(Config)

LATE_CUTOFF = Config.LATE_CUTOFF
ABSENT_CUTOFF = Config.ABSENT_CUTOFF
STANDARD_WORKING_DAYS = Config.STANDARD_WORKING_DAYS
CLOSURE_TIME = Config.CLOSURE_TIME
TIMEZONE = Config.TIMEZONE

CELERY_BROKER_URL = Config.CELERY_BROKER_URL
CELERY_RESULT_BACKEND = Config.CELERY_RESULT_BACKEND

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled, the app applies schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
AUTO_SEED_DB = Config.AUTO_SEED_DB
