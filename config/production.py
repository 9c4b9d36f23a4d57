import os

from .config import Config, db_config_from

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from(Config)

LATE_CUTOFF = Config.LATE_CUTOFF
ABSENT_CUTOFF = Config.ABSENT_CUTOFF
STANDARD_WORKING_DAYS = Config.STANDARD_WORKING_DAYS
CLOSURE_TIME = Config.CLOSURE_TIME
TIMEZONE = Config.TIMEZONE

CELERY_BROKER_URL = Config.CELERY_BROKER_URL
CELERY_RESULT_BACKEND = Config.CELERY_RESULT_BACKEND

LOG_LEVEL = Config.LOG_LEVEL
DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
