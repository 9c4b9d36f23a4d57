from .config import Config, db_config_from

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from(Config)

LATE_CUTOFF = "08:30"
ABSENT_CUTOFF = "14:00"
STANDARD_WORKING_DAYS = 22
CLOSURE_TIME = "23:59"
TIMEZONE = "UTC"

CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
