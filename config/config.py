import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "payroll-engine-secret"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "payroll_db")

    # Attendance cutoffs are HH:MM in the engine timezone.
    LATE_CUTOFF = os.environ.get("LATE_CUTOFF", "08:30")
    ABSENT_CUTOFF = os.environ.get("ABSENT_CUTOFF", "14:00")
    STANDARD_WORKING_DAYS = int(os.environ.get("STANDARD_WORKING_DAYS", "22"))
    CLOSURE_TIME = os.environ.get("CLOSURE_TIME", "23:59")
    TIMEZONE = os.environ.get("TIMEZONE", "UTC")

    CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0")
    CELERY_RESULT_BACKEND = os.environ.get("CELERY_RESULT_BACKEND", CELERY_BROKER_URL)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
    AUTO_SEED_DB = bool(int(os.environ.get("AUTO_SEED_DB", "0")))


def db_config_from(config=Config) -> dict:
    return {
        "host": config.DB_HOST,
        "port": config.DB_PORT,
        "user": config.DB_USER,
        "password": config.DB_PASSWORD,
        "database": config.DB_NAME,
    }
