"""Celery application for the nightly absence closure.

Run a worker and the beat scheduler with::

    celery -A payroll_engine.scheduler.celery_app worker -B
"""

from __future__ import annotations

from celery import Celery
from celery.schedules import crontab

from ..core.config import EngineConfig
from ..core.constants import CLOSURE_TASK_NAME
from ..main import load_settings


def make_celery(settings=None) -> Celery:
    settings = settings or load_settings()
    engine_config = EngineConfig.from_settings(settings)

    app = Celery(
        "payroll_engine",
        broker=getattr(settings, "CELERY_BROKER_URL", "redis://localhost:6379/0"),
        backend=getattr(settings, "CELERY_RESULT_BACKEND", "redis://localhost:6379/0"),
        include=[f"{__package__}.tasks"],
    )
    app.conf.update(
        task_serializer="json",
        accept_content=["json"],
        result_serializer="json",
        timezone=engine_config.timezone,
        enable_utc=True,
        task_acks_late=True,
        task_time_limit=300,
        result_expires=86400,
        beat_schedule={
            "daily-absence-closure": {
                "task": CLOSURE_TASK_NAME,
                "schedule": crontab(
                    hour=engine_config.closure_time.hour,
                    minute=engine_config.closure_time.minute,
                ),
            },
        },
    )
    return app


celery_app = make_celery()
