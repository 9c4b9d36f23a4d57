from __future__ import annotations

import logging
from typing import Any, Dict

from celery import shared_task

from ..common.datetime_utils import closure_date_for, now_local
from ..container import build_container
from ..core.config import EngineConfig
from ..core.constants import CLOSURE_TASK_NAME
from ..main import configure_logging, load_settings

logger = logging.getLogger(__name__)


@shared_task(name=CLOSURE_TASK_NAME)
def run_daily_absence_closure_task() -> Dict[str, Any]:
    """Close the work day: Absent rows for everyone without a record or approved leave.

    The day is taken in the engine timezone. A run that starts after midnight
    (late worker, redelivery) still closes the day whose closure it belongs to.
    """
    settings = load_settings()
    configure_logging(settings)

    engine_config = EngineConfig.from_settings(settings)
    work_date = closure_date_for(now_local(engine_config.timezone), engine_config.closure_time)

    container = build_container(
        db_config=getattr(settings, "DB_CONFIG"),
        engine_config=engine_config,
    )
    created = container.absence_closer.run_daily_absence_closure(today=work_date)

    logger.info("Daily absence closure task for %s finished: %s records created", work_date.isoformat(), created)
    return {"work_date": work_date.isoformat(), "absent_records_created": created}
