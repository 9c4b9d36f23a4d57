"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_LATE_CUTOFF = "08:30"
DEFAULT_ABSENT_CUTOFF = "14:00"
DEFAULT_STANDARD_WORKING_DAYS = 22
DEFAULT_CLOSURE_TIME = "23:59"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_HISTORY_LIMIT = 30
MAX_HISTORY_LIMIT = 500

MONEY_QUANTUM = Decimal("0.01")
RATE_QUANTUM = Decimal("0.0001")
# Largest value a DECIMAL(12,2) column holds.
MAX_MONEY = Decimal("9999999999.99")

CLOSURE_TASK_NAME = "payroll_engine.run_daily_absence_closure"
