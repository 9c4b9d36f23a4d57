from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import Paycheck, PayrollRun


class PayrollRepository(Protocol):
    """Persistence for the PayrollRun aggregate and its paychecks."""

    def save_draft(self, run: PayrollRun, paychecks: Sequence[Paycheck]) -> PayrollRun:
        """Persist shell, then paychecks referencing the new run id, then totals.

        All three writes succeed together or not at all.
        """

        raise NotImplementedError

    def get_run(self, run_id: int) -> Optional[PayrollRun]:
        raise NotImplementedError

    def list_runs(self) -> Sequence[PayrollRun]:
        raise NotImplementedError

    def list_paychecks_for_employee(self, employee_id: int) -> Sequence[Paycheck]:
        raise NotImplementedError

    def transition(
        self,
        run_id: int,
        *,
        from_status: PayrollStatus,
        to_status: PayrollStatus,
        approved_by: Optional[int] = None,
        approved_at: Optional[datetime] = None,
    ) -> bool:
        """Move run and paychecks from ``from_status`` to ``to_status``.

        Conditional on the run still being in ``from_status``; returns False
        (and changes nothing) when another writer got there first.
        """

        raise NotImplementedError

    def delete_run(self, run_id: int, *, allowed_statuses: Iterable[PayrollStatus]) -> bool:
        """Delete paychecks then the run, only if the run is in one of ``allowed_statuses``."""

        raise NotImplementedError
