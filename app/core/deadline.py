# app/core/deadline.py
"""
Deadline context for long-running lifecycle steps.

A Deadline is created once per operation (purge, seed) and handed to every
data-layer call. Before each call we `guard()`:
- if the budget is already spent we raise OperationTimeoutError;
- on Postgres we bound the next statements with a transaction-local
  statement_timeout equal to what is left, so one slow DELETE cannot
  outlive the whole operation.

There is no retry here. Retrying is the caller's decision.
"""

from __future__ import annotations

import logging
import time

from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.errors import OperationTimeoutError

logger = logging.getLogger(__name__)

# Below this we do not bother issuing a statement_timeout; we just fail.
_MIN_STATEMENT_BUDGET_MS = 50


class Deadline:
    def __init__(self, seconds: float, operation: str, *, clock=time.monotonic):
        if seconds <= 0:
            raise ValueError("Deadline budget must be positive")
        self.seconds = float(seconds)
        self.operation = operation
        self._clock = clock
        self._started = clock()

    @property
    def elapsed(self) -> float:
        return self._clock() - self._started

    def remaining(self) -> float:
        return max(0.0, self.seconds - self.elapsed)

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0

    def check(self, step: str) -> None:
        """
        Raise OperationTimeoutError if the budget is spent.
        """
        if self.expired:
            logger.error(
                "Deadline exceeded operation=%s step=%s budget=%.1fs elapsed=%.2fs",
                self.operation,
                step,
                self.seconds,
                self.elapsed,
            )
            raise OperationTimeoutError(
                "Operation timed out",
                f"{self.operation} exceeded its {self.seconds:.0f}s budget at step '{step}'.",
                step=step,
            )

    def guard(self, db: Session, step: str) -> None:
        """
        Check the budget, then bound the upcoming statements on Postgres.

        set_config(..., true) is LOCAL to the current transaction, which is
        what we want: the limit disappears with the transaction.
        """
        self.check(step)
        if db.get_bind().dialect.name != "postgresql":
            return

        budget_ms = int(self.remaining() * 1000)
        if budget_ms < _MIN_STATEMENT_BUDGET_MS:
            raise OperationTimeoutError(
                "Operation timed out",
                f"{self.operation} has no time left for step '{step}'.",
                step=step,
            )
        db.execute(
            text("SELECT set_config('statement_timeout', :ms, true)"),
            {"ms": str(budget_ms)},
        )
