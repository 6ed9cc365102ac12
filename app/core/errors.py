# app/core/errors.py
"""
Typed errors raised by the tenant data lifecycle (purge / seed).

Every error carries a stable `code` so the HTTP layer can render
`{error, details, code}` and clients can branch on it.

`translate_db_error` is the single place where SQLAlchemy / DBAPI
exceptions are classified. Postgres errors are matched on SQLSTATE
(psycopg 3 exposes `sqlstate`, psycopg2 `pgcode`); SQLite only gives
us messages, so we fall back to those.
"""

from __future__ import annotations

import re
from enum import Enum

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError


class LifecycleErrorCode(str, Enum):
    REFERENTIAL_INTEGRITY_VIOLATION = "REFERENTIAL_INTEGRITY_VIOLATION"
    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"
    TRANSACTION_CONFLICT = "TRANSACTION_CONFLICT"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"
    OPERATION_TIMEOUT = "OPERATION_TIMEOUT"
    OPERATION_IN_PROGRESS = "OPERATION_IN_PROGRESS"
    DELETION_PLAN_INVALID = "DELETION_PLAN_INVALID"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class LifecycleError(Exception):
    """
    Base class for purge/seed failures.

    - message: short, human readable summary (rendered as `error`)
    - details: what exactly went wrong (rendered as `details`)
    """

    code: LifecycleErrorCode = LifecycleErrorCode.UNKNOWN_ERROR
    status_code: int = 500
    retryable: bool = False

    def __init__(self, message: str, details: str | None = None, *, step: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or message
        self.step = step

    def to_payload(self) -> dict:
        return {
            "error": self.message,
            "details": self.details,
            "code": self.code.value,
        }


class ReferentialIntegrityError(LifecycleError):
    code = LifecycleErrorCode.REFERENTIAL_INTEGRITY_VIOLATION

    def __init__(self, message: str, details: str | None = None, *, step: str | None = None, relation: str | None = None):
        super().__init__(message, details, step=step)
        self.relation = relation


class RecordNotFoundError(LifecycleError):
    code = LifecycleErrorCode.RECORD_NOT_FOUND


class TransactionConflictError(LifecycleError):
    code = LifecycleErrorCode.TRANSACTION_CONFLICT
    retryable = True


class ConstraintViolationError(LifecycleError):
    code = LifecycleErrorCode.CONSTRAINT_VIOLATION

    def __init__(self, message: str, details: str | None = None, *, step: str | None = None, constraint: str | None = None):
        super().__init__(message, details, step=step)
        self.constraint = constraint


class OperationTimeoutError(LifecycleError):
    code = LifecycleErrorCode.OPERATION_TIMEOUT


class OperationInProgressError(LifecycleError):
    code = LifecycleErrorCode.OPERATION_IN_PROGRESS
    status_code = 409
    retryable = True


class DeletionPlanError(LifecycleError):
    code = LifecycleErrorCode.DELETION_PLAN_INVALID


# SQLSTATE classes we care about
_FK_VIOLATION = "23503"
_UNIQUE_VIOLATION = "23505"
_NOT_NULL_VIOLATION = "23502"
_CHECK_VIOLATION = "23514"
_SERIALIZATION_FAILURE = "40001"
_DEADLOCK_DETECTED = "40P01"
_LOCK_NOT_AVAILABLE = "55P03"
_QUERY_CANCELED = "57014"

_SQLITE_UNIQUE_RE = re.compile(r"UNIQUE constraint failed: (?P<target>[\w., ]+)")


def _sqlstate(exc: DBAPIError) -> str | None:
    orig = getattr(exc, "orig", None)
    if orig is None:
        return None
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _constraint_name(exc: DBAPIError) -> str | None:
    """
    Best-effort name of the violated constraint.
    """
    orig = getattr(exc, "orig", None)
    diag = getattr(orig, "diag", None)
    name = getattr(diag, "constraint_name", None) if diag is not None else None
    if name:
        return name
    match = _SQLITE_UNIQUE_RE.search(str(orig))
    if match:
        return match.group("target").strip()
    return None


def _relation_name(exc: DBAPIError) -> str | None:
    orig = getattr(exc, "orig", None)
    diag = getattr(orig, "diag", None)
    if diag is not None:
        return getattr(diag, "table_name", None) or getattr(diag, "constraint_name", None)
    return None


def translate_db_error(exc: SQLAlchemyError, *, step: str) -> LifecycleError:
    """
    Map a SQLAlchemy exception raised while running `step` to a LifecycleError.
    """
    if isinstance(exc, LifecycleError):
        return exc

    raw = str(getattr(exc, "orig", None) or exc)
    state = _sqlstate(exc) if isinstance(exc, DBAPIError) else None

    if state == _FK_VIOLATION or "FOREIGN KEY constraint failed" in raw:
        relation = _relation_name(exc) if isinstance(exc, DBAPIError) else None
        return ReferentialIntegrityError(
            "Referential integrity violation",
            f"Step '{step}': a dependent row still references a row targeted by this operation"
            f" (relation: {relation or 'unknown'}).",
            step=step,
            relation=relation,
        )

    if state in (_UNIQUE_VIOLATION, _NOT_NULL_VIOLATION, _CHECK_VIOLATION) or isinstance(exc, IntegrityError):
        constraint = _constraint_name(exc) if isinstance(exc, DBAPIError) else None
        return ConstraintViolationError(
            "Constraint violation",
            f"Step '{step}': constraint {constraint or 'unknown'} was violated.",
            step=step,
            constraint=constraint,
        )

    if state in (_SERIALIZATION_FAILURE, _DEADLOCK_DETECTED, _LOCK_NOT_AVAILABLE) or "database is locked" in raw:
        return TransactionConflictError(
            "Transaction conflict",
            f"Step '{step}': the transaction conflicted with a concurrent one. Try again.",
            step=step,
        )

    if state == _QUERY_CANCELED or "statement timeout" in raw:
        return OperationTimeoutError(
            "Operation timed out",
            f"Step '{step}': the database cancelled the statement after its time budget ran out.",
            step=step,
        )

    return LifecycleError(
        "Data layer error",
        f"Step '{step}': {raw}",
        step=step,
    )
