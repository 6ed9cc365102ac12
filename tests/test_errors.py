from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError

from app.core.errors import (
    ConstraintViolationError,
    LifecycleError,
    LifecycleErrorCode,
    OperationInProgressError,
    OperationTimeoutError,
    ReferentialIntegrityError,
    TransactionConflictError,
    translate_db_error,
)


class _PgDiag:
    def __init__(self, table_name=None, constraint_name=None):
        self.table_name = table_name
        self.constraint_name = constraint_name


class _PgError(Exception):
    """Looks enough like a psycopg error for classification."""

    def __init__(self, message, sqlstate, diag=None):
        super().__init__(message)
        self.sqlstate = sqlstate
        self.diag = diag or _PgDiag()


def test_sqlite_foreign_key_failure():
    exc = IntegrityError("DELETE FROM patients", {}, Exception("FOREIGN KEY constraint failed"))
    err = translate_db_error(exc, step="delete:patients")

    assert isinstance(err, ReferentialIntegrityError)
    assert err.step == "delete:patients"
    assert err.to_payload()["code"] == "REFERENTIAL_INTEGRITY_VIOLATION"


def test_postgres_foreign_key_failure_names_the_relation():
    orig = _PgError("violates foreign key", "23503", _PgDiag(table_name="prescriptions"))
    err = translate_db_error(IntegrityError("DELETE", {}, orig), step="delete:patients")

    assert isinstance(err, ReferentialIntegrityError)
    assert err.relation == "prescriptions"
    assert "prescriptions" in err.details


def test_sqlite_unique_failure_names_the_columns():
    orig = Exception("UNIQUE constraint failed: monthly_targets.tenant_id, monthly_targets.month_year")
    err = translate_db_error(IntegrityError("INSERT", {}, orig), step="insert:monthlyTargets#0")

    assert isinstance(err, ConstraintViolationError)
    assert err.constraint == "monthly_targets.tenant_id, monthly_targets.month_year"


def test_postgres_unique_failure_uses_constraint_name():
    orig = _PgError("duplicate key", "23505", _PgDiag(constraint_name="uq_stock_alerts_product_type"))
    err = translate_db_error(IntegrityError("INSERT", {}, orig), step="insert:stockAlerts#0")

    assert isinstance(err, ConstraintViolationError)
    assert err.constraint == "uq_stock_alerts_product_type"


def test_serialization_failure_is_retryable_conflict():
    err = translate_db_error(OperationalError("DELETE", {}, _PgError("could not serialize", "40001")), step="delete:staff")
    assert isinstance(err, TransactionConflictError)
    assert err.retryable


def test_sqlite_busy_is_conflict():
    err = translate_db_error(OperationalError("DELETE", {}, Exception("database is locked")), step="delete:staff")
    assert isinstance(err, TransactionConflictError)


def test_statement_timeout():
    orig = _PgError("canceling statement due to statement timeout", "57014")
    err = translate_db_error(OperationalError("DELETE", {}, orig), step="delete:transactions")

    assert isinstance(err, OperationTimeoutError)
    assert err.code == LifecycleErrorCode.OPERATION_TIMEOUT


def test_anything_else_is_unknown():
    err = translate_db_error(ProgrammingError("SELECT", {}, Exception("no such table: staff")), step="count:staff")

    assert type(err) is LifecycleError
    assert err.code == LifecycleErrorCode.UNKNOWN_ERROR
    assert err.status_code == 500
    assert "no such table" in err.details


def test_payload_shape():
    err = OperationInProgressError("Operation already in progress", "someone else is seeding")

    assert err.status_code == 409
    assert err.to_payload() == {
        "error": "Operation already in progress",
        "details": "someone else is seeding",
        "code": "OPERATION_IN_PROGRESS",
    }
