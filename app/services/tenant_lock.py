# app/services/tenant_lock.py
"""
Single-writer guard per tenant around purge / seed.

Postgres: session-level advisory lock held on a dedicated connection for the
whole operation (seed commits per chunk, so a transaction-level lock would
be released too early). Other backends: a process-local lock per tenant.

We never wait. If someone else holds the lock -> OperationInProgressError.
"""

from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import text
from sqlalchemy.engine import Engine

from app.core.errors import OperationInProgressError

logger = logging.getLogger(__name__)

# Tenants with an operation running in this process.
_local_held: set[uuid.UUID] = set()
_local_held_guard = threading.Lock()


def advisory_lock_key(tenant_id: uuid.UUID) -> int:
    """
    Map a tenant UUID onto the signed bigint keyspace of pg advisory locks.
    """
    return tenant_id.int & 0x7FFFFFFFFFFFFFFF


def _busy(tenant_id: uuid.UUID) -> OperationInProgressError:
    logger.warning("Lifecycle operation already running for tenant=%s", tenant_id)
    return OperationInProgressError(
        "Operation already in progress",
        f"Another reset or seed is running for tenant {tenant_id}. Try again once it finishes.",
    )


@contextmanager
def _pg_advisory_lock(engine: Engine, tenant_id: uuid.UUID) -> Iterator[None]:
    key = advisory_lock_key(tenant_id)
    with engine.connect() as conn:
        acquired = conn.execute(text("SELECT pg_try_advisory_lock(:k)"), {"k": key}).scalar()
        conn.commit()
        if not acquired:
            raise _busy(tenant_id)
        logger.info("Acquired advisory lock tenant=%s key=%d", tenant_id, key)
        try:
            yield
        finally:
            conn.execute(text("SELECT pg_advisory_unlock(:k)"), {"k": key})
            conn.commit()
            logger.info("Released advisory lock tenant=%s", tenant_id)


@contextmanager
def _local_lock(tenant_id: uuid.UUID) -> Iterator[None]:
    with _local_held_guard:
        if tenant_id in _local_held:
            raise _busy(tenant_id)
        _local_held.add(tenant_id)
    try:
        yield
    finally:
        with _local_held_guard:
            _local_held.discard(tenant_id)


@contextmanager
def tenant_operation_lock(engine: Engine, tenant_id: uuid.UUID) -> Iterator[None]:
    if engine.dialect.name == "postgresql":
        with _pg_advisory_lock(engine, tenant_id):
            yield
    else:
        with _local_lock(tenant_id):
            yield
