# app/services/purge_service.py
"""
All-or-nothing removal of a tenant's data.

Flow:
1. resolve member / product id sets once
2. before snapshot
3. for each entity in deletion order: guard deadline, DELETE, record rowcount
4. residue snapshot inside the transaction (warning only)
5. COMMIT
6. remaining snapshot + reconciliation

Any failure in 1-5 rolls the whole transaction back and surfaces a single
LifecycleError. Nothing is retried here.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.deadline import Deadline
from app.core.entity_graph import ENTITY_REGISTRY, EntityType, resolve_identifier_sets
from app.core.errors import LifecycleError, RecordNotFoundError, translate_db_error
from app.services.count_snapshot_service import (
    PurgeReconciliation,
    Snapshot,
    reconcile_purge,
    take_snapshot,
)
from app.services.deletion_planner import plan_deletion_order
from app.services.tenant_lock import tenant_operation_lock

logger = logging.getLogger(__name__)


@dataclass
class PurgeResult:
    before: Snapshot
    deleted: Snapshot
    remaining: Snapshot
    reconciliation: PurgeReconciliation

    @property
    def total_deleted(self) -> int:
        return sum(self.deleted.values())


def _delete_step(
    db: Session,
    entity_type: EntityType,
    tenant_id: uuid.UUID,
    id_sets: dict[EntityType, list[uuid.UUID]],
    expected: int,
    deadline: Deadline,
) -> int:
    step = f"delete:{entity_type.value}"
    reg = ENTITY_REGISTRY[entity_type]
    clause = reg.scope_clause(tenant_id, id_sets)
    if clause is None:
        logger.info("Purge step entity=%s skipped (empty parent id set)", entity_type.value)
        return 0

    deadline.guard(db, step)
    result = db.execute(
        delete(reg.model).where(clause).execution_options(synchronize_session=False)
    )
    affected = result.rowcount or 0
    logger.info("Purge step entity=%s affected=%d expected=%d", entity_type.value, affected, expected)

    if expected > 0 and affected == 0:
        raise RecordNotFoundError(
            "Record not found",
            f"Step '{step}' expected to delete {expected} rows but affected none.",
            step=step,
        )
    return affected


def purge_tenant(db: Session, tenant_id: uuid.UUID, *, deadline: Deadline) -> PurgeResult:
    """
    Delete every tenant-scoped row of `tenant_id` in one transaction.

    The session must not have a transaction with pending work of its own;
    this function commits or rolls back.
    """
    order = plan_deletion_order()
    deleted: Snapshot = {}
    step = "resolve"

    try:
        id_sets = resolve_identifier_sets(db, tenant_id, deadline)
        step = "snapshot:before"
        before = take_snapshot(db, tenant_id, id_sets, deadline=deadline)

        for entity_type in order:
            step = f"delete:{entity_type.value}"
            deleted[entity_type] = _delete_step(
                db, entity_type, tenant_id, id_sets, before.get(entity_type, 0), deadline
            )

        step = "snapshot:residue"
        residue = take_snapshot(db, tenant_id, id_sets, deadline=deadline)
        leftover = {e: n for e, n in residue.items() if n}
        if leftover:
            logger.warning(
                "Residue before commit tenant=%s: %s",
                tenant_id,
                {e.value: n for e, n in leftover.items()},
            )

        step = "commit"
        deadline.check(step)
        db.commit()
    except LifecycleError as exc:
        db.rollback()
        logger.error("Purge aborted tenant=%s step=%s code=%s", tenant_id, exc.step or step, exc.code.value, exc_info=True)
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        err = translate_db_error(exc, step=step)
        logger.error("Purge aborted tenant=%s step=%s code=%s", tenant_id, step, err.code.value, exc_info=True)
        raise err from exc

    # Already committed; the read-back runs on its own budget.
    verify = Deadline(deadline.seconds, f"{deadline.operation}:verify")
    try:
        fresh_ids = resolve_identifier_sets(db, tenant_id, verify)
        remaining = take_snapshot(db, tenant_id, fresh_ids, deadline=verify)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise translate_db_error(exc, step="snapshot:remaining") from exc

    reconciliation = reconcile_purge(before, remaining, deleted)
    logger.info(
        "Purge finished tenant=%s deleted=%d clean=%s elapsed=%.2fs",
        tenant_id,
        sum(deleted.values()),
        reconciliation.is_clean,
        deadline.elapsed,
    )
    return PurgeResult(before=before, deleted=deleted, remaining=remaining, reconciliation=reconciliation)


def reset_tenant(db: Session, tenant_id: uuid.UUID, *, settings=None) -> PurgeResult:
    """
    reset-all: purge under the tenant lock with the configured budget.
    """
    settings = settings or get_settings()
    with tenant_operation_lock(db.get_bind(), tenant_id):
        deadline = Deadline(settings.purge_timeout_seconds, "reset-all")
        return purge_tenant(db, tenant_id, deadline=deadline)
