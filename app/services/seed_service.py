# app/services/seed_service.py
"""
Seed: wipe a tenant and fill it with a fresh synthetic dataset.

Lock -> purge (same path as reset-all) -> before snapshot -> generate ->
chunked inserts in parents-first order -> after snapshot -> reconcile.

Only the purge phase is atomic. Inserts commit per chunk, so a failure
midway leaves the chunks already written in place; running seed again
purges them first.
"""

from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.deadline import Deadline
from app.core.entity_graph import EntityType, resolve_identifier_sets
from app.core.errors import LifecycleError, translate_db_error
from app.services.batch_insert_service import BatchInsertReport, insert_in_batches
from app.services.count_snapshot_service import SeedReconciliation, Snapshot, reconcile_seed, take_snapshot
from app.services.dataset_generator import build_dataset
from app.services.deletion_planner import plan_insertion_order
from app.services.purge_service import PurgeResult, purge_tenant
from app.services.tenant_lock import tenant_operation_lock

logger = logging.getLogger(__name__)


@dataclass
class SeedResult:
    purge: PurgeResult
    created: Snapshot
    reports: dict[EntityType, BatchInsertReport] = field(default_factory=dict)
    reconciliation: SeedReconciliation | None = None


def _read_snapshot(db: Session, tenant_id: uuid.UUID, deadline: Deadline, step: str) -> Snapshot:
    try:
        id_sets = resolve_identifier_sets(db, tenant_id, deadline)
        snapshot = take_snapshot(db, tenant_id, id_sets, deadline=deadline)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise translate_db_error(exc, step=step) from exc
    return snapshot


def clinic_now(settings: Settings) -> datetime:
    """
    Current time in the clinic's zone; opening hours and "already happened"
    checks in the generated data are read off this value.
    """
    return datetime.now(ZoneInfo(settings.clinic_timezone))


def seed_tenant(
    db: Session,
    tenant_id: uuid.UUID,
    *,
    settings: Settings | None = None,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> SeedResult:
    settings = settings or get_settings()
    rng = rng or random.Random(settings.seed_random_seed)
    now = now or clinic_now(settings)

    with tenant_operation_lock(db.get_bind(), tenant_id):
        purge = purge_tenant(
            db,
            tenant_id,
            deadline=Deadline(settings.seed_purge_timeout_seconds, "seed:purge"),
        )

        deadline = Deadline(settings.seed_timeout_seconds, "seed")
        before = _read_snapshot(db, tenant_id, deadline, "snapshot:before")

        dataset = build_dataset(tenant_id, rng=rng, now=now)

        reports: dict[EntityType, BatchInsertReport] = {}
        created: Snapshot = {}
        try:
            for entity_type in plan_insertion_order():
                rows = dataset.rows.get(entity_type, [])
                if not rows:
                    created[entity_type] = 0
                    continue
                report = insert_in_batches(
                    db,
                    entity_type,
                    rows,
                    chunk_size=settings.insert_batch_size,
                    deadline=deadline,
                )
                reports[entity_type] = report
                created[entity_type] = report.inserted
        except LifecycleError as exc:
            logger.error(
                "Seed aborted tenant=%s step=%s code=%s; committed chunks are kept",
                tenant_id,
                exc.step,
                exc.code.value,
            )
            raise

        after = _read_snapshot(db, tenant_id, deadline, "snapshot:after")

    reconciliation = reconcile_seed(before, after, created)
    logger.info(
        "Seed finished tenant=%s rows=%d clean=%s elapsed=%.2fs",
        tenant_id,
        sum(created.values()),
        reconciliation.is_clean,
        deadline.elapsed,
    )
    return SeedResult(purge=purge, created=created, reports=reports, reconciliation=reconciliation)
