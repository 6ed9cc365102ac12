# app/services/count_snapshot_service.py
"""
Per-entity row counts for one tenant, and the before/after arithmetic.

Read-only. Reconciliation never raises: residue and mismatches are logged
at WARNING and returned to the caller.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Mapping

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.deadline import Deadline
from app.core.entity_graph import ENTITY_REGISTRY, EntityType
from app.core.errors import translate_db_error

logger = logging.getLogger(__name__)

Snapshot = dict[EntityType, int]


def take_snapshot(
    db: Session,
    tenant_id: uuid.UUID,
    id_sets: Mapping[EntityType, list[uuid.UUID]],
    *,
    deadline: Deadline,
) -> Snapshot:
    """
    Count the tenant's rows of every registered entity type.

    Indirect types whose parent id set is empty count as 0 without a query.
    """
    counts: Snapshot = {}
    for entity_type, reg in ENTITY_REGISTRY.items():
        clause = reg.scope_clause(tenant_id, id_sets)
        if clause is None:
            counts[entity_type] = 0
            continue

        step = f"count:{entity_type.value}"
        deadline.guard(db, step)
        try:
            counts[entity_type] = db.scalar(select(func.count()).select_from(reg.model).where(clause)) or 0
        except SQLAlchemyError as exc:
            raise translate_db_error(exc, step=step) from exc
    return counts


def snapshot_to_payload(snapshot: Mapping[EntityType, int]) -> dict[str, int]:
    return {entity_type.value: count for entity_type, count in snapshot.items()}


@dataclass
class PurgeReconciliation:
    delta: Snapshot
    residue: Snapshot = field(default_factory=dict)
    mismatches: dict[EntityType, tuple[int, int]] = field(default_factory=dict)

    @property
    def is_clean(self) -> bool:
        return not self.residue and not self.mismatches


@dataclass
class SeedReconciliation:
    created: Snapshot
    shortfalls: dict[EntityType, tuple[int, int]] = field(default_factory=dict)

    @property
    def is_clean(self) -> bool:
        return not self.shortfalls


def reconcile_purge(
    before: Mapping[EntityType, int],
    after: Mapping[EntityType, int],
    reported: Mapping[EntityType, int],
) -> PurgeReconciliation:
    """
    delta = before - after per entity type.

    - residue: anything still present after the purge
    - mismatches: delta != reported deleted count, as (delta, reported)
    """
    result = PurgeReconciliation(delta={})
    for entity_type in before:
        delta = before[entity_type] - after.get(entity_type, 0)
        result.delta[entity_type] = delta

        remaining = after.get(entity_type, 0)
        if remaining > 0:
            result.residue[entity_type] = remaining
            logger.warning("Purge residue entity=%s remaining=%d", entity_type.value, remaining)

        deleted = reported.get(entity_type, 0)
        if delta != deleted:
            result.mismatches[entity_type] = (delta, deleted)
            logger.warning(
                "Purge reconciliation mismatch entity=%s before-after=%d reported=%d",
                entity_type.value,
                delta,
                deleted,
            )
    return result


def reconcile_seed(
    before: Mapping[EntityType, int],
    after: Mapping[EntityType, int],
    reported: Mapping[EntityType, int],
) -> SeedReconciliation:
    """
    created = after - before per entity type; short-falls are (created, reported).
    """
    result = SeedReconciliation(created={})
    for entity_type in after:
        created = after[entity_type] - before.get(entity_type, 0)
        result.created[entity_type] = created

        inserted = reported.get(entity_type, 0)
        if created != inserted:
            result.shortfalls[entity_type] = (created, inserted)
            logger.warning(
                "Seed short-fall entity=%s persisted=%d reported=%d",
                entity_type.value,
                created,
                inserted,
            )
    return result
