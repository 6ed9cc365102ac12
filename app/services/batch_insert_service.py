# app/services/batch_insert_service.py
"""
Chunked bulk inserts for seeding.

One INSERT ... RETURNING id per chunk, committed on its own. A failing chunk
rolls back only itself; chunks already committed stay in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.deadline import Deadline
from app.core.entity_graph import ENTITY_REGISTRY, EntityType
from app.core.errors import translate_db_error

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 500


@dataclass
class ChunkReport:
    index: int
    submitted: int
    inserted: int

    @property
    def short(self) -> bool:
        return self.inserted < self.submitted


@dataclass
class BatchInsertReport:
    entity_type: EntityType
    chunks: list[ChunkReport] = field(default_factory=list)

    @property
    def submitted(self) -> int:
        return sum(c.submitted for c in self.chunks)

    @property
    def inserted(self) -> int:
        return sum(c.inserted for c in self.chunks)

    @property
    def complete(self) -> bool:
        return self.inserted == self.submitted


def chunked(rows: Sequence[Any], size: int):
    for start in range(0, len(rows), size):
        yield rows[start : start + size]


def insert_in_batches(
    db: Session,
    entity_type: EntityType,
    rows: Sequence[dict[str, Any]],
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    deadline: Deadline,
) -> BatchInsertReport:
    """
    Insert `rows` for one entity type in chunks of `chunk_size`.

    The inserted count of a chunk is the number of ids RETURNING gave back,
    not the number we sent.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    model = ENTITY_REGISTRY[entity_type].model
    report = BatchInsertReport(entity_type=entity_type)

    for index, chunk in enumerate(chunked(list(rows), chunk_size)):
        step = f"insert:{entity_type.value}#{index}"
        try:
            deadline.guard(db, step)
            ids = db.scalars(insert(model).returning(model.id), chunk).all()
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            err = translate_db_error(exc, step=step)
            logger.error(
                "Insert chunk failed entity=%s chunk=%d size=%d code=%s",
                entity_type.value,
                index,
                len(chunk),
                err.code.value,
                exc_info=True,
            )
            raise err from exc

        chunk_report = ChunkReport(index=index, submitted=len(chunk), inserted=len(ids))
        report.chunks.append(chunk_report)

        if chunk_report.short:
            logger.warning(
                "Short insert chunk entity=%s chunk=%d submitted=%d inserted=%d",
                entity_type.value,
                index,
                chunk_report.submitted,
                chunk_report.inserted,
            )
        else:
            logger.info(
                "Inserted chunk entity=%s chunk=%d rows=%d",
                entity_type.value,
                index,
                chunk_report.inserted,
            )

    return report
