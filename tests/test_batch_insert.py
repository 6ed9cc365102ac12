import uuid

import pytest

from app.core.deadline import Deadline
from app.core.entity_graph import EntityType
from app.core.errors import ConstraintViolationError
from app.models.category import Category, CategoryType
from app.models.monthly_target import MonthlyTarget
from app.services.batch_insert_service import chunked, insert_in_batches


def _categories(tenant_id, n):
    return [
        {"id": uuid.uuid4(), "tenant_id": tenant_id, "name": f"Category {i}", "type": CategoryType.REVENUE}
        for i in range(n)
    ]


def _target(tenant_id, month_year):
    return {
        "id": uuid.uuid4(),
        "tenant_id": tenant_id,
        "month_year": month_year,
        "planned_revenue": 80000,
        "planned_purchases": 15000,
    }


def test_chunked_splits_with_remainder():
    assert [len(c) for c in chunked(list(range(7)), 3)] == [3, 3, 1]
    assert list(chunked([], 3)) == []


def test_inserts_in_chunks_and_reports_each(db, tenant):
    report = insert_in_batches(
        db,
        EntityType.CATEGORIES,
        _categories(tenant.id, 7),
        chunk_size=3,
        deadline=Deadline(10, "test"),
    )

    assert [c.submitted for c in report.chunks] == [3, 3, 1]
    assert report.inserted == 7
    assert report.complete
    assert db.query(Category).filter(Category.tenant_id == tenant.id).count() == 7


def test_rejects_non_positive_chunk_size(db, tenant):
    with pytest.raises(ValueError):
        insert_in_batches(db, EntityType.CATEGORIES, _categories(tenant.id, 1), chunk_size=0, deadline=Deadline(10, "test"))


def test_failing_chunk_keeps_earlier_chunks(db, tenant):
    rows = [
        _target(tenant.id, "2025-01"),
        _target(tenant.id, "2025-02"),
        _target(tenant.id, "2025-01"),
    ]

    with pytest.raises(ConstraintViolationError) as exc_info:
        insert_in_batches(db, EntityType.MONTHLY_TARGETS, rows, chunk_size=2, deadline=Deadline(10, "test"))

    assert exc_info.value.step == "insert:monthlyTargets#1"
    assert db.query(MonthlyTarget).filter(MonthlyTarget.tenant_id == tenant.id).count() == 2
