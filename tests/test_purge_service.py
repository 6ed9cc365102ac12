from datetime import timedelta

import pytest
from sqlalchemy import select

from app.core.deadline import Deadline
from app.core.entity_graph import EntityType
from app.core.errors import (
    LifecycleErrorCode,
    OperationInProgressError,
    OperationTimeoutError,
    RecordNotFoundError,
    ReferentialIntegrityError,
)
from app.models.loyalty import LoyaltyMember, LoyaltyRedemption, LoyaltyReward
from app.models.tenant_global import Tenant
from app.models.user import User
from app.services import purge_service
from app.services.purge_service import purge_tenant, reset_tenant
from app.services.tenant_lock import tenant_operation_lock
from tests.factories import NOW, count_rows, populate_tenant


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestPurgeTenant:
    def test_deletes_everything_and_reports_counts(self, db, tenant, user):
        populate_tenant(db, tenant.id)

        result = purge_tenant(db, tenant.id, deadline=Deadline(30, "test"))

        assert result.deleted[EntityType.PATIENTS] == 50
        assert result.deleted[EntityType.TRANSACTIONS] == 200
        assert result.deleted[EntityType.LOYALTY_MEMBERS] == 5
        assert result.deleted[EntityType.LOYALTY_REDEMPTIONS] == 12
        assert result.deleted[EntityType.LOYALTY_POINTS_HISTORY] == 15
        assert result.deleted[EntityType.LOYALTY_REWARDS] == 1
        assert result.total_deleted == 50 + 200 + 5 + 12 + 15 + 1
        assert all(count == 0 for count in result.remaining.values())
        assert result.reconciliation.is_clean
        assert result.before == result.deleted

        assert all(count == 0 for count in count_rows(db, tenant.id).values())

    def test_keeps_tenant_and_users(self, db, tenant, user):
        populate_tenant(db, tenant.id, patients=3, transactions=3, members=1, redemptions=1)

        purge_tenant(db, tenant.id, deadline=Deadline(30, "test"))

        assert db.get(Tenant, tenant.id) is not None
        assert db.query(User).filter(User.tenant_id == tenant.id).count() == 1

    def test_other_tenants_are_untouched(self, db, tenant, other_tenant):
        populate_tenant(db, tenant.id)
        populate_tenant(db, other_tenant.id, patients=7, transactions=9, members=2, redemptions=3)
        other_before = count_rows(db, other_tenant.id)

        purge_tenant(db, tenant.id, deadline=Deadline(30, "test"))

        assert count_rows(db, other_tenant.id) == other_before
        assert other_before[EntityType.LOYALTY_REDEMPTIONS] == 3

    def test_empty_tenant_is_a_clean_no_op(self, db, tenant):
        result = purge_tenant(db, tenant.id, deadline=Deadline(30, "test"))

        assert result.total_deleted == 0
        assert result.reconciliation.is_clean
        assert result.deleted[EntityType.LOYALTY_REDEMPTIONS] == 0

    def test_failure_midway_rolls_everything_back(self, db, tenant, monkeypatch):
        populate_tenant(db, tenant.id)
        before = count_rows(db, tenant.id)
        real_delete_step = purge_service._delete_step

        def _failing_delete_step(db, entity_type, *args, **kwargs):
            if entity_type == EntityType.PATIENTS:
                raise ReferentialIntegrityError(
                    "Referential integrity violation",
                    "patients still referenced",
                    step="delete:patients",
                )
            return real_delete_step(db, entity_type, *args, **kwargs)

        monkeypatch.setattr(purge_service, "_delete_step", _failing_delete_step)

        with pytest.raises(ReferentialIntegrityError):
            purge_tenant(db, tenant.id, deadline=Deadline(30, "test"))

        # Loyalty rows were deleted before patients inside the same transaction.
        assert count_rows(db, tenant.id) == before

    def test_database_error_rolls_everything_back(self, db, tenant, other_tenant):
        populate_tenant(db, tenant.id)
        populate_tenant(db, other_tenant.id, patients=2, transactions=1, members=1, redemptions=0)
        reward = db.scalars(select(LoyaltyReward).where(LoyaltyReward.tenant_id == tenant.id)).one()
        foreign_member = db.scalars(select(LoyaltyMember).where(LoyaltyMember.tenant_id == other_tenant.id)).one()
        db.add(
            LoyaltyRedemption(
                member_id=foreign_member.id,
                reward_id=reward.id,
                reward_name=reward.name,
                points_spent=reward.points_cost,
                code="CPN-CROSS-000001",
                created_at=NOW,
                expires_at=NOW + timedelta(days=60),
            )
        )
        db.commit()
        before = count_rows(db, tenant.id)
        other_before = count_rows(db, other_tenant.id)

        with pytest.raises(ReferentialIntegrityError) as excinfo:
            purge_tenant(db, tenant.id, deadline=Deadline(30, "test"))

        assert excinfo.value.code == LifecycleErrorCode.REFERENTIAL_INTEGRITY_VIOLATION
        assert excinfo.value.step == "delete:loyaltyRewards"
        assert count_rows(db, tenant.id) == before
        assert count_rows(db, other_tenant.id) == other_before

    def test_expired_deadline_aborts_without_deleting(self, db, tenant):
        populate_tenant(db, tenant.id, patients=5, transactions=5, members=1, redemptions=1)
        before = count_rows(db, tenant.id)
        clock = _Clock()
        deadline = Deadline(1, "reset-all", clock=clock)
        clock.now = 5.0

        with pytest.raises(OperationTimeoutError) as exc_info:
            purge_tenant(db, tenant.id, deadline=deadline)

        assert exc_info.value.code == LifecycleErrorCode.OPERATION_TIMEOUT
        assert count_rows(db, tenant.id) == before


class TestDeleteStep:
    def test_expected_rows_that_vanished_raise(self, db, tenant):
        with pytest.raises(RecordNotFoundError) as exc_info:
            purge_service._delete_step(
                db,
                EntityType.PATIENTS,
                tenant.id,
                {},
                expected=3,
                deadline=Deadline(10, "test"),
            )
        assert exc_info.value.step == "delete:patients"
        db.rollback()

    def test_indirect_step_without_parents_is_skipped(self, db, tenant):
        affected = purge_service._delete_step(
            db,
            EntityType.LOYALTY_POINTS_HISTORY,
            tenant.id,
            {EntityType.LOYALTY_MEMBERS: []},
            expected=0,
            deadline=Deadline(10, "test"),
        )
        assert affected == 0


class TestResetTenant:
    def test_uses_tenant_lock(self, db, engine, tenant, settings):
        populate_tenant(db, tenant.id, patients=2, transactions=2, members=1, redemptions=1)

        with tenant_operation_lock(engine, tenant.id):
            with pytest.raises(OperationInProgressError):
                reset_tenant(db, tenant.id, settings=settings)

        result = reset_tenant(db, tenant.id, settings=settings)
        assert result.deleted[EntityType.PATIENTS] == 2
