import random
from datetime import timedelta

import pytest

from app.core.entity_graph import EntityType
from app.core.errors import ConstraintViolationError, OperationInProgressError
from app.services import seed_catalog as catalog
from app.services import seed_service
from app.services.seed_service import seed_tenant
from app.services.tenant_lock import tenant_operation_lock
from tests.factories import NOW, count_rows, populate_tenant


def _seed(db, tenant_id, settings, seed=11):
    return seed_tenant(db, tenant_id, settings=settings, rng=random.Random(seed), now=NOW)


class TestSeedTenant:
    def test_creates_a_full_dataset(self, db, tenant, settings):
        result = _seed(db, tenant.id, settings)

        assert result.created[EntityType.STAFF] == len(catalog.STAFF)
        assert result.created[EntityType.PATIENTS] == len(catalog.PATIENTS)
        assert result.created[EntityType.LOYALTY_REWARDS] == len(catalog.LOYALTY_REWARDS)
        assert result.created[EntityType.APPOINTMENTS] > 0
        assert result.created[EntityType.LOYALTY_POINTS_HISTORY] > 0
        assert result.reconciliation.is_clean
        assert result.reconciliation.created == result.created

        assert count_rows(db, tenant.id) == result.created

    def test_reports_every_entity_type(self, db, tenant, settings):
        result = _seed(db, tenant.id, settings)
        assert set(result.created) == set(EntityType)

    def test_large_types_are_chunked(self, db, tenant, settings):
        result = _seed(db, tenant.id, settings)
        transactions = result.reports[EntityType.TRANSACTIONS]

        assert len(transactions.chunks) > 1
        assert all(chunk.submitted <= settings.insert_batch_size for chunk in transactions.chunks)
        assert transactions.complete

    def test_rerun_replaces_instead_of_adding(self, db, tenant, settings):
        first = _seed(db, tenant.id, settings, seed=1)
        second = _seed(db, tenant.id, settings, seed=2)

        assert second.purge.deleted == first.created
        counts = count_rows(db, tenant.id)
        assert counts == second.created
        assert counts[EntityType.STAFF] == len(catalog.STAFF)

    def test_wipes_existing_data_first(self, db, tenant, settings):
        populate_tenant(db, tenant.id, patients=20, transactions=10, members=3, redemptions=4)

        result = _seed(db, tenant.id, settings)

        assert result.purge.deleted[EntityType.PATIENTS] == 20
        assert count_rows(db, tenant.id)[EntityType.PATIENTS] == len(catalog.PATIENTS)

    def test_leaves_other_tenants_alone(self, db, tenant, other_tenant, settings):
        populate_tenant(db, other_tenant.id, patients=4, transactions=4, members=1, redemptions=1)
        before = count_rows(db, other_tenant.id)

        _seed(db, tenant.id, settings)

        assert count_rows(db, other_tenant.id) == before

    def test_refuses_while_locked(self, db, engine, tenant, settings):
        with tenant_operation_lock(engine, tenant.id):
            with pytest.raises(OperationInProgressError):
                _seed(db, tenant.id, settings)

    def test_insert_failure_keeps_committed_chunks(self, db, tenant, settings, monkeypatch):
        real_insert = seed_service.insert_in_batches

        def _failing_insert(db, entity_type, rows, **kwargs):
            if entity_type == EntityType.LOYALTY_MEMBERS:
                raise ConstraintViolationError("Constraint violation", step="insert:loyaltyMembers#0")
            return real_insert(db, entity_type, rows, **kwargs)

        monkeypatch.setattr(seed_service, "insert_in_batches", _failing_insert)

        with pytest.raises(ConstraintViolationError):
            _seed(db, tenant.id, settings)

        counts = count_rows(db, tenant.id)
        assert counts[EntityType.PATIENTS] == len(catalog.PATIENTS)
        assert counts[EntityType.LOYALTY_MEMBERS] == 0

        # A second run purges the partial data and starts over.
        monkeypatch.setattr(seed_service, "insert_in_batches", real_insert)
        result = _seed(db, tenant.id, settings)
        assert result.reconciliation.is_clean


class TestClinicClock:
    def test_defaults_to_utc(self, settings):
        assert seed_service.clinic_now(settings).utcoffset() == timedelta(0)

    def test_seed_runs_on_clinic_local_time(self, db, tenant, settings, monkeypatch):
        seen = {}
        real_build = seed_service.build_dataset

        def _capturing_build(tenant_id, *, rng, now):
            seen["now"] = now
            return real_build(tenant_id, rng=rng, now=now)

        monkeypatch.setattr(seed_service, "build_dataset", _capturing_build)
        local = settings.model_copy(update={"clinic_timezone": "America/Sao_Paulo"})

        result = seed_tenant(db, tenant.id, settings=local, rng=random.Random(3))

        assert result.reconciliation.is_clean
        assert seen["now"].utcoffset() == timedelta(hours=-3)
