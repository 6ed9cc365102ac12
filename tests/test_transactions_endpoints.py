import uuid

from app.core.entity_graph import EntityType
from app.core.errors import ReferentialIntegrityError
from app.core.security import create_access_token
from app.models.tenant_global import TenantStatus
from app.models.user import User
from app.services import purge_service
from app.services import seed_catalog as catalog
from app.services.tenant_lock import tenant_operation_lock
from tests.factories import count_rows, populate_tenant, token_for

RESET_URL = "/api/v1/transactions/reset-all"
SEED_URL = "/api/v1/transactions/seed"


class TestResetAll:
    def test_deletes_tenant_data(self, client, db, tenant, auth_headers):
        populate_tenant(db, tenant.id)

        response = client.delete(RESET_URL, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["deleted"]["patients"] == 50
        assert body["deleted"]["transactions"] == 200
        assert body["deleted"]["loyaltyRedemptions"] == 12
        assert body["message"] == "Deleted 283 records."
        assert set(body["remaining"]) == {e.value for e in EntityType}
        assert all(n == 0 for n in body["remaining"].values())

    def test_requires_a_token(self, client, tenant):
        response = client.delete(RESET_URL)
        assert response.status_code == 401

    def test_rejects_a_bad_token(self, client, tenant):
        response = client.delete(RESET_URL, headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_rejects_unknown_user(self, client, tenant):
        token = create_access_token(str(uuid.uuid4()), str(tenant.id))
        response = client.delete(RESET_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_inactive_tenant_is_forbidden(self, client, db, make_tenant):
        suspended = make_tenant("Clinic Gamma", TenantStatus.SUSPENDED)
        user = User(tenant_id=suspended.id, email="owner@gamma.test")
        db.add(user)
        db.commit()
        populate_tenant(db, suspended.id, patients=2, transactions=2, members=1, redemptions=1)

        response = client.delete(RESET_URL, headers={"Authorization": f"Bearer {token_for(user)}"})

        assert response.status_code == 403
        assert count_rows(db, suspended.id)[EntityType.PATIENTS] == 2

    def test_token_for_another_tenant_is_forbidden(self, client, user, other_tenant):
        token = create_access_token(str(user.id), str(other_tenant.id))
        response = client.delete(RESET_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403

    def test_user_without_tenant_is_forbidden(self, client, db):
        user = User(tenant_id=None, email="platform@admin.test")
        db.add(user)
        db.commit()

        response = client.delete(RESET_URL, headers={"Authorization": f"Bearer {token_for(user)}"})
        assert response.status_code == 403

    def test_conflict_while_locked(self, client, engine, tenant, auth_headers):
        with tenant_operation_lock(engine, tenant.id):
            response = client.delete(RESET_URL, headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["code"] == "OPERATION_IN_PROGRESS"

    def test_failure_renders_error_body_and_keeps_data(self, client, db, tenant, auth_headers, monkeypatch):
        populate_tenant(db, tenant.id, patients=3, transactions=3, members=1, redemptions=1)

        def _failing_delete_step(*args, **kwargs):
            raise ReferentialIntegrityError(
                "Referential integrity violation",
                "Step 'delete:staff': a dependent row still references a row targeted by this operation.",
                step="delete:staff",
            )

        monkeypatch.setattr(purge_service, "_delete_step", _failing_delete_step)

        response = client.delete(RESET_URL, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {
            "error": "Referential integrity violation",
            "details": "Step 'delete:staff': a dependent row still references a row targeted by this operation.",
            "code": "REFERENTIAL_INTEGRITY_VIOLATION",
        }
        assert count_rows(db, tenant.id)[EntityType.PATIENTS] == 3


class TestSeed:
    def test_seeds_the_callers_tenant(self, client, db, tenant, other_tenant, auth_headers):
        response = client.post(SEED_URL, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["created"]["staff"] == len(catalog.STAFF)
        assert body["created"]["patients"] == len(catalog.PATIENTS)
        assert body["created"]["loyaltyRewards"] == len(catalog.LOYALTY_REWARDS)
        assert body["created"]["appointments"] > 0

        assert count_rows(db, tenant.id)[EntityType.STAFF] == len(catalog.STAFF)
        assert all(n == 0 for n in count_rows(db, other_tenant.id).values())

    def test_seed_then_reset(self, client, db, tenant, auth_headers):
        created = client.post(SEED_URL, headers=auth_headers).json()["created"]

        response = client.delete(RESET_URL, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["deleted"] == created

    def test_requires_a_token(self, client, tenant):
        assert client.post(SEED_URL).status_code == 401

    def test_conflict_while_locked(self, client, engine, tenant, auth_headers):
        with tenant_operation_lock(engine, tenant.id):
            response = client.post(SEED_URL, headers=auth_headers)

        assert response.status_code == 409
