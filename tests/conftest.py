"""
Shared fixtures: an in-memory SQLite database with the full schema, tenants,
a tenant user with a bearer token, and an API client bound to the same session.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.database import build_engine, get_db
from app.core import entity_graph  # noqa: F401  (registers every tenant-scoped model)
from app.models.base import Base
from app.models.tenant_global import Tenant, TenantStatus
from app.models.user import User
from tests.factories import token_for


@pytest.fixture
def engine():
    engine = build_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)()
    yield session
    session.close()


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+pysqlite:///:memory:",
        insert_batch_size=100,
        purge_timeout_seconds=30,
        seed_purge_timeout_seconds=30,
        seed_timeout_seconds=60,
    )


def _make_tenant(db, name: str, status: TenantStatus = TenantStatus.ACTIVE) -> Tenant:
    tenant = Tenant(name=name, contact_email=f"owner@{name.lower().replace(' ', '-')}.test", status=status)
    db.add(tenant)
    db.commit()
    return tenant


@pytest.fixture
def tenant(db):
    return _make_tenant(db, "Clinic Alpha")


@pytest.fixture
def other_tenant(db):
    return _make_tenant(db, "Clinic Beta")


@pytest.fixture
def make_tenant(db):
    def _factory(name: str, status: TenantStatus = TenantStatus.ACTIVE) -> Tenant:
        return _make_tenant(db, name, status)

    return _factory


@pytest.fixture
def user(db, tenant):
    user = User(tenant_id=tenant.id, email="owner@alpha.test", first_name="Ana", last_name="Lima")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {token_for(user)}"}


@pytest.fixture
def client(db):
    from app.main import app

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
