#!/usr/bin/env python3
# scripts/seed_demo_data.py
"""
Clinic demo data seeder + reset, for operators.

Runs the same services as the HTTP endpoints, outside the API:
- --reset: delete every tenant-scoped record of the tenant (all-or-nothing)
- --seed:  reset, then generate a full synthetic dataset

The tenant must exist. Users and the tenant row are never touched.

Run:
  python -m scripts.seed_demo_data --seed --tenant-id <uuid>
  python -m scripts.seed_demo_data --reset --tenant-id <uuid>
  python -m scripts.seed_demo_data --seed --tenant-id <uuid> --random-seed 42
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
import uuid
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool

# Allow "python -m scripts.seed_demo_data" from repo root
REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from app.core.config import get_settings  # type: ignore
from app.core.database import build_engine  # type: ignore
from app.core.errors import LifecycleError  # type: ignore
from app.models.tenant_global import Tenant  # type: ignore
from app.models.user import User  # type: ignore  # noqa: F401  (mapper registry)
from app.services.count_snapshot_service import snapshot_to_payload  # type: ignore
from app.services.purge_service import reset_tenant  # type: ignore
from app.services.seed_service import seed_tenant  # type: ignore

logger = logging.getLogger(__name__)

# ----------------------------
# Engine / Session for seeding
# ----------------------------
_seed_settings = get_settings()


def _is_pooler_url(url: str) -> bool:
    return ":6543" in url or "pooler.supabase.com" in url


_seed_db_url = _seed_settings.database_url

connect_args: dict = {}
if _is_pooler_url(_seed_db_url):
    connect_args["prepare_threshold"] = None

# NullPool for scripts: one short-lived connection per session, plus the lock connection.
_seed_engine = build_engine(
    _seed_db_url,
    connect_args=connect_args,
    poolclass=NullPool,
)

SeedSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=_seed_engine,
    future=True,
    expire_on_commit=False,
)


def _log_db_error(e: Exception) -> None:
    """
    Emit the underlying DB error.
    """
    logger.error("Lifecycle operation failed: %s", e, exc_info=True)
    cause = e.__cause__
    if isinstance(cause, SQLAlchemyError) and getattr(cause, "orig", None) is not None:
        logger.error("DBAPI orig: %r", cause.orig)


def _print_counts(title: str, counts: dict[str, int]) -> None:
    print(f"{title}:")
    for key, value in counts.items():
        print(f"  {key}: {value}")


def _load_tenant(db: Session, tenant_id: uuid.UUID) -> Tenant:
    tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
    db.commit()
    if tenant is None:
        raise SystemExit(f"Tenant {tenant_id} not found.")
    return tenant


def do_reset(db: Session, tenant_id: uuid.UUID) -> None:
    tenant = _load_tenant(db, tenant_id)
    print(f"\nResetting tenant {tenant.name} ({tenant.id})...")
    result = reset_tenant(db, tenant.id, settings=_seed_settings)
    _print_counts("Deleted", snapshot_to_payload(result.deleted))
    if not result.reconciliation.is_clean:
        _print_counts("Remaining", snapshot_to_payload(result.remaining))
    print("Reset done.")


def do_seed(db: Session, tenant_id: uuid.UUID, random_seed: int | None) -> None:
    tenant = _load_tenant(db, tenant_id)
    print(f"\n=== Seeding tenant {tenant.name} ({tenant.id}) ===")
    seed_value = random_seed if random_seed is not None else _seed_settings.seed_random_seed
    result = seed_tenant(
        db,
        tenant.id,
        settings=_seed_settings,
        rng=random.Random(seed_value),
    )
    _print_counts("Deleted first", snapshot_to_payload(result.purge.deleted))
    _print_counts("Created", snapshot_to_payload(result.created))
    if result.reconciliation is not None and result.reconciliation.shortfalls:
        print("WARNING: persisted counts differ from inserted counts:")
        for entity_type, (persisted, reported) in result.reconciliation.shortfalls.items():
            print(f"  {entity_type.value}: persisted={persisted} reported={reported}")
    print("Seed done.")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed / reset clinic demo data for one tenant")
    parser.add_argument("--seed", action="store_true", help="Reset the tenant, then generate demo data")
    parser.add_argument("--reset", action="store_true", help="Delete all tenant-scoped data")
    parser.add_argument("--tenant-id", type=uuid.UUID, required=True, help="Tenant UUID")
    parser.add_argument("--random-seed", type=int, default=None, help="Fix the generator's RNG")
    args = parser.parse_args()

    if not (args.seed or args.reset):
        parser.print_help()
        raise SystemExit(1)

    logging.basicConfig(level=_seed_settings.log_level.upper())

    db: Session = SeedSessionLocal()
    try:
        if args.reset and not args.seed:
            do_reset(db, args.tenant_id)
        if args.seed:
            do_seed(db, args.tenant_id, args.random_seed)
    except LifecycleError as e:
        _log_db_error(e)
        print(f"FAILED [{e.code.value}] {e.message}: {e.details}")
        raise SystemExit(2)
    finally:
        db.close()


if __name__ == "__main__":
    main()
