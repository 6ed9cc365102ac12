import uuid

import pytest

from app.core.entity_graph import EntityType
from scripts import seed_demo_data
from tests.factories import count_rows, populate_tenant


def test_reset_prints_deleted_counts(db, tenant, capsys):
    populate_tenant(db, tenant.id, patients=4, transactions=6, members=2, redemptions=2)

    seed_demo_data.do_reset(db, tenant.id)

    out = capsys.readouterr().out
    assert "patients: 4" in out
    assert "Reset done." in out
    assert count_rows(db, tenant.id)[EntityType.PATIENTS] == 0


def test_seed_with_fixed_random_seed(db, tenant, capsys):
    seed_demo_data.do_seed(db, tenant.id, random_seed=42)

    out = capsys.readouterr().out
    assert "staff: 5" in out
    assert "Seed done." in out
    assert count_rows(db, tenant.id)[EntityType.STAFF] == 5


def test_unknown_tenant_exits(db):
    with pytest.raises(SystemExit):
        seed_demo_data.do_reset(db, uuid.uuid4())
