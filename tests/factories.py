"""
Hand-made tenant data for tests, inserted through the ORM.
"""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func, select

from app.core.entity_graph import ENTITY_REGISTRY, EntityType, resolve_identifier_sets
from app.core.security import create_access_token
from app.models.loyalty import (
    LoyaltyMember,
    LoyaltyPointsHistory,
    LoyaltyRedemption,
    LoyaltyReward,
    PointsSource,
    RewardCategory,
    RewardType,
)
from app.models.patient import Patient
from app.models.transaction import Transaction, TransactionType
from app.models.user import User

NOW = datetime(2025, 3, 12, 14, 0, tzinfo=timezone.utc)


def token_for(user: User) -> str:
    return create_access_token(str(user.id), str(user.tenant_id) if user.tenant_id else None)


def populate_tenant(
    db,
    tenant_id: uuid.UUID,
    *,
    patients: int = 50,
    transactions: int = 200,
    members: int = 5,
    redemptions: int = 12,
    history_per_member: int = 3,
) -> None:
    patient_rows = [Patient(tenant_id=tenant_id, name=f"Patient {i:03d}") for i in range(patients)]
    db.add_all(patient_rows)
    db.flush()

    db.add_all(
        Transaction(
            tenant_id=tenant_id,
            description=f"Procedure {i}",
            amount=Decimal("100.00"),
            type=TransactionType.REVENUE,
            category="Procedures",
            date=NOW - timedelta(days=i % 30),
        )
        for i in range(transactions)
    )

    reward = LoyaltyReward(
        tenant_id=tenant_id,
        name="Free cleansing",
        points_cost=500,
        type=RewardType.PROCEDURE,
        value=Decimal("280.00"),
        valid_days=60,
        category=RewardCategory.BEAUTY,
    )
    db.add(reward)

    member_rows = [
        LoyaltyMember(
            tenant_id=tenant_id,
            patient_id=patient_rows[i].id,
            patient_name=patient_rows[i].name,
            referral_code=f"M{tenant_id.hex[:6]}{i:02d}",
            joined_at=NOW - timedelta(days=90),
        )
        for i in range(members)
    ]
    db.add_all(member_rows)
    db.flush()

    for member in member_rows:
        db.add_all(
            LoyaltyPointsHistory(
                member_id=member.id,
                points=100,
                source=PointsSource.CONSULTATION,
                created_at=NOW,
            )
            for _ in range(history_per_member)
        )

    for i in range(redemptions):
        db.add(
            LoyaltyRedemption(
                member_id=member_rows[i % members].id,
                reward_id=reward.id,
                reward_name=reward.name,
                points_spent=reward.points_cost,
                code=f"CPN-{tenant_id.hex[:6]}-{i:06d}",
                created_at=NOW,
                expires_at=NOW + timedelta(days=60),
            )
        )
    db.commit()


def count_rows(db, tenant_id: uuid.UUID) -> dict[EntityType, int]:
    """
    Per-entity counts computed straight from the registry.
    """
    id_sets = resolve_identifier_sets(db, tenant_id)
    counts = {}
    for entity_type, reg in ENTITY_REGISTRY.items():
        clause = reg.scope_clause(tenant_id, id_sets)
        counts[entity_type] = 0 if clause is None else db.scalar(
            select(func.count()).select_from(reg.model).where(clause)
        )
    db.commit()
    return counts
