# app/core/entity_graph.py
"""
Static description of the tenant-scoped data.

- EntityType: every kind of row the lifecycle engine owns. The value is the
  camelCase key used in API responses.
- ENTITY_REGISTRY: EntityType -> model + how rows are scoped to a tenant.
  Most tables have a tenant_id column; a few are reached only through a
  parent (loyalty history/redemptions/referrals through the member,
  product-procedure links through the product).
- ENTITY_EDGES: parent -> dependent foreign keys with their ON DELETE
  behavior. The planner orders on every edge, whatever the behavior.

Tenants, users and anything billing-related are NOT in here and are never
touched by a purge.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.appointment import Appointment
from app.models.category import Category
from app.models.chat import ChatMessage, ChatThread
from app.models.inventory import InventoryProduct, ProductProcedure, StockAlert, StockMovement
from app.models.loyalty import (
    LoyaltyMember,
    LoyaltyPointsHistory,
    LoyaltyRedemption,
    LoyaltyReferral,
    LoyaltyReward,
)
from app.models.monthly_target import MonthlyTarget
from app.models.patient import Patient
from app.models.prescription import Prescription
from app.models.quote import Quote
from app.models.staff import Staff
from app.models.transaction import Transaction


class EntityType(str, Enum):
    STAFF = "staff"
    PATIENTS = "patients"
    APPOINTMENTS = "appointments"
    TRANSACTIONS = "transactions"
    QUOTES = "quotes"
    PRESCRIPTIONS = "prescriptions"
    INVENTORY_PRODUCTS = "inventoryProducts"
    STOCK_MOVEMENTS = "stockMovements"
    PRODUCT_PROCEDURES = "productProcedures"
    STOCK_ALERTS = "stockAlerts"
    CATEGORIES = "categories"
    MONTHLY_TARGETS = "monthlyTargets"
    CHAT_THREADS = "chatThreads"
    CHAT_MESSAGES = "chatMessages"
    LOYALTY_REWARDS = "loyaltyRewards"
    LOYALTY_MEMBERS = "loyaltyMembers"
    LOYALTY_POINTS_HISTORY = "loyaltyPointsHistory"
    LOYALTY_REDEMPTIONS = "loyaltyRedemptions"
    LOYALTY_REFERRALS = "loyaltyReferrals"


class DeleteBehavior(str, Enum):
    CASCADE = "cascade"
    SET_NULL = "set-null"
    MANUAL = "manual"


@dataclass(frozen=True)
class EntityEdge:
    parent: EntityType
    dependent: EntityType
    behavior: DeleteBehavior


@dataclass(frozen=True)
class EntityRegistration:
    """
    How to find a tenant's rows of one entity type.

    Direct scope: `model.tenant_id == tenant_id`.
    Indirect scope: `getattr(model, via_column).in_(id_sets[via_parent])`.
    """

    entity_type: EntityType
    model: Any
    via_parent: EntityType | None = None
    via_column: str | None = None

    @property
    def is_direct(self) -> bool:
        return self.via_parent is None

    def scope_clause(self, tenant_id: uuid.UUID, id_sets: Mapping[EntityType, list[uuid.UUID]]):
        """
        WHERE clause selecting this tenant's rows, or None when the tenant
        cannot have any (indirect scope over an empty parent set).
        """
        if self.is_direct:
            return self.model.tenant_id == tenant_id

        parent_ids = id_sets.get(self.via_parent) or []
        if not parent_ids:
            return None
        return getattr(self.model, self.via_column).in_(parent_ids)


# Declaration order doubles as the planner's tie-breaker.
ENTITY_REGISTRY: dict[EntityType, EntityRegistration] = {
    reg.entity_type: reg
    for reg in (
        EntityRegistration(EntityType.STAFF, Staff),
        EntityRegistration(EntityType.PATIENTS, Patient),
        EntityRegistration(EntityType.APPOINTMENTS, Appointment),
        EntityRegistration(EntityType.TRANSACTIONS, Transaction),
        EntityRegistration(EntityType.QUOTES, Quote),
        EntityRegistration(EntityType.PRESCRIPTIONS, Prescription),
        EntityRegistration(EntityType.INVENTORY_PRODUCTS, InventoryProduct),
        EntityRegistration(EntityType.STOCK_MOVEMENTS, StockMovement),
        EntityRegistration(
            EntityType.PRODUCT_PROCEDURES,
            ProductProcedure,
            via_parent=EntityType.INVENTORY_PRODUCTS,
            via_column="product_id",
        ),
        EntityRegistration(EntityType.STOCK_ALERTS, StockAlert),
        EntityRegistration(EntityType.CATEGORIES, Category),
        EntityRegistration(EntityType.MONTHLY_TARGETS, MonthlyTarget),
        EntityRegistration(EntityType.CHAT_THREADS, ChatThread),
        EntityRegistration(EntityType.CHAT_MESSAGES, ChatMessage),
        EntityRegistration(EntityType.LOYALTY_REWARDS, LoyaltyReward),
        EntityRegistration(EntityType.LOYALTY_MEMBERS, LoyaltyMember),
        EntityRegistration(
            EntityType.LOYALTY_POINTS_HISTORY,
            LoyaltyPointsHistory,
            via_parent=EntityType.LOYALTY_MEMBERS,
            via_column="member_id",
        ),
        EntityRegistration(
            EntityType.LOYALTY_REDEMPTIONS,
            LoyaltyRedemption,
            via_parent=EntityType.LOYALTY_MEMBERS,
            via_column="member_id",
        ),
        EntityRegistration(
            EntityType.LOYALTY_REFERRALS,
            LoyaltyReferral,
            via_parent=EntityType.LOYALTY_MEMBERS,
            via_column="referrer_id",
        ),
    )
}


def _edges(parent: EntityType, behavior: DeleteBehavior, *dependents: EntityType) -> list[EntityEdge]:
    return [EntityEdge(parent, dep, behavior) for dep in dependents]


ENTITY_EDGES: list[EntityEdge] = [
    *_edges(EntityType.PATIENTS, DeleteBehavior.SET_NULL, EntityType.APPOINTMENTS, EntityType.QUOTES),
    *_edges(EntityType.PATIENTS, DeleteBehavior.MANUAL, EntityType.PRESCRIPTIONS, EntityType.LOYALTY_MEMBERS),
    *_edges(
        EntityType.STAFF,
        DeleteBehavior.SET_NULL,
        EntityType.APPOINTMENTS,
        EntityType.STOCK_MOVEMENTS,
        EntityType.PRESCRIPTIONS,
    ),
    *_edges(
        EntityType.INVENTORY_PRODUCTS,
        DeleteBehavior.CASCADE,
        EntityType.STOCK_MOVEMENTS,
        EntityType.STOCK_ALERTS,
        EntityType.PRODUCT_PROCEDURES,
    ),
    *_edges(EntityType.CHAT_THREADS, DeleteBehavior.MANUAL, EntityType.CHAT_MESSAGES),
    *_edges(
        EntityType.LOYALTY_MEMBERS,
        DeleteBehavior.MANUAL,
        EntityType.LOYALTY_POINTS_HISTORY,
        EntityType.LOYALTY_REDEMPTIONS,
        EntityType.LOYALTY_REFERRALS,
    ),
    *_edges(EntityType.LOYALTY_REWARDS, DeleteBehavior.MANUAL, EntityType.LOYALTY_REDEMPTIONS),
]


@dataclass(frozen=True)
class EntityGraph:
    nodes: list[EntityType]
    edges: list[EntityEdge]


DEFAULT_GRAPH = EntityGraph(nodes=list(ENTITY_REGISTRY), edges=ENTITY_EDGES)


def id_set_parents(registry: Mapping[EntityType, EntityRegistration] | None = None) -> list[EntityType]:
    """
    Parent types whose id sets indirect scopes depend on, in registry order.
    """
    registry = registry or ENTITY_REGISTRY
    parents: list[EntityType] = []
    for reg in registry.values():
        if reg.via_parent is not None and reg.via_parent not in parents:
            parents.append(reg.via_parent)
    return parents


def resolve_identifier_sets(db: Session, tenant_id: uuid.UUID, deadline=None) -> dict[EntityType, list[uuid.UUID]]:
    """
    Load, once, the ids of every parent that indirect scopes go through.

    One SELECT per parent type. The result is threaded into counting and
    deletion so nothing re-queries member/product ids inside a loop.
    """
    id_sets: dict[EntityType, list[uuid.UUID]] = {}
    for parent in id_set_parents():
        if deadline is not None:
            deadline.guard(db, f"resolve:{parent.value}")
        model = ENTITY_REGISTRY[parent].model
        id_sets[parent] = list(db.scalars(select(model.id).where(model.tenant_id == tenant_id)).all())
    return id_sets
