# app/services/dataset_generator.py
"""
Synthetic tenant dataset for demos and testing.

build_dataset() is pure: no DB, no clock, no global RNG. Everything random
comes from the `rng` argument and every timestamp is relative to `now`.

Ids are assigned here (uuid4), so dependent rows reference parents from the
same run and the whole batch can be inserted parents-first without reading
anything back.

Rows are plain dicts keyed by model attribute. All rows of one entity type
carry the same keys.
"""

from __future__ import annotations

import calendar
import logging
import math
import random
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from app.core.entity_graph import EntityType
from app.models.appointment import AppointmentStatus
from app.models.category import CategoryType
from app.models.chat import CrmStage, MessageDirection
from app.models.inventory import StockAlertType, StockMovementType, StockUnit
from app.models.loyalty import (
    LoyaltyTier,
    PointsSource,
    RedemptionStatus,
    ReferralStatus,
    RewardCategory,
    RewardType,
)
from app.models.prescription import PrescriptionStatus
from app.models.quote import QuoteStatus
from app.models.transaction import TransactionType
from app.services import seed_catalog as catalog

logger = logging.getLogger(__name__)

Row = dict[str, Any]

_CENT = Decimal("0.01")


@dataclass
class SyntheticDataset:
    tenant_id: uuid.UUID
    rows: dict[EntityType, list[Row]] = field(default_factory=dict)

    def count(self, entity_type: EntityType) -> int:
        return len(self.rows.get(entity_type, []))

    def counts(self) -> dict[EntityType, int]:
        return {entity_type: len(rows) for entity_type, rows in self.rows.items()}


# ----------------------------
# Helpers
# ----------------------------
def _vary(amount: Decimal, rng: random.Random, spread: float = 0.10) -> Decimal:
    """
    Catalogue price +/- spread, to the cent.
    """
    factor = Decimal(str(1 - spread + rng.random() * 2 * spread))
    return (amount * factor).quantize(_CENT, rounding=ROUND_HALF_UP)


def _at(day: date, hour: int, minute: int, now: datetime) -> datetime:
    return datetime.combine(day, time(hour, minute), tzinfo=now.tzinfo)


def _slot(rng: random.Random) -> tuple[int, int]:
    hour = rng.randint(catalog.OPENING_HOUR, catalog.CLOSING_HOUR - 1)
    minute = 0 if rng.random() < 0.5 else 30
    return hour, minute


def _month_shift(year: int, month: int, offset: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def _tier_for(total_points: int) -> LoyaltyTier:
    for threshold, tier in catalog.TIER_THRESHOLDS:
        if total_points >= threshold:
            return LoyaltyTier[tier]
    return LoyaltyTier.BRONZE


def _is_front_desk(staff: Row) -> bool:
    return staff["commission_rate"] == 0


# ----------------------------
# People
# ----------------------------
def _staff(tenant_id: uuid.UUID, now: datetime) -> list[Row]:
    return [
        {"id": uuid.uuid4(), "tenant_id": tenant_id, "created_at": now, **entry}
        for entry in catalog.STAFF
    ]


def _patients(tenant_id: uuid.UUID, now: datetime) -> list[Row]:
    rows = []
    for entry in catalog.PATIENTS:
        rows.append(
            {
                "id": uuid.uuid4(),
                "tenant_id": tenant_id,
                **entry,
                "birth_date": date.fromisoformat(entry["birth_date"]),
                "created_at": now,
            }
        )
    return rows


# ----------------------------
# Agenda
# ----------------------------
def _appointments(
    tenant_id: uuid.UUID,
    patients: list[Row],
    staff: list[Row],
    rng: random.Random,
    now: datetime,
) -> list[Row]:
    """
    Seven days back to thirteen days ahead, Sundays off.

    Past days: 4-6 slots, completed (10% canceled).
    Today and ahead: 3-6 slots; today's slots before the current hour are
    completed, the rest scheduled / confirmed / canceled.
    """
    practitioners = [s for s in staff if not _is_front_desk(s)]
    today = now.date()
    rows: list[Row] = []

    for offset in range(-7, 14):
        day = today + timedelta(days=offset)
        if day.weekday() == 6:
            continue

        per_day = rng.randint(4, 6) if offset < 0 else rng.randint(3, 6)
        for _ in range(per_day):
            hour, minute = _slot(rng)
            procedure = rng.choice(catalog.PROCEDURES)
            patient = rng.choice(patients)
            professional = rng.choice(practitioners)
            start = _at(day, hour, minute, now)

            if offset < 0:
                status = AppointmentStatus.COMPLETED if rng.random() >= 0.1 else AppointmentStatus.CANCELED
                notes = None
            else:
                roll = rng.random()
                if offset == 0 and hour < now.hour:
                    status = AppointmentStatus.COMPLETED
                elif roll < 0.20:
                    status = AppointmentStatus.CONFIRMED
                elif roll < 0.25:
                    status = AppointmentStatus.CANCELED
                else:
                    status = AppointmentStatus.SCHEDULED
                notes = catalog.APPOINTMENT_NOTE if rng.random() < 0.3 else None

            rows.append(
                {
                    "id": uuid.uuid4(),
                    "tenant_id": tenant_id,
                    "patient_id": patient["id"],
                    "staff_id": professional["id"],
                    "patient_name": patient["name"],
                    "service_name": procedure["name"],
                    "start_time": start,
                    "end_time": start + timedelta(minutes=procedure["duration"]),
                    "status": status,
                    "notes": notes,
                    "created_at": now,
                }
            )
    return rows


# ----------------------------
# Finance
# ----------------------------
def _transactions(
    tenant_id: uuid.UUID,
    patients: list[Row],
    staff: list[Row],
    rng: random.Random,
    now: datetime,
) -> list[Row]:
    """
    Trailing three months, current month only up to today.

    Revenue: 2-4 draws per day (3-5 this month); zero-priced entries are
    skipped. Each revenue row is tagged "<staff_id>,<staff_name>" of a
    commissioned professional.
    Expenses: every catalogue entry once per month, on a random day.
    """
    commissioned = [s for s in staff if not _is_front_desk(s)]
    rows: list[Row] = []

    def _row(**values) -> Row:
        base = {
            "id": uuid.uuid4(),
            "tenant_id": tenant_id,
            "patient_name": None,
            "payment_method": None,
            "is_paid": True,
            "tags": None,
            "created_at": now,
        }
        base.update(values)
        return base

    for month_offset in range(-2, 1):
        year, month = _month_shift(now.year, now.month, month_offset)
        days_in_month = calendar.monthrange(year, month)[1]
        last_day = min(now.day, days_in_month) if month_offset == 0 else days_in_month

        for day_no in range(1, last_day + 1):
            draws = rng.randint(3, 5) if month_offset == 0 else rng.randint(2, 4)
            for _ in range(draws):
                entry = rng.choice(catalog.REVENUE_CATALOG)
                if entry["amount"] == 0:
                    continue
                patient = rng.choice(patients)
                professional = rng.choice(commissioned)
                hour, minute = _slot(rng)
                rows.append(
                    _row(
                        description=entry["description"],
                        amount=_vary(entry["amount"], rng),
                        type=TransactionType.REVENUE,
                        category=entry["category"],
                        date=_at(date(year, month, day_no), hour, minute, now),
                        patient_name=patient["name"],
                        payment_method=entry["payment_method"],
                        tags=f"{professional['id']},{professional['name']}",
                    )
                )

        for entry in catalog.EXPENSE_CATALOG:
            day_no = rng.randint(1, last_day)
            rows.append(
                _row(
                    description=entry["description"],
                    amount=entry["amount"],
                    type=TransactionType.EXPENSE,
                    category=entry["category"],
                    date=_at(date(year, month, day_no), 0, 0, now),
                )
            )
    return rows


def _quotes(tenant_id: uuid.UUID, patients: list[Row], rng: random.Random, now: datetime) -> list[Row]:
    rows = []
    for _ in range(catalog.QUOTE_COUNT):
        template = rng.choice(catalog.QUOTE_TEMPLATES)
        patient = rng.choice(patients)
        created_at = now - timedelta(days=rng.randint(0, 29))
        rows.append(
            {
                "id": uuid.uuid4(),
                "tenant_id": tenant_id,
                "patient_id": patient["id"],
                "patient_name": patient["name"],
                "items": [dict(item) for item in template["items"]],
                "total_amount": template["total"],
                "status": rng.choice(list(QuoteStatus)),
                "created_at": created_at,
                "valid_until": created_at + timedelta(days=catalog.QUOTE_VALID_DAYS),
            }
        )
    return rows


def _monthly_targets(tenant_id: uuid.UUID, rng: random.Random, now: datetime) -> list[Row]:
    rows = []
    for offset in catalog.TARGET_MONTH_OFFSETS:
        year, month = _month_shift(now.year, now.month, offset)
        base_revenue, base_purchases = catalog.TARGET_BASE_PAST if offset <= 0 else catalog.TARGET_BASE_FUTURE
        rows.append(
            {
                "id": uuid.uuid4(),
                "tenant_id": tenant_id,
                "month_year": f"{year:04d}-{month:02d}",
                "planned_revenue": base_revenue
                + rng.randint(-catalog.TARGET_REVENUE_SPREAD, catalog.TARGET_REVENUE_SPREAD),
                "planned_purchases": base_purchases
                + rng.randint(-catalog.TARGET_PURCHASES_SPREAD, catalog.TARGET_PURCHASES_SPREAD),
            }
        )
    return rows


def _categories(tenant_id: uuid.UUID) -> list[Row]:
    return [
        {"id": uuid.uuid4(), "tenant_id": tenant_id, "name": name, "type": CategoryType[kind]}
        for name, kind in catalog.CATEGORIES
    ]


# ----------------------------
# Inventory
# ----------------------------
def _inventory_products(tenant_id: uuid.UUID, now: datetime) -> list[Row]:
    rows = []
    for entry in catalog.INVENTORY_PRODUCTS:
        values = {k: v for k, v in entry.items() if k != "expires_in_days"}
        values["unit"] = StockUnit[entry["unit"]]
        rows.append(
            {
                "id": uuid.uuid4(),
                "tenant_id": tenant_id,
                **values,
                "expiration_date": now + timedelta(days=entry["expires_in_days"]),
                "created_at": now,
            }
        )
    return rows


def _stock_movements(
    tenant_id: uuid.UUID,
    products: list[Row],
    patients: list[Row],
    staff: list[Row],
    rng: random.Random,
    now: datetime,
) -> list[Row]:
    """
    Per product: one purchase entry, then exits (and maybe a loss) that walk
    the stock down to exactly `current_stock`.
    """
    practitioners = [s for s in staff if not _is_front_desk(s)]
    rows: list[Row] = []

    for product in products:
        current = product["current_stock"]
        unit_cost = product["cost_price"]
        entry_days_ago = rng.randint(30, 59)
        initial = current + rng.randint(5, 14)

        def _movement(kind: StockMovementType, quantity: int, before: int, when: datetime, **extra) -> Row:
            row = {
                "id": uuid.uuid4(),
                "tenant_id": tenant_id,
                "product_id": product["id"],
                "staff_id": None,
                "type": kind,
                "quantity": quantity,
                "previous_stock": before,
                "new_stock": before + quantity if kind == StockMovementType.ENTRY else before - quantity,
                "unit_cost": unit_cost,
                "total_cost": unit_cost * quantity,
                "reason": None,
                "patient_name": None,
                "batch_number": None,
                "expiration_date": None,
                "invoice_number": None,
                "created_at": when,
            }
            row.update(extra)
            return row

        rows.append(
            _movement(
                StockMovementType.ENTRY,
                initial,
                0,
                now - timedelta(days=entry_days_ago),
                reason="Purchase invoice",
                batch_number=product["batch_number"],
                expiration_date=product["expiration_date"],
                invoice_number=f"INV-{rng.randint(0, 9999):04d}",
            )
        )

        # Decide quantities first, then hand out dates in chronological order.
        usages: list[int] = []
        running = initial
        for _ in range(rng.randint(2, 9)):
            if running <= current:
                break
            quantity = min(rng.randint(1, 3), running - current)
            usages.append(quantity)
            running -= quantity
        lost = 1 if running > current and rng.random() > 0.8 else 0
        running -= lost

        dates = sorted((rng.randint(0, entry_days_ago - 1) for _ in usages), reverse=True)
        level = initial
        for quantity, days_ago in zip(usages, dates):
            rows.append(
                _movement(
                    StockMovementType.EXIT,
                    quantity,
                    level,
                    now - timedelta(days=days_ago),
                    staff_id=rng.choice(practitioners)["id"],
                    reason="Used in procedure",
                    patient_name=rng.choice(patients)["name"],
                )
            )
            level -= quantity

        if lost:
            # The loss follows the last exit in the chain.
            last_days_ago = dates[-1] if dates else entry_days_ago - 1
            rows.append(
                _movement(
                    StockMovementType.LOSS,
                    lost,
                    level,
                    now - timedelta(days=rng.randint(0, min(last_days_ago, 14))),
                    reason="Accidental drop / contamination",
                )
            )
            level -= lost

        if level > current:
            rows.append(
                _movement(
                    StockMovementType.EXIT,
                    level - current,
                    level,
                    now,
                    reason="Stock count adjustment",
                )
            )
    return rows


def _product_procedures(products: list[Row]) -> list[Row]:
    by_name = {p["name"]: p for p in products}
    rows = []
    for procedure_name, items in catalog.PROCEDURE_PRODUCTS.items():
        for product_name, quantity, required in items:
            product = by_name.get(product_name)
            if product is None:
                logger.warning("Procedure %s references unknown product %s", procedure_name, product_name)
                continue
            rows.append(
                {
                    "id": uuid.uuid4(),
                    "product_id": product["id"],
                    "procedure_name": procedure_name,
                    "quantity_per_use": quantity,
                    "is_required": required,
                    "notes": None if required else catalog.OPTIONAL_PRODUCT_NOTE,
                }
            )
    return rows


def _stock_alerts(tenant_id: uuid.UUID, products: list[Row], rng: random.Random, now: datetime) -> list[Row]:
    """
    At most one alert per (product, alert type).
    """
    rows: list[Row] = []

    def _alert(product: Row, kind: StockAlertType, is_read: bool, days: int | None = None) -> Row:
        return {
            "id": uuid.uuid4(),
            "tenant_id": tenant_id,
            "product_id": product["id"],
            "alert_type": kind,
            "current_stock": product["current_stock"],
            "min_stock": product["min_stock"],
            "expiration_date": product["expiration_date"] if days is not None else None,
            "days_until_expiry": days,
            "is_read": is_read,
        }

    for product in products:
        current, minimum = product["current_stock"], product["min_stock"]
        if 0 < current <= minimum:
            rows.append(_alert(product, StockAlertType.LOW_STOCK, rng.random() > 0.5))
        if current == 0:
            rows.append(_alert(product, StockAlertType.OUT_OF_STOCK, False))

        expires = product["expiration_date"]
        if expires is None:
            continue
        days = math.ceil((expires - now).total_seconds() / 86400)
        if days <= 0:
            rows.append(_alert(product, StockAlertType.EXPIRED, False, days))
        elif days <= catalog.EXPIRY_ALERT_WINDOW_DAYS:
            rows.append(_alert(product, StockAlertType.EXPIRING, rng.random() > 0.7, days))
    return rows


# ----------------------------
# CRM chat
# ----------------------------
def _chat(tenant_id: uuid.UUID, rng: random.Random, now: datetime) -> tuple[list[Row], list[Row]]:
    threads: list[Row] = []
    messages: list[Row] = []

    for lead in catalog.LEADS:
        last_timestamp = now - timedelta(days=rng.randint(0, 13))
        thread = {
            "id": uuid.uuid4(),
            "tenant_id": tenant_id,
            "contact_name": lead["name"],
            "contact_phone": lead["phone"],
            "last_message": lead["last_message"],
            "last_timestamp": last_timestamp,
            "crm_stage": rng.choice(list(CrmStage)),
        }
        threads.append(thread)

        count = min(rng.randint(3, 7), len(catalog.CONVERSATION_SCRIPT))
        first_name = lead["name"].split(" ")[0]
        sent_at = last_timestamp - timedelta(hours=count)
        for direction, content in catalog.CONVERSATION_SCRIPT[:count]:
            sent_at += timedelta(minutes=rng.randint(20, 59))
            messages.append(
                {
                    "id": uuid.uuid4(),
                    "tenant_id": tenant_id,
                    "thread_id": thread["id"],
                    "content": content.format(first_name=first_name),
                    "direction": MessageDirection[direction],
                    "timestamp": sent_at,
                    "contact_name": lead["name"],
                    "contact_phone": lead["phone"],
                    "status": "read",
                }
            )
    return threads, messages


# ----------------------------
# Prescriptions
# ----------------------------
def _prescriptions(
    tenant_id: uuid.UUID,
    patients: list[Row],
    staff: list[Row],
    rng: random.Random,
    now: datetime,
) -> list[Row]:
    practitioners = [s for s in staff if not _is_front_desk(s)]
    statuses = [PrescriptionStatus.DRAFT, PrescriptionStatus.SIGNED, PrescriptionStatus.SENT]
    rows = []

    for _ in range(catalog.PRESCRIPTION_COUNT):
        template = rng.choice(catalog.PRESCRIPTION_TEMPLATES)
        patient = rng.choice(patients)
        professional = rng.choice(practitioners)
        created_at = now - timedelta(days=rng.randint(0, 59))
        status = rng.choice(statuses)

        signed_at = created_at + timedelta(hours=2) if status != PrescriptionStatus.DRAFT else None
        sent_at = signed_at + timedelta(minutes=30) if status == PrescriptionStatus.SENT else None
        crm = None
        if professional["name"].startswith("Dr."):
            crm = f"CRM-SP {rng.randint(0, 99999):05d}"

        rows.append(
            {
                "id": uuid.uuid4(),
                "tenant_id": tenant_id,
                "patient_id": patient["id"],
                "professional_id": professional["id"],
                "patient_name": patient["name"],
                "professional_name": professional["name"],
                "professional_crm": crm,
                "professional_specialty": professional["role"],
                "items": [dict(item) for item in template["items"]],
                "diagnosis": template["diagnosis"],
                "additional_notes": catalog.PRESCRIPTION_NOTE if rng.random() > 0.7 else None,
                "status": status,
                "signed_at": signed_at,
                "sent_at": sent_at,
                "sent_via": ["whatsapp"] if status == PrescriptionStatus.SENT else [],
                "valid_until": created_at + timedelta(days=catalog.PRESCRIPTION_VALID_DAYS),
                "is_controlled": False,
                "created_at": created_at,
                "updated_at": created_at,
            }
        )
    return rows


# ----------------------------
# Loyalty
# ----------------------------
@dataclass
class _LoyaltyRows:
    rewards: list[Row] = field(default_factory=list)
    members: list[Row] = field(default_factory=list)
    history: list[Row] = field(default_factory=list)
    referrals: list[Row] = field(default_factory=list)
    redemptions: list[Row] = field(default_factory=list)


def _referral_code(name: str, rng: random.Random, taken: set[str]) -> str:
    prefix = "".join(ch for ch in name.upper() if ch.isalpha())[:5]
    while True:
        code = f"{prefix}{rng.randint(0, 9999):04d}"
        if code not in taken:
            taken.add(code)
            return code


def _loyalty(tenant_id: uuid.UUID, patients: list[Row], rng: random.Random, now: datetime) -> _LoyaltyRows:
    """
    Members are the first half of the patients.

    Every point a member has comes from a history row: counts of simulated
    consultations / procedures / referrals / bonuses are drawn first, one
    history row is written per event, and the totals are the sum of those
    rows. Referral events also produce a referral row.
    """
    out = _LoyaltyRows()

    for entry in catalog.LOYALTY_REWARDS:
        out.rewards.append(
            {
                "id": uuid.uuid4(),
                "tenant_id": tenant_id,
                **entry,
                "type": RewardType[entry["type"]],
                "tier": LoyaltyTier[entry["tier"]] if entry["tier"] else None,
                "category": RewardCategory[entry["category"]],
            }
        )

    taken_codes: set[str] = set()
    for patient in patients[: math.ceil(len(patients) / 2)]:
        member_id = uuid.uuid4()
        joined_days_ago = rng.randint(30, 394)
        consultations = rng.randint(5, 24)
        procedures = rng.randint(3, 17)
        referrals = rng.randint(0, 4)
        bonuses = rng.randint(0, 2)

        def _event(points: int, source: PointsSource, description: str, max_days_ago: int) -> Row:
            row = {
                "id": uuid.uuid4(),
                "member_id": member_id,
                "points": points,
                "source": source,
                "description": description,
                "created_at": now - timedelta(days=rng.randint(0, max_days_ago)),
            }
            out.history.append(row)
            return row

        for _ in range(consultations):
            _event(catalog.POINTS_PER_CONSULTATION, PointsSource.CONSULTATION, "Consultation completed", joined_days_ago)
        for _ in range(procedures):
            name = rng.choice(catalog.LOYALTY_PROCEDURE_NAMES)
            _event(catalog.POINTS_PER_PROCEDURE, PointsSource.PROCEDURE, f"{name} completed", joined_days_ago)
        for _ in range(referrals):
            event = _event(catalog.POINTS_PER_REFERRAL, PointsSource.REFERRAL, "Friend referral", min(joined_days_ago, 179))
            out.referrals.append(
                {
                    "id": uuid.uuid4(),
                    "referrer_id": member_id,
                    "referred_name": rng.choice(catalog.REFERRED_FRIENDS),
                    "referred_phone": f"(11) 9{rng.randint(1000, 9999)}-{rng.randint(1000, 9999)}",
                    "status": ReferralStatus.CONVERTED,
                    "points_awarded": catalog.POINTS_PER_REFERRAL,
                    "created_at": event["created_at"],
                }
            )
        for _ in range(bonuses):
            _event(catalog.POINTS_PER_BONUS, PointsSource.BONUS, "Special bonus", joined_days_ago)

        member_history = [h for h in out.history if h["member_id"] == member_id]
        total_points = sum(h["points"] for h in member_history)
        out.members.append(
            {
                "id": member_id,
                "tenant_id": tenant_id,
                "patient_id": patient["id"],
                "patient_name": patient["name"],
                "total_points": total_points,
                "available_points": total_points,
                "tier": _tier_for(total_points),
                "total_consultations": consultations,
                "total_procedures": procedures,
                "total_referrals": referrals,
                "referral_code": _referral_code(patient["name"], rng, taken_codes),
                "joined_at": now - timedelta(days=joined_days_ago),
                "last_activity_at": max(h["created_at"] for h in member_history),
            }
        )

    taken_coupons: set[str] = set()
    for member in out.members[: catalog.REDEEMING_MEMBERS]:
        reward = rng.choice(out.rewards)
        if member["available_points"] < reward["points_cost"]:
            continue

        created_at = now - timedelta(days=rng.randint(0, 29))
        expires_at = created_at + timedelta(days=reward["valid_days"])
        if expires_at < now:
            status = RedemptionStatus.EXPIRED
        elif rng.random() > 0.7:
            status = RedemptionStatus.USED
        else:
            status = RedemptionStatus.PENDING
        used_at = created_at + (expires_at - created_at) * rng.random() if status == RedemptionStatus.USED else None

        # Redemption codes are unique across tenants, hence the tenant prefix.
        while True:
            code = f"CPN-{tenant_id.hex[:6].upper()}-{rng.randint(0, 999999):06d}"
            if code not in taken_coupons:
                taken_coupons.add(code)
                break

        out.redemptions.append(
            {
                "id": uuid.uuid4(),
                "member_id": member["id"],
                "reward_id": reward["id"],
                "reward_name": reward["name"],
                "points_spent": reward["points_cost"],
                "status": status,
                "code": code,
                "created_at": created_at,
                "expires_at": expires_at,
                "used_at": used_at,
            }
        )
        member["available_points"] -= reward["points_cost"]

    return out


# ----------------------------
# Entry point
# ----------------------------
def build_dataset(tenant_id: uuid.UUID, *, rng: random.Random, now: datetime) -> SyntheticDataset:
    """
    Build every row of a demo tenant, parents first.
    """
    staff = _staff(tenant_id, now)
    patients = _patients(tenant_id, now)
    products = _inventory_products(tenant_id, now)
    threads, messages = _chat(tenant_id, rng, now)
    loyalty = _loyalty(tenant_id, patients, rng, now)

    dataset = SyntheticDataset(tenant_id=tenant_id)
    dataset.rows[EntityType.STAFF] = staff
    dataset.rows[EntityType.PATIENTS] = patients
    dataset.rows[EntityType.APPOINTMENTS] = _appointments(tenant_id, patients, staff, rng, now)
    dataset.rows[EntityType.TRANSACTIONS] = _transactions(tenant_id, patients, staff, rng, now)
    dataset.rows[EntityType.QUOTES] = _quotes(tenant_id, patients, rng, now)
    dataset.rows[EntityType.MONTHLY_TARGETS] = _monthly_targets(tenant_id, rng, now)
    dataset.rows[EntityType.INVENTORY_PRODUCTS] = products
    dataset.rows[EntityType.STOCK_MOVEMENTS] = _stock_movements(tenant_id, products, patients, staff, rng, now)
    dataset.rows[EntityType.PRODUCT_PROCEDURES] = _product_procedures(products)
    dataset.rows[EntityType.STOCK_ALERTS] = _stock_alerts(tenant_id, products, rng, now)
    dataset.rows[EntityType.CHAT_THREADS] = threads
    dataset.rows[EntityType.CHAT_MESSAGES] = messages
    dataset.rows[EntityType.CATEGORIES] = _categories(tenant_id)
    dataset.rows[EntityType.PRESCRIPTIONS] = _prescriptions(tenant_id, patients, staff, rng, now)
    dataset.rows[EntityType.LOYALTY_REWARDS] = loyalty.rewards
    dataset.rows[EntityType.LOYALTY_MEMBERS] = loyalty.members
    dataset.rows[EntityType.LOYALTY_POINTS_HISTORY] = loyalty.history
    dataset.rows[EntityType.LOYALTY_REFERRALS] = loyalty.referrals
    dataset.rows[EntityType.LOYALTY_REDEMPTIONS] = loyalty.redemptions

    logger.info(
        "Built synthetic dataset tenant=%s rows=%d",
        tenant_id,
        sum(len(rows) for rows in dataset.rows.values()),
    )
    return dataset
