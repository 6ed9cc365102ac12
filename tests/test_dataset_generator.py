import random
import uuid
from collections import Counter, defaultdict
from datetime import timedelta

import pytest

from app.core.entity_graph import EntityType
from app.models.inventory import StockAlertType, StockMovementType
from app.models.loyalty import PointsSource
from app.models.transaction import TransactionType
from app.services import seed_catalog as catalog
from app.services.dataset_generator import build_dataset
from tests.factories import NOW


@pytest.fixture
def tenant_id():
    return uuid.uuid4()


@pytest.fixture
def dataset(tenant_id):
    return build_dataset(tenant_id, rng=random.Random(7), now=NOW)


def _ids(dataset, entity_type):
    return {row["id"] for row in dataset.rows[entity_type]}


class TestShape:
    def test_fixed_size_entities(self, dataset):
        assert dataset.count(EntityType.STAFF) == len(catalog.STAFF)
        assert dataset.count(EntityType.PATIENTS) == len(catalog.PATIENTS)
        assert dataset.count(EntityType.INVENTORY_PRODUCTS) == len(catalog.INVENTORY_PRODUCTS)
        assert dataset.count(EntityType.CATEGORIES) == len(catalog.CATEGORIES)
        assert dataset.count(EntityType.LOYALTY_REWARDS) == len(catalog.LOYALTY_REWARDS)
        assert dataset.count(EntityType.CHAT_THREADS) == len(catalog.LEADS)
        assert dataset.count(EntityType.QUOTES) == catalog.QUOTE_COUNT
        assert dataset.count(EntityType.PRESCRIPTIONS) == catalog.PRESCRIPTION_COUNT
        assert dataset.count(EntityType.LOYALTY_MEMBERS) == (len(catalog.PATIENTS) + 1) // 2
        assert dataset.count(EntityType.MONTHLY_TARGETS) == len(catalog.TARGET_MONTH_OFFSETS)

    def test_every_entity_type_is_present(self, dataset):
        assert set(dataset.rows) == set(EntityType)

    def test_rows_of_one_type_share_keys(self, dataset):
        for entity_type, rows in dataset.rows.items():
            if rows:
                keys = set(rows[0])
                assert all(set(row) == keys for row in rows), entity_type

    def test_direct_rows_carry_the_tenant(self, dataset, tenant_id):
        for entity_type, rows in dataset.rows.items():
            for row in rows:
                if "tenant_id" in row:
                    assert row["tenant_id"] == tenant_id, entity_type

    def test_same_seed_same_values(self, tenant_id):
        first = build_dataset(tenant_id, rng=random.Random(3), now=NOW)
        second = build_dataset(tenant_id, rng=random.Random(3), now=NOW)

        def _strip(rows):
            return [{k: v for k, v in row.items() if not k.endswith("id") and k != "tags"} for row in rows]

        for entity_type in (EntityType.APPOINTMENTS, EntityType.TRANSACTIONS, EntityType.LOYALTY_MEMBERS):
            assert _strip(first.rows[entity_type]) == _strip(second.rows[entity_type])


class TestReferences:
    def test_foreign_keys_point_into_the_same_run(self, dataset):
        patients = _ids(dataset, EntityType.PATIENTS)
        staff = _ids(dataset, EntityType.STAFF)
        products = _ids(dataset, EntityType.INVENTORY_PRODUCTS)
        threads = _ids(dataset, EntityType.CHAT_THREADS)
        members = _ids(dataset, EntityType.LOYALTY_MEMBERS)
        rewards = _ids(dataset, EntityType.LOYALTY_REWARDS)

        for row in dataset.rows[EntityType.APPOINTMENTS]:
            assert row["patient_id"] in patients
            assert row["staff_id"] in staff
        for row in dataset.rows[EntityType.QUOTES]:
            assert row["patient_id"] in patients
        for row in dataset.rows[EntityType.PRESCRIPTIONS]:
            assert row["patient_id"] in patients
            assert row["professional_id"] in staff
        for entity_type in (EntityType.STOCK_MOVEMENTS, EntityType.STOCK_ALERTS, EntityType.PRODUCT_PROCEDURES):
            for row in dataset.rows[entity_type]:
                assert row["product_id"] in products
        for row in dataset.rows[EntityType.CHAT_MESSAGES]:
            assert row["thread_id"] in threads
        for row in dataset.rows[EntityType.LOYALTY_MEMBERS]:
            assert row["patient_id"] in patients
        for row in dataset.rows[EntityType.LOYALTY_POINTS_HISTORY]:
            assert row["member_id"] in members
        for row in dataset.rows[EntityType.LOYALTY_REDEMPTIONS]:
            assert row["member_id"] in members
            assert row["reward_id"] in rewards
        for row in dataset.rows[EntityType.LOYALTY_REFERRALS]:
            assert row["referrer_id"] in members

    def test_front_desk_gets_no_appointments(self, dataset):
        front_desk = {row["id"] for row in dataset.rows[EntityType.STAFF] if row["commission_rate"] == 0}
        assert front_desk
        assert not any(row["staff_id"] in front_desk for row in dataset.rows[EntityType.APPOINTMENTS])


class TestAgendaAndFinance:
    def test_appointments_window_skips_sundays(self, dataset):
        today = NOW.date()
        rows = dataset.rows[EntityType.APPOINTMENTS]
        assert rows
        for row in rows:
            day = row["start_time"].date()
            assert today - timedelta(days=7) <= day <= today + timedelta(days=13)
            assert day.weekday() != 6
            assert row["end_time"] > row["start_time"]

    def test_no_zero_revenue_and_tags_name_a_professional(self, dataset):
        staff = {str(row["id"]): row["name"] for row in dataset.rows[EntityType.STAFF]}
        for row in dataset.rows[EntityType.TRANSACTIONS]:
            assert row["amount"] > 0
            if row["type"] == TransactionType.REVENUE:
                staff_id, name = row["tags"].split(",", 1)
                assert staff[staff_id] == name

    def test_monthly_targets_are_unique_per_month(self, dataset):
        months = [row["month_year"] for row in dataset.rows[EntityType.MONTHLY_TARGETS]]
        assert len(months) == len(set(months))


class TestInventory:
    def test_movements_walk_down_to_current_stock(self, dataset):
        by_product = defaultdict(list)
        for row in dataset.rows[EntityType.STOCK_MOVEMENTS]:
            by_product[row["product_id"]].append(row)

        for product in dataset.rows[EntityType.INVENTORY_PRODUCTS]:
            movements = by_product[product["id"]]
            assert movements[0]["type"] == StockMovementType.ENTRY
            assert movements[0]["previous_stock"] == 0
            for earlier, later in zip(movements, movements[1:]):
                assert later["previous_stock"] == earlier["new_stock"]
            assert movements[-1]["new_stock"] == product["current_stock"]
            assert all(m["new_stock"] >= 0 for m in movements)
            assert all(earlier["created_at"] <= later["created_at"] for earlier, later in zip(movements, movements[1:]))

    @pytest.mark.parametrize("seed", range(40))
    def test_movement_history_is_chronological(self, tenant_id, seed):
        dataset = build_dataset(tenant_id, rng=random.Random(seed), now=NOW)
        by_product = defaultdict(list)
        for row in dataset.rows[EntityType.STOCK_MOVEMENTS]:
            by_product[row["product_id"]].append(row)

        for movements in by_product.values():
            stamps = [m["created_at"] for m in movements]
            assert stamps == sorted(stamps)
            assert all(m["created_at"] <= NOW for m in movements)

    def test_alerts_are_unique_and_cover_catalogue_cases(self, dataset):
        alerts = dataset.rows[EntityType.STOCK_ALERTS]
        keys = [(row["product_id"], row["alert_type"]) for row in alerts]
        assert len(keys) == len(set(keys))

        kinds = Counter(row["alert_type"] for row in alerts)
        assert kinds[StockAlertType.LOW_STOCK] == 2
        assert kinds[StockAlertType.EXPIRED] == 1
        assert kinds[StockAlertType.EXPIRING] >= 1


class TestLoyalty:
    def test_points_are_the_sum_of_history(self, dataset):
        history = defaultdict(list)
        for row in dataset.rows[EntityType.LOYALTY_POINTS_HISTORY]:
            history[row["member_id"]].append(row)
        spent = Counter()
        for row in dataset.rows[EntityType.LOYALTY_REDEMPTIONS]:
            spent[row["member_id"]] += row["points_spent"]

        for member in dataset.rows[EntityType.LOYALTY_MEMBERS]:
            events = history[member["id"]]
            sources = Counter(e["source"] for e in events)
            assert member["total_points"] == sum(e["points"] for e in events)
            assert member["available_points"] == member["total_points"] - spent[member["id"]]
            assert member["available_points"] >= 0
            assert member["total_consultations"] == sources[PointsSource.CONSULTATION]
            assert member["total_procedures"] == sources[PointsSource.PROCEDURE]
            assert member["total_referrals"] == sources[PointsSource.REFERRAL]

    def test_referral_rows_match_referral_events(self, dataset):
        per_member = Counter(row["referrer_id"] for row in dataset.rows[EntityType.LOYALTY_REFERRALS])
        for member in dataset.rows[EntityType.LOYALTY_MEMBERS]:
            assert per_member[member["id"]] == member["total_referrals"]

    def test_tiers_follow_thresholds(self, dataset):
        for member in dataset.rows[EntityType.LOYALTY_MEMBERS]:
            expected = next(
                (tier for threshold, tier in catalog.TIER_THRESHOLDS if member["total_points"] >= threshold),
                "BRONZE",
            )
            assert member["tier"].value == expected

    def test_codes_are_unique(self, dataset, tenant_id):
        referral_codes = [row["referral_code"] for row in dataset.rows[EntityType.LOYALTY_MEMBERS]]
        assert len(referral_codes) == len(set(referral_codes))

        coupons = [row["code"] for row in dataset.rows[EntityType.LOYALTY_REDEMPTIONS]]
        assert len(coupons) == len(set(coupons))
        assert all(code.startswith(f"CPN-{tenant_id.hex[:6].upper()}-") for code in coupons)
