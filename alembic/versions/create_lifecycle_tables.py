"""create_lifecycle_tables

Revision ID: create_lifecycle_tables
Revises:
Create Date: 2025-02-10 09:30:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "create_lifecycle_tables"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _enum(name: str, *values: str) -> postgresql.ENUM:
    return postgresql.ENUM(*values, name=name, create_type=False)


# Several tables share a type (loyalty_tier_enum), so types are created once, up front.
ENUMS = [
    _enum("tenant_status_enum", "PENDING", "ACTIVE", "SUSPENDED", "INACTIVE"),
    _enum("appointment_status_enum", "SCHEDULED", "CONFIRMED", "COMPLETED", "CANCELED"),
    _enum("transaction_type_enum", "REVENUE", "EXPENSE"),
    _enum("quote_status_enum", "DRAFT", "SENT", "APPROVED", "REJECTED"),
    _enum("category_type_enum", "REVENUE", "EXPENSE_FIXED", "EXPENSE_VARIABLE"),
    _enum("prescription_status_enum", "DRAFT", "SIGNED", "SENT", "CANCELLED"),
    _enum("stock_unit_enum", "UN", "FR", "CX", "PCT", "AMP"),
    _enum("stock_movement_type_enum", "ENTRY", "EXIT", "LOSS"),
    _enum("stock_alert_type_enum", "LOW_STOCK", "OUT_OF_STOCK", "EXPIRING", "EXPIRED"),
    _enum("crm_stage_enum", "NEW", "CONTACTED", "INTERESTED", "SCHEDULED", "CLOSED_WON", "CLOSED_LOST"),
    _enum("message_direction_enum", "INBOUND", "OUTBOUND"),
    _enum("loyalty_tier_enum", "BRONZE", "SILVER", "GOLD", "DIAMOND"),
    _enum("reward_type_enum", "DISCOUNT", "PRODUCT", "PROCEDURE", "VOUCHER"),
    _enum("reward_category_enum", "BEAUTY", "WELLNESS", "SPECIAL"),
    _enum("points_source_enum", "CONSULTATION", "PROCEDURE", "REFERRAL", "BONUS"),
    _enum("redemption_status_enum", "PENDING", "USED", "EXPIRED"),
    _enum("referral_status_enum", "PENDING", "CONVERTED"),
]
E = {e.name: e for e in ENUMS}


def _id() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False)


def _tenant_fk() -> sa.Column:
    return sa.Column(
        "tenant_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("tenants.id"),
        nullable=False,
        index=True,
    )


def _created_at(server_default: bool = True) -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP") if server_default else None,
    )


def _ts(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def upgrade() -> None:
    bind = op.get_bind()
    for enum in ENUMS:
        enum.create(bind, checkfirst=True)

    op.create_table(
        "tenants",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("contact_email", sa.String(length=255), nullable=True),
        sa.Column("status", E["tenant_status_enum"], nullable=False, server_default=sa.text("'ACTIVE'")),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_table(
        "users",
        _id(),
        sa.Column("tenant_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        _created_at(),
        sa.UniqueConstraint("email", "tenant_id", name="uq_users_email_tenant"),
    )

    op.create_table(
        "staff",
        _id(),
        _tenant_fk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=100), nullable=False),
        sa.Column("color", sa.String(length=20), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("commission_rate", sa.Numeric(5, 2), nullable=False, server_default=sa.text("0")),
        _created_at(),
    )
    op.create_table(
        "patients",
        _id(),
        _tenant_fk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("profession", sa.String(length=100), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("marketing_source", sa.String(length=50), nullable=True),
        _created_at(),
    )
    op.create_table(
        "appointments",
        _id(),
        _tenant_fk(),
        sa.Column("patient_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("patients.id", ondelete="SET NULL"), nullable=True),
        sa.Column("staff_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("staff.id", ondelete="SET NULL"), nullable=True),
        sa.Column("patient_name", sa.String(length=255), nullable=False),
        sa.Column("service_name", sa.String(length=255), nullable=False),
        _ts("start_time"),
        _ts("end_time"),
        sa.Column("status", E["appointment_status_enum"], nullable=False),
        sa.Column("notes", sa.String(length=1000), nullable=True),
        _created_at(),
    )
    op.create_table(
        "transactions",
        _id(),
        _tenant_fk(),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("type", E["transaction_type_enum"], nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        _ts("date"),
        sa.Column("patient_name", sa.String(length=255), nullable=True),
        sa.Column("payment_method", sa.String(length=30), nullable=True),
        sa.Column("is_paid", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("tags", sa.String(length=500), nullable=True),
        _created_at(),
    )
    op.create_table(
        "quotes",
        _id(),
        _tenant_fk(),
        sa.Column("patient_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("patients.id", ondelete="SET NULL"), nullable=True),
        sa.Column("patient_name", sa.String(length=255), nullable=False),
        sa.Column("items", sa.JSON(), nullable=False),
        sa.Column("total_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", E["quote_status_enum"], nullable=False),
        _created_at(server_default=False),
        _ts("valid_until"),
    )
    op.create_table(
        "monthly_targets",
        _id(),
        _tenant_fk(),
        sa.Column("month_year", sa.String(length=7), nullable=False),
        sa.Column("planned_revenue", sa.Numeric(12, 2), nullable=False),
        sa.Column("planned_purchases", sa.Numeric(12, 2), nullable=False),
        sa.UniqueConstraint("tenant_id", "month_year", name="uq_monthly_targets_tenant_month"),
    )
    op.create_table(
        "categories",
        _id(),
        _tenant_fk(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", E["category_type_enum"], nullable=False),
    )
    op.create_table(
        "prescriptions",
        _id(),
        _tenant_fk(),
        sa.Column("patient_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("patients.id"), nullable=False),
        sa.Column("professional_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("staff.id", ondelete="SET NULL"), nullable=True),
        sa.Column("patient_name", sa.String(length=255), nullable=False),
        sa.Column("professional_name", sa.String(length=255), nullable=False),
        sa.Column("professional_crm", sa.String(length=50), nullable=True),
        sa.Column("professional_specialty", sa.String(length=100), nullable=True),
        sa.Column("items", sa.JSON(), nullable=False),
        sa.Column("diagnosis", sa.String(length=500), nullable=True),
        sa.Column("additional_notes", sa.String(length=1000), nullable=True),
        sa.Column("status", E["prescription_status_enum"], nullable=False),
        _ts("signed_at", nullable=True),
        _ts("sent_at", nullable=True),
        sa.Column("sent_via", sa.JSON(), nullable=False),
        _ts("valid_until"),
        sa.Column("is_controlled", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at(server_default=False),
        _ts("updated_at"),
    )

    op.create_table(
        "inventory_products",
        _id(),
        _tenant_fk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("unit", E["stock_unit_enum"], nullable=False),
        sa.Column("current_stock", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("min_stock", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("max_stock", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("cost_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("supplier", sa.String(length=255), nullable=True),
        sa.Column("batch_number", sa.String(length=100), nullable=True),
        _ts("expiration_date", nullable=True),
        _created_at(),
    )
    op.create_table(
        "stock_movements",
        _id(),
        _tenant_fk(),
        sa.Column(
            "product_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("inventory_products.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("staff_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("staff.id", ondelete="SET NULL"), nullable=True),
        sa.Column("type", E["stock_movement_type_enum"], nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("previous_stock", sa.Integer(), nullable=False),
        sa.Column("new_stock", sa.Integer(), nullable=False),
        sa.Column("unit_cost", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_cost", sa.Numeric(12, 2), nullable=False),
        sa.Column("reason", sa.String(length=255), nullable=True),
        sa.Column("patient_name", sa.String(length=255), nullable=True),
        sa.Column("batch_number", sa.String(length=100), nullable=True),
        _ts("expiration_date", nullable=True),
        sa.Column("invoice_number", sa.String(length=50), nullable=True),
        _created_at(server_default=False),
    )
    op.create_table(
        "product_procedures",
        _id(),
        sa.Column(
            "product_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("inventory_products.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("procedure_name", sa.String(length=255), nullable=False),
        sa.Column("quantity_per_use", sa.Numeric(10, 3), nullable=False),
        sa.Column("is_required", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("notes", sa.String(length=500), nullable=True),
    )
    op.create_table(
        "stock_alerts",
        _id(),
        _tenant_fk(),
        sa.Column(
            "product_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("inventory_products.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("alert_type", E["stock_alert_type_enum"], nullable=False),
        sa.Column("current_stock", sa.Integer(), nullable=False),
        sa.Column("min_stock", sa.Integer(), nullable=False),
        _ts("expiration_date", nullable=True),
        sa.Column("days_until_expiry", sa.Integer(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.UniqueConstraint("product_id", "alert_type", name="uq_stock_alerts_product_type"),
    )

    op.create_table(
        "chat_threads",
        _id(),
        _tenant_fk(),
        sa.Column("contact_name", sa.String(length=255), nullable=False),
        sa.Column("contact_phone", sa.String(length=30), nullable=False),
        sa.Column("last_message", sa.Text(), nullable=True),
        _ts("last_timestamp"),
        sa.Column("crm_stage", E["crm_stage_enum"], nullable=False),
    )
    op.create_table(
        "chat_messages",
        _id(),
        _tenant_fk(),
        sa.Column("thread_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("chat_threads.id"), nullable=False, index=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("direction", E["message_direction_enum"], nullable=False),
        _ts("timestamp"),
        sa.Column("contact_name", sa.String(length=255), nullable=True),
        sa.Column("contact_phone", sa.String(length=30), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default=sa.text("'read'")),
    )

    op.create_table(
        "loyalty_rewards",
        _id(),
        _tenant_fk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("points_cost", sa.Integer(), nullable=False),
        sa.Column("type", E["reward_type_enum"], nullable=False),
        sa.Column("value", sa.Numeric(12, 2), nullable=False),
        sa.Column("tier", E["loyalty_tier_enum"], nullable=True),
        sa.Column("stock", sa.Integer(), nullable=True),
        sa.Column("valid_days", sa.Integer(), nullable=False),
        sa.Column("category", E["reward_category_enum"], nullable=False),
    )
    op.create_table(
        "loyalty_members",
        _id(),
        _tenant_fk(),
        sa.Column("patient_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("patients.id"), nullable=False),
        sa.Column("patient_name", sa.String(length=255), nullable=False),
        sa.Column("total_points", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("available_points", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("tier", E["loyalty_tier_enum"], nullable=False),
        sa.Column("total_consultations", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("total_procedures", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("total_referrals", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("referral_code", sa.String(length=20), nullable=False),
        _ts("joined_at"),
        _ts("last_activity_at", nullable=True),
        sa.UniqueConstraint("tenant_id", "referral_code", name="uq_loyalty_members_referral_code"),
    )
    op.create_table(
        "loyalty_points_history",
        _id(),
        sa.Column("member_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("loyalty_members.id"), nullable=False, index=True),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("source", E["points_source_enum"], nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        _created_at(server_default=False),
    )
    op.create_table(
        "loyalty_redemptions",
        _id(),
        sa.Column("member_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("loyalty_members.id"), nullable=False, index=True),
        sa.Column("reward_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("loyalty_rewards.id"), nullable=False),
        sa.Column("reward_name", sa.String(length=255), nullable=False),
        sa.Column("points_spent", sa.Integer(), nullable=False),
        sa.Column("status", E["redemption_status_enum"], nullable=False),
        sa.Column("code", sa.String(length=30), nullable=False, unique=True),
        _created_at(server_default=False),
        _ts("expires_at"),
        _ts("used_at", nullable=True),
    )
    op.create_table(
        "loyalty_referrals",
        _id(),
        sa.Column("referrer_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("loyalty_members.id"), nullable=False, index=True),
        sa.Column("referred_name", sa.String(length=255), nullable=False),
        sa.Column("referred_phone", sa.String(length=50), nullable=True),
        sa.Column("status", E["referral_status_enum"], nullable=False),
        sa.Column("points_awarded", sa.Integer(), nullable=False, server_default=sa.text("0")),
        _created_at(server_default=False),
    )


def downgrade() -> None:
    for table in (
        "loyalty_referrals",
        "loyalty_redemptions",
        "loyalty_points_history",
        "loyalty_members",
        "loyalty_rewards",
        "chat_messages",
        "chat_threads",
        "stock_alerts",
        "product_procedures",
        "stock_movements",
        "inventory_products",
        "prescriptions",
        "categories",
        "monthly_targets",
        "quotes",
        "transactions",
        "appointments",
        "patients",
        "staff",
        "users",
        "tenants",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum in reversed(ENUMS):
        enum.drop(bind, checkfirst=True)
