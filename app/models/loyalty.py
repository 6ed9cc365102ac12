# app/models/loyalty.py
"""
Loyalty program.

Only rewards and members carry tenant_id. Points history, redemptions and
referrals hang off a member and are scoped through it, so a purge must
resolve the tenant's member ids first and clear those tables before the
members themselves.
"""
import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class LoyaltyTier(str, Enum):
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    DIAMOND = "DIAMOND"


class RewardType(str, Enum):
    DISCOUNT = "DISCOUNT"
    PRODUCT = "PRODUCT"
    PROCEDURE = "PROCEDURE"
    VOUCHER = "VOUCHER"


class RewardCategory(str, Enum):
    BEAUTY = "BEAUTY"
    WELLNESS = "WELLNESS"
    SPECIAL = "SPECIAL"


class PointsSource(str, Enum):
    CONSULTATION = "CONSULTATION"
    PROCEDURE = "PROCEDURE"
    REFERRAL = "REFERRAL"
    BONUS = "BONUS"


class RedemptionStatus(str, Enum):
    PENDING = "PENDING"
    USED = "USED"
    EXPIRED = "EXPIRED"


class ReferralStatus(str, Enum):
    PENDING = "PENDING"
    CONVERTED = "CONVERTED"


class LoyaltyReward(Base):
    __tablename__ = "loyalty_rewards"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("tenants.id"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    points_cost: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[RewardType] = mapped_column(
        SAEnum(RewardType, name="reward_type_enum"),
        nullable=False,
    )
    value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tier: Mapped[LoyaltyTier | None] = mapped_column(
        SAEnum(LoyaltyTier, name="loyalty_tier_enum"),
        nullable=True,
        doc="Minimum tier required; None means every member can redeem.",
    )
    stock: Mapped[int | None] = mapped_column(Integer, nullable=True)
    valid_days: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[RewardCategory] = mapped_column(
        SAEnum(RewardCategory, name="reward_category_enum"),
        nullable=False,
    )


class LoyaltyMember(Base):
    __tablename__ = "loyalty_members"
    __table_args__ = (
        UniqueConstraint("tenant_id", "referral_code", name="uq_loyalty_members_referral_code"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("tenants.id"),
        nullable=False,
        index=True,
    )
    patient_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("patients.id"),
        nullable=False,
    )

    patient_name: Mapped[str] = mapped_column(String(255), nullable=False)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    available_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tier: Mapped[LoyaltyTier] = mapped_column(
        SAEnum(LoyaltyTier, name="loyalty_tier_enum"),
        nullable=False,
        default=LoyaltyTier.BRONZE,
    )
    total_consultations: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_procedures: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_referrals: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    referral_code: Mapped[str] = mapped_column(String(20), nullable=False)
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_activity_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class LoyaltyPointsHistory(Base):
    __tablename__ = "loyalty_points_history"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("loyalty_members.id"),
        nullable=False,
        index=True,
    )

    points: Mapped[int] = mapped_column(Integer, nullable=False)
    source: Mapped[PointsSource] = mapped_column(
        SAEnum(PointsSource, name="points_source_enum"),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class LoyaltyRedemption(Base):
    __tablename__ = "loyalty_redemptions"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("loyalty_members.id"),
        nullable=False,
        index=True,
    )
    reward_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("loyalty_rewards.id"),
        nullable=False,
    )

    reward_name: Mapped[str] = mapped_column(String(255), nullable=False)
    points_spent: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[RedemptionStatus] = mapped_column(
        SAEnum(RedemptionStatus, name="redemption_status_enum"),
        nullable=False,
        default=RedemptionStatus.PENDING,
    )
    code: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class LoyaltyReferral(Base):
    """
    A friend brought in by a member (the referrer).
    """

    __tablename__ = "loyalty_referrals"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    referrer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("loyalty_members.id"),
        nullable=False,
        index=True,
    )

    referred_name: Mapped[str] = mapped_column(String(255), nullable=False)
    referred_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[ReferralStatus] = mapped_column(
        SAEnum(ReferralStatus, name="referral_status_enum"),
        nullable=False,
        default=ReferralStatus.PENDING,
    )
    points_awarded: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
