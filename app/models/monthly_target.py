# app/models/monthly_target.py
import uuid
from decimal import Decimal

from sqlalchemy import (
    ForeignKey,
    Numeric,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class MonthlyTarget(Base):
    """
    Planned revenue / purchases for one month ("YYYY-MM").
    """

    __tablename__ = "monthly_targets"
    __table_args__ = (
        UniqueConstraint("tenant_id", "month_year", name="uq_monthly_targets_tenant_month"),
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

    month_year: Mapped[str] = mapped_column(String(7), nullable=False)
    planned_revenue: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    planned_purchases: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
