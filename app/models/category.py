# app/models/category.py
import uuid
from enum import Enum

from sqlalchemy import (
    Enum as SAEnum,
    ForeignKey,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class CategoryType(str, Enum):
    REVENUE = "REVENUE"
    EXPENSE_FIXED = "EXPENSE_FIXED"
    EXPENSE_VARIABLE = "EXPENSE_VARIABLE"


class Category(Base):
    """Custom ledger category."""

    __tablename__ = "categories"

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

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[CategoryType] = mapped_column(
        SAEnum(CategoryType, name="category_type_enum"),
        nullable=False,
    )
