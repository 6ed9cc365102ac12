import uuid
from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    String,
    Uuid,
    text,
)

from app.models.base import Base


class TenantStatus(str, PyEnum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    INACTIVE = "INACTIVE"


class Tenant(Base):
    """
    Represents a clinic tenant.

    Every lifecycle-managed row points back here through `tenant_id`.
    The tenant row itself is never touched by purge or seed.
    """

    __tablename__ = "tenants"

    # Primary Key
    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )

    name = Column(String(255), nullable=False)
    contact_email = Column(String(255), nullable=True)

    status = Column(
        Enum(TenantStatus, name="tenant_status_enum"),
        nullable=False,
        server_default=text("'ACTIVE'"),
    )

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=datetime.utcnow,
    )
