# app/models/prescription.py
import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import (
    JSON,
    Boolean,
    String,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class PrescriptionStatus(str, Enum):
    DRAFT = "DRAFT"
    SIGNED = "SIGNED"
    SENT = "SENT"
    CANCELLED = "CANCELLED"


class Prescription(Base):
    """
    Tenant-scoped prescription.

    - patient_id has no ON DELETE action: prescriptions must go before
      their patient.
    - professional_id is cleared if the staff member disappears.
    - Patient / professional details are copied at issue time so the
      document stays valid on its own.
    """

    __tablename__ = "prescriptions"

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
    professional_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("staff.id", ondelete="SET NULL"),
        nullable=True,
    )

    patient_name: Mapped[str] = mapped_column(String(255), nullable=False)
    professional_name: Mapped[str] = mapped_column(String(255), nullable=False)
    professional_crm: Mapped[str | None] = mapped_column(String(50), nullable=True)
    professional_specialty: Mapped[str | None] = mapped_column(String(100), nullable=True)

    items: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    diagnosis: Mapped[str | None] = mapped_column(String(500), nullable=True)
    additional_notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    status: Mapped[PrescriptionStatus] = mapped_column(
        SAEnum(PrescriptionStatus, name="prescription_status_enum"),
        nullable=False,
        default=PrescriptionStatus.DRAFT,
    )
    signed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    sent_via: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    valid_until: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_controlled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
