"""CustomerForm ORM: one submitted business intake questionnaire.

Invariants:
    - id is UUID primary key (client-side default)
    - The five questionnaire sections are stored as JSON documents, as submitted
    - status is a CustomerFormStatus value; new forms start as "pending"
    - updated_at is refreshed on every UPDATE

Design Decisions:
    - JSON columns per section: the business schema is owned by the request schemas
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from forms_api.core.domain_types import CustomerFormStatus
from forms_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CustomerForm(Base):
    """Customer intake form submitted through the public API."""
    __tablename__ = "customer_forms"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    basic_information: Mapped[dict] = mapped_column(JSON, nullable=False)
    business_details: Mapped[dict] = mapped_column(JSON, nullable=False)
    services_needed: Mapped[dict] = mapped_column(JSON, nullable=False)
    client_screening: Mapped[dict] = mapped_column(JSON, nullable=False)
    additional_details: Mapped[dict] = mapped_column(JSON, nullable=False)
    is_eligible: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=CustomerFormStatus.PENDING.value,
        index=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
