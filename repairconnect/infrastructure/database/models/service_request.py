"""
Service request SQLAlchemy model.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from repairconnect.domain.value_objects.job_status import JobStatus

from .base import BaseModel, utcnow


class ServiceRequestModel(BaseModel):
    """Service request database model."""

    __tablename__ = "service_requests"

    customer_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assigned_provider_id = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    title = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False)
    preferred_at = Column(DateTime(timezone=True))
    preferred_timezone = Column(String(64))
    status = Column(
        String(20), default=JobStatus.PENDING.value, nullable=False, index=True
    )
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    updates = relationship(
        "JobUpdateModel",
        back_populates="request",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="JobUpdateModel.created_at",
    )
    invoices = relationship(
        "InvoiceModel",
        back_populates="request",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="InvoiceModel.created_at",
    )

    __table_args__ = (
        # Sweep scans by status and age
        Index("idx_service_request_status_updated", "status", "updated_at"),
    )

    def __repr__(self) -> str:
        return f"<ServiceRequest(id={self.id}, status={self.status})>"
