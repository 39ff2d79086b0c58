"""
Invoice SQLAlchemy model.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .base import BaseModel


class InvoiceModel(BaseModel):
    """Invoice database model."""

    __tablename__ = "invoices"

    request_id = Column(
        Integer,
        ForeignKey("service_requests.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    provider_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Numeric(precision=12, scale=2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    notes = Column(Text)
    paid = Column(Boolean, nullable=False, default=False, index=True)
    paid_at = Column(DateTime(timezone=True))
    paid_via = Column(String(20))

    request = relationship("ServiceRequestModel", back_populates="invoices")

    __table_args__ = (
        Index("idx_invoice_customer_paid", "customer_id", "paid"),
        Index("idx_invoice_provider_paid", "provider_id", "paid"),
    )

    def __repr__(self) -> str:
        return f"<Invoice(id={self.id}, request_id={self.request_id}, paid={self.paid})>"
