"""
Job update SQLAlchemy model.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import BaseModel


class JobUpdateModel(BaseModel):
    """Job update database model."""

    __tablename__ = "job_updates"

    request_id = Column(
        Integer,
        ForeignKey("service_requests.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    provider_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    message = Column(Text)
    image_url = Column(String(1024))

    request = relationship("ServiceRequestModel", back_populates="updates")
