"""
Notification SQLAlchemy model.
"""

from sqlalchemy import JSON, Boolean, Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from .base import BaseModel


class NotificationModel(BaseModel):
    """Notification database model."""

    __tablename__ = "notifications"

    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    type = Column(String(50), nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    read = Column(Boolean, nullable=False, default=False)

    user = relationship("UserModel", back_populates="notifications")

    __table_args__ = (
        Index("idx_notification_user_created", "user_id", "created_at"),
    )
