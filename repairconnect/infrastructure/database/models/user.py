"""
User SQLAlchemy model.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from .base import BaseModel


class UserModel(BaseModel):
    """Local mirror of an account managed by the authentication service."""

    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255))
    role = Column(String(20), nullable=False, index=True)

    notifications = relationship(
        "NotificationModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, role={self.role})>"
