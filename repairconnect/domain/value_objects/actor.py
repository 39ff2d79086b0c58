"""
Actor value object.
"""

from dataclasses import dataclass
from enum import Enum


class ActorRole(str, Enum):
    """Roles an authenticated caller can hold."""

    CUSTOMER = "customer"
    PROVIDER = "provider"
    ADMIN = "admin"
    # Internal callers such as the payment gateway callback
    SYSTEM = "system"


@dataclass(frozen=True)
class Actor:
    """Identity of the caller performing an operation."""

    id: int
    role: ActorRole

    @classmethod
    def system(cls) -> "Actor":
        return cls(id=0, role=ActorRole.SYSTEM)

    @property
    def is_admin(self) -> bool:
        return self.role == ActorRole.ADMIN

    @property
    def is_provider(self) -> bool:
        return self.role == ActorRole.PROVIDER

    @property
    def is_customer(self) -> bool:
        return self.role == ActorRole.CUSTOMER

    @property
    def is_system(self) -> bool:
        return self.role == ActorRole.SYSTEM
