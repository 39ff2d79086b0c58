"""
Payment method value object.
"""

from enum import Enum


class PaymentMethod(str, Enum):
    """How an invoice came to be marked paid."""

    MANUAL = "manual"
    GATEWAY = "gateway"
    DEBUG = "debug"
