"""
Application constants and enums.
"""

from decimal import Decimal
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    DELIVERING = "delivering"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def all_values(cls) -> set:
        return {member.value for member in cls}


class RestaurantStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def all_values(cls) -> set:
        return {member.value for member in cls}


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    PIX = "pix"
    CASH = "cash"

    @classmethod
    def all_values(cls) -> set:
        return {member.value for member in cls}


class AdminRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MODERATOR = "moderator"

    @classmethod
    def all_values(cls) -> set:
        return {member.value for member in cls}


# Share of gross order revenue retained by the platform
PLATFORM_FEE_RATE = Decimal("0.10")

MONEY_QUANTUM = Decimal("0.01")

# Shown when a cart row points at a product that no longer exists
UNKNOWN_PRODUCT_NAME = "Produto"

MAX_CART_QUANTITY = 99
MAX_ORDER_ITEMS = 50

# Upper bounds (inclusive) used by the storefront restaurant filters
FAST_DELIVERY_MAX_MINUTES = 30
MEDIUM_DELIVERY_MAX_MINUTES = 45
LOW_DELIVERY_FEE_MAX = Decimal("5")
MEDIUM_DELIVERY_FEE_MAX = Decimal("10")
