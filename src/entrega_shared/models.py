"""
SQLAlchemy ORM models shared by the entrega services.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.types import TypeDecorator

from .constants import OrderStatus, RestaurantStatus
from .datetime_utils import utcnow_naive
from .security import decrypt_string, encrypt_string, hash_credentials, verify_credentials


class JSONBType(TypeDecorator):
    """
    Custom type that provides JSONB support for PostgreSQL
    and falls back to TEXT with JSON serialization for SQLite.

    This allows tests to run with SQLite while production uses PostgreSQL JSONB.
    """

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "postgresql":
            return value
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "postgresql":
            return value
        if isinstance(value, str):
            return json.loads(value)
        return value

    @property
    def python_type(self):
        return object


JSONB_TYPE = JSONBType()

MONEY = Numeric(10, 2)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class User(Base):
    __tablename__ = "entrega_users"
    __table_args__ = (Index("ix_user_created_at", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow_naive, nullable=False)

    profile: Mapped[UserProfile | None] = relationship(
        "UserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    def set_password(self, password: str) -> None:
        if password is None:
            raise ValueError("password must not be None")
        self.password_hash = hash_credentials(self.email, password)

    def verify_password(self, password: str) -> bool:
        return verify_credentials(self.email, password, self.password_hash)


class UserProfile(Base):
    __tablename__ = "entrega_user_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("entrega_users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    birth_date: Mapped[str] = mapped_column(String(10), nullable=False)
    cpf_encrypted: Mapped[str] = mapped_column(Text, nullable=False)
    phone_encrypted: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow_naive, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow_naive, onupdate=utcnow_naive, nullable=False
    )

    user: Mapped[User] = relationship("User", back_populates="profile")

    @hybrid_property
    def cpf(self) -> str:
        return decrypt_string(self.cpf_encrypted) or ""

    @cpf.setter
    def cpf(self, value: str) -> None:
        self.cpf_encrypted = encrypt_string(value or "")

    @hybrid_property
    def phone(self) -> str:
        return decrypt_string(self.phone_encrypted) or ""

    @phone.setter
    def phone(self, value: str) -> None:
        self.phone_encrypted = encrypt_string(value or "")


class Address(Base):
    __tablename__ = "entrega_addresses"
    __table_args__ = (Index("ix_address_user_default", "user_id", "is_default"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("entrega_users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    number: Mapped[str] = mapped_column(String(32), nullable=False)
    complement: Mapped[str | None] = mapped_column(String(255), nullable=True)
    neighborhood: Mapped[str] = mapped_column(String(120), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False)
    state: Mapped[str] = mapped_column(String(2), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(9), nullable=False)
    label: Mapped[str] = mapped_column(String(60), nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow_naive, nullable=False)


class Restaurant(Base):
    __tablename__ = "entrega_restaurants"
    __table_args__ = (
        Index("ix_restaurant_status", "status"),
        Index("ix_restaurant_category", "category"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(160), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    category: Mapped[str] = mapped_column(String(80), nullable=False)
    rating: Mapped[Decimal] = mapped_column(Numeric(3, 1), nullable=False, default=Decimal("0"))
    delivery_time: Mapped[str] = mapped_column(String(32), nullable=False)
    delivery_fee: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    minimum_order: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=Decimal("0"))
    is_open: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    payment_methods: Mapped[list[str] | None] = mapped_column(JSONB_TYPE, nullable=True)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=RestaurantStatus.PENDING.value
    )
    owner_id: Mapped[int | None] = mapped_column(
        ForeignKey("entrega_users.id", ondelete="SET NULL"), nullable=True
    )
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    cnpj: Mapped[str | None] = mapped_column(String(18), nullable=True)
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow_naive, nullable=False)

    products: Mapped[list[Product]] = relationship(
        "Product", back_populates="restaurant", cascade="all, delete-orphan"
    )

    @property
    def delivery_minutes(self) -> int | None:
        """Lower bound of the advertised delivery window, e.g. 30 for "30-45 min"."""
        head = (self.delivery_time or "").split("-")[0].strip().split(" ")[0]
        return int(head) if head.isdigit() else None


class Product(Base):
    __tablename__ = "entrega_products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(
        ForeignKey("entrega_restaurants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(160), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    image: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    category: Mapped[str] = mapped_column(String(80), nullable=False)
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    restaurant: Mapped[Restaurant] = relationship("Restaurant", back_populates="products")


class CartItem(Base):
    __tablename__ = "entrega_cart_items"
    __table_args__ = (UniqueConstraint("user_id", "product_id", name="uq_cart_user_product"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("entrega_users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Plain ids: cart rows outlive catalog edits and are resolved lazily
    product_id: Mapped[int] = mapped_column(Integer, nullable=False)
    restaurant_id: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow_naive, nullable=False)

    @property
    def line_total(self) -> Decimal:
        return Decimal(self.price) * self.quantity


class Order(Base):
    __tablename__ = "entrega_orders"
    __table_args__ = (
        Index("ix_order_user_created", "user_id", "created_at"),
        Index("ix_order_restaurant", "restaurant_id"),
        Index("ix_order_status", "status"),
        Index("ix_order_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("entrega_users.id", ondelete="CASCADE"), nullable=False
    )
    # Not a foreign key: revenue history survives restaurant deletion
    restaurant_id: Mapped[int] = mapped_column(Integer, nullable=False)
    items: Mapped[list[dict[str, Any]]] = mapped_column(JSONB_TYPE, nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    delivery_fee: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    total: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=OrderStatus.PENDING.value
    )
    delivery_address: Mapped[str] = mapped_column(Text, nullable=False)
    payment_method: Mapped[str] = mapped_column(String(32), nullable=False)
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow_naive, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow_naive, onupdate=utcnow_naive, nullable=False
    )


class Banner(Base):
    __tablename__ = "entrega_banners"
    __table_args__ = (Index("ix_banner_order", "order"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(120), nullable=False)
    subtitle: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    image: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    color: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    order: Mapped[int] = mapped_column(Integer, nullable=False)


class Admin(Base):
    __tablename__ = "entrega_admins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    def set_password(self, password: str) -> None:
        if password is None:
            raise ValueError("password must not be None")
        self.password_hash = hash_credentials(self.username, password)

    def verify_password(self, password: str) -> bool:
        return verify_credentials(self.username, password, self.password_hash)

    def sign_in(self) -> None:
        self.last_login_at = utcnow_naive()
