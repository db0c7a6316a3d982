"""
Pydantic schemas for request validation.

Clients send camelCase keys (``zipCode``, ``isDefault``); every model also
accepts the snake_case field names so services and tests can build them
directly.
"""

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from entrega_shared.constants import AdminRole, PaymentMethod
from entrega_shared.validation import (
    ValidationError,
    validate_cpf,
    validate_password,
    validate_zip_code,
)


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class SignUpRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v):
        validate_password(v)
        return v


class LoginRequest(RequestModel):
    email: str = Field(..., min_length=3, pattern=r"^[^@]+@[^@]+\.[^@]+$")
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase to ensure consistent authentication."""
        return v.strip().lower()


class AdminLoginRequest(RequestModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)


class AddressRequest(RequestModel):
    street: str = Field(..., min_length=1, max_length=255)
    number: str = Field(..., min_length=1, max_length=32)
    complement: str | None = Field(None, max_length=255)
    neighborhood: str = Field(..., min_length=1, max_length=120)
    city: str = Field(..., min_length=1, max_length=120)
    state: str = Field(..., min_length=2, max_length=2)
    zip_code: str = Field(..., alias="zipCode")
    label: str = Field(..., min_length=1, max_length=60)
    is_default: bool = Field(False, alias="isDefault")

    @field_validator("state")
    @classmethod
    def upper_state(cls, v):
        return v.upper()

    @field_validator("zip_code")
    @classmethod
    def normalize_zip_code(cls, v):
        return validate_zip_code(v)

    @field_validator("complement")
    @classmethod
    def blank_complement(cls, v):
        return v or None


class ProfileRequest(RequestModel):
    full_name: str = Field(..., alias="fullName", min_length=1, max_length=255)
    birth_date: str = Field(..., alias="birthDate")
    cpf: str
    phone: str = Field(..., min_length=8, max_length=20)

    @field_validator("birth_date")
    @classmethod
    def validate_birth_date(cls, v):
        try:
            born = date.fromisoformat(v)
        except ValueError:
            raise ValidationError("Birth date must use the YYYY-MM-DD format")
        if born > date.today():
            raise ValidationError("Birth date cannot be in the future")
        return born.isoformat()

    @field_validator("cpf")
    @classmethod
    def validate_cpf_digits(cls, v):
        return validate_cpf(v)


class AddToCartRequest(RequestModel):
    product_id: int = Field(..., alias="productId")
    restaurant_id: int = Field(..., alias="restaurantId")
    quantity: int = Field(1, ge=1)
    price: Decimal = Field(..., ge=0)


class UpdateCartQuantityRequest(RequestModel):
    quantity: int


class OrderItemRequest(RequestModel):
    """One checkout line. ``name`` and ``price`` are display echoes; the server prices lines."""

    product_id: int = Field(..., alias="productId")
    name: str | None = Field(None, max_length=160)
    price: Decimal | None = Field(None, ge=0)
    quantity: int = Field(..., ge=1)


class CreateOrderRequest(RequestModel):
    """
    Checkout payload.

    Client-computed ``total``/``deliveryFee`` keys and per-line prices are
    accepted but ignored; the amounts are always recomputed server-side.
    """

    restaurant_id: int = Field(..., alias="restaurantId")
    items: list[OrderItemRequest]
    delivery_address: str | None = Field(None, alias="deliveryAddress", max_length=500)
    address_id: int | None = Field(None, alias="addressId")
    payment_method: str = Field(..., alias="paymentMethod")

    @field_validator("payment_method")
    @classmethod
    def validate_payment_method(cls, v):
        if v not in PaymentMethod.all_values():
            allowed = ", ".join(sorted(PaymentMethod.all_values()))
            raise ValueError(f"Invalid payment method. Allowed values: {allowed}")
        return v


class UpdateOrderStatusRequest(RequestModel):
    status: str
    admin_notes: str | None = Field(None, alias="adminNotes")


class UpdateRestaurantStatusRequest(RequestModel):
    status: str
    admin_notes: str | None = Field(None, alias="adminNotes")


class UpdateRestaurantRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=160)
    description: str = ""
    category: str = Field(..., min_length=1, max_length=80)
    delivery_time: str = Field(..., alias="deliveryTime", min_length=1, max_length=32)
    delivery_fee: Decimal = Field(..., alias="deliveryFee", ge=0)
    minimum_order: Decimal = Field(..., alias="minimumOrder", ge=0)
    is_open: bool = Field(..., alias="isOpen")
    address: str | None = None
    phone: str | None = None
    payment_methods: list[str] | None = Field(None, alias="paymentMethods")

    @field_validator("payment_methods")
    @classmethod
    def validate_payment_methods(cls, v):
        if v is None:
            return v
        unknown = [method for method in v if method not in PaymentMethod.all_values()]
        if unknown:
            raise ValueError(f"Unknown payment methods: {', '.join(unknown)}")
        return v


class BannerRequest(RequestModel):
    title: str = Field(..., min_length=1, max_length=120)
    subtitle: str = Field("", max_length=255)
    image: str = Field("", max_length=255)
    color: str = Field("", max_length=120)
    is_active: bool = Field(True, alias="isActive")


class CreateAdminRequest(RequestModel):
    username: str = Field(..., min_length=3, max_length=64)
    password: str
    name: str = Field(..., min_length=1, max_length=120)
    role: str = AdminRole.MODERATOR.value
    is_active: bool = Field(True, alias="isActive")

    @field_validator("role")
    @classmethod
    def validate_role_value(cls, v):
        if v not in AdminRole.all_values():
            raise ValidationError(f"Invalid role: {v}")
        return v


class RestaurantFilters(RequestModel):
    category: str | None = None
    rating: float | None = Field(None, ge=0, le=5)
    free_delivery: bool = Field(False, alias="freeDelivery")
    delivery_time: Literal["fast", "medium", "slow"] | None = Field(None, alias="deliveryTime")
    delivery_fee: Literal["free", "low", "medium"] | None = Field(None, alias="deliveryFee")
    payment_method: str | None = Field(None, alias="paymentMethod")


class RevenueReportQuery(RequestModel):
    start_date: str | None = Field(None, alias="startDate")
    end_date: str | None = Field(None, alias="endDate")
