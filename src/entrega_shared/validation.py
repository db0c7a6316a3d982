"""
Input validation utilities.
"""

import re
from decimal import Decimal

from entrega_shared.errors import DomainError


class ValidationError(DomainError):
    """Raised when validation fails."""

    code = "VALID_001"


def validate_password(password: str) -> None:
    """
    Validate password strength.

    Requirements:
    - At least 8 characters
    - At least one letter
    - At least one number
    """
    if not password:
        raise ValidationError("Password is required")

    if len(password) < 8:
        raise ValidationError("Password must be at least 8 characters long")

    if not re.search(r"[A-Za-z]", password):
        raise ValidationError("Password must contain at least one letter")

    if not re.search(r"[0-9]", password):
        raise ValidationError("Password must contain at least one number")


def validate_cpf(cpf: str) -> str:
    """
    Validate a Brazilian CPF (check digits included) and return its digits.
    """
    digits = re.sub(r"\D", "", cpf or "")
    if len(digits) != 11 or digits == digits[0] * 11:
        raise ValidationError("Invalid CPF")

    for position in (9, 10):
        total = sum(int(digits[i]) * (position + 1 - i) for i in range(position))
        check = (total * 10) % 11 % 10
        if check != int(digits[position]):
            raise ValidationError("Invalid CPF")
    return digits


def validate_zip_code(zip_code: str) -> str:
    digits = re.sub(r"\D", "", zip_code or "")
    if len(digits) != 8:
        raise ValidationError("Zip code must have 8 digits")
    return f"{digits[:5]}-{digits[5:]}"


def validate_money(value: Decimal, field: str = "amount") -> Decimal:
    if value is None or value < 0:
        raise ValidationError(f"{field} must be a non-negative amount")
    return value
