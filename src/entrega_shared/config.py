"""
Utilities to centralize configuration handling across the entrega services.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal


@dataclass
class AppConfig:
    """Simple container for application level settings."""

    app_name: str
    # PostgreSQL database
    db_host: str
    db_port: int
    db_user: str
    db_password: str
    db_name: str
    db_sslmode: str
    # App settings
    secret_key: str
    log_level: str
    currency: str
    platform_fee_rate: Decimal
    debug_mode: bool
    flask_debug: bool
    # JWT settings
    jwt_access_token_expires_hours: int
    jwt_admin_token_expires_hours: int

    def get_bool(self, key: str, default: bool = False) -> bool:
        """
        Get boolean config value from AppConfig.

        Args:
            key: Configuration key (e.g., 'debug_mode')
            default: Default value if not set (defaults to False)

        Returns:
            bool: Configuration value
        """
        value = getattr(self, key, default)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    def get_int(self, key: str, default: int = 0) -> int:
        value = getattr(self, key, default)
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                return default
        return value if isinstance(value, int) else default

    @property
    def sqlalchemy_uri(self) -> str:
        """
        Build a SQLAlchemy PostgreSQL URI using psycopg2 as the driver.
        """
        ssl_arg = f"?sslmode={self.db_sslmode}" if self.db_sslmode else ""
        return (
            f"postgresql+psycopg2://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}{ssl_arg}"
        )


def _read_env(name: str, default: str | None = None) -> str:
    """
    Internal helper to fetch environment variables with support for defaults.
    """
    value = os.getenv(name)
    if value is None:
        if default is None:
            raise RuntimeError(f"Missing required environment variable '{name}'")
        value = default
    return value


def read_bool(name: str, default: str = "false") -> bool:
    value = _read_env(name, default)
    return value.strip().lower() in {"1", "true", "yes", "on"}


INSECURE_SECRET_VALUES = {
    "change-me-please",
    "super-secret-change-me",
    "your-secret-key-here",
}


def validate_required_env_vars(skip_in_debug: bool = False) -> None:
    """
    Validate that all required environment variables are set.

    Fails fast during startup rather than encountering errors later, e.g. when
    the first password is hashed or the first token is signed.

    Args:
        skip_in_debug: If True, skip validation when DEBUG_MODE=true

    Raises:
        RuntimeError: If any required variable is missing or has an invalid value
    """
    if skip_in_debug and read_bool("DEBUG_MODE", "false"):
        return

    errors = []

    secret_key = os.getenv("SECRET_KEY", "")
    if not secret_key or secret_key in INSECURE_SECRET_VALUES:
        errors.append(
            "SECRET_KEY must be configured with a secure random value. "
            'Generate with: python3 -c "import secrets; print(secrets.token_urlsafe(32))"'
        )

    password_salt = os.getenv("PASSWORD_HASH_SALT", "")
    if not password_salt or password_salt == "super-secure-salt":
        errors.append(
            "PASSWORD_HASH_SALT must be configured with a secure random value. "
            'Generate with: python3 -c "import secrets; print(secrets.token_urlsafe(32))"'
        )

    if not os.getenv("DATABASE_URL") and not os.getenv("POSTGRES_HOST"):
        errors.append("DATABASE_URL or POSTGRES_HOST must be configured")

    fee_rate = os.getenv("PLATFORM_FEE_RATE", "")
    if fee_rate:
        try:
            rate = Decimal(fee_rate)
            if rate < 0 or rate > 1:
                errors.append(f"PLATFORM_FEE_RATE must be between 0 and 1, got: {fee_rate}")
        except ArithmeticError:
            errors.append(f"PLATFORM_FEE_RATE must be a decimal number, got: {fee_rate}")

    if errors:
        error_msg = "\nConfiguration Errors - Missing or invalid environment variables:\n"
        for error in errors:
            error_msg += f"  - {error}\n"
        raise RuntimeError(error_msg)


def load_config(app_name: str) -> AppConfig:
    """
    Produce an AppConfig instance populated from environment variables.

    Each service passes its desired `app_name` to keep logs easy to tell apart
    while still reusing the same config loader.
    """
    return AppConfig(
        app_name=app_name,
        db_host=_read_env("POSTGRES_HOST", "entrega-postgres"),
        db_port=int(_read_env("POSTGRES_PORT", "5432")),
        db_user=_read_env("POSTGRES_USER", "entrega"),
        db_password=_read_env("POSTGRES_PASSWORD", "entrega"),
        db_name=_read_env("POSTGRES_DB", "entrega"),
        db_sslmode=_read_env("POSTGRES_SSLMODE", "disable"),
        secret_key=_read_env("SECRET_KEY", "super-secret-change-me"),
        log_level=_read_env("LOG_LEVEL", "INFO"),
        currency=_read_env("CURRENCY", "BRL"),
        platform_fee_rate=Decimal(_read_env("PLATFORM_FEE_RATE", "0.10")),
        debug_mode=read_bool("DEBUG_MODE", "false"),
        flask_debug=read_bool("FLASK_DEBUG", "false"),
        jwt_access_token_expires_hours=int(_read_env("JWT_ACCESS_TOKEN_EXPIRES_HOURS", "24")),
        jwt_admin_token_expires_hours=int(_read_env("JWT_ADMIN_TOKEN_EXPIRES_HOURS", "8")),
    )
