"""
Address book service.

Keeps the default-address invariant: among the addresses of one user at most
one has ``is_default`` set. Clearing the previous default and writing the new
one happen in the same transaction.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from entrega_shared.db import get_session
from entrega_shared.logging_config import get_logger
from entrega_shared.models import Address
from entrega_shared.schemas import AddressRequest
from entrega_shared.serializers import serialize_address
from entrega_shared.services.ownership import get_owned, require_user

logger = get_logger(__name__)


def _clear_other_defaults(session: Session, user_id: int, keep_id: int | None = None) -> int:
    """Unset ``is_default`` on every address of the user except ``keep_id``."""
    stmt = (
        update(Address)
        .where(Address.user_id == user_id, Address.is_default.is_(True))
        .values(is_default=False)
    )
    if keep_id is not None:
        stmt = stmt.where(Address.id != keep_id)
    result = session.execute(stmt)
    return result.rowcount or 0


def _apply_fields(address: Address, payload: AddressRequest) -> None:
    address.street = payload.street
    address.number = payload.number
    address.complement = payload.complement
    address.neighborhood = payload.neighborhood
    address.city = payload.city
    address.state = payload.state
    address.zip_code = payload.zip_code
    address.label = payload.label
    address.is_default = payload.is_default


def list_addresses(user_id: int | None) -> list[dict[str, Any]]:
    require_user(user_id)
    with get_session() as session:
        addresses = (
            session.execute(
                select(Address).where(Address.user_id == user_id).order_by(Address.id)
            )
            .scalars()
            .all()
        )
        return [serialize_address(address) for address in addresses]


def get_default_address(user_id: int | None) -> dict[str, Any] | None:
    require_user(user_id)
    with get_session() as session:
        address = session.execute(
            select(Address).where(Address.user_id == user_id, Address.is_default.is_(True))
        ).scalar_one_or_none()
        return serialize_address(address) if address else None


def add_address(user_id: int | None, payload: AddressRequest) -> int:
    """
    Add an address for the caller and return its id.

    When the new address is marked default, every other default of the user is
    cleared first. A non-default first address leaves the user with no default.
    """
    require_user(user_id)
    with get_session() as session:
        if payload.is_default:
            cleared = _clear_other_defaults(session, user_id)
            if cleared:
                logger.info("Cleared %s default address(es) for user %s", cleared, user_id)

        address = Address(user_id=user_id)
        _apply_fields(address, payload)
        session.add(address)
        session.flush()
        logger.info("User %s added address %s", user_id, address.id)
        return address.id


def update_address(user_id: int | None, address_id: int, payload: AddressRequest) -> dict[str, Any]:
    with get_session() as session:
        address = get_owned(session, Address, address_id, user_id)
        if payload.is_default:
            _clear_other_defaults(session, user_id, keep_id=address.id)
        _apply_fields(address, payload)
        session.flush()
        return serialize_address(address)


def delete_address(user_id: int | None, address_id: int) -> None:
    """Delete an address. Removing the default does not promote another one."""
    with get_session() as session:
        address = get_owned(session, Address, address_id, user_id)
        session.delete(address)
        logger.info("User %s deleted address %s", user_id, address_id)


def set_default_address(user_id: int | None, address_id: int) -> None:
    with get_session() as session:
        address = get_owned(session, Address, address_id, user_id)
        _clear_other_defaults(session, user_id, keep_id=address.id)
        address.is_default = True
        logger.info("User %s set address %s as default", user_id, address_id)


def format_delivery_address(address: Address | dict[str, Any]) -> str:
    """
    Flatten an address into the single-line delivery string stored on orders:
    ``street, number[, complement], neighborhood, city - state``.
    """
    if isinstance(address, Address):
        address = serialize_address(address)
    parts = [address["street"], address["number"]]
    if address.get("complement"):
        parts.append(address["complement"])
    parts.append(address["neighborhood"])
    parts.append(f"{address['city']} - {address['state']}")
    return ", ".join(parts)
