import pytest
from sqlalchemy import select

from entrega_shared.db import get_session
from entrega_shared.errors import NotFoundOrUnauthorizedError, UnauthenticatedError
from entrega_shared.models import Address
from entrega_shared.schemas import AddressRequest
from entrega_shared.services import address_service


def address_payload(**overrides):
    data = {
        "street": "Rua Augusta",
        "number": "1500",
        "neighborhood": "Consolação",
        "city": "São Paulo",
        "state": "sp",
        "zip_code": "01304001",
        "label": "Casa",
        "is_default": False,
    }
    data.update(overrides)
    return AddressRequest(**data)


def default_ids(user_id):
    with get_session() as session:
        return set(
            session.execute(
                select(Address.id).where(Address.user_id == user_id, Address.is_default.is_(True))
            ).scalars()
        )


def test_payload_normalizes_state_and_zip_code():
    payload = address_payload()
    assert payload.state == "SP"
    assert payload.zip_code == "01304-001"


def test_payload_accepts_camel_case_keys():
    payload = AddressRequest.model_validate(
        {
            "street": "Rua A",
            "number": "1",
            "neighborhood": "Centro",
            "city": "Recife",
            "state": "PE",
            "zipCode": "50010-000",
            "label": "Trabalho",
            "isDefault": True,
        }
    )
    assert payload.is_default is True


def test_first_address_without_default_leaves_no_default(user_id):
    address_service.add_address(user_id, address_payload())
    assert default_ids(user_id) == set()
    assert address_service.get_default_address(user_id) is None


def test_adding_default_address_clears_previous_default(user_id):
    first = address_service.add_address(user_id, address_payload(is_default=True))
    second = address_service.add_address(user_id, address_payload(label="Trabalho", is_default=True))

    assert default_ids(user_id) == {second}
    assert first != second


def test_non_default_write_keeps_existing_default(user_id):
    first = address_service.add_address(user_id, address_payload(is_default=True))
    address_service.add_address(user_id, address_payload(label="Praia"))

    assert default_ids(user_id) == {first}


def test_default_of_other_user_is_untouched(user_id, other_user_id):
    theirs = address_service.add_address(other_user_id, address_payload(is_default=True))
    address_service.add_address(user_id, address_payload(is_default=True))

    assert default_ids(other_user_id) == {theirs}


def test_set_default_moves_the_flag(user_id):
    first = address_service.add_address(user_id, address_payload(is_default=True))
    second = address_service.add_address(user_id, address_payload(label="Trabalho"))

    address_service.set_default_address(user_id, second)

    assert default_ids(user_id) == {second}
    assert address_service.get_default_address(user_id)["id"] == second
    assert first in {a["id"] for a in address_service.list_addresses(user_id)}


def test_set_default_requires_user(user_id):
    address_id = address_service.add_address(user_id, address_payload())
    with pytest.raises(UnauthenticatedError):
        address_service.set_default_address(None, address_id)


def test_set_default_on_foreign_address_is_rejected(user_id, other_user_id):
    mine = address_service.add_address(user_id, address_payload(is_default=True))
    theirs = address_service.add_address(other_user_id, address_payload())

    with pytest.raises(NotFoundOrUnauthorizedError):
        address_service.set_default_address(user_id, theirs)

    assert default_ids(user_id) == {mine}
    assert default_ids(other_user_id) == set()


def test_set_default_on_missing_address(user_id):
    with pytest.raises(NotFoundOrUnauthorizedError):
        address_service.set_default_address(user_id, 9999)


def test_update_address_with_default_clears_others(user_id):
    first = address_service.add_address(user_id, address_payload(is_default=True))
    second = address_service.add_address(user_id, address_payload(label="Trabalho"))

    updated = address_service.update_address(
        user_id, second, address_payload(label="Escritório", is_default=True)
    )

    assert updated["label"] == "Escritório"
    assert updated["isDefault"] is True
    assert default_ids(user_id) == {second}
    assert first not in default_ids(user_id)


def test_update_foreign_address_is_rejected(user_id, other_user_id):
    theirs = address_service.add_address(other_user_id, address_payload())
    with pytest.raises(NotFoundOrUnauthorizedError):
        address_service.update_address(user_id, theirs, address_payload(label="Hack"))

    with get_session() as session:
        assert session.get(Address, theirs).label == "Casa"


def test_deleting_default_does_not_promote_another(user_id):
    first = address_service.add_address(user_id, address_payload(is_default=True))
    address_service.add_address(user_id, address_payload(label="Trabalho"))

    address_service.delete_address(user_id, first)

    assert default_ids(user_id) == set()
    assert len(address_service.list_addresses(user_id)) == 1


def test_delete_foreign_address_is_rejected(user_id, other_user_id):
    theirs = address_service.add_address(other_user_id, address_payload())
    with pytest.raises(NotFoundOrUnauthorizedError):
        address_service.delete_address(user_id, theirs)
    assert len(address_service.list_addresses(other_user_id)) == 1


def test_list_addresses_requires_user():
    with pytest.raises(UnauthenticatedError):
        address_service.list_addresses(None)


def test_format_delivery_address():
    data = {
        "street": "Rua Augusta",
        "number": "1500",
        "complement": "Apto 12",
        "neighborhood": "Consolação",
        "city": "São Paulo",
        "state": "SP",
    }
    assert (
        address_service.format_delivery_address(data)
        == "Rua Augusta, 1500, Apto 12, Consolação, São Paulo - SP"
    )
    data["complement"] = None
    assert (
        address_service.format_delivery_address(data)
        == "Rua Augusta, 1500, Consolação, São Paulo - SP"
    )
