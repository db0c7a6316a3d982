import pytest
from pydantic import ValidationError as PydanticValidationError

from entrega_shared.db import get_session
from entrega_shared.errors import ConflictError, UnauthenticatedError
from entrega_shared.models import UserProfile
from entrega_shared.schemas import ProfileRequest
from entrega_shared.services import profile_service
from entrega_shared.validation import ValidationError


def profile_payload(**overrides):
    data = {
        "full_name": "Ana Souza",
        "birth_date": "1990-05-01",
        "cpf": "529.982.247-25",
        "phone": "11999998888",
    }
    data.update(overrides)
    return ProfileRequest(**data)


def test_create_profile(user_id):
    profile = profile_service.create_profile(user_id, profile_payload())

    assert profile["fullName"] == "Ana Souza"
    assert profile["cpf"] == "52998224725"
    assert profile_service.get_profile(user_id)["phone"] == "11999998888"


def test_create_profile_rejects_second_profile(user_id):
    profile_service.create_profile(user_id, profile_payload())
    with pytest.raises(ConflictError):
        profile_service.create_profile(user_id, profile_payload(full_name="Outra"))
    assert profile_service.get_profile(user_id)["fullName"] == "Ana Souza"


def test_save_profile_upserts(user_id):
    created = profile_service.save_profile(user_id, profile_payload())
    updated = profile_service.save_profile(user_id, profile_payload(phone="21988887777"))

    assert created["id"] == updated["id"]
    assert updated["phone"] == "21988887777"


def test_sensitive_fields_are_encrypted_at_rest(user_id):
    profile_service.create_profile(user_id, profile_payload())
    with get_session() as session:
        stored = session.query(UserProfile).filter_by(user_id=user_id).one()
        assert "52998224725" not in stored.cpf_encrypted
        assert "11999998888" not in stored.phone_encrypted


def test_missing_profile_is_none(user_id):
    assert profile_service.get_profile(user_id) is None


def test_profile_requires_user():
    with pytest.raises(UnauthenticatedError):
        profile_service.save_profile(None, profile_payload())


@pytest.mark.parametrize(
    "overrides",
    [
        {"cpf": "111.111.111-11"},
        {"cpf": "529.982.247-26"},
        {"birth_date": "01/05/1990"},
        {"birth_date": "2999-01-01"},
    ],
)
def test_invalid_profile_data(overrides):
    with pytest.raises((ValidationError, PydanticValidationError)):
        profile_payload(**overrides)
