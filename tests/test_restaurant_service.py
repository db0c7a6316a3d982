import pytest
from sqlalchemy import func, select

from entrega_shared.db import get_session
from entrega_shared.errors import NotFoundOrUnauthorizedError
from entrega_shared.models import Product
from entrega_shared.schemas import RestaurantFilters, UpdateRestaurantRequest
from entrega_shared.services import restaurant_service
from entrega_shared.services.seed_service import load_seed_data
from entrega_shared.validation import ValidationError


@pytest.fixture
def seeded():
    with get_session() as session:
        return load_seed_data(session)


def names(filters=None):
    query = RestaurantFilters.model_validate(filters or {})
    return {r["name"] for r in restaurant_service.list_restaurants(query)}


def restaurant_id_by_name(name):
    return next(r["id"] for r in restaurant_service.list_all_restaurants() if r["name"] == name)


def test_seed_is_idempotent(seeded):
    assert seeded == {"restaurants": 7, "products": 16, "admins": 5, "banners": 3}
    with get_session() as session:
        again = load_seed_data(session)
    assert again == {"restaurants": 0, "products": 0, "admins": 0, "banners": 0}


def test_storefront_lists_only_approved(seeded):
    listed = names()
    assert "Taco Bell" not in listed
    assert len(listed) == 6


@pytest.mark.parametrize(
    "filters, expected",
    [
        ({"category": "Pizza"}, {"Pizza Hut", "Pizza Palace"}),
        ({"rating": "4.7"}, {"Pizza Hut", "Sushi Express"}),
        ({"freeDelivery": "true"}, {"Burger King", "Açaí da Praia"}),
        (
            {"deliveryTime": "fast"},
            {"Burger King", "Pizza Hut", "Pizza Palace", "Açaí da Praia"},
        ),
        ({"deliveryTime": "medium"}, {"Burger King", "Sushi Express", "Pasta & Cia"}),
        ({"deliveryTime": "slow"}, set()),
        ({"deliveryFee": "free"}, {"Burger King", "Açaí da Praia"}),
        ({"deliveryFee": "low"}, {"Burger King", "Pizza Palace", "Açaí da Praia"}),
        ({"deliveryFee": "medium"}, {"Pizza Hut", "Sushi Express", "Pasta & Cia"}),
        ({"paymentMethod": "cash"}, {"Burger King", "Açaí da Praia"}),
        ({"category": "Pizza", "deliveryFee": "low"}, {"Pizza Palace"}),
    ],
)
def test_filters(seeded, filters, expected):
    assert names(filters) == expected


def test_products_of_restaurant(seeded):
    products = restaurant_service.list_products(restaurant_id_by_name("Sushi Express"))
    assert [p["name"] for p in products] == ["Combo Salmão", "Temaki Salmão", "Hot Roll", "Yakisoba"]


def test_get_missing_restaurant():
    with pytest.raises(NotFoundOrUnauthorizedError):
        restaurant_service.get_restaurant(4242)


def test_approving_restaurant_publishes_it(seeded):
    taco_bell = restaurant_id_by_name("Taco Bell")

    updated = restaurant_service.update_restaurant_status(taco_bell, "approved", "Docs ok")

    assert updated["status"] == "approved"
    assert updated["adminNotes"] == "Docs ok"
    assert "Taco Bell" in names()


def test_unknown_restaurant_status_is_rejected(seeded):
    with pytest.raises(ValidationError):
        restaurant_service.update_restaurant_status(restaurant_id_by_name("Pizza Hut"), "closed")


def test_update_restaurant(seeded):
    pizza_hut = restaurant_id_by_name("Pizza Hut")
    payload = UpdateRestaurantRequest.model_validate(
        {
            "name": "Pizza Hut Centro",
            "description": "Pizzas",
            "category": "Pizza",
            "deliveryTime": "50-60 min",
            "deliveryFee": "9.50",
            "minimumOrder": "30",
            "isOpen": False,
        }
    )

    updated = restaurant_service.update_restaurant(pizza_hut, payload)

    assert updated["name"] == "Pizza Hut Centro"
    assert updated["deliveryFee"] == 9.5
    assert updated["isOpen"] is False
    # payment methods untouched when omitted
    assert updated["paymentMethods"] == ["credit_card", "debit_card", "pix"]
    assert "Pizza Hut Centro" in names({"deliveryTime": "slow"})


def test_delete_restaurant_removes_products(seeded):
    burger_king = restaurant_id_by_name("Burger King")

    restaurant_service.delete_restaurant(burger_king)

    with get_session() as session:
        remaining = session.execute(
            select(func.count(Product.id)).where(Product.restaurant_id == burger_king)
        ).scalar()
    assert remaining == 0
    with pytest.raises(NotFoundOrUnauthorizedError):
        restaurant_service.get_restaurant(burger_king)
