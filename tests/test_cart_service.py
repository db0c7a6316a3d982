from decimal import Decimal

import pytest
from sqlalchemy import select

from entrega_shared.db import get_session
from entrega_shared.errors import NotFoundOrUnauthorizedError, UnauthenticatedError
from entrega_shared.models import CartItem
from entrega_shared.services import cart_service
from entrega_shared.validation import ValidationError


def cart_rows(user_id):
    with get_session() as session:
        return session.execute(select(CartItem).where(CartItem.user_id == user_id)).scalars().all()


def test_adding_same_product_twice_consolidates(user_id, make_restaurant, make_product):
    restaurant_id = make_restaurant()
    product_id = make_product(restaurant_id)

    first = cart_service.add_to_cart(user_id, product_id, restaurant_id, 1, Decimal("10.00"))
    second = cart_service.add_to_cart(user_id, product_id, restaurant_id, 2, Decimal("10.00"))

    rows = cart_rows(user_id)
    assert first == second
    assert len(rows) == 1
    assert rows[0].quantity == 3
    assert rows[0].price == Decimal("10.00")


def test_increment_keeps_original_price(user_id, make_restaurant, make_product):
    restaurant_id = make_restaurant()
    product_id = make_product(restaurant_id)

    cart_service.add_to_cart(user_id, product_id, restaurant_id, 1, Decimal("10.00"))
    cart_service.add_to_cart(user_id, product_id, restaurant_id, 1, Decimal("12.50"))

    assert cart_rows(user_id)[0].price == Decimal("10.00")


def test_products_of_different_restaurants_coexist(user_id, make_restaurant, make_product):
    pizza = make_restaurant()
    sushi = make_restaurant(name="Sushi Express")
    cart_service.add_to_cart(user_id, make_product(pizza), pizza, 1, Decimal("10"))
    cart_service.add_to_cart(user_id, make_product(sushi, "Hot Roll"), sushi, 1, Decimal("28.90"))

    assert {row.restaurant_id for row in cart_rows(user_id)} == {pizza, sushi}


def test_quantity_must_be_positive(user_id):
    with pytest.raises(ValidationError):
        cart_service.add_to_cart(user_id, 1, 1, 0, Decimal("10"))


def test_quantity_is_capped(user_id, make_restaurant, make_product):
    restaurant_id = make_restaurant()
    product_id = make_product(restaurant_id)
    cart_service.add_to_cart(user_id, product_id, restaurant_id, 98, Decimal("1"))

    with pytest.raises(ValidationError) as exc:
        cart_service.add_to_cart(user_id, product_id, restaurant_id, 2, Decimal("1"))

    assert exc.value.code == "CART_001"
    assert cart_rows(user_id)[0].quantity == 98


def test_add_requires_user():
    with pytest.raises(UnauthenticatedError):
        cart_service.add_to_cart(None, 1, 1, 1, Decimal("10"))


def test_update_quantity_and_zero_removes(user_id, make_restaurant, make_product):
    restaurant_id = make_restaurant()
    item_id = cart_service.add_to_cart(
        user_id, make_product(restaurant_id), restaurant_id, 1, Decimal("10")
    )

    cart_service.update_quantity(user_id, item_id, 4)
    assert cart_rows(user_id)[0].quantity == 4

    cart_service.update_quantity(user_id, item_id, 0)
    assert cart_rows(user_id) == []


def test_negative_quantity_removes(user_id, make_restaurant, make_product):
    restaurant_id = make_restaurant()
    item_id = cart_service.add_to_cart(
        user_id, make_product(restaurant_id), restaurant_id, 2, Decimal("10")
    )

    cart_service.update_quantity(user_id, item_id, -2)

    assert cart_rows(user_id) == []


def test_foreign_cart_item_cannot_be_changed(user_id, other_user_id, make_restaurant, make_product):
    restaurant_id = make_restaurant()
    item_id = cart_service.add_to_cart(
        other_user_id, make_product(restaurant_id), restaurant_id, 1, Decimal("10")
    )

    with pytest.raises(NotFoundOrUnauthorizedError):
        cart_service.update_quantity(user_id, item_id, 5)
    with pytest.raises(NotFoundOrUnauthorizedError):
        cart_service.remove_from_cart(user_id, item_id)

    assert cart_rows(other_user_id)[0].quantity == 1


def test_clear_cart_only_touches_caller(user_id, other_user_id, make_restaurant, make_product):
    restaurant_id = make_restaurant()
    product_id = make_product(restaurant_id)
    cart_service.add_to_cart(user_id, product_id, restaurant_id, 1, Decimal("10"))
    cart_service.add_to_cart(other_user_id, product_id, restaurant_id, 1, Decimal("10"))

    assert cart_service.clear_cart(user_id) == 1
    assert cart_rows(user_id) == []
    assert len(cart_rows(other_user_id)) == 1


def test_get_cart_enriches_rows(user_id, make_restaurant, make_product):
    restaurant_id = make_restaurant()
    product_id = make_product(restaurant_id, name="Pizza Pepperoni")
    cart_service.add_to_cart(user_id, product_id, restaurant_id, 2, Decimal("38.90"))
    # Product that no longer exists
    cart_service.add_to_cart(user_id, 424242, restaurant_id, 1, Decimal("5"))

    items = cart_service.get_cart(user_id)

    assert [item["name"] for item in items] == ["Pizza Pepperoni", "Produto"]
    assert items[0]["restaurant"]["name"] == "Pizza Hut"
    assert items[0]["quantity"] == 2


def test_cart_summary_uses_first_row_restaurant_fee(user_id, make_restaurant, make_product):
    restaurant_id = make_restaurant(delivery_fee="5.99")
    product_id = make_product(restaurant_id)
    cart_service.add_to_cart(user_id, product_id, restaurant_id, 3, Decimal("10.00"))

    summary = cart_service.get_cart_summary(user_id)

    assert summary == {
        "restaurantId": restaurant_id,
        "itemCount": 3,
        "subtotal": 30.0,
        "deliveryFee": 5.99,
        "total": 35.99,
    }


def test_empty_cart_summary(user_id):
    summary = cart_service.get_cart_summary(user_id)
    assert summary["total"] == 0.0
    assert summary["restaurantId"] is None
