from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from entrega_shared.db import get_session
from entrega_shared.models import Order
from entrega_shared.services import report_service, restaurant_service
from entrega_shared.validation import ValidationError


def fake_order(restaurant_id, total):
    return SimpleNamespace(restaurant_id=restaurant_id, total=Decimal(total))


@pytest.fixture
def make_order(user_id):
    def _make(restaurant_id, total, created_at):
        with get_session() as session:
            order = Order(
                user_id=user_id,
                restaurant_id=restaurant_id,
                items=[],
                subtotal=Decimal(total),
                delivery_fee=Decimal("0"),
                total=Decimal(total),
                status="delivered",
                delivery_address="Rua A, 1, Centro, Recife - PE",
                payment_method="pix",
                created_at=created_at,
            )
            session.add(order)
            session.flush()
            return order.id

    return _make


def test_empty_report_is_all_zero():
    report = report_service.summarize_revenue([], {})
    assert report == {
        "totalRevenue": 0.0,
        "totalOrders": 0,
        "platformFee": 0.0,
        "restaurantRevenue": 0.0,
        "revenueByRestaurant": [],
    }


def test_revenue_split_is_exact():
    report = report_service.summarize_revenue(
        [fake_order(1, "35.99"), fake_order(1, "20.00")], {1: "Pizza Hut"}
    )

    total = Decimal(str(report["totalRevenue"]))
    fee = Decimal(str(report["platformFee"]))
    rest = Decimal(str(report["restaurantRevenue"]))
    assert total == Decimal("55.99")
    assert fee == total * Decimal("0.10")
    assert fee + rest == total


def test_breakdown_keeps_first_occurrence_order():
    orders = [fake_order(2, "10"), fake_order(1, "5"), fake_order(2, "7.50")]
    report = report_service.summarize_revenue(orders, {1: "Pizza Hut", 2: "Sushi Express"})

    assert report["revenueByRestaurant"] == [
        {"restaurantId": 2, "name": "Sushi Express", "revenue": 17.5, "orders": 2},
        {"restaurantId": 1, "name": "Pizza Hut", "revenue": 5.0, "orders": 1},
    ]


def test_orders_of_unknown_restaurants_count_only_in_totals():
    report = report_service.summarize_revenue(
        [fake_order(1, "10"), fake_order(99, "30")], {1: "Pizza Hut"}
    )

    assert report["totalRevenue"] == 40.0
    assert report["totalOrders"] == 2
    assert [row["restaurantId"] for row in report["revenueByRestaurant"]] == [1]


def test_custom_fee_rate():
    report = report_service.summarize_revenue([fake_order(1, "100")], {1: "X"}, Decimal("0.15"))
    assert report["platformFee"] == 15.0
    assert report["restaurantRevenue"] == 85.0


def test_date_range_is_inclusive_and_end_covers_whole_day(make_restaurant, make_order):
    restaurant_id = make_restaurant()
    make_order(restaurant_id, "10.00", datetime(2024, 1, 9, 23, 59))
    make_order(restaurant_id, "20.00", datetime(2024, 1, 10, 0, 0))
    make_order(restaurant_id, "30.00", datetime(2024, 1, 15, 23, 59, 59))
    make_order(restaurant_id, "40.00", datetime(2024, 1, 16, 0, 0))

    report = report_service.get_revenue_report("2024-01-10", "2024-01-15")

    assert report["totalOrders"] == 2
    assert report["totalRevenue"] == 50.0
    assert report["revenueByRestaurant"][0]["name"] == "Pizza Hut"


def test_each_bound_is_optional(make_restaurant, make_order):
    restaurant_id = make_restaurant()
    make_order(restaurant_id, "10.00", datetime(2024, 1, 1))
    make_order(restaurant_id, "20.00", datetime(2024, 2, 1))

    assert report_service.get_revenue_report()["totalOrders"] == 2
    assert report_service.get_revenue_report(start_date="2024-01-15")["totalRevenue"] == 20.0
    assert report_service.get_revenue_report(end_date="2024-01-15")["totalRevenue"] == 10.0


def test_deleted_restaurant_still_counts_in_totals(make_restaurant, make_order):
    kept = make_restaurant()
    removed = make_restaurant(name="Taco Bell")
    make_order(removed, "25.00", datetime(2024, 3, 1))
    make_order(kept, "10.00", datetime(2024, 3, 2))

    restaurant_service.delete_restaurant(removed)
    report = report_service.get_revenue_report()

    assert report["totalRevenue"] == 35.0
    assert report["revenueByRestaurant"] == [
        {"restaurantId": kept, "name": "Pizza Hut", "revenue": 10.0, "orders": 1}
    ]


def test_invalid_dates_are_rejected():
    with pytest.raises(ValidationError):
        report_service.get_revenue_report("not-a-date")
    with pytest.raises(ValidationError):
        report_service.get_revenue_report("2024-02-01", "2024-01-01")
