from sqlalchemy import select

from entrega_shared.jwt_service import create_access_token
from entrega_shared.db import get_session
from entrega_shared.models import Admin


def test_login_and_me(admin_client, admin_login):
    headers = admin_login()
    response = admin_client.get("/api/auth/me", headers=headers)
    assert response.status_code == 200
    assert response.get_json()["data"]["role"] == "super_admin"


def test_login_with_wrong_password(admin_client, make_admin):
    make_admin()
    response = admin_client.post(
        "/api/auth/login", json={"username": "admin", "password": "errada"}
    )
    assert response.status_code == 401
    assert response.get_json()["code"] == "AUTH_001"


def test_admin_routes_require_admin_token(admin_client):
    customer_token = create_access_token(user_id=1, user_name="Ana", user_email="ana@example.com")
    for headers in ({}, {"Authorization": f"Bearer {customer_token}"}):
        for method, path in [
            ("get", "/api/dashboard/stats"),
            ("get", "/api/orders"),
            ("patch", "/api/orders/1/status"),
            ("patch", "/api/restaurants/1/status"),
            ("delete", "/api/restaurants/1"),
            ("post", "/api/banners"),
            ("get", "/api/reports/revenue"),
            ("get", "/api/users"),
        ]:
            response = getattr(admin_client, method)(path, json={}, headers=headers)
            assert response.status_code == 401, (method, path)


def test_deactivated_admin_loses_access(admin_client, admin_login):
    headers = admin_login()
    with get_session() as session:
        session.execute(select(Admin).where(Admin.username == "admin")).scalar_one().is_active = False

    assert admin_client.get("/api/dashboard/stats", headers=headers).status_code == 401


def test_moderator_cannot_delete_restaurant(admin_client, admin_login, make_restaurant):
    restaurant_id = make_restaurant()
    moderator = admin_login(username="support", password="support123", role="moderator")
    manager = admin_login(username="manager", password="manager123", role="admin")

    response = admin_client.delete(f"/api/restaurants/{restaurant_id}", headers=moderator)
    assert response.status_code == 403
    assert response.get_json()["code"] == "PERM_001"

    response = admin_client.delete(f"/api/restaurants/{restaurant_id}", headers=manager)
    assert response.status_code == 200


def test_restaurant_moderation(admin_client, admin_login, make_restaurant):
    headers = admin_login()
    restaurant_id = make_restaurant(name="Taco Bell", status="pending")

    response = admin_client.patch(
        f"/api/restaurants/{restaurant_id}/status",
        json={"status": "approved", "adminNotes": "ok"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.get_json()["data"]["status"] == "approved"

    response = admin_client.patch(
        f"/api/restaurants/{restaurant_id}/status", json={"status": "closed"}, headers=headers
    )
    assert response.status_code == 400


def test_order_status_and_revenue(admin_client, admin_login, client, signup, make_restaurant, make_product):
    headers = admin_login()
    ana = signup()
    restaurant_id = make_restaurant(delivery_fee="5.99")
    product_id = make_product(restaurant_id)
    order = client.post(
        "/api/orders",
        json={
            "restaurantId": restaurant_id,
            "items": [{"productId": product_id, "name": "Pizza", "price": 10, "quantity": 3}],
            "deliveryAddress": "Rua A",
            "paymentMethod": "pix",
        },
        headers=ana,
    ).get_json()["data"]

    response = admin_client.patch(
        f"/api/orders/{order['id']}/status", json={"status": "shipped"}, headers=headers
    )
    assert response.status_code == 400

    response = admin_client.patch(
        f"/api/orders/{order['id']}/status", json={"status": "confirmed"}, headers=headers
    )
    assert response.get_json()["data"]["status"] == "confirmed"

    assert admin_client.patch(
        "/api/orders/4242/status", json={"status": "confirmed"}, headers=headers
    ).status_code == 404

    report = admin_client.get("/api/reports/revenue", headers=headers).get_json()["data"]
    assert report["totalRevenue"] == 35.99
    assert report["totalOrders"] == 1
    assert report["revenueByRestaurant"][0]["orders"] == 1

    response = admin_client.get("/api/reports/revenue?startDate=bad-format", headers=headers)
    assert response.status_code == 400


def test_banner_crud(admin_client, admin_login, client):
    headers = admin_login()
    created = admin_client.post(
        "/api/banners", json={"title": "Frete Grátis", "subtitle": "Acima de R$ 30"}, headers=headers
    )
    assert created.status_code == 201
    banner_id = created.get_json()["data"]["id"]

    assert [b["title"] for b in client.get("/api/banners").get_json()["data"]] == ["Frete Grátis"]

    admin_client.put(
        f"/api/banners/{banner_id}",
        json={"title": "Frete Grátis", "isActive": False},
        headers=headers,
    )
    assert client.get("/api/banners").get_json()["data"] == []

    assert admin_client.delete(f"/api/banners/{banner_id}", headers=headers).status_code == 200
    assert admin_client.delete(f"/api/banners/{banner_id}", headers=headers).status_code == 404


def test_only_super_admin_creates_admins(admin_client, admin_login):
    root = admin_login()
    manager = admin_login(username="manager", password="manager123", role="admin")
    new_admin = {"username": "finance", "password": "finance123", "name": "Financeiro", "role": "admin"}

    assert admin_client.post("/api/admins", json=new_admin, headers=manager).status_code == 403
    assert admin_client.post("/api/admins", json=new_admin, headers=root).status_code == 201
    usernames = {a["username"] for a in admin_client.get("/api/admins", headers=root).get_json()["data"]}
    assert usernames == {"admin", "manager", "finance"}
