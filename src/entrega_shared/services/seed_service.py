"""
Sample data for local environments.

Every loader is idempotent: records are matched by natural key (restaurant
name, product name within its restaurant, admin username) and only missing
ones are inserted. Banners are seeded only into an empty table.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from entrega_shared.constants import AdminRole, PaymentMethod, RestaurantStatus
from entrega_shared.logging_config import get_logger
from entrega_shared.models import Admin, Banner, Product, Restaurant

logger = get_logger(__name__)

ALL_METHODS = [method.value for method in PaymentMethod]
CARDS_AND_PIX = [
    PaymentMethod.CREDIT_CARD.value,
    PaymentMethod.DEBIT_CARD.value,
    PaymentMethod.PIX.value,
]

SAMPLE_RESTAURANTS: list[dict[str, Any]] = [
    {
        "name": "Burger King",
        "description": "Os melhores hambúrgueres da cidade",
        "image": "🍔",
        "category": "Hambúrgueres",
        "rating": Decimal("4.5"),
        "delivery_time": "30-45 min",
        "delivery_fee": Decimal("0"),
        "minimum_order": Decimal("15.00"),
        "is_open": True,
        "payment_methods": ALL_METHODS,
        "status": RestaurantStatus.APPROVED.value,
    },
    {
        "name": "Pizza Hut",
        "description": "Pizzas deliciosas e quentinhas",
        "image": "🍕",
        "category": "Pizza",
        "rating": Decimal("4.8"),
        "delivery_time": "25-40 min",
        "delivery_fee": Decimal("5.99"),
        "minimum_order": Decimal("20.00"),
        "is_open": True,
        "payment_methods": CARDS_AND_PIX,
        "status": RestaurantStatus.APPROVED.value,
    },
    {
        "name": "Pizza Palace",
        "description": "As melhores pizzas da cidade",
        "image": "🍕",
        "category": "Pizza",
        "rating": Decimal("4.3"),
        "delivery_time": "25-40 min",
        "delivery_fee": Decimal("4.99"),
        "minimum_order": Decimal("20.00"),
        "is_open": True,
        "payment_methods": CARDS_AND_PIX,
        "status": RestaurantStatus.APPROVED.value,
    },
    {
        "name": "Sushi Express",
        "description": "Sushi fresco e autêntico",
        "image": "🍣",
        "category": "Japonesa",
        "rating": Decimal("4.7"),
        "delivery_time": "40-55 min",
        "delivery_fee": Decimal("7.99"),
        "minimum_order": Decimal("25.00"),
        "is_open": True,
        "payment_methods": [PaymentMethod.CREDIT_CARD.value, PaymentMethod.PIX.value],
        "status": RestaurantStatus.APPROVED.value,
    },
    {
        "name": "Taco Bell",
        "description": "Comida mexicana saborosa",
        "image": "🌮",
        "category": "Mexicana",
        "rating": Decimal("4.2"),
        "delivery_time": "20-35 min",
        "delivery_fee": Decimal("3.99"),
        "minimum_order": Decimal("12.00"),
        "is_open": False,
        "payment_methods": [
            PaymentMethod.CREDIT_CARD.value,
            PaymentMethod.DEBIT_CARD.value,
            PaymentMethod.CASH.value,
        ],
        "status": RestaurantStatus.PENDING.value,
    },
    {
        "name": "Açaí da Praia",
        "description": "Açaí cremoso e delicioso",
        "image": "🍇",
        "category": "Doces",
        "rating": Decimal("4.6"),
        "delivery_time": "15-25 min",
        "delivery_fee": Decimal("0"),
        "minimum_order": Decimal("10.00"),
        "is_open": True,
        "payment_methods": ALL_METHODS,
        "status": RestaurantStatus.APPROVED.value,
    },
    {
        "name": "Pasta & Cia",
        "description": "Massas artesanais italianas",
        "image": "🍝",
        "category": "Italiana",
        "rating": Decimal("4.4"),
        "delivery_time": "35-50 min",
        "delivery_fee": Decimal("6.99"),
        "minimum_order": Decimal("25.00"),
        "is_open": True,
        "payment_methods": CARDS_AND_PIX,
        "status": RestaurantStatus.APPROVED.value,
    },
]

# (name, description, price, image, category) per restaurant name
SAMPLE_PRODUCTS: dict[str, list[tuple[str, str, str, str, str]]] = {
    "Burger King": [
        ("Big King", "Hambúrguer duplo com queijo, alface, cebola e molho especial", "18.90", "🍔", "Hambúrgueres"),
        ("Whopper", "O clássico hambúrguer do Burger King", "22.90", "🍔", "Hambúrgueres"),
        ("Batata Frita Grande", "Porção grande de batatas fritas crocantes", "8.90", "🍟", "Acompanhamentos"),
        ("Refrigerante 500ml", "Coca-Cola, Pepsi ou Guaraná", "5.90", "🥤", "Bebidas"),
    ],
    "Pizza Hut": [
        ("Pizza Margherita", "Molho de tomate, mussarela e manjericão", "32.90", "🍕", "Pizzas"),
        ("Pizza Pepperoni", "Molho de tomate, mussarela e pepperoni", "38.90", "🍕", "Pizzas"),
        ("Pizza Quatro Queijos", "Mussarela, parmesão, gorgonzola e provolone", "42.90", "🍕", "Pizzas"),
        ("Refrigerante 2L", "Coca-Cola, Pepsi ou Guaraná", "9.90", "🥤", "Bebidas"),
    ],
    "Sushi Express": [
        ("Combo Salmão", "10 peças de sushi e sashimi de salmão", "45.90", "🍣", "Combos"),
        ("Temaki Salmão", "Temaki de salmão com cream cheese", "15.90", "🍣", "Temakis"),
        ("Hot Roll", "8 peças de hot roll empanado", "28.90", "🍣", "Hot Rolls"),
        ("Yakisoba", "Macarrão oriental com legumes e molho especial", "22.90", "🍜", "Pratos Quentes"),
    ],
    "Açaí da Praia": [
        ("Açaí 300ml", "Açaí cremoso com granola, banana e mel", "12.90", "🍇", "Açaí"),
        ("Açaí 500ml", "Açaí cremoso com granola, banana, morango e leite condensado", "18.90", "🍇", "Açaí"),
        ("Vitamina de Açaí", "Vitamina cremosa de açaí com banana", "8.90", "🥤", "Bebidas"),
        ("Tapioca Doce", "Tapioca com coco e leite condensado", "7.90", "🥞", "Tapiocas"),
    ],
}

# (username, password, name, role)
SAMPLE_ADMINS: list[tuple[str, str, str, str]] = [
    ("admin", "admin123", "Administrador Principal", AdminRole.SUPER_ADMIN.value),
    ("manager", "manager123", "Gerente de Operações", AdminRole.ADMIN.value),
    ("support", "support123", "Suporte Técnico", AdminRole.MODERATOR.value),
    ("finance", "finance123", "Financeiro", AdminRole.ADMIN.value),
    ("marketing", "marketing123", "Marketing", AdminRole.MODERATOR.value),
]

SAMPLE_BANNERS: list[dict[str, Any]] = [
    {
        "title": "Frete Grátis",
        "subtitle": "Em pedidos acima de R$ 30",
        "image": "🚚",
        "color": "bg-gradient-to-r from-green-500 to-green-600",
    },
    {
        "title": "20% OFF",
        "subtitle": "No seu primeiro pedido",
        "image": "🎉",
        "color": "bg-gradient-to-r from-red-500 to-red-600",
    },
    {
        "title": "Pizza em Dobro",
        "subtitle": "Toda terça-feira",
        "image": "🍕",
        "color": "bg-gradient-to-r from-orange-500 to-orange-600",
    },
]


def seed_restaurants(session: Session) -> int:
    existing = set(session.execute(select(Restaurant.name)).scalars())
    created = 0
    for data in SAMPLE_RESTAURANTS:
        if data["name"] in existing:
            continue
        session.add(Restaurant(**data))
        created += 1
    session.flush()
    return created


def seed_products(session: Session) -> int:
    created = 0
    for restaurant_name, products in SAMPLE_PRODUCTS.items():
        restaurant = session.execute(
            select(Restaurant).where(Restaurant.name == restaurant_name)
        ).scalars().first()
        if restaurant is None:
            continue
        existing = set(
            session.execute(
                select(Product.name).where(Product.restaurant_id == restaurant.id)
            ).scalars()
        )
        for name, description, price, image, category in products:
            if name in existing:
                continue
            session.add(
                Product(
                    restaurant_id=restaurant.id,
                    name=name,
                    description=description,
                    price=Decimal(price),
                    image=image,
                    category=category,
                    available=True,
                )
            )
            created += 1
    session.flush()
    return created


def seed_admins(session: Session) -> int:
    """Create the default back-office accounts. Passwords are stored hashed."""
    existing = set(session.execute(select(Admin.username)).scalars())
    created = 0
    for username, password, name, role in SAMPLE_ADMINS:
        if username in existing:
            continue
        admin = Admin(username=username, name=name, role=role, is_active=True)
        admin.set_password(password)
        session.add(admin)
        created += 1
    session.flush()
    return created


def seed_banners(session: Session) -> int:
    if session.execute(select(func.count(Banner.id))).scalar():
        return 0
    for position, data in enumerate(SAMPLE_BANNERS, start=1):
        session.add(Banner(**data, is_active=True, order=position))
    session.flush()
    return len(SAMPLE_BANNERS)


def load_seed_data(session: Session) -> dict[str, int]:
    """Run every loader inside the caller's session and report what was created."""
    summary = {
        "restaurants": seed_restaurants(session),
        "products": seed_products(session),
        "admins": seed_admins(session),
        "banners": seed_banners(session),
    }
    logger.info("Seed data loaded: %s", summary)
    return summary
