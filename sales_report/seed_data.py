"""
Deterministic demo data generator.

Produces:
  - 5 sellers
  - 20 products over 4 categories
  - 10 customers
  - 200 purchase records with 1-4 line items each, ~30 % of lines discounted
"""

import random
from datetime import date, timedelta
from decimal import Decimal

from sales_report.models import Customer, Product, PurchaseItem, PurchaseRecord, Seller
from sales_report.store import DataStore

SEED = 42
RECORD_COUNT = 200
START = date(2026, 1, 1)

_SELLERS = [
    ("seller_1", "Alexey", "Petrov", "Senior Seller"),
    ("seller_2", "Elena", "Ivanova", "Seller"),
    ("seller_3", "Dmitry", "Sokolov", "Seller"),
    ("seller_4", "Olga", "Kuznetsova", "Junior Seller"),
    ("seller_5", "Ivan", "Smirnov", "Trainee"),
]
_CATEGORIES = ["Electronics", "Home", "Garden", "Toys"]


def _money(rng: random.Random, lo: int, hi: int) -> Decimal:
    return Decimal(rng.randint(lo * 100, hi * 100)) / 100


def seed(store: DataStore) -> None:
    rng = random.Random(SEED)

    # ── sellers ──────────────────────────────────────────────────────────────
    for i, (seller_id, first, last, position) in enumerate(_SELLERS):
        store.add_seller(Seller(
            id=seller_id,
            first_name=first,
            last_name=last,
            start_date=date(2020 + i, 3, 1),
            position=position,
        ))

    # ── products ─────────────────────────────────────────────────────────────
    for n in range(1, 21):
        purchase_price = _money(rng, 5, 300)
        store.add_product(Product(
            sku=f"SKU_{n:03d}",
            name=f"Product {n}",
            category=_CATEGORIES[n % len(_CATEGORIES)],
            purchase_price=purchase_price,
            sale_price=(purchase_price * Decimal("1.4")).quantize(Decimal("0.01")),
        ))

    # ── customers ────────────────────────────────────────────────────────────
    for n in range(1, 11):
        store.add_customer(Customer(
            id=f"customer_{n}",
            first_name=f"Customer{n}",
            last_name="Demo",
            email=f"customer{n}@example.com",
        ))

    # ── purchase records ─────────────────────────────────────────────────────
    products = list(store.products.values())
    for n in range(1, RECORD_COUNT + 1):
        items = []
        for product in rng.sample(products, rng.randint(1, 4)):
            discount = Decimal(rng.choice([5, 10, 15])) if rng.random() < 0.3 else Decimal("0")
            items.append(PurchaseItem(
                sku=product.sku,
                quantity=rng.randint(1, 5),
                sale_price=product.sale_price,
                discount=discount,
            ))
        gross = sum((i.sale_price * i.quantity for i in items), Decimal("0"))
        net = sum((i.sale_price * i.quantity * (1 - i.discount / 100) for i in items), Decimal("0"))

        store.add_purchase_record(PurchaseRecord(
            receipt_id=f"receipt_{n}",
            date=START + timedelta(days=rng.randint(0, 30)),
            seller_id=rng.choice(_SELLERS)[0],
            customer_id=f"customer_{rng.randint(1, 10)}",
            items=items,
            total_amount=net.quantize(Decimal("0.01")),
            total_discount=(gross - net).quantize(Decimal("0.01")),
        ))
