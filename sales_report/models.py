from pydantic import BaseModel, Field
import datetime as dt
from decimal import Decimal
from typing import Optional


# ── Reference data ───────────────────────────────────────────────────────────

class Seller(BaseModel):
    id: str
    first_name: str
    last_name: str
    start_date: Optional[dt.date] = None
    position: Optional[str] = None


class Product(BaseModel):
    sku: str
    purchase_price: Decimal  # cost basis per unit
    name: Optional[str] = None
    category: Optional[str] = None
    sale_price: Optional[Decimal] = None


class Customer(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


# ── Purchases ────────────────────────────────────────────────────────────────

class PurchaseItem(BaseModel):
    sku: str
    quantity: int
    sale_price: Decimal
    discount: Decimal = Decimal("0")  # percent, e.g. Decimal("5") for 5 %


class PurchaseRecord(BaseModel):
    seller_id: str
    total_amount: Decimal
    items: list[PurchaseItem]
    receipt_id: Optional[str] = None
    date: Optional[dt.date] = None
    customer_id: Optional[str] = None
    total_discount: Optional[Decimal] = None


class SalesData(BaseModel):
    sellers: list[Seller]
    products: list[Product]
    customers: list[Customer]
    purchase_records: list[PurchaseRecord]


# ── Working state ────────────────────────────────────────────────────────────

class TopProduct(BaseModel):
    sku: str
    quantity: int


class SellerStats(BaseModel):
    id: str
    first_name: str
    last_name: str
    start_date: Optional[dt.date] = None
    position: Optional[str] = None
    sales_count: int = 0
    revenue: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")
    # SKU → number of line items sold (not units)
    products_sold: dict[str, int] = Field(default_factory=dict)
    # set by the ranking pass
    bonus: Optional[Decimal] = None
    top_products: Optional[list[TopProduct]] = None


# ── Response models ──────────────────────────────────────────────────────────

class ReportEntry(BaseModel):
    seller_id: str
    name: str
    revenue: Decimal
    profit: Decimal
    sales_count: int
    top_products: list[TopProduct]
    bonus: Decimal
