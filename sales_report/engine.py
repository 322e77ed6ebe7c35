import logging
from collections.abc import Mapping
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Union

from pydantic import ValidationError

from sales_report.errors import InvalidInputError, UnknownProductError, UnknownSellerError
from sales_report.models import (
    Product,
    PurchaseRecord,
    ReportEntry,
    SalesData,
    Seller,
    SellerStats,
    TopProduct,
)
from sales_report.strategies import (
    AnalysisOptions,
    BonusStrategy,
    RankingMode,
    RevenueStrategy,
)

logger = logging.getLogger(__name__)

_TWO_DP = Decimal("0.01")
_COLLECTIONS = ("sellers", "products", "customers", "purchase_records")


def _as_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _round(value: Decimal) -> Decimal:
    return value.quantize(_TWO_DP, rounding=ROUND_HALF_UP)


def _validate_input(data: Union[SalesData, Mapping, None]) -> SalesData:
    if isinstance(data, SalesData):
        raw = {name: getattr(data, name) for name in _COLLECTIONS}
    elif isinstance(data, Mapping):
        raw = data
    else:
        raise InvalidInputError("Invalid input data: expected a mapping of collections")

    for name in _COLLECTIONS:
        value = raw.get(name)
        if not isinstance(value, (list, tuple)) or len(value) == 0:
            raise InvalidInputError(f"Invalid input data: '{name}' must be a non-empty list")

    if isinstance(data, SalesData):
        return data
    try:
        return SalesData.model_validate({name: raw[name] for name in _COLLECTIONS})
    except ValidationError as exc:
        raise InvalidInputError(f"Invalid input data: {exc}") from exc


# ── 1. Indexes ───────────────────────────────────────────────────────────────

def build_indexes(
    sellers: Iterable[Seller],
    products: Iterable[Product],
) -> tuple[dict[str, SellerStats], dict[str, Product]]:
    """Return (seller id → fresh SellerStats, sku → Product)."""
    seller_index = {s.id: SellerStats(**s.model_dump()) for s in sellers}
    product_index = {p.sku: p for p in products}
    return seller_index, product_index


# ── 2. Aggregation ───────────────────────────────────────────────────────────

def aggregate_purchases(
    records: Iterable[PurchaseRecord],
    seller_index: dict[str, SellerStats],
    product_index: dict[str, Product],
    calculate_revenue: RevenueStrategy,
) -> None:
    for record in records:
        stats = seller_index.get(record.seller_id)
        if stats is None:
            logger.warning("Purchase record %s references unknown seller %s",
                           record.receipt_id, record.seller_id)
            raise UnknownSellerError(record.seller_id)

        stats.sales_count += 1
        stats.revenue += record.total_amount

        for item in record.items:
            product = product_index.get(item.sku)
            if product is None:
                logger.warning("Purchase record %s references unknown product %s",
                               record.receipt_id, item.sku)
                raise UnknownProductError(item.sku, record.seller_id)

            cost = product.purchase_price * item.quantity
            revenue = _as_decimal(calculate_revenue(item, product))
            stats.profit += revenue - cost
            # one per line item, whatever the quantity
            stats.products_sold[item.sku] = stats.products_sold.get(item.sku, 0) + 1


# ── 3. Ranking ───────────────────────────────────────────────────────────────

def top_products(products_sold: dict[str, int], limit: int = 10) -> list[TopProduct]:
    """Best sellers by count, ties kept in first-sold order."""
    ranked = sorted(products_sold.items(), key=lambda kv: kv[1], reverse=True)
    return [TopProduct(sku=sku, quantity=qty) for sku, qty in ranked[:limit]]


def rank_sellers(
    stats: list[SellerStats],
    calculate_bonus: BonusStrategy,
    ranking_mode: RankingMode = RankingMode.PROFIT,
    limit: int = 10,
) -> list[SellerStats]:
    """
    Annotate every seller with bonus and top_products.

    Returns the sellers ordered by profit, highest first. With
    RankingMode.INPUT_ORDER the bonus index is the seller's position in
    ``stats`` instead of its profit rank.
    """
    by_profit = sorted(stats, key=lambda s: s.profit, reverse=True)
    order = by_profit if ranking_mode == RankingMode.PROFIT else list(stats)
    total = len(order)

    for index, seller in enumerate(order):
        seller.bonus = _as_decimal(calculate_bonus(index, total, seller))
        seller.top_products = top_products(seller.products_sold, limit)

    return by_profit


# ── 4. Report ────────────────────────────────────────────────────────────────

def format_report(stats: Iterable[SellerStats]) -> list[ReportEntry]:
    entries = []
    for seller in stats:
        if seller.bonus is None or seller.top_products is None:
            raise ValueError(f"Seller '{seller.id}' has not been ranked yet")
        entries.append(ReportEntry(
            seller_id=seller.id,
            name=f"{seller.first_name} {seller.last_name}",
            revenue=_round(seller.revenue),
            profit=_round(seller.profit),
            sales_count=seller.sales_count,
            top_products=seller.top_products,
            bonus=_round(seller.bonus),
        ))
    return entries


def analyze_sales_data(
    data: Union[SalesData, Mapping, None],
    options: AnalysisOptions,
) -> list[ReportEntry]:
    """
    Build the per-seller report: revenue, profit, sales count, top products
    and bonus. Entries come back in the order the sellers were given.
    """
    sales = _validate_input(data)

    seller_index, product_index = build_indexes(sales.sellers, sales.products)
    aggregate_purchases(sales.purchase_records, seller_index, product_index,
                        options.calculate_revenue)
    logger.debug("Aggregated %d purchase records", len(sales.purchase_records))

    stats = list(seller_index.values())
    rank_sellers(stats, options.calculate_bonus, options.ranking_mode,
                 options.top_products_limit)
    logger.debug("Ranked %d sellers (%s)", len(stats), options.ranking_mode.value)

    report = format_report(stats)
    logger.info("Sales report built: %d sellers, %d purchase records",
                len(report), len(sales.purchase_records))
    return report
