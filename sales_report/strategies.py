from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from sales_report.config import settings
from sales_report.models import Product, PurchaseItem, SellerStats

_HUNDRED = Decimal("100")


class RankingMode(str, Enum):
    PROFIT = "profit"            # bonus follows the profit ranking
    INPUT_ORDER = "input_order"  # bonus follows the seller list as given


class BonusPolicy(str, Enum):
    BY_PROFIT = "by_profit"              # flat amount per rank
    SHARE_OF_PROFIT = "share_of_profit"  # percentage of the seller's profit per rank


@runtime_checkable
class RevenueStrategy(Protocol):
    def __call__(self, item: PurchaseItem, product: Product) -> Any: ...


@runtime_checkable
class BonusStrategy(Protocol):
    def __call__(self, index: int, total: int, seller: SellerStats) -> Any: ...


# ── Built-in strategies ──────────────────────────────────────────────────────

def calculate_simple_revenue(item: PurchaseItem, product: Product) -> Decimal:
    """Line revenue after the percentage discount."""
    discount = 1 - item.discount / _HUNDRED
    return item.sale_price * item.quantity * discount


def _bonus_rate(index: int, total: int) -> int:
    # first place wins over last place when there is a single seller
    if index == 0:
        return 15
    if index == total - 1:
        return 0
    if index in (1, 2):
        return 10
    return 5


def calculate_bonus_by_profit(index: int, total: int, seller: SellerStats) -> Decimal:
    """Flat bonus by rank position: 15 / 10 / 10 / 5 ... / 0 for the last one."""
    return Decimal(_bonus_rate(index, total))


def calculate_bonus_share_of_profit(index: int, total: int, seller: SellerStats) -> Decimal:
    """Same ladder, read as a percentage of the seller's profit. Losses earn nothing."""
    if seller.profit <= 0:
        return Decimal("0")
    return seller.profit * _bonus_rate(index, total) / _HUNDRED


_BONUS_STRATEGIES: dict[BonusPolicy, BonusStrategy] = {
    BonusPolicy.BY_PROFIT: calculate_bonus_by_profit,
    BonusPolicy.SHARE_OF_PROFIT: calculate_bonus_share_of_profit,
}


# ── Options ──────────────────────────────────────────────────────────────────

class AnalysisOptions(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    calculate_revenue: RevenueStrategy
    calculate_bonus: BonusStrategy
    ranking_mode: RankingMode = RankingMode.PROFIT
    top_products_limit: int = Field(default=10, ge=0, le=10)


def bonus_strategy(policy: BonusPolicy) -> BonusStrategy:
    return _BONUS_STRATEGIES[policy]


def default_options(
    ranking_mode: Optional[RankingMode] = None,
    bonus_policy: Optional[BonusPolicy] = None,
) -> AnalysisOptions:
    """Options from settings; explicit arguments override RANKING_MODE / BONUS_STRATEGY."""
    return AnalysisOptions(
        calculate_revenue=calculate_simple_revenue,
        calculate_bonus=bonus_strategy(bonus_policy or BonusPolicy(settings.BONUS_STRATEGY)),
        ranking_mode=ranking_mode or RankingMode(settings.RANKING_MODE),
        top_products_limit=settings.TOP_PRODUCTS_LIMIT,
    )
