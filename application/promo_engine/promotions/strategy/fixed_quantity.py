from decimal import Decimal

from promo_engine.dto.promotions import FixedQuantity
from .quantity_threshold import QuantityThresholdStrategy


class FixedQuantityStrategy(QuantityThresholdStrategy):
    """Buy N pay M: each cycle gives (buy - pay) units for free"""

    def discount_per_cycle(self, strategy: FixedQuantity, unit_price: Decimal) -> Decimal:
        return Decimal(strategy.buy - strategy.pay) * unit_price
