from decimal import Decimal

from promo_engine.dto.promotions import FixedPricePerQuantity
from .quantity_threshold import QuantityThresholdStrategy


class FixedPricePerQuantityStrategy(QuantityThresholdStrategy):
    """Each complete pack is billed at pack_price; leftover units pay full price"""

    def discount_per_cycle(self, strategy: FixedPricePerQuantity, unit_price: Decimal) -> Decimal:
        return Decimal(strategy.activation_qty) * unit_price - strategy.pack_price
