from abc import abstractmethod
from decimal import Decimal
from typing import List, Tuple

from promo_engine.core.money import ZERO, quantize_money
from promo_engine.dto.orders import OrderLine
from promo_engine.promotions.distribution import distribute_over_covered_units
from .base import BasePromotionStrategy


class QuantityThresholdStrategy(BasePromotionStrategy):
    """Benefit granted per complete cycle of `cycle_size` units of one product"""

    @abstractmethod
    def discount_per_cycle(self, strategy, unit_price: Decimal) -> Decimal:
        pass

    def cycles(self, strategy, quantity: int) -> int:
        return quantity // strategy.cycle_size

    def compute_discount(self, strategy, unit_price: Decimal, quantity: int) -> Decimal:
        per_cycle = self.discount_per_cycle(strategy, unit_price)
        if per_cycle <= ZERO:
            return ZERO
        return quantize_money(per_cycle * self.cycles(strategy, quantity))

    def apply_to_lines(self, strategy, lines: List[OrderLine]) -> List[Tuple[OrderLine, Decimal]]:
        if not lines:
            return []
        total_qty = sum(line.quantity for line in lines)
        # Lowest snapshot in the group so no line is discounted above its own price
        reference_price = min(line.unit_price for line in lines)
        total_discount = self.compute_discount(strategy, reference_price, total_qty)
        covered_units = self.cycles(strategy, total_qty) * strategy.cycle_size
        return distribute_over_covered_units(lines, total_discount, covered_units)
