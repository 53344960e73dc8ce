from decimal import Decimal

from promo_engine.core.constants import DiscountMode
from promo_engine.core.money import line_amount, percentage_of, quantize_money
from promo_engine.dto.promotions import DirectDiscount
from .base import PerLineStrategy


class DirectDiscountStrategy(PerLineStrategy):
    def compute_discount(self, strategy: DirectDiscount, unit_price: Decimal, quantity: int) -> Decimal:
        subtotal = line_amount(unit_price, quantity)
        if strategy.mode == DiscountMode.PERCENTAGE:
            return percentage_of(subtotal, strategy.value)
        return quantize_money(min(line_amount(strategy.value, quantity), subtotal))
