from decimal import Decimal

from promo_engine.core.money import line_amount, percentage_of
from promo_engine.dto.promotions import ConditionalCombo
from .base import PerLineStrategy


class ConditionalComboStrategy(PerLineStrategy):
    """Discounts target lines only; the trigger check happens before the strategy runs."""

    def compute_discount(self, strategy: ConditionalCombo, unit_price: Decimal, quantity: int) -> Decimal:
        return percentage_of(line_amount(unit_price, quantity), strategy.benefit_percentage)
