from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Tuple

from promo_engine.dto.orders import OrderLine


class BasePromotionStrategy(ABC):
    @abstractmethod
    def compute_discount(self, strategy, unit_price: Decimal, quantity: int) -> Decimal:
        pass

    @abstractmethod
    def apply_to_lines(self, strategy, lines: List[OrderLine]) -> List[Tuple[OrderLine, Decimal]]:
        pass


class PerLineStrategy(BasePromotionStrategy):
    """Strategies whose discount depends on one line only"""

    def apply_to_lines(self, strategy, lines: List[OrderLine]) -> List[Tuple[OrderLine, Decimal]]:
        discounted = []
        for line in lines:
            amount = self.compute_discount(strategy, line.unit_price, line.quantity)
            if amount > 0:
                discounted.append((line, amount))
        return discounted
