from promo_engine.core.constants import StrategyType

# Strategies
from promo_engine.promotions.strategy.direct_discount import DirectDiscountStrategy
from promo_engine.promotions.strategy.fixed_quantity import FixedQuantityStrategy
from promo_engine.promotions.strategy.conditional_combo import ConditionalComboStrategy
from promo_engine.promotions.strategy.fixed_price import FixedPricePerQuantityStrategy

STRATEGIES = {
    StrategyType.DIRECT_DISCOUNT: DirectDiscountStrategy(),
    StrategyType.FIXED_QUANTITY: FixedQuantityStrategy(),
    StrategyType.CONDITIONAL_COMBO: ConditionalComboStrategy(),
    StrategyType.FIXED_PRICE_PER_QUANTITY: FixedPricePerQuantityStrategy(),
}


def get_strategy(strategy):
    return STRATEGIES[strategy.type]
