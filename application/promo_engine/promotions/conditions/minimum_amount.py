from promo_engine.dto.promotions import MinimumAmountCriterion
from promo_engine.promotions.context import ValidationContext


def holds(criterion: MinimumAmountCriterion, context: ValidationContext) -> bool:
    return context.order_total >= criterion.threshold
