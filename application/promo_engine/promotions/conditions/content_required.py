from promo_engine.dto.promotions import ContentRequiredCriterion
from promo_engine.promotions.context import ValidationContext


def holds(criterion: ContentRequiredCriterion, context: ValidationContext) -> bool:
    return criterion.required_product_ids.issubset(context.product_ids_in_order)
