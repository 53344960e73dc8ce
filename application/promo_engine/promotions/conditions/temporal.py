from promo_engine.dto.promotions import TemporalCriterion
from promo_engine.promotions.context import ValidationContext


def holds(criterion: TemporalCriterion, context: ValidationContext) -> bool:
    if not (criterion.date_from <= context.date <= criterion.date_to):
        return False

    if context.day_of_week not in criterion.days_of_week:
        return False

    # Both ends inclusive
    if criterion.time_from is not None and context.time < criterion.time_from:
        return False
    if criterion.time_to is not None and context.time > criterion.time_to:
        return False

    return True
