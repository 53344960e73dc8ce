from promo_engine.core.constants import CriterionType
from promo_engine.dto.promotions import Promotion
from promo_engine.promotions.context import ValidationContext

# Conditions
from promo_engine.promotions.conditions import temporal, minimum_amount, content_required

CRITERIA_EVALUATORS = {
    CriterionType.TEMPORAL: temporal.holds,
    CriterionType.MINIMUM_AMOUNT: minimum_amount.holds,
    CriterionType.CONTENT_REQUIRED: content_required.holds,
}

# Logging
from promo_engine.logging.utils import get_app_logger
logger = get_app_logger("promo_engine.promotions.activation")


def holds(criterion, context: ValidationContext) -> bool:
    return CRITERIA_EVALUATORS[criterion.type](criterion, context)


def can_activate(promotion: Promotion, context: ValidationContext) -> bool:
    """All criteria must hold; an inactive promotion never activates."""
    if not promotion.is_active:
        logger.debug(f"promotion_inactive | promotion_id={promotion.id}")
        return False

    for criterion in promotion.triggers:
        if not holds(criterion, context):
            logger.debug(f"criterion_not_met | promotion_id={promotion.id} criterion={criterion.type}")
            return False
    return True
