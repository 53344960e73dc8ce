"""
Core constants for the promotion rule engine

Strategy and criterion type tags, scope roles, promotion status, engine
policies and the error codes reported by caller-side validation.
"""


class PromotionStatus:
    ACTIVE = "active"
    INACTIVE = "inactive"


class StrategyType:
    DIRECT_DISCOUNT = "direct_discount"
    FIXED_QUANTITY = "fixed_quantity"
    CONDITIONAL_COMBO = "conditional_combo"
    FIXED_PRICE_PER_QUANTITY = "fixed_price_per_quantity"

    # Strategies whose benefit depends on the total quantity of a product
    QUANTITY_THRESHOLD = (FIXED_QUANTITY, FIXED_PRICE_PER_QUANTITY)


class DiscountMode:
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"


class CriterionType:
    TEMPORAL = "temporal"
    MINIMUM_AMOUNT = "minimum_amount"
    CONTENT_REQUIRED = "content_required"


class ScopeKind:
    PRODUCT = "product"
    CATEGORY = "category"


class ScopeRole:
    TRIGGER = "trigger"
    TARGET = "target"


class TieBreakPolicy:
    INPUT_ORDER = "input_order"
    PROMOTION_ID = "promotion_id"

    @classmethod
    def all(cls):
        return (cls.INPUT_ORDER, cls.PROMOTION_ID)


class EngineOperation:
    RECALCULATE = "recalculate"
    APPLY_ON_ADD = "apply_on_add"


class PromotionErrorCode:
    INVALID_PROMOTION = "INVALID_PROMOTION"
    SCOPE_WITHOUT_TARGETS = "SCOPE_WITHOUT_TARGETS"
    COMBO_WITHOUT_TRIGGERS = "COMBO_WITHOUT_TRIGGERS"
    UNKNOWN_SCOPE_REFERENCE = "UNKNOWN_SCOPE_REFERENCE"
    LINE_NOT_FOUND = "LINE_NOT_FOUND"
    MANUAL_DISCOUNT_EXCEEDS_REMAINDER = "MANUAL_DISCOUNT_EXCEEDS_REMAINDER"
