from typing import Dict, Iterable, List, Optional

from promo_engine.core.constants import PromotionErrorCode, ScopeKind
from promo_engine.dto.promotions import ConditionalCombo, Promotion
from promo_engine.logging.utils import get_app_logger
logger = get_app_logger("promo_engine.promotions_validator")


class PromotionValidator:
    """Scope checks the engine tolerates but catalog management must reject"""

    def __init__(self, promotion: Promotion, known_product_ids: Optional[Iterable[str]] = None, known_category_ids: Optional[Iterable[str]] = None):
        self.promotion = promotion
        self.known_product_ids = set(known_product_ids) if known_product_ids is not None else None
        self.known_category_ids = set(known_category_ids) if known_category_ids is not None else None
        self.errors: List[Dict] = []

    def validate_targets(self):
        if not self.promotion.scope.targets:
            logger.warning(f"Promotion without targets | promotion_id={self.promotion.id}")
            self.errors.append({"code": PromotionErrorCode.SCOPE_WITHOUT_TARGETS, "field": "scope", "message": "Promotion has no TARGET items and cannot benefit any product"})

    def validate_combo_triggers(self):
        if isinstance(self.promotion.strategy, ConditionalCombo) and not self.promotion.scope.triggers:
            logger.warning(f"Combo without triggers | promotion_id={self.promotion.id}")
            self.errors.append({"code": PromotionErrorCode.COMBO_WITHOUT_TRIGGERS, "field": "scope", "message": "Conditional combo requires at least one TRIGGER item"})

    def validate_references(self):
        for item in self.promotion.scope.items:
            if item.reference_kind == ScopeKind.CATEGORY:
                known = self.known_category_ids
            else:
                known = self.known_product_ids

            # No catalog given for this kind, nothing to check against
            if known is None:
                continue

            if item.reference_id not in known:
                logger.warning(f"Unknown scope reference | promotion_id={self.promotion.id} kind={item.reference_kind} reference_id={item.reference_id}")
                self.errors.append({
                    "code": PromotionErrorCode.UNKNOWN_SCOPE_REFERENCE,
                    "field": "scope",
                    "message": f"Unknown {item.reference_kind} {item.reference_id}",
                    "details": {"reference_id": item.reference_id, "reference_kind": item.reference_kind},
                })

    def validate_all(self) -> List[Dict]:
        self.validate_targets()
        self.validate_combo_triggers()
        self.validate_references()
        return self.errors
