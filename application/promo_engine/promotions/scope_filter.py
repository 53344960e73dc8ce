from collections import OrderedDict
from typing import Dict, List, Optional

from promo_engine.core.constants import ScopeKind
from promo_engine.dto.orders import Order, OrderLine
from promo_engine.dto.promotions import ConditionalCombo, Promotion, ScopeItem

# Logging
from promo_engine.logging.utils import get_app_logger
logger = get_app_logger("promo_engine.promotions.scope_filter")


class ScopeFilter:
    """Matches order lines against promotion scopes and groups lines per product"""

    @staticmethod
    def item_matches_line(item: ScopeItem, line: OrderLine) -> bool:
        """
        Check if a scope item references the line's product or its category

        Args:
            item: Scope item (PRODUCT or CATEGORY reference)
            line: Order line with product and category snapshots

        Returns:
            True if the reference matches the line, False otherwise
        """
        if item.reference_kind == ScopeKind.CATEGORY:
            return line.category_id is not None and item.reference_id == line.category_id
        return item.reference_id == line.product_id

    @staticmethod
    def eligible_lines(order: Order) -> List[OrderLine]:
        """Lines with extras are customized offerings and never take part in promotions"""
        eligible = []
        for line in order.lines:
            if line.has_extras:
                logger.debug(f"Line {line.id} excluded by extras | product_id={line.product_id} extras={len(line.extras)}")
                continue
            eligible.append(line)
        return eligible

    @staticmethod
    def group_by_product(lines: List[OrderLine]) -> Dict[str, List[OrderLine]]:
        """Group lines per product id, keeping first-seen product order and line add order"""
        groups: Dict[str, List[OrderLine]] = OrderedDict()
        for line in lines:
            groups.setdefault(line.product_id, []).append(line)
        return groups

    @staticmethod
    def targets_line(promotion: Promotion, line: OrderLine) -> bool:
        return any(ScopeFilter.item_matches_line(item, line) for item in promotion.scope.targets)

    @staticmethod
    def trigger_quantity(item: ScopeItem, lines: List[OrderLine]) -> int:
        return sum(line.quantity for line in lines if ScopeFilter.item_matches_line(item, line))

    @staticmethod
    def combo_triggered(promotion: Promotion, eligible: List[OrderLine], group: Optional[List[OrderLine]] = None) -> bool:
        """
        A combo fires once one trigger reference reaches min_trigger_qty units,
        summed over extras-free lines. A combo without trigger items applies directly.

        Args:
            promotion: Candidate promotion
            eligible: Extras-free lines of the order
            group: Lines being discounted; they never count as their own trigger
        """
        strategy = promotion.strategy
        if not isinstance(strategy, ConditionalCombo):
            return True

        triggers = promotion.scope.triggers
        if not triggers:
            return True

        excluded = {line.id for line in group or []}
        others = [line for line in eligible if line.id not in excluded]

        for item in triggers:
            quantity = ScopeFilter.trigger_quantity(item, others)
            if quantity >= strategy.min_trigger_qty:
                logger.debug(f"Combo triggered | promotion_id={promotion.id} trigger={item.reference_kind}:{item.reference_id} quantity={quantity}")
                return True

        logger.debug(f"Combo not triggered | promotion_id={promotion.id} min_trigger_qty={strategy.min_trigger_qty}")
        return False
