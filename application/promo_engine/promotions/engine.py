from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

# DTOs
from promo_engine.dto.orders import Extra, Order, OrderLine, Product
from promo_engine.dto.promotions import Promotion

# Constants
from promo_engine.core.constants import EngineOperation, StrategyType, TieBreakPolicy
from promo_engine.core.money import ZERO
from promo_engine.core.evaluation_context import start_evaluation, end_evaluation

# Promotions
from promo_engine.promotions.activation import can_activate
from promo_engine.promotions.context import ValidationContext
from promo_engine.promotions.scope_filter import ScopeFilter
from promo_engine.promotions.strategy.registry import get_strategy

# Settings
from promo_engine.config.settings import PromoEngineConfigs
from promo_engine.config.sentry import capture_exception
configs = PromoEngineConfigs()

# Logging
from promo_engine.logging.utils import get_app_logger
logger = get_app_logger("promo_engine.promotions.engine")


@dataclass
class GroupDecision:
    """Winning promotion for one product group and the amount each line receives"""
    promotion: Promotion
    allocations: List[Tuple[OrderLine, Decimal]] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((amount for _, amount in self.allocations), ZERO)


class PromotionEngine:
    """Decides, per order line, which automatic promotion applies and how much it grants."""

    def __init__(self, zero_discount_attribution: Optional[bool] = None, tie_break_policy: Optional[str] = None):
        """Initialize the engine with optional policy overrides.
        Args:
            zero_discount_attribution: Let quantity-threshold promotions with no complete
                cycle win and be recorded with a zero discount. Defaults to ZERO_DISCOUNT_ATTRIBUTION.
            tie_break_policy: input_order or promotion_id. Defaults to TIE_BREAK_POLICY.
        """
        if zero_discount_attribution is None:
            zero_discount_attribution = configs.ZERO_DISCOUNT_ATTRIBUTION
        if tie_break_policy is None:
            tie_break_policy = configs.TIE_BREAK_POLICY
        if tie_break_policy not in TieBreakPolicy.all():
            raise ValueError(f"Unsupported tie break policy: {tie_break_policy}")

        self.zero_discount_attribution = zero_discount_attribution
        self.tie_break_policy = tie_break_policy

    def recalculate(self, order: Order, promotions: Sequence[Promotion], now: datetime) -> None:
        """Recompute automatic promotions for every line of the order, in place.

        Manual discounts are left untouched. Calling it twice with the same
        inputs produces the same result.

        Args:
            order: Order snapshot; its lines are mutated
            promotions: Candidate promotions already filtered by tenant
            now: Current instant in the business timezone
        """
        token = start_evaluation(order.id, order.tenant_id, EngineOperation.RECALCULATE)
        try:
            self._recalculate(order, promotions, now)
        except Exception as e:
            capture_exception(e)
            raise
        finally:
            end_evaluation(token)

    def apply_on_add(self, order: Order, product: Product, quantity: int, notes: str, extras: List[Extra], promotions: Sequence[Promotion], now: datetime) -> OrderLine:
        """Add a new line for `product` and recalculate the whole order.

        The new line is first evaluated on its own (logged as a preview), then
        appended and the full recalculation keeps sibling lines of the same
        product consistent.

        Returns:
            The appended line, carrying the recalculated attribution
        """
        token = start_evaluation(order.id, order.tenant_id, EngineOperation.APPLY_ON_ADD)
        try:
            line = OrderLine(
                order_id=order.id,
                product_id=product.id,
                product_name=product.name,
                category_id=product.category_id,
                quantity=quantity,
                unit_price=product.price,
                notes=notes,
                extras=list(extras or []),
            )

            preview = self.preview_line(order, line, promotions, now)
            logger.info(
                f"apply_on_add_preview | product_id={product.id} quantity={quantity} "
                f"promotion_id={preview.promotion.id if preview else None} "
                f"discount={preview.total if preview else ZERO}"
            )

            order.add_line(line)
            self._recalculate(order, promotions, now)

            logger.info(f"apply_on_add_done | line_id={line.id} promotion_id={line.promotion_id} discount={line.discount_amount}")
            return line
        except Exception as e:
            capture_exception(e)
            raise
        finally:
            end_evaluation(token)

    def preview_line(self, order: Order, line: OrderLine, promotions: Sequence[Promotion], now: datetime) -> Optional[GroupDecision]:
        """Evaluate one line on its own, without touching the order or the line."""
        if line.has_extras:
            return None
        snapshot = Order(id=order.id, tenant_id=order.tenant_id, lines=list(order.lines) + [line])
        context = ValidationContext.from_order(snapshot, now)
        activatable = [promotion for promotion in promotions if can_activate(promotion, context)]
        eligible = ScopeFilter.eligible_lines(snapshot)
        return self.evaluate_group([line], activatable, eligible)

    def evaluate_group(self, group: List[OrderLine], activatable: List[Promotion], eligible: List[OrderLine]) -> Optional[GroupDecision]:
        """Pick the winning promotion for one product group.

        Args:
            group: Extras-free lines of one product, in add order
            activatable: Promotions whose criteria all hold, in input order
            eligible: All extras-free lines of the order (for combo triggers)

        Returns:
            GroupDecision for the winner, or None when nothing applies
        """
        reference_line = group[0]
        candidates = []

        for index, promotion in enumerate(activatable):
            if not ScopeFilter.targets_line(promotion, reference_line):
                continue
            if not ScopeFilter.combo_triggered(promotion, eligible, group):
                continue

            strategy_impl = get_strategy(promotion.strategy)
            allocations = strategy_impl.apply_to_lines(promotion.strategy, group)
            decision = GroupDecision(promotion=promotion, allocations=allocations)

            if decision.total <= ZERO:
                if not (self.zero_discount_attribution and promotion.strategy.type in StrategyType.QUANTITY_THRESHOLD):
                    logger.debug(f"candidate_without_benefit | promotion_id={promotion.id} product_id={reference_line.product_id}")
                    continue
                decision.allocations = [(line, ZERO) for line in group]

            candidates.append((index, decision))

        if not candidates:
            return None
        return self.resolve_conflict(candidates)

    def resolve_conflict(self, candidates: List[Tuple[int, GroupDecision]]) -> GroupDecision:
        """Highest priority wins; ties go to input order or to the smallest promotion id."""
        if self.tie_break_policy == TieBreakPolicy.PROMOTION_ID:
            def sort_key(candidate):
                return (-candidate[1].promotion.priority, candidate[1].promotion.id)
        else:
            def sort_key(candidate):
                return (-candidate[1].promotion.priority, candidate[0])

        winner = min(candidates, key=sort_key)[1]
        if len(candidates) > 1:
            logger.debug(f"conflict_resolved | winner={winner.promotion.id} candidates={[c[1].promotion.id for c in candidates]}")
        return winner

    def _recalculate(self, order: Order, promotions: Sequence[Promotion], now: datetime) -> None:
        for line in order.lines:
            line.clear_promotion()

        context = ValidationContext.from_order(order, now)
        activatable = [promotion for promotion in promotions if can_activate(promotion, context)]
        logger.info(f"recalculate_start | lines={len(order.lines)} candidates={len(promotions)} activatable={len(activatable)}")

        if not activatable:
            logger.info(f"recalculate_done | order_id={order.id} total_discount={ZERO}")
            return

        eligible = ScopeFilter.eligible_lines(order)
        groups: Dict[str, List[OrderLine]] = ScopeFilter.group_by_product(eligible)

        for product_id, group in groups.items():
            decision = self.evaluate_group(group, activatable, eligible)
            if decision is None:
                continue

            for line, amount in decision.allocations:
                line.apply_promotion(decision.promotion.id, decision.promotion.name, amount)

            logger.info(
                f"promotion_applied | product_id={product_id} promotion_id={decision.promotion.id} "
                f"lines={len(decision.allocations)} discount={decision.total}",
                extra={"product_id": product_id, "promotion_id": decision.promotion.id, "discount": decision.total, "lines": len(decision.allocations)},
            )

        logger.info(f"recalculate_done | order_id={order.id} total_discount={order.total_discount()}")
