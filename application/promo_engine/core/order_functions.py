from datetime import datetime
from typing import List, Optional, Sequence

from promo_engine.dto.orders import Extra, ManualDiscount, Order, OrderLine, Product
from promo_engine.dto.promotions import Promotion
from promo_engine.promotions.engine import PromotionEngine

# Logger
from promo_engine.logging.utils import get_app_logger
logger = get_app_logger("promo_engine.core.order_functions")


def _find_same_configuration(order: Order, product: Product, notes: str, extras: List[Extra]) -> Optional[OrderLine]:
    candidate = OrderLine(
        order_id=order.id,
        product_id=product.id,
        product_name=product.name,
        quantity=1,
        unit_price=product.price,
        notes=notes,
        extras=extras,
    )
    wanted = candidate.configuration_key()
    for line in order.lines:
        if line.configuration_key() == wanted:
            return line
    return None


def add_product(order: Order, product: Product, quantity: int, notes: str, extras: List[Extra], promotions: Sequence[Promotion], now: datetime, engine: Optional[PromotionEngine] = None) -> OrderLine:
    """
    Add a product to the order.

    A line with the same product, notes and extras absorbs the quantity: it is
    replaced, in place, by a line carrying the accumulated quantity and the
    current price snapshot. Otherwise a new line is appended.
    """
    engine = engine or PromotionEngine()
    extras = list(extras or [])
    existing = _find_same_configuration(order, product, notes, extras)

    if existing is None:
        line = engine.apply_on_add(order, product, quantity, notes, extras, promotions, now)
        logger.info(f"add_product_new_line | order_id={order.id} product_id={product.id} line_id={line.id}")
        return line

    merged = OrderLine(
        order_id=order.id,
        product_id=product.id,
        product_name=product.name,
        category_id=product.category_id,
        quantity=existing.quantity + quantity,
        unit_price=product.price,
        notes=notes,
        extras=extras,
        manual_discount=existing.manual_discount,
    )
    order.replace_line(existing.id, merged)
    engine.recalculate(order, promotions, now)
    logger.info(f"add_product_merged | order_id={order.id} product_id={product.id} replaced={existing.id} line_id={merged.id} quantity={merged.quantity}")
    return merged


def update_line_quantity(order: Order, line_id: str, quantity: int, promotions: Sequence[Promotion], now: datetime, engine: Optional[PromotionEngine] = None) -> OrderLine:
    line = order.find_line(line_id)
    if line.quantity == quantity:
        logger.debug(f"update_line_quantity_noop | line_id={line_id} quantity={quantity}")
        return line

    line.quantity = quantity
    (engine or PromotionEngine()).recalculate(order, promotions, now)
    logger.info(f"update_line_quantity | order_id={order.id} line_id={line_id} quantity={quantity}")
    return line


def remove_line(order: Order, line_id: str, promotions: Sequence[Promotion], now: datetime, engine: Optional[PromotionEngine] = None) -> OrderLine:
    removed = order.remove_line(line_id)
    (engine or PromotionEngine()).recalculate(order, promotions, now)
    logger.info(f"remove_line | order_id={order.id} line_id={line_id} product_id={removed.product_id}")
    return removed


def set_manual_discount(order: Order, line_id: str, manual_discount: Optional[ManualDiscount]) -> OrderLine:
    """Attach (or clear, with None) a manual discount. Automatic promotions are not recalculated."""
    line = order.find_line(line_id)
    if manual_discount is None:
        line.remove_manual_discount()
    else:
        line.apply_manual_discount(manual_discount)
    logger.info(f"set_manual_discount | order_id={order.id} line_id={line_id} mode={manual_discount.mode if manual_discount else None}")
    return line
