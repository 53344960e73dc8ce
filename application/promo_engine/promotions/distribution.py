"""
Spread a group-level discount over the lines of one product.

Quantity-threshold promotions are computed on the total quantity of a product
across all of its extras-free lines. Only the units that fall inside complete
cycles carry the discount; those units are taken from the lines in the order
the lines were added.
"""
from decimal import Decimal
from typing import List, Tuple

from promo_engine.core.money import ZERO, quantize_money
from promo_engine.dto.orders import OrderLine


def covered_units_by_line(lines: List[OrderLine], covered_units: int) -> List[Tuple[OrderLine, int]]:
    """Walk lines in add order and hand out `covered_units` units."""
    remaining = covered_units
    allocation = []
    for line in lines:
        if remaining <= 0:
            break
        taken = min(line.quantity, remaining)
        allocation.append((line, taken))
        remaining -= taken
    return allocation


def distribute_over_covered_units(lines: List[OrderLine], total_discount: Decimal, covered_units: int) -> List[Tuple[OrderLine, Decimal]]:
    """
    Split `total_discount` across lines proportionally to the covered units each
    line holds. Each share is the difference between consecutive rounded
    cumulative amounts, so shares never go negative and always add up to
    `total_discount`. Lines whose share rounds to zero are left out.

    Args:
        lines: Extras-free lines of one product, in add order
        total_discount: Discount computed for the whole group
        covered_units: Units inside complete cycles (cycles x cycle size)

    Returns:
        (line, amount) for every line whose share is positive
    """
    if covered_units <= 0 or total_discount <= ZERO:
        return []

    shares = []
    units_so_far = 0
    assigned = ZERO
    for line, units in covered_units_by_line(lines, covered_units):
        units_so_far += units
        if units_so_far == covered_units:
            cumulative = total_discount
        else:
            cumulative = quantize_money(total_discount * Decimal(units_so_far) / Decimal(covered_units))
        share = cumulative - assigned
        assigned = cumulative
        # Tiny totals can round a covered line down to nothing
        if share > ZERO:
            shares.append((line, share))
    return shares

