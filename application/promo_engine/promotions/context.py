from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import FrozenSet

from promo_engine.dto.orders import Order


@dataclass(frozen=True)
class ValidationContext:
    """What activation criteria are evaluated against"""
    date: date
    time: time
    day_of_week: int
    order_total: Decimal
    product_ids_in_order: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_order(cls, order: Order, now: datetime) -> "ValidationContext":
        return cls(
            date=now.date(),
            time=now.time().replace(tzinfo=None),
            day_of_week=now.isoweekday(),
            order_total=order.items_subtotal(),
            product_ids_in_order=frozenset(order.product_ids()),
        )
