import os

os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("SLACK_ALERTS_ENABLED", "false")
os.environ.setdefault("SENTRY_ENABLED", "false")
os.environ.setdefault("FIREHOSE_ENABLED", "false")

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from promo_engine.dto.orders import Extra, Order, OrderLine, Product
from promo_engine.dto.promotions import (
    Promotion,
    PromotionScope,
    ScopeItem,
    TemporalCriterion,
)
from promo_engine.promotions.engine import PromotionEngine
from promo_engine.utils.datetime_helpers import FixedClock

BUENOS_AIRES = timezone(timedelta(hours=-3))

# Wednesday
NOW = datetime(2024, 5, 15, 13, 30, tzinfo=BUENOS_AIRES)


def always_on():
    return TemporalCriterion(date_from=date(2024, 1, 1), date_to=date(2024, 12, 31))


def make_promotion(promotion_id, strategy, targets=(), triggers=(), priority=0, criteria=None, name=None, target_categories=(), trigger_categories=()):
    items = [ScopeItem(reference_id=ref, reference_kind="product", role="target") for ref in targets]
    items += [ScopeItem(reference_id=ref, reference_kind="category", role="target") for ref in target_categories]
    items += [ScopeItem(reference_id=ref, reference_kind="product", role="trigger") for ref in triggers]
    items += [ScopeItem(reference_id=ref, reference_kind="category", role="trigger") for ref in trigger_categories]
    return Promotion(
        id=promotion_id,
        tenant_id="tenant-1",
        name=name or f"Promo {promotion_id}",
        priority=priority,
        strategy=strategy,
        triggers=criteria or [always_on()],
        scope=PromotionScope(items=items),
    )


def make_line(order, product_id, quantity, unit_price, notes="", extras=None, category_id=None):
    line = OrderLine(
        order_id=order.id,
        product_id=product_id,
        product_name=f"Product {product_id}",
        category_id=category_id,
        quantity=quantity,
        unit_price=Decimal(str(unit_price)),
        notes=notes,
        extras=extras or [],
    )
    order.add_line(line)
    return line


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def order():
    return Order(id="order-1", tenant_id="tenant-1")


@pytest.fixture
def engine():
    return PromotionEngine(zero_discount_attribution=False, tie_break_policy="input_order")


@pytest.fixture
def burger():
    return Product(id="burger", name="Burger", price=Decimal("2500"), category_id="mains")


@pytest.fixture
def empanada():
    return Product(id="empanada", name="Empanada", price=Decimal("13500"), category_id="starters")


@pytest.fixture
def soda():
    return Product(id="soda", name="Soda", price=Decimal("1800"), category_id="drinks")


@pytest.fixture
def cheese():
    return Extra(product_id="cheese", name="Extra cheese", unit_price=Decimal("300"))
