"""
Exact decimal money helpers. Amounts are never floats.
"""
from decimal import Decimal, ROUND_HALF_UP

from promo_engine.config.settings import PromoEngineConfigs
configs = PromoEngineConfigs()

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal(1).scaleb(-configs.MONEY_DECIMAL_PLACES)


def to_decimal(value) -> Decimal:
    """Convert ints, strings and Decimals to Decimal; floats go through str()."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(amount: Decimal) -> Decimal:
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def percentage_of(amount: Decimal, percentage: Decimal) -> Decimal:
    return quantize_money(to_decimal(amount) * to_decimal(percentage) / HUNDRED)


def line_amount(unit_price: Decimal, quantity: int) -> Decimal:
    return to_decimal(unit_price) * Decimal(quantity)
