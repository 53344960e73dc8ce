from collections import Counter
from decimal import Decimal
from typing import List, Optional, Set
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from promo_engine.core.constants import DiscountMode
from promo_engine.core.exceptions import ManualDiscountError, OrderLineNotFoundError
from promo_engine.core.money import ZERO, line_amount, percentage_of, quantize_money


def _new_id() -> str:
    return str(uuid.uuid4())


class Product(BaseModel):
    """Catalog product as seen at add-time"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    price: Decimal = Field(..., ge=0)
    category_id: Optional[str] = None


class Extra(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    unit_price: Decimal = Field(..., ge=0)


class ManualDiscount(BaseModel):
    """Discount granted by staff on top of the automatic promotion"""
    model_config = ConfigDict(frozen=True)

    mode: str = Field(..., description="percentage or fixed_amount")
    value: Decimal = Field(..., gt=0)
    reason: Optional[str] = Field(None, max_length=255)

    @field_validator("mode")
    def validate_mode(cls, v):
        allowed = {DiscountMode.PERCENTAGE, DiscountMode.FIXED_AMOUNT}
        if v.lower() not in allowed:
            raise ValueError(f"Invalid manual discount mode: {v}")
        return v.lower()

    @model_validator(mode="after")
    def validate_percentage_cap(self):
        if self.mode == DiscountMode.PERCENTAGE and self.value > 100:
            raise ValueError(f"Manual percentage cannot exceed 100, got {self.value}")
        return self

    def amount_on(self, base: Decimal) -> Decimal:
        if base <= ZERO:
            return ZERO
        if self.mode == DiscountMode.PERCENTAGE:
            return percentage_of(base, self.value)
        return quantize_money(min(self.value, base))


class OrderLine(BaseModel):
    """
    One line of an order. `unit_price` is a snapshot taken when the product
    was added; `discount_amount`, `promotion_id` and `promotion_name` belong
    to the promotion engine; `manual_discount` belongs to the caller.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=_new_id)
    order_id: str
    product_id: str = Field(..., min_length=1)
    product_name: str = Field(..., min_length=1, max_length=200)
    category_id: Optional[str] = None
    quantity: int = Field(..., gt=0)
    unit_price: Decimal = Field(..., ge=0, frozen=True)
    notes: str = ""
    extras: List[Extra] = Field(default_factory=list)
    discount_amount: Decimal = Field(ZERO, ge=0)
    promotion_id: Optional[str] = None
    promotion_name: Optional[str] = None
    manual_discount: Optional[ManualDiscount] = None

    @field_validator("notes", mode="before")
    def normalize_notes(cls, v):
        return (v or "").strip()

    @property
    def has_extras(self) -> bool:
        return len(self.extras) > 0

    @property
    def has_promotion(self) -> bool:
        return self.promotion_id is not None

    def subtotal(self) -> Decimal:
        """Base price times quantity; the only amount promotions discount."""
        return line_amount(self.unit_price, self.quantity)

    def extras_total(self) -> Decimal:
        unit_extras = sum((extra.unit_price for extra in self.extras), ZERO)
        return line_amount(unit_extras, self.quantity)

    def remainder_after_promotion(self) -> Decimal:
        return self.subtotal() - self.discount_amount

    def manual_discount_amount(self) -> Decimal:
        if self.manual_discount is None:
            return ZERO
        return self.manual_discount.amount_on(self.remainder_after_promotion())

    def final_price(self) -> Decimal:
        return quantize_money(
            self.subtotal() - self.discount_amount - self.manual_discount_amount() + self.extras_total()
        )

    def configuration_key(self):
        """Product, notes and extras (as a multiset) identify a configuration."""
        extras_multiset = tuple(sorted(Counter(extra.product_id for extra in self.extras).items()))
        return (self.product_id, self.notes, extras_multiset)

    def clear_promotion(self) -> None:
        self.discount_amount = ZERO
        self.promotion_id = None
        self.promotion_name = None

    def apply_promotion(self, promotion_id: str, promotion_name: str, amount: Decimal) -> None:
        self.discount_amount = quantize_money(amount)
        self.promotion_id = promotion_id
        self.promotion_name = promotion_name

    def apply_manual_discount(self, manual_discount: ManualDiscount) -> None:
        remainder = self.remainder_after_promotion()
        if manual_discount.mode == DiscountMode.FIXED_AMOUNT and manual_discount.value > remainder:
            raise ManualDiscountError(
                f"Manual discount {manual_discount.value} exceeds remaining amount {remainder}",
                details={"line_id": self.id, "remainder": str(remainder), "requested": str(manual_discount.value)},
            )
        self.manual_discount = manual_discount

    def remove_manual_discount(self) -> None:
        self.manual_discount = None


class Order(BaseModel):
    """Mutable order aggregate; lines keep the order they were added in."""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=_new_id)
    tenant_id: Optional[str] = None
    lines: List[OrderLine] = Field(default_factory=list)

    def items_subtotal(self) -> Decimal:
        return sum((line.subtotal() + line.extras_total() for line in self.lines), ZERO)

    def total_discount(self) -> Decimal:
        return sum((line.discount_amount for line in self.lines), ZERO)

    def total(self) -> Decimal:
        return sum((line.final_price() for line in self.lines), ZERO)

    def product_ids(self) -> Set[str]:
        return {line.product_id for line in self.lines}

    def line_index(self, line_id: str) -> int:
        for index, line in enumerate(self.lines):
            if line.id == line_id:
                return index
        raise OrderLineNotFoundError(f"Order line {line_id} not found in order {self.id}", details={"line_id": line_id, "order_id": self.id})

    def find_line(self, line_id: str) -> OrderLine:
        return self.lines[self.line_index(line_id)]

    def add_line(self, line: OrderLine) -> OrderLine:
        self.lines.append(line)
        return line

    def replace_line(self, line_id: str, new_line: OrderLine) -> OrderLine:
        self.lines[self.line_index(line_id)] = new_line
        return new_line

    def remove_line(self, line_id: str) -> OrderLine:
        return self.lines.pop(self.line_index(line_id))
