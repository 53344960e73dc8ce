from datetime import date, time
from decimal import Decimal
from typing import Annotated, FrozenSet, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from promo_engine.core.constants import DiscountMode, PromotionStatus, ScopeKind, ScopeRole

ALL_DAYS_OF_WEEK = frozenset(range(1, 8))


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

class DirectDiscount(BaseModel):
    """Percentage or fixed amount off every targeted unit"""
    model_config = ConfigDict(frozen=True)

    type: Literal["direct_discount"] = "direct_discount"
    mode: Literal["percentage", "fixed_amount"] = Field(..., description="percentage or fixed_amount")
    value: Decimal = Field(..., gt=0)

    @model_validator(mode="after")
    def validate_percentage_cap(self):
        if self.mode == DiscountMode.PERCENTAGE and self.value > 100:
            raise ValueError(f"Percentage discount cannot exceed 100, got {self.value}")
        return self


class FixedQuantity(BaseModel):
    """Buy `buy` units, pay for `pay` of them"""
    model_config = ConfigDict(frozen=True)

    type: Literal["fixed_quantity"] = "fixed_quantity"
    buy: int = Field(..., ge=2)
    pay: int = Field(..., ge=1)

    @model_validator(mode="after")
    def validate_ratio(self):
        if self.buy <= self.pay:
            raise ValueError(f"buy ({self.buy}) must be greater than pay ({self.pay})")
        return self

    @property
    def cycle_size(self) -> int:
        return self.buy


class ConditionalCombo(BaseModel):
    """Benefit on target items once enough trigger items are in the order"""
    model_config = ConfigDict(frozen=True)

    type: Literal["conditional_combo"] = "conditional_combo"
    min_trigger_qty: int = Field(1, ge=1)
    benefit_percentage: Decimal = Field(..., gt=0, le=100)


class FixedPricePerQuantity(BaseModel):
    """Every complete pack of `activation_qty` units costs `pack_price`"""
    model_config = ConfigDict(frozen=True)

    type: Literal["fixed_price_per_quantity"] = "fixed_price_per_quantity"
    activation_qty: int = Field(..., ge=2)
    pack_price: Decimal = Field(..., gt=0)

    @property
    def cycle_size(self) -> int:
        return self.activation_qty


PromotionStrategy = Annotated[
    Union[DirectDiscount, FixedQuantity, ConditionalCombo, FixedPricePerQuantity],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Activation criteria
# ---------------------------------------------------------------------------

class TemporalCriterion(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["temporal"] = "temporal"
    date_from: date
    date_to: date
    days_of_week: FrozenSet[int] = Field(default=ALL_DAYS_OF_WEEK, description="ISO weekdays, Monday=1 .. Sunday=7")
    time_from: Optional[time] = None
    time_to: Optional[time] = None

    @field_validator("days_of_week", mode="before")
    def default_all_days(cls, v):
        if v is None or len(v) == 0:
            return ALL_DAYS_OF_WEEK
        return v

    @field_validator("days_of_week")
    def validate_days(cls, v):
        invalid = sorted(day for day in v if day not in ALL_DAYS_OF_WEEK)
        if invalid:
            raise ValueError(f"Invalid ISO weekday(s): {invalid}")
        return v

    @model_validator(mode="after")
    def validate_ranges(self):
        if self.date_from > self.date_to:
            raise ValueError(f"date_from ({self.date_from}) must not be after date_to ({self.date_to})")
        if self.time_from is not None and self.time_to is not None and self.time_from >= self.time_to:
            raise ValueError(f"time_from ({self.time_from}) must be before time_to ({self.time_to})")
        return self


class MinimumAmountCriterion(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["minimum_amount"] = "minimum_amount"
    threshold: Decimal = Field(..., gt=0)


class ContentRequiredCriterion(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["content_required"] = "content_required"
    required_product_ids: FrozenSet[str] = Field(..., min_length=1)


ActivationCriterion = Annotated[
    Union[TemporalCriterion, MinimumAmountCriterion, ContentRequiredCriterion],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Scope
# ---------------------------------------------------------------------------

class ScopeItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    reference_id: str = Field(..., min_length=1, description="Product or category id")
    reference_kind: Literal["product", "category"] = ScopeKind.PRODUCT
    role: Literal["trigger", "target"] = ScopeRole.TARGET

    @property
    def is_target(self) -> bool:
        return self.role == ScopeRole.TARGET

    @property
    def is_trigger(self) -> bool:
        return self.role == ScopeRole.TRIGGER


class PromotionScope(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: List[ScopeItem] = Field(default_factory=list)

    @field_validator("items")
    def validate_unique_references(cls, items):
        seen = set()
        for item in items:
            key = (item.reference_kind, item.reference_id)
            if key in seen:
                raise ValueError(f"Duplicate scope reference: {item.reference_kind}:{item.reference_id}")
            seen.add(key)
        return items

    @property
    def targets(self) -> List[ScopeItem]:
        return [item for item in self.items if item.is_target]

    @property
    def triggers(self) -> List[ScopeItem]:
        return [item for item in self.items if item.is_trigger]


# ---------------------------------------------------------------------------
# Promotion aggregate
# ---------------------------------------------------------------------------

class Promotion(BaseModel):
    """
    An automatic promotion: one strategy, AND-combined activation criteria and
    a scope. Only `status` and `scope` change after construction.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(..., min_length=1)
    tenant_id: str = Field(..., min_length=1)
    name: str = Field(..., max_length=200)
    description: Optional[str] = None
    priority: int = Field(0, ge=0)
    status: Literal["active", "inactive"] = PromotionStatus.ACTIVE
    strategy: PromotionStrategy
    triggers: List[ActivationCriterion] = Field(..., min_length=1)
    scope: PromotionScope = Field(default_factory=PromotionScope)

    @field_validator("name")
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Promotion name cannot be blank")
        return v

    @property
    def is_active(self) -> bool:
        return self.status == PromotionStatus.ACTIVE

    def activate(self) -> None:
        self.status = PromotionStatus.ACTIVE

    def deactivate(self) -> None:
        self.status = PromotionStatus.INACTIVE

    def define_scope(self, scope: PromotionScope) -> None:
        self.scope = scope
