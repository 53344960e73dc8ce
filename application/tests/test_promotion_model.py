"""
Construction-time validation of promotions, strategies, criteria and scope.
"""
from datetime import date, time
from decimal import Decimal

import pytest
from pydantic import TypeAdapter, ValidationError

from promo_engine.dto.promotions import (
    ActivationCriterion,
    ConditionalCombo,
    ContentRequiredCriterion,
    DirectDiscount,
    FixedPricePerQuantity,
    FixedQuantity,
    MinimumAmountCriterion,
    Promotion,
    PromotionScope,
    PromotionStrategy,
    ScopeItem,
    TemporalCriterion,
)
from conftest import always_on, make_promotion


class TestStrategies:
    def test_direct_discount_percentage_bounds(self):
        assert DirectDiscount(mode="percentage", value=Decimal("100")).value == Decimal("100")
        with pytest.raises(ValidationError):
            DirectDiscount(mode="percentage", value=Decimal("100.01"))
        with pytest.raises(ValidationError):
            DirectDiscount(mode="percentage", value=Decimal("0"))

    def test_direct_discount_fixed_amount_may_exceed_100(self):
        strategy = DirectDiscount(mode="fixed_amount", value=Decimal("500"))
        assert strategy.value == Decimal("500")

    def test_direct_discount_rejects_unknown_mode(self):
        with pytest.raises(ValidationError):
            DirectDiscount(mode="bogus", value=Decimal("10"))

    def test_fixed_quantity_requires_buy_greater_than_pay(self):
        assert FixedQuantity(buy=3, pay=2).cycle_size == 3
        with pytest.raises(ValidationError):
            FixedQuantity(buy=2, pay=2)
        with pytest.raises(ValidationError):
            FixedQuantity(buy=2, pay=0)

    def test_conditional_combo_bounds(self):
        assert ConditionalCombo(min_trigger_qty=1, benefit_percentage=Decimal("50")).min_trigger_qty == 1
        with pytest.raises(ValidationError):
            ConditionalCombo(min_trigger_qty=0, benefit_percentage=Decimal("50"))
        with pytest.raises(ValidationError):
            ConditionalCombo(min_trigger_qty=1, benefit_percentage=Decimal("101"))

    def test_fixed_price_per_quantity_bounds(self):
        assert FixedPricePerQuantity(activation_qty=2, pack_price=Decimal("24000")).cycle_size == 2
        with pytest.raises(ValidationError):
            FixedPricePerQuantity(activation_qty=1, pack_price=Decimal("100"))
        with pytest.raises(ValidationError):
            FixedPricePerQuantity(activation_qty=2, pack_price=Decimal("0"))

    def test_strategies_are_frozen(self):
        strategy = FixedQuantity(buy=2, pay=1)
        with pytest.raises(ValidationError):
            strategy.buy = 5

    def test_discriminated_union_parses_by_type(self):
        adapter = TypeAdapter(PromotionStrategy)
        parsed = adapter.validate_python({"type": "fixed_price_per_quantity", "activation_qty": 2, "pack_price": "24000"})
        assert isinstance(parsed, FixedPricePerQuantity)
        with pytest.raises(ValidationError):
            adapter.validate_python({"type": "mystery", "value": 1})


class TestCriteria:
    def test_temporal_defaults_to_all_days(self):
        criterion = TemporalCriterion(date_from=date(2024, 1, 1), date_to=date(2024, 1, 31))
        assert criterion.days_of_week == frozenset(range(1, 8))

    def test_temporal_empty_days_means_all_days(self):
        criterion = TemporalCriterion(date_from=date(2024, 1, 1), date_to=date(2024, 1, 31), days_of_week=[])
        assert criterion.days_of_week == frozenset(range(1, 8))

    def test_temporal_rejects_inverted_dates(self):
        with pytest.raises(ValidationError):
            TemporalCriterion(date_from=date(2024, 2, 1), date_to=date(2024, 1, 31))

    def test_temporal_single_day_range_is_valid(self):
        criterion = TemporalCriterion(date_from=date(2024, 2, 1), date_to=date(2024, 2, 1))
        assert criterion.date_from == criterion.date_to

    def test_temporal_rejects_inverted_or_equal_times(self):
        with pytest.raises(ValidationError):
            TemporalCriterion(date_from=date(2024, 1, 1), date_to=date(2024, 1, 31), time_from=time(18, 0), time_to=time(12, 0))
        with pytest.raises(ValidationError):
            TemporalCriterion(date_from=date(2024, 1, 1), date_to=date(2024, 1, 31), time_from=time(12, 0), time_to=time(12, 0))

    def test_temporal_rejects_invalid_weekday(self):
        with pytest.raises(ValidationError):
            TemporalCriterion(date_from=date(2024, 1, 1), date_to=date(2024, 1, 31), days_of_week=[0, 8])

    def test_minimum_amount_must_be_positive(self):
        with pytest.raises(ValidationError):
            MinimumAmountCriterion(threshold=Decimal("0"))

    def test_content_required_rejects_empty_set(self):
        with pytest.raises(ValidationError):
            ContentRequiredCriterion(required_product_ids=[])

    def test_criterion_union_parses_by_type(self):
        adapter = TypeAdapter(ActivationCriterion)
        parsed = adapter.validate_python({"type": "minimum_amount", "threshold": "1000"})
        assert isinstance(parsed, MinimumAmountCriterion)


class TestPromotion:
    def test_requires_at_least_one_criterion(self):
        with pytest.raises(ValidationError):
            Promotion(id="p1", tenant_id="t1", name="Promo", strategy=FixedQuantity(buy=2, pay=1), triggers=[])

    def test_requires_strategy(self):
        with pytest.raises(ValidationError):
            Promotion(id="p1", tenant_id="t1", name="Promo", triggers=[always_on()])

    def test_rejects_negative_priority(self):
        with pytest.raises(ValidationError):
            Promotion(id="p1", tenant_id="t1", name="Promo", priority=-1, strategy=FixedQuantity(buy=2, pay=1), triggers=[always_on()])

    def test_rejects_blank_name_and_strips(self):
        with pytest.raises(ValidationError):
            Promotion(id="p1", tenant_id="t1", name="   ", strategy=FixedQuantity(buy=2, pay=1), triggers=[always_on()])
        promotion = Promotion(id="p1", tenant_id="t1", name="  2x1  ", strategy=FixedQuantity(buy=2, pay=1), triggers=[always_on()])
        assert promotion.name == "2x1"

    def test_builds_from_plain_dicts(self):
        promotion = Promotion.model_validate({
            "id": "p1",
            "tenant_id": "t1",
            "name": "Happy hour",
            "priority": 3,
            "strategy": {"type": "direct_discount", "mode": "percentage", "value": "20"},
            "triggers": [{"type": "temporal", "date_from": "2024-01-01", "date_to": "2024-12-31", "time_from": "18:00", "time_to": "20:00"}],
            "scope": {"items": [{"reference_id": "beer", "reference_kind": "product", "role": "target"}]},
        })
        assert isinstance(promotion.strategy, DirectDiscount)
        assert isinstance(promotion.triggers[0], TemporalCriterion)
        assert promotion.scope.targets[0].reference_id == "beer"
        assert promotion.is_active

    def test_activate_and_deactivate(self):
        promotion = make_promotion("p1", FixedQuantity(buy=2, pay=1), targets=["burger"])
        promotion.deactivate()
        assert not promotion.is_active
        assert promotion.status == "inactive"
        promotion.activate()
        assert promotion.is_active

    def test_define_scope_replaces_scope(self):
        promotion = make_promotion("p1", FixedQuantity(buy=2, pay=1), targets=["burger"])
        promotion.define_scope(PromotionScope(items=[ScopeItem(reference_id="soda", role="target")]))
        assert [item.reference_id for item in promotion.scope.targets] == ["soda"]

    def test_scope_rejects_duplicate_reference(self):
        with pytest.raises(ValidationError):
            PromotionScope(items=[
                ScopeItem(reference_id="burger", role="target"),
                ScopeItem(reference_id="burger", role="trigger"),
            ])

    def test_scope_allows_same_id_for_product_and_category(self):
        scope = PromotionScope(items=[
            ScopeItem(reference_id="x", reference_kind="product", role="target"),
            ScopeItem(reference_id="x", reference_kind="category", role="trigger"),
        ])
        assert len(scope.targets) == 1
        assert len(scope.triggers) == 1
