from decimal import Decimal

import pytest
from pydantic import ValidationError

from promo_engine.core.exceptions import ManualDiscountError, OrderLineNotFoundError
from promo_engine.dto.orders import Extra, ManualDiscount, Order, OrderLine
from conftest import make_line


class TestOrderLine:
    def test_unit_price_is_a_snapshot(self, order):
        line = make_line(order, "burger", 1, "2500")
        with pytest.raises(ValidationError):
            line.unit_price = Decimal("3000")
        assert line.unit_price == Decimal("2500")

    def test_quantity_must_be_positive(self, order):
        with pytest.raises(ValidationError):
            OrderLine(order_id=order.id, product_id="burger", product_name="Burger", quantity=0, unit_price=Decimal("10"))
        line = make_line(order, "burger", 1, "2500")
        with pytest.raises(ValidationError):
            line.quantity = -1

    def test_discount_cannot_be_negative(self, order):
        line = make_line(order, "burger", 1, "2500")
        with pytest.raises(ValidationError):
            line.discount_amount = Decimal("-1")

    def test_final_price_adds_extras_after_discount(self, order, cheese):
        line = make_line(order, "burger", 2, "2500", extras=[cheese])
        line.apply_promotion("p1", "Promo", Decimal("500"))
        assert line.subtotal() == Decimal("5000")
        assert line.extras_total() == Decimal("600")
        assert line.final_price() == Decimal("5100.00")

    def test_manual_percentage_applies_on_remainder(self, order):
        line = make_line(order, "burger", 1, "2500")
        line.apply_promotion("p1", "Promo", Decimal("500"))
        line.apply_manual_discount(ManualDiscount(mode="percentage", value=Decimal("10"), reason="regular"))
        assert line.manual_discount_amount() == Decimal("200.00")
        assert line.final_price() == Decimal("1800.00")

    def test_manual_fixed_amount_cannot_exceed_remainder(self, order):
        line = make_line(order, "burger", 1, "2500")
        line.apply_promotion("p1", "Promo", Decimal("500"))
        with pytest.raises(ManualDiscountError) as exc:
            line.apply_manual_discount(ManualDiscount(mode="fixed_amount", value=Decimal("2001")))
        assert exc.value.error_code == "MANUAL_DISCOUNT_EXCEEDS_REMAINDER"
        line.apply_manual_discount(ManualDiscount(mode="fixed_amount", value=Decimal("2000")))
        assert line.final_price() == Decimal("0.00")

    def test_manual_discount_validation(self):
        with pytest.raises(ValidationError):
            ManualDiscount(mode="percentage", value=Decimal("120"))
        with pytest.raises(ValidationError):
            ManualDiscount(mode="fixed_amount", value=Decimal("0"))
        with pytest.raises(ValidationError):
            ManualDiscount(mode="voucher", value=Decimal("10"))
        assert ManualDiscount(mode="PERCENTAGE", value=Decimal("10")).mode == "percentage"

    def test_configuration_key_treats_extras_as_multiset(self, order):
        ham = Extra(product_id="ham", name="Ham", unit_price=Decimal("100"))
        egg = Extra(product_id="egg", name="Egg", unit_price=Decimal("150"))
        first = make_line(order, "burger", 1, "2500", notes="no onion", extras=[ham, egg, ham])
        second = make_line(order, "burger", 1, "2500", notes="no onion ", extras=[egg, ham, ham])
        third = make_line(order, "burger", 1, "2500", notes="no onion", extras=[egg, ham])
        assert first.configuration_key() == second.configuration_key()
        assert first.configuration_key() != third.configuration_key()

    def test_clear_promotion(self, order):
        line = make_line(order, "burger", 1, "2500")
        line.apply_promotion("p1", "Promo", Decimal("500"))
        assert line.has_promotion
        line.clear_promotion()
        assert line.discount_amount == Decimal("0")
        assert line.promotion_id is None
        assert line.promotion_name is None
        assert not line.has_promotion


class TestOrder:
    def test_items_subtotal_includes_extras(self, order, cheese):
        make_line(order, "burger", 2, "2500", extras=[cheese])
        make_line(order, "soda", 1, "1800")
        assert order.items_subtotal() == Decimal("7400")

    def test_totals(self, order):
        first = make_line(order, "burger", 2, "2500")
        make_line(order, "soda", 1, "1800")
        first.apply_promotion("p1", "Promo", Decimal("1000"))
        assert order.total_discount() == Decimal("1000.00")
        assert order.total() == Decimal("5800.00")

    def test_find_and_remove_line(self, order):
        line = make_line(order, "burger", 1, "2500")
        assert order.find_line(line.id) is line
        assert order.remove_line(line.id) is line
        assert order.lines == []

    def test_unknown_line_raises(self):
        order = Order(id="o-9")
        with pytest.raises(OrderLineNotFoundError) as exc:
            order.find_line("missing")
        assert exc.value.error_code == "LINE_NOT_FOUND"
        assert exc.value.to_dict()["details"] == {"line_id": "missing", "order_id": "o-9"}
