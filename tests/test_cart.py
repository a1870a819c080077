"""Tests for the in-memory cart aggregate."""
from decimal import Decimal
from types import SimpleNamespace

import pytest

from pharmanature.utils.cart import Cart, CartManager, format_amount


def make_product(product_id, price, name=None, image_url=None):
    return SimpleNamespace(
        id=product_id,
        name=name or f"Product {product_id}",
        price=Decimal(price),
        image_url=image_url,
    )


SERUM = make_product(1, "89.000", "Sérum Éclat Vitamine C", "https://img/serum.jpg")
BAUME = make_product(2, "45.500", "Baume Réparateur Intense")


class TestAddItem:
    def test_new_item_snapshots_product(self):
        cart = Cart()
        item = cart.add_item(SERUM)

        assert item.product_id == 1
        assert item.product_name == "Sérum Éclat Vitamine C"
        assert item.unit_price == Decimal("89.000")
        assert item.image_url == "https://img/serum.jpg"
        assert item.quantity == 1

    def test_adding_existing_product_increments_quantity(self):
        cart = Cart()
        cart.add_item(BAUME, 2)
        cart.add_item(BAUME, 3)

        assert len(cart) == 1
        assert cart.get_item(2).quantity == 5

    def test_price_is_not_refreshed_on_later_adds(self):
        cart = Cart()
        cart.add_item(BAUME)
        cart.add_item(make_product(2, "50.000"))

        assert cart.get_item(2).unit_price == Decimal("45.500")

    @pytest.mark.parametrize("quantity", [0, -1, -10])
    def test_non_positive_first_add_is_ignored(self, quantity):
        cart = Cart()
        assert cart.add_item(SERUM, quantity) is None
        assert 1 not in cart
        assert cart.item_count == 0

    def test_non_positive_add_leaves_existing_item_alone(self):
        cart = Cart()
        cart.add_item(SERUM, 2)
        cart.add_item(SERUM, -5)

        assert cart.get_item(1).quantity == 2

    def test_insertion_order_is_kept(self):
        cart = Cart()
        cart.add_item(BAUME)
        cart.add_item(SERUM)
        cart.add_item(BAUME)

        assert [item.product_id for item in cart.items] == [2, 1]


class TestUpdateAndRemove:
    @pytest.mark.parametrize("quantity", [0, -5])
    def test_update_to_non_positive_removes_item(self, quantity):
        cart = Cart()
        cart.add_item(SERUM, 3)
        cart.update_quantity(1, quantity)

        assert 1 not in cart
        assert cart.items == []

    def test_update_sets_quantity(self):
        cart = Cart()
        cart.add_item(SERUM, 3)
        cart.update_quantity(1, 7)

        assert cart.get_item(1).quantity == 7
        assert cart.item_count == 7

    def test_update_unknown_product_is_noop(self):
        cart = Cart()
        cart.add_item(SERUM)

        assert cart.update_quantity(99, 4) is None
        assert [item.product_id for item in cart.items] == [1]
        assert 99 not in cart

    def test_remove_twice_is_same_as_once(self):
        cart = Cart()
        cart.add_item(SERUM)
        cart.add_item(BAUME)

        assert cart.remove_item(1) is True
        assert cart.remove_item(1) is False
        assert [item.product_id for item in cart.items] == [2]

    def test_clear(self):
        cart = Cart()
        cart.add_item(SERUM)
        cart.add_item(BAUME, 4)
        cart.clear()

        assert len(cart) == 0
        assert cart.subtotal == Decimal("0")


def test_item_count_tracks_quantities_through_mixed_operations():
    cart = Cart()
    operations = [
        lambda: cart.add_item(SERUM, 2),
        lambda: cart.add_item(BAUME),
        lambda: cart.update_quantity(1, 5),
        lambda: cart.add_item(BAUME, -3),
        lambda: cart.update_quantity(2, -1),
        lambda: cart.remove_item(2),
        lambda: cart.add_item(BAUME, 4),
        lambda: cart.update_quantity(1, 0),
    ]
    for operation in operations:
        operation()
        assert cart.item_count == sum(item.quantity for item in cart.items)
        assert cart.item_count >= 0

    assert cart.item_count == 4


class TestTotals:
    def test_free_shipping_above_threshold(self):
        cart = Cart()
        cart.add_item(BAUME, 2)
        cart.add_item(SERUM, 1)

        assert cart.subtotal == Decimal("180.000")
        assert cart.shipping_fee == Decimal("0")
        assert cart.grand_total == Decimal("180.000")
        assert cart.remaining_for_free_shipping == Decimal("0")
        assert cart.shipping_progress_percent == Decimal("100")

    def test_flat_fee_below_threshold(self):
        cart = Cart()
        cart.add_item(BAUME)

        assert cart.subtotal == Decimal("45.500")
        assert cart.remaining_for_free_shipping == Decimal("74.500")
        assert float(cart.shipping_progress_percent) == pytest.approx(37.9167, abs=1e-4)
        assert cart.shipping_fee == Decimal("7.000")
        assert cart.grand_total == Decimal("52.500")

    def test_subtotal_exactly_at_threshold_ships_free(self):
        cart = Cart()
        cart.add_item(make_product(3, "40.000"), 3)

        assert cart.subtotal == Decimal("120.000")
        assert cart.shipping_fee == Decimal("0")

    def test_empty_cart_still_charges_flat_fee(self):
        cart = Cart()

        assert cart.item_count == 0
        assert cart.subtotal == Decimal("0")
        assert cart.shipping_progress_percent == Decimal("0")
        assert cart.grand_total == Decimal("7.000")

    def test_checkout_total_adds_fiscal_stamp(self):
        cart = Cart()
        cart.add_item(BAUME)

        assert cart.checkout_total == Decimal("53.500")

    def test_custom_threshold_and_fee(self):
        cart = Cart(free_shipping_threshold=Decimal("50"), shipping_fee=Decimal("5.500"))
        cart.add_item(BAUME)

        assert cart.shipping_fee == Decimal("5.500")
        cart.add_item(BAUME)
        assert cart.shipping_fee == Decimal("0")

    def test_subtotal_is_not_rounded_per_line(self):
        cart = Cart()
        cart.add_item(make_product(4, "0.0005"), 3)

        assert cart.subtotal == Decimal("0.0015")
        assert format_amount(cart.subtotal) == "0.002 DT"


def test_summary_formats_amounts_with_three_decimals():
    cart = Cart()
    cart.add_item(BAUME)
    summary = cart.summary()

    assert summary["item_count"] == 1
    assert summary["items"][0]["subtotal"] == 45.5
    assert summary["subtotal_formatted"] == "45.500 DT"
    assert summary["remaining_for_free_shipping_formatted"] == "74.500 DT"
    assert summary["grand_total_formatted"] == "52.500 DT"
    assert summary["free_shipping"] is False


class TestCartManager:
    def test_same_session_gets_same_cart(self):
        manager = CartManager()
        manager.get_cart("a").add_item(SERUM)

        assert manager.get_cart("a").item_count == 1
        assert manager.get_cart("b").item_count == 0
        assert len(manager) == 2

    def test_discard_drops_session_cart(self):
        manager = CartManager()
        manager.get_cart("a").add_item(SERUM)
        manager.discard("a")
        manager.discard("a")

        assert manager.get_cart("a").item_count == 0

    def test_carts_use_manager_pricing(self):
        manager = CartManager(free_shipping_threshold=Decimal("10"), currency="TND")
        cart = manager.get_cart("a")
        cart.add_item(BAUME)

        assert cart.shipping_fee == Decimal("0")
        assert cart.summary()["grand_total_formatted"] == "45.500 TND"

    def test_peek_does_not_store_a_cart(self):
        manager = CartManager()

        assert manager.peek_cart("a").item_count == 0
        assert len(manager) == 0

    def test_peek_returns_stored_cart(self):
        manager = CartManager()
        manager.get_cart("a").add_item(SERUM)

        assert manager.peek_cart("a") is manager.get_cart("a")
        assert len(manager) == 1
