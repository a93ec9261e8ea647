"""Tests for pure cart transitions."""

import pytest

from storefront.client import cart as carts
from storefront.client.cart import CartLine


def make_cart(*pairs):
    return tuple(CartLine(product_id=p, quantity=q) for p, q in pairs)


def as_pairs(cart):
    return [(line.product_id, line.quantity) for line in cart]


class TestAddItem:
    def test_appends_new_line(self):
        cart = carts.add_item(make_cart((1, 1)), 2, 3)
        assert as_pairs(cart) == [(1, 1), (2, 3)]

    def test_increments_existing_line(self):
        cart = carts.add_item(make_cart((1, 1), (2, 1)), 1, 2)
        assert as_pairs(cart) == [(1, 3), (2, 1)]

    def test_thirty_adds_cap_at_25(self):
        cart = ()
        for _ in range(30):
            cart = carts.add_item(cart, 7, 1)
        assert as_pairs(cart) == [(7, 25)]

    def test_cap_applies_after_addition(self):
        cart = carts.add_item(make_cart((1, 24)), 1, 5)
        assert as_pairs(cart) == [(1, 25)]

    def test_input_cart_is_not_mutated(self):
        original = make_cart((1, 1))
        carts.add_item(original, 1, 1)
        assert as_pairs(original) == [(1, 1)]


class TestChangeQuantity:
    def test_decrement_floors_at_one(self):
        cart = carts.change_quantity(make_cart((1, 5)), 1, -100)
        assert as_pairs(cart) == [(1, 1)]

    def test_decrement_never_removes(self):
        cart = make_cart((1, 1))
        for _ in range(3):
            cart = carts.change_quantity(cart, 1, -1)
        assert as_pairs(cart) == [(1, 1)]

    def test_increment_caps_at_25(self):
        cart = carts.change_quantity(make_cart((1, 20)), 1, 100)
        assert as_pairs(cart) == [(1, 25)]

    def test_other_lines_untouched(self):
        cart = carts.change_quantity(make_cart((1, 2), (2, 2)), 2, 1)
        assert as_pairs(cart) == [(1, 2), (2, 3)]

    def test_absent_product_is_noop(self):
        cart = carts.change_quantity(make_cart((1, 2)), 9, 1)
        assert as_pairs(cart) == [(1, 2)]


class TestRemoveItem:
    def test_removes_line(self):
        cart = carts.remove_item(make_cart((1, 2), (2, 2)), 1)
        assert as_pairs(cart) == [(2, 2)]

    def test_absent_product_is_noop(self):
        cart = carts.remove_item(make_cart((1, 2)), 9)
        assert as_pairs(cart) == [(1, 2)]


class TestParseCart:
    def test_legacy_lines(self):
        raw = [
            {"id": 1, "qty": 2},
            {"id": "3", "qty": "4"},
            {"id": "abc", "qty": 1},
            {"qty": 5},
            {"id": -2, "qty": 1},
            {"id": 2.5},
            {"productId": 6, "quantity": 1},
            "junk",
        ]
        assert as_pairs(carts.parse_cart(raw, legacy=True)) == [(1, 2), (3, 4), (6, 1)]

    def test_quantity_defaults_and_bounds(self):
        raw = [
            {"productId": 1},
            {"productId": 2, "quantity": 0},
            {"productId": 3, "quantity": 99},
        ]
        assert as_pairs(carts.parse_cart(raw)) == [(1, 1), (2, 1), (3, 25)]

    def test_repeated_ids_merged(self):
        raw = [
            {"productId": 1, "quantity": 2},
            {"productId": 2, "quantity": 1},
            {"productId": 1, "quantity": 3},
            {"productId": 2, "quantity": 24},
        ]
        assert as_pairs(carts.parse_cart(raw)) == [(1, 5), (2, 25)]

    def test_huge_integer_values(self):
        raw = [{"productId": 10**400, "quantity": 1}, {"productId": 1, "quantity": 10**400}]
        assert as_pairs(carts.parse_cart(raw)) == [(1, 1)]


class TestDerivedViews:
    def test_cart_count(self):
        assert carts.cart_count(make_cart((1, 2), (2, 3))) == 5
        assert carts.cart_count(()) == 0

    def test_entries_skip_unknown_products(self, products):
        entries = carts.cart_with_product_details(make_cart((1, 2), (99, 1), (2, 1)), products)

        assert [e.product_id for e in entries] == [1, 2]
        assert entries[0].line_total == 20.0
        assert entries[0].product.name == "Plateau Tokyo"

    def test_total(self, products):
        entries = carts.cart_with_product_details(make_cart((1, 1), (4, 3)), products)
        assert carts.cart_total(entries) == pytest.approx(18.7)

    def test_order_payload_has_no_prices(self, products):
        entries = carts.cart_with_product_details(make_cart((2, 3)), products)

        assert carts.order_payload(entries) == {"items": [{"productId": 2, "quantity": 3}]}
