"""
Tests for the session Cart aggregator
"""

import threading
from decimal import Decimal

import pytest

from storefront.domain.cart import Cart, CartItem, ProductRef, to_money


class TestAddItem:
    """Tests for Cart.add_item."""

    def test_add_new_item(self, cart, product_a):
        """New id is appended with the given quantity."""
        cart.add_item(product_a, 2)

        assert cart.item_count() == 1
        assert cart.get("A").quantity == 2
        assert cart.get("A").price == Decimal("9.99")

    def test_default_quantity_is_one(self, cart, product_a):
        """Quantity defaults to 1."""
        cart.add_item(product_a)

        assert cart.get("A").quantity == 1

    def test_same_id_is_merged(self, cart, product_a):
        """Repeated adds sum quantities into a single entry."""
        for qty in (1, 2, 4):
            cart.add_item(product_a, qty)

        assert cart.item_count() == 1
        assert cart.get("A").quantity == 7

    def test_merge_keeps_first_price_and_title(self, cart, product_a):
        """Price and title are fixed by the first add."""
        cart.add_item(product_a, 1)
        cart.add_item(ProductRef(id="A", title="Renamed", price=Decimal("1.00")), 1)

        item = cart.get("A")
        assert item.title == "Product A"
        assert item.price == Decimal("9.99")
        assert item.quantity == 2

    def test_float_price_is_converted_to_decimal(self, cart):
        """Float prices from the catalog become exact decimals."""
        cart.add_item(ProductRef(id=1, title="Ring", price=9.99), 1)

        assert cart.get(1).price == Decimal("9.99")

    def test_int_and_str_ids_are_distinct(self, cart):
        """Ids are opaque keys: 1 and "1" are different entries."""
        cart.add_item(ProductRef(id=1, title="Catalog", price=Decimal("1.00")))
        cart.add_item(ProductRef(id="1", title="Store", price=Decimal("2.00")))

        assert cart.item_count() == 2


class TestRemoveItem:
    """Tests for Cart.remove_item."""

    def test_remove_present_item(self, cart, product_a, product_b):
        """Removed id is no longer contained."""
        cart.add_item(product_a)
        cart.add_item(product_b)

        cart.remove_item("A")

        assert not cart.contains("A")
        assert "B" in cart
        assert cart.item_count() == 1

    def test_remove_absent_item_is_noop(self, cart, product_a):
        """Removing an unknown id leaves the cart unchanged."""
        cart.add_item(product_a, 3)

        cart.remove_item("missing")

        assert cart.items() == [CartItem(id="A", title="Product A", price=Decimal("9.99"), quantity=3)]

    def test_remove_twice_is_idempotent(self, cart, product_a, product_b):
        """Second remove has no further effect."""
        cart.add_item(product_a)
        cart.add_item(product_b)

        cart.remove_item("A")
        after_first = cart.items()
        cart.remove_item("A")

        assert cart.items() == after_first


class TestQuantityChanges:
    """Tests for increment / decrement / set_quantity."""

    def test_increment(self, cart, product_a):
        cart.add_item(product_a)
        cart.increment_quantity("A")

        assert cart.get("A").quantity == 2

    def test_increment_absent_is_noop(self, cart):
        cart.increment_quantity("A")

        assert cart.item_count() == 0

    def test_decrement_above_one(self, cart, product_a):
        cart.add_item(product_a, 3)
        cart.decrement_quantity("A")

        assert cart.get("A").quantity == 2

    def test_decrement_absent_is_noop(self, cart, product_a):
        cart.add_item(product_a)
        cart.decrement_quantity("B")

        assert cart.get("A").quantity == 1

    def test_decrement_at_one_removes_when_remove_on_zero(self, product_a):
        """remove_on_zero=True: last unit removes the entry."""
        cart = Cart(remove_on_zero=True)
        cart.add_item(product_a, 1)

        cart.decrement_quantity("A")

        assert cart.item_count() == 0
        assert not cart.contains("A")

    def test_decrement_at_one_clamps_without_remove_on_zero(self, product_a):
        """remove_on_zero=False: quantity stays at 1."""
        cart = Cart(remove_on_zero=False)
        cart.add_item(product_a, 1)

        cart.decrement_quantity("A")
        cart.decrement_quantity("A")

        assert cart.get("A").quantity == 1

    def test_set_quantity_overwrites(self, cart, product_a):
        """set_quantity sets, never sums."""
        cart.add_item(product_a, 5)
        cart.set_quantity("A", 2)

        assert cart.get("A").quantity == 2

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_set_quantity_non_positive_removes(self, cart, product_a, product_b, quantity):
        """set_quantity(id, <=0) behaves like remove_item."""
        cart.add_item(product_a)
        cart.add_item(product_b)

        cart.set_quantity("A", quantity)

        assert not cart.contains("A")
        assert cart.item_count() == 1

    def test_set_quantity_absent_is_noop(self, cart):
        cart.set_quantity("A", 3)

        assert cart.item_count() == 0


class TestDerivedQueries:
    """Tests for totals and counts."""

    def test_empty_cart(self, cart):
        assert cart.total_item_count() == 0
        assert cart.item_count() == 0
        assert cart.total_price() == Decimal("0.00")
        assert len(cart) == 0

    def test_example_scenario(self, cart):
        """A x1, A x2, B x1 -> 2 entries, 4 units, 34.97."""
        a = ProductRef(id="A", title="A", price=9.99)
        b = ProductRef(id="B", title="B", price=5.00)

        cart.add_item(a, 1)
        cart.add_item(a, 2)
        cart.add_item(b, 1)

        assert cart.item_count() == 2
        assert cart.get("A").quantity == 3
        assert cart.get("B").quantity == 1
        assert cart.total_item_count() == 4
        assert cart.total_price() == Decimal("34.97")

    def test_total_has_no_float_drift(self, cart):
        """Many cent-level lines sum exactly."""
        for i in range(100):
            cart.add_item(ProductRef(id=i, title=f"P{i}", price=0.1), 1)

        assert cart.total_price() == Decimal("10.00")

    def test_item_subtotal(self, cart, product_a):
        cart.add_item(product_a, 3)

        assert cart.get("A").subtotal == Decimal("29.97")

    def test_counts_follow_mutations(self, cart, product_a, product_b):
        cart.add_item(product_a, 2)
        cart.add_item(product_b, 3)
        cart.increment_quantity("B")
        cart.decrement_quantity("A")

        items = cart.items()
        assert cart.total_item_count() == sum(i.quantity for i in items) == 5
        assert cart.item_count() == len({i.id for i in items}) == 2

    def test_clear(self, cart, product_a, product_b):
        """clear() empties everything."""
        cart.add_item(product_a, 2)
        cart.add_item(product_b)

        cart.clear()

        assert cart.total_item_count() == 0
        assert cart.total_price() == Decimal("0.00")
        assert cart.item_count() == 0

    def test_deduct_removes_ordered_quantities(self, cart, product_a, product_b):
        """deduct() takes away exactly the ordered units, nothing else."""
        cart.add_item(product_a, 2)
        ordered, _ = cart.snapshot()
        cart.add_item(product_a, 1)
        cart.add_item(product_b)

        cart.deduct(ordered)

        assert [(i.id, i.quantity) for i in cart.items()] == [("A", 1), ("B", 1)]

    def test_deduct_without_changes_empties_cart(self, cart, product_a, product_b):
        cart.add_item(product_a, 2)
        cart.add_item(product_b)
        ordered, _ = cart.snapshot()

        cart.deduct(ordered)

        assert cart.item_count() == 0

    def test_deduct_skips_items_already_removed(self, cart, product_a, product_b):
        cart.add_item(product_a)
        cart.add_item(product_b)
        ordered, _ = cart.snapshot()
        cart.remove_item("A")
        cart.set_quantity("B", 3)

        cart.deduct(ordered)

        assert [(i.id, i.quantity) for i in cart.items()] == [("B", 2)]


class TestOrdering:
    """Tests for insertion order."""

    def test_insertion_order(self, cart, product_a, product_b):
        cart.add_item(product_a)
        cart.add_item(product_b)
        cart.add_item(product_a, 5)
        cart.increment_quantity("A")

        assert [i.id for i in cart.items()] == ["A", "B"]

    def test_readd_after_remove_goes_to_end(self, cart, product_a, product_b):
        cart.add_item(product_a)
        cart.add_item(product_b)

        cart.remove_item("A")
        cart.add_item(product_a)

        assert [i.id for i in cart.items()] == ["B", "A"]


class TestOwnership:
    """Entries are never aliased outside the cart."""

    def test_items_returns_copies(self, cart, product_a):
        cart.add_item(product_a, 1)

        cart.items()[0].quantity = 99
        cart.get("A").quantity = 42

        assert cart.get("A").quantity == 1

    def test_snapshot_is_consistent(self, cart, product_a, product_b):
        cart.add_item(product_a, 3)
        cart.add_item(product_b, 1)

        items, total = cart.snapshot()

        assert [i.id for i in items] == ["A", "B"]
        assert total == Decimal("34.97")


class TestConcurrency:
    """Operations from many threads are serialized."""

    def test_concurrent_adds_are_not_lost(self, cart, product_a):
        def worker():
            for _ in range(200):
                cart.add_item(product_a, 1)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert cart.item_count() == 1
        assert cart.get("A").quantity == 1600


def test_to_money_keeps_decimal():
    value = Decimal("1.23")
    assert to_money(value) is value
    assert to_money(19.99) == Decimal("19.99")
