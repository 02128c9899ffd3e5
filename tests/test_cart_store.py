"""
Unit tests for the per-seat cart store.
"""

import pytest

from core.exceptions import ValidationError
from models.cart import CartLine
from services.cart_store import CartStore
from services.seat_store import SeatStateStore


# Fixtures

@pytest.fixture
def store():
    return SeatStateStore()


@pytest.fixture
def carts(store):
    return CartStore(store)


PRICES = {"m01": 550, "m02": 600, "m05": 0}


class TestCartMutations:
    """add / decrement / remove / set_quantity / clear."""

    def test_add_creates_line_at_one(self, carts):
        assert carts.add("C-05", "m01") == {"m01": 1}

    def test_add_is_additive(self, carts):
        carts.add("C-05", "m01")
        carts.add("C-05", "m01")
        assert carts.add("C-05", "m01") == {"m01": 3}

    def test_remove_deletes_line(self, carts):
        carts.add("C-05", "m01")
        carts.add("C-05", "m01")
        assert carts.remove("C-05", "m01") == {}

    def test_remove_missing_is_noop(self, carts):
        carts.add("C-05", "m01")
        assert carts.remove("C-05", "m99") == {"m01": 1}

    def test_add_then_remove_restores_cart(self, carts):
        carts.add("C-05", "m02")
        before = carts.snapshot("C-05")
        carts.add("C-05", "m01")
        carts.remove("C-05", "m01")
        assert carts.snapshot("C-05") == before

    def test_set_quantity(self, carts):
        assert carts.set_quantity("C-05", "m01", 4) == {"m01": 4}
        assert carts.set_quantity("C-05", "m01", 4) == {"m01": 4}

    @pytest.mark.parametrize("quantity", [0, -1, -100])
    def test_set_quantity_non_positive_removes(self, carts, quantity):
        carts.add("C-05", "m01")
        assert carts.set_quantity("C-05", "m01", quantity) == {}

    def test_set_quantity_unknown_item_tolerated(self, carts):
        assert carts.set_quantity("C-05", "not-on-menu", 2) == {"not-on-menu": 2}

    def test_decrement(self, carts):
        carts.set_quantity("C-05", "m01", 2)
        assert carts.decrement("C-05", "m01") == {"m01": 1}
        assert carts.decrement("C-05", "m01") == {}
        assert carts.decrement("C-05", "m01") == {}

    def test_clear(self, carts):
        carts.add("C-05", "m01")
        carts.add("C-05", "m02")
        assert carts.clear("C-05") == {}
        assert carts.snapshot("C-05") == {}

    def test_returned_snapshot_is_a_copy(self, carts):
        cart = carts.add("C-05", "m01")
        cart["m01"] = 100
        assert carts.snapshot("C-05") == {"m01": 1}

    def test_quantities_never_below_one(self, carts):
        for op, item in [("add", "m01"), ("add", "m02"), ("decrement", "m01"),
                         ("add", "m01"), ("remove", "m02"), ("decrement", "m01"),
                         ("decrement", "m01"), ("add", "m02")]:
            getattr(carts, op)("C-05", item)
            assert all(q >= 1 for q in carts.snapshot("C-05").values())

    def test_empty_item_id_rejected(self, carts):
        with pytest.raises(ValidationError):
            carts.add("C-05", "")
        with pytest.raises(ValidationError):
            carts.set_quantity("C-05", "   ", 2)

    @pytest.mark.parametrize("item_id", [5, None, ["m01"], "x" * 65])
    def test_malformed_item_id_rejected(self, carts, item_id):
        with pytest.raises(ValidationError):
            carts.add("C-05", item_id)
        assert carts.snapshot("C-05") == {}

    def test_item_id_at_length_limit_accepted(self, carts):
        assert carts.add("C-05", "x" * 64) == {"x" * 64: 1}

    def test_non_canonical_seat_rejected(self, carts):
        with pytest.raises(ValidationError):
            carts.add("c5", "m01")


class TestCartTotals:

    def test_total_items(self, carts):
        carts.set_quantity("C-05", "m01", 2)
        carts.add("C-05", "m02")
        assert carts.total_items("C-05") == 3

    def test_total_price(self, carts):
        carts.set_quantity("C-05", "m01", 2)
        carts.add("C-05", "m02")
        assert carts.total_price("C-05", PRICES.get) == 2 * 550 + 600

    def test_total_price_unknown_and_free_items_count_zero(self, carts):
        carts.add("C-05", "m05")
        carts.add("C-05", "ghost")
        carts.add("C-05", "m02")
        assert carts.total_price("C-05", PRICES.get) == 600

    def test_lines(self, carts):
        carts.set_quantity("C-05", "m01", 2)
        assert carts.lines("C-05") == [CartLine("m01", 2)]

    def test_empty_cart_totals(self, carts):
        assert carts.total_items("A-01") == 0
        assert carts.total_price("A-01", PRICES.get) == 0


class TestSeatIsolation:

    def test_operations_on_one_seat_do_not_touch_another(self, carts):
        carts.set_quantity("B-02", "m02", 5)
        before = carts.snapshot("B-02")

        carts.add("A-01", "m01")
        carts.set_quantity("A-01", "m02", 3)
        carts.remove("A-01", "m01")
        carts.clear("A-01")

        assert carts.snapshot("B-02") == before


class TestCartLine:

    def test_quantity_must_be_positive(self):
        with pytest.raises(ValueError):
            CartLine("m01", 0)
