"""Tests for sorted_insert and to_hex."""

import pytest

from quoter.errors import InvariantViolation
from quoter.math import Fraction
from quoter.utils import sorted_insert, to_hex


def by_value(a, b):
    return a - b


def by_first(a, b):
    return a[0] - b[0]


class TestSortedInsert:
    """Tests for the bounded sorted list."""

    def test_into_empty(self):
        items = []
        assert sorted_insert(items, 1, 2, by_value) is None
        assert items == [1]

    def test_keeps_order(self):
        items = [1, 3]
        assert sorted_insert(items, 2, 3, by_value) is None
        assert items == [1, 2, 3]

    def test_full_rejects_worse(self):
        items = [1, 2, 3]
        assert sorted_insert(items, 4, 3, by_value) == 4
        assert items == [1, 2, 3]

    def test_full_rejects_equal_to_last(self):
        items = [1, 2, 3]
        assert sorted_insert(items, 3, 3, by_value) == 3
        assert items == [1, 2, 3]

    def test_full_evicts_last(self):
        items = [1, 2, 3]
        assert sorted_insert(items, 0, 3, by_value) == 3
        assert items == [0, 1, 2]

    def test_ties_keep_insertion_order(self):
        items = [(1, "a"), (2, "b")]
        sorted_insert(items, (2, "c"), 3, by_first)
        sorted_insert(items, (1, "d"), 4, by_first)
        assert items == [(1, "a"), (1, "d"), (2, "b"), (2, "c")]

    def test_zero_max_size(self):
        with pytest.raises(InvariantViolation, match="MAX_SIZE_ZERO"):
            sorted_insert([], 1, 0, by_value)

    def test_oversized_list(self):
        with pytest.raises(InvariantViolation, match="ITEMS_SIZE"):
            sorted_insert([1, 2, 3], 0, 2, by_value)

    @pytest.mark.parametrize(
        "sequence",
        [
            [5, 1, 4, 1, 3, 9, 2, 6],
            [9, 8, 7, 6, 5, 4, 3],
            [1, 2, 3, 4, 5, 6],
            [3, 3, 1, 3, 2, 3],
        ],
    )
    def test_sequence_keeps_smallest_sorted(self, sequence):
        """After every insertion the list is sorted and bounded; nothing is lost."""
        items, dropped = [], []
        for value in sequence:
            out = sorted_insert(items, value, 4, by_value)
            if out is not None:
                dropped.append(out)
            assert items == sorted(items)
            assert len(items) <= 4
        assert items == sorted(sequence)[:4]
        assert sorted(items + dropped) == sorted(sequence)


class TestToHex:
    """Tests for 0x hex rendering."""

    @pytest.mark.parametrize("value,expected", [(0, "0x0"), (100, "0x64"), (255, "0xff")])
    def test_int(self, value, expected):
        assert to_hex(value) == expected

    def test_fraction_uses_quotient(self):
        assert to_hex(Fraction(201, 2)) == "0x64"
