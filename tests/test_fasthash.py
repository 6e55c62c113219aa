import math

import pytest

from stunkit.fasthash import FastHash, find_prime, get_hash_table_width


def _is_prime(n):
    return n >= 2 and all(n % d for d in range(2, math.isqrt(n) + 1))


@pytest.mark.parametrize("value", [0, 1, 2])
def test_find_prime_small_values_give_two(value):
    assert find_prime(value) == 2


def test_find_prime_three():
    assert find_prime(3) == 3


@pytest.mark.parametrize("value", range(4, 200))
def test_find_prime_is_smallest_prime_not_below(value):
    result = find_prime(value)
    assert result >= value
    assert _is_prime(result)
    assert not any(_is_prime(n) for n in range(value, result))


def test_find_prime_keeps_primes():
    assert find_prime(37) == 37


def test_table_width_matches_find_prime():
    assert get_hash_table_width(100) == find_prime(100)


def test_default_table_width_is_prime_for_capacity():
    table = FastHash(100)
    assert table.table_width == get_hash_table_width(100)
    assert table.capacity == 100


def test_explicit_table_width():
    assert FastHash(100, 37).table_width == 37


@pytest.mark.parametrize("capacity", [0, -5])
def test_invalid_capacity(capacity):
    with pytest.raises(ValueError):
        FastHash(capacity)


def test_insert_and_lookup():
    table = FastHash(10)
    table.insert(5, "five")
    table.insert(-3, "minus three")
    assert table.lookup(5) == "five"
    assert table.lookup(-3) == "minus three"
    assert table.lookup(99) is None
    assert len(table) == 2
    assert 5 in table
    assert 99 not in table


def test_full_table_raises():
    table = FastHash(3, 2)
    for key in range(3):
        table.insert(key, key)
    with pytest.raises(OverflowError):
        table.insert(3, 3)
    assert len(table) == 3


def test_remove_missing_raises():
    table = FastHash(4)
    with pytest.raises(KeyError):
        table.remove(1)


def test_remove_frees_a_slot():
    table = FastHash(2)
    table.insert(1, "a")
    table.insert(2, "b")
    table.remove(1)
    table.insert(3, "c")
    assert len(table) == 2
    assert 1 not in table
    assert table.lookup(3) == "c"
    assert table.lookup(2) == "b"


def test_duplicate_keys_shadow_then_reveal():
    table = FastHash(5)
    table.insert(7, "old")
    table.insert(7, "new")
    assert len(table) == 2
    assert table.lookup(7) == "new"
    table.remove(7)
    assert table.lookup(7) == "old"
    table.remove(7)
    assert 7 not in table


def test_positions_follow_insertion_order():
    table = FastHash(10, 3)
    keys = [9, 1, 4, 7, 2]
    for key in keys:
        table.insert(key, key * 10)
    assert [table.item_at(i)[0] for i in range(len(keys))] == keys
    assert list(table.items()) == [(k, k * 10) for k in keys]


def test_removing_front_and_back_keeps_order():
    table = FastHash(10, 3)
    for key in [9, 1, 4, 7, 2]:
        table.insert(key, str(key))
    table.remove(9)
    table.remove(2)
    assert [key for key, _ in table.items()] == [1, 4, 7]


def test_circular_positions_wrap():
    table = FastHash(3, 5)
    table.insert(1, "a")
    table.insert(2, "b")
    table.remove(1)
    table.insert(3, "c")
    table.insert(4, "d")
    assert [key for key, _ in table.items()] == [2, 3, 4]


def test_removing_middle_still_lists_all_items():
    table = FastHash(10, 3)
    for key in [9, 1, 4, 7, 2]:
        table.insert(key, key + 100)
    table.remove(4)
    items = list(table.items())
    assert len(items) == 4
    assert sorted(items) == [(1, 101), (2, 102), (7, 107), (9, 109)]


def test_value_at_matches_item_at():
    table = FastHash(4)
    table.insert("x", 1)
    table.insert("y", 2)
    for index in range(len(table)):
        assert table.value_at(index) == table.item_at(index)[1]


@pytest.mark.parametrize("index", [-1, 2, 10])
def test_item_at_out_of_range(index):
    table = FastHash(4)
    table.insert(1, 1)
    table.insert(2, 2)
    with pytest.raises(IndexError):
        table.item_at(index)


def test_reset_empties_table():
    table = FastHash(3)
    for key in range(3):
        table.insert(key, key)
    table.reset()
    assert len(table) == 0
    assert 0 not in table
    assert list(table.items()) == []
    for key in range(3):
        table.insert(key, -key)
    assert table.lookup(2) == -2


def test_emptying_table_restores_order():
    table = FastHash(5, 2)
    for key in [1, 2, 3]:
        table.insert(key, key)
    table.remove(2)
    table.remove(1)
    table.remove(3)
    for key in [5, 6]:
        table.insert(key, key)
    assert [key for key, _ in table.items()] == [5, 6]


def test_string_keys():
    table = FastHash(8)
    table.insert("alpha", 1)
    table.insert("beta", 2)
    assert table.lookup("alpha") == 1
    table.remove("alpha")
    assert "alpha" not in table
    assert list(table.items()) == [("beta", 2)]