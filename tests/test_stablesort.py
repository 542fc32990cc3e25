# tests/test_stablesort.py
import random
import pytest

from huffdict import profkit
from huffdict.stablesort import ComparatorError, check_compare_result, stable_sorted, usort

RANDOM_SEED = 2026


def by_key(a, b):
    return (a[0] > b[0]) - (a[0] < b[0])


def make_rows(n, distinct, seed=RANDOM_SEED):
    """(key, input position) pairs with plenty of duplicate keys."""
    rnd = random.Random(seed + n)
    return [(rnd.randrange(distinct), pos) for pos in range(n)]


def reference(rows):
    # python's sort is guaranteed stable
    return sorted(rows, key=lambda r: r[0])


@pytest.mark.parametrize("n", [0, 1])
def test_trivial_lengths_are_noops(n):
    rows = make_rows(n, 3)
    before = list(rows)
    usort(rows, by_key)
    assert rows == before


@pytest.mark.parametrize("n", [2, 3, 4, 5])
def test_networks_are_stable(n):
    # every key pattern over {0, 1} for the fixed networks
    for mask in range(2 ** n):
        rows = [((mask >> pos) & 1, pos) for pos in range(n)]
        got = stable_sorted(rows, by_key)
        assert got == reference(rows), f"mask={mask:0{n}b}"


@pytest.mark.parametrize("n", [6, 7, 11, 16])
def test_insertion_sort_is_stable(n):
    for seed in range(50):
        rows = make_rows(n, 3, seed=seed)
        assert stable_sorted(rows, by_key) == reference(rows)


@pytest.mark.parametrize("n", [17, 100, 1023])
def test_median_of_three_quicksort_is_stable(n):
    rows = make_rows(n, 7)
    assert stable_sorted(rows, by_key) == reference(rows)


@pytest.mark.parametrize("n", [1024, 3000])
def test_median_of_five_quicksort_is_stable(n):
    rows = make_rows(n, 10)
    assert stable_sorted(rows, by_key) == reference(rows)


@pytest.mark.parametrize("pattern", ["ascending", "descending", "equal", "sawtooth"])
def test_adversarial_inputs(pattern):
    n = 2048
    if pattern == "ascending":
        rows = [(i, i) for i in range(n)]
    elif pattern == "descending":
        rows = [(n - i, i) for i in range(n)]
    elif pattern == "equal":
        rows = [(0, i) for i in range(n)]
    else:
        rows = [(i % 17, i) for i in range(n)]
    assert stable_sorted(rows, by_key) == reference(rows)


def test_usort_sorts_in_place():
    rows = make_rows(300, 5)
    expected = reference(rows)
    alias = rows
    usort(rows, by_key)
    assert alias is rows
    assert rows == expected


def test_mapping_is_reindexed_from_values():
    data = {10: (3, "c"), 4: (1, "a"), 99: (3, "d"), 7: (2, "b")}
    assert stable_sorted(data, by_key) == [(1, "a"), (2, "b"), (3, "c"), (3, "d")]


def test_descending_comparator():
    rows = make_rows(500, 9)
    got = stable_sorted(rows, lambda a, b: by_key(b, a))
    assert got == sorted(rows, key=lambda r: -r[0])


@pytest.mark.parametrize("bad", [2, -2, 0.0, 1.0, None, True, "1"])
def test_check_compare_result_rejects(bad):
    with pytest.raises(ComparatorError):
        check_compare_result(bad)


@pytest.mark.parametrize("good", [-1, 0, 1])
def test_check_compare_result_accepts(good):
    check_compare_result(good)


@pytest.mark.parametrize("n", [2, 5, 12, 40, 1500])
def test_bad_comparator_fails_immediately(n):
    calls = []

    def broken(a, b):
        calls.append((a, b))
        return 2

    rows = make_rows(n, 4)
    before = list(rows)
    with pytest.raises(ComparatorError):
        usort(rows, broken)
    assert len(calls) == 1
    assert rows == before


def test_bad_comparator_midway_leaves_input_untouched():
    rows = [(k, i) for i, k in enumerate([5, 3, 9, 1, 7, 2, 8, 0, 6, 4] * 5)]
    before = list(rows)
    budget = {"left": 30}

    def flaky(a, b):
        budget["left"] -= 1
        if budget["left"] == 0:
            return 7
        return by_key(a, b)

    with pytest.raises(ComparatorError):
        usort(rows, flaky)
    assert rows == before


def test_comparisons_are_counted_when_profiling(monkeypatch):
    monkeypatch.setattr(profkit, "ENABLED", True)
    profkit.reset()
    stable_sorted(make_rows(64, 4), by_key)
    assert profkit.snapshot()["sort.compare"] > 0
    profkit.reset()
