# huffdict/stablesort.py
"""
Deterministic comparator-driven sort used to rank occurrence records.

The ordering must not depend on the host's sort implementation, so this module
carries its own hybrid sort:

  - partitions of up to 16 items: insertion sort
      * 0/1 items: nothing to do
      * 2..5 items: fixed comparison networks
      * 6..16 items: step-1 insertion for the first six slots, then a step-2
        backward probe with one corrective step-1 comparison
  - longer partitions: quicksort with a median-of-3 pivot (median-of-5 once
    the partition reaches 1024 items), recursing into the smaller side and
    looping on the larger one

Ties reported by the caller's comparator are broken by input position before
the algorithm sees them, so equal items always keep their input order.

Typical usage:
    rows = [...]
    usort(rows, lambda a, b: (a > b) - (a < b))
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterable, List, Tuple

from huffdict import profkit
from huffdict.settings import INSERTION_SEED, INSERTION_SORT_LIMIT, MEDIAN_OF_FIVE_SHIFT

logger = logging.getLogger(__name__)

Compare = Callable[[Any, Any], int]
_Slot = Tuple[int, Any]  # (input position, item)


class ComparatorError(ValueError):
    """Raised when a comparator returns anything other than -1, 0 or 1."""


def check_compare_result(result) -> None:
    if isinstance(result, bool) or not isinstance(result, int) or result not in (-1, 0, 1):
        raise ComparatorError(f"The compare function should return 0, 1 or -1, got {result!r}")


def usort(items: List[Any], compare: Compare) -> None:
    """
    Sort `items` in place with `compare`.

    The list is copied and reindexed before sorting; the result is written back
    only once the whole sort succeeded, so a comparator error leaves `items`
    exactly as it was.
    """
    items[:] = stable_sorted(items, compare)


def stable_sorted(items: Iterable[Any], compare: Compare) -> List[Any]:
    """
    Return a new list with the items of `items` sorted by `compare`.
    Mappings are reindexed from their values; their keys are dropped.
    """
    values = items.values() if isinstance(items, Mapping) else items
    slots = reindex(values)
    _quick_sort(slots, _ranked(compare), 0, len(slots))
    return [item for _, item in slots]


def reindex(items: Iterable[Any]) -> List[_Slot]:
    """Renumber items to dense positions 0..n-1."""
    return [(pos, item) for pos, item in enumerate(items)]


def _ranked(compare: Compare) -> Compare:
    def cmp(left: _Slot, right: _Slot) -> int:
        profkit.tick("sort.compare")
        result = compare(left[1], right[1])
        check_compare_result(result)
        if result == 0:
            return (left[0] > right[0]) - (left[0] < right[0])
        return result
    return cmp


def _swap(a: List[_Slot], i: int, j: int) -> None:
    a[i], a[j] = a[j], a[i]


# -------------------------------
# quicksort
# -------------------------------

def _quick_sort(a: List[_Slot], cmp: Compare, base: int, length: int) -> None:
    while True:
        if length <= INSERTION_SORT_LIMIT:
            _insert_sort(a, cmp, base, length)
            return

        start = base
        end = start + length
        offset = length >> 1
        pivot = start + offset

        if length >> MEDIAN_OF_FIVE_SHIFT:
            delta = offset >> 1
            _sort5(a, cmp, start, start + delta, pivot, pivot + delta, end - 1)
        else:
            _sort3(a, cmp, start, pivot, end - 1)

        _swap(a, start + 1, pivot)
        pivot = start + 1
        i = _partition(a, cmp, pivot, end)
        _swap(a, pivot, i - 1)

        # recurse into the smaller side, keep looping on the larger one
        if (i - 1 - start) < (end - i):
            _quick_sort(a, cmp, start, i - start - 1)
            base = i
            length = end - i
        else:
            _quick_sort(a, cmp, i, end - i)
            length = i - start - 1


def _partition(a: List[_Slot], cmp: Compare, pivot: int, end: int) -> int:
    """
    Two-pointer scan over a[pivot+1:end] around a[pivot].
    Returns the first index of the upper side; a[i-1] is the pivot's final slot.
    """
    i = pivot + 1
    j = end - 1

    while True:
        while cmp(a[pivot], a[i]) > 0:
            i += 1
            if i == j:
                return i

        j -= 1
        if j == i:
            return i

        while cmp(a[j], a[pivot]) > 0:
            j -= 1
            if j == i:
                return i

        _swap(a, i, j)

        i += 1
        if i == j:
            return i


# -------------------------------
# insertion sort and fixed networks
# -------------------------------

def _insert_sort(a: List[_Slot], cmp: Compare, base: int, length: int) -> None:
    if length <= 1:
        return
    if length == 2:
        _sort2(a, cmp, base, base + 1)
        return
    if length == 3:
        _sort3(a, cmp, base, base + 1, base + 2)
        return
    if length == 4:
        _sort4(a, cmp, base, base + 1, base + 2, base + 3)
        return
    if length == 5:
        _sort5(a, cmp, base, base + 1, base + 2, base + 3, base + 4)
        return

    start = base
    end = start + length
    sentry = start + INSERTION_SEED

    for i in range(start + 1, sentry):
        j = i - 1
        if not cmp(a[j], a[i]) > 0:
            continue

        while j != start:
            j -= 1
            if not cmp(a[j], a[i]) > 0:
                j += 1
                break

        _shift(a, i, j)

    for i in range(sentry, end):
        j = i - 1
        if not cmp(a[j], a[i]) > 0:
            continue

        while True:
            j -= 2
            if not cmp(a[j], a[i]) > 0:
                j += 1
                if not cmp(a[j], a[i]) > 0:
                    j += 1
                break

            if j == start:
                break

            if j == start + 1:
                j -= 1
                if cmp(a[i], a[j]) > 0:
                    j += 1
                break

        _shift(a, i, j)


def _shift(a: List[_Slot], i: int, j: int) -> None:
    # move a[i] down to slot j with adjacent swaps
    for k in range(i, j, -1):
        _swap(a, k, k - 1)


def _sort2(a, cmp, i, j):
    if cmp(a[i], a[j]) > 0:
        _swap(a, i, j)


def _sort3(a, cmp, i, j, k):
    if not cmp(a[i], a[j]) > 0:
        if not cmp(a[j], a[k]) > 0:
            return
        _swap(a, j, k)
        if cmp(a[i], a[j]) > 0:
            _swap(a, i, j)
        return

    if not cmp(a[k], a[j]) > 0:
        _swap(a, i, k)
        return

    _swap(a, i, j)
    if cmp(a[j], a[k]) > 0:
        _swap(a, j, k)


def _sort4(a, cmp, i, j, k, l):
    _sort3(a, cmp, i, j, k)
    if cmp(a[k], a[l]) > 0:
        _swap(a, k, l)
        if cmp(a[j], a[k]) > 0:
            _swap(a, j, k)
            if cmp(a[i], a[j]) > 0:
                _swap(a, i, j)


def _sort5(a, cmp, i, j, k, l, m):
    _sort4(a, cmp, i, j, k, l)
    if cmp(a[l], a[m]) > 0:
        _swap(a, l, m)
        if cmp(a[k], a[l]) > 0:
            _swap(a, k, l)
            if cmp(a[j], a[k]) > 0:
                _swap(a, j, k)
                if cmp(a[i], a[j]) > 0:
                    _swap(a, i, j)
