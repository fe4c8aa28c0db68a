"""
sorting.py — Sorting Recorders
===============================
Generator-based bubble / selection / insertion / merge / quick sort.
Each generator works on its own copy of the input and yields a Frame at
every meaningful event:

    compare{i, j}         two bars are being compared
    swap{i, j}            snapshot is AFTER the swap
    insert{i}             merge placement / insertion-sort shift or drop
    pivot{i}              quicksort pivot chosen
    divide{lo, mid, hi}   mergesort split
    position{i}           selection / insertion current slot
    sorted{…}             indices that just became final
    complete{}            terminal

Every frame carries auxiliary["sorted"]: the cumulative list of final
indices so far.  Each index is announced in exactly one sorted{} frame.
"""

from typing import Generator, List, Sequence

from algorithms.tape import Number, SortTape
from engine.frame import Frame, SortKind

SortGen = Generator[Frame, None, None]


# ---------------------------------------------------------------------------
# Bubble sort
# ---------------------------------------------------------------------------
def bubble_sort(values: Sequence[Number]) -> SortGen:
    tape = SortTape(values)
    arr  = tape.array
    n    = len(arr)

    for i in range(n - 1):
        for j in range(n - i - 1):
            yield tape.frame(SortKind.COMPARE, j, j + 1)
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                yield tape.frame(SortKind.SWAP, j, j + 1)
        # largest remaining value has bubbled to the end of the pass
        yield tape.settle(n - i - 1)

    if n:
        yield tape.settle(0)
    yield tape.frame(SortKind.COMPLETE)


# ---------------------------------------------------------------------------
# Selection sort
# ---------------------------------------------------------------------------
def selection_sort(values: Sequence[Number]) -> SortGen:
    tape = SortTape(values)
    arr  = tape.array
    n    = len(arr)

    for i in range(n - 1):
        min_idx = i
        yield tape.frame(SortKind.POSITION, i)

        for j in range(i + 1, n):
            yield tape.frame(SortKind.COMPARE, min_idx, j)
            if arr[j] < arr[min_idx]:
                min_idx = j

        if min_idx != i:
            arr[i], arr[min_idx] = arr[min_idx], arr[i]
            yield tape.frame(SortKind.SWAP, i, min_idx)

        yield tape.settle(i)

    if n:
        yield tape.settle(n - 1)
    yield tape.frame(SortKind.COMPLETE)


# ---------------------------------------------------------------------------
# Insertion sort
# ---------------------------------------------------------------------------
def insertion_sort(values: Sequence[Number]) -> SortGen:
    """
    A prefix of insertion sort is ordered but not final (a later, smaller key
    can still land in front of it), so the sorted{} frame comes once, at the end.
    """
    tape = SortTape(values)
    arr  = tape.array
    n    = len(arr)

    for i in range(1, n):
        key = arr[i]
        j   = i - 1
        yield tape.frame(SortKind.POSITION, i)

        while j >= 0 and arr[j] > key:
            yield tape.frame(SortKind.COMPARE, j, j + 1)
            arr[j + 1] = arr[j]
            yield tape.frame(SortKind.INSERT, j + 1)
            j -= 1

        arr[j + 1] = key
        yield tape.frame(SortKind.INSERT, j + 1)

    if n:
        yield tape.settle(*range(n))
    yield tape.frame(SortKind.COMPLETE)


# ---------------------------------------------------------------------------
# Merge sort
# ---------------------------------------------------------------------------
def merge_sort(values: Sequence[Number]) -> SortGen:
    """Top-down merge sort; merged runs are only final once the whole array is merged."""
    tape = SortTape(values)
    n    = len(tape.array)

    if n:
        yield from _merge_sort(tape, 0, n - 1)
        yield tape.settle(*range(n))
    yield tape.frame(SortKind.COMPLETE)


def _merge_sort(tape: SortTape, left: int, right: int) -> SortGen:
    if left >= right:
        return
    mid = left + (right - left) // 2
    yield tape.frame(SortKind.DIVIDE, left, mid, right)
    yield from _merge_sort(tape, left, mid)
    yield from _merge_sort(tape, mid + 1, right)
    yield from _merge(tape, left, mid, right)


def _merge(tape: SortTape, left: int, mid: int, right: int) -> SortGen:
    arr = tape.array
    lo: List[Number] = arr[left:mid + 1]
    hi: List[Number] = arr[mid + 1:right + 1]
    i = j = 0
    k = left

    while i < len(lo) and j < len(hi):
        yield tape.frame(SortKind.COMPARE, left + i, mid + 1 + j)
        if lo[i] <= hi[j]:
            arr[k] = lo[i]
            i += 1
        else:
            arr[k] = hi[j]
            j += 1
        yield tape.frame(SortKind.INSERT, k)
        k += 1

    for rest, pos in ((lo, i), (hi, j)):
        while pos < len(rest):
            arr[k] = rest[pos]
            yield tape.frame(SortKind.INSERT, k)
            pos += 1
            k += 1


# ---------------------------------------------------------------------------
# Quick sort (Lomuto partition, rightmost pivot)
# ---------------------------------------------------------------------------
def quick_sort(values: Sequence[Number]) -> SortGen:
    tape = SortTape(values)
    yield from _quick_sort(tape, 0, len(tape.array) - 1)
    yield tape.frame(SortKind.COMPLETE)


def _quick_sort(tape: SortTape, low: int, high: int) -> SortGen:
    if low < high:
        pivot_idx = yield from _partition(tape, low, high)
        yield from _quick_sort(tape, low, pivot_idx - 1)
        yield from _quick_sort(tape, pivot_idx + 1, high)
    elif low == high:
        # size-1 partition
        yield tape.settle(low)


def _partition(tape: SortTape, low: int, high: int):
    arr   = tape.array
    pivot = arr[high]
    yield tape.frame(SortKind.PIVOT, high)

    i = low - 1
    for j in range(low, high):
        yield tape.frame(SortKind.COMPARE, j, high)
        if arr[j] < pivot:
            i += 1
            if i != j:
                arr[i], arr[j] = arr[j], arr[i]
                yield tape.frame(SortKind.SWAP, i, j)

    if i + 1 != high:
        arr[i + 1], arr[high] = arr[high], arr[i + 1]
        yield tape.frame(SortKind.SWAP, i + 1, high)

    yield tape.settle(i + 1)
    return i + 1
