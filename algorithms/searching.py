"""
searching.py — Searching Recorders
===================================
Generator-based linear / binary / jump / interpolation search.

Yields:
    compare{i}          element i is being checked against the target
    range{lo, mid, hi}  binary search window, emitted before compare{mid}
    found{i}            terminal
    not-found{}         terminal

Binary, jump and interpolation search assume ascending input.  They do not
trust it blindly: a target below array[0] or above array[-1] ends in
not-found after one or two bounding compares, and interpolation search
never divides by array[right] - array[left] when that is zero.
"""

import math
from typing import Generator, Sequence

from algorithms.tape import Number, SearchTape
from engine.frame import Frame, SearchKind

SearchGen = Generator[Frame, None, None]


# ---------------------------------------------------------------------------
# Linear search
# ---------------------------------------------------------------------------
def linear_search(values: Sequence[Number], target: Number) -> SearchGen:
    tape = SearchTape(values)
    for i, value in enumerate(tape.array):
        yield tape.compare(i)
        if value == target:
            yield tape.found(i)
            return
    yield tape.not_found()


# ---------------------------------------------------------------------------
# Binary search
# ---------------------------------------------------------------------------
def binary_search(values: Sequence[Number], target: Number) -> SearchGen:
    tape = SearchTape(values)
    arr  = tape.array
    if not arr:
        yield tape.not_found()
        return

    if target < arr[0] or target > arr[-1]:
        yield tape.compare(0)
        yield tape.compare(len(arr) - 1)
        yield tape.not_found()
        return

    left, right = 0, len(arr) - 1
    while left <= right:
        mid = (left + right) // 2
        tape.window = [left, mid, right]
        yield tape.frame(SearchKind.RANGE, left, mid, right)
        yield tape.compare(mid)

        if arr[mid] == target:
            yield tape.found(mid)
            return
        if arr[mid] < target:
            left = mid + 1
        else:
            right = mid - 1

    tape.window = None
    yield tape.not_found()


# ---------------------------------------------------------------------------
# Jump search
# ---------------------------------------------------------------------------
def jump_search(values: Sequence[Number], target: Number) -> SearchGen:
    tape = SearchTape(values)
    arr  = tape.array
    n    = len(arr)
    if not n:
        yield tape.not_found()
        return

    if target > arr[-1]:
        yield tape.compare(n - 1)
        yield tape.not_found()
        return
    if target < arr[0]:
        yield tape.compare(0)
        yield tape.not_found()
        return

    block = max(1, int(math.sqrt(n)))
    prev, step = 0, block

    # find the block that may hold the target
    while arr[min(step, n) - 1] < target:
        yield tape.compare(min(step, n) - 1)
        prev = step
        step += block
        if prev >= n:
            yield tape.not_found()
            return

    # linear scan inside it
    for i in range(prev, min(step, n)):
        yield tape.compare(i)
        if arr[i] == target:
            yield tape.found(i)
            return
        if arr[i] > target:
            break

    yield tape.not_found()


# ---------------------------------------------------------------------------
# Interpolation search
# ---------------------------------------------------------------------------
def interpolation_search(values: Sequence[Number], target: Number) -> SearchGen:
    tape = SearchTape(values)
    arr  = tape.array
    if not arr:
        yield tape.not_found()
        return

    if target < arr[0] or target > arr[-1]:
        yield tape.compare(0)
        yield tape.compare(len(arr) - 1)
        yield tape.not_found()
        return

    left, right = 0, len(arr) - 1
    while left <= right and arr[left] <= target <= arr[right]:
        # one candidate left, or a flat run where the position estimate is undefined
        if left == right or arr[right] == arr[left]:
            yield tape.compare(left)
            if arr[left] == target:
                yield tape.found(left)
            else:
                yield tape.not_found()
            return

        pos = left + math.floor(
            (right - left) / (arr[right] - arr[left]) * (target - arr[left])
        )
        pos = max(left, min(right, pos))
        yield tape.compare(pos)

        if arr[pos] == target:
            yield tape.found(pos)
            return
        if arr[pos] < target:
            left = pos + 1
        else:
            right = pos - 1

    yield tape.not_found()
