"""Tests for the structure mutators."""

from __future__ import annotations

import pytest

from engine.errors import EmptyStructure, InvalidInput
from engine.frame import LazyTrace, StepKind
from mutators import (
    MUTATORS,
    ArrayMutator,
    LinkedListMutator,
    QueueMutator,
    StackMutator,
    TreeMutator,
)


def _kinds(lazy: LazyTrace) -> list:
    return [(f.kind, f.subjects) for f in lazy.to_trace()]


def test_registry_names() -> None:
    assert set(MUTATORS) == {"array", "linked_list", "stack", "queue", "tree"}


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------
def test_apply_rejects_unknown_operation() -> None:
    with pytest.raises(InvalidInput, match="Unknown stack operation"):
        StackMutator().apply("shove", {})


def test_apply_rejects_wrong_params() -> None:
    with pytest.raises(InvalidInput, match="push expects: value"):
        StackMutator().apply("push", {"number": 3})


def test_apply_binds_params() -> None:
    stack = StackMutator([1])
    lazy = stack.apply("push", {"value": 2})
    lazy.to_trace()
    assert stack.items == [1, 2]


# ---------------------------------------------------------------------------
# Array
# ---------------------------------------------------------------------------
def test_array_insert_scans_shifts_then_inserts() -> None:
    array = ArrayMutator([10, 20, 30])
    assert _kinds(array.insert_at(1, 15)) == [
        (StepKind.PROBE, (0,)),
        (StepKind.SHIFT, (2,)),
        (StepKind.SHIFT, (1,)),
        (StepKind.INSERT, (1,)),
        (StepKind.COMPLETE, ()),
    ]
    assert array.values == [10, 15, 20, 30]


def test_array_insert_mutates_only_when_frame_is_pulled() -> None:
    array = ArrayMutator([10, 20])
    lazy = array.insert_at(0, 5)

    lazy.fetch(1)
    assert array.values == [10, 20]
    frame = lazy.fetch(2)
    assert frame.kind is StepKind.INSERT
    assert frame.snapshot == (5, 10, 20)
    assert array.values == [5, 10, 20]


def test_array_validates_eagerly() -> None:
    array = ArrayMutator([1, 2])
    with pytest.raises(InvalidInput):
        array.insert_at(5, 1)
    with pytest.raises(InvalidInput):
        array.insert_at(0, "abc")
    with pytest.raises(EmptyStructure):
        ArrayMutator().remove_at(0)
    with pytest.raises(EmptyStructure):
        ArrayMutator().search(1)


def test_array_remove_and_search() -> None:
    array = ArrayMutator([4, 5, 6])
    trace = array.remove_at(1).to_trace()
    assert trace[-1].auxiliary["message"] == "Deleted value 5 from index 1"
    assert array.values == [4, 6]

    hit = array.search(6).to_trace()
    assert hit[-1].kind is StepKind.FOUND
    assert hit[-1].subjects == (1,)
    miss = array.search(9).to_trace()
    assert miss[-1].kind is StepKind.NOT_FOUND


def test_array_create() -> None:
    array = ArrayMutator([1])
    trace = array.create("7, 8, 9").to_trace()
    assert trace[0].subjects == (0, 1, 2)
    assert array.values == [7, 8, 9]


# ---------------------------------------------------------------------------
# Linked list
# ---------------------------------------------------------------------------
def test_linked_list_insert_probes_up_to_position() -> None:
    ll = LinkedListMutator([1, 2, 3])
    kinds = _kinds(ll.insert_at(9, 1))

    assert kinds[:2] == [(StepKind.PROBE, (0,)), (StepKind.PROBE, (1,))]
    assert kinds[2] == (StepKind.INSERT, (1,))
    assert ll.snapshot() == [1, 9, 2, 3]


def test_linked_list_bounds_messages() -> None:
    ll = LinkedListMutator([1, 2])
    with pytest.raises(InvalidInput, match="Valid range: 0 to 2"):
        ll.insert_at(5, 3)
    with pytest.raises(InvalidInput, match="Valid range: 0 to 1"):
        ll.remove_at(2)
    with pytest.raises(EmptyStructure):
        LinkedListMutator().remove_at(0)


def test_linked_list_append_prepend_remove() -> None:
    ll = LinkedListMutator([2])
    ll.append(3).to_trace()
    ll.prepend(1).to_trace()
    assert ll.snapshot() == [1, 2, 3]

    trace = ll.remove_at(2).to_trace()
    assert [f.kind for f in trace][-3:] == [StepKind.SELECT, StepKind.REMOVE, StepKind.COMPLETE]
    assert ll.snapshot() == [1, 2]


# ---------------------------------------------------------------------------
# Stack / queue
# ---------------------------------------------------------------------------
def test_stack_pop_selects_then_pops() -> None:
    stack = StackMutator([1, 2, 3])
    lazy = stack.pop()

    assert lazy.fetch(0).kind is StepKind.SELECT
    assert stack.items == [1, 2, 3]
    assert lazy.fetch(1).kind is StepKind.POP
    assert stack.items == [1, 2]
    assert lazy.fetch(2).auxiliary["value"] == 3


def test_stack_empty_operations_refused() -> None:
    stack = StackMutator()
    for op in ("pop", "peek", "clear"):
        with pytest.raises(EmptyStructure):
            getattr(stack, op)()


def test_stack_clear() -> None:
    stack = StackMutator([1, 2])
    assert _kinds(stack.clear())[0] == (StepKind.SELECT, (0, 1))
    assert stack.items == []


def test_queue_fifo() -> None:
    queue = QueueMutator([1, 2])
    queue.enqueue(3).to_trace()
    trace = queue.dequeue().to_trace()

    assert trace[-1].auxiliary["value"] == 1
    assert queue.snapshot() == [2, 3]
    assert queue.front().to_trace()[-1].auxiliary["value"] == 2
    assert queue.rear().to_trace()[-1].auxiliary["value"] == 3


def test_queue_empty_operations_refused() -> None:
    queue = QueueMutator()
    for op in ("dequeue", "front", "rear", "clear"):
        with pytest.raises(EmptyStructure):
            getattr(queue, op)()


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------
def test_tree_insert_probes_path() -> None:
    tree = TreeMutator([50, 30, 70])
    kinds = _kinds(tree.insert(40))

    assert kinds == [
        (StepKind.PROBE, (50,)),
        (StepKind.PROBE, (30,)),
        (StepKind.INSERT, (40,)),
        (StepKind.COMPLETE, ()),
    ]


def test_tree_first_insert_is_root() -> None:
    tree = TreeMutator()
    trace = tree.insert(8).to_trace()
    assert trace[-1].auxiliary["message"] == "Inserted 8 as the root node"


def test_tree_duplicate_and_missing_values() -> None:
    tree = TreeMutator([5])
    with pytest.raises(InvalidInput):
        tree.insert(5)
    with pytest.raises(InvalidInput):
        tree.remove(6)
    with pytest.raises(EmptyStructure):
        TreeMutator().search(1)


def test_tree_traverse_orders() -> None:
    tree = TreeMutator([50, 30, 70])
    trace = tree.traverse("pre_order").to_trace()

    assert [f.subjects[0] for f in trace if f.kind is StepKind.VISIT] == [50, 30, 70]
    assert trace[-1].auxiliary["visited"] == (50, 30, 70)
    with pytest.raises(InvalidInput):
        tree.traverse("sideways")


def test_tree_search_and_extremes() -> None:
    tree = TreeMutator([50, 30, 70, 20])

    assert tree.search(20).to_trace()[-1].kind is StepKind.FOUND
    assert tree.search(25).to_trace()[-1].kind is StepKind.NOT_FOUND
    assert tree.find_min().to_trace()[-1].subjects == (20,)
    assert tree.find_max().to_trace()[-1].subjects == (70,)


def test_tree_remove() -> None:
    tree = TreeMutator([50, 30, 70])
    tree.remove(30).to_trace()
    assert tree.to_dict()["in_order"] == [50, 70]
