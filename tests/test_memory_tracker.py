import gc
import logging

import pytest

from gamedevtools.memory_tracker import (
    MIN_SAMPLE_INTERVAL,
    POINTER_SIZE,
    MemoryUsageTracker,
    count_referenced_objects,
    estimate_memory_usage,
)


class Node:
    def __init__(self, name="node", child=None, children=None, label=""):
        self.name = name
        self.child = child
        self.children = children if children is not None else []
        self.label = label


class Slotted:
    __slots__ = ("name", "child")

    def __init__(self, name, child=None):
        self.name = name
        self.child = child


def test_register_none_is_rejected():
    tracker = MemoryUsageTracker()
    assert tracker.register(None) is False
    assert tracker.tracked_objects == []


def test_register_twice_keeps_one():
    tracker = MemoryUsageTracker()
    node = Node("a")
    assert tracker.register(node) is True
    assert tracker.register(node) is False
    assert tracker.tracked_objects == [node]


def test_no_sample_before_interval():
    tracker = MemoryUsageTracker(sample_interval=5.0)
    tracker.register(Node("a"))
    node = tracker.tracked_objects[0] if tracker.tracked_objects else None
    assert tracker.tick(3.0) is False
    assert tracker.tracked_info() == []
    del node


def test_sample_after_accumulated_interval():
    tracker = MemoryUsageTracker(sample_interval=5.0)
    node = Node("player")
    tracker.register(node)
    tracker.tick(3.0)
    assert tracker.tick(3.0) is True
    info = tracker.tracked_info()
    assert [i.object_name for i in info] == ["player"]
    assert info[0].tracked_object is node
    assert info[0].memory_bytes == estimate_memory_usage(node)
    assert info[0].num_referenced_objects == 1


def test_zero_interval_never_samples():
    tracker = MemoryUsageTracker(sample_interval=0.0)
    node = Node("a")
    tracker.register(node)
    assert tracker.tick(100.0) is False
    assert tracker.tracked_info() == []


def test_start_tracking_clamps_interval():
    tracker = MemoryUsageTracker()
    tracker.start_tracking(0.0)
    assert tracker.sample_interval == MIN_SAMPLE_INTERVAL
    tracker.start_tracking(2.5)
    assert tracker.sample_interval == 2.5


def test_stop_tracking_disables_sampling():
    tracker = MemoryUsageTracker(sample_interval=1.0)
    node = Node("a")
    tracker.register(node)
    tracker.stop_tracking()
    assert tracker.tick(10.0) is False
    assert tracker.tracked_info() == []
    tracker.start_tracking(1.0)
    assert tracker.tick(1.0) is True
    assert len(tracker.tracked_info()) == 1


def test_dead_objects_are_dropped():
    tracker = MemoryUsageTracker(sample_interval=1.0)
    alive = Node("alive")
    tracker.register(alive)
    tracker.register(Node("gone"))
    gc.collect()
    tracker.tick(1.0)
    assert [i.object_name for i in tracker.tracked_info()] == ["alive"]
    assert tracker.tracked_objects == [alive]


def test_pending_kill_objects_are_dropped():
    tracker = MemoryUsageTracker(sample_interval=1.0)
    doomed = Node("doomed")
    doomed.pending_kill = True
    tracker.register(doomed)
    tracker.tick(1.0)
    assert tracker.tracked_info() == []
    assert tracker.tracked_objects == []


def test_info_order_is_reverse_of_registration():
    tracker = MemoryUsageTracker(sample_interval=1.0)
    nodes = [Node("first"), Node("second"), Node("third")]
    for node in nodes:
        tracker.register(node)
    tracker.tick(1.0)
    assert [i.object_name for i in tracker.tracked_info()] == ["third", "second", "first"]


def test_unregister():
    tracker = MemoryUsageTracker(sample_interval=1.0)
    a, b = Node("a"), Node("b")
    tracker.register(a)
    tracker.register(b)
    assert tracker.unregister(a) is True
    assert tracker.unregister(a) is False
    assert tracker.unregister(None) is False
    assert tracker.tracked_objects == [b]


def test_unweakrefable_objects_are_tracked():
    tracker = MemoryUsageTracker(sample_interval=1.0)
    slotted = Slotted("s")
    assert tracker.register(slotted) is True
    tracker.tick(1.0)
    assert [i.object_name for i in tracker.tracked_info()] == ["s"]


def test_count_chain():
    c = Node("c")
    b = Node("b", child=c)
    a = Node("a", child=b)
    assert count_referenced_objects(a) == 3


def test_count_cycle_counts_each_once():
    a = Node("a")
    b = Node("b", child=a)
    a.child = b
    assert count_referenced_objects(a) == 2


def test_count_list_children_and_shared():
    shared = Node("shared")
    kids = [Node("k1", child=shared), Node("k2", child=shared)]
    root = Node("root", children=kids)
    assert count_referenced_objects(root) == 1 + len(kids) + 1


def test_count_respects_visited_and_none():
    a = Node("a")
    assert count_referenced_objects(None) == 0
    visited = {id(a)}
    assert count_referenced_objects(a, visited) == 0


def test_count_through_slots():
    leaf = Slotted("leaf")
    root = Slotted("root", child=leaf)
    assert count_referenced_objects(root) == 2


def test_estimate_none_is_zero():
    assert estimate_memory_usage(None) == 0


def test_estimate_ignores_object_references():
    small = Node("x", child=Node("tiny"))
    big = Node("x", child=Node("huge", children=[Node() for _ in range(50)], label="z" * 1000))
    assert estimate_memory_usage(small) == estimate_memory_usage(big)


def test_estimate_counts_list_elements_by_pointer_size():
    empty = Node("x", children=[])
    filled = Node("x", children=[1, 2, 3])
    assert estimate_memory_usage(filled) - estimate_memory_usage(empty) == 3 * POINTER_SIZE


def test_estimate_grows_with_string_length():
    short = Node("x", label="a")
    long = Node("x", label="a" * 500)
    assert estimate_memory_usage(long) > estimate_memory_usage(short)


def test_dump_to_log(caplog):
    tracker = MemoryUsageTracker(sample_interval=1.0)
    node = Node("boss")
    tracker.register(node)
    tracker.tick(1.0)
    with caplog.at_level(logging.INFO, logger="gamedevtools.memory_tracker"):
        tracker.dump_to_log()
    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "---- Memory Usage Tracker Dump Start ----"
    assert messages[-1] == "---- Memory Usage Tracker Dump End ----"
    assert any(m.startswith("Object: boss | Memory: ") and m.endswith("References: 1")
               for m in messages)


@pytest.mark.parametrize("delta", [0.5, 0.99])
def test_small_ticks_do_not_sample(delta):
    tracker = MemoryUsageTracker(sample_interval=1.0)
    node = Node("a")
    tracker.register(node)
    assert tracker.tick(delta) is False
    assert tracker.tracked_info() == []