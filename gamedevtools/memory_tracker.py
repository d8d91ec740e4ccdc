"""Periodic sampling of estimated memory use for registered objects."""

from __future__ import annotations

import logging
import struct
import sys
import weakref
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger("gamedevtools.memory_tracker")

DEFAULT_SAMPLE_INTERVAL = 5.0
MIN_SAMPLE_INTERVAL = 0.01
POINTER_SIZE = struct.calcsize("P")

_VALUE_TYPES = (str, bytes, bytearray, int, float, complex, bool, type(None))
_SEQUENCE_TYPES = (list, tuple, set, frozenset)


@dataclass
class MemoryUsageInfo:
    """Estimated memory use of one tracked object at the last sample."""

    object_name: str
    tracked_object: Any = None
    memory_bytes: int = 0
    num_referenced_objects: int = 0


def _is_object_reference(value: Any) -> bool:
    """True for instances that carry their own fields, as opposed to plain values."""
    if isinstance(value, _VALUE_TYPES + _SEQUENCE_TYPES + (dict,)):
        return False
    return hasattr(value, "__dict__") or bool(_slot_names(type(value)))


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(name for name in slots if name not in ("__dict__", "__weakref__"))
    return names


def _field_values(obj: Any) -> Iterator[Any]:
    """Values of an object's instance attributes, from ``__dict__`` and slots."""
    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        yield from list(instance_dict.values())
    for name in _slot_names(type(obj)):
        try:
            yield getattr(obj, name)
        except AttributeError:
            continue


def estimate_memory_usage(obj: Any) -> int:
    """Rough size in bytes: the object itself plus its non-reference fields.

    Strings count their allocated size, containers count one pointer per
    element (two per mapping entry) and referenced objects are not counted,
    so that nested objects are not counted twice.
    """
    if obj is None:
        return 0
    total = sys.getsizeof(obj)
    for value in _field_values(obj):
        if isinstance(value, (str, bytes, bytearray)):
            total += sys.getsizeof(value)
        elif isinstance(value, dict):
            total += len(value) * 2 * POINTER_SIZE
        elif isinstance(value, _SEQUENCE_TYPES):
            total += len(value) * POINTER_SIZE
        elif _is_object_reference(value):
            continue
        else:
            total += sys.getsizeof(value)
    return total


def count_referenced_objects(obj: Any, visited: set[int] | None = None) -> int:
    """Count ``obj`` and every object reachable through its fields, each once."""
    if visited is None:
        visited = set()
    if obj is None or id(obj) in visited:
        return 0
    visited.add(id(obj))
    count = 1
    for value in _field_values(obj):
        if _is_object_reference(value):
            count += count_referenced_objects(value, visited)
        elif isinstance(value, (list, tuple)):
            count += sum(
                count_referenced_objects(element, visited)
                for element in value
                if _is_object_reference(element)
            )
    return count


def _make_ref(obj: Any) -> Callable[[], Any]:
    try:
        return weakref.ref(obj)
    except TypeError:
        return lambda: obj


def _object_name(obj: Any) -> str:
    name = getattr(obj, "name", None)
    return name if isinstance(name, str) else type(obj).__name__


class MemoryUsageTracker:
    """Samples registered objects every ``sample_interval`` seconds of ticked time.

    Objects are held weakly where they allow it; objects that are gone, or
    whose ``pending_kill`` attribute is true, are dropped at the next sample.
    """

    def __init__(self, sample_interval: float = DEFAULT_SAMPLE_INTERVAL) -> None:
        self.sample_interval = sample_interval
        self.tracking = True
        self._time_accumulator = 0.0
        self._tracked: list[Callable[[], Any]] = []
        self._cached: list[MemoryUsageInfo] = []

    @property
    def tracked_objects(self) -> list[Any]:
        """The registered objects that are still alive."""
        return [obj for obj in (ref() for ref in self._tracked) if obj is not None]

    def start_tracking(self, sampling_interval: float = DEFAULT_SAMPLE_INTERVAL) -> None:
        self.sample_interval = max(sampling_interval, MIN_SAMPLE_INTERVAL)
        self.tracking = True

    def stop_tracking(self) -> None:
        self.tracking = False

    def register(self, obj: Any) -> bool:
        """Track ``obj``; False for None or an object already tracked."""
        if obj is None:
            logger.warning("[MemoryUsageTracker] RegisterObject called with null.")
            return False
        if any(ref() is obj for ref in self._tracked):
            return False
        self._tracked.append(_make_ref(obj))
        return True

    def unregister(self, obj: Any) -> bool:
        """Stop tracking ``obj``; False for None or an object not tracked."""
        if obj is None:
            logger.warning("[MemoryUsageTracker] UnregisterObject called with null.")
            return False
        for position in reversed(range(len(self._tracked))):
            if self._tracked[position]() is obj:
                self._remove_swap(position)
                return True
        return False

    def tick(self, delta_time: float) -> bool:
        """Advance time; return True when a sample was taken."""
        if not self.tracking or self.sample_interval <= 0 or not self._tracked:
            return False
        self._time_accumulator += delta_time
        if self._time_accumulator < self.sample_interval:
            return False
        self._time_accumulator = 0.0
        self._cached.clear()
        for position in reversed(range(len(self._tracked))):
            obj = self._tracked[position]()
            if obj is None or getattr(obj, "pending_kill", False):
                self._remove_swap(position)
                continue
            self._cached.append(
                MemoryUsageInfo(
                    object_name=_object_name(obj),
                    tracked_object=obj,
                    memory_bytes=estimate_memory_usage(obj),
                    num_referenced_objects=count_referenced_objects(obj),
                )
            )
        return True

    def tracked_info(self) -> list[MemoryUsageInfo]:
        """Results of the last sample, most recently registered first."""
        return list(self._cached)

    def dump_to_log(self) -> None:
        logger.info("---- Memory Usage Tracker Dump Start ----")
        for info in self._cached:
            logger.info(
                "Object: %s | Memory: %.2f KB | References: %d",
                info.object_name,
                info.memory_bytes / 1024.0,
                info.num_referenced_objects,
            )
        logger.info("---- Memory Usage Tracker Dump End ----")

    def _remove_swap(self, position: int) -> None:
        last = self._tracked.pop()
        if position < len(self._tracked):
            self._tracked[position] = last