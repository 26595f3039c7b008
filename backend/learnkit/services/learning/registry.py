"""
Thread-safe registries of live learning instances.

Two lock granularities:

- the registry lock guards the id -> entry mapping and is held only while
  inserting, looking up or popping an entry;
- each entry carries its own instance lock, held for exactly one operation on
  that instance.

The two are never held together, so operations on different identifiers run
in parallel and lookup cannot deadlock against removal. Identifiers come from
a monotonic counter and are never reused within the process.
"""
from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from .bandit import Bandit, BanditConfig, create_bandit
from .errors import NotFound
from .optimizer import Optimizer, OptimizerConfig, create_optimizer

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class _Entry(Generic[T]):
    entity: T
    lock: threading.Lock = field(default_factory=threading.Lock)
    removed: bool = False


class InstanceRegistry(Generic[T]):
    """Concurrent map from opaque identifier to one entity and its lock."""

    prefix = "instance"

    def __init__(self, on_size_change: Optional[Callable[[int], None]] = None) -> None:
        self._entries: Dict[str, _Entry[T]] = {}
        self._lock = threading.Lock()
        self._counter = itertools.count(1)
        # Called with the new size while the registry lock is held
        self._on_size_change = on_size_change

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def add(self, entity: T) -> str:
        """Insert an already-constructed entity and return its new identifier."""
        entry = _Entry(entity)
        with self._lock:
            instance_id = f"{self.prefix}-{next(self._counter)}"
            self._entries[instance_id] = entry
            self._size_changed()
        logger.debug("Registered %s", instance_id)
        return instance_id

    def remove(self, instance_id: str) -> None:
        """Drop ``instance_id``; an operation already running on it finishes first."""
        with self._lock:
            entry = self._entries.pop(instance_id, None)
            if entry is not None:
                self._size_changed()
        if entry is None:
            raise NotFound(f"unknown id {instance_id!r}")

        # Wait for any in-flight operation, then fence off late arrivals
        with entry.lock:
            entry.removed = True
        logger.debug("Removed %s", instance_id)

    def clear(self) -> None:
        """Remove every instance (process teardown)."""
        with self._lock:
            entries = list(self._entries.values())
            self._entries.clear()
            self._size_changed()
        for entry in entries:
            with entry.lock:
                entry.removed = True

    def _size_changed(self) -> None:
        if self._on_size_change is not None:
            self._on_size_change(len(self._entries))

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def with_instance(self, instance_id: str, op: Callable[[T], R]) -> R:
        """Run ``op(entity)`` while holding only that entity's lock."""
        with self._lock:
            entry = self._entries.get(instance_id)
        if entry is None:
            raise NotFound(f"unknown id {instance_id!r}")

        with entry.lock:
            if entry.removed:
                raise NotFound(f"unknown id {instance_id!r}")
            return op(entry.entity)

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, instance_id: object) -> bool:
        with self._lock:
            return instance_id in self._entries


class BanditRegistry(InstanceRegistry[Bandit]):
    prefix = "bandit"

    def create(self, config: BanditConfig) -> str:
        # Construct outside the registry lock; InvalidConfig leaves the map untouched
        return self.add(create_bandit(config))

    def select(self, instance_id: str) -> int:
        return self.with_instance(instance_id, lambda b: b.select())

    def update(self, instance_id: str, arm: int, reward: float) -> None:
        self.with_instance(instance_id, lambda b: b.update(arm, reward))

    def stats(self, instance_id: str) -> list:
        return self.with_instance(instance_id, lambda b: b.stats())

    def summary(self, instance_id: str) -> dict:
        return self.with_instance(instance_id, lambda b: b.summary())


class OptimizerRegistry(InstanceRegistry[Optimizer]):
    prefix = "optimizer"

    def create(self, config: OptimizerConfig) -> str:
        return self.add(create_optimizer(config))

    def suggest(self, instance_id: str) -> float:
        return self.with_instance(instance_id, lambda o: o.suggest())

    def observe(self, instance_id: str, reward: float) -> None:
        self.with_instance(instance_id, lambda o: o.observe(reward))

    def state(self, instance_id: str) -> dict:
        return self.with_instance(instance_id, lambda o: o.state())

    def history(self, instance_id: str, limit: Optional[int] = None) -> list:
        return self.with_instance(instance_id, lambda o: o.recent_history(limit))
