from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
Slot = Callable[[T], None]

logger = logging.getLogger(__name__)


class Signal(Generic[T]):
    """
    Synchronous publish/subscribe channel carrying one payload type.
    Slots run in connection order on the emitting thread. A slot that raises
    ReferenceError (dead weakref proxy) is dropped; any other error propagates.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name or "signal"
        self._slots: list[Slot] = []
        self._lock = RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)

    def connect(self, slot: Slot) -> None:
        with self._lock:
            if slot not in self._slots:
                self._slots.append(slot)

    def disconnect(self, slot: Slot) -> None:
        with self._lock:
            try:
                self._slots.remove(slot)
            except ValueError:
                pass

    def emit(self, payload: T) -> None:
        with self._lock:
            snapshot = tuple(self._slots)
        dead = [slot for slot in snapshot if not self._deliver(slot, payload)]
        if not dead:
            return
        logger.debug("Dropping %d dead slot(s) from %s", len(dead), self.name)
        for slot in dead:
            self.disconnect(slot)

    @staticmethod
    def _deliver(slot: Slot, payload: T) -> bool:
        try:
            slot(payload)
        except ReferenceError:
            return False
        return True
