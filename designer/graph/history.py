"""Bounded undo/redo history over graph snapshots."""

import logging

from designer.models.snapshot import HistorySnapshot

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 20


class HistoryManager:
    """Ordered snapshot list plus a pointer to the current one.

    Invariant once seeded: 0 <= pointer < len(entries), and
    entries[pointer] is the graph's observable state.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._entries: list[HistorySnapshot] = []
        self._pointer = -1

    @property
    def pointer(self) -> int:
        return self._pointer

    @property
    def current(self) -> HistorySnapshot | None:
        return self._entries[self._pointer] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def can_undo(self) -> bool:
        return self._pointer > 0

    def can_redo(self) -> bool:
        return self._pointer < len(self._entries) - 1

    def seed(self, snapshot: HistorySnapshot) -> None:
        """Record the initial state as entry 0. Only allowed once."""
        if self._entries:
            raise RuntimeError("history already holds its initial snapshot")
        self._entries.append(snapshot)
        self._pointer = 0

    def push(self, snapshot: HistorySnapshot) -> None:
        """Drop any redo states, append, and evict the oldest past capacity."""
        del self._entries[self._pointer + 1 :]
        self._entries.append(snapshot)
        self._pointer += 1
        if len(self._entries) > self.capacity:
            self._entries.pop(0)
            self._pointer -= 1
        logger.debug("history push: %d/%d entries, pointer=%d", len(self._entries), self.capacity, self._pointer)

    def replace_current(self, snapshot: HistorySnapshot) -> None:
        """Overwrite the current entry without moving the pointer.

        Used for changes that are not undoable steps of their own (layout).
        """
        if not self._entries:
            raise RuntimeError("history has no current snapshot")
        self._entries[self._pointer] = snapshot

    def undo(self) -> HistorySnapshot | None:
        if not self.can_undo():
            return None
        self._pointer -= 1
        logger.debug("history undo: pointer=%d", self._pointer)
        return self._entries[self._pointer]

    def redo(self) -> HistorySnapshot | None:
        if not self.can_redo():
            return None
        self._pointer += 1
        logger.debug("history redo: pointer=%d", self._pointer)
        return self._entries[self._pointer]

    def __repr__(self) -> str:
        return f"HistoryManager(entries={len(self._entries)}, pointer={self._pointer}, capacity={self.capacity})"
