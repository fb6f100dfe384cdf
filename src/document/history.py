"""Snapshot history: past / present / future."""

from .models import Snapshot


class History:
    """
    Linear undo history over full snapshots.

    Every snapshot is complete and immutable, so undo/redo only move
    references. ``future`` is kept as a stack whose top is the next redo.
    """

    def __init__(self, initial: Snapshot | None = None, max_depth: int | None = None):
        self.past: list[Snapshot] = []
        self.present: Snapshot = initial or Snapshot()
        self.future: list[Snapshot] = []
        self.max_depth = max_depth

    def push(self, snapshot: Snapshot) -> None:
        """Install a new present; the abandoned future is discarded."""
        self.past.append(self.present)
        if self.max_depth is not None and len(self.past) > self.max_depth:
            del self.past[: len(self.past) - self.max_depth]
        self.present = snapshot
        self.future.clear()

    def undo(self) -> bool:
        if not self.past:
            return False
        self.future.append(self.present)
        self.present = self.past.pop()
        return True

    def redo(self) -> bool:
        if not self.future:
            return False
        self.past.append(self.present)
        self.present = self.future.pop()
        return True

    def reset(self, snapshot: Snapshot) -> None:
        """Replace the whole history with a single present."""
        self.past.clear()
        self.future.clear()
        self.present = snapshot

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)

    def __len__(self) -> int:
        return len(self.past) + 1 + len(self.future)
