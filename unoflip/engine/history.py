"""Snapshot-based undo/redo history."""

import copy
import logging
from collections import deque
from typing import Deque, Optional

from unoflip.engine.game_state import GameState

logger = logging.getLogger(__name__)


class History:
    """Two stacks of deep game-state snapshots with linear-history discipline.

    Every snapshot handed in is copied, and every snapshot handed out is owned
    by the caller, so no entry ever aliases the live state.
    """

    def __init__(self, limit: Optional[int] = None):
        if limit is not None and limit < 1:
            raise ValueError("History limit must be positive")
        self._undo: Deque[GameState] = deque(maxlen=limit)
        self._redo: Deque[GameState] = deque(maxlen=limit)

    @staticmethod
    def snapshot(state: GameState) -> GameState:
        return copy.deepcopy(state)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def push(self, snapshot: GameState) -> None:
        """Record a pre-command snapshot taken with :meth:`snapshot`.

        A new command invalidates everything that could have been redone.
        """
        self._undo.append(snapshot)
        self._redo.clear()

    def checkpoint(self, state: GameState) -> None:
        self.push(self.snapshot(state))

    def undo(self, current: GameState) -> Optional[GameState]:
        """Pop the latest snapshot, saving ``current`` for redo.

        Returns:
            The state to restore, or None when there is nothing to undo.
        """
        if not self._undo:
            logger.info("Nothing to undo")
            return None
        previous = self._undo.pop()
        self._redo.append(self.snapshot(current))
        return previous

    def redo(self, current: GameState) -> Optional[GameState]:
        """Symmetric to :meth:`undo`."""
        if not self._redo:
            logger.info("Nothing to redo")
            return None
        following = self._redo.pop()
        self._undo.append(self.snapshot(current))
        return following

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def __len__(self) -> int:
        return len(self._undo)
