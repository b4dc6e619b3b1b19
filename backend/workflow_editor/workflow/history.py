"""
History Engine — linear undo/redo over full workflow snapshots.

Every committed mutation is recorded with ``checkpoint()``. History
never branches: a checkpoint after an undo drops the redo chain.
Each snapshot is a deep copy, so stored states cannot be changed by
later edits to the live graph or to each other.
"""

from __future__ import annotations

from collections import deque
from logging import getLogger
from typing import Deque, Optional

from workflow_editor.workflow.workflow_model import HistoryState, Workflow

logger = getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 100


class HistoryEngine:
    """Bounded, non-branching undo/redo stack.

    ``capacity`` bounds the number of undo steps kept in ``past``; the
    oldest entries are evicted first. ``None`` keeps everything.
    """

    def __init__(
        self,
        initial: Optional[Workflow] = None,
        capacity: Optional[int] = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        if capacity is not None and capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self._capacity = capacity
        self._past: Deque[Workflow] = deque(maxlen=capacity)
        self._future: Deque[Workflow] = deque()
        self._present: Workflow = (initial or Workflow()).copy_deep()

    @property
    def capacity(self) -> Optional[int]:
        return self._capacity

    @property
    def present(self) -> Workflow:
        return self._present.copy_deep()

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    def state(self) -> HistoryState:
        """Copy of past, present and future."""
        return HistoryState(
            past=[w.copy_deep() for w in self._past],
            present=self._present.copy_deep(),
            future=[w.copy_deep() for w in self._future],
        )

    def checkpoint(self, workflow: Workflow) -> None:
        """Record ``workflow`` as the new present and drop the redo chain."""
        if self._capacity is not None and len(self._past) == self._capacity:
            logger.debug("History full; evicting oldest snapshot")
        self._past.append(self._present)
        self._present = workflow.copy_deep()
        if self._future:
            logger.debug(f"Discarding {len(self._future)} redo step(s)")
            self._future.clear()

    def undo(self) -> Optional[Workflow]:
        """Step back one state.

        Returns the new present (a copy), or ``None`` when there is
        nothing to undo.
        """
        if not self._past:
            return None
        self._future.appendleft(self._present)
        self._present = self._past.pop()
        return self._present.copy_deep()

    def redo(self) -> Optional[Workflow]:
        """Step forward one state, or return ``None`` at the end."""
        if not self._future:
            return None
        self._past.append(self._present)
        self._present = self._future.popleft()
        return self._present.copy_deep()

    def reset(self, workflow: Optional[Workflow] = None) -> None:
        """Forget all history and start over from ``workflow``."""
        self._past.clear()
        self._future.clear()
        self._present = (workflow or Workflow()).copy_deep()
