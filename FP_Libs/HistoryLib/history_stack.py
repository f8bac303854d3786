"""
Undo/redo history for one editing session.

The stack keeps every applied action with the state it captured, plus a
cursor: entries before the cursor are in effect, entries after it have been
undone and can be redone. Applying a new action discards the undone tail.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from FP_Libs.HistoryLib.actions import Action, EditTarget

logger = logging.getLogger(__name__)


@dataclass
class HistoryEntry:
    action: Action
    captured: Any


class HistoryStack:
    """
    Command log with an undo/redo cursor.

    Invariant: 0 <= cursor <= len(entries), and the effects of
    entries[:cursor] are reflected in the target.
    """

    def __init__(self) -> None:
        self._entries: List[HistoryEntry] = []
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> Tuple[Action, ...]:
        """Recorded actions, oldest first."""
        return tuple(entry.action for entry in self._entries)

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._entries)

    def apply(self, target: EditTarget, action: Action) -> Action:
        """
        Run an action and record it.

        Any undone actions after the cursor are discarded. If the action is
        rejected the history is left unchanged.

        Raises:
            InvalidActionError: If the action does not fit the target's state
        """
        captured = action.forward(target)

        discarded = len(self._entries) - self._cursor
        if discarded:
            del self._entries[self._cursor:]
            logger.debug(f"Discarded {discarded} undone action(s)")

        self._entries.append(HistoryEntry(action=action, captured=captured))
        self._cursor += 1
        logger.debug(f"Applied: {action.describe()} (cursor={self._cursor})")
        return action

    def undo(self, target: EditTarget) -> Optional[Action]:
        """
        Revert the action before the cursor.

        Returns:
            The reverted action, or None when there is nothing to undo
        """
        if not self.can_undo():
            return None

        entry = self._entries[self._cursor - 1]
        entry.action.inverse(target, entry.captured)
        self._cursor -= 1
        logger.debug(f"Undid: {entry.action.describe()} (cursor={self._cursor})")
        return entry.action

    def redo(self, target: EditTarget) -> Optional[Action]:
        """
        Re-run the action at the cursor from its captured state.

        Returns:
            The replayed action, or None when there is nothing to redo
        """
        if not self.can_redo():
            return None

        entry = self._entries[self._cursor]
        entry.action.replay(target, entry.captured)
        self._cursor += 1
        logger.debug(f"Redid: {entry.action.describe()} (cursor={self._cursor})")
        return entry.action

    def clear(self) -> None:
        """Forget all recorded actions."""
        self._entries.clear()
        self._cursor = 0
