"""
Editing session for one opened image.

An EditSession owns the immutable base image, the modifier chain, the
current selection, the last computed output and its own history stack.
Every history move that changes the chain schedules one background
recomputation of the output from the base image.

Results are delivered in order: each recomputation gets a generation number
and only the newest generation may replace the output. A late result from
an older edit is discarded, never overwriting a newer output.
"""

import concurrent.futures
import logging
import threading
from typing import Callable, List, Optional

from FP_Libs.errors import InvalidActionError
from FP_Libs.HistoryLib.actions import Action, Selection
from FP_Libs.HistoryLib.history_stack import HistoryStack
from FP_Libs.HistoryLib.recompute_runner import RecomputeRunner
from FP_Libs.ImageEditingLib.histogram import Histogram, histogram
from FP_Libs.ImageEditingLib.pixel_buffer import PixelBuffer
from FP_Libs.ModifiersLib.modifier_models import Modifier, is_modifier

logger = logging.getLogger(__name__)

OutputListener = Callable[[PixelBuffer], None]


class EditSession:
    """
    Editing state for one image.

    Attributes:
        base: The opened image; never changes
        modifiers: Ordered modifier chain
        selection: None or (index, working copy of that modifier)
        output: Last delivered result of applying modifiers to base
        busy: True while the newest recomputation has not been delivered
        history: Undo/redo stack of this session only
        last_error: Exception of the newest failed recomputation, if any
    """

    def __init__(self, base: PixelBuffer, runner: Optional[RecomputeRunner] = None) -> None:
        if not isinstance(base, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(base)}")

        self.base = base
        self.modifiers: List[Modifier] = []
        self.selection: Selection = None
        self.output = base
        self.busy = False
        self.history = HistoryStack()
        self.last_error: Optional[BaseException] = None

        self._owns_runner = runner is None
        self._runner = runner or RecomputeRunner()
        self._lock = threading.RLock()
        self._delivered = threading.Condition(self._lock)
        self._generation = 0
        self._pending: Optional[concurrent.futures.Future] = None
        self._listeners: List[OutputListener] = []

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def apply(self, action: Action) -> Optional[concurrent.futures.Future]:
        """
        Apply an action through the history.

        Returns:
            The recomputation future when the action changed the chain,
            otherwise None

        Raises:
            InvalidActionError: If the action does not fit the current state
        """
        self.history.apply(self, action)
        if action.changes_modifiers:
            return self.recompute()
        return None

    def undo(self) -> bool:
        """Undo the last applied action. Returns False if there was none."""
        action = self.history.undo(self)
        if action is None:
            logger.debug("Nothing to undo")
            return False
        if action.changes_modifiers:
            self.recompute()
        return True

    def redo(self) -> bool:
        """Redo the last undone action. Returns False if there was none."""
        action = self.history.redo(self)
        if action is None:
            logger.debug("Nothing to redo")
            return False
        if action.changes_modifiers:
            self.recompute()
        return True

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # ------------------------------------------------------------------
    # Selection working copy
    # ------------------------------------------------------------------

    def change_options(self, modifier: Modifier) -> None:
        """
        Replace the working copy of the selected modifier.

        This is a draft edit: it is not recorded in the history and does not
        recompute the output until ModifierOptionsApplied is applied.

        Raises:
            InvalidActionError: If nothing is selected or the variant differs
        """
        if self.selection is None:
            raise InvalidActionError("Cannot change options: no modifier selected")
        if not is_modifier(modifier):
            raise InvalidActionError(f"Expected a modifier, got {type(modifier).__name__}")

        index, working_copy = self.selection
        if type(modifier) is not type(working_copy):
            raise InvalidActionError(
                f"Cannot change {working_copy.display_name} options to {modifier.display_name}"
            )
        self.selection = (index, modifier)

    # ------------------------------------------------------------------
    # Recomputation
    # ------------------------------------------------------------------

    @property
    def generation(self) -> int:
        return self._generation

    def recompute(self) -> concurrent.futures.Future:
        """
        Schedule recomputation of the output from the current chain.

        A still-queued older recomputation is cancelled; one already running
        finishes but its result is discarded.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            self.busy = True
            if self._pending is not None and self._pending.cancel():
                logger.debug(f"Cancelled superseded recomputation (generation {generation - 1})")
            future = self._runner.submit(self.base, self.modifiers)
            self._pending = future

        future.add_done_callback(lambda done: self._deliver(generation, done))
        return future

    def _deliver(self, generation: int, future: concurrent.futures.Future) -> None:
        if future.cancelled():
            with self._lock:
                # Cancelled without a successor (runner shut down): nothing
                # more will arrive for this generation.
                if generation == self._generation:
                    logger.debug(f"Recomputation cancelled (generation {generation})")
                    self.busy = False
                    self._pending = None
                    self._delivered.notify_all()
            return

        with self._lock:
            if generation != self._generation:
                logger.warning(
                    f"Discarding stale recomputation result "
                    f"(generation {generation}, latest {self._generation})"
                )
                return

            error = future.exception()
            if error is None:
                self.output = future.result()
                self.last_error = None
                logger.debug(f"Delivered recomputation (generation {generation})")
            else:
                self.last_error = error
                logger.error(
                    f"Recomputation failed (generation {generation}): {error}",
                    exc_info=error,
                )
            self.busy = False
            self._pending = None
            self._delivered.notify_all()
            output = self.output
            listeners = list(self._listeners)

        if error is None:
            for listener in listeners:
                listener(output)

    def wait(self, timeout: Optional[float] = None) -> PixelBuffer:
        """
        Block until the newest recomputation has been delivered.

        Returns:
            The current output

        Raises:
            TimeoutError: If timeout elapses first
        """
        with self._delivered:
            if not self._delivered.wait_for(lambda: not self.busy, timeout=timeout):
                raise TimeoutError("Timed out waiting for recomputation")
            return self.output

    def add_output_listener(self, listener: OutputListener) -> None:
        """Call listener with every newly delivered output."""
        with self._lock:
            self._listeners.append(listener)

    def remove_output_listener(self, listener: OutputListener) -> bool:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)
                return True
            return False

    # ------------------------------------------------------------------
    # Presentation helpers
    # ------------------------------------------------------------------

    def histogram(self) -> Histogram:
        """Histogram of the current output."""
        with self._lock:
            output = self.output
        return histogram(output)

    def close(self) -> None:
        """Release the recompute runner if this session created it."""
        with self._lock:
            self._listeners.clear()
        if self._owns_runner:
            self._runner.shutdown(wait=False)
