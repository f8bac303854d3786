"""
Background recomputation of modifier pipelines.

The runner owns a thread pool and runs apply_pipeline() off the editing
thread. It knows nothing about sessions or generations; ordering of results
is handled by EditSession.
"""

import concurrent.futures
import logging
from typing import Optional, Sequence

from FP_Libs.constants import RECOMPUTE_MAX_WORKERS, RECOMPUTE_THREAD_PREFIX
from FP_Libs.ImageEditingLib.pixel_buffer import PixelBuffer
from FP_Libs.ModifiersLib.modifier_models import Modifier
from FP_Libs.ModifiersLib.modifier_registry import ModifierKernelRegistry
from FP_Libs.ModifiersLib.pipeline_engine import apply_pipeline

logger = logging.getLogger(__name__)


class RecomputeRunner:
    """
    Submit pipeline recomputations to a thread pool.

    Args:
        max_workers: Thread count for the pool the runner creates
        executor: Existing executor to use instead (not shut down by the runner)
        registry: Kernel registry passed to apply_pipeline (default if None)
    """

    def __init__(
        self,
        max_workers: int = RECOMPUTE_MAX_WORKERS,
        executor: Optional[concurrent.futures.Executor] = None,
        registry: Optional[ModifierKernelRegistry] = None,
    ) -> None:
        self._owns_executor = executor is None
        self._executor = executor or concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=RECOMPUTE_THREAD_PREFIX,
        )
        self._registry = registry

    def submit(
        self,
        base: PixelBuffer,
        modifiers: Sequence[Modifier],
    ) -> "concurrent.futures.Future[PixelBuffer]":
        """
        Schedule apply_pipeline(base, modifiers).

        The modifier sequence is copied, so later edits to the caller's list
        do not affect the scheduled computation.
        """
        chain = tuple(modifiers)
        logger.debug(f"Submitting recomputation of {len(chain)} modifier(s)")
        return self._executor.submit(apply_pipeline, base, chain, self._registry)

    def shutdown(self, wait: bool = True) -> None:
        """Shut down the pool if the runner created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait, cancel_futures=True)

    def __enter__(self) -> "RecomputeRunner":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
