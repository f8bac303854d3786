"""
Pytest configuration and shared fixtures for Fairplay tests.

This module provides shared test fixtures and helpers used across multiple
test modules.
"""

import concurrent.futures
from typing import Any, Callable, List, Tuple

import numpy as np
import pytest

from FP_Libs.ImageEditingLib.pixel_buffer import PixelBuffer


class ManualExecutor(concurrent.futures.Executor):
    """
    Executor that runs submitted work only when a test says so.

    By default submitted futures are marked running immediately, so they
    cannot be cancelled and their completion order is chosen by the test.
    With start_running=False they stay queued and shutdown(cancel_futures=True)
    cancels them, as ThreadPoolExecutor does.
    """

    def __init__(self, start_running: bool = True) -> None:
        self.start_running = start_running
        self.jobs: List[Tuple[concurrent.futures.Future, Callable, Tuple[Any, ...]]] = []

    def submit(self, fn, *args, **kwargs):
        future: concurrent.futures.Future = concurrent.futures.Future()
        if self.start_running:
            future.set_running_or_notify_cancel()
        self.jobs.append((future, fn, args))
        return future

    def run(self, index: int) -> None:
        future, fn, args = self.jobs[index]
        try:
            future.set_result(fn(*args))
        except Exception as exc:
            future.set_exception(exc)

    def run_all(self) -> None:
        for index, (future, _, _) in enumerate(self.jobs):
            if not future.done():
                self.run(index)

    def shutdown(self, wait=True, *, cancel_futures=False):
        if cancel_futures:
            for future, _, _ in self.jobs:
                future.cancel()


@pytest.fixture
def manual_executor():
    """Provide an executor whose jobs complete on demand."""
    return ManualExecutor()


@pytest.fixture
def solid_red():
    """2x2 opaque red buffer."""
    return PixelBuffer.solid(2, 2, (255, 0, 0, 255))


@pytest.fixture
def random_buffer():
    """
    Provide a deterministic 7x5 buffer of random RGBA values.

    Returns:
        PixelBuffer with varied alpha so alpha pass-through is observable
    """
    rng = np.random.default_rng(1234)
    array = rng.integers(0, 256, size=(5, 7, 4), dtype=np.uint8)
    return PixelBuffer.from_array(array)



@pytest.fixture
def queued_executor():
    """Provide an executor whose jobs stay queued and can be cancelled."""
    return ManualExecutor(start_running=False)
