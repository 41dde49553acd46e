"""
Page being colored, with its base artwork.

Fills and resets hold the same lock so only one of them changes the pixels at a time,
a reset requested during a fill waits for the fill to be committed.
"""

from threading import Lock
from typing import Self

import pygame as pg
from numpy import uint8
from numpy.typing import NDArray

from src.classes.pixel_buffer import PixelBuffer
from src.fill_engine import FillRequest, FillResult, RandomSource, fill_request


class ColoringCanvas:
    """Class to fill regions of a page and restore its artwork."""

    __slots__ = (
        "_artwork", "buffer", "_lock", "_rng", "num_changes",
    )

    def __init__(self: Self, artwork: NDArray[uint8], rng: RandomSource | None = None) -> None:
        """
        Creates the buffer from the artwork.

        Args:
            rasterized artwork indexed [x, y], random source (default = None)
        """

        self.buffer: PixelBuffer = PixelBuffer(artwork.shape[0], artwork.shape[1], artwork)
        self._artwork: NDArray[uint8] = self.buffer.snapshot()
        self._lock: Lock = Lock()
        self._rng: RandomSource | None = rng

        # Renderers redraw when it changes
        self.num_changes: int = 0

    @property
    def is_busy(self: Self) -> bool:
        """
        Checks if a fill or reset is in progress.

        Returns:
            busy flag
        """

        return self._lock.locked()

    def fill(self: Self, request: FillRequest, should_wait: bool = True) -> FillResult:
        """
        Fills a region, waits for the active operation or rejects the request if busy.

        Args:
            request, wait flag (default = True)
        Returns:
            result
        """

        if not self._lock.acquire(blocking=should_wait):
            return FillResult("busy")

        try:
            result: FillResult = fill_request(self.buffer, request, self._rng)
            if result.did_fill:
                self.num_changes += 1
        finally:
            self._lock.release()

        return result

    def reset(self: Self) -> None:
        """Restores the artwork on the whole page after the active operation."""

        with self._lock:
            self.buffer.restore(self._artwork)
            self.num_changes += 1

    def to_surface(self: Self) -> pg.Surface:
        """
        Creates an image of the page.

        Returns:
            image
        """

        with self._lock:
            return self.buffer.to_surface()
