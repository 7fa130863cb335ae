"""
Progress reporting for the build pipeline.

Builds report a percentage through an optional callback. The reporter
clamps values to 0-100 and never lets the reported value go backwards.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]

# Milestones
STARTED = 5
STRUCTURE_CREATED = 10
IMAGES_DONE = 50
PAGES_DONE = 70
METADATA_DONE = 90
FINISHED = 100


class ProgressReporter:
    """
    Monotonic progress reporter.

    Example:
        >>> seen = []
        >>> reporter = ProgressReporter(seen.append)
        >>> reporter.report(10); reporter.report(5); reporter.report(50)
        >>> seen
        [10.0, 50.0]
    """

    def __init__(self, callback: Optional[ProgressCallback] = None) -> None:
        self._callback = callback
        self._current = 0.0

    @property
    def current(self) -> float:
        return self._current

    def report(self, percent: float) -> None:
        percent = max(0.0, min(100.0, float(percent)))
        if percent <= self._current:
            return
        self._current = percent
        logger.debug(f"Progress {percent}%")
        if self._callback is not None:
            self._callback(percent)

    def report_images(self, done: int, total: int) -> None:
        """Map images embedded onto the 10-50 band."""
        if total <= 0:
            return
        span = IMAGES_DONE - STRUCTURE_CREATED
        self.report(STRUCTURE_CREATED + span * done / total)
