"""
Module: builder.timing

Purpose:
    Timing instrumentation for the build pipeline, to see which phase
    dominates a build (usually image embedding and compression).

Key Classes:
    - TimingLog: Collects per-phase durations

Key Functions:
    - timed_phase: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - builder.controller: Main build controller
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Generator

logger = logging.getLogger(__name__)


@dataclass
class TimingLog:
    """
    Phase durations for one build.

    Durations accumulate, so a phase that is entered more than once
    (the pipeline resumes between images) reports its total time.

    Example:
        >>> log = TimingLog()
        >>> log.log_phase("images", 0.234)
        >>> print(log.summary())
    """
    phase_timings: Dict[str, float] = field(default_factory=dict)

    def log_phase(self, phase: str, duration: float) -> None:
        """Add a duration to a phase."""
        self.phase_timings[phase] = self.phase_timings.get(phase, 0.0) + duration

    @property
    def total(self) -> float:
        return sum(self.phase_timings.values())

    def slowest_phase(self) -> tuple[str, float] | None:
        if not self.phase_timings:
            return None
        return max(self.phase_timings.items(), key=lambda x: x[1])

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Build Timing Summary ==="]
        for phase, duration in self.phase_timings.items():
            lines.append(f"  {phase:25s} {duration:.3f}s")
        lines.append(f"  {'total':25s} {self.total:.3f}s")
        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Export timing data as dictionary."""
        slowest = self.slowest_phase()
        return {
            "phase_timings": dict(self.phase_timings),
            "total": self.total,
            "slowest_phase": slowest[0] if slowest else None,
        }


@contextmanager
def timed_phase(log: TimingLog, phase: str) -> Generator[None, None, None]:
    """
    Context manager for timing a code phase.

    Example:
        >>> log = TimingLog()
        >>> with timed_phase(log, "documents"):
        ...     opf = package_opf(...)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        log.log_phase(phase, time.perf_counter() - start)
