"""Time and size budget for a single HTML analysis.

The budget never preempts anything. Every loop whose cost grows with the
input must call check_timeout() at a bounded iteration granularity and
let AnalysisTimeout unwind the analysis; a loop that doesn't poll can run
past the budget indefinitely.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from clipkeep.core.errors import AnalysisTimeout, ContentTooLarge

Clock = Callable[[], float]


class AnalysisStats:
    """Process-wide diagnostic counters for completed analyses.

    Counters only grow; they reset when the process restarts.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._count = 0
        self._total_ms = 0.0

    def record(self, elapsed_ms: float) -> None:
        """Record one completed analysis."""
        with self._lock:
            self._count += 1
            self._total_ms += elapsed_ms

    @property
    def analysis_count(self) -> int:
        with self._lock:
            return self._count

    @property
    def total_time_ms(self) -> float:
        with self._lock:
            return self._total_ms

    def average_time_ms(self) -> float:
        """Mean time per completed analysis, 0.0 before the first one."""
        with self._lock:
            if self._count == 0:
                return 0.0
            return self._total_ms / self._count


# Shared by every budget unless a caller injects its own
GLOBAL_STATS = AnalysisStats()


class PerformanceBudget:
    """Elapsed-time and content-size limits for one analysis call.

    Example:
        budget = PerformanceBudget(timeout_ms=200, max_content_size=1024 * 1024)
        budget.check_content_size(html)
        for i, ch in enumerate(html):
            if i % 1000 == 0:
                budget.check_timeout()
            ...
        budget.record_completion()
    """

    def __init__(
        self,
        timeout_ms: int,
        max_content_size: int,
        *,
        stats: AnalysisStats | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Start the budget clock.

        Args:
            timeout_ms: Wall-clock budget in milliseconds.
            max_content_size: Largest accepted content, in UTF-8 bytes.
            stats: Counters to update on completion (defaults to GLOBAL_STATS).
            clock: Monotonic seconds source (defaults to time.monotonic).
        """
        self._timeout_ms = timeout_ms
        self._max_content_size = max_content_size
        self._stats = stats if stats is not None else GLOBAL_STATS
        self._clock = clock or time.monotonic
        self._start = self._clock()

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    @property
    def max_content_size(self) -> int:
        return self._max_content_size

    def elapsed_ms(self) -> float:
        """Milliseconds since the budget was created."""
        return (self._clock() - self._start) * 1000.0

    def remaining_ms(self) -> float:
        """Milliseconds left before check_timeout() starts failing (never negative)."""
        return max(0.0, self._timeout_ms - self.elapsed_ms())

    def check_timeout(self) -> None:
        """Raise AnalysisTimeout once the elapsed time exceeds the budget."""
        if self.elapsed_ms() > self._timeout_ms:
            raise AnalysisTimeout(self._timeout_ms)

    def check_content_size(self, content: str) -> None:
        """Raise ContentTooLarge if content is over the size ceiling."""
        size = len(content.encode("utf-8"))
        if size > self._max_content_size:
            raise ContentTooLarge(size, self._max_content_size)

    def record_completion(self) -> float:
        """Record a completed analysis in the shared counters.

        Returns:
            Elapsed milliseconds for this analysis.
        """
        elapsed = self.elapsed_ms()
        self._stats.record(elapsed)
        return elapsed
