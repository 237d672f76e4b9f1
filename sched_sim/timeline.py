from __future__ import annotations

import logging
from typing import List, Optional

from .models import Process, Segment

logger = logging.getLogger(__name__)


class Timeline:
    """
    Simulated clock plus the ordered segments a policy has produced.

    Policies never touch ``start_time`` / ``completion_time`` themselves: every
    unit of work goes through :meth:`run`, which stamps the first execution of a
    process and its completion when ``remaining_time`` reaches zero.
    """

    def __init__(self) -> None:
        self.current_time = 0
        self.segments: List[Segment] = []

    def idle(self, duration: int = 1) -> None:
        if duration <= 0:
            return
        self._append(None, duration)

    def idle_until(self, time: int) -> None:
        """Idle the CPU up to ``time`` as a single segment."""
        self.idle(time - self.current_time)

    def run(self, process: Process, duration: int) -> None:
        if process.arrival_time > self.current_time:
            raise RuntimeError(
                f"P{process.pid} selected at t={self.current_time} before its arrival at {process.arrival_time}"
            )
        if not 0 < duration <= process.remaining_time:
            raise RuntimeError(
                f"Cannot run P{process.pid} for {duration} unit(s) with {process.remaining_time} remaining"
            )

        if process.start_time is None:
            process.start_time = self.current_time

        self._append(process.pid, duration)
        process.remaining_time -= duration

        if process.remaining_time == 0:
            process.completion_time = self.current_time
            logger.debug("P%d completed at t=%d", process.pid, self.current_time)

    def _append(self, pid: Optional[int], duration: int) -> None:
        start = self.current_time
        self.current_time += duration
        self.segments.append(Segment(pid=pid, start_time=start, end_time=self.current_time))
