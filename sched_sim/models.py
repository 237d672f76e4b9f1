from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

IDLE_LABEL = "Idle"


@dataclass
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0
    remaining_time: int = field(init=False)
    start_time: Optional[int] = None
    completion_time: Optional[int] = None

    def __post_init__(self) -> None:
        self.remaining_time = self.burst_time

    @property
    def finished(self) -> bool:
        return self.remaining_time == 0

    def is_ready(self, current_time: int) -> bool:
        return self.arrival_time <= current_time and self.remaining_time > 0


def reset_processes(processes: Iterable[Process]) -> None:
    """
    Restore every process to its pre-simulation state, in place.
    """
    for p in processes:
        p.remaining_time = p.burst_time
        p.start_time = None
        p.completion_time = None


@dataclass(frozen=True)
class Segment:
    """
    One contiguous stretch of the timeline; ``pid`` is None while the CPU idles.
    """

    pid: Optional[int]
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    @property
    def is_idle(self) -> bool:
        return self.pid is None

    @property
    def label(self) -> str:
        return IDLE_LABEL if self.pid is None else f"P{self.pid}"


@dataclass(frozen=True)
class ProcessMetrics:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int


@dataclass(frozen=True)
class Report:
    algorithm: str
    quantum: Optional[int]
    processes: Tuple[ProcessMetrics, ...]
    segments: Tuple[Segment, ...]
    avg_waiting_time: float
    avg_turnaround_time: float
    avg_response_time: float
    cpu_utilization: float
    throughput: float
    cpu_busy_time: int
    makespan: int

    def gantt(self) -> List[Tuple[str, int]]:
        """
        The Gantt sequence as ``(label, duration)`` pairs in timeline order.
        """
        return [(s.label, s.duration) for s in self.segments]

    def gantt_units(self) -> List[str]:
        units: List[str] = []
        for s in self.segments:
            units.extend([s.label] * s.duration)
        return units

    def metrics_for(self, pid: int) -> ProcessMetrics:
        for m in self.processes:
            if m.pid == pid:
                return m
        raise KeyError(pid)
