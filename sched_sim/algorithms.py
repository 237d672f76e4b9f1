from __future__ import annotations

import copy
import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Sequence

from .errors import EmptyProcessSet, InvalidProcess, InvalidQuantum, UnknownAlgorithm
from .metrics import build_report
from .models import Process, Report, reset_processes
from .timeline import Timeline

logger = logging.getLogger(__name__)

SelectionKey = Callable[[Process], tuple]


def _private_copy(processes: Sequence[Process]) -> List[Process]:
    """
    Validate the caller's processes and return a reset deep copy to simulate on.

    The caller's list is never mutated, so running several policies against the
    same processes gives the same results in any order.
    """
    if not processes:
        raise EmptyProcessSet()

    seen: set[int] = set()
    for p in processes:
        if p.pid in seen:
            raise InvalidProcess(f"Duplicate process id P{p.pid}")
        seen.add(p.pid)
        if p.arrival_time < 0:
            raise InvalidProcess(f"P{p.pid} has negative arrival time {p.arrival_time}")
        if p.burst_time < 1:
            raise InvalidProcess(f"P{p.pid} needs a burst time of at least 1, got {p.burst_time}")
        if p.priority < 0:
            raise InvalidProcess(f"P{p.pid} has negative priority {p.priority}")

    private = copy.deepcopy(list(processes))
    reset_processes(private)
    return private


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None) -> Report:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes run to completion in arrival order; equal arrivals keep their
    input order. A gap before the next arrival is recorded as one idle segment.
    """
    procs = _private_copy(processes)
    timeline = Timeline()

    for p in sorted(procs, key=lambda p: p.arrival_time):
        if timeline.current_time < p.arrival_time:
            logger.debug("FCFS: CPU idle from t=%d to t=%d", timeline.current_time, p.arrival_time)
            timeline.idle_until(p.arrival_time)
        timeline.run(p, p.burst_time)

    return build_report("FCFS", procs, timeline)


def _run_unit_steps(procs: List[Process], key: SelectionKey, name: str) -> Timeline:
    """
    Preemptive loop shared by SRTF and priority scheduling.

    The choice is re-evaluated every time unit among arrived, unfinished
    processes; ``key`` must end with the pid so ties go to the lowest id.
    """
    timeline = Timeline()
    running: Optional[int] = None
    completed = 0

    while completed < len(procs):
        ready = [p for p in procs if p.is_ready(timeline.current_time)]
        if not ready:
            timeline.idle(1)
            running = None
            continue

        current = min(ready, key=key)
        if running is not None and running != current.pid:
            logger.debug("%s: P%d preempts P%d at t=%d", name, current.pid, running, timeline.current_time)
        running = current.pid

        timeline.run(current, 1)
        if current.finished:
            completed += 1
            running = None

    return timeline


def schedule_srtf(processes: Sequence[Process], quantum: Optional[int] = None) -> Report:
    """
    Shortest Remaining Time First (preemptive SJF).
    """
    procs = _private_copy(processes)
    timeline = _run_unit_steps(procs, key=lambda p: (p.remaining_time, p.pid), name="SRTF")
    return build_report("SRTF", procs, timeline)


def schedule_priority(processes: Sequence[Process], quantum: Optional[int] = None) -> Report:
    """
    Preemptive priority scheduling.

    Lower numeric priority value means higher priority. A newly arrived process
    with a better priority takes the CPU at the next time unit.
    """
    procs = _private_copy(processes)
    timeline = _run_unit_steps(procs, key=lambda p: (p.priority, p.pid), name="Priority")
    return build_report("Priority (preemptive)", procs, timeline)


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = None) -> Report:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice runs, or exactly when it ends, join the
    ready queue ahead of the process that was just preempted.
    """
    if quantum is None or quantum < 1:
        raise InvalidQuantum(quantum)

    procs = _private_copy(processes)
    timeline = Timeline()

    ready: Deque[Process] = deque()
    admitted: Dict[int, bool] = {p.pid: False for p in procs}
    by_pid = sorted(procs, key=lambda p: p.pid)

    def enqueue_new_arrivals(current_time: int) -> None:
        for p in by_pid:
            if not admitted[p.pid] and p.is_ready(current_time):
                ready.append(p)
                admitted[p.pid] = True

    completed = 0
    while completed < len(procs):
        enqueue_new_arrivals(timeline.current_time)

        if not ready:
            timeline.idle(1)
            continue

        p = ready.popleft()
        run_time = min(quantum, p.remaining_time)
        logger.debug("RR: dispatch P%d for %d unit(s) at t=%d", p.pid, run_time, timeline.current_time)
        timeline.run(p, run_time)

        # Arrivals up to the end of this slice go ahead of the preempted process.
        enqueue_new_arrivals(timeline.current_time)

        if p.finished:
            completed += 1
        else:
            ready.append(p)

    return build_report("Round Robin", procs, timeline, quantum=quantum)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "srtf": schedule_srtf,
    "priority": schedule_priority,
    "rr": schedule_rr,
}


def run_algorithm(name: str, processes: Sequence[Process], quantum: Optional[int] = None) -> Report:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise UnknownAlgorithm(name)

    func = ALGORITHMS[name]
    logger.debug("Running %s on %d process(es)", name, len(processes))
    return func(processes, quantum=quantum)
