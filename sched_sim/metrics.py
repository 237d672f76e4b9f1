from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .errors import EmptyProcessSet
from .models import Process, ProcessMetrics, Report
from .timeline import Timeline


def process_metrics(p: Process) -> ProcessMetrics:
    """
    Derive waiting, turnaround and response time for a finished process.
    """
    if p.start_time is None or p.completion_time is None:
        raise RuntimeError(f"P{p.pid} has not finished executing")

    turnaround_time = p.completion_time - p.arrival_time
    return ProcessMetrics(
        pid=p.pid,
        arrival_time=p.arrival_time,
        burst_time=p.burst_time,
        priority=p.priority,
        start_time=p.start_time,
        completion_time=p.completion_time,
        waiting_time=turnaround_time - p.burst_time,
        turnaround_time=turnaround_time,
        response_time=p.start_time - p.arrival_time,
    )


def build_report(
    algorithm: str,
    processes: Sequence[Process],
    timeline: Timeline,
    quantum: Optional[int] = None,
) -> Report:
    """
    Turn the final process state and timeline of one policy run into a Report.

    CPU utilization is a percentage of the final simulated time, which is the
    total length of the timeline including idle segments.
    """
    if not processes:
        raise EmptyProcessSet()

    per_process = tuple(process_metrics(p) for p in sorted(processes, key=lambda p: p.pid))
    summary = summarize_process_metrics(list(per_process))

    makespan = timeline.current_time
    cpu_busy_time = sum(s.duration for s in timeline.segments if not s.is_idle)

    cpu_utilization = 100 * sum(p.burst_time for p in processes) / makespan if makespan > 0 else 0.0
    throughput = len(processes) / makespan if makespan > 0 else 0.0

    return Report(
        algorithm=algorithm,
        quantum=quantum,
        processes=per_process,
        segments=tuple(timeline.segments),
        avg_waiting_time=summary["avg_waiting"],
        avg_turnaround_time=summary["avg_turnaround"],
        avg_response_time=summary["avg_response"],
        cpu_utilization=cpu_utilization,
        throughput=throughput,
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
    )


def summarize_process_metrics(processes: List[ProcessMetrics]) -> Dict[str, float]:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }
