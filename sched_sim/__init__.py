"""
CPU scheduling simulator package.

Simulates FCFS, SRTF, preemptive priority and Round Robin scheduling over a
fixed set of processes and reports per-process timing metrics, aggregate
statistics and a Gantt timeline.
"""

from .algorithms import (
    ALGORITHMS,
    run_algorithm,
    schedule_fcfs,
    schedule_priority,
    schedule_rr,
    schedule_srtf,
)
from .errors import (
    EmptyProcessSet,
    InvalidProcess,
    InvalidQuantum,
    SchedulerError,
    UnknownAlgorithm,
    WorkloadError,
)
from .models import Process, ProcessMetrics, Report, Segment, reset_processes

__all__ = [
    "ALGORITHMS",
    "EmptyProcessSet",
    "InvalidProcess",
    "InvalidQuantum",
    "Process",
    "ProcessMetrics",
    "Report",
    "SchedulerError",
    "Segment",
    "UnknownAlgorithm",
    "WorkloadError",
    "reset_processes",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_priority",
    "schedule_rr",
    "schedule_srtf",
]
