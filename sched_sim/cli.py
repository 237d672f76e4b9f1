from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .console_input import collect_processes, collect_quantum
from .errors import SchedulerError
from .gantt import build_rich_gantt, format_gantt_units
from .models import Process, Report
from .workload_io import load_workload

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2
DEFAULT_STEP_DELAY = 0.1
EXIT_ERROR = 2


def non_negative_float(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if seconds < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {value}")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sched-sim",
        description="CPU scheduling simulator (FCFS, SRTF, preemptive Priority, Round Robin).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostic output (default: WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=sorted(ALGORITHMS),
        help="Algorithm to use (fcfs, srtf, priority, rr).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by the other algorithms).",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Replay the schedule slice by slice before printing the report.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=non_negative_float,
        default=DEFAULT_STEP_DELAY,
        help=f"Seconds per simulated time unit when --step is used (default: {DEFAULT_STEP_DELAY}).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=["fcfs", "srtf", "priority", "rr"],
        choices=sorted(ALGORITHMS),
        help="Algorithms to compare (default: fcfs srtf priority rr).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    interactive_parser = subparsers.add_parser(
        "interactive",
        help="Enter processes at the prompt and run all four algorithms on them.",
    )
    interactive_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Round-robin quantum; prompted for after the other algorithms when omitted.",
    )
    interactive_parser.add_argument(
        "--step",
        action="store_true",
        help="Replay each schedule slice by slice before its report.",
    )
    interactive_parser.add_argument(
        "--step-delay",
        type=non_negative_float,
        default=DEFAULT_STEP_DELAY,
        help=f"Seconds per simulated time unit when --step is used (default: {DEFAULT_STEP_DELAY}).",
    )

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _print_result(result: Report, console: Console) -> None:
    console.print(f"\n[bold]=== {result.algorithm} Scheduling ===[/bold]")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.segments)
    console.print(panel)
    if time_marks:
        console.print(time_marks)
    console.print(f"Gantt Chart: {format_gantt_units(result)}", highlight=False)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Complete",
        "Wait",
        "Turnaround",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            f"P{p.pid}",
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
        )

    console.print(proc_table)

    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{result.avg_waiting_time:.2f}")
    sys_table.add_row("Avg turnaround", f"{result.avg_turnaround_time:.2f}")
    sys_table.add_row("Avg response", f"{result.avg_response_time:.2f}")
    sys_table.add_row("Throughput (proc/time)", f"{result.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{result.cpu_utilization:.1f}%")
    sys_table.add_row("Total time", str(result.makespan))

    console.print(sys_table)


def _animate_result(result: Report, delay: float, console: Console) -> None:
    """
    Replay a finished schedule, sleeping ``delay`` seconds per time unit.
    """
    console.print(f"[bold]Simulating {result.algorithm}[/bold] (duration {result.makespan} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for seg in result.segments:
        if seg.is_idle:
            console.print(f"t={seg.start_time:2d}: [dim]CPU idle for {seg.duration} unit(s)[/dim]")
        else:
            console.print(
                f"t={seg.start_time:2d}: [green]Process {seg.pid} executing for {seg.duration} unit(s)[/green]"
            )
        time.sleep(delay * seg.duration)


def _show(result: Report, console: Console, step: bool, delay: float) -> None:
    if step:
        try:
            _animate_result(result, delay=delay, console=console)
        except KeyboardInterrupt:
            console.print("[yellow]Animation skipped.[/yellow]")
    _print_result(result, console)


def _run_compare(processes: Sequence[Process], algorithms: List[str], quantum: int, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg wait", justify="right")
    summary_table.add_column("Avg TAT", justify="right")
    summary_table.add_column("Avg resp", justify="right")
    summary_table.add_column("CPU util", justify="right")

    for alg in algorithms:
        q = quantum if alg == "rr" else None
        result = run_algorithm(alg, processes, quantum=q)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{result.avg_waiting_time:.2f}",
            f"{result.avg_turnaround_time:.2f}",
            f"{result.avg_response_time:.2f}",
            f"{result.cpu_utilization:.1f}%",
        )

    console.print(summary_table)


def _run_interactive(args: argparse.Namespace, console: Console) -> None:
    processes = collect_processes(console=console)
    logger.info("Collected %d process(es)", len(processes))

    for alg in ("fcfs", "srtf", "priority"):
        _show(run_algorithm(alg, processes), console, args.step, args.step_delay)

    quantum = args.quantum if args.quantum is not None else collect_quantum(console=console)
    _show(run_algorithm("rr", processes, quantum=quantum), console, args.step, args.step_delay)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    console = Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
            logger.info("Running %s on %s", args.algorithm, args.workload)
            result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
            _show(result, console, args.step, args.step_delay)
            return 0

        if args.command == "compare":
            processes = load_workload(Path(args.workload))
            _run_compare(processes, args.algorithms, args.quantum, console)
            return 0

        if args.command == "interactive":
            _run_interactive(args, console)
            return 0
    except (SchedulerError, OSError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return EXIT_ERROR
    except EOFError:
        console.print("[red]Input ended before all values were entered.[/red]")
        return EXIT_ERROR

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
