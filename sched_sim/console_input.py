from __future__ import annotations

import logging
from typing import Callable, List, Optional

from rich.console import Console

from .models import Process

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]


def prompt_int(
    message: str,
    minimum: int = 0,
    input_fn: Optional[InputFn] = None,
    console: Optional[Console] = None,
) -> int:
    """
    Ask until the user enters an integer >= ``minimum``.
    """
    input_fn = input_fn or input
    console = console or Console()
    while True:
        raw = input_fn(message).strip()
        try:
            value = int(raw)
        except ValueError:
            value = None

        if value is not None and value >= minimum:
            return value

        logger.debug("Rejected input %r for %r", raw, message)
        if minimum == 0:
            console.print("[red]Invalid input! Enter a non-negative integer.[/red]")
        else:
            console.print(f"[red]Invalid input! Enter an integer >= {minimum}.[/red]")


def collect_processes(input_fn: Optional[InputFn] = None, console: Optional[Console] = None) -> List[Process]:
    """
    Prompt for the process table: a count, then arrival, burst and priority
    for each process. Processes are numbered from 1 in the order entered.
    """
    console = console or Console()
    n = prompt_int("Enter number of processes: ", minimum=1, input_fn=input_fn, console=console)

    processes: List[Process] = []
    for pid in range(1, n + 1):
        arrival = prompt_int(f"Enter arrival time for process {pid}: ", input_fn=input_fn, console=console)
        burst = prompt_int(f"Enter burst time for process {pid}: ", minimum=1, input_fn=input_fn, console=console)
        priority = prompt_int(
            f"Enter priority for process {pid} (lower number = higher priority): ",
            input_fn=input_fn,
            console=console,
        )
        processes.append(Process(pid=pid, arrival_time=arrival, burst_time=burst, priority=priority))

    return processes


def collect_quantum(input_fn: Optional[InputFn] = None, console: Optional[Console] = None) -> int:
    return prompt_int("Enter time quantum for Round Robin: ", minimum=1, input_fn=input_fn, console=console)
