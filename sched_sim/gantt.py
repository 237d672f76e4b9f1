from __future__ import annotations

from typing import Dict, List, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Report, Segment


def merge_segments(segments: Sequence[Segment]) -> List[Segment]:
    """
    Join back-to-back segments of the same process (or idle) for display.
    """
    merged: List[Segment] = []
    for seg in segments:
        if merged and merged[-1].pid == seg.pid and merged[-1].end_time == seg.start_time:
            prev = merged.pop()
            seg = Segment(pid=prev.pid, start_time=prev.start_time, end_time=seg.end_time)
        merged.append(seg)
    return merged


def format_gantt_units(report: Report) -> str:
    """
    One label per time unit, e.g. ``P1 P1 Idle P2``.
    """
    return " ".join(report.gantt_units())


def render_gantt(segments: Sequence[Segment]) -> str:
    """
    Plain-text Gantt chart; idle time is drawn with dots.
    """
    if not segments:
        return "(no execution)"

    line = "|"
    labels = ""
    time_marks = "0"

    for seg in merge_segments(segments):
        width = max(1, seg.duration)
        if seg.is_idle:
            line += "." * width
            labels += " " * width
        else:
            line += "=" * width
            labels += seg.label[:width].ljust(width)
        time_marks += f"{seg.end_time:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(segments: Sequence[Segment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"

    for seg in merge_segments(segments):
        width = max(1, seg.duration)
        if seg.is_idle:
            timeline.append("." * width, style="dim")
            labels.append(" " * width)
        else:
            timeline.append(" " * width, style=f"on {pid_color(seg.pid)}")
            labels.append(seg.label[:width].ljust(width), style="bold")
        time_marks += f"{seg.end_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
