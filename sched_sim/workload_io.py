from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, List, Mapping

from .errors import WorkloadError
from .models import Process

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    Processes are numbered P1..PN in file order.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        rows = _load_json(path)
    elif suffix == ".csv":
        rows = _load_csv(path)
    else:
        raise WorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    processes = processes_from_rows(rows)
    logger.debug("Loaded %d process(es) from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Mapping]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise WorkloadError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return raw


def _load_csv(path: Path) -> List[Mapping]:
    with path.open("r", encoding="utf-8", newline="") as f:
        try:
            return list(csv.DictReader(f))
        except (csv.Error, UnicodeDecodeError) as exc:
            raise WorkloadError(f"Invalid CSV in {path}: {exc}") from exc


def _non_negative(mapping: Mapping, key: str, default=None) -> int:
    raw = mapping.get(key)
    if raw in (None, ""):
        if default is None:
            raise KeyError(key)
        return default
    if isinstance(raw, str):
        value = int(raw)
    elif isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    else:
        raise TypeError(f"{key} must be an integer, got {raw!r}")
    if value < 0:
        raise ValueError(f"{key} must be non-negative")
    return value


def _process_from_mapping(pid: int, mapping) -> Process:
    try:
        arrival_time = _non_negative(mapping, "arrival_time")
        burst_time = _non_negative(mapping, "burst_time")
        priority = _non_negative(mapping, "priority", default=0)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def processes_from_rows(rows: Iterable[Mapping]) -> List[Process]:
    return [_process_from_mapping(pid, row) for pid, row in enumerate(rows, start=1)]
