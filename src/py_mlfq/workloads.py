"""Workloads — the reference process table and JSON workload loading.

A workload is an ordered list of ``ProcessSpec`` records.  Order matters:
processes that arrive at the same instant are admitted (and therefore
served) in workload order.

The reference workload mixes two long CPU-bound jobs with three I/O-bound
ones so the MLFQ behaviour is visible: CPU hogs sink to the lower queues
while the interactive jobs keep the top priority.

JSON workloads are a list of objects::

    [
        {"pid": 1, "arrival_time": 0, "burst_time": 100, "io_bound": false},
        {"pid": 2, "arrival_time": 0, "burst_time": 5, "io_bound": true, "name": "editor"}
    ]

An object wrapping the list under a ``"processes"`` key is accepted too.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from py_mlfq.process import ProcessSpec

if TYPE_CHECKING:
    from pathlib import Path


class WorkloadError(ValueError):
    """Raised when a workload description is malformed."""


def reference_workload() -> list[ProcessSpec]:
    """Return the five-process demonstration workload."""
    return [
        ProcessSpec(pid=1, arrival_time=0, burst_time=100, io_bound=False),
        ProcessSpec(pid=2, arrival_time=0, burst_time=5, io_bound=True),
        ProcessSpec(pid=3, arrival_time=0, burst_time=5, io_bound=True),
        ProcessSpec(pid=4, arrival_time=10, burst_time=80, io_bound=False),
        ProcessSpec(pid=5, arrival_time=20, burst_time=15, io_bound=True),
    ]


def _require_int(record: dict[str, Any], key: str, index: int) -> int:
    """Return ``record[key]`` as an int or raise WorkloadError."""
    if key not in record:
        msg = f"Process #{index}: missing '{key}'"
        raise WorkloadError(msg)
    value = record[key]
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"Process #{index}: '{key}' must be an integer, got {value!r}"
        raise WorkloadError(msg)
    return value


def parse_workload(data: Any) -> list[ProcessSpec]:  # noqa: ANN401
    """Build process specs from decoded JSON data.

    Args:
        data: A list of process objects, or a dict with a ``"processes"`` list.

    Returns:
        The workload in the given order.

    Raises:
        WorkloadError: If the structure or any field is invalid.

    """
    if isinstance(data, dict) and "processes" in data:
        data = data["processes"]  # pyright: ignore[reportUnknownVariableType]
    if not isinstance(data, list):
        msg = "Workload must be a list of process objects"
        raise WorkloadError(msg)

    specs: list[ProcessSpec] = []
    for index, record in enumerate(data):  # pyright: ignore[reportUnknownVariableType, reportUnknownArgumentType]
        if not isinstance(record, dict):
            msg = f"Process #{index}: expected an object, got {type(record).__name__}"  # pyright: ignore[reportUnknownArgumentType]
            raise WorkloadError(msg)
        fields: dict[str, Any] = record  # pyright: ignore[reportUnknownVariableType]
        io_bound = fields.get("io_bound", False)
        if not isinstance(io_bound, bool):
            msg = f"Process #{index}: 'io_bound' must be true or false, got {io_bound!r}"
            raise WorkloadError(msg)
        name = fields.get("name")
        if name is not None and not isinstance(name, str):
            msg = f"Process #{index}: 'name' must be a string, got {name!r}"
            raise WorkloadError(msg)
        try:
            spec = ProcessSpec(
                pid=_require_int(fields, "pid", index),
                arrival_time=_require_int(fields, "arrival_time", index),
                burst_time=_require_int(fields, "burst_time", index),
                io_bound=io_bound,
                name=name,
            )
        except WorkloadError:
            raise
        except ValueError as e:
            raise WorkloadError(str(e)) from e
        specs.append(spec)

    if not specs:
        msg = "Workload contains no processes"
        raise WorkloadError(msg)
    pids = [s.pid for s in specs]
    duplicates = sorted({pid for pid in pids if pids.count(pid) > 1})
    if duplicates:
        msg = f"Duplicate pids in workload: {', '.join(map(str, duplicates))}"
        raise WorkloadError(msg)
    return specs


def load_workload(path: Path) -> list[ProcessSpec]:
    """Load a workload from a JSON file.

    Raises:
        WorkloadError: If the file cannot be read, parsed or validated.

    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        msg = f"Cannot load workload: {e}"
        raise WorkloadError(msg) from e
    return parse_workload(data)
