"""Performance metrics — turnaround, waiting and response times.

Once a run is over, the collector reads the finished PCBs and derives the
classic scheduling metrics:

- **Turnaround time** — completion minus arrival.  How long the job spent
  in the system.
- **Waiting time** — turnaround minus burst.  Time in the system not
  spent on the CPU (queued or blocked for I/O).
- **Response time** — first dispatch minus arrival.  How long the job
  waited before it got the CPU at all; the metric MLFQ optimises for
  interactive (I/O-bound) jobs.

Averages are reported for the whole population and separately for
I/O-bound and CPU-bound jobs, which is where MLFQ's bias shows up.
Aggregation is read-only: collecting metrics never changes a process.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from py_mlfq.process import Process


@dataclass(frozen=True)
class ProcessMetrics:
    """Timing results for one process.

    Fields that depend on completion (or first dispatch) are None for a
    process that did not get that far, which only happens in the partial
    report attached to a consistency failure.
    """

    pid: int
    name: str
    io_bound: bool
    arrival_time: int
    burst_time: int
    remaining_time: int
    final_queue: int
    first_run_time: int | None
    completion_time: int | None
    turnaround_time: int | None
    waiting_time: int | None
    response_time: int | None

    @property
    def completed(self) -> bool:
        """Return True if the process finished."""
        return self.completion_time is not None

    @property
    def kind(self) -> str:
        """Return ``"I/O-bound"`` or ``"CPU-bound"``."""
        return "I/O-bound" if self.io_bound else "CPU-bound"

    @classmethod
    def from_process(cls, process: Process) -> ProcessMetrics:
        """Snapshot the timing fields of *process*."""
        return cls(
            pid=process.pid,
            name=process.name,
            io_bound=process.io_bound,
            arrival_time=process.arrival_time,
            burst_time=process.burst_time,
            remaining_time=process.remaining_time,
            final_queue=process.current_queue,
            first_run_time=process.first_run_time,
            completion_time=process.completion_time,
            turnaround_time=process.turnaround_time,
            waiting_time=process.waiting_time,
            response_time=process.response_time,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the metrics as a JSON-friendly dict."""
        return {
            "pid": self.pid,
            "name": self.name,
            "io_bound": self.io_bound,
            "arrival_time": self.arrival_time,
            "burst_time": self.burst_time,
            "remaining_time": self.remaining_time,
            "final_queue": self.final_queue,
            "first_run_time": self.first_run_time,
            "completion_time": self.completion_time,
            "turnaround_time": self.turnaround_time,
            "waiting_time": self.waiting_time,
            "response_time": self.response_time,
        }


@dataclass(frozen=True)
class GroupAverages:
    """Average timings across a group of completed processes.

    An empty group averages to 0.0 so the table always has a value.
    """

    count: int = 0
    avg_turnaround_time: float = 0.0
    avg_waiting_time: float = 0.0
    avg_response_time: float = 0.0

    @classmethod
    def of(cls, rows: Sequence[ProcessMetrics]) -> GroupAverages:
        """Average the completed rows in *rows*."""
        done = [r for r in rows if r.completed]
        if not done:
            return cls()
        n = len(done)
        return cls(
            count=n,
            avg_turnaround_time=sum(r.turnaround_time or 0 for r in done) / n,
            avg_waiting_time=sum(r.waiting_time or 0 for r in done) / n,
            avg_response_time=sum(r.response_time or 0 for r in done) / n,
        )

    def to_dict(self) -> dict[str, float | int]:
        """Return the averages as a JSON-friendly dict."""
        return {
            "count": self.count,
            "avg_turnaround_time": self.avg_turnaround_time,
            "avg_waiting_time": self.avg_waiting_time,
            "avg_response_time": self.avg_response_time,
        }


@dataclass(frozen=True)
class SimulationReport:
    """Everything a caller needs to present the outcome of a run."""

    processes: tuple[ProcessMetrics, ...]
    overall: GroupAverages
    io_bound: GroupAverages
    cpu_bound: GroupAverages
    end_time: int
    context_switches: int = 0
    boosts: int = 0
    complete: bool = field(default=True)

    def by_pid(self, pid: int) -> ProcessMetrics:
        """Return the row for *pid*.

        Raises:
            KeyError: If no process has that PID.

        """
        for row in self.processes:
            if row.pid == pid:
                return row
        msg = f"No process with pid {pid}"
        raise KeyError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Return the whole report as a JSON-friendly dict."""
        return {
            "complete": self.complete,
            "end_time": self.end_time,
            "context_switches": self.context_switches,
            "boosts": self.boosts,
            "processes": [row.to_dict() for row in self.processes],
            "averages": {
                "overall": self.overall.to_dict(),
                "io_bound": self.io_bound.to_dict(),
                "cpu_bound": self.cpu_bound.to_dict(),
            },
        }


def collect_metrics(
    processes: Iterable[Process],
    *,
    end_time: int,
    context_switches: int = 0,
    boosts: int = 0,
) -> SimulationReport:
    """Summarize finished (or partially finished) processes.

    Args:
        processes: The PCBs, in the order rows should appear.
        end_time: Virtual clock value when the run stopped.
        context_switches: Number of dispatches performed.
        boosts: Number of priority boosts that fired.

    Returns:
        A report with per-process rows and grouped averages.

    """
    rows = tuple(ProcessMetrics.from_process(p) for p in processes)
    return SimulationReport(
        processes=rows,
        overall=GroupAverages.of(rows),
        io_bound=GroupAverages.of([r for r in rows if r.io_bound]),
        cpu_bound=GroupAverages.of([r for r in rows if not r.io_bound]),
        end_time=end_time,
        context_switches=context_switches,
        boosts=boosts,
        complete=all(r.completed for r in rows),
    )
