"""Text rendering for simulation output.

Pure helpers that turn configuration, event logs and metric reports into
printable strings.  Nothing here does I/O, so every function is testable
on its own; the console entry point just prints what they return.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from py_mlfq.config import SchedulerConfig
    from py_mlfq.logging import LogEntry
    from py_mlfq.metrics import GroupAverages, ProcessMetrics, SimulationReport

_BANNER_WIDTH = 58

MLFQ_RULES = (
    "1. If Priority(A) > Priority(B), A runs",
    "2. If Priority(A) = Priority(B), A & B run in round-robin",
    "3. New job starts at highest priority",
    "4a. If job uses full time slice, it moves down one queue",
    "4b. If job gives up CPU before time slice is used, it stays at same priority",
    "5. After some time period S, move all jobs to highest priority queue",
)

_COLUMNS = (
    ("Proc", 6),
    ("Type", 11),
    ("Burst", 8),
    ("Response", 11),
    ("Completion", 12),
    ("Turnaround", 14),
    ("Waiting", 10),
)


def format_banner() -> str:
    """Return the title banner followed by the MLFQ rules."""
    border = "=" * _BANNER_WIDTH
    title = "Multi-Level Feedback Queue (MLFQ) Scheduling Simulation"
    rules = "\n".join(MLFQ_RULES)
    return f"{title}\n{border}\n\nMLFQ Rules:\n{rules}\n"


def format_config(config: SchedulerConfig) -> str:
    """Describe the queue levels, quanta and boost interval."""
    lines = ["Queue Configuration:"]
    for level, quantum in enumerate(config.quanta):
        if config.num_queues == 1:
            tag = " (only)"
        elif level == 0:
            tag = " (highest)"
        elif level == config.lowest_level:
            tag = " (lowest)"
        else:
            tag = ""
        lines.append(f"Queue {level}{tag}: Time Quantum = {quantum}")
    lines.append(f"Priority Boost Interval: {config.boost_interval} time units")
    lines.append(f"I/O Duration: {config.io_duration} time units")
    return "\n".join(lines)


def format_event_log(entries: Iterable[LogEntry]) -> str:
    """Render the event trace, one ``Time <t>: ...`` line per entry."""
    return "\n".join(str(entry) for entry in entries)


def _cell(value: int | None) -> str:
    """Render an optional number, using ``-`` for missing values."""
    return "-" if value is None else str(value)


def _row(values: tuple[str, ...]) -> str:
    """Pad *values* into a table row."""
    widths = (width for _, width in _COLUMNS)
    cells = (f" {value:<{width - 2}} " for value, width in zip(values, widths, strict=True))
    return "|" + "|".join(cells) + "|"


def _process_row(row: ProcessMetrics) -> str:
    """Render one process as a table row."""
    return _row(
        (
            row.name,
            row.kind,
            str(row.burst_time),
            _cell(row.response_time),
            _cell(row.completion_time),
            _cell(row.turnaround_time),
            _cell(row.waiting_time),
        )
    )


def format_results_table(report: SimulationReport) -> str:
    """Render the per-process results as an ASCII table."""
    separator = "+" + "+".join("-" * width for _, width in _COLUMNS) + "+"
    header = _row(tuple(name for name, _ in _COLUMNS))
    lines = [separator, header, separator]
    lines.extend(_process_row(row) for row in report.processes)
    lines.append(separator)
    return "\n".join(lines)


def _format_group(label: str, averages: GroupAverages, *, waiting: bool = False) -> str:
    """Render the averages of one process group."""
    lines = [f"{label} Average Turnaround Time: {averages.avg_turnaround_time:.2f}"]
    if waiting:
        lines.append(f"{label} Average Waiting Time: {averages.avg_waiting_time:.2f}")
    lines.append(f"{label} Average Response Time: {averages.avg_response_time:.2f}")
    return "\n".join(lines)


def format_averages(report: SimulationReport) -> str:
    """Render overall, I/O-bound and CPU-bound averages."""
    return "\n\n".join(
        (
            _format_group("Overall", report.overall, waiting=True),
            _format_group("I/O-bound", report.io_bound),
            _format_group("CPU-bound", report.cpu_bound),
        )
    )


def format_report(report: SimulationReport) -> str:
    """Render the results table, the averages and the run summary."""
    summary = (
        f"Finished at time {report.end_time} after {report.context_switches} "
        f"dispatches and {report.boosts} priority boost(s)."
    )
    if not report.complete:
        summary += " Run stopped early; incomplete processes are shown with '-'."
    return "\n\n".join(
        ("Results:\n" + format_results_table(report), format_averages(report), summary)
    )
