"""Tests for the text renderers.

The renderers are pure: they take configuration, log entries or a report
and return strings.
"""

import pytest

from py_mlfq.config import SchedulerConfig
from py_mlfq.process import ProcessSpec
from py_mlfq.report import (
    MLFQ_RULES,
    format_averages,
    format_banner,
    format_config,
    format_event_log,
    format_report,
    format_results_table,
)
from py_mlfq.scheduler import MLFQScheduler, SchedulerConsistencyError
from py_mlfq.workloads import reference_workload

TABLE_FRAME_LINES = 4


def _finished() -> MLFQScheduler:
    """Return a scheduler that has run the reference workload."""
    scheduler = MLFQScheduler(reference_workload())
    scheduler.run()
    return scheduler


class TestBannerAndConfig:
    """Verify the static headers."""

    def test_banner_lists_rules(self) -> None:
        """The banner includes every MLFQ rule."""
        banner = format_banner()
        assert "MLFQ Rules:" in banner
        assert all(rule in banner for rule in MLFQ_RULES)

    def test_config_describes_levels(self) -> None:
        """Each level's quantum and the boost interval are listed."""
        text = format_config(SchedulerConfig())
        assert "Queue 0 (highest): Time Quantum = 10" in text
        assert "Queue 1: Time Quantum = 20" in text
        assert "Queue 2 (lowest): Time Quantum = 40" in text
        assert "Priority Boost Interval: 50 time units" in text

    def test_single_level_config(self) -> None:
        """A one-level bank is labelled as the only queue."""
        assert "Queue 0 (only)" in format_config(SchedulerConfig(num_queues=1))


class TestEventLog:
    """Verify the trace rendering."""

    def test_one_line_per_entry(self) -> None:
        """Every log entry becomes one line."""
        scheduler = _finished()
        lines = format_event_log(scheduler.logger.entries).splitlines()
        assert len(lines) == len(scheduler.logger)
        assert lines[0] == "Time 0: Process 1 arrives (burst=100, type=CPU-bound)"
        assert lines[-1] == "Time 205: Process 1 completed"

    def test_empty_log(self) -> None:
        """No entries render as an empty string."""
        assert format_event_log([]) == ""


class TestResultsTable:
    """Verify the results table."""

    def test_table_rows(self) -> None:
        """The table has a header, a row per process and a frame."""
        report = _finished().report()
        lines = format_results_table(report).splitlines()
        assert len(lines) == len(report.processes) + TABLE_FRAME_LINES
        assert "Turnaround" in lines[1]
        assert lines[3].startswith("| P1 ")
        assert "CPU-bound" in lines[3]
        assert len({len(line) for line in lines}) == 1

    def test_averages(self) -> None:
        """Averages are printed with two decimals."""
        text = format_averages(_finished().report())
        assert "Overall Average Turnaround Time: 131.60" in text
        assert "Overall Average Waiting Time: 90.60" in text
        assert "I/O-bound Average Response Time: 10.00" in text
        assert "CPU-bound Average Turnaround Time: 195.00" in text

    def test_full_report_summary(self) -> None:
        """The summary line reports the counters."""
        text = format_report(_finished().report())
        assert text.startswith("Results:")
        assert "Finished at time 205 after 27 dispatches and 3 priority boost(s)." in text

    def test_partial_report_marks_missing_values(self) -> None:
        """Incomplete processes show '-' and the summary says so."""
        scheduler = MLFQScheduler([ProcessSpec(pid=1, arrival_time=0, burst_time=10)])
        scheduler.admit_arrivals()
        scheduler.dispatch()
        with pytest.raises(SchedulerConsistencyError) as excinfo:
            scheduler.step()
        text = format_report(excinfo.value.report)
        assert "Run stopped early" in text
        assert "| -" in text
