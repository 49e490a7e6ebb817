"""Tests for the metrics collector.

Metrics are derived read-only from finished PCBs: per-process rows plus
overall, I/O-bound and CPU-bound averages.
"""

import pytest

from py_mlfq.metrics import GroupAverages, ProcessMetrics, collect_metrics
from py_mlfq.process import Process, ProcessSpec
from py_mlfq.scheduler import MLFQScheduler
from py_mlfq.workloads import reference_workload

REFERENCE_AVG_TURNAROUND = 131.6
REFERENCE_AVG_WAITING = 90.6
REFERENCE_AVG_RESPONSE = 6.8
REFERENCE_IO_TURNAROUND = 268 / 3
REFERENCE_IO_RESPONSE = 10.0
REFERENCE_CPU_TURNAROUND = 195.0
REFERENCE_CPU_RESPONSE = 2.0


def _reference_report():  # noqa: ANN202
    """Return the report of a finished reference run."""
    return MLFQScheduler(reference_workload()).run()


class TestProcessMetrics:
    """Verify per-process rows."""

    def test_unfinished_process_has_no_results(self) -> None:
        """A process that never ran reports None for derived fields."""
        process = Process(ProcessSpec(pid=1, arrival_time=0, burst_time=5))
        row = ProcessMetrics.from_process(process)
        assert row.completed is False
        assert row.completion_time is None
        assert row.response_time is None
        assert row.remaining_time == 5

    def test_rows_in_workload_order(self) -> None:
        """Rows follow the workload order."""
        assert [row.pid for row in _reference_report().processes] == [1, 2, 3, 4, 5]

    def test_to_dict(self) -> None:
        """The dict form exposes every timing field."""
        data = _reference_report().by_pid(2).to_dict()
        assert data["pid"] == 2
        assert data["io_bound"] is True
        assert data["completion_time"] == 51
        assert data["response_time"] == 10

    def test_by_pid_unknown(self) -> None:
        """Looking up a missing pid raises KeyError."""
        with pytest.raises(KeyError):
            _reference_report().by_pid(42)


class TestGroupAverages:
    """Verify averaging."""

    def test_empty_group_is_zero(self) -> None:
        """No rows means zero averages."""
        averages = GroupAverages.of([])
        assert averages.count == 0
        assert averages.avg_turnaround_time == pytest.approx(0.0)

    def test_overall_averages(self) -> None:
        """Overall averages match the hand-traced schedule."""
        overall = _reference_report().overall
        assert overall.count == 5
        assert overall.avg_turnaround_time == pytest.approx(REFERENCE_AVG_TURNAROUND)
        assert overall.avg_waiting_time == pytest.approx(REFERENCE_AVG_WAITING)
        assert overall.avg_response_time == pytest.approx(REFERENCE_AVG_RESPONSE)

    def test_split_by_io_classification(self) -> None:
        """I/O-bound jobs respond faster than CPU-bound ones on average."""
        report = _reference_report()
        assert report.io_bound.count == 3
        assert report.cpu_bound.count == 2
        assert report.io_bound.avg_turnaround_time == pytest.approx(REFERENCE_IO_TURNAROUND)
        assert report.io_bound.avg_response_time == pytest.approx(REFERENCE_IO_RESPONSE)
        assert report.cpu_bound.avg_turnaround_time == pytest.approx(REFERENCE_CPU_TURNAROUND)
        assert report.cpu_bound.avg_response_time == pytest.approx(REFERENCE_CPU_RESPONSE)

    def test_only_completed_rows_averaged(self) -> None:
        """Unfinished processes do not drag the averages."""
        done = Process(ProcessSpec(pid=1, arrival_time=0, burst_time=4))
        done.admit()
        done.dispatch(now=0)
        done.run_for(4)
        done.terminate(now=4)
        waiting = Process(ProcessSpec(pid=2, arrival_time=0, burst_time=4))
        report = collect_metrics([done, waiting], end_time=4)
        assert report.complete is False
        assert report.overall.count == 1
        assert report.overall.avg_turnaround_time == pytest.approx(4.0)
        assert report.io_bound.count == 0


class TestSimulationReport:
    """Verify the report wrapper."""

    def test_complete_flag_and_counters(self) -> None:
        """A full run is complete and carries run counters."""
        report = _reference_report()
        assert report.complete is True
        assert report.end_time == 205
        assert report.context_switches == 27
        assert report.boosts == 3

    def test_to_dict_layout(self) -> None:
        """The dict form has rows and grouped averages."""
        data = _reference_report().to_dict()
        assert data["complete"] is True
        assert len(data["processes"]) == 5
        assert set(data["averages"]) == {"overall", "io_bound", "cpu_bound"}

    def test_collection_is_read_only(self) -> None:
        """Collecting metrics twice gives the same answer."""
        scheduler = MLFQScheduler(reference_workload())
        scheduler.run()
        assert scheduler.report() == scheduler.report()
