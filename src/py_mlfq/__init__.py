"""py-mlfq — a Multi-Level Feedback Queue scheduler simulator.

Re-exports public symbols so callers can write::

    from py_mlfq import MLFQScheduler, ProcessSpec, SchedulerConfig
"""

from py_mlfq.boost import BoostController
from py_mlfq.config import ConfigError, SchedulerConfig, load_config
from py_mlfq.logging import EventKind, LogEntry, Logger, LogLevel
from py_mlfq.metrics import GroupAverages, ProcessMetrics, SimulationReport, collect_metrics
from py_mlfq.process import Process, ProcessSpec, ProcessState
from py_mlfq.queues import QueueBank, ReadyQueue
from py_mlfq.scheduler import MLFQScheduler, RunOutcome, RunStep, SchedulerConsistencyError
from py_mlfq.workloads import WorkloadError, load_workload, parse_workload, reference_workload

__all__ = [
    "BoostController",
    "ConfigError",
    "EventKind",
    "GroupAverages",
    "LogEntry",
    "LogLevel",
    "Logger",
    "MLFQScheduler",
    "Process",
    "ProcessMetrics",
    "ProcessSpec",
    "ProcessState",
    "QueueBank",
    "ReadyQueue",
    "RunOutcome",
    "RunStep",
    "SchedulerConfig",
    "SchedulerConsistencyError",
    "SimulationReport",
    "WorkloadError",
    "collect_metrics",
    "load_config",
    "load_workload",
    "parse_workload",
    "reference_workload",
]
