"""MLFQ scheduler — a deterministic, virtual-time simulation loop.

The Multi-Level Feedback Queue learns what kind of job it is running by
watching how the job uses the CPU.  The rules implemented here:

1. If Priority(A) > Priority(B), A runs (B doesn't).
2. If Priority(A) = Priority(B), A and B run in round robin.
3. A new job starts at the highest priority (level 0).
4a. A job that uses up its whole quantum moves down one level.
4b. A job that gives up the CPU before its quantum ends (I/O) keeps
    its level.
5. After some period S, every waiting job moves back to level 0.

Each simulation step performs, in this fixed order:

    admit arrivals → boost if due → dispatch → run one slice → reclassify

and fast-forwards the clock to the next arrival when nothing is ready.
Only one process is ever RUNNING and all queue mutation happens between
slices, so a given workload always produces the same trace.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from py_mlfq.boost import BoostController
from py_mlfq.config import SchedulerConfig
from py_mlfq.logging import EventKind, Logger, LogLevel
from py_mlfq.metrics import SimulationReport, collect_metrics
from py_mlfq.process import Process, ProcessState
from py_mlfq.queues import QueueBank

if TYPE_CHECKING:
    from collections.abc import Iterable

    from py_mlfq.process import ProcessSpec


class RunOutcome(StrEnum):
    """How a run slice ended, checked in this order of precedence."""

    COMPLETED = "completed"
    IO_YIELD = "io_yield"
    DEMOTED = "demoted"
    REQUEUED = "requeued"


@dataclass(frozen=True)
class RunStep:
    """One executed slice — a bar on the Gantt chart.

    Attributes:
        pid: The process that ran.
        start: Virtual time the slice began.
        duration: Length of the slice.
        level: Queue level the process ran at.
        quantum: Time quantum of that level.
        outcome: What happened to the process afterwards.

    """

    pid: int
    start: int
    duration: int
    level: int
    quantum: int
    outcome: RunOutcome

    @property
    def end(self) -> int:
        """Return the virtual time the slice finished."""
        return self.start + self.duration


class SchedulerConsistencyError(RuntimeError):
    """Raised when the CPU is idle but nothing can ever become ready.

    No process is queued, none is blocked for I/O, no arrival lies in the
    future, yet some processes are incomplete.  The run stops instead of
    looping forever; ``report`` keeps everything processed so far.
    """

    def __init__(self, message: str, *, current_time: int, report: SimulationReport) -> None:
        """Create the error with the clock value and a partial report."""
        super().__init__(message)
        self.current_time = current_time
        self.report = report


class MLFQScheduler:
    """Simulate an MLFQ scheduler over a fixed set of processes.

    Usage::

        scheduler = MLFQScheduler(reference_workload())
        report = scheduler.run()
        for entry in scheduler.logger.entries:
            print(entry)

    """

    def __init__(
        self,
        processes: Iterable[ProcessSpec],
        *,
        config: SchedulerConfig | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a scheduler for the given workload.

        Args:
            processes: Initial records, in tie-break order for arrivals.
            config: Queue and timing parameters (defaults if None).
            logger: Event log to append to (a fresh one if None).

        Raises:
            ValueError: If the workload is empty or PIDs are not unique.

        """
        specs = list(processes)
        if not specs:
            msg = "Cannot simulate an empty workload"
            raise ValueError(msg)
        seen: set[int] = set()
        for spec in specs:
            if spec.pid in seen:
                msg = f"Duplicate pid {spec.pid} in workload"
                raise ValueError(msg)
            seen.add(spec.pid)

        self._config = config if config is not None else SchedulerConfig()
        self._logger = logger if logger is not None else Logger()
        self._processes: list[Process] = [Process(spec) for spec in specs]
        self._queues = QueueBank(self._config)
        self._boost = BoostController(interval=self._config.boost_interval)
        self._current_time: int = 0
        self._completed: int = 0
        self._context_switches: int = 0
        self._timeline: list[RunStep] = []

    # -- Read-only views ------------------------------------------------------

    @property
    def config(self) -> SchedulerConfig:
        """Return the configuration in force."""
        return self._config

    @property
    def logger(self) -> Logger:
        """Return the event log."""
        return self._logger

    @property
    def queues(self) -> QueueBank:
        """Return the priority queue bank."""
        return self._queues

    @property
    def processes(self) -> list[Process]:
        """Return every PCB in workload order."""
        return list(self._processes)

    def process(self, pid: int) -> Process:
        """Return the PCB for *pid*.

        Raises:
            KeyError: If no process has that PID.

        """
        for proc in self._processes:
            if proc.pid == pid:
                return proc
        msg = f"No process with pid {pid}"
        raise KeyError(msg)

    @property
    def current_time(self) -> int:
        """Return the virtual clock."""
        return self._current_time

    @property
    def last_boost_time(self) -> int:
        """Return when the last priority boost fired (0 before the first)."""
        return self._boost.last_boost_time

    @property
    def boosts(self) -> int:
        """Return how many priority boosts have fired."""
        return self._boost.boosts

    @property
    def context_switches(self) -> int:
        """Return the number of dispatches performed."""
        return self._context_switches

    @property
    def timeline(self) -> list[RunStep]:
        """Return every executed slice in order."""
        return list(self._timeline)

    @property
    def completed_count(self) -> int:
        """Return how many processes have finished."""
        return self._completed

    @property
    def done(self) -> bool:
        """Return True once every process has finished."""
        return self._completed == len(self._processes)

    # -- Admission ------------------------------------------------------------

    def admit_arrivals(self) -> list[Process]:
        """Queue every process that has arrived or returned from I/O.

        New arrivals enter level 0 with a fresh quantum.  A process whose
        simulated I/O has finished re-enters at the level it kept when it
        yielded.  Processes are scanned in workload order.

        Returns:
            The processes queued during this call.

        """
        now = self._current_time
        admitted: list[Process] = []
        for proc in self._processes:
            if proc.state is ProcessState.NEW and proc.arrival_time <= now:
                proc.admit()
                self._queues.enqueue(proc, 0)
                self._logger.log(
                    EventKind.ARRIVAL,
                    f"Process {proc.pid} arrives (burst={proc.burst_time}, "
                    f"type={proc.spec.kind})",
                    time=now,
                    pid=proc.pid,
                )
                admitted.append(proc)
            elif (
                proc.state is ProcessState.WAITING
                and proc.ready_at is not None
                and proc.ready_at <= now
            ):
                level = proc.current_queue
                proc.wake()
                self._queues.enqueue(proc, level)
                self._logger.log(
                    EventKind.IO_RETURN,
                    f"Process {proc.pid} returns from I/O (priority={level})",
                    time=now,
                    pid=proc.pid,
                )
                admitted.append(proc)
        return admitted

    # -- Priority boost -------------------------------------------------------

    def apply_boost(self) -> list[Process]:
        """Move every waiting process to level 0 if a boost is due.

        Returns:
            The processes moved up (empty if the boost did not fire or
            nothing was waiting below level 0).

        """
        moved = self._boost.apply(self._current_time, self._queues)
        if moved is None:
            return []
        self._logger.log(
            EventKind.BOOST,
            f"Priority boost! ({len(moved)} process(es) moved to priority=0)",
            time=self._current_time,
        )
        return moved

    # -- Dispatcher -----------------------------------------------------------

    def dispatch(self) -> Process | None:
        """Take the head of the highest non-empty level and give it the CPU.

        Returns:
            The running process, or None if every queue is empty.

        """
        proc = self._queues.dequeue()
        if proc is None:
            return None
        proc.dispatch(now=self._current_time)
        self._context_switches += 1
        self._logger.log(
            EventKind.DISPATCH,
            f"Running Process {proc.pid} (priority={proc.current_queue}, "
            f"remaining={proc.remaining_time}, "
            f"quantum={self._queues.time_quantum(proc.current_queue)})",
            time=self._current_time,
            level=LogLevel.DEBUG,
            pid=proc.pid,
        )
        return proc

    # -- Run-step executor ----------------------------------------------------

    def slice_for(self, process: Process) -> int:
        """Return how long *process* runs if dispatched now.

        I/O-bound jobs run a fraction of their quantum before yielding;
        CPU-bound jobs run until they finish or the quantum is used up.
        """
        level = process.current_queue
        if process.io_bound:
            return min(self._config.io_slice(level), process.remaining_time)
        quantum = self._queues.time_quantum(level)
        return min(process.remaining_time, quantum - process.time_in_current_quantum)

    def execute(self, process: Process) -> RunStep:
        """Run the dispatched *process* for one slice and reclassify it.

        Raises:
            RuntimeError: If the process is not running.

        """
        if process.state is not ProcessState.RUNNING:
            msg = f"Cannot execute: process {process.pid} is {process.state}, expected running"
            raise RuntimeError(msg)

        level = process.current_queue
        quantum = self._queues.time_quantum(level)
        duration = self.slice_for(process)
        start = self._current_time

        process.run_for(duration)
        self._current_time += duration
        now = self._current_time

        if process.done:
            process.terminate(now=now)
            self._completed += 1
            outcome = RunOutcome.COMPLETED
            self._logger.log(
                EventKind.COMPLETION,
                f"Process {process.pid} completed",
                time=now,
                pid=process.pid,
            )
        elif process.io_bound and duration < quantum:
            process.block(until=now + self._config.io_duration)
            outcome = RunOutcome.IO_YIELD
            self._logger.log(
                EventKind.IO_YIELD,
                f"Process {process.pid} yields for I/O (keeps priority={level})",
                time=now,
                pid=process.pid,
            )
        elif process.time_in_current_quantum >= quantum:
            next_level = min(level + 1, self._config.lowest_level)
            process.reset_quantum()
            process.preempt()
            self._queues.enqueue(process, next_level)
            outcome = RunOutcome.DEMOTED
            self._logger.log(
                EventKind.DEMOTION,
                f"Process {process.pid} used full quantum, demoted to priority={next_level}",
                time=now,
                pid=process.pid,
            )
        else:
            process.preempt()
            self._queues.enqueue(process, level)
            outcome = RunOutcome.REQUEUED
            self._logger.log(
                EventKind.REQUEUE,
                f"Process {process.pid} returned to queue (priority={level})",
                time=now,
                level=LogLevel.DEBUG,
                pid=process.pid,
            )

        step = RunStep(
            pid=process.pid,
            start=start,
            duration=duration,
            level=level,
            quantum=quantum,
            outcome=outcome,
        )
        self._timeline.append(step)
        return step

    # -- Idle handling --------------------------------------------------------

    def next_event_time(self) -> int | None:
        """Return the earliest pending arrival or I/O return, or None."""
        upcoming = [p.arrival_time for p in self._processes if p.state is ProcessState.NEW]
        upcoming += [
            p.ready_at
            for p in self._processes
            if p.state is ProcessState.WAITING and p.ready_at is not None
        ]
        return min(upcoming) if upcoming else None

    def fast_forward(self) -> int:
        """Advance the idle clock to the next arrival or I/O return.

        Returns:
            The new clock value.

        Raises:
            SchedulerConsistencyError: If processes remain incomplete but
                nothing can ever become ready.

        """
        target = self.next_event_time()
        if target is None:
            pending = len(self._processes) - self._completed
            msg = f"No process to run but {pending} process(es) not completed"
            self._logger.log(
                EventKind.ERROR,
                msg,
                time=self._current_time,
                level=LogLevel.ERROR,
            )
            raise SchedulerConsistencyError(
                msg, current_time=self._current_time, report=self.report()
            )
        self._logger.log(
            EventKind.IDLE,
            f"CPU idle until time {max(target, self._current_time)}",
            time=self._current_time,
        )
        self._current_time = max(target, self._current_time)
        return self._current_time

    # -- Simulation loop ------------------------------------------------------

    def step(self) -> bool:
        """Perform one simulation step.

        Returns:
            True while processes remain to be simulated.

        """
        if self.done:
            return False
        self.admit_arrivals()
        self.apply_boost()
        process = self.dispatch()
        if process is None:
            self.fast_forward()
        else:
            self.execute(process)
        return not self.done

    def run(self) -> SimulationReport:
        """Run until every process has completed.

        Returns:
            The metrics report for the finished run.

        Raises:
            SchedulerConsistencyError: On the fatal idle condition.

        """
        while self.step():
            pass
        return self.report()

    def report(self) -> SimulationReport:
        """Summarize the processes as they stand now."""
        return collect_metrics(
            self._processes,
            end_time=self._current_time,
            context_switches=self._context_switches,
            boosts=self._boost.boosts,
        )
