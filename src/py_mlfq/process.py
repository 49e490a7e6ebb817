"""Process record and Process Control Block (PCB) for the MLFQ simulator.

Each simulated job is described up front by an immutable ``ProcessSpec``
(what the caller hands in) and tracked at run time by a mutable
``Process`` (what the scheduler owns while the job is alive).

The PCB keeps both the static facts about a job (arrival, burst, whether it
is I/O-bound) and the scheduling state the MLFQ rules need: the queue level,
how much of the current quantum has been used, and the timing fields that
become the final metrics.

Processes follow a strict state machine — each transition method
(admit, dispatch, preempt, block, wake, terminate) enforces that the
process is in the correct source state before moving it.

State machine::

    NEW → READY ⇄ RUNNING → TERMINATED
                    ↓  ↑
                  WAITING  (blocked for simulated I/O)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ProcessState(StrEnum):
    """Lifecycle states of a simulated process.

    - NEW: created, arrival time not reached yet.
    - READY: waiting in one of the priority queues.
    - RUNNING: currently executing a slice on the (single) CPU.
    - WAITING: blocked on simulated I/O, not in any queue.
    - TERMINATED: all CPU time delivered, metrics recorded.
    """

    NEW = "new"
    READY = "ready"
    RUNNING = "running"
    WAITING = "waiting"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class ProcessSpec:
    """The initial record a caller supplies for one job.

    Attributes:
        pid: Unique process identifier.
        arrival_time: Virtual time at which the job first becomes ready.
        burst_time: Total CPU time the job needs.
        io_bound: True if the job yields early to wait for I/O.
        name: Optional display label (defaults to ``P<pid>``).

    """

    pid: int
    arrival_time: int
    burst_time: int
    io_bound: bool = False
    name: str | None = None

    def __post_init__(self) -> None:
        """Reject records the simulator cannot schedule."""
        if self.pid < 0:
            msg = f"pid must be non-negative, got {self.pid}"
            raise ValueError(msg)
        if self.arrival_time < 0:
            msg = f"Process {self.pid}: arrival_time must be non-negative, got {self.arrival_time}"
            raise ValueError(msg)
        if self.burst_time <= 0:
            msg = f"Process {self.pid}: burst_time must be positive, got {self.burst_time}"
            raise ValueError(msg)

    @property
    def label(self) -> str:
        """Return the display name, falling back to ``P<pid>``."""
        return self.name if self.name is not None else f"P{self.pid}"

    @property
    def kind(self) -> str:
        """Return ``"I/O-bound"`` or ``"CPU-bound"``."""
        return "I/O-bound" if self.io_bound else "CPU-bound"


class Process:
    """A simulated process (the Process Control Block).

    State transitions are enforced: calling dispatch() on a NEW process
    raises RuntimeError, because admission must put it in a queue first.
    Timing results are written exactly once, when the last unit of CPU
    time is delivered.
    """

    def __init__(self, spec: ProcessSpec) -> None:
        """Create a process in the NEW state from its initial record.

        Args:
            spec: The caller-supplied description of the job.

        """
        self._spec = spec
        self._state: ProcessState = ProcessState.NEW
        self._remaining_time: int = spec.burst_time
        self._current_queue: int = 0
        self._time_in_current_quantum: int = 0
        self._ready_at: int | None = None
        self._first_run_time: int | None = None
        self._completion_time: int | None = None

    # -- Static facts ---------------------------------------------------------

    @property
    def spec(self) -> ProcessSpec:
        """Return the initial record this process was built from."""
        return self._spec

    @property
    def pid(self) -> int:
        """Return the unique process identifier."""
        return self._spec.pid

    @property
    def name(self) -> str:
        """Return the display name."""
        return self._spec.label

    @property
    def arrival_time(self) -> int:
        """Return the time of first arrival (never rewritten)."""
        return self._spec.arrival_time

    @property
    def burst_time(self) -> int:
        """Return the total CPU time required."""
        return self._spec.burst_time

    @property
    def io_bound(self) -> bool:
        """Return True for jobs that yield early to wait for I/O."""
        return self._spec.io_bound

    # -- Scheduling state -----------------------------------------------------

    @property
    def state(self) -> ProcessState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def remaining_time(self) -> int:
        """Return the CPU time still owed."""
        return self._remaining_time

    @property
    def cpu_time(self) -> int:
        """Return the CPU time delivered so far."""
        return self.burst_time - self._remaining_time

    @property
    def current_queue(self) -> int:
        """Return the priority level (0 = highest)."""
        return self._current_queue

    @current_queue.setter
    def current_queue(self, level: int) -> None:
        """Move the process to a new priority level."""
        if level < 0:
            msg = f"Queue level must be non-negative, got {level}"
            raise ValueError(msg)
        self._current_queue = level

    @property
    def time_in_current_quantum(self) -> int:
        """Return CPU time used since the process last entered its level."""
        return self._time_in_current_quantum

    def reset_quantum(self) -> None:
        """Start a fresh quantum (admission, demotion, boost, I/O yield)."""
        self._time_in_current_quantum = 0

    @property
    def ready_at(self) -> int | None:
        """Return when a blocked process returns from I/O, or None."""
        return self._ready_at

    @property
    def done(self) -> bool:
        """Return True once all CPU time has been delivered."""
        return self._remaining_time == 0

    # -- Timing results -------------------------------------------------------

    @property
    def first_run_time(self) -> int | None:
        """Return the time of the first dispatch, or None if never run."""
        return self._first_run_time

    @property
    def completion_time(self) -> int | None:
        """Return the completion time, or None while still alive."""
        return self._completion_time

    @property
    def turnaround_time(self) -> int | None:
        """Return completion minus arrival, or None while still alive."""
        if self._completion_time is None:
            return None
        return self._completion_time - self.arrival_time

    @property
    def waiting_time(self) -> int | None:
        """Return turnaround minus burst, or None while still alive."""
        turnaround = self.turnaround_time
        if turnaround is None:
            return None
        return turnaround - self.burst_time

    @property
    def response_time(self) -> int | None:
        """Return first run minus arrival, or None before the first dispatch."""
        if self._first_run_time is None:
            return None
        return self._first_run_time - self.arrival_time

    # -- CPU accounting -------------------------------------------------------

    def run_for(self, duration: int) -> None:
        """Account for *duration* units of CPU time in the current slice.

        Raises:
            RuntimeError: If the process is not running.
            ValueError: If *duration* is negative or exceeds the remaining time.

        """
        if self._state is not ProcessState.RUNNING:
            msg = f"Cannot run: process {self.pid} is {self._state}, expected running"
            raise RuntimeError(msg)
        if duration < 0 or duration > self._remaining_time:
            msg = (
                f"Process {self.pid}: slice of {duration} is outside "
                f"[0, {self._remaining_time}]"
            )
            raise ValueError(msg)
        self._remaining_time -= duration
        self._time_in_current_quantum += duration

    # -- State transitions ----------------------------------------------------

    def _transition(self, action: str, expected: ProcessState, target: ProcessState) -> None:
        """Enforce a state transition.

        Raises:
            RuntimeError: If the process is not in the expected state.

        """
        if self._state is not expected:
            msg = f"Cannot {action}: process {self.pid} is {self._state}, expected {expected}"
            raise RuntimeError(msg)
        self._state = target

    def admit(self) -> None:
        """Transition NEW → READY. New jobs start a fresh quantum."""
        self._transition("admit", ProcessState.NEW, ProcessState.READY)
        self._time_in_current_quantum = 0

    def dispatch(self, *, now: int) -> None:
        """Transition READY → RUNNING and record the first run time."""
        self._transition("dispatch", ProcessState.READY, ProcessState.RUNNING)
        if self._first_run_time is None:
            self._first_run_time = now

    def preempt(self) -> None:
        """Transition RUNNING → READY. The slice ended with work left."""
        self._transition("preempt", ProcessState.RUNNING, ProcessState.READY)

    def block(self, *, until: int) -> None:
        """Transition RUNNING → WAITING until simulated I/O completes at *until*."""
        self._transition("block", ProcessState.RUNNING, ProcessState.WAITING)
        self._ready_at = until
        self._time_in_current_quantum = 0

    def wake(self) -> None:
        """Transition WAITING → READY. The simulated I/O completed."""
        self._transition("wake", ProcessState.WAITING, ProcessState.READY)
        self._ready_at = None

    def terminate(self, *, now: int) -> None:
        """Transition RUNNING → TERMINATED and record the completion time.

        Raises:
            RuntimeError: If CPU time is still owed.

        """
        if self._remaining_time != 0:
            msg = f"Cannot terminate: process {self.pid} still needs {self._remaining_time}"
            raise RuntimeError(msg)
        self._transition("terminate", ProcessState.RUNNING, ProcessState.TERMINATED)
        self._completion_time = now

    def __repr__(self) -> str:
        """Return a debug-friendly representation."""
        return (
            f"Process(pid={self.pid}, name={self.name!r}, state={self._state}, "
            f"queue={self._current_queue}, remaining={self._remaining_time})"
        )
