"""Priority queue bank — one FIFO ready queue per MLFQ level.

Level 0 is the highest priority and has the shortest quantum; every level
below doubles it.  Within a level, processes are served in the order they
were enqueued (round robin).

The bank owns every READY process.  A process lives in at most one queue
at a time: it is removed when dispatched and re-inserted when its slice
ends, never copied.  Enqueueing a process that is already queued is a
programming error and raises RuntimeError.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from py_mlfq.config import SchedulerConfig
    from py_mlfq.process import Process


class ReadyQueue:
    """A single priority level: a FIFO of processes plus its time quantum."""

    def __init__(self, *, level: int, time_quantum: int) -> None:
        """Create an empty queue for *level* with the given quantum."""
        self._level = level
        self._time_quantum = time_quantum
        self._processes: deque[Process] = deque()

    @property
    def level(self) -> int:
        """Return the priority level (0 = highest)."""
        return self._level

    @property
    def time_quantum(self) -> int:
        """Return the time quantum for this level."""
        return self._time_quantum

    def __len__(self) -> int:
        """Return the number of waiting processes."""
        return len(self._processes)

    def __iter__(self) -> Iterator[Process]:
        """Iterate over waiting processes, head first."""
        return iter(tuple(self._processes))

    def append(self, process: Process) -> None:
        """Add *process* to the tail of the queue."""
        self._processes.append(process)

    def popleft(self) -> Process | None:
        """Remove and return the head of the queue, or None if empty."""
        if not self._processes:
            return None
        return self._processes.popleft()

    def drain(self) -> list[Process]:
        """Remove and return every waiting process, head first."""
        drained = list(self._processes)
        self._processes.clear()
        return drained

    @property
    def pids(self) -> list[int]:
        """Return the PIDs in queue order."""
        return [p.pid for p in self._processes]

    def __repr__(self) -> str:
        """Return a debug-friendly representation."""
        return f"ReadyQueue(level={self._level}, quantum={self._time_quantum}, pids={self.pids})"


class QueueBank:
    """The full set of MLFQ ready queues, indexed by priority level."""

    def __init__(self, config: SchedulerConfig) -> None:
        """Create one empty queue per level with quanta from *config*."""
        self._queues: list[ReadyQueue] = [
            ReadyQueue(level=level, time_quantum=quantum)
            for level, quantum in enumerate(config.quanta)
        ]
        self._members: set[int] = set()

    @property
    def num_queues(self) -> int:
        """Return the number of levels."""
        return len(self._queues)

    def level(self, level: int) -> ReadyQueue:
        """Return the queue for *level*."""
        return self._queues[level]

    def time_quantum(self, level: int) -> int:
        """Return the time quantum for *level*."""
        return self._queues[level].time_quantum

    def __len__(self) -> int:
        """Return the total number of queued processes across all levels."""
        return len(self._members)

    def __contains__(self, process: object) -> bool:
        """Return True if *process* is waiting in any queue."""
        pid = getattr(process, "pid", None)
        return pid in self._members

    @property
    def is_empty(self) -> bool:
        """Return True when no process is waiting at any level."""
        return not self._members

    def enqueue(self, process: Process, level: int) -> None:
        """Place *process* at the tail of *level* and record its new level.

        Raises:
            RuntimeError: If the process is already in a queue.
            IndexError: If *level* does not exist.

        """
        if process.pid in self._members:
            msg = f"Cannot enqueue process {process.pid}: already queued"
            raise RuntimeError(msg)
        queue = self._queues[level]
        process.current_queue = level
        queue.append(process)
        self._members.add(process.pid)

    def dequeue(self) -> Process | None:
        """Remove and return the head of the highest non-empty level.

        Returns:
            The next process to run, or None if every queue is empty.

        """
        for queue in self._queues:
            process = queue.popleft()
            if process is not None:
                self._members.discard(process.pid)
                return process
        return None

    def move_all_to_top(self) -> list[Process]:
        """Move every process below level 0 to the tail of level 0.

        Levels are drained top to bottom and FIFO order is kept within
        each level.  Moved processes start a fresh quantum.

        Returns:
            The processes that were moved, in their new queue order.

        """
        top = self._queues[0]
        moved: list[Process] = []
        for queue in self._queues[1:]:
            for process in queue.drain():
                process.current_queue = 0
                process.reset_quantum()
                top.append(process)
                moved.append(process)
        return moved

    def snapshot(self) -> dict[int, list[int]]:
        """Return a level → PIDs mapping of the current queue contents."""
        return {queue.level: queue.pids for queue in self._queues}

    def __iter__(self) -> Iterator[ReadyQueue]:
        """Iterate over the levels, highest priority first."""
        return iter(self._queues)
