"""Scheduler event log — a structured trace of every scheduling decision.

The simulator records what happened at each virtual instant: arrivals,
dispatches, I/O yields and returns, demotions, boosts, idle gaps and
completions.  Read top to bottom, the trace is a textual Gantt chart;
``py_mlfq.report`` prints it and the web API serves it as JSON.

Entries carry a numeric ``LogLevel`` so callers can hide per-dispatch
DEBUG lines, and an ``EventKind`` tag so a trace can be narrowed to one
kind of decision (``logger.filter(kind=EventKind.BOOST)``).
"""

from dataclasses import dataclass
from enum import IntEnum, StrEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


class EventKind(StrEnum):
    """Kinds of scheduling events the simulator reports."""

    ARRIVAL = "arrival"
    DISPATCH = "dispatch"
    COMPLETION = "completion"
    IO_YIELD = "io_yield"
    IO_RETURN = "io_return"
    DEMOTION = "demotion"
    REQUEUE = "requeue"
    BOOST = "boost"
    IDLE = "idle"
    ERROR = "error"


@dataclass(frozen=True)
class LogEntry:
    """A single structured scheduling event.

    Attributes:
        time: Virtual time at which the event happened.
        kind: The kind of event.
        message: A human-readable description of what happened.
        level: The severity of this event.
        pid: The process involved, or None for system-wide events.

    """

    time: int
    kind: EventKind
    message: str
    level: LogLevel = LogLevel.INFO
    pid: int | None = None

    def __str__(self) -> str:
        """Format as ``Time <t>: <message>``."""
        return f"Time {self.time}: {self.message}"

    def to_dict(self) -> dict[str, object]:
        """Return the entry as a JSON-friendly dict."""
        return {
            "time": self.time,
            "kind": str(self.kind),
            "message": self.message,
            "level": self.level.name,
            "pid": self.pid,
        }


class Logger:
    """Append-only event buffer with filtering."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def __len__(self) -> int:
        """Return the number of recorded entries."""
        return len(self._entries)

    def log(
        self,
        kind: EventKind,
        message: str,
        *,
        time: int,
        level: LogLevel = LogLevel.INFO,
        pid: int | None = None,
    ) -> LogEntry:
        """Append a new entry to the log.

        Args:
            kind: What sort of event this is.
            message: Human-readable event description.
            time: Virtual time of the event.
            level: Severity of the event.
            pid: Process involved, if any.

        Returns:
            The recorded entry.

        """
        entry = LogEntry(time=time, kind=kind, message=message, level=level, pid=pid)
        self._entries.append(entry)
        return entry

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        kind: EventKind | None = None,
        pid: int | None = None,
    ) -> list[LogEntry]:
        """Return the entries that satisfy every criterion given.

        Args:
            min_level: Drop entries below this severity.
            kind: Keep only events of this kind.
            pid: Keep only events about this process.

        """
        return [
            entry
            for entry in self._entries
            if (min_level is None or entry.level >= min_level)
            and (kind is None or entry.kind == kind)
            and (pid is None or entry.pid == pid)
        ]

    def clear(self) -> None:
        """Forget every recorded entry."""
        self._entries.clear()
