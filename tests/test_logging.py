"""Tests for the scheduler event log.

The logger records a structured trace of every scheduling decision.
"""

from py_mlfq.logging import EventKind, LogEntry, Logger, LogLevel

EVENT_TIME = 12


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_has_fields(self) -> None:
        """An entry stores time, kind, message, level and pid."""
        entry = LogEntry(time=EVENT_TIME, kind=EventKind.IO_YIELD, message="yield", pid=2)
        assert entry.time == EVENT_TIME
        assert entry.kind is EventKind.IO_YIELD
        assert entry.message == "yield"
        assert entry.level is LogLevel.INFO
        assert entry.pid == 2

    def test_entry_str(self) -> None:
        """Entries render as ``Time <t>: <message>``."""
        entry = LogEntry(time=EVENT_TIME, kind=EventKind.BOOST, message="Priority boost!")
        assert str(entry) == "Time 12: Priority boost!"

    def test_entry_to_dict(self) -> None:
        """The dict form uses plain strings for enums."""
        entry = LogEntry(time=0, kind=EventKind.IDLE, message="idle", level=LogLevel.WARNING)
        assert entry.to_dict() == {
            "time": 0,
            "kind": "idle",
            "message": "idle",
            "level": "WARNING",
            "pid": None,
        }


class TestLogger:
    """Verify appending, filtering and clearing."""

    def _logger(self) -> Logger:
        """Return a logger with a small mixed trace."""
        logger = Logger()
        logger.log(EventKind.ARRIVAL, "Process 1 arrives", time=0, pid=1)
        logger.log(EventKind.DISPATCH, "Running Process 1", time=0, level=LogLevel.DEBUG, pid=1)
        logger.log(EventKind.ARRIVAL, "Process 2 arrives", time=10, pid=2)
        logger.log(EventKind.ERROR, "stuck", time=10, level=LogLevel.ERROR)
        return logger

    def test_starts_empty(self) -> None:
        """A new logger has no entries."""
        assert Logger().entries == []

    def test_log_returns_entry(self) -> None:
        """log() returns the recorded entry."""
        logger = Logger()
        entry = logger.log(EventKind.COMPLETION, "done", time=EVENT_TIME, pid=3)
        assert logger.entries == [entry]
        assert len(logger) == 1

    def test_entries_is_a_copy(self) -> None:
        """Mutating the returned list does not change the log."""
        logger = self._logger()
        logger.entries.clear()
        assert len(logger) == 4

    def test_filter_by_kind(self) -> None:
        """Only entries of the requested kind are returned."""
        arrivals = self._logger().filter(kind=EventKind.ARRIVAL)
        assert [e.pid for e in arrivals] == [1, 2]

    def test_filter_by_pid(self) -> None:
        """Only entries about the requested process are returned."""
        assert len(self._logger().filter(pid=1)) == 2

    def test_filter_by_min_level(self) -> None:
        """Entries below the minimum level are dropped."""
        logger = self._logger()
        assert len(logger.filter(min_level=LogLevel.INFO)) == 3
        assert [e.message for e in logger.filter(min_level=LogLevel.ERROR)] == ["stuck"]

    def test_filter_combined(self) -> None:
        """Criteria combine with AND."""
        result = self._logger().filter(kind=EventKind.ARRIVAL, pid=2)
        assert [e.time for e in result] == [10]

    def test_clear(self) -> None:
        """clear() empties the log."""
        logger = self._logger()
        logger.clear()
        assert logger.entries == []
