"""Scheduler configuration — queue levels, quanta, boost and I/O timing.

The classic MLFQ has a handful of knobs, all fixed for one run:

- **num_queues** — how many priority levels exist (0 = highest).
- **base_quantum** — the time slice of level 0.  Each level below doubles
  it: ``base_quantum * 2**level`` (10, 20, 40, ... by default).
- **boost_interval** — every S time units all waiting jobs are moved back
  to the top queue so CPU-bound work cannot starve forever.
- **io_duration** — how long a job that yielded for I/O stays blocked.
- **io_slice_divisor** — I/O-bound jobs use ``quantum // divisor`` of
  their slice before yielding (a fifth by default).

A configuration is validated when it is built, so a bad value is
rejected before any simulation state exists.  ``load_config`` reads the
same keys from a JSON file.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_NUM_QUEUES = 3
DEFAULT_BASE_QUANTUM = 10
DEFAULT_BOOST_INTERVAL = 50
DEFAULT_IO_DURATION = 10
DEFAULT_IO_SLICE_DIVISOR = 5


class ConfigError(ValueError):
    """Raised when a scheduler configuration cannot be used.

    Examples: zero queues, a non-positive quantum, an unreadable file.
    """


@dataclass(frozen=True)
class SchedulerConfig:
    """Immutable MLFQ tuning parameters.

    Attributes:
        num_queues: Number of priority levels.
        base_quantum: Time quantum of the top level.
        boost_interval: Time between priority boosts.
        io_duration: Time a process stays blocked after an I/O yield.
        io_slice_divisor: Fraction of the quantum an I/O-bound job uses.

    """

    num_queues: int = DEFAULT_NUM_QUEUES
    base_quantum: int = DEFAULT_BASE_QUANTUM
    boost_interval: int = DEFAULT_BOOST_INTERVAL
    io_duration: int = DEFAULT_IO_DURATION
    io_slice_divisor: int = DEFAULT_IO_SLICE_DIVISOR

    def __post_init__(self) -> None:
        """Validate every field.

        Raises:
            ConfigError: If any value would make the simulation meaningless
                or unable to make progress.

        """
        if self.num_queues < 1:
            msg = f"num_queues must be at least 1, got {self.num_queues}"
            raise ConfigError(msg)
        if self.base_quantum < 1:
            msg = f"base_quantum must be positive, got {self.base_quantum}"
            raise ConfigError(msg)
        if self.boost_interval < 1:
            msg = f"boost_interval must be positive, got {self.boost_interval}"
            raise ConfigError(msg)
        if self.io_duration < 0:
            msg = f"io_duration must be non-negative, got {self.io_duration}"
            raise ConfigError(msg)
        if self.io_slice_divisor < 1:
            msg = f"io_slice_divisor must be positive, got {self.io_slice_divisor}"
            raise ConfigError(msg)
        # An I/O slice of zero would never advance the clock.
        if self.base_quantum < self.io_slice_divisor:
            msg = (
                f"base_quantum ({self.base_quantum}) must be at least "
                f"io_slice_divisor ({self.io_slice_divisor})"
            )
            raise ConfigError(msg)

    @property
    def quanta(self) -> tuple[int, ...]:
        """Return the time quantum of every level, top first."""
        return tuple(self.quantum_for(level) for level in range(self.num_queues))

    @property
    def lowest_level(self) -> int:
        """Return the index of the lowest-priority queue."""
        return self.num_queues - 1

    def quantum_for(self, level: int) -> int:
        """Return the time quantum for *level*.

        Raises:
            ValueError: If *level* is outside ``[0, num_queues)``.

        """
        if not 0 <= level < self.num_queues:
            msg = f"Queue level {level} out of range [0, {self.num_queues})"
            raise ValueError(msg)
        return self.base_quantum * (2**level)

    def io_slice(self, level: int) -> int:
        """Return how long an I/O-bound job runs at *level* before yielding."""
        return self.quantum_for(level) // self.io_slice_divisor

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as a plain dict (with derived quanta)."""
        data: dict[str, Any] = asdict(self)
        data["quanta"] = list(self.quanta)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SchedulerConfig:
        """Build a configuration from a mapping, using defaults for missing keys.

        Raises:
            ConfigError: On unknown keys, non-integer values or invalid values.

        """
        known = {
            "num_queues",
            "base_quantum",
            "boost_interval",
            "io_duration",
            "io_slice_divisor",
        }
        unknown = sorted(set(data) - known - {"quanta"})
        if unknown:
            msg = f"Unknown configuration keys: {', '.join(unknown)}"
            raise ConfigError(msg)
        values: dict[str, int] = {}
        for key in known & set(data):
            value = data[key]
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{key} must be an integer, got {value!r}"
                raise ConfigError(msg)
            values[key] = value
        return cls(**values)


def load_config(path: Path) -> SchedulerConfig:
    """Load a scheduler configuration from a JSON file.

    Raises:
        ConfigError: If the file cannot be read or parsed, or holds
            invalid values.

    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        msg = f"Cannot load configuration: {e}"
        raise ConfigError(msg) from e
    if not isinstance(data, dict):
        msg = "Configuration file must contain a JSON object"
        raise ConfigError(msg)
    return SchedulerConfig.from_dict(data)
