"""Console entry point — run a workload and print the trace and results.

The CLI is the thin I/O wrapper around the simulator: it parses
arguments, loads the workload and configuration, runs the scheduler and
prints what the pure helpers in ``py_mlfq.report`` render.

Usage::

    py-mlfq                         # reference workload, default config
    py-mlfq jobs.json               # custom workload
    py-mlfq jobs.json --config cfg.json --quiet
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from py_mlfq.config import ConfigError, SchedulerConfig, load_config
from py_mlfq.report import format_banner, format_config, format_event_log, format_report
from py_mlfq.scheduler import MLFQScheduler, SchedulerConsistencyError
from py_mlfq.workloads import WorkloadError, load_workload, reference_workload

if TYPE_CHECKING:
    from collections.abc import Sequence

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for ``py-mlfq``."""
    parser = argparse.ArgumentParser(
        prog="py-mlfq",
        description="Simulate a Multi-Level Feedback Queue CPU scheduler.",
    )
    parser.add_argument(
        "workload",
        nargs="?",
        type=Path,
        default=None,
        help="JSON workload file (defaults to the built-in reference workload)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="JSON scheduler configuration file",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="print only the results, not the event trace",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulator from the command line.

    Returns:
        The process exit status.

    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config is not None else SchedulerConfig()
        specs = load_workload(args.workload) if args.workload is not None else reference_workload()
    except (ConfigError, WorkloadError) as e:
        print(f"py-mlfq: error: {e}", file=sys.stderr)  # noqa: T201
        return EXIT_FAILURE

    scheduler = MLFQScheduler(specs, config=config)
    if not args.quiet:
        print(format_banner())  # noqa: T201
        print(format_config(config))  # noqa: T201
        print("\nMLFQ Simulation Start\n=====================\n")  # noqa: T201

    try:
        report = scheduler.run()
    except SchedulerConsistencyError as e:
        if not args.quiet:
            print(format_event_log(scheduler.logger.entries))  # noqa: T201
        print(f"py-mlfq: error at time {e.current_time}: {e}", file=sys.stderr)  # noqa: T201
        print("\n" + format_report(e.report))  # noqa: T201
        return EXIT_FAILURE

    if not args.quiet:
        print(format_event_log(scheduler.logger.entries))  # noqa: T201
        print()  # noqa: T201
    print(format_report(report))  # noqa: T201
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
