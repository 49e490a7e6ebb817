"""Flask application factory for the MLFQ web API.

The ``create_app`` function returns a Flask app with three endpoints:

- ``GET /api/config`` — return the default configuration and quanta.
- ``GET /api/reference`` — simulate the reference workload.
- ``POST /api/simulate`` — simulate the workload in the JSON body.

Each run builds a fresh scheduler, so requests never share state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import Flask, Response, jsonify, request

from py_mlfq.config import ConfigError, SchedulerConfig
from py_mlfq.scheduler import MLFQScheduler, SchedulerConsistencyError
from py_mlfq.workloads import WorkloadError, parse_workload, reference_workload

if TYPE_CHECKING:
    from py_mlfq.process import ProcessSpec

_HTTP_BAD_REQUEST = 400
_HTTP_UNPROCESSABLE = 422


def _simulate(
    specs: list[ProcessSpec], config: SchedulerConfig
) -> tuple[Response, int] | Response:
    """Run one simulation and return its JSON response."""
    scheduler = MLFQScheduler(specs, config=config)
    try:
        report = scheduler.run()
    except SchedulerConsistencyError as e:
        body: dict[str, Any] = {
            "error": str(e),
            "current_time": e.current_time,
            "report": e.report.to_dict(),
            "events": [entry.to_dict() for entry in scheduler.logger.entries],
        }
        return jsonify(body), _HTTP_UNPROCESSABLE
    return jsonify(
        {
            "config": config.to_dict(),
            "report": report.to_dict(),
            "events": [entry.to_dict() for entry in scheduler.logger.entries],
            "timeline": [
                {
                    "pid": step.pid,
                    "start": step.start,
                    "duration": step.duration,
                    "level": step.level,
                    "outcome": str(step.outcome),
                }
                for step in scheduler.timeline
            ],
        }
    )


def create_app(config: SchedulerConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Default scheduler configuration for requests that do
            not supply their own.

    Returns:
        A configured Flask application ready to serve.

    """
    default_config = config if config is not None else SchedulerConfig()
    app = Flask(__name__)

    @app.route("/api/config")
    def show_config() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the default configuration."""
        return jsonify(default_config.to_dict())

    @app.route("/api/reference")
    def reference() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Simulate the reference workload with the default configuration."""
        return _simulate(reference_workload(), default_config)

    @app.route("/api/simulate", methods=["POST"])
    def simulate() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Simulate a caller-supplied workload.

        Expects JSON body: ``{"processes": [...], "config": {...}}``
        where ``config`` is optional.

        Returns:
            JSON with ``config``, ``report``, ``events`` and ``timeline``.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or "processes" not in data:
            return jsonify({"error": "Missing 'processes' field"}), _HTTP_BAD_REQUEST

        body: dict[str, Any] = data  # pyright: ignore[reportUnknownVariableType]
        try:
            specs = parse_workload(body["processes"])
            overrides = body.get("config")
            if overrides is None:
                run_config = default_config
            elif isinstance(overrides, dict):
                run_config = SchedulerConfig.from_dict(overrides)  # pyright: ignore[reportUnknownArgumentType]
            else:
                msg = "'config' must be an object"
                raise ConfigError(msg)
        except (WorkloadError, ConfigError) as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST

        return _simulate(specs, run_config)

    return app


def main() -> None:
    """Run the web API development server.

    This is the ``py-mlfq-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
