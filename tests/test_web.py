"""Tests for the JSON web API.

The web API exposes the simulator over HTTP.  Tests use
``pytest.importorskip`` so they are skipped gracefully when Flask is
not installed.
"""

from __future__ import annotations

from typing import Any

import pytest

flask = pytest.importorskip("flask")

from py_mlfq.config import SchedulerConfig  # noqa: E402
from py_mlfq.web.app import create_app  # noqa: E402

HTTP_OK = 200
HTTP_BAD_REQUEST = 400


def _create_client(config: SchedulerConfig | None = None) -> Any:
    """Create a test client from a fresh app."""
    app = create_app(config)
    app.config["TESTING"] = True
    return app.test_client()


class TestAppCreation:
    """Verify the app factory."""

    def test_create_app_returns_flask(self) -> None:
        """create_app should return a Flask application."""
        assert isinstance(create_app(), flask.Flask)


class TestConfigEndpoint:
    """Verify GET /api/config."""

    def test_default_config(self) -> None:
        """The default quanta are reported."""
        response = _create_client().get("/api/config")
        assert response.status_code == HTTP_OK
        data = response.get_json()
        assert data["quanta"] == [10, 20, 40]
        assert data["boost_interval"] == 50

    def test_custom_default_config(self) -> None:
        """The factory's configuration is the one served."""
        response = _create_client(SchedulerConfig(num_queues=2)).get("/api/config")
        assert response.get_json()["quanta"] == [10, 20]


class TestReferenceEndpoint:
    """Verify GET /api/reference."""

    def test_reference_run(self) -> None:
        """The reference workload completes at t=205."""
        response = _create_client().get("/api/reference")
        assert response.status_code == HTTP_OK
        data = response.get_json()
        assert data["report"]["complete"] is True
        assert data["report"]["end_time"] == 205
        assert len(data["timeline"]) == 27
        assert data["events"][0]["kind"] == "arrival"


class TestSimulateEndpoint:
    """Verify POST /api/simulate."""

    def test_simulate_workload(self) -> None:
        """A posted workload is simulated and reported."""
        body = {"processes": [{"pid": 1, "arrival_time": 0, "burst_time": 25}]}
        response = _create_client().post("/api/simulate", json=body)
        assert response.status_code == HTTP_OK
        data = response.get_json()
        row = data["report"]["processes"][0]
        assert row["completion_time"] == 25
        assert [step["level"] for step in data["timeline"]] == [0, 1]

    def test_simulate_with_config(self) -> None:
        """A posted config overrides the default."""
        body = {
            "processes": [{"pid": 1, "arrival_time": 0, "burst_time": 25}],
            "config": {"base_quantum": 25},
        }
        data = _create_client().post("/api/simulate", json=body).get_json()
        assert data["config"]["quanta"][0] == 25
        assert len(data["timeline"]) == 1

    def test_missing_processes(self) -> None:
        """A body without processes is a bad request."""
        response = _create_client().post("/api/simulate", json={"config": {}})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "processes" in response.get_json()["error"]

    def test_not_json(self) -> None:
        """A non-JSON body is a bad request."""
        response = _create_client().post("/api/simulate", data="hello")
        assert response.status_code == HTTP_BAD_REQUEST

    def test_invalid_process(self) -> None:
        """An invalid process record is a bad request."""
        body = {"processes": [{"pid": 1, "arrival_time": 0, "burst_time": 0}]}
        response = _create_client().post("/api/simulate", json=body)
        assert response.status_code == HTTP_BAD_REQUEST
        assert "burst_time" in response.get_json()["error"]

    def test_invalid_config(self) -> None:
        """An invalid configuration is a bad request."""
        body = {
            "processes": [{"pid": 1, "arrival_time": 0, "burst_time": 5}],
            "config": {"num_queues": 0},
        }
        response = _create_client().post("/api/simulate", json=body)
        assert response.status_code == HTTP_BAD_REQUEST

    def test_config_must_be_object(self) -> None:
        """A non-object config is a bad request."""
        body = {
            "processes": [{"pid": 1, "arrival_time": 0, "burst_time": 5}],
            "config": [1],
        }
        response = _create_client().post("/api/simulate", json=body)
        assert response.status_code == HTTP_BAD_REQUEST
