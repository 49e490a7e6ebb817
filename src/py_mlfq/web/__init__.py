"""JSON web API for the MLFQ simulator.

This package provides a Flask application that runs simulations over
HTTP.  It is an **optional** extra — install with::

    pip install py-mlfq[web]

The ``create_app`` factory in ``app.py`` serves three endpoints:

- ``GET /api/config`` — the default scheduler configuration.
- ``GET /api/reference`` — run the reference workload.
- ``POST /api/simulate`` — run a caller-supplied workload.
"""
