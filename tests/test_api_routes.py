"""Tests for how routes are dispatched."""

import inspect

import pytest
from fastapi.routing import APIRoute

from main import app

AWAITING_ROUTES = {
    ("POST", "/api/interview/start"),
    ("POST", "/api/interview/{interview_id}/answer"),
    ("POST", "/api/report/generate/{interview_id}"),
}


def api_routes():
    for route in app.routes:
        if isinstance(route, APIRoute) and route.path.startswith(
            ("/api/auth", "/api/interview", "/api/report", "/api/proctor")
        ):
            for method in route.methods:
                yield method, route.path, route.endpoint


@pytest.mark.parametrize("method, path, endpoint", list(api_routes()))
def test_blocking_routes_run_in_threadpool(method, path, endpoint):
    # Routes that await the generation API stay async; the rest use the
    # blocking session and bcrypt, so they must be plain functions.
    assert inspect.iscoroutinefunction(endpoint) == ((method, path) in AWAITING_ROUTES)


def test_every_awaiting_route_exists():
    assert AWAITING_ROUTES <= {(method, path) for method, path, _ in api_routes()}
