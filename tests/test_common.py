import pytest

from upcraft.components.common import (
    Remote,
    ViewState,
    bar,
    clamp_level,
    fmt_minutes,
    run_query,
)
from upcraft.exceptions import NotFoundError
from upcraft.query_cache import QueryCache


def test_remote_states():
    assert Remote(loading=True).state == ViewState.LOADING
    assert Remote(error=NotFoundError("gone", 404)).state == ViewState.ERROR
    assert Remote(data=[]).state == ViewState.EMPTY
    assert Remote(data=None).state == ViewState.EMPTY
    assert Remote(data=[1]).ready


def test_run_query_captures_api_errors():
    cache = QueryCache(ttl=60)

    def missing():
        raise NotFoundError("Role not found", 404)

    remote = run_query(cache, "/api/interview/roles/9", missing)
    assert remote.state == ViewState.ERROR
    assert remote.error.message == "Role not found"

    assert run_query(cache, "/api/skills", lambda: ["x"]).data == ["x"]


@pytest.mark.parametrize("value,expected", [(55.4, 55), (130, 100), (-3, 0), (None, 0), ("70", 70)])
def test_clamp_level(value, expected):
    assert clamp_level(value) == expected


def test_bar_and_minutes():
    assert bar(50, width=4) == "██░░"
    assert fmt_minutes(45) == "45 min"
    assert fmt_minutes(90) == "1h 30m"
    assert fmt_minutes(120) == "2h"
    assert fmt_minutes(None) == "—"


def test_run_query_captures_malformed_responses(api, backend):
    backend.add("GET", "/api/users/1/dashboard", {"stats": {"overallProgress": 10}})
    cache = QueryCache(ttl=60)

    remote = run_query(cache, "/api/users/1/dashboard", lambda: api.get_dashboard(1))

    assert remote.state == ViewState.ERROR
    assert remote.error.path == "/api/users/1/dashboard"
    assert "/api/users/1/dashboard" not in cache
