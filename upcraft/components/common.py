"""Shared plumbing for views: session-scoped client and cache, remote-data states, small display helpers."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

import streamlit as st

from ..api_client import ApiClient, get_client
from ..config import settings
from ..exceptions import ApiError
from ..query_cache import QueryCache


class ViewState(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    READY = "ready"


@dataclass
class Remote:
    """Result of one query as a view sees it."""

    data: Any = None
    error: Optional[ApiError] = None
    loading: bool = False

    @property
    def state(self) -> ViewState:
        if self.loading:
            return ViewState.LOADING
        if self.error is not None:
            return ViewState.ERROR
        if self.data is None or (hasattr(self.data, "__len__") and len(self.data) == 0):
            return ViewState.EMPTY
        return ViewState.READY

    @property
    def ready(self) -> bool:
        return self.state == ViewState.READY


def run_query(cache: QueryCache, key: str, fetcher: Callable[[], Any]) -> Remote:
    try:
        return Remote(data=cache.get_or_fetch(key, fetcher))
    except ApiError as e:
        return Remote(error=e)


# ── Session wiring ──────────────────────────────────────────────────────────

def client() -> ApiClient:
    if "api_client" not in st.session_state:
        st.session_state["api_client"] = get_client()
    return st.session_state["api_client"]


def cache() -> QueryCache:
    if "query_cache" not in st.session_state:
        st.session_state["query_cache"] = QueryCache()
    return st.session_state["query_cache"]


def user_id() -> int:
    return st.session_state.get("user_id", settings.UPCRAFT_USER_ID)


def query(key: str, fetcher: Callable[[], Any], spinner: str = None) -> Remote:
    """Fetch through the session cache, showing a spinner while the request is in flight."""
    if spinner and key not in cache():
        with st.spinner(spinner):
            return run_query(cache(), key, fetcher)
    return run_query(cache(), key, fetcher)


def invalidate(*prefixes: str):
    cache().invalidate(*prefixes)


def show_state(remote: Remote, empty_text: str = "Nothing here yet.") -> bool:
    """Render the error/empty placeholder for a non-ready result. True when the caller should render data."""
    state = remote.state
    if state == ViewState.ERROR:
        st.error(f"Couldn't load this section: {remote.error.message}")
        return False
    if state == ViewState.EMPTY:
        st.info(empty_text)
        return False
    return state == ViewState.READY


# ── Display helpers ─────────────────────────────────────────────────────────

def clamp_level(value) -> int:
    try:
        return max(0, min(100, int(round(float(value)))))
    except (TypeError, ValueError):
        return 0


def bar(score: int, width: int = 10) -> str:
    score = clamp_level(score)
    filled = round(score / 100 * width)
    return "█" * filled + "░" * (width - filled)


def fmt_minutes(minutes) -> str:
    if not minutes:
        return "—"
    minutes = int(minutes)
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest:02d}m" if rest else f"{hours}h"


def fmt_date(value) -> str:
    if not value:
        return ""
    try:
        return value.strftime("%d %b %Y")
    except AttributeError:
        return str(value)[:10]
