"""
tests/conftest.py

Configuration for pytest.
"""

from pathlib import Path
from typing import Any

import pytest

from tabtrace.proxy.normalization_proxy import NormalizationProxy
from tabtrace.sinks.data_instance import DataInstance
from tabtrace.sources.replay_event_source import ReplayEventSource

TAB_ID = 7


def make_raw_record(
    record_type: int | str | None,
    start_time: float,
    data: dict[str, Any] | None = None,
    children: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """
    Build a raw timeline record as the source delivers it (camelCase keys).
    """
    raw: dict[str, Any] = {"type": record_type, "startTime": start_time, "data": data or {}}
    if children is not None:
        raw["children"] = children
    raw.update(extra)
    return raw


def resource_start(identifier: Any, start_time: float, url: str = "http://example.com/") -> dict[str, Any]:
    return make_raw_record("ResourceSendRequest", start_time, {"identifier": identifier, "url": url})


def resource_response(identifier: Any, start_time: float) -> dict[str, Any]:
    return make_raw_record("ResourceReceiveResponse", start_time, {"identifier": identifier, "statusCode": 200})


@pytest.fixture(scope="session")
def tests_root() -> Path:
    """
    Root directory for tests.
    Returns:
        Path to the tests directory.
    """
    return Path(__file__).parent.resolve()


@pytest.fixture
def source() -> ReplayEventSource:
    """
    Empty in-memory event source.
    """
    return ReplayEventSource()


@pytest.fixture
def proxy(source: ReplayEventSource) -> NormalizationProxy:
    """
    Proxy for TAB_ID, not yet loaded.
    """
    return NormalizationProxy(tab_id=TAB_ID, event_source=source)


@pytest.fixture
def data_instance(proxy: NormalizationProxy) -> DataInstance:
    """
    DataInstance wired to the proxy (the proxy is loaded and attached to the source).
    """
    return DataInstance.create(proxy)
