"""Shared pytest fixtures and configuration for the num-client test suite.

Guidelines
----------
* No network access in any test.
* dnspython and ``urlopen`` are mocked at the infra boundary.
* Core tests must be pure — no side effects.
* Tests that register the ``num`` scheme restore ``urllib`` state.
"""

from __future__ import annotations

import urllib.request
from collections.abc import Callable, Iterator

import pytest

from num_client.core.resolve_service import ResolveService
from num_client.exceptions import NoRecordError
from num_client.infra import protocol_support


class FakeFetcher:
    """In-memory :class:`~num_client.core.protocols.RecordFetcher`."""

    def __init__(self, records: dict[str, str] | None = None) -> None:
        self.records: dict[str, str] = dict(records or {})
        self.calls: list[str] = []

    def fetch(self, uri: str) -> str:
        self.calls.append(uri)
        try:
            return self.records[uri]
        except KeyError:
            raise NoRecordError(f"No NUM record for {uri}") from None


def make_clock(*ticks: float) -> Callable[[], float]:
    """Return a clock yielding *ticks* in order."""
    values: Iterator[float] = iter(ticks)
    return lambda: next(values)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher({"num.uk:1": '{"status":"ok"}'})


@pytest.fixture
def service(fetcher: FakeFetcher) -> ResolveService:
    return ResolveService(fetcher)


@pytest.fixture
def clean_protocol_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start with the ``num`` scheme unregistered; restore urllib afterwards."""
    monkeypatch.setattr(protocol_support, "_installed", False)
    monkeypatch.setattr(urllib.request, "_opener", None)
