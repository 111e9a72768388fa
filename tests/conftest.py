"""Pytest hooks and fixtures."""

import os

import pytest

from otrsrpc.config import reset_rpc_options


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "live: requires a reachable OTRS rpc.pl endpoint (skipped unless OTRS_API_LIVE=1)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless a real server is configured."""
    if os.environ.get("OTRS_API_LIVE") == "1":
        return
    skip = pytest.mark.skip(reason="Set OTRS_API_LIVE=1 and OTRS_API_* credentials to run")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def _isolated_env(request, monkeypatch):
    """Each test starts without OTRS_API_* variables or process-wide overrides."""
    if "live" not in request.keywords:
        for name in list(os.environ):
            if name.startswith("OTRS_API_"):
                monkeypatch.delenv(name, raising=False)
    reset_rpc_options()
    yield
    reset_rpc_options()


class FakeTransport:
    """In-memory transport recording every call."""

    def __init__(self, params, reply=None, error=None):
        self.params = params
        self.reply = reply
        self.error = error
        self.calls = []
        self.closed = False
        self.last_request = None
        self.last_response = None

    def call(self, method, params):
        self.calls.append((method, list(params)))
        if self.params.trace:
            self.last_request = f"{method} {params!r}"
        if self.error is not None:
            raise self.error
        reply = self.reply(method, params) if callable(self.reply) else self.reply
        if self.params.trace:
            self.last_response = repr(reply)
        return reply

    def close(self):
        self.closed = True


class FakeTransportFactory:
    """Transport factory that keeps every transport it built."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.built = []

    def __call__(self, params):
        transport = FakeTransport(params, reply=self.reply, error=self.error)
        self.built.append(transport)
        return transport

    @property
    def last(self):
        return self.built[-1]


@pytest.fixture
def factory():
    return FakeTransportFactory()


@pytest.fixture
def credentials():
    return {
        "location": "http://otrs.example.com/otrs/",
        "username": "soap",
        "password": "s3cret",
    }
