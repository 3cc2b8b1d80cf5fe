"""
Pytest fixtures for riemann-fs tests.

Provides:
- trio as the anyio backend (the filesystem runs under trio)
- FakeExecutor, an in-memory stand-in for the Riemann query client
- Sample events
"""

import pytest

from riemann_fs.errors import QueryFailure
from riemann_fs.models import Event


class FakeExecutor:
    """Answers queries from a {query string: [Event]} table.

    Unknown queries return no events. Every query string is recorded so
    tests can assert what was sent to Riemann.
    """

    def __init__(self, responses=None, fail=False):
        self.responses = dict(responses or {})
        self.fail = fail
        self.queries = []
        self.closed = False
        self.opened = False

    async def query(self, expression):
        self.queries.append(expression)
        if self.fail:
            raise QueryFailure(f"Riemann query {expression!r} failed: connection refused")
        return list(self.responses.get(expression, []))

    async def open(self):
        self.opened = True

    async def close(self):
        self.closed = True


@pytest.fixture
def anyio_backend():
    return "trio"


@pytest.fixture
def web1_cpu() -> Event:
    return Event(host="web1", service="cpu", metric=0.5, tags=("prod",), time=100)


@pytest.fixture
def disk_event() -> Event:
    return Event(
        host="db1",
        service="disk",
        metric=81.25,
        description="disk usage",
        state="warning",
        time=1700000000,
        tags=("prod", "storage"),
        ttl=60.0,
        attributes={"mount": "/var", "device": "sda1"},
    )


@pytest.fixture
def scenario_executor(web1_cpu) -> FakeExecutor:
    """Index holding a single web1/cpu event."""
    return FakeExecutor({
        "true": [web1_cpu],
        'host = "web1"': [web1_cpu],
        'host = "web1" and service = "cpu"': [web1_cpu],
        '(true) and host = "web1" and service = "cpu"': [web1_cpu],
    })


@pytest.fixture
def make_executor():
    """Factory for FakeExecutor instances."""
    return FakeExecutor
