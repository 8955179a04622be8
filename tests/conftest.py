"""
Pytest fixtures for apifs tests.
"""

import pytest

from apifs.collection import CollectionDirectory
from apifs.filesystem import ApiFileSystem
from apifs.router import NamespaceRouter


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeService:
    """In-memory remote collection that records every call."""

    def __init__(self, prefix, records=()):
        self.prefix = prefix
        self.records = [dict(record) for record in records]
        self.calls = []
        self.failures = {}

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.failures:
            raise self.failures.pop(name)

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)

    def list(self):
        self._call("list")
        return [dict(record) for record in self.records]

    def get(self, resource_id):
        self._call("get", resource_id)
        for record in self.records:
            if record["id"] == resource_id:
                return dict(record)
        raise LookupError(f"no such resource: {resource_id}")

    def create(self, params):
        self._call("create", params)
        record = dict(params, id=f"{self.prefix}{len(self.records) + 1:03d}")
        self.records.append(record)
        return dict(record)


@pytest.fixture
def clock():
    """Create a manually advanced clock."""
    return ManualClock()


@pytest.fixture
def customers():
    """Create a fake customers collection with two records."""
    return FakeService(
        "CU",
        [
            {"id": "CU001", "email": "ada@example.com", "given_name": "Ada"},
            {"id": "CU002", "email": "alan@example.com", "given_name": "Alan"},
        ],
    )


@pytest.fixture
def payments():
    """Create a fake payments collection with one record."""
    return FakeService("PM", [{"id": "PM001", "amount": 1500, "currency": "GBP"}])


@pytest.fixture
def customers_dir(customers, clock):
    """Create a collection directory over the customers collection."""
    return CollectionDirectory(customers, ttl=60, timer=clock)


@pytest.fixture
def router(customers_dir, payments, clock):
    """Create a router over customers and payments."""
    return NamespaceRouter(
        {
            "customers": customers_dir,
            "payments": CollectionDirectory(payments, ttl=60, timer=clock),
        }
    )


@pytest.fixture
def api_fs(router):
    """Create an fsspec filesystem over the router."""
    return ApiFileSystem(router)
