"""Shared fixtures for coordination tests."""

import asyncio

import pytest

from sdb_primitives_tool.coordination.core.retry import BackoffPolicy
from sdb_primitives_tool.coordination.core.store import AttributeStore, check_attributes
from sdb_primitives_tool.coordination.exceptions import (
    ConditionFailedError,
    StoreUnavailableError,
)

DOMAIN = "test-domain"


class InMemoryAttributeStore(AttributeStore):
    """Conditional attribute store kept in a dict.

    Every read and write yields to the event loop first so concurrent
    operations interleave between their read and their conditional write.
    """

    def __init__(self):
        self.items: dict[tuple[str, str], dict[str, str]] = {}
        self.create_calls = 0
        self.read_calls = 0
        self.write_calls = 0
        self.failing_reads = 0
        self.failing_writes = 0

    async def create_if_absent(self, domain, item_name, attributes, marker):
        self.create_calls += 1
        await asyncio.sleep(0)
        item = self.items.setdefault((domain, item_name), {})
        if marker in item:
            return False
        for name, value in attributes.items():
            item.setdefault(name, value)
        return True

    async def read_attributes(self, domain, item_name, names):
        self.read_calls += 1
        await asyncio.sleep(0)
        if self.failing_reads:
            self.failing_reads -= 1
            raise StoreUnavailableError("SimpleDB unavailable: injected")
        item = self.items.get((domain, item_name), {})
        attributes = {name: item[name] for name in names if name in item}
        check_attributes(item_name, attributes, names)
        return attributes

    async def conditional_replace(self, domain, item_name, attributes, expected_name, expected_value):
        await asyncio.sleep(0)
        if self.failing_writes:
            self.failing_writes -= 1
            raise StoreUnavailableError("SimpleDB unavailable: injected")
        item = self.items.setdefault((domain, item_name), {})
        current = item.get(expected_name)
        if current != expected_value:
            raise ConditionFailedError(
                f"Condition failed: {expected_name}={current!r}, expected {expected_value!r}"
            )
        self.write_calls += 1
        item.update(attributes)

    def get(self, item_name, name, domain=DOMAIN):
        return self.items[(domain, item_name)][name]


@pytest.fixture
def store():
    return InMemoryAttributeStore()


@pytest.fixture
def fast_policy():
    """Backoff that keeps test runs short."""
    return BackoffPolicy(base_delay_ms=0.1, max_delay_ms=2)


@pytest.fixture
def aws_credentials(monkeypatch):
    """Dummy credentials so boto3 clients can be built offline."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)
