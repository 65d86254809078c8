"""Fixtures for coin cache tests."""

import pytest

from fakes import FakeCacheStore, FakeUpstream, make_records


@pytest.fixture
def records() -> list[dict]:
    return make_records(12)


@pytest.fixture
def upstream(records) -> FakeUpstream:
    return FakeUpstream(records)


@pytest.fixture
def cache() -> FakeCacheStore:
    return FakeCacheStore()
