"""Shared fixtures for litreview tests."""

import pytest

from litreview.core.fields import FieldRegistry
from litreview.core.records import ReviewStore
from litreview.items import Creator, Item, MemoryItemSource
from litreview.storage import MemoryPreferenceStore


class FakeClock:
    """Epoch-millisecond clock that advances by a fixed step per call."""

    def __init__(self, start=1_700_000_000_000, step=1000):
        self.now = start
        self.step = step

    def __call__(self):
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def store():
    return MemoryPreferenceStore()


@pytest.fixture
def registry(store):
    return FieldRegistry(store)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def records(store, registry, clock):
    return ReviewStore(store, registry=registry, clock=clock)


@pytest.fixture
def items():
    return MemoryItemSource([
        Item(
            id=42,
            title="Foo",
            creators=[Creator("Jane", "Doe")],
            date="2020-05-01",
        ),
        Item(
            id=7,
            title="Screening, at scale",
            creators=[Creator("Ada", "Lovelace"), Creator("Alan", "Turing")],
            date="March 1999",
            publication_title="Journal of Reviews",
            doi="10.1000/xyz",
        ),
        Item(id=8, item_type="note", title="A note"),
        Item(id=9, item_type="attachment", title="paper.pdf"),
    ])
