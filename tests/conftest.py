"""Shared fixtures for ledgerline tests."""

from collections.abc import Iterator
from datetime import datetime, timezone

import pytest

from ledgerline.store import LedgerStore


class FakeClock:
    """Clock returning a settable moment."""

    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def __call__(self) -> datetime:
        return self.moment

    def set(self, *args: int) -> None:
        self.moment = datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 5, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(clock: FakeClock) -> Iterator[LedgerStore]:
    ledger = LedgerStore(":memory:", clock=clock)
    yield ledger
    ledger.close()


@pytest.fixture
def march_store(store: LedgerStore, clock: FakeClock) -> LedgerStore:
    """Ledger with two March 2024 transactions and one on 1 April."""
    clock.set(2024, 3, 5, 9, 30)
    store.create("Groceries", 20, "expense")
    clock.set(2024, 3, 20, 18, 0)
    store.create("Salary", 50, "income")
    clock.set(2024, 4, 1, 0, 0)
    store.create("Rent", 500, "expense")
    return store
