from __future__ import annotations

from datetime import date, datetime

import pytest

from backend.core import storage as storage_module
from backend.core.storage import MemStorage
from backend.schemas.records import CalculationCreate, ProRataCreate


class FrozenDatetime(datetime):
    @classmethod
    def now(cls, tz=None):
        return datetime(2025, 10, 14, 12, 0, tzinfo=tz)


@pytest.fixture
def frozen_clock(monkeypatch):
    monkeypatch.setattr(storage_module, "datetime", FrozenDatetime)


def test_calculations_list_newest_first_when_timestamps_tie(frozen_clock):
    store = MemStorage()
    first = store.create_calculation(
        CalculationCreate(type="add", input1=1, input2=1, result=2, formula="1 + 1 = 2")
    )
    second = store.create_calculation(
        CalculationCreate(type="add", input1=2, input2=2, result=4, formula="2 + 2 = 4")
    )

    assert first.createdAt == second.createdAt
    assert [row.id for row in store.get_calculations()] == [second.id, first.id]


def test_pro_rata_list_newest_first_when_timestamps_tie(frozen_clock):
    store = MemStorage()
    records = [
        store.create_pro_rata_calculation(
            ProRataCreate(
                monthlyNet=net,
                activationDate=date(2025, 10, 14),
                proDays=1,
                cycleDays=30,
                prorataNet=net / 30,
            )
        )
        for net in (30, 60, 90)
    ]

    assert [row.id for row in store.get_pro_rata_calculations()] == [r.id for r in reversed(records)]


def test_lookup_by_id():
    store = MemStorage()
    record = store.create_calculation(
        CalculationCreate(type="percentage", input1=50, input2=10, result=5, formula="10% of 50 = 5")
    )

    assert store.get_calculation(record.id) == record
    assert store.get_calculation("missing") is None
    assert store.get_pro_rata_calculation(record.id) is None
