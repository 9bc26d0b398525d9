import json
from datetime import date

import pytest

from wellmeter.allocation import allocate
from wellmeter.ledger import AllocationLedger, EntryNotFound, LedgerFile
from wellmeter.named_types import DailyEntry


def make_entry(day: date, well: str, meter: float, total: float) -> DailyEntry:
    return DailyEntry.from_result(day, well, meter, total, allocate(total, well))


def test_missing_file_is_empty(ledger: AllocationLedger) -> None:
    assert not ledger.path.exists()
    assert ledger.entries() == []
    assert len(ledger) == 0
    assert ledger.previous_entry("MAAG", date(2024, 1, 1)) is None
    with pytest.raises(EntryNotFound):
        ledger.get("2024-01-01-MAAG")


def test_put_get_and_persist(ledger: AllocationLedger) -> None:
    entry = make_entry(date(2024, 3, 1), "MAAG", 100, 100)
    ledger.put(entry)
    assert ledger.path.exists()
    assert "2024-03-01-MAAG" in ledger
    assert ledger.get("2024-03-01-MAAG") == entry

    # a second ledger on the same file sees the same data
    assert AllocationLedger(ledger.path).get(entry.key) == entry
    with ledger.path.open() as f:
        data = json.load(f)
    assert data["TypeName"] == "ledger.file"
    assert list(data["Entries"]) == ["2024-03-01-MAAG"]
    assert LedgerFile.model_validate(data).Entries[entry.key] == entry


def test_same_key_overwrites(ledger: AllocationLedger) -> None:
    ledger.put(make_entry(date(2024, 3, 1), "MAAG", 100, 100))
    ledger.put(make_entry(date(2024, 3, 1), "MAAG", 150, 150))
    assert len(ledger) == 1
    assert ledger.get("2024-03-01-MAAG").MeterReading == 150


def test_replaces(ledger: AllocationLedger) -> None:
    ledger.put(make_entry(date(2024, 3, 1), "MAAG", 100, 100))
    # date of the entry was edited
    ledger.put(make_entry(date(2024, 3, 2), "MAAG", 100, 100), replaces="2024-03-01-MAAG")
    assert ledger.keys() == ["2024-03-02-MAAG"]

    # replacing its own key is a plain overwrite
    ledger.put(make_entry(date(2024, 3, 2), "MAAG", 120, 120), replaces="2024-03-02-MAAG")
    assert ledger.keys() == ["2024-03-02-MAAG"]

    with pytest.raises(EntryNotFound):
        ledger.put(make_entry(date(2024, 3, 3), "MAAG", 1, 1), replaces="2024-03-01-MAAG")
    assert ledger.keys() == ["2024-03-02-MAAG"]


def test_entries_sorted(ledger: AllocationLedger) -> None:
    ledger.put(make_entry(date(2024, 3, 2), "TCHE", 1, 1))
    ledger.put(make_entry(date(2024, 3, 1), "TCHE", 1, 1))
    ledger.put(make_entry(date(2024, 3, 2), "MAAG", 1, 1))
    assert ledger.keys() == ["2024-03-01-TCHE", "2024-03-02-MAAG", "2024-03-02-TCHE"]


def test_delete(ledger: AllocationLedger) -> None:
    for day in [1, 2, 3]:
        ledger.put(make_entry(date(2024, 3, day), "MAAG", day, 1))
    ledger.delete("2024-03-02-MAAG")
    assert ledger.keys() == ["2024-03-01-MAAG", "2024-03-03-MAAG"]
    with pytest.raises(EntryNotFound) as exc_info:
        ledger.delete("2024-03-02-MAAG")
    assert str(exc_info.value) == "No ledger entry <2024-03-02-MAAG>"
    assert isinstance(exc_info.value, KeyError)

    assert ledger.bulk_delete(["2024-03-01-MAAG", "2024-03-09-MAAG", "2024-03-03-MAAG"]) == 2
    assert len(ledger) == 0
    assert ledger.bulk_delete(["2024-03-01-MAAG"]) == 0


def test_previous_entry(ledger: AllocationLedger) -> None:
    ledger.put(make_entry(date(2024, 3, 1), "MAAG", 100, 100))
    ledger.put(make_entry(date(2024, 3, 5), "MAAG", 300, 200))
    ledger.put(make_entry(date(2024, 3, 4), "TCHE", 50, 50))

    assert ledger.previous_entry("MAAG", date(2024, 3, 1)) is None
    assert ledger.previous_entry("MAAG", date(2024, 3, 3)).MeterReading == 100
    assert ledger.previous_entry("MAAG", date(2024, 3, 5)).MeterReading == 100
    assert ledger.previous_entry("MAAG", date(2024, 3, 6)).MeterReading == 300
    assert ledger.previous_entry("TCHE", date(2024, 3, 6)).MeterReading == 50
    assert ledger.previous_entry("PECUÁRIA", date(2024, 3, 6)) is None
