import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Literal, Optional

from pydantic import BaseModel

from wellmeter.named_types import DailyEntry
from wellmeter.property_format import EntryKey

module_logger = logging.getLogger(__name__)


class EntryNotFound(KeyError):
    key: str

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"No ledger entry <{self.key}>"


class LedgerFile(BaseModel):
    Entries: dict[EntryKey, DailyEntry] = {}
    TypeName: Literal["ledger.file"] = "ledger.file"
    Version: Literal["000"] = "000"


def sort_entries(entries: Iterable[DailyEntry]) -> list[DailyEntry]:
    """By date, then by well"""
    return sorted(entries, key=lambda entry: (entry.Date, entry.Well))


class AllocationLedger:
    """
    Daily entries keyed by YYYY-MM-DD-<well>, kept in a single JSON file.
    A missing file is an empty ledger. Every change rewrites the file.
    """

    path: Path

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _load(self) -> LedgerFile:
        if not self.path.exists():
            return LedgerFile()
        with self.path.open() as f:
            json_data = f.read()
        return LedgerFile.model_validate_json(json_data)

    def _save(self, ledger_file: LedgerFile) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open(mode="w") as f:
            f.write(ledger_file.model_dump_json(indent=2))

    def entries(self) -> list[DailyEntry]:
        return sort_entries(self._load().Entries.values())

    def keys(self) -> list[str]:
        return [entry.key for entry in self.entries()]

    def __contains__(self, key: str) -> bool:
        return key in self._load().Entries

    def __len__(self) -> int:
        return len(self._load().Entries)

    def get(self, key: str) -> DailyEntry:
        ledger_file = self._load()
        if key not in ledger_file.Entries:
            raise EntryNotFound(key)
        return ledger_file.Entries[key]

    def put(self, entry: DailyEntry, replaces: Optional[str] = None) -> None:
        """Store `entry` under its key, overwriting any entry with that key.
        If `replaces` names another key (the date or well of an existing
        entry was edited) that entry is removed in the same write."""
        ledger_file = self._load()
        if replaces is not None and replaces != entry.key:
            if replaces not in ledger_file.Entries:
                raise EntryNotFound(replaces)
            del ledger_file.Entries[replaces]
            module_logger.info("Replacing entry %s with %s", replaces, entry.key)
        ledger_file.Entries[entry.key] = entry
        self._save(ledger_file)

    def delete(self, key: str) -> None:
        ledger_file = self._load()
        if key not in ledger_file.Entries:
            raise EntryNotFound(key)
        del ledger_file.Entries[key]
        self._save(ledger_file)
        module_logger.info("Deleted entry %s", key)

    def bulk_delete(self, keys: Iterable[str]) -> int:
        ledger_file = self._load()
        removed = 0
        for key in keys:
            if ledger_file.Entries.pop(key, None) is not None:
                removed += 1
        if removed:
            self._save(ledger_file)
        module_logger.info("Deleted %d entries", removed)
        return removed

    def previous_entry(self, well: str, day: date) -> Optional[DailyEntry]:
        """Latest entry for `well` strictly before `day`"""
        previous = [
            entry
            for entry in self._load().Entries.values()
            if entry.Well == well and entry.Date < day
        ]
        if not previous:
            return None
        return max(previous, key=lambda entry: entry.Date)
