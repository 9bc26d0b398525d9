"""Local pytest configuration"""

import logging
from pathlib import Path

import pytest

from wellmeter.entry_workflow import ALLOCATION_LOGGER_NAME
from wellmeter.ledger import AllocationLedger

WELLMETER_ENV_VARS = [
    "WELLMETER_DATA_DIR",
    "WELLMETER_LEDGER_FILE",
    "WELLMETER_EXPORT_DIR",
    "WELLMETER_VERBOSITY",
    "WELLMETER_ALLOCATION_LOGGING_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_test_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run every test from an empty directory with its own data dir so that
    no .env or ledger outside the test is read or written."""
    for var in WELLMETER_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    data_dir = tmp_path / "data"
    monkeypatch.setenv("WELLMETER_DATA_DIR", str(data_dir))
    return data_dir


@pytest.fixture(autouse=True)
def restore_loggers():
    root = logging.getLogger()
    allocation = logging.getLogger(ALLOCATION_LOGGER_NAME)
    root_level = root.level
    allocation_level = allocation.level
    yield
    root.setLevel(root_level)
    allocation.setLevel(allocation_level)


@pytest.fixture
def ledger(tmp_path: Path) -> AllocationLedger:
    return AllocationLedger(tmp_path / "ledger" / "allocations.json")
