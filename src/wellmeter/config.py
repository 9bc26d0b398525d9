import logging
from pathlib import Path
from typing import Self

import dotenv
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "well-meter"
DEFAULT_LEDGER_FILE = "allocations.json"


class WellMeterSettings(BaseSettings):
    """Settings for the well meter ledger and reports."""

    data_dir: Path = DEFAULT_DATA_DIR
    ledger_file: str = DEFAULT_LEDGER_FILE
    export_dir: Path = Path(".")
    verbosity: int = logging.WARNING
    allocation_logging_level: int = logging.INFO
    model_config = SettingsConfigDict(
        env_prefix="WELLMETER_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @model_validator(mode="after")
    def check_ledger_file(self) -> Self:
        if Path(self.ledger_file).name != self.ledger_file:
            raise ValueError(
                f"ledger_file <{self.ledger_file}> must be a file name, not a path"
            )
        return self

    @property
    def ledger_path(self) -> Path:
        return Path(self.data_dir).expanduser() / self.ledger_file


def get_settings(env_file: str = ".env") -> WellMeterSettings:
    # https://github.com/koxudaxi/pydantic-pycharm-plugin/issues/1013
    # noinspection PyArgumentList
    return WellMeterSettings(_env_file=dotenv.find_dotenv(env_file, usecwd=True))


def verbosity_from_count(verbose: int, default: int = logging.WARNING) -> int:
    if not verbose:
        return default
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG
