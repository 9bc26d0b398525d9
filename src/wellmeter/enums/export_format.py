# Literal Enum:
#  - no additional values can be added over time.
#  - Sent as-is, also used as the exported file suffix
from enum import StrEnum


class ExportFormat(StrEnum):
    """
    File formats a well report can be exported to.
    """

    Csv = "csv"
    Xlsx = "xlsx"

    @classmethod
    def values(cls) -> list[str]:
        """
        Returns enum choices
        """
        return [elt.value for elt in cls]

    @classmethod
    def default(cls) -> "ExportFormat":
        return cls.Csv

    @classmethod
    def enum_name(cls) -> str:
        return "export.format"

    @classmethod
    def enum_version(cls) -> str:
        return "000"
