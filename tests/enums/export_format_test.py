"""
Tests for enum export.format.000
"""

from wellmeter.enums import ExportFormat


def test_export_format() -> None:
    assert set(ExportFormat.values()) == {
        "csv",
        "xlsx",
    }

    assert ExportFormat.default() == ExportFormat.Csv
    assert ExportFormat.enum_name() == "export.format"
    assert ExportFormat.enum_version() == "000"
    assert ExportFormat("xlsx") is ExportFormat.Xlsx
