"""
Enums used by the well meter types. Each enum carries a dotted enum_name and
a version so that stored documents remain readable as they evolve.
"""

from wellmeter.enums.export_format import ExportFormat

__all__ = [
    "ExportFormat",
]
