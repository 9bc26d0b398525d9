from wellmeter import data_classes
from wellmeter import enums
from wellmeter import named_types
from wellmeter.allocation import allocate

__version__: str = "0.1.0"

__all__ = [
    "allocate",
    "data_classes",
    "enums",
    "named_types",
]
