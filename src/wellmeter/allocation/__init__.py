from wellmeter.allocation.engine import (
    OVERFLOW_WARNING,
    allocate,
    allocate_for_config,
)

__all__ = [
    "OVERFLOW_WARNING",
    "allocate",
    "allocate_for_config",
]
