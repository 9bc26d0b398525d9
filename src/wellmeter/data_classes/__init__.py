from wellmeter.data_classes.well_table import (
    DEFAULT_WELL,
    WELL_CONFIGS,
    MissingDefaultWell,
    WellNames,
    get_well_config,
    is_volume_exceeded,
    known_wells,
    make_well_table,
)

__all__ = [
    "DEFAULT_WELL",
    "WELL_CONFIGS",
    "MissingDefaultWell",
    "WellNames",
    "get_well_config",
    "is_volume_exceeded",
    "known_wells",
    "make_well_table",
]
