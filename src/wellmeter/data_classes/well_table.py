from types import MappingProxyType
from typing import Mapping

from wellmeter.named_types import WellConfig

DEFAULT_WELL = "TCHE"


class WellNames:
    """Identifiers of the wells with a configured allocation curve"""

    maag = "MAAG"
    pecuaria = "PECUÁRIA"
    tche = "TCHE"

    @classmethod
    def all(cls) -> list[str]:
        return [cls.maag, cls.pecuaria, cls.tche]


class MissingDefaultWell(KeyError):
    default_well: str

    def __init__(self, default_well: str) -> None:
        super().__init__(default_well)
        self.default_well = default_well

    def __str__(self) -> str:
        return f"Well table has no configuration for the default well <{self.default_well}>"


def make_well_table(
    configs: Mapping[str, WellConfig], default_well: str = DEFAULT_WELL
) -> Mapping[str, WellConfig]:
    """Read-only copy of `configs`. Raises MissingDefaultWell if unknown wells
    would have no configuration to fall back on."""
    if default_well not in configs:
        raise MissingDefaultWell(default_well)
    return MappingProxyType(dict(configs))


WELL_CONFIGS: Mapping[str, WellConfig] = make_well_table(
    {
        # bell curve over 6:00 - 17:00
        WellNames.maag: WellConfig(
            OperationalHours=tuple(range(6, 18)),
            HourlyLimitM3=19,
            WeightPattern=(0.4, 0.6, 0.8, 0.95, 1.0, 0.95, 0.9, 0.85, 0.8, 0.7, 0.6, 0.5),
        ),
        # longer window, 6:00 - 20:00
        WellNames.pecuaria: WellConfig(
            OperationalHours=tuple(range(6, 21)),
            HourlyLimitM3=10,
            WeightPattern=(
                0.3, 0.45, 0.6, 0.75, 0.9, 1.0, 0.95, 0.9,
                0.85, 0.8, 0.75, 0.7, 0.6, 0.5, 0.45,
            ),
        ),
        # discontinuous window, flat curve
        WellNames.tche: WellConfig(
            OperationalHours=(1, 2, 8, 9, 16, 17),
            HourlyLimitM3=12,
            WeightPattern=(1.0, 1.0, 1.0, 1.0, 1.0, 1.0),
        ),
    }
)


def get_well_config(
    well: str,
    configs: Mapping[str, WellConfig] = WELL_CONFIGS,
    default_well: str = DEFAULT_WELL,
) -> WellConfig:
    """
    Returns the configuration for `well`. Matching is case-sensitive and an
    unknown well gets the `default_well` configuration instead of an error.
    Tables built with make_well_table always have that configuration.
    """
    config = configs.get(well)
    if config is not None:
        return config
    if default_well not in configs:
        raise MissingDefaultWell(default_well)
    return configs[default_well]


def known_wells(configs: Mapping[str, WellConfig] = WELL_CONFIGS) -> list[str]:
    return list(configs.keys())


def is_volume_exceeded(
    well: str, volume: float, configs: Mapping[str, WellConfig] = WELL_CONFIGS
) -> bool:
    """True if `volume` is above the hourly limit of a configured well.
    Unknown wells and wells without a limit never exceed."""
    config = configs.get(well)
    if config is None or not config.has_limit:
        return False
    return volume > config.hourly_limit
