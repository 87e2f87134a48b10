"""aerosim.core.types

Общие типы данных, которыми обмениваются подсистемы на каждом тике.

UpdateContext: единственный канал «внешнего мира» внутрь модели: длительность
тика и внешние условия. Часов реального времени модель не читает.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from aerosim.core.units import ISA_SEA_LEVEL_PRESSURE, celsius_to_kelvin
from aerosim.simvars import (
    AIRSPEED_INDICATED,
    AMBIENT_PRESSURE,
    AMBIENT_TEMPERATURE,
    SIM_ON_GROUND,
    SimVarReader,
)


class WingAntiIcePushButtonMode(Enum):
    OFF = 0
    ON = 1

    @classmethod
    def from_value(cls, value: float) -> "WingAntiIcePushButtonMode":
        return cls.ON if float(value) >= 0.5 else cls.OFF


class EngineBleedPushButtonMode(Enum):
    OFF = 0
    AUTO = 1

    @classmethod
    def from_value(cls, value: float) -> "EngineBleedPushButtonMode":
        return cls.AUTO if float(value) >= 0.5 else cls.OFF


class CrossBleedValveSelectorMode(Enum):
    SHUT = 0
    AUTO = 1
    OPEN = 2

    @classmethod
    def from_value(cls, value: float) -> "CrossBleedValveSelectorMode":
        idx = int(round(float(value)))
        idx = max(0, min(2, idx))
        return cls(idx)


@dataclass(frozen=True, slots=True)
class UpdateContext:
    """Входы одного тика (SI, кроме скорости в узлах)."""

    delta_s: float
    indicated_airspeed_kt: float = 0.0
    ambient_pressure_pa: float = ISA_SEA_LEVEL_PRESSURE
    ambient_temperature_k: float = celsius_to_kelvin(15.0)
    is_on_ground: bool = True

    def __post_init__(self) -> None:
        if self.delta_s < 0.0:
            raise ValueError(f"delta_s must be >= 0, got {self.delta_s}")

    def with_delta(self, delta_s: float) -> "UpdateContext":
        return replace(self, delta_s=float(delta_s))

    @classmethod
    def from_reader(cls, reader: SimVarReader, delta_s: float) -> "UpdateContext":
        """Собрать контекст тика из переменных хоста; отсутствующие берут ISA / земля."""

        return cls(
            delta_s=float(delta_s),
            indicated_airspeed_kt=float(reader.read(AIRSPEED_INDICATED, 0.0)),
            ambient_pressure_pa=float(reader.read(AMBIENT_PRESSURE, ISA_SEA_LEVEL_PRESSURE)),
            ambient_temperature_k=float(reader.read(AMBIENT_TEMPERATURE, celsius_to_kelvin(15.0))),
            is_on_ground=float(reader.read(SIM_ON_GROUND, 1.0)) >= 0.5,
        )
