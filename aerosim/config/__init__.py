"""Конфиги симулятора бортовых систем.

Все настраиваемые константы живут в `aerosim.config.models` как frozen-dataclass'ы;
конструкторы подсистем принимают `cfg: ... | None` и берут дефолт, если None.
"""

from __future__ import annotations

from .models import (  # noqa: F401
    FLAPS_ASSEMBLY,
    SLATS_ASSEMBLY,
    BleedConfig,
    ExhaustConfig,
    FlapSlatAssemblyConfig,
    FlapSlatMotorConfig,
    FluidConfig,
    PidConfig,
    PipeConfig,
    SlatFlapComputerConfig,
    SystemConfig,
    ValveConfig,
    WingAntiIceConfig,
)

__all__ = [
    "BleedConfig",
    "FluidConfig",
    "PipeConfig",
    "ValveConfig",
    "ExhaustConfig",
    "PidConfig",
    "WingAntiIceConfig",
    "FlapSlatMotorConfig",
    "FlapSlatAssemblyConfig",
    "FLAPS_ASSEMBLY",
    "SLATS_ASSEMBLY",
    "SlatFlapComputerConfig",
    "SystemConfig",
]
