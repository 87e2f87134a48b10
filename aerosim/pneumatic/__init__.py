"""Пневматика: ёмкости, клапаны, регуляторы и противообледенение крыла."""

from __future__ import annotations

from .bleed import BleedAirSupply, CrossBleedValveController
from .containers import DefaultPipe, EngineStageContainer, Fluid, PneumaticContainer, WingAntiIceConsumer
from .valves import DefaultValve, StaticExhaust, ValveSignal
from .wing_anti_ice import WingAntiIceComplex

__all__ = [
    "BleedAirSupply",
    "CrossBleedValveController",
    "Fluid",
    "PneumaticContainer",
    "DefaultPipe",
    "EngineStageContainer",
    "WingAntiIceConsumer",
    "ValveSignal",
    "DefaultValve",
    "StaticExhaust",
    "WingAntiIceComplex",
]
