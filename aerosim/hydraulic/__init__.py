"""Гидравлика привода закрылков/предкрылков."""

from __future__ import annotations

from .flap_slat import FlapSlatAssembly, FlapSlatHydraulicMotor

__all__ = [
    "FlapSlatHydraulicMotor",
    "FlapSlatAssembly",
]
