"""SFCC: ручка закрылков -> конфигурация -> целевые углы -> приводы."""

from __future__ import annotations

from .computer import FlapsConf, FlapsHandle, SlatFlapControlComplex, SlatFlapControlComputer
from .system import SlatFlapSystem

__all__ = [
    "FlapsConf",
    "FlapsHandle",
    "SlatFlapControlComputer",
    "SlatFlapControlComplex",
    "SlatFlapSystem",
]
