"""Клапаны и выхлоп: перенос объёма между ёмкостями за один тик.

Оба элемента используют одну и ту же схему:

    V_eq  = ΔP * V_from * V_to / (K * (V_from + V_to))   # объём выравнивания
    V_tick = open_amount * V_eq * (1 - exp(-rate * dt))

Для выхлопа в атмосферу V_to -> ∞, поэтому V_eq = ΔP * V_from / K.
Экспонента даёт полу-неявную устойчивость: при dt -> ∞ ровно выравнивание,
при dt -> 0 перенос -> 0, независимо от размера тика.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol
import math

from aerosim.config.models import ExhaustConfig, ValveConfig
from aerosim.core.types import UpdateContext
from aerosim.core.validation import clamp
from aerosim.pneumatic.containers import PneumaticContainer


@dataclass(frozen=True, slots=True)
class ValveSignal:
    """Эфемерный сигнал контроллера: целевое открытие 0..1."""

    target_open_amount: float

    @classmethod
    def open(cls) -> "ValveSignal":
        return cls(1.0)

    @classmethod
    def closed(cls) -> "ValveSignal":
        return cls(0.0)


class ControllerSignal(Protocol):
    def signal(self) -> Optional[ValveSignal]: ...  # pragma: no cover


def transfer_factor(rate_per_s: float, delta_s: float) -> float:
    return 1.0 - math.exp(-float(rate_per_s) * float(delta_s))


def _bulk_modulus(container: PneumaticContainer) -> float:
    return float(container.fluid.bulk_modulus_pa)


class DefaultValve:
    def __init__(self, open_amount: float = 0.0, cfg: ValveConfig | None = None) -> None:
        self.cfg = cfg or ValveConfig()
        self._open_amount = clamp(open_amount, 0.0, 1.0)

    @classmethod
    def new_closed(cls, cfg: ValveConfig | None = None) -> "DefaultValve":
        return cls(0.0, cfg)

    @classmethod
    def new_open(cls, cfg: ValveConfig | None = None) -> "DefaultValve":
        return cls(1.0, cfg)

    def open_amount(self) -> float:
        return self._open_amount

    def is_open(self) -> bool:
        return self._open_amount > float(self.cfg.open_threshold)

    def update_open_amount(self, controller: ControllerSignal) -> None:
        """Нет сигнала (None): клапан держит прежнее положение."""

        signal = controller.signal()
        if signal is not None:
            self._open_amount = clamp(signal.target_open_amount, 0.0, 1.0)

    def update_move_fluid(
        self,
        context: UpdateContext,
        from_: PneumaticContainer,
        to: PneumaticContainer,
    ) -> float:
        """Перенести газ from_ -> to (или обратно при ΔP < 0). Возвращает объём, м³."""

        K = _bulk_modulus(from_)
        v_from = float(from_.volume())
        v_to = float(to.volume())
        if v_from + v_to <= 0.0:
            return 0.0

        equalization_volume = (from_.pressure() - to.pressure()) * v_from * v_to / (K * (v_from + v_to))
        volume = (
            self._open_amount
            * equalization_volume
            * transfer_factor(self.cfg.transfer_speed_per_s, context.delta_s)
        )
        self._move_volume(from_, to, volume)
        return volume

    @staticmethod
    def _move_volume(from_: PneumaticContainer, to: PneumaticContainer, volume: float) -> None:
        if volume >= 0.0:
            from_.change_volume(-volume)
            to.change_fluid_amount(volume, from_.temperature())
        else:
            to.change_volume(volume)
            from_.change_fluid_amount(-volume, to.temperature())


class StaticExhaust:
    """Выхлоп с фиксированным открытием: из ёмкости в атмосферу (бесконечный объём)."""

    def __init__(self, cfg: ExhaustConfig | None = None) -> None:
        self.cfg = cfg or ExhaustConfig()

    def open_amount(self) -> float:
        return float(self.cfg.open_amount)

    def update_move_fluid(self, context: UpdateContext, from_: PneumaticContainer) -> float:
        K = _bulk_modulus(from_)
        equalization_volume = (from_.pressure() - float(context.ambient_pressure_pa)) * from_.volume() / K
        volume = (
            self.open_amount()
            * equalization_volume
            * transfer_factor(self.cfg.transfer_speed_per_s, context.delta_s)
        )
        from_.change_volume(-volume)
        return volume
