"""Отбор воздуха от двигателей: две ступени, кнопки ENG BLEED и кран перекрёстного отбора.

Ступень подтягивается к давлению/температуре своего источника только при
кнопке ENG BLEED = AUTO; при OFF она больше не подпитывается и отдаёт
накопленный газ потребителям.

Кран перекрёстного отбора (X BLEED):
- OPEN / SHUT: открыт / закрыт по селектору;
- AUTO: открыт, если ровно одна кнопка ENG BLEED в OFF
  (живая сторона питает обе линии).

Готовые ступени передаются в `WingAntiIceComplex.update()` как источники.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple
import logging

from aerosim.config.models import BleedConfig, FluidConfig
from aerosim.core.types import CrossBleedValveSelectorMode, EngineBleedPushButtonMode, UpdateContext
from aerosim.pneumatic.containers import EngineStageContainer, Fluid
from aerosim.pneumatic.valves import DefaultValve, ValveSignal
from aerosim.simvars import (
    KNOB_OVHD_AIRCOND_XBLEED_POSITION,
    PNEU_XBLEED_VALVE_OPEN,
    SimVarReader,
    SimVarWriter,
    engine_bleed_id,
    engine_bleed_pb_id,
)

logger = logging.getLogger(__name__)

SIDES: Tuple[str, str] = ("left", "right")


class CrossBleedValveController:
    def __init__(self) -> None:
        self._mode = CrossBleedValveSelectorMode.AUTO
        self._engine_bleed: Tuple[EngineBleedPushButtonMode, ...] = (
            EngineBleedPushButtonMode.AUTO,
            EngineBleedPushButtonMode.AUTO,
        )

    def update(
        self,
        mode: CrossBleedValveSelectorMode,
        engine_bleed: Sequence[EngineBleedPushButtonMode],
    ) -> None:
        self._mode = mode
        self._engine_bleed = tuple(engine_bleed)

    def signal(self) -> Optional[ValveSignal]:
        if self._mode is CrossBleedValveSelectorMode.OPEN:
            return ValveSignal.open()
        if self._mode is CrossBleedValveSelectorMode.SHUT:
            return ValveSignal.closed()

        off = sum(pb is EngineBleedPushButtonMode.OFF for pb in self._engine_bleed)
        return ValveSignal.open() if off == 1 else ValveSignal.closed()


class BleedAirSupply:
    def __init__(self, cfg: BleedConfig | None = None, fluid_cfg: FluidConfig | None = None) -> None:
        self.cfg = cfg or BleedConfig()
        fluid = Fluid.from_config(fluid_cfg)

        self._stages: Dict[str, EngineStageContainer] = {
            side: EngineStageContainer(self.cfg.stage, fluid) for side in SIDES
        }
        self._engine_bleed: Dict[str, EngineBleedPushButtonMode] = {
            side: EngineBleedPushButtonMode.AUTO for side in SIDES
        }
        self._source: Dict[str, Tuple[float, float]] = {
            side: (float(self.cfg.stage.pressure_pa), float(self.cfg.stage.temperature_k)) for side in SIDES
        }
        self._cross_bleed_mode = CrossBleedValveSelectorMode.AUTO

        self.cross_bleed_controller = CrossBleedValveController()
        self.cross_bleed_valve = DefaultValve.new_closed(self.cfg.cross_bleed_valve)

    def stage(self, side: str) -> EngineStageContainer:
        try:
            return self._stages[side]
        except KeyError as e:
            raise ValueError(f"Unknown bleed side: {side}") from e

    def supplies(self) -> Tuple[EngineStageContainer, EngineStageContainer]:
        return self._stages["left"], self._stages["right"]

    def engine_bleed(self, side: str) -> EngineBleedPushButtonMode:
        self.stage(side)
        return self._engine_bleed[side]

    @property
    def cross_bleed_mode(self) -> CrossBleedValveSelectorMode:
        return self._cross_bleed_mode

    def set_engine_bleed(self, side: str, mode: EngineBleedPushButtonMode) -> None:
        self.stage(side)
        self._engine_bleed[side] = mode

    def set_cross_bleed_mode(self, mode: CrossBleedValveSelectorMode) -> None:
        self._cross_bleed_mode = mode

    def set_source(self, side: str, pressure_pa: float, temperature_k: float) -> None:
        """Давление/температура за компрессором двигателя (Па, К)."""

        self.stage(side)
        self._source[side] = (float(pressure_pa), float(temperature_k))

    def is_cross_bleed_open(self) -> bool:
        return self.cross_bleed_valve.is_open()

    def update(self, context: UpdateContext) -> None:
        for side in SIDES:
            if self._engine_bleed[side] is EngineBleedPushButtonMode.AUTO:
                self._stages[side].update(*self._source[side])

        was_open = self.cross_bleed_valve.is_open()
        self.cross_bleed_controller.update(
            self._cross_bleed_mode, [self._engine_bleed[side] for side in SIDES]
        )
        self.cross_bleed_valve.update_open_amount(self.cross_bleed_controller)
        if self.cross_bleed_valve.is_open() != was_open:
            logger.info("cross bleed valve %s", "open" if self.cross_bleed_valve.is_open() else "closed")

        left, right = self.supplies()
        self.cross_bleed_valve.update_move_fluid(context, left, right)

    def read(self, reader: SimVarReader) -> None:
        self.set_cross_bleed_mode(
            CrossBleedValveSelectorMode.from_value(
                reader.read(KNOB_OVHD_AIRCOND_XBLEED_POSITION, float(self._cross_bleed_mode.value))
            )
        )
        for number, side in enumerate(SIDES, start=1):
            self.set_engine_bleed(
                side,
                EngineBleedPushButtonMode.from_value(
                    reader.read(engine_bleed_pb_id(number), float(self._engine_bleed[side].value))
                ),
            )
            pressure, temperature = self._source[side]
            self.set_source(
                side,
                float(reader.read(engine_bleed_id(number, "PRESSURE"), pressure)),
                float(reader.read(engine_bleed_id(number, "TEMPERATURE"), temperature)),
            )

    def write(self, writer: SimVarWriter) -> None:
        writer.write(PNEU_XBLEED_VALVE_OPEN, self.is_cross_bleed_open())

    def __repr__(self) -> str:
        return (
            f"BleedAirSupply(xbleed={self._cross_bleed_mode.name}, "
            f"open={self.is_cross_bleed_open()})"
        )
