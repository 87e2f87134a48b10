"""Комплекс противообледенения крыла: две симметричные цепочки L/R.

Цепочка: источник (регулируемая труба отбора двигателя) -> клапан WAI ->
потребитель (трубопровод предкрылков) -> статический выхлоп в атмосферу.

Порядок в тике для каждой стороны:
1. PID по давлению своего потребителя;
2. контроллер: кнопка + «источник под давлением» (P > 1.05 * P_amb);
3. сигнал контроллера -> открытие клапана;
4. выхлоп в атмосферу и охлаждение независимо от клапана;
5. перенос газа (с температурой) из источника через клапан.

Отказ стороны: контроллер сигналит On, а клапан закрыт, хотя регулятор
требует открытия (или регулирование невозможно без давления источника).

Источники не хранятся внутри комплекса: их передают в `update()` каждый тик.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple
import logging

from aerosim.config.models import FluidConfig, WingAntiIceConfig
from aerosim.core.types import UpdateContext, WingAntiIcePushButtonMode
from aerosim.pneumatic.containers import Fluid, PneumaticContainer, WingAntiIceConsumer
from aerosim.pneumatic.controllers import WingAntiIceValveController
from aerosim.pneumatic.valves import DefaultValve, StaticExhaust
from aerosim.simvars import (
    BUTTON_OVHD_ANTI_ICE_WING_POSITION,
    SimVarReader,
    SimVarWriter,
    wing_anti_ice_side_id,
    PNEU_WING_ANTI_ICE_HAS_FAULT,
    PNEU_WING_ANTI_ICE_SYSTEM_ON,
)

logger = logging.getLogger(__name__)

SIDES: Tuple[str, str] = ("left", "right")


@dataclass
class WingAntiIceChain:
    consumer: WingAntiIceConsumer
    valve: DefaultValve
    exhaust: StaticExhaust
    controller: WingAntiIceValveController
    has_fault: bool = False

    def update(
        self,
        context: UpdateContext,
        supply: PneumaticContainer,
        button: WingAntiIcePushButtonMode,
        supplier_pressurized_ratio: float,
    ) -> None:
        self.controller.update_pid(self.consumer.pressure(), context)

        supplier_pressurized = supply.pressure() > supplier_pressurized_ratio * float(context.ambient_pressure_pa)
        self.controller.update(context, button, supplier_pressurized)

        self.valve.update_open_amount(self.controller)

        self.exhaust.update_move_fluid(context, self.consumer)
        self.consumer.radiate_heat_to_ambient(context)

        self.valve.update_move_fluid(context, supply, self.consumer)

        self.has_fault = (
            self.controller.signals_on() and not self.valve.is_open() and not self._closed_by_regulation()
        )

    def _closed_by_regulation(self) -> bool:
        # регулятор сам довёл открытие до нуля: команда выполнена
        signal = self.controller.signal()
        return (
            self.controller.is_regulating()
            and signal is not None
            and signal.target_open_amount <= float(self.valve.cfg.open_threshold)
        )


class WingAntiIceComplex:
    def __init__(self, cfg: WingAntiIceConfig | None = None, fluid_cfg: FluidConfig | None = None) -> None:
        self.cfg = cfg or WingAntiIceConfig()
        fluid = Fluid.from_config(fluid_cfg)

        self._button = WingAntiIcePushButtonMode.OFF
        self._chains: Dict[str, WingAntiIceChain] = {
            side: WingAntiIceChain(
                consumer=WingAntiIceConsumer(
                    self.cfg.consumer,
                    fluid,
                    heat_conduction_rate_per_s=self.cfg.heat_conduction_rate_per_s,
                ),
                valve=DefaultValve.new_closed(self.cfg.valve),
                exhaust=StaticExhaust(self.cfg.exhaust),
                controller=WingAntiIceValveController(self.cfg),
            )
            for side in SIDES
        }

    def chain(self, side: str) -> WingAntiIceChain:
        try:
            return self._chains[side]
        except KeyError as e:
            raise ValueError(f"Unknown wing anti-ice side: {side}") from e

    @property
    def button(self) -> WingAntiIcePushButtonMode:
        return self._button

    def update_button(self, mode: WingAntiIcePushButtonMode) -> None:
        self._button = mode

    def update(self, context: UpdateContext, supplies: Sequence[PneumaticContainer]) -> None:
        """supplies: (левый, правый) источник, регулируемые трубы отбора двигателей."""

        if len(supplies) != len(SIDES):
            raise ValueError(f"expected {len(SIDES)} supply containers, got {len(supplies)}")

        had_fault = self.has_fault()
        for side, supply in zip(SIDES, supplies):
            self._chains[side].update(context, supply, self._button, self.cfg.supplier_pressurized_ratio)

        if self.has_fault() and not had_fault:
            faulty = [s for s in SIDES if self._chains[s].has_fault]
            logger.warning("wing anti-ice valve closed against ON signal: %s", ", ".join(faulty))

    def is_on(self) -> bool:
        return all(c.controller.signals_on() and not c.has_fault for c in self._chains.values())

    def has_fault(self) -> bool:
        return any(c.has_fault for c in self._chains.values())

    def is_valve_open(self, side: str) -> bool:
        return self.chain(side).valve.is_open()

    def consumer_pressure(self, side: str) -> float:
        return self.chain(side).consumer.pressure()

    def consumer_temperature(self, side: str) -> float:
        return self.chain(side).consumer.temperature()

    def read(self, reader: SimVarReader) -> None:
        self.update_button(
            WingAntiIcePushButtonMode.from_value(
                reader.read(BUTTON_OVHD_ANTI_ICE_WING_POSITION, float(self._button.value))
            )
        )

    def write(self, writer: SimVarWriter) -> None:
        writer.write(PNEU_WING_ANTI_ICE_SYSTEM_ON, self.is_on())
        writer.write(PNEU_WING_ANTI_ICE_HAS_FAULT, self.has_fault())
        for side in SIDES:
            writer.write(wing_anti_ice_side_id(side, "VALVE_OPEN"), self.is_valve_open(side))
            writer.write(wing_anti_ice_side_id(side, "CONSUMER_PRESSURE"), self.consumer_pressure(side))
            writer.write(wing_anti_ice_side_id(side, "CONSUMER_TEMPERATURE"), self.consumer_temperature(side))

    def __repr__(self) -> str:
        return f"WingAntiIceComplex(button={self._button.name}, on={self.is_on()}, fault={self.has_fault()})"
