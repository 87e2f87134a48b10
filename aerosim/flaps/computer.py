"""Slat/flap control computer (SFCC): ручка -> конфигурация.

Переходы ключуются парой (предыдущее, текущее) положение ручки, скорость идёт отдельным входом:

- -> 0                      : CONF 0 безусловно;
- 1 -> 1 (ручка стоит в 1)  : CONF 1, если IAS > 210 kt, иначе без изменений;
- 0 -> 1, >1 -> 1           : CONF 1+F при IAS <= порога, иначе CONF 1;
- -> 2/3/4                  : CONF 2 / 3 / FULL напрямую, без промежуточных
                              состояний даже при «прыжке» 0 -> 3.

Целевые углы пересчитываются из текущей конфигурации каждый тик.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple
import logging

from aerosim.config.models import SlatFlapComputerConfig
from aerosim.core.types import UpdateContext
from aerosim.core.units import DEG_TO_RAD
from aerosim.simvars import (
    FLAPS_CONF_HANDLE_INDEX_HELPER,
    FLAPS_HANDLE_INDEX,
    SimVarReader,
    SimVarWriter,
    surface_id,
)

logger = logging.getLogger(__name__)

HandleTransition = Tuple[int, int]


class FlapsConf(Enum):
    CONF_0 = "0"
    CONF_1 = "1"
    CONF_1F = "1F"
    CONF_2 = "2"
    CONF_3 = "3"
    CONF_FULL = "FULL"

    @property
    def index(self) -> int:
        return CONF_INDEX[self]

    @classmethod
    def from_index(cls, index: int) -> "FlapsConf":
        """Насыщение: > 5 -> FULL, < 0 -> CONF 0."""

        idx = max(0, int(index))
        if idx >= len(_CONF_BY_INDEX):
            return cls.CONF_FULL
        return _CONF_BY_INDEX[idx]


# Versioned wire mapping for FLAPS_CONF_HANDLE_INDEX_HELPER.
# Never derive it from Enum order.
CONF_INDEX_VERSION = 1
CONF_INDEX: Dict[FlapsConf, int] = {
    FlapsConf.CONF_0: 0,
    FlapsConf.CONF_1: 1,
    FlapsConf.CONF_1F: 2,
    FlapsConf.CONF_2: 3,
    FlapsConf.CONF_3: 4,
    FlapsConf.CONF_FULL: 5,
}
_CONF_BY_INDEX: Tuple[FlapsConf, ...] = tuple(sorted(CONF_INDEX, key=CONF_INDEX.__getitem__))


class FlapsHandle:
    def __init__(self) -> None:
        self.handle_position = 0
        self.old_handle_position = 0

    def set_position(self, position: int) -> None:
        self.handle_position = max(0, int(position))

    def signal_new_position(self) -> Optional[HandleTransition]:
        if self.handle_position == self.old_handle_position:
            # стоим в 1: даём компьютеру пересмотреть 1 vs 1+F по скорости
            if self.handle_position == 1:
                return (1, 1)
            return None
        return (self.old_handle_position, self.handle_position)

    def equilibrate_old_and_current(self) -> None:
        self.old_handle_position = self.handle_position

    def read(self, reader: SimVarReader) -> None:
        self.set_position(int(round(float(reader.read(FLAPS_HANDLE_INDEX, float(self.handle_position))))))


class SlatFlapControlComputer:
    def __init__(self, cfg: SlatFlapComputerConfig | None = None) -> None:
        self.cfg = cfg or SlatFlapComputerConfig()
        self.flaps_conf = FlapsConf.CONF_0
        self.indicated_airspeed_kt = 0.0
        self.flaps_demanded_angle_deg = 0.0
        self.slats_demanded_angle_deg = 0.0

    def target_flaps_angle_from_state(self, conf: FlapsConf) -> float:
        return float(self.cfg.flaps_angle_deg[conf.value])

    def target_slats_angle_from_state(self, conf: FlapsConf) -> float:
        return float(self.cfg.slats_angle_deg[conf.value])

    def generate_configuration(self, handle_transition: Optional[HandleTransition]) -> Optional[FlapsConf]:
        if handle_transition is None:
            return None

        from_pos, to_pos = handle_transition
        ias = self.indicated_airspeed_kt
        cfg = self.cfg

        if to_pos == 0:
            return FlapsConf.CONF_0

        if to_pos == 1:
            if from_pos == 1:
                if ias > cfg.conf1f_to_conf1_airspeed_threshold_kt:
                    return FlapsConf.CONF_1
                return None
            threshold = (
                cfg.handle_one_conf_airspeed_threshold_kt
                if from_pos == 0
                else cfg.conf1f_to_conf1_airspeed_threshold_kt
            )
            return FlapsConf.CONF_1F if ias <= threshold else FlapsConf.CONF_1

        return FlapsConf.from_index(to_pos + 1)

    def update(self, context: UpdateContext, handle_transition: Optional[HandleTransition]) -> None:
        self.indicated_airspeed_kt = float(context.indicated_airspeed_kt)

        new_conf = self.generate_configuration(handle_transition)
        if new_conf is not None and new_conf is not self.flaps_conf:
            logger.info("flaps configuration %s -> %s (IAS %.0f kt)", self.flaps_conf.value, new_conf.value, self.indicated_airspeed_kt)
        if new_conf is not None:
            self.flaps_conf = new_conf

        self.flaps_demanded_angle_deg = self.target_flaps_angle_from_state(self.flaps_conf)
        self.slats_demanded_angle_deg = self.target_slats_angle_from_state(self.flaps_conf)

    def _signal_movement(self, demanded_deg: float, position_feedback_rad: float) -> Optional[float]:
        feedback_deg = float(position_feedback_rad) / DEG_TO_RAD
        if abs(demanded_deg - feedback_deg) > self.cfg.equal_angle_delta_deg:
            return demanded_deg * DEG_TO_RAD
        return None

    def signal_flap_movement(self, position_feedback_rad: float) -> Optional[float]:
        """Целевой угол закрылков (рад), если текущий отличается больше чем на 0.01°."""

        return self._signal_movement(self.flaps_demanded_angle_deg, position_feedback_rad)

    def signal_slat_movement(self, position_feedback_rad: float) -> Optional[float]:
        return self._signal_movement(self.slats_demanded_angle_deg, position_feedback_rad)

    def write(self, writer: SimVarWriter) -> None:
        for side in ("left", "right"):
            writer.write(surface_id(side, "flaps", "TARGET_ANGLE"), self.flaps_demanded_angle_deg)
            writer.write(surface_id(side, "slats", "TARGET_ANGLE"), self.slats_demanded_angle_deg)
        writer.write(FLAPS_CONF_HANDLE_INDEX_HELPER, float(self.flaps_conf.index))


class SlatFlapControlComplex:
    def __init__(self, cfg: SlatFlapComputerConfig | None = None) -> None:
        self.sfcc = SlatFlapControlComputer(cfg)
        self.flaps_handle = FlapsHandle()

    def update(self, context: UpdateContext) -> None:
        self.sfcc.update(context, self.flaps_handle.signal_new_position())
        self.flaps_handle.equilibrate_old_and_current()

    def read(self, reader: SimVarReader) -> None:
        self.flaps_handle.read(reader)

    def write(self, writer: SimVarWriter) -> None:
        self.sfcc.write(writer)
