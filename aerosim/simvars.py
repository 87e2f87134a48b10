"""Граница с хост-симулятором: именованные скаляры без единиц.

Модель внутри работает в SI; на границе только float/bool по фиксированному
строковому идентификатору. Конвертацию единиц делает сторона, которая пишет
или читает переменную (углы в градусах, давления в Па).

Непрочитанная/отсутствующая переменная возвращает переданный default:
подсистема держит прежнее значение, ошибки «устаревших данных» нет.
"""

from __future__ import annotations

from typing import Dict, Mapping, Protocol, Union

SimValue = Union[float, bool]

# --- inputs ---
FLAPS_HANDLE_INDEX = "FLAPS_HANDLE_INDEX"
BUTTON_OVHD_ANTI_ICE_WING_POSITION = "BUTTON_OVHD_ANTI_ICE_WING_Position"
AIRSPEED_INDICATED = "AIRSPEED INDICATED"
AMBIENT_PRESSURE = "AMBIENT PRESSURE"
AMBIENT_TEMPERATURE = "AMBIENT TEMPERATURE"
SIM_ON_GROUND = "SIM ON GROUND"
KNOB_OVHD_AIRCOND_XBLEED_POSITION = "KNOB_OVHD_AIRCOND_XBLEED_Position"

# --- outputs: SFCC ---
FLAPS_CONF_HANDLE_INDEX_HELPER = "FLAPS_CONF_HANDLE_INDEX_HELPER"

# --- outputs: wing anti-ice ---
PNEU_WING_ANTI_ICE_SYSTEM_ON = "PNEU_WING_ANTI_ICE_SYSTEM_ON"
PNEU_WING_ANTI_ICE_HAS_FAULT = "PNEU_WING_ANTI_ICE_HAS_FAULT"

# --- outputs: bleed ---
PNEU_XBLEED_VALVE_OPEN = "PNEU_XBLEED_VALVE_OPEN"


def surface_id(side: str, surface: str, quantity: str) -> str:
    """surface_id("left", "flaps", "TARGET_ANGLE") -> "LEFT_FLAPS_TARGET_ANGLE"."""

    return f"{side.upper()}_{surface.upper()}_{quantity.upper()}"


def wing_anti_ice_side_id(side: str, quantity: str) -> str:
    return f"PNEU_WING_ANTI_ICE_{side.upper()}_{quantity.upper()}"


def hyd_position_id(surface: str) -> str:
    return f"HYD_{surface.upper()}_POSITION"


def hyd_circuit_pressure_id(circuit: str) -> str:
    """hyd_circuit_pressure_id("green") -> "HYD_GREEN_PRESSURE" (Па)."""

    return f"HYD_{circuit.upper()}_PRESSURE"


def engine_bleed_pb_id(engine_number: int) -> str:
    return f"OVHD_PNEU_ENG_{int(engine_number)}_BLEED_PB_IS_AUTO"


def engine_bleed_id(engine_number: int, quantity: str) -> str:
    """engine_bleed_id(1, "PRESSURE") -> "PNEU_ENG_1_BLEED_PRESSURE" (Па / К)."""

    return f"PNEU_ENG_{int(engine_number)}_BLEED_{quantity.upper()}"


class SimVarReader(Protocol):
    def read(self, name: str, default: SimValue = 0.0) -> SimValue: ...  # pragma: no cover


class SimVarWriter(Protocol):
    def write(self, name: str, value: SimValue) -> None: ...  # pragma: no cover


class SimVarStore:
    """Простейшее in-memory хранилище переменных (reader + writer)."""

    def __init__(self, initial: Mapping[str, SimValue] | None = None) -> None:
        self._values: Dict[str, SimValue] = dict(initial or {})

    def read(self, name: str, default: SimValue = 0.0) -> SimValue:
        return self._values.get(name, default)

    def write(self, name: str, value: SimValue) -> None:
        self._values[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def snapshot(self) -> Dict[str, float]:
        """Все значения как float (bool -> 0/1)."""

        return {k: float(v) for k, v in self._values.items()}
