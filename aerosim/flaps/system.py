"""Сборка: SFCC + приводы закрылков и предкрылков.

Угол поверхности <-> synchro линейно:

    synchro = surface / surface_max * synchro_max

Привод получает запрос только пока SFCC сигналит движение (|цель - факт| > 0.01°);
иначе держит текущую позицию.
"""

from __future__ import annotations

from typing import Tuple
import math

from aerosim.config.models import FLAPS_ASSEMBLY, SLATS_ASSEMBLY, FlapSlatAssemblyConfig, SlatFlapComputerConfig
from aerosim.core.types import UpdateContext
from aerosim.core.units import DEG_TO_RAD
from aerosim.flaps.computer import SlatFlapControlComplex, SlatFlapControlComputer
from aerosim.hydraulic.flap_slat import FlapSlatAssembly
from aerosim.simvars import SimVarReader, SimVarWriter, hyd_circuit_pressure_id, surface_id


class SlatFlapSystem:
    def __init__(
        self,
        sfcc_cfg: SlatFlapComputerConfig | None = None,
        flaps_cfg: FlapSlatAssemblyConfig | None = None,
        slats_cfg: FlapSlatAssemblyConfig | None = None,
        circuits: Tuple[str, str] = ("green", "yellow"),
    ) -> None:
        self.circuits = circuits
        self.control = SlatFlapControlComplex(sfcc_cfg)
        self.flaps = FlapSlatAssembly("flaps", flaps_cfg or FLAPS_ASSEMBLY)
        self.slats = FlapSlatAssembly("slats", slats_cfg or SLATS_ASSEMBLY)

    @property
    def sfcc(self) -> SlatFlapControlComputer:
        return self.control.sfcc

    def _surface_to_synchro(self, assembly: FlapSlatAssembly, surface_rad: float, surface_max_deg: float) -> float:
        return float(surface_rad) / (surface_max_deg * DEG_TO_RAD) * assembly.max_synchro_gear_position

    def _synchro_to_surface(self, assembly: FlapSlatAssembly, synchro_rad: float, surface_max_deg: float) -> float:
        return float(synchro_rad) / assembly.max_synchro_gear_position * (surface_max_deg * DEG_TO_RAD)

    def flaps_angle(self) -> float:
        """Угол закрылков (рад)."""

        return self._synchro_to_surface(self.flaps, self.flaps.position_feedback(), self.sfcc.cfg.max_flaps_angle_deg)

    def slats_angle(self) -> float:
        return self._synchro_to_surface(self.slats, self.slats.position_feedback(), self.sfcc.cfg.max_slats_angle_deg)

    def update(self, context: UpdateContext, left_pressure_pa: float, right_pressure_pa: float) -> None:
        """left/right: давления двух гидроконтуров, питающих моторы PCU (Па)."""

        self.control.update(context)
        cfg = self.sfcc.cfg

        flap_target = self.sfcc.signal_flap_movement(self.flaps_angle())
        flap_request = (
            self.flaps.position_feedback()
            if flap_target is None
            else self._surface_to_synchro(self.flaps, flap_target, cfg.max_flaps_angle_deg)
        )
        slat_target = self.sfcc.signal_slat_movement(self.slats_angle())
        slat_request = (
            self.slats.position_feedback()
            if slat_target is None
            else self._surface_to_synchro(self.slats, slat_target, cfg.max_slats_angle_deg)
        )

        self.flaps.update(flap_request, left_pressure_pa, right_pressure_pa, context)
        self.slats.update(slat_request, left_pressure_pa, right_pressure_pa, context)

    def read(self, reader: SimVarReader) -> None:
        self.control.read(reader)

    def read_circuit_pressures(self, reader: SimVarReader) -> Tuple[float, float]:
        """Давления двух контуров PCU (Па) для следующего `update()`; отсутствующие = 0."""

        left, right = self.circuits
        return (
            float(reader.read(hyd_circuit_pressure_id(left), 0.0)),
            float(reader.read(hyd_circuit_pressure_id(right), 0.0)),
        )

    def write(self, writer: SimVarWriter) -> None:
        self.control.write(writer)
        self.flaps.write(writer)
        self.slats.write(writer)

        flaps_deg = math.degrees(self.flaps_angle())
        slats_deg = math.degrees(self.slats_angle())
        for side in ("left", "right"):
            writer.write(surface_id(side, "flaps", "ANGLE"), flaps_deg)
            writer.write(surface_id(side, "flaps", "POSITION_PERCENT"), 100.0 * self.flaps.position_fraction())
            writer.write(surface_id(side, "slats", "ANGLE"), slats_deg)
            writer.write(surface_id(side, "slats", "POSITION_PERCENT"), 100.0 * self.slats.position_fraction())
