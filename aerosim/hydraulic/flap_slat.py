"""Привод закрылков/предкрылков: PCU с двумя гидромоторами.

Соглашения:
- flap control arm: внутренний угол выходного вала (рад);
- synchro: внешний угол датчика положения, synchro = arm * (flap_gear / synchro_gear);
- давления контуров приходят аргументами каждый тик (Па), ссылок на соседние
  подсистемы привод не хранит.

Скорость вала:
- 0, если P_left + P_right <= 800 psi (тормоз не отпущен);
- иначе v_full * (P_left + P_right) / (2 * 3000 psi),
  с ограничением 0.05 рад/с в зоне 6.69° до цели (простое торможение, не профиль).

Позиция хранится в synchro-координатах, чтобы «доехал» означало точное равенство
запрошенному углу.
"""

from __future__ import annotations

import logging
import math

from aerosim.config.models import FlapSlatAssemblyConfig, FlapSlatMotorConfig
from aerosim.core.types import UpdateContext
from aerosim.core.units import CUBIC_INCH, DEG_TO_RAD, PSI, gpm_to_m3_s, rad_s_to_rpm
from aerosim.core.validation import clamp
from aerosim.simvars import SimVarWriter, hyd_position_id

logger = logging.getLogger(__name__)


class FlapSlatHydraulicMotor:
    def __init__(self, cfg: FlapSlatMotorConfig | None = None) -> None:
        self.cfg = cfg or FlapSlatMotorConfig()
        self._speed_rad_s = 0.0
        self._flow_m3_s = 0.0
        self._total_volume_to_actuator_m3 = 0.0
        self._total_volume_returned_to_reservoir_m3 = 0.0

    @property
    def speed_rad_s(self) -> float:
        return self._speed_rad_s

    @property
    def speed_rpm(self) -> float:
        return rad_s_to_rpm(self._speed_rad_s)

    @property
    def displacement_in3(self) -> float:
        return float(self.cfg.displacement_m3 / CUBIC_INCH)

    def update_speed(self, speed_rad_s: float, context: UpdateContext) -> None:
        # low-pass: раскрутка/торможение мотора
        alpha = 1.0 - math.exp(-float(context.delta_s) / float(self.cfg.time_constant_s))
        self._speed_rad_s += (float(speed_rad_s) - self._speed_rad_s) * alpha

        # остаточное вращение обнуляем, только когда и команда ниже порога
        min_rpm = self.cfg.min_speed_rpm
        if abs(self.speed_rpm) < min_rpm and abs(rad_s_to_rpm(speed_rad_s)) < min_rpm:
            self._speed_rad_s = 0.0

        # Q[gpm] = rpm * D[in³] / 231
        flow_gpm = abs(self.speed_rpm) * self.displacement_in3 / 231.0
        self._flow_m3_s = gpm_to_m3_s(flow_gpm)

        dv = self._flow_m3_s * float(context.delta_s)
        self._total_volume_to_actuator_m3 += dv
        self._total_volume_returned_to_reservoir_m3 += dv

    def torque_nm(self, pressure_pa: float) -> float:
        """Момент на валу: 0.113 * P[psi] * D[in³] / 2π (фунт-дюйм -> Н·м)."""

        return 0.113 * (float(pressure_pa) / PSI) * self.displacement_in3 / (2.0 * math.pi)

    def flow(self) -> float:
        return self._flow_m3_s

    def used_volume(self) -> float:
        return self._total_volume_to_actuator_m3

    def reservoir_return(self) -> float:
        return self._total_volume_returned_to_reservoir_m3

    def reset_accumulators(self) -> None:
        self._total_volume_to_actuator_m3 = 0.0
        self._total_volume_returned_to_reservoir_m3 = 0.0

    def __repr__(self) -> str:
        return f"FlapSlatHydraulicMotor(speed={self.speed_rpm:.0f}rpm, flow={self._flow_m3_s:.2e}m3/s)"


class FlapSlatAssembly:
    def __init__(self, surface: str, cfg: FlapSlatAssemblyConfig | None = None) -> None:
        self.cfg = cfg or FlapSlatAssemblyConfig()
        self.surface = surface
        self.position_id = hyd_position_id(surface)

        self._synchro_position_rad = 0.0
        self._current_speed_rad_s = 0.0
        self._current_max_speed_rad_s = 0.0

        self.left_motor = FlapSlatHydraulicMotor(self.cfg.motor)
        self.right_motor = FlapSlatHydraulicMotor(self.cfg.motor)

    # ---------- geometry ----------

    @property
    def max_synchro_gear_position(self) -> float:
        return float(self.cfg.max_synchro_gear_position_rad)

    def synchro_angle_to_flap_angle(self, synchro_rad: float) -> float:
        return float(synchro_rad) / self.cfg.flap_to_synchro_gear_ratio

    @property
    def flap_control_arm_position(self) -> float:
        return self.synchro_angle_to_flap_angle(self._synchro_position_rad)

    @property
    def max_flap_control_arm_position(self) -> float:
        return self.synchro_angle_to_flap_angle(self.max_synchro_gear_position)

    def position_feedback(self) -> float:
        """Угол synchro (рад)."""

        return self._synchro_position_rad

    def position_fraction(self) -> float:
        return self._synchro_position_rad / self.max_synchro_gear_position

    @property
    def current_speed(self) -> float:
        return self._current_speed_rad_s

    @property
    def current_max_speed(self) -> float:
        return self._current_max_speed_rad_s

    # ---------- update ----------

    def update(
        self,
        synchro_gear_angle_request: float,
        left_pressure_pa: float,
        right_pressure_pa: float,
        context: UpdateContext,
    ) -> None:
        request = clamp(synchro_gear_angle_request, 0.0, self.max_synchro_gear_position)

        self._update_current_max_speed(request, left_pressure_pa, right_pressure_pa)
        self._update_speed_and_position(request, context)
        self._update_motor_flows(left_pressure_pa, right_pressure_pa, context)

    def _update_current_max_speed(self, request: float, left_pressure_pa: float, right_pressure_pa: float) -> None:
        cfg = self.cfg
        total_psi = (float(left_pressure_pa) + float(right_pressure_pa)) / PSI

        if total_psi > cfg.min_movement_pressure_psi:
            speed = cfg.full_pressure_max_speed_rad_s * total_psi / (2.0 * cfg.max_circuit_pressure_psi)
            if self._is_approaching_requested_position(request):
                speed = min(speed, cfg.approach_speed_limit_rad_s)
            self._current_max_speed_rad_s = float(speed)
        else:
            self._current_max_speed_rad_s = 0.0

    def _is_approaching_requested_position(self, request: float) -> bool:
        threshold = self.cfg.approach_threshold_deg * DEG_TO_RAD
        pos = self._synchro_position_rad
        if self._current_speed_rad_s > 0.0:
            return request - pos < threshold
        if self._current_speed_rad_s < 0.0:
            return pos - request < threshold
        return False

    def _update_speed_and_position(self, request: float, context: UpdateContext) -> None:
        step = self._current_max_speed_rad_s * float(context.delta_s) * self.cfg.flap_to_synchro_gear_ratio
        pos = self._synchro_position_rad

        if request > pos:
            pos += step
            self._current_speed_rad_s = self._current_max_speed_rad_s
        elif request < pos:
            pos -= step
            self._current_speed_rad_s = -self._current_max_speed_rad_s
        else:
            self._current_speed_rad_s = 0.0

        # перелёт за цель -> ровно в цель
        if (self._current_speed_rad_s > 0.0 and pos > request) or (
            self._current_speed_rad_s < 0.0 and pos < request
        ):
            pos = request

        self._synchro_position_rad = clamp(pos, 0.0, self.max_synchro_gear_position)

    def _update_motor_flows(self, left_pressure_pa: float, right_pressure_pa: float, context: UpdateContext) -> None:
        torque_shaft_speed = self._current_speed_rad_s * self.cfg.flap_gear_ratio

        left_torque = self.left_motor.torque_nm(max(0.0, float(left_pressure_pa)))
        right_torque = self.right_motor.torque_nm(max(0.0, float(right_pressure_pa)))
        total_torque = left_torque + right_torque

        if total_torque > 0.0:
            left_ratio = left_torque / total_torque
            right_ratio = right_torque / total_torque
        else:
            # нет давления ни в одном контуре: делим поровну, без NaN
            logger.debug("%s: zero total motor torque, even split", self.surface)
            left_ratio = right_ratio = 0.5

        gearbox = self.cfg.gearbox_ratio
        self.left_motor.update_speed(torque_shaft_speed * left_ratio * gearbox, context)
        self.right_motor.update_speed(torque_shaft_speed * right_ratio * gearbox, context)

    # ---------- accumulators / output ----------

    def reset_left_accumulators(self) -> None:
        self.left_motor.reset_accumulators()

    def reset_right_accumulators(self) -> None:
        self.right_motor.reset_accumulators()

    def write(self, writer: SimVarWriter) -> None:
        writer.write(self.position_id, self.position_fraction())

    def __repr__(self) -> str:
        return (
            f"FlapSlatAssembly({self.surface}, synchro={math.degrees(self._synchro_position_rad):.2f}°, "
            f"speed={self._current_speed_rad_s:.3f}rad/s)"
        )
