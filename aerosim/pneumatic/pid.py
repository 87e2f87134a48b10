"""PID-регулятор с ограничением выхода (используется клапанами WAI, ошибка в psi)."""

from __future__ import annotations

from typing import Optional

from aerosim.config.models import PidConfig
from aerosim.core.validation import clamp


class PidController:
    """Discrete PID with clamped output.

    The integral is only accumulated while the output is not saturated in the
    direction of the error (conditional integration), so a closed valve does
    not wind the regulator up.
    """

    def __init__(self, cfg: PidConfig | None = None, setpoint: float = 0.0) -> None:
        self.cfg = cfg or PidConfig()
        self.setpoint = float(setpoint)
        self._integral = 0.0
        self._last_measurement: Optional[float] = None
        self._output = clamp(0.0, self.cfg.output_min, self.cfg.output_max)

    @property
    def output(self) -> float:
        return self._output

    @property
    def integral(self) -> float:
        return self._integral

    def reset(self) -> None:
        self._integral = 0.0
        self._last_measurement = None
        self._output = clamp(0.0, self.cfg.output_min, self.cfg.output_max)

    def next_control_output(self, measurement: float, dt: float) -> float:
        cfg = self.cfg
        pv = float(measurement)
        err = self.setpoint - pv

        # производная по измерению, без «удара» при смене уставки
        if self._last_measurement is None or dt <= 0.0:
            d_term = 0.0
        else:
            d_term = -cfg.kd * (pv - self._last_measurement) / dt
        self._last_measurement = pv

        p_term = cfg.kp * err
        candidate = self._integral + err * max(0.0, float(dt))
        unclamped = p_term + cfg.ki * candidate + d_term

        saturated_high = unclamped > cfg.output_max and err > 0.0
        saturated_low = unclamped < cfg.output_min and err < 0.0
        if not (saturated_high or saturated_low):
            self._integral = candidate

        self._output = clamp(p_term + cfg.ki * self._integral + d_term, cfg.output_min, cfg.output_max)
        return self._output
