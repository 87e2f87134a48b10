"""Пневматические ёмкости (pipe / engine stage / consumer).

Модель ёмкости: фиксированный объём V, давление P и температура T.
Перенос объёма dV меняет давление по упрощённому «газ как пружина»:

    dP = K * dV / V

где K = `Fluid.bulk_modulus_pa` (линеаризация около рабочей точки, не
уравнение идеального газа). Та же K входит в объём выравнивания `DefaultValve`.

Единицы:
- Давление: Па
- Объём: м³
- Температура: К
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from aerosim.config.models import FluidConfig, PipeConfig
from aerosim.core.types import UpdateContext


@dataclass(frozen=True)
class Fluid:
    bulk_modulus_pa: float

    @classmethod
    def from_config(cls, cfg: FluidConfig | None = None) -> "Fluid":
        cfg = cfg or FluidConfig()
        return cls(bulk_modulus_pa=float(cfg.bulk_modulus_pa))


class PneumaticContainer(Protocol):
    @property
    def fluid(self) -> Fluid: ...  # pragma: no cover

    def pressure(self) -> float: ...  # pragma: no cover

    def volume(self) -> float: ...  # pragma: no cover

    def temperature(self) -> float: ...  # pragma: no cover

    def change_volume(self, volume_m3: float) -> None: ...  # pragma: no cover

    def change_fluid_amount(self, volume_m3: float, fluid_temperature_k: float) -> None: ...  # pragma: no cover

    def update_temperature(self, delta_k: float) -> None: ...  # pragma: no cover


class DefaultPipe:
    def __init__(self, cfg: PipeConfig | None = None, fluid: Fluid | None = None) -> None:
        cfg = cfg or PipeConfig()
        self._volume = float(cfg.volume_m3)
        self._pressure = float(cfg.pressure_pa)
        self._temperature = float(cfg.temperature_k)
        self._fluid = fluid or Fluid.from_config()

    def pressure(self) -> float:
        return self._pressure

    def volume(self) -> float:
        return self._volume

    def temperature(self) -> float:
        return self._temperature

    @property
    def fluid(self) -> Fluid:
        return self._fluid

    def vol_to_pressure(self, volume_m3: float) -> float:
        return self._fluid.bulk_modulus_pa * float(volume_m3) / self._volume

    def change_volume(self, volume_m3: float) -> None:
        """Добавить (dV > 0) или убрать (dV < 0) газ; давление не уходит ниже 0."""

        self._pressure = max(0.0, self._pressure + self.vol_to_pressure(volume_m3))

    def change_fluid_amount(self, volume_m3: float, fluid_temperature_k: float) -> None:
        """Как `change_volume`, но входящий газ подмешивается по температуре.

        T_new = (T*V + T_in*dV) / (V + dV), только для притока (dV > 0).
        Отток температуру ёмкости не меняет.
        """

        dv = float(volume_m3)
        if dv > 0.0:
            self._temperature = (self._temperature * self._volume + float(fluid_temperature_k) * dv) / (
                self._volume + dv
            )
        self.change_volume(dv)

    def update_pressure_only(self, delta_pa: float) -> None:
        self._pressure = max(0.0, self._pressure + float(delta_pa))

    def update_temperature(self, delta_k: float) -> None:
        self._temperature = max(0.0, self._temperature + float(delta_k))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(P={self._pressure:.0f}Pa, "
            f"V={self._volume:.3f}m3, T={self._temperature:.1f}K)"
        )


class EngineStageContainer(DefaultPipe):
    """Ступень отбора двигателя: источник давления/температуры.

    Внутренности двигателя вне модели: ступень каждый тик подтягивается к
    значениям источника, а клапаны могут из неё отбирать объём между тиками.
    """

    def update(self, source_pressure_pa: float, source_temperature_k: float) -> None:
        self.update_pressure_only(float(source_pressure_pa) - self.pressure())
        self.update_temperature(float(source_temperature_k) - self.temperature())


class WingAntiIceConsumer(DefaultPipe):
    """Потребитель (трубопровод предкрылков) с теплоотдачей в атмосферу."""

    def __init__(
        self,
        cfg: PipeConfig | None = None,
        fluid: Fluid | None = None,
        *,
        heat_conduction_rate_per_s: float = 0.1,
    ) -> None:
        super().__init__(cfg, fluid)
        self._conduction_rate = float(heat_conduction_rate_per_s)

    def radiate_heat_to_ambient(self, context: UpdateContext) -> None:
        """Закон охлаждения Ньютона, явный шаг: dT = -(T - Tamb) * dt * k.

        При dt*k > 1 шаг перескакивает через Tamb.
        """

        delta = -(self.temperature() - float(context.ambient_temperature_k)) * float(context.delta_s) * self._conduction_rate
        self.update_temperature(delta)
