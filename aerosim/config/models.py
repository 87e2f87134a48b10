from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict
import math

from aerosim.core.units import DEG_TO_RAD, ISA_SEA_LEVEL_PRESSURE, PSI, CUBIC_INCH, celsius_to_kelvin
from aerosim.core.validation import ensure_in_range, ensure_non_negative, ensure_positive


@dataclass(frozen=True)
class FluidConfig:
    bulk_modulus_pa: float = 142000.0   # «жёсткость» воздуха для dP = K * dV / V

    def __post_init__(self) -> None:
        ensure_positive(self.bulk_modulus_pa, "bulk_modulus_pa")


@dataclass(frozen=True)
class PipeConfig:
    volume_m3: float = 1.0
    pressure_pa: float = ISA_SEA_LEVEL_PRESSURE
    temperature_k: float = celsius_to_kelvin(15.0)

    def __post_init__(self) -> None:
        ensure_positive(self.volume_m3, "volume_m3")
        ensure_non_negative(self.pressure_pa, "pressure_pa")
        ensure_positive(self.temperature_k, "temperature_k")


@dataclass(frozen=True)
class ValveConfig:
    transfer_speed_per_s: float = 3.0   # скорость выравнивания давлений (1/с)
    open_threshold: float = 0.0         # valve считается открытым при open_amount > порога

    def __post_init__(self) -> None:
        ensure_positive(self.transfer_speed_per_s, "transfer_speed_per_s")
        ensure_in_range(self.open_threshold, 0.0, 1.0, "open_threshold")


@dataclass(frozen=True)
class ExhaustConfig:
    transfer_speed_per_s: float = 3.0
    open_amount: float = 1.0            # фиксирован при создании

    def __post_init__(self) -> None:
        ensure_positive(self.transfer_speed_per_s, "transfer_speed_per_s")
        ensure_in_range(self.open_amount, 0.0, 1.0, "open_amount")


@dataclass(frozen=True)
class PidConfig:
    kp: float = 0.2
    ki: float = 0.5
    kd: float = 0.0
    output_min: float = 0.0
    output_max: float = 1.0

    def __post_init__(self) -> None:
        if self.output_min > self.output_max:
            raise ValueError("output_min must be <= output_max")


@dataclass(frozen=True)
class WingAntiIceConfig:
    consumer: PipeConfig = PipeConfig(volume_m3=1.0, pressure_pa=14.7 * PSI, temperature_k=celsius_to_kelvin(15.0))
    valve: ValveConfig = ValveConfig()
    exhaust: ExhaustConfig = ExhaustConfig()
    pid: PidConfig = PidConfig()

    target_pressure_psi: float = 22.5        # уставка регулятора (абсолютное давление)
    test_duration_s: float = 30.0            # наземный тест клапанов
    supplier_pressurized_ratio: float = 1.05 # supply > 1.05 * ambient
    heat_conduction_rate_per_s: float = 0.1  # Newton cooling: dT = -(T - Tamb) * dt * k

    def __post_init__(self) -> None:
        ensure_positive(self.target_pressure_psi, "target_pressure_psi")
        ensure_positive(self.test_duration_s, "test_duration_s")
        ensure_positive(self.supplier_pressurized_ratio, "supplier_pressurized_ratio")
        ensure_non_negative(self.heat_conduction_rate_per_s, "heat_conduction_rate_per_s")


@dataclass(frozen=True)
class BleedConfig:
    # ступень отбора каждого двигателя; до первого чтения источника держит ISA
    stage: PipeConfig = PipeConfig(volume_m3=1.0, pressure_pa=ISA_SEA_LEVEL_PRESSURE, temperature_k=celsius_to_kelvin(15.0))
    cross_bleed_valve: ValveConfig = ValveConfig()


@dataclass(frozen=True)
class FlapSlatMotorConfig:
    displacement_m3: float = 0.32 * CUBIC_INCH
    time_constant_s: float = 0.5       # раскрутка/торможение мотора (low-pass)
    min_speed_rpm: float = 20.0        # ниже скорость обнуляется

    def __post_init__(self) -> None:
        ensure_positive(self.displacement_m3, "displacement_m3")
        ensure_positive(self.time_constant_s, "time_constant_s")
        ensure_non_negative(self.min_speed_rpm, "min_speed_rpm")


@dataclass(frozen=True)
class FlapSlatAssemblyConfig:
    full_pressure_max_speed_rad_s: float = 0.11
    max_synchro_gear_position_rad: float = 251.97 * DEG_TO_RAD
    synchro_gear_ratio: float = 140.0
    gearbox_ratio: float = 16.632
    flap_gear_ratio: float = 314.98
    motor: FlapSlatMotorConfig = FlapSlatMotorConfig()

    min_movement_pressure_psi: float = 800.0     # сумма левый+правый
    max_circuit_pressure_psi: float = 3000.0
    approach_threshold_deg: float = 6.69         # зона торможения у цели (synchro)
    approach_speed_limit_rad_s: float = 0.05

    def __post_init__(self) -> None:
        ensure_positive(self.full_pressure_max_speed_rad_s, "full_pressure_max_speed_rad_s")
        ensure_positive(self.max_synchro_gear_position_rad, "max_synchro_gear_position_rad")
        ensure_positive(self.synchro_gear_ratio, "synchro_gear_ratio")
        ensure_positive(self.gearbox_ratio, "gearbox_ratio")
        ensure_positive(self.flap_gear_ratio, "flap_gear_ratio")
        ensure_non_negative(self.min_movement_pressure_psi, "min_movement_pressure_psi")
        ensure_positive(self.max_circuit_pressure_psi, "max_circuit_pressure_psi")
        ensure_non_negative(self.approach_threshold_deg, "approach_threshold_deg")
        ensure_non_negative(self.approach_speed_limit_rad_s, "approach_speed_limit_rad_s")

    @property
    def flap_to_synchro_gear_ratio(self) -> float:
        return float(self.flap_gear_ratio / self.synchro_gear_ratio)

    @property
    def max_synchro_gear_position_deg(self) -> float:
        return float(math.degrees(self.max_synchro_gear_position_rad))


FLAPS_ASSEMBLY = FlapSlatAssemblyConfig()
SLATS_ASSEMBLY = FlapSlatAssemblyConfig(
    full_pressure_max_speed_rad_s=0.08,
    max_synchro_gear_position_rad=334.16 * DEG_TO_RAD,
)


@dataclass(frozen=True)
class SlatFlapComputerConfig:
    # Оба порога исторически 210 kt; переход 0->1 держим отдельным параметром.
    handle_one_conf_airspeed_threshold_kt: float = 210.0
    conf1f_to_conf1_airspeed_threshold_kt: float = 210.0
    equal_angle_delta_deg: float = 0.01

    max_flaps_angle_deg: float = 40.0
    max_slats_angle_deg: float = 27.0

    flaps_angle_deg: Dict[str, float] = field(default_factory=lambda: {
        "0": 0.0,
        "1": 0.0,
        "1F": 10.0,
        "2": 15.0,
        "3": 20.0,
        "FULL": 40.0,
    })
    slats_angle_deg: Dict[str, float] = field(default_factory=lambda: {
        "0": 0.0,
        "1": 18.0,
        "1F": 18.0,
        "2": 22.0,
        "3": 22.0,
        "FULL": 27.0,
    })

    def __post_init__(self) -> None:
        ensure_non_negative(self.handle_one_conf_airspeed_threshold_kt, "handle_one_conf_airspeed_threshold_kt")
        ensure_non_negative(self.conf1f_to_conf1_airspeed_threshold_kt, "conf1f_to_conf1_airspeed_threshold_kt")
        ensure_positive(self.max_flaps_angle_deg, "max_flaps_angle_deg")
        ensure_positive(self.max_slats_angle_deg, "max_slats_angle_deg")


@dataclass(frozen=True)
class SystemConfig:
    fluid: FluidConfig = FluidConfig()
    bleed: BleedConfig = BleedConfig()
    wing_anti_ice: WingAntiIceConfig = WingAntiIceConfig()
    flaps: FlapSlatAssemblyConfig = FLAPS_ASSEMBLY
    slats: FlapSlatAssemblyConfig = SLATS_ASSEMBLY
    sfcc: SlatFlapComputerConfig = field(default_factory=SlatFlapComputerConfig)
