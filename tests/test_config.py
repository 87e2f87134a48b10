import math

import pytest

from aerosim.config import (
    FLAPS_ASSEMBLY,
    SLATS_ASSEMBLY,
    ExhaustConfig,
    FlapSlatAssemblyConfig,
    FlapSlatMotorConfig,
    PidConfig,
    PipeConfig,
    SystemConfig,
    ValveConfig,
    WingAntiIceConfig,
)
from aerosim.core.units import PSI


class TestDefaults:
    def test_system_config_builds(self) -> None:
        cfg = SystemConfig()
        assert cfg.fluid.bulk_modulus_pa == pytest.approx(142000.0)
        assert cfg.wing_anti_ice.test_duration_s == pytest.approx(30.0)
        assert cfg.wing_anti_ice.consumer.pressure_pa == pytest.approx(14.7 * PSI)
        assert cfg.bleed.stage.volume_m3 == pytest.approx(1.0)
        assert cfg.bleed.cross_bleed_valve == ValveConfig()

    def test_flaps_preset(self) -> None:
        assert FLAPS_ASSEMBLY.max_synchro_gear_position_deg == pytest.approx(251.97)
        assert FLAPS_ASSEMBLY.flap_to_synchro_gear_ratio == pytest.approx(314.98 / 140.0)

    def test_slats_preset(self) -> None:
        assert SLATS_ASSEMBLY.max_synchro_gear_position_deg == pytest.approx(334.16)
        assert SLATS_ASSEMBLY.full_pressure_max_speed_rad_s < FLAPS_ASSEMBLY.full_pressure_max_speed_rad_s


class TestInvariants:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"volume_m3": 0.0},
            {"pressure_pa": -1.0},
            {"temperature_k": 0.0},
        ],
    )
    def test_pipe(self, kwargs) -> None:
        with pytest.raises(ValueError):
            PipeConfig(**kwargs)

    def test_valve(self) -> None:
        with pytest.raises(ValueError):
            ValveConfig(transfer_speed_per_s=0.0)
        with pytest.raises(ValueError):
            ValveConfig(open_threshold=1.5)

    def test_exhaust(self) -> None:
        with pytest.raises(ValueError):
            ExhaustConfig(open_amount=-0.1)

    def test_pid_range(self) -> None:
        with pytest.raises(ValueError):
            PidConfig(output_min=1.0, output_max=0.0)

    def test_wing_anti_ice(self) -> None:
        with pytest.raises(ValueError):
            WingAntiIceConfig(test_duration_s=0.0)

    def test_motor(self) -> None:
        with pytest.raises(ValueError):
            FlapSlatMotorConfig(time_constant_s=0.0)

    def test_assembly(self) -> None:
        with pytest.raises(ValueError):
            FlapSlatAssemblyConfig(gearbox_ratio=-1.0)
        with pytest.raises(ValueError):
            FlapSlatAssemblyConfig(max_synchro_gear_position_rad=0.0)

    def test_assembly_deg_property(self) -> None:
        cfg = FlapSlatAssemblyConfig(max_synchro_gear_position_rad=math.pi)
        assert cfg.max_synchro_gear_position_deg == pytest.approx(180.0)
