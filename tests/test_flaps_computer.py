import logging

import pytest

from aerosim.config.models import SlatFlapComputerConfig
from aerosim.core.types import UpdateContext
from aerosim.core.units import DEG_TO_RAD
from aerosim.flaps import FlapsConf, FlapsHandle, SlatFlapControlComplex, SlatFlapControlComputer
from aerosim.flaps.computer import CONF_INDEX, CONF_INDEX_VERSION
from aerosim.simvars import FLAPS_CONF_HANDLE_INDEX_HELPER, FLAPS_HANDLE_INDEX, SimVarStore


def ctx(ias: float = 0.0) -> UpdateContext:
    return UpdateContext(delta_s=0.1, indicated_airspeed_kt=ias)


def move_handle(complex_: SlatFlapControlComplex, position: int, ias: float = 0.0) -> FlapsConf:
    complex_.flaps_handle.set_position(position)
    complex_.update(ctx(ias))
    return complex_.sfcc.flaps_conf


class TestFlapsConf:
    def test_index_map(self) -> None:
        assert CONF_INDEX_VERSION == 1
        assert [c.index for c in FlapsConf] == [0, 1, 2, 3, 4, 5]
        assert FlapsConf.CONF_1F.index == 2

    @pytest.mark.parametrize(
        "index, conf",
        [
            (-3, FlapsConf.CONF_0),
            (0, FlapsConf.CONF_0),
            (2, FlapsConf.CONF_1F),
            (5, FlapsConf.CONF_FULL),
            (9, FlapsConf.CONF_FULL),
        ],
    )
    def test_from_index_saturates(self, index: int, conf: FlapsConf) -> None:
        assert FlapsConf.from_index(index) is conf

    def test_index_round_trip(self) -> None:
        for conf, idx in CONF_INDEX.items():
            assert FlapsConf.from_index(idx) is conf


class TestTargetAngles:
    @pytest.mark.parametrize(
        "conf, flaps_deg, slats_deg",
        [
            (FlapsConf.CONF_0, 0.0, 0.0),
            (FlapsConf.CONF_1, 0.0, 18.0),
            (FlapsConf.CONF_1F, 10.0, 18.0),
            (FlapsConf.CONF_2, 15.0, 22.0),
            (FlapsConf.CONF_3, 20.0, 22.0),
            (FlapsConf.CONF_FULL, 40.0, 27.0),
        ],
    )
    def test_table(self, conf: FlapsConf, flaps_deg: float, slats_deg: float) -> None:
        sfcc = SlatFlapControlComputer()
        assert sfcc.target_flaps_angle_from_state(conf) == flaps_deg
        assert sfcc.target_slats_angle_from_state(conf) == slats_deg


class TestFlapsHandle:
    def test_signals(self) -> None:
        handle = FlapsHandle()
        assert handle.signal_new_position() is None

        handle.set_position(3)
        assert handle.signal_new_position() == (0, 3)
        handle.equilibrate_old_and_current()
        assert handle.signal_new_position() is None

        handle.set_position(1)
        assert handle.signal_new_position() == (3, 1)
        handle.equilibrate_old_and_current()
        assert handle.signal_new_position() == (1, 1)

    def test_negative_position(self) -> None:
        handle = FlapsHandle()
        handle.set_position(-2)
        assert handle.handle_position == 0

    def test_read(self) -> None:
        handle = FlapsHandle()
        handle.read(SimVarStore({FLAPS_HANDLE_INDEX: 2.0}))
        assert handle.handle_position == 2

        # нет переменной -> прежнее положение
        handle.read(SimVarStore())
        assert handle.handle_position == 2


class TestConfigurationLogic:
    def test_sequence_on_ground(self) -> None:
        c = SlatFlapControlComplex()
        confs = [move_handle(c, pos) for pos in [0, 1, 0, 3, 0, 4]]
        assert confs == [
            FlapsConf.CONF_0,
            FlapsConf.CONF_1F,
            FlapsConf.CONF_0,
            FlapsConf.CONF_3,
            FlapsConf.CONF_0,
            FlapsConf.CONF_FULL,
        ]

    def test_handle_two(self) -> None:
        c = SlatFlapControlComplex()
        assert move_handle(c, 2) is FlapsConf.CONF_2

    @pytest.mark.parametrize("ias, conf", [(150.0, FlapsConf.CONF_1F), (220.0, FlapsConf.CONF_1)])
    def test_two_to_one(self, ias: float, conf: FlapsConf) -> None:
        c = SlatFlapControlComplex()
        move_handle(c, 2)
        assert move_handle(c, 1, ias) is conf

    @pytest.mark.parametrize(
        "ias, conf",
        [(150.0, FlapsConf.CONF_1F), (210.0, FlapsConf.CONF_1F), (220.0, FlapsConf.CONF_1)],
    )
    def test_zero_to_one(self, ias: float, conf: FlapsConf) -> None:
        c = SlatFlapControlComplex()
        assert move_handle(c, 1, ias) is conf

    def test_resting_at_one_retracts_to_conf1_above_threshold(self) -> None:
        c = SlatFlapControlComplex()
        assert move_handle(c, 1, 150.0) is FlapsConf.CONF_1F
        assert move_handle(c, 1, 200.0) is FlapsConf.CONF_1F
        assert move_handle(c, 1, 220.0) is FlapsConf.CONF_1

        # обратно в 1+F только через ручку
        assert move_handle(c, 1, 150.0) is FlapsConf.CONF_1

    def test_separate_zero_to_one_threshold(self) -> None:
        c = SlatFlapControlComplex(SlatFlapComputerConfig(handle_one_conf_airspeed_threshold_kt=100.0))
        assert move_handle(c, 1, 150.0) is FlapsConf.CONF_1

        c = SlatFlapControlComplex(SlatFlapComputerConfig(handle_one_conf_airspeed_threshold_kt=100.0))
        move_handle(c, 2)
        assert move_handle(c, 1, 150.0) is FlapsConf.CONF_1F

    def test_demanded_angles_follow_configuration(self) -> None:
        c = SlatFlapControlComplex()
        move_handle(c, 4)
        assert c.sfcc.flaps_demanded_angle_deg == 40.0
        assert c.sfcc.slats_demanded_angle_deg == 27.0

    def test_change_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        c = SlatFlapControlComplex()
        with caplog.at_level(logging.INFO, logger="aerosim.flaps.computer"):
            move_handle(c, 3)
            move_handle(c, 3)
        assert len(caplog.records) == 1
        assert "0 -> 3" in caplog.records[0].getMessage()


class TestMovementSignals:
    def test_flap_movement_tolerance(self) -> None:
        c = SlatFlapControlComplex()
        move_handle(c, 1)
        sfcc = c.sfcc
        assert sfcc.flaps_demanded_angle_deg == 10.0

        assert sfcc.signal_flap_movement(0.0) == pytest.approx(10.0 * DEG_TO_RAD)
        assert sfcc.signal_flap_movement(9.98 * DEG_TO_RAD) == pytest.approx(10.0 * DEG_TO_RAD)
        assert sfcc.signal_flap_movement(9.995 * DEG_TO_RAD) is None
        assert sfcc.signal_flap_movement(10.0 * DEG_TO_RAD) is None

    def test_slat_movement(self) -> None:
        c = SlatFlapControlComplex()
        move_handle(c, 1)
        assert c.sfcc.signal_slat_movement(0.0) == pytest.approx(18.0 * DEG_TO_RAD)
        assert c.sfcc.signal_slat_movement(18.0 * DEG_TO_RAD) is None


class TestSimVars:
    def test_write(self) -> None:
        c = SlatFlapControlComplex()
        store = SimVarStore({FLAPS_HANDLE_INDEX: 1.0})
        c.read(store)
        c.update(ctx(100.0))
        c.write(store)

        assert store.read(FLAPS_CONF_HANDLE_INDEX_HELPER) == 2.0
        assert store.read("LEFT_FLAPS_TARGET_ANGLE") == 10.0
        assert store.read("RIGHT_SLATS_TARGET_ANGLE") == 18.0
