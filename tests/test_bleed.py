import pytest

from aerosim.core.types import CrossBleedValveSelectorMode, EngineBleedPushButtonMode, UpdateContext, WingAntiIcePushButtonMode
from aerosim.core.units import PSI, celsius_to_kelvin
from aerosim.pneumatic import BleedAirSupply, CrossBleedValveController, WingAntiIceComplex
from aerosim.simvars import (
    KNOB_OVHD_AIRCOND_XBLEED_POSITION,
    PNEU_XBLEED_VALVE_OPEN,
    SimVarStore,
    engine_bleed_id,
    engine_bleed_pb_id,
)

AUTO = EngineBleedPushButtonMode.AUTO
OFF = EngineBleedPushButtonMode.OFF
BLEED_PRESSURE = 40.0 * PSI
BLEED_TEMPERATURE = celsius_to_kelvin(200.0)
TICK = UpdateContext(delta_s=0.1)


@pytest.fixture()
def supply() -> BleedAirSupply:
    s = BleedAirSupply()
    for side in ("left", "right"):
        s.set_source(side, BLEED_PRESSURE, BLEED_TEMPERATURE)
    return s


class TestCrossBleedValveController:
    @pytest.mark.parametrize(
        "mode, pbs, open_",
        [
            (CrossBleedValveSelectorMode.OPEN, (AUTO, AUTO), True),
            (CrossBleedValveSelectorMode.SHUT, (OFF, AUTO), False),
            (CrossBleedValveSelectorMode.AUTO, (AUTO, AUTO), False),
            (CrossBleedValveSelectorMode.AUTO, (OFF, AUTO), True),
            (CrossBleedValveSelectorMode.AUTO, (AUTO, OFF), True),
            (CrossBleedValveSelectorMode.AUTO, (OFF, OFF), False),
        ],
    )
    def test_signal(self, mode, pbs, open_: bool) -> None:
        ctrl = CrossBleedValveController()
        ctrl.update(mode, pbs)
        assert (ctrl.signal().target_open_amount == 1.0) is open_


class TestBleedAirSupply:
    def test_stages_follow_sources(self, supply: BleedAirSupply) -> None:
        supply.update(TICK)
        for stage in supply.supplies():
            assert stage.pressure() == pytest.approx(BLEED_PRESSURE)
            assert stage.temperature() == pytest.approx(BLEED_TEMPERATURE)
        assert not supply.is_cross_bleed_open()

    def test_engine_bleed_off_stops_feeding(self, supply: BleedAirSupply) -> None:
        supply.set_engine_bleed("left", OFF)
        supply.set_cross_bleed_mode(CrossBleedValveSelectorMode.SHUT)
        supply.update(TICK)
        assert supply.stage("left").pressure() == pytest.approx(14.7 * PSI)
        assert supply.stage("right").pressure() == pytest.approx(BLEED_PRESSURE)

    def test_cross_bleed_feeds_dead_side(self, supply: BleedAirSupply) -> None:
        supply.set_engine_bleed("left", OFF)
        for _ in range(200):
            supply.update(TICK)

        assert supply.is_cross_bleed_open()
        assert supply.stage("left").pressure() == pytest.approx(BLEED_PRESSURE, abs=0.05 * PSI)
        assert supply.stage("left").temperature() > celsius_to_kelvin(100.0)

    def test_unknown_side(self, supply: BleedAirSupply) -> None:
        with pytest.raises(ValueError):
            supply.stage("center")
        with pytest.raises(ValueError):
            supply.set_engine_bleed("center", OFF)

    def test_simvar_io(self) -> None:
        store = SimVarStore(
            {
                KNOB_OVHD_AIRCOND_XBLEED_POSITION: 2.0,
                engine_bleed_pb_id(1): 0.0,
                engine_bleed_id(2, "PRESSURE"): BLEED_PRESSURE,
                engine_bleed_id(2, "TEMPERATURE"): BLEED_TEMPERATURE,
            }
        )
        supply = BleedAirSupply()
        supply.read(store)

        assert supply.cross_bleed_mode is CrossBleedValveSelectorMode.OPEN
        assert supply.engine_bleed("left") is OFF
        assert supply.engine_bleed("right") is AUTO

        supply.update(TICK)
        supply.write(store)
        assert store.read(PNEU_XBLEED_VALVE_OPEN) is True
        assert supply.stage("right").temperature() == pytest.approx(BLEED_TEMPERATURE)


def test_wing_anti_ice_on_single_engine_bleed(supply: BleedAirSupply) -> None:
    supply.set_engine_bleed("left", OFF)
    wai = WingAntiIceComplex()
    wai.update_button(WingAntiIcePushButtonMode.ON)
    ctx = UpdateContext(delta_s=0.1, is_on_ground=False)

    for _ in range(600):
        supply.update(ctx)
        wai.update(ctx, supply.supplies())

    assert supply.is_cross_bleed_open()
    assert wai.is_on()
    assert not wai.has_fault()
    assert wai.consumer_pressure("left") > 18.0 * PSI
