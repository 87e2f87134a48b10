"""Контроллеры клапанов противообледенения крыла (WAI).

Наземный тест клапанов: явный конечный автомат:

    IDLE ──(On, на земле)──> TESTING ──(таймер = 30 с)──> TEST_COMPLETE
      │                                                     │
      └──────────(в воздухе, On)──> AIRBORNE <──────────────┘

- таймер растёт только при On + давление от источника + на земле + тест не закончен;
- отрыв от земли сбрасывает таймер и признак «тест закончен» при любом положении кнопки;
- «ожидание» 30 с есть накопленное время тиков, не блокирующее ожидание.

Переход: чистая функция `step_test_state(state, inputs)`; контроллер только
хранит текущее состояние и PID.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional
import logging

from aerosim.config.models import WingAntiIceConfig
from aerosim.core.types import UpdateContext, WingAntiIcePushButtonMode
from aerosim.core.units import PSI
from aerosim.pneumatic.pid import PidController
from aerosim.pneumatic.valves import ValveSignal

logger = logging.getLogger(__name__)


class WingAntiIcePhase(Enum):
    IDLE = "idle"
    TESTING = "testing"
    TEST_COMPLETE = "test_complete"
    AIRBORNE = "airborne"


@dataclass(frozen=True, slots=True)
class WingAntiIceTestState:
    phase: WingAntiIcePhase = WingAntiIcePhase.IDLE
    timer_s: float = 0.0

    @property
    def signals_on(self) -> bool:
        return self.phase in (WingAntiIcePhase.TESTING, WingAntiIcePhase.AIRBORNE)

    @property
    def test_done(self) -> bool:
        return self.phase is WingAntiIcePhase.TEST_COMPLETE


@dataclass(frozen=True, slots=True)
class WingAntiIceInputs:
    button: WingAntiIcePushButtonMode
    is_on_ground: bool
    supplier_pressurized: bool
    delta_s: float


def step_test_state(
    state: WingAntiIceTestState,
    inputs: WingAntiIceInputs,
    *,
    test_duration_s: float = 30.0,
) -> WingAntiIceTestState:
    button_on = inputs.button is WingAntiIcePushButtonMode.ON

    if not inputs.is_on_ground:
        phase = WingAntiIcePhase.AIRBORNE if button_on else WingAntiIcePhase.IDLE
        return WingAntiIceTestState(phase=phase, timer_s=0.0)

    if state.test_done:
        return state

    if not button_on:
        # таймер не сбрасываем: только отрыв от земли перезапускает тест
        return replace(state, phase=WingAntiIcePhase.IDLE)

    timer = state.timer_s
    if inputs.supplier_pressurized:
        timer = min(timer + max(0.0, float(inputs.delta_s)), float(test_duration_s))

    if timer >= test_duration_s:
        return WingAntiIceTestState(phase=WingAntiIcePhase.TEST_COMPLETE, timer_s=float(test_duration_s))
    return WingAntiIceTestState(phase=WingAntiIcePhase.TESTING, timer_s=timer)


class WingAntiIceValveController:
    """Регулирующий контроллер: PID по давлению потребителя + наземный тест."""

    def __init__(self, cfg: WingAntiIceConfig | None = None) -> None:
        self.cfg = cfg or WingAntiIceConfig()
        self.pid = PidController(self.cfg.pid, setpoint=self.cfg.target_pressure_psi)

        self._state = WingAntiIceTestState()
        self._button = WingAntiIcePushButtonMode.OFF
        self._is_on_ground = True
        self._supplier_pressurized = False
        self._control_output = 0.0

    @property
    def state(self) -> WingAntiIceTestState:
        return self._state

    @property
    def timer_s(self) -> float:
        return self._state.timer_s

    def signals_on(self) -> bool:
        return self._state.signals_on

    def test_done(self) -> bool:
        return self._state.test_done

    def update_pid(self, consumer_pressure_pa: float, context: UpdateContext) -> float:
        """Шаг регулятора; результат хранится до запроса `signal()`."""

        self._control_output = self.pid.next_control_output(
            float(consumer_pressure_pa) / PSI, float(context.delta_s)
        )
        return self._control_output

    def update(
        self,
        context: UpdateContext,
        button: WingAntiIcePushButtonMode,
        supplier_pressurized: bool,
    ) -> None:
        previous = self._state
        self._button = button
        self._is_on_ground = bool(context.is_on_ground)
        self._supplier_pressurized = bool(supplier_pressurized)

        self._state = step_test_state(
            previous,
            WingAntiIceInputs(
                button=button,
                is_on_ground=self._is_on_ground,
                supplier_pressurized=self._supplier_pressurized,
                delta_s=float(context.delta_s),
            ),
            test_duration_s=self.cfg.test_duration_s,
        )

        if self._state.test_done and not previous.test_done:
            logger.info("wing anti-ice ground test complete after %.1f s", self._state.timer_s)
        if not self.is_regulating():
            self.pid.reset()

    def is_regulating(self) -> bool:
        airborne = not self._is_on_ground
        return (
            self._state.signals_on
            and self._supplier_pressurized
            and (airborne or not self._state.test_done)
        )

    def signal(self) -> Optional[ValveSignal]:
        if self._button is WingAntiIcePushButtonMode.OFF:
            return ValveSignal.closed()
        if self.is_regulating():
            return ValveSignal(self._control_output)
        return ValveSignal.closed()


class OnOffValveController:
    """Простой вариант без регулирования и теста: On -> открыт, Off -> закрыт."""

    def __init__(self) -> None:
        self._button = WingAntiIcePushButtonMode.OFF

    def update(self, button: WingAntiIcePushButtonMode) -> None:
        self._button = button

    def signals_on(self) -> bool:
        return self._button is WingAntiIcePushButtonMode.ON

    def signal(self) -> Optional[ValveSignal]:
        if self._button is WingAntiIcePushButtonMode.ON:
            return ValveSignal.open()
        return ValveSignal.closed()
