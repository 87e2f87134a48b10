"""aerosim.core.units

Минимальный слой единиц измерения и удобных множителей.

Принцип: внутри модели всё в SI (Па, м³, К, рад, рад/с, с), а любое число
из авиационных единиц пишется с явным множителем (например, 3000 * PSI).
"""

from __future__ import annotations

import math

# Base units (conceptual SI multipliers)
METER: float = 1.0
KILOGRAM: float = 1.0
SECOND: float = 1.0

# Derived units
NEWTON: float = KILOGRAM * METER / (SECOND**2)
PASCAL: float = NEWTON / (METER**2)

# Convenience multipliers
PSI: float = 6894.757293168 * PASCAL
KNOT: float = 1852.0 / 3600.0 * METER / SECOND
CUBIC_INCH: float = 1.6387064e-5 * (METER**3)
US_GALLON: float = 231.0 * CUBIC_INCH
MINUTE: float = 60.0 * SECOND

DEG_TO_RAD: float = math.pi / 180.0
RPM_TO_RAD_S: float = 2.0 * math.pi / 60.0  # rpm -> rad/s

KELVIN_AT_0_C: float = 273.15

# ISA sea level
ISA_SEA_LEVEL_PRESSURE: float = 14.7 * PSI


def celsius_to_kelvin(t_c: float) -> float:
    return float(t_c) + KELVIN_AT_0_C


def kelvin_to_celsius(t_k: float) -> float:
    return float(t_k) - KELVIN_AT_0_C


def rad_s_to_rpm(omega: float) -> float:
    return float(omega) / RPM_TO_RAD_S


def gpm_to_m3_s(q_gpm: float) -> float:
    return float(q_gpm) * US_GALLON / MINUTE
