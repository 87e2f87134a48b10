"""aerosim package.

Важно: пакет не должен иметь побочных эффектов при импорте.
Поэтому здесь нет eager-import'ов подсистем (пневматика/гидравлика/SFCC).

Импортируй нужное напрямую:
- from aerosim.pneumatic.wing_anti_ice import WingAntiIceComplex
- from aerosim.hydraulic.flap_slat import FlapSlatAssembly
- from aerosim.flaps.system import SlatFlapSystem
"""

from __future__ import annotations

__all__: list[str] = []
