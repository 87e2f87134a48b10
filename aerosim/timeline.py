from __future__ import annotations

from typing import Dict, Iterable, Mapping

import numpy as np


class Timeline:
    """Per-tick observation buffers (float64), kept in memory.

    Keys are fixed at construction; a key missing from an observation is stored
    as NaN for that tick. Buffers grow by doubling.
    """

    def __init__(self, keys: Iterable[str], capacity: int = 1024) -> None:
        self.keys = tuple(keys)
        if not self.keys:
            raise ValueError("Timeline needs at least one key")
        capacity = max(1, int(capacity))

        self._time = np.zeros((capacity,), dtype=np.float64)
        self._buf: Dict[str, np.ndarray] = {k: np.full((capacity,), np.nan, dtype=np.float64) for k in self.keys}
        self._n = 0

    def __len__(self) -> int:
        return self._n

    def _grow(self) -> None:
        cap = self._time.shape[0]
        self._time = np.concatenate([self._time, np.zeros((cap,), dtype=np.float64)])
        for k, arr in self._buf.items():
            self._buf[k] = np.concatenate([arr, np.full((cap,), np.nan, dtype=np.float64)])

    def record(self, t: float, observations: Mapping[str, float]) -> None:
        if self._n >= self._time.shape[0]:
            self._grow()

        i = self._n
        self._time[i] = float(t)
        for k in self.keys:
            self._buf[k][i] = float(observations.get(k, np.nan))
        self._n += 1

    @property
    def time(self) -> np.ndarray:
        return self._time[: self._n]

    def __getitem__(self, key: str) -> np.ndarray:
        return self._buf[key][: self._n]

    def as_dict(self) -> Dict[str, np.ndarray]:
        return {"time": self.time.copy(), **{k: self[k].copy() for k in self.keys}}
