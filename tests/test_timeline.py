import numpy as np
import pytest

from aerosim.timeline import Timeline


def test_record_and_grow() -> None:
    tl = Timeline(["a", "b"], capacity=2)
    for i in range(5):
        tl.record(0.1 * i, {"a": float(i), "b": 2.0 * i})

    assert len(tl) == 5
    np.testing.assert_allclose(tl.time, [0.0, 0.1, 0.2, 0.3, 0.4])
    np.testing.assert_allclose(tl["b"], [0.0, 2.0, 4.0, 6.0, 8.0])


def test_missing_key_is_nan() -> None:
    tl = Timeline(["a", "b"])
    tl.record(0.0, {"a": 1.0})
    assert tl["a"][0] == 1.0
    assert np.isnan(tl["b"][0])


def test_as_dict_copies() -> None:
    tl = Timeline(["a"])
    tl.record(0.0, {"a": 1.0})
    d = tl.as_dict()
    d["a"][0] = 42.0
    assert tl["a"][0] == 1.0
    assert set(d) == {"time", "a"}


def test_requires_keys() -> None:
    with pytest.raises(ValueError):
        Timeline([])
