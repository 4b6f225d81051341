import math

import numpy as np
import pytest

from quadlab import DEFAULT_THRESHOLDS, InvalidIntervalError, ValidationThresholds, validate


def test_accepts_smooth_function() -> None:
    res = validate(math.sin, 0.0, math.pi)
    assert res.valid
    assert res.message is None


def test_rejects_reciprocal_across_zero() -> None:
    res = validate(lambda x: 1 / x, -1.0, 1.0)
    assert not res.valid
    assert "asymptote" in res.message.lower() or "singularit" in res.message.lower()


def test_rejects_mostly_undefined_function() -> None:
    # math.sqrt raises on negatives: half of the samples count as NaN
    res = validate(math.sqrt, -1.0, 1.0)
    assert not res.valid
    assert "undefined on a large portion" in res.message

    res_np = validate(np.sqrt, -1.0, 1.0)
    assert not res_np.valid
    assert "undefined on a large portion" in res_np.message


def test_tolerates_a_few_undefined_samples() -> None:
    res = validate(lambda x: math.nan if 0.0 <= x < 0.05 else 1.0, -1.0, 1.0)
    assert res.valid


def test_detects_pole_between_samples() -> None:
    res = validate(lambda x: 1 / (x - 0.005), -1.0, 1.0)
    assert not res.valid
    assert "asymptote" in res.message


def test_detects_magnitude_jump() -> None:
    res = validate(lambda x: 1e12 if x > 0.5 else 2.0, 0.0, 1.0)
    assert not res.valid
    assert "singularity" in res.message


def test_boundary_blow_up() -> None:
    # only a + eps hits the bad region; the regular grid never does
    res = validate(lambda x: math.inf if 0.0 < x < 1e-9 else 1.0, 0.0, 1.0)
    assert not res.valid
    assert "boundary" in res.message

    def raises_near_a(x):
        if 0.0 < x < 1e-9:
            raise ValueError("outside domain")
        return 1.0

    res = validate(raises_near_a, 0.0, 1.0)
    assert not res.valid
    assert "cannot be evaluated at the boundary" in res.message


def test_thresholds_are_configurable() -> None:
    f = lambda x: 1 / (x - 0.005)
    relaxed = ValidationThresholds(pole_magnitude=1e9)
    assert not validate(f, -1.0, 1.0, DEFAULT_THRESHOLDS).valid
    assert validate(f, -1.0, 1.0, relaxed).valid


def test_message_names_the_interval() -> None:
    res = validate(lambda x: 1 / x, -2.0, 3.0)
    assert "[-2.00, 3.00]" in res.message


def test_rejects_bad_interval() -> None:
    with pytest.raises(InvalidIntervalError):
        validate(math.sin, 1.0, 1.0)
