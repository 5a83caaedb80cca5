import math

import numpy as np
import pytest

from geoprims.vectors import (
    angle360,
    as_vector,
    normalized,
    perp_dot,
    rotate_ccw,
    rotate_ccw90,
    rotate_cw,
    rotate_cw90,
    signed_angle,
    to_vector2,
    to_vector3,
)


def test_as_vector_checks_dimension():
    assert as_vector([1, 2]).dtype == float
    with pytest.raises(ValueError):
        as_vector([1, 2, 3], 2)
    with pytest.raises(ValueError):
        as_vector([[1, 2], [3, 4]])


def test_normalized_zero_vector_stays_zero():
    assert np.allclose(normalized(np.array([0.0, 0.0])), [0.0, 0.0])
    assert np.allclose(normalized(np.array([3.0, 4.0])), [0.6, 0.8])


def test_perp_dot_and_quarter_turns():
    assert perp_dot(np.array([1.0, 0.0]), np.array([0.0, 1.0])) == 1.0
    assert np.allclose(rotate_cw90(np.array([1.0, 0.0])), [0.0, -1.0])
    assert np.allclose(rotate_ccw90(np.array([1.0, 0.0])), [0.0, 1.0])


def test_rotations_by_degrees():
    assert np.allclose(rotate_cw(np.array([0.0, 1.0]), 90), [1.0, 0.0])
    assert np.allclose(rotate_ccw(np.array([1.0, 0.0]), 90), [0.0, 1.0])
    assert np.allclose(rotate_ccw(np.array([1.0, 0.0]), 45), [math.sqrt(0.5), math.sqrt(0.5)])


def test_angles_are_clockwise_positive():
    up = np.array([0.0, 1.0])
    right = np.array([1.0, 0.0])
    assert math.isclose(signed_angle(up, right), 90.0)
    assert math.isclose(signed_angle(right, up), -90.0)
    assert math.isclose(angle360(right, up), 270.0)
    assert math.isclose(angle360(up, up), 0.0, abs_tol=1e-12)


def test_dimension_casts():
    assert np.allclose(to_vector3(np.array([1.0, 2.0]), 5.0), [1.0, 2.0, 5.0])
    assert np.allclose(to_vector2(np.array([1.0, 2.0, 3.0])), [1.0, 2.0])
