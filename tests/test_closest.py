import logging
import math

import numpy as np
import pytest

from geoprims import closest
from geoprims.constants import EPSILON


def test_point_line_projection_is_unbounded():
    point, t = closest.point_line((3, 4), (0, 0), (1, 0))
    assert np.allclose(point, [3, 0])
    assert t == pytest.approx(3.0)

    point, t = closest.point_line((-3, 4), (0, 0), (1, 0))
    assert np.allclose(point, [-3, 0])
    assert t == pytest.approx(-3.0)


def test_point_line_degenerate_direction_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="geoprims.closest"):
        point, t = closest.point_line((3, 4), (1, 1), (0, 0))
    assert np.allclose(point, [1, 1])
    assert t == 0.0
    assert any("degenerate" in record.getMessage() for record in caplog.records)


def test_point_ray_clamps_behind_origin():
    point, t = closest.point_ray((-2, 1), (0, 0), (1, 0))
    assert np.allclose(point, [0, 0])
    assert t == 0.0

    point, t = closest.point_ray((2, 1), (0, 0), (2, 0))
    assert np.allclose(point, [2, 0])
    assert t == pytest.approx(1.0)


def test_point_segment_clamps_to_endpoints():
    point, t = closest.point_segment((5, 1), (0, 0), (4, 0))
    assert np.allclose(point, [4, 0])
    assert t == 1.0

    point, t = closest.point_segment((-1, 1), (0, 0), (4, 0))
    assert np.allclose(point, [0, 0])
    assert t == 0.0

    point, t = closest.point_segment((1, 2), (0, 0), (4, 0))
    assert np.allclose(point, [1, 0])
    assert t == pytest.approx(0.25)


def test_point_segment_zero_length(caplog):
    with caplog.at_level(logging.WARNING, logger="geoprims.closest"):
        point, t = closest.point_segment((5, 5), (1, 2), (1, 2))
    assert np.allclose(point, [1, 2])
    assert t == 0.0
    assert caplog.records


def test_point_circle_radial_projection():
    assert np.allclose(closest.point_circle((3, 4), (0, 0), 1), [0.6, 0.8])
    # A point on the center falls back to +x
    assert np.allclose(closest.point_circle((2, 2), (2, 2), 3), [5, 2])
    assert np.allclose(closest.point_sphere((0, 0, 5), (0, 0, 0), 2), [0, 0, 2])


def test_line_line_crossing_and_parallel():
    point_a, point_b = closest.line_line((0, 0), (1, 0), (1, -1), (0, 1))
    assert np.allclose(point_a, [1, 0])
    assert np.allclose(point_b, [1, 0])

    point_a, point_b = closest.line_line((0, 0), (1, 0), (0, 1), (1, 0))
    assert np.allclose(point_a, [0, 0])
    assert np.allclose(point_b, [0, 1])


def test_line_segment_clamps_segment_parameter():
    line_point, segment_point = closest.line_segment((0, 0), (1, 0), (2, 1), (2, 3))
    assert np.allclose(line_point, [2, 0])
    assert np.allclose(segment_point, [2, 1])


def test_line_circle_separate():
    line_point, circle_point = closest.line_circle((0, 0), (1, 0), (0, 3), 1)
    assert np.allclose(line_point, [0, 0])
    assert np.allclose(circle_point, [0, 2])


def test_ray_ray_crossing_and_apart():
    point_a, point_b = closest.ray_ray((0, 0), (1, 0), (2, -1), (0, 1))
    assert np.allclose(point_a, [2, 0])
    assert np.allclose(point_b, [2, 0])

    point_a, point_b = closest.ray_ray((0, 0), (1, 0), (-2, 1), (0, 1))
    assert np.allclose(point_a, [0, 0])
    assert np.allclose(point_b, [-2, 1])


def test_ray_segment_misses_to_the_side():
    ray_point, segment_point = closest.ray_segment((0, 0), (1, 0), (2, 1), (2, 3))
    assert np.allclose(ray_point, [2, 0])
    assert np.allclose(segment_point, [2, 1])


def test_ray_circle_from_inside_hits_far_side():
    ray_point, circle_point = closest.ray_circle((0, 0), (1, 0), (0, 0), 2)
    assert np.allclose(ray_point, [2, 0])
    assert np.allclose(circle_point, [2, 0])


def test_segment_segment_cases():
    point1, point2 = closest.segment_segment((0, 0), (2, 2), (0, 2), (2, 0))
    assert np.allclose(point1, [1, 1])
    assert np.allclose(point2, [1, 1])

    # Collinear, apart
    point1, point2 = closest.segment_segment((0, 0), (1, 0), (3, 0), (5, 0))
    assert np.allclose(point1, [1, 0])
    assert np.allclose(point2, [3, 0])

    # Parallel, offset
    point1, point2 = closest.segment_segment((0, 0), (4, 0), (1, 1), (2, 1))
    assert np.allclose(point1, [1, 0])
    assert np.allclose(point2, [1, 1])

    # Zero-length first segment
    point1, point2 = closest.segment_segment((1, 1), (1, 1), (0, 0), (2, 0))
    assert np.allclose(point1, [1, 1])
    assert np.allclose(point2, [1, 0])


def test_segment_circle_inside_uses_nearer_endpoint():
    segment_point, circle_point = closest.segment_circle((-0.5, 0), (0.25, 0), (0, 0), 1)
    assert np.allclose(segment_point, [-0.5, 0])
    assert np.allclose(circle_point, [-1, 0])


def test_circle_circle_faces_each_other():
    point_a, point_b = closest.circle_circle((0, 0), 1, (5, 0), 2)
    assert np.allclose(point_a, [1, 0])
    assert np.allclose(point_b, [3, 0])


def test_line_line_3d_skew_lines():
    point_a, point_b = closest.line_line_3d((0, 0, 0), (1, 0, 0), (2, 1, 5), (0, 0, 1))
    assert np.allclose(point_a, [2, 0, 0])
    assert np.allclose(point_b, [2, 1, 0])


def test_line_line_3d_non_unit_directions():
    point_a, point_b = closest.line_line_3d((0, 0, 0), (2, 0, 0), (2, 1, 5), (0, 0, 1))
    assert np.allclose(point_a, [2, 0, 0])
    assert np.allclose(point_b, [2, 1, 0])


def test_line_line_3d_parallel():
    point_a, point_b = closest.line_line_3d((0, 0, 0), (1, 0, 0), (3, 1, 0), (2, 0, 0))
    assert np.allclose(point_a, [0, 0, 0])
    assert np.allclose(point_b, [0, 1, 0])
    assert math.isclose(np.linalg.norm(point_b - point_a), 1.0)


def test_segment_circle_zero_length_at_center_reaches_boundary():
    segment_point, circle_point = closest.segment_circle((1, 1), (1, 1), (1, 1), 2)
    assert np.allclose(segment_point, [1, 1])
    assert np.allclose(circle_point, [3, 1])

    segment_point, circle_point = closest.segment_circle((3, 1), (3, 1), (1, 1), 2)
    assert np.allclose(segment_point, [3, 1])
    assert np.allclose(circle_point, [3, 1])


@pytest.mark.parametrize("t", [0.0, 0.2, 0.5, 0.75, 1.0])
def test_point_segment_recovers_parameter(t):
    segment_a = np.array([1.0, 2.0])
    segment_b = np.array([5.0, -1.0])
    point, recovered = closest.point_segment(segment_a + (segment_b - segment_a) * t, segment_a, segment_b)
    assert recovered == pytest.approx(t, abs=EPSILON)
    assert np.allclose(point, segment_a + (segment_b - segment_a) * t)


def test_point_segment_stays_inside_segment_bounds():
    rng = np.random.default_rng(7)
    segment_a = np.array([-2.0, 1.0, 0.5])
    segment_b = np.array([3.0, 4.0, -1.0])
    low = np.minimum(segment_a, segment_b) - EPSILON
    high = np.maximum(segment_a, segment_b) + EPSILON
    for point in rng.uniform(-10.0, 10.0, size=(50, 3)):
        projected, t = closest.point_segment(point, segment_a, segment_b)
        assert 0.0 <= t <= 1.0
        assert np.all(low <= projected) and np.all(projected <= high)
