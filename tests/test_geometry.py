import math

import numpy as np
import pytest

from geoprims import geometry


def test_point_on_circle2_starts_at_top_and_turns_clockwise():
    assert np.allclose(geometry.point_on_circle2(2, 0), [0, 2])
    assert np.allclose(geometry.point_on_circle2(2, 90), [2, 0])
    assert np.allclose(geometry.point_on_circle2(1, 180, center=(5, 5)), [5, 4])


def test_points_on_circle2_are_evenly_spaced():
    points = geometry.points_on_circle2(1, 4)
    assert np.allclose(points, [[0, 1], [1, 0], [0, -1], [-1, 0]], atol=1e-12)
    assert geometry.points_on_circle2(1, 0) == []


def test_points_in_circle2_stay_inside():
    points = geometry.points_in_circle2(3, 200, center=(1, -1))
    assert len(points) == 200
    for point in points:
        assert np.linalg.norm(point - np.array([1, -1])) <= 3 + 1e-9
    # First sample sits at r = sqrt(0.5 / count) along +y
    assert np.allclose(points[0], [1, -1 + 3 * math.sqrt(0.5 / 200)])


def test_points_on_segment_include_endpoints():
    points = geometry.points_on_segment((0, 0), (4, 0), 5)
    assert np.allclose(points, [[0, 0], [1, 0], [2, 0], [3, 0], [4, 0]])
    assert np.allclose(geometry.point_on_segment((0, 0), (4, 0), 2.0), [4, 0])


def test_point_on_circle3_planes():
    assert np.allclose(geometry.point_on_circle3("xy", 1, 90), [1, 0, 0])
    assert np.allclose(geometry.point_on_circle3("xz", 1, 0), [0, 0, 1])
    assert np.allclose(geometry.point_on_circle3("yz", 1, 90), [0, 1, 0])
    assert np.allclose(geometry.point_on_circle3("yz", 1, 0, center=(1, 1, 1)), [1, 1, 2])
    with pytest.raises(ValueError):
        geometry.point_on_circle3("xw", 1, 0)


def test_points_in_circle3_stay_in_plane():
    for point in geometry.points_in_circle3("xz", 2, 50):
        assert point[1] == 0.0
        assert np.linalg.norm(point) <= 2 + 1e-9
    assert len(geometry.points_on_circle3("xy", 1, 6)) == 6


def test_sphere_samplers():
    assert np.allclose(geometry.point_on_sphere(2, 0, 0), [0, 0, 2])
    assert np.allclose(geometry.point_on_sphere(2, 90, 0), [2, 0, 0])
    assert np.allclose(geometry.point_on_sphere(2, 0, 90), [0, 2, 0])
    assert np.allclose(geometry.point_on_spheroid(1, 3, 0, 90), [0, 3, 0])
    for point in geometry.points_on_sphere(1.5, 64):
        assert math.isclose(np.linalg.norm(point), 1.5, rel_tol=1e-9)


def test_teardrop_closes_at_both_poles():
    assert np.allclose(geometry.point_on_teardrop(1, 2, 30, 90), [0, 2, 0], atol=1e-12)
    assert np.allclose(geometry.point_on_teardrop(1, 2, 30, -90), [0, -2, 0], atol=1e-12)


def test_polygons():
    square = geometry.polygon2(4, math.sqrt(2))
    assert len(square) == 4
    assert np.allclose(square[0], [0, math.sqrt(2)])

    star = geometry.star_polygon2(5, 1, 2)
    assert len(star) == 10
    assert np.allclose(star[0], [0, 2])
    assert math.isclose(np.linalg.norm(star[1]), 1.0)


def test_angle_helpers():
    assert math.isclose(geometry.get_angle((1, 0), (0, 0), (0, 1)), 90.0)
    bisector, degrees = geometry.get_angle_bisector((1, 0), (0, 0), (0, 1))
    assert math.isclose(degrees, 90.0)
    assert np.allclose(bisector, [math.sqrt(0.5), math.sqrt(0.5)])
    assert math.isclose(geometry.get_angle_offset(1, 90), math.sqrt(2))


def test_offset_polygon_grows_clockwise_square():
    square = [(0, 0), (0, 1), (1, 1), (1, 0)]
    offset = geometry.offset_polygon(square, 1)
    assert np.allclose(offset, [[-1, -1], [-1, 2], [2, 2], [2, -1]])


def test_rect_and_circumradius():
    low, high = geometry.get_rect([(1, 5), (-2, 3), (4, -1)])
    assert np.allclose(low, [-2, -1])
    assert np.allclose(high, [4, 5])
    assert math.isclose(geometry.get_circumradius(6, 8), 5.0)
    with pytest.raises(ValueError):
        geometry.get_rect([])
