import math

import numpy as np

from geoprims import intersect3d
from geoprims.intersection import IntersectionType


def test_line_line_crossing_and_skew():
    result = intersect3d.line_line((0, 0, 0), (1, 0, 0), (2, -1, 0), (0, 1, 0))
    assert result.kind is IntersectionType.POINT
    assert np.allclose(result.point, [2, 0, 0])

    skew = intersect3d.line_line((0, 0, 0), (1, 0, 0), (2, 1, 5), (0, 0, 1))
    assert skew.kind is IntersectionType.NONE
    assert not skew.success


def test_line_line_parallel_apart():
    result = intersect3d.line_line((0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 0, 0))
    assert result.kind is IntersectionType.NONE


def test_linear_shapes_against_sphere():
    result = intersect3d.line_sphere((-5, 0, 0), (1, 0, 0), (0, 0, 0), 1)
    assert result.kind is IntersectionType.TWO_POINTS
    assert np.allclose(result.points, [[-1, 0, 0], [1, 0, 0]])

    result = intersect3d.ray_sphere((0, 0, 0), (0, 0, 1), (0, 0, 0), 3)
    assert result.kind is IntersectionType.POINT
    assert np.allclose(result.point, [0, 0, 3])

    inside = intersect3d.segment_sphere((0, 0, 0), (0, 0.5, 0), (0, 0, 0), 3)
    assert inside.kind is IntersectionType.NONE and inside.success


def test_sphere_sphere_classification():
    same = intersect3d.sphere_sphere((1, 1, 1), 2, (1, 1, 1), 2)
    assert same.kind is IntersectionType.SPHERE
    assert np.allclose(same.center, [1, 1, 1])
    assert same.radius == 2.0

    contained = intersect3d.sphere_sphere((0, 0, 0), 3, (0.5, 0, 0), 1)
    assert contained.kind is IntersectionType.NONE and contained.success

    apart = intersect3d.sphere_sphere((0, 0, 0), 1, (5, 0, 0), 1)
    assert apart.kind is IntersectionType.NONE and not apart.success

    tangent = intersect3d.sphere_sphere((0, 0, 0), 1, (2, 0, 0), 1)
    assert tangent.kind is IntersectionType.POINT
    assert np.allclose(tangent.point, [1, 0, 0])


def test_sphere_sphere_crossing_circle():
    result = intersect3d.sphere_sphere((0, 0, 0), 1, (1, 0, 0), 1)
    assert result.kind is IntersectionType.CIRCLE
    assert np.allclose(result.center, [0.5, 0, 0])
    assert np.allclose(result.normal, [1, 0, 0])
    assert math.isclose(result.radius, math.sqrt(0.75))


def test_point_tests_use_all_three_axes():
    assert intersect3d.point_line((5, 0, 0), (0, 0, 0), (1, 0, 0))
    assert not intersect3d.point_line((0, 0, 5), (0, 0, 0), (1, 0, 0))

    assert intersect3d.point_ray((0, 0, 2), (0, 0, 0), (0, 0, 1))
    assert not intersect3d.point_ray((0, 0, -2), (0, 0, 0), (0, 0, 1))

    assert intersect3d.point_segment((2, 0, 0), (0, 0, 0), (4, 0, 0))
    assert not intersect3d.point_segment((2, 0, 1), (0, 0, 0), (4, 0, 0))
    assert not intersect3d.point_segment((5, 0, 0), (0, 0, 0), (4, 0, 0))


def test_near_concentric_spheres_still_cross():
    result = intersect3d.sphere_sphere((0, 0, 0), 1, (0, 0, 0.002), 1)
    assert result.kind is IntersectionType.CIRCLE
    assert np.allclose(result.center, [0, 0, 0.001])
    assert math.isclose(result.radius, 1.0, abs_tol=1e-5)
