import dataclasses
import logging
import math

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from geoprims.primitives import Circle2, Circle3, Line2, Line3, Ray2, Ray3, Segment2, Segment3, Sphere


def test_wrong_dimension_raises():
    with pytest.raises(ValueError):
        Line2((0, 0, 0), (1, 0))
    with pytest.raises(ValueError):
        Sphere((0, 0), 1)


def test_degenerate_inputs_are_logged_not_rejected(caplog):
    with caplog.at_level(logging.WARNING, logger="geoprims.primitives"):
        line = Line2((0, 0), (0, 0))
        circle = Circle2((0, 0), -1)
    assert line.direction.tolist() == [0.0, 0.0]
    assert circle.radius == -1.0
    messages = [record.getMessage() for record in caplog.records]
    assert any("degenerate direction" in message for message in messages)
    assert any("negative radius" in message for message in messages)


def test_fields_are_read_only():
    segment = Segment2((0, 0), (1, 1))
    with pytest.raises(ValueError):
        segment.a[0] = 5.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        segment.a = np.zeros(2)


def test_equality_and_hash_are_exact():
    assert Segment2((0, 0), (1, 1)) == Segment2([0.0, 0.0], np.array([1, 1]))
    assert Segment2((0, 0), (1, 1)) != Segment2((0, 0), (1, 1.0000001))
    assert len({Circle2((0, 0), 1), Circle2((0, 0), 1.0)}) == 1
    assert Line2((0, 0), (1, 0)) != Ray2((0, 0), (1, 0))


def test_segment_derived_values():
    segment = Segment2((0, 0), (3, 4))
    assert np.allclose(segment.direction, [0.6, 0.8])
    assert segment.length == pytest.approx(5.0)
    assert np.allclose(segment.center, [1.5, 2])
    low, high = Segment2((3, 0), (0, 4)).aabb
    assert np.allclose(low, [0, 0])
    assert np.allclose(high, [3, 4])
    assert np.allclose(segment.get_point(0.5), [1.5, 2])
    assert np.allclose(segment.get_points(3), [[0, 0], [1.5, 2], [3, 4]])
    assert Segment2((1, 1), (1, 1)).is_degenerate


def test_casts():
    segment = Segment2((0, 0), (3, 4))
    assert np.allclose(segment.to_line().direction, [0.6, 0.8])
    assert isinstance(segment.to_ray(), Ray2)
    lifted = segment.to_segment3(z=2)
    assert isinstance(lifted, Segment3)
    assert np.allclose(lifted.a, [0, 0, 2])
    assert lifted.to_segment2() == segment

    line3 = Line2((1, 2), (0, 1)).to_line3(z=5)
    assert np.allclose(line3.origin, [1, 2, 5])
    assert np.allclose(line3.direction, [0, 1, 0])
    assert isinstance(line3.to_line2(), Line2)

    ray = Ray3((1, 2, 3), (0, 0, 1))
    assert isinstance(ray.to_line(), Line3)
    assert ray.to_ray2() == Ray2((1, 2), (0, 0))

    circle = Circle2((1, 2), 3)
    assert circle.to_sphere() == Sphere((1, 2, 0), 3)
    assert np.allclose(circle.to_circle3().normal, [0, 0, -1])
    assert Sphere((1, 2, 3), 4).to_circle2() == Circle2((1, 2), 4)
    assert Circle3.unit_xz(radius=2).to_circle2() == Circle2((0, 0), 2)
    assert Circle3.unit_xy((1, 1, 1)).to_sphere() == Sphere((1, 1, 1), 1)


def test_translation():
    segment = Segment2((0, 0), (1, 0)) + (1, 1)
    assert segment == Segment2((1, 1), (2, 1))
    assert Circle2((1, 1), 2) - (1, 0) == Circle2((0, 1), 2)
    moved = Line3((0, 0, 0), (1, 0, 0)) + (0, 0, 3)
    assert np.allclose(moved.origin, [0, 0, 3])
    assert np.allclose(moved.direction, [1, 0, 0])


def test_lerp_clamps_and_lerp_unclamped_extrapolates():
    a = Segment2((0, 0), (2, 0))
    b = Segment2((2, 2), (4, 2))
    assert Segment2.lerp(a, b, 0.5) == Segment2((1, 1), (3, 1))
    assert Segment2.lerp(a, b, 2.0) == b
    assert Segment2.lerp_unclamped(a, b, 2.0) == Segment2((4, 4), (6, 4))
    assert Circle2.lerp(Circle2((0, 0), 1), Circle2((0, 0), 3), 0.5).radius == pytest.approx(2.0)


def test_circle3_presets_normals():
    assert np.allclose(Circle3.unit_xy().normal, [0, 0, -1])
    assert np.allclose(Circle3.unit_xz().normal, [0, 1, 0], atol=1e-12)
    assert np.allclose(Circle3.unit_yz().normal, [-1, 0, 0], atol=1e-12)


def test_circle3_accepts_quaternion():
    circle = Circle3((0, 0, 0), (0, 0, 0, 1), 1)
    assert isinstance(circle.rotation, Rotation)
    assert circle == Circle3.unit_xy()


def test_circle3_lerp_slerps_rotation():
    half = Circle3.lerp(Circle3.unit_xy(), Circle3.unit_xz(radius=3), 0.5)
    assert half.radius == pytest.approx(2.0)
    assert np.allclose(half.normal, [0, math.sqrt(0.5), -math.sqrt(0.5)])
    flipped = Circle3.lerp_unclamped(Circle3.unit_xy(), Circle3.unit_xz(), 2.0)
    assert np.allclose(flipped.normal, [0, 0, 1], atol=1e-9)


def test_circle3_points_and_queries():
    circle = Circle3.unit_xy()
    assert np.allclose(circle.get_point(0), [0, 1, 0])
    assert len(circle.get_points(8)) == 8
    assert np.allclose(circle.closest_point((2, 0, 5)), [1, 0, 0])
    assert circle.distance_to((2, 0, 5)) == pytest.approx(math.sqrt(26))


def test_circle2_accessors():
    circle = Circle2((1, 1), 2)
    assert np.allclose(circle.get_point(90), [3, 1])
    assert len(circle.get_points(5)) == 5
    assert circle.contains((2, 1))
    assert not circle.contains((4, 1))
    assert circle.distance_to((1, 1.5)) == pytest.approx(-1.5)
    assert circle.perimeter == pytest.approx(4 * math.pi)


def test_sphere_accessors():
    sphere = Sphere((1, 1, 1), 2)
    assert sphere.area == pytest.approx(16 * math.pi)
    assert sphere.volume == pytest.approx(32 / 3 * math.pi)
    assert np.allclose(sphere.get_point(0, 0), [1, 1, 3])
    assert sphere.contains((1, 1, 2.5))
    assert np.allclose(sphere.closest_point((1, 1, 10)), [1, 1, 3])
    for point in sphere.get_points(16):
        assert np.linalg.norm(point - sphere.center) == pytest.approx(2.0)


def test_line_and_ray_queries():
    line = Line2((0, 0), (1, 0))
    assert np.allclose(line.get_point(3), [3, 0])
    assert np.allclose(line.closest_point((-2, 5)), [-2, 0])
    ray = Ray2((0, 0), (1, 0))
    assert np.allclose(ray.closest_point((-2, 5)), [0, 0])
    assert ray.distance_to((-3, 4)) == pytest.approx(5.0)
    assert Segment3((0, 0, 0), (0, 0, 2)).distance_to((1, 0, 1)) == pytest.approx(1.0)
