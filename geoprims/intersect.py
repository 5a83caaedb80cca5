"""Typed intersections between 2D primitives.

Line-like pairs are solved with the perp-dot product: its magnitude near zero
means parallel, otherwise it is the determinant of the 2x2 system solved by
Cramer's rule. Bounded primitives then filter the raw parameters (rays by
``t >= -EPSILON``, segments by ``t in [-EPSILON, 1 + EPSILON]``).

Queries against circles only use dot products, so the same functions are
reused for spheres in :mod:`geoprims.intersect3d`.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from .constants import EPSILON, EPSILON_SQUARED
from .intersection import Intersection
from .logging_utils import apply_debug_logging
from .vectors import as_vector, dot, magnitude, normalized, perp_dot, rotate_ccw90, sqr_magnitude

logger = logging.getLogger(__name__)


def _side(perp: float) -> int:
    if perp < -EPSILON:
        return -1
    if perp > EPSILON:
        return 1
    return 0


def _degenerate(direction: np.ndarray, label: str) -> bool:
    if sqr_magnitude(direction) < EPSILON:
        logger.warning("%s direction %s is degenerate, no intersection reported", label, direction.tolist())
        return True
    return False


# ---------------------------------------------------------------------------
# Point tests
# ---------------------------------------------------------------------------


def point_line_side(point: Sequence[float], origin: Sequence[float], direction: Sequence[float]) -> int:
    """Which side of the line ``point`` is on: -1, 0 (on the line) or 1."""

    point, origin, direction = as_vector(point, 2), as_vector(origin, 2), as_vector(direction, 2)
    return _side(perp_dot(point - origin, direction))


def point_line(point: Sequence[float], origin: Sequence[float], direction: Sequence[float]) -> bool:
    return point_line_side(point, origin, direction) == 0


def point_ray(point: Sequence[float], origin: Sequence[float], direction: Sequence[float]) -> bool:
    point, origin, direction = as_vector(point, 2), as_vector(origin, 2), as_vector(direction, 2)
    to_point = point - origin
    if _side(perp_dot(to_point, direction)) != 0:
        return False
    return dot(direction, to_point) > -EPSILON


def point_segment_side(point: Sequence[float], segment_a: Sequence[float], segment_b: Sequence[float]) -> int:
    point, segment_a, segment_b = as_vector(point, 2), as_vector(segment_a, 2), as_vector(segment_b, 2)
    from_a_to_b = segment_b - segment_a
    if sqr_magnitude(from_a_to_b) < EPSILON:
        return 0
    return _side(perp_dot(point - segment_a, normalized(from_a_to_b)))


def point_segment(point: Sequence[float], segment_a: Sequence[float], segment_b: Sequence[float]) -> bool:
    point, segment_a, segment_b = as_vector(point, 2), as_vector(segment_a, 2), as_vector(segment_b, 2)
    from_a_to_b = segment_b - segment_a
    sqr_segment_length = sqr_magnitude(from_a_to_b)
    if sqr_segment_length < EPSILON:
        # The segment is a point
        return bool(np.array_equal(point, segment_a))
    return _point_segment(point, segment_a, from_a_to_b, sqr_segment_length)


def _point_segment(point: np.ndarray, segment_a: np.ndarray, from_a_to_b: np.ndarray, sqr_segment_length: float) -> bool:
    segment_length = math.sqrt(sqr_segment_length)
    segment_direction = from_a_to_b / segment_length
    to_point = point - segment_a
    if _side(perp_dot(to_point, segment_direction)) != 0:
        return False
    projection = dot(segment_direction, to_point)
    return -EPSILON < projection < segment_length + EPSILON


def point_segment_collinear(segment_a: Sequence[float], segment_b: Sequence[float], point: Sequence[float]) -> bool:
    """Whether a point already known to be collinear lies between the endpoints.

    Compares along x, or along y when the segment is vertical.
    """

    segment_a, segment_b, point = as_vector(segment_a), as_vector(segment_b), as_vector(point)
    axis = 1 if abs(segment_a[0] - segment_b[0]) < EPSILON else 0
    low, high = sorted((segment_a[axis], segment_b[axis]))
    return bool(low <= point[axis] <= high)


def point_circle(point: Sequence[float], center: Sequence[float], radius: float) -> bool:
    return magnitude(as_vector(point) - as_vector(center)) < radius + EPSILON


point_sphere = point_circle


# ---------------------------------------------------------------------------
# Line-like pairs
# ---------------------------------------------------------------------------


def line_line(
    origin_a: Sequence[float], direction_a: Sequence[float], origin_b: Sequence[float], direction_b: Sequence[float]
) -> Intersection:
    origin_a, direction_a, origin_b, direction_b = (
        as_vector(origin_a),
        as_vector(direction_a),
        as_vector(origin_b),
        as_vector(direction_b),
    )
    if _degenerate(direction_a, "Line") or _degenerate(direction_b, "Line"):
        return Intersection.none()
    origin_b_to_a = origin_a - origin_b
    denominator = perp_dot(direction_a, direction_b)
    perp_dot_b = perp_dot(direction_b, origin_b_to_a)
    if abs(denominator) < EPSILON:
        perp_dot_a = perp_dot(direction_a, origin_b_to_a)
        if abs(perp_dot_a) > EPSILON or abs(perp_dot_b) > EPSILON:
            return Intersection.none()
        return Intersection.line(origin_a, direction_a)
    return Intersection.at_point(origin_a + direction_a * (perp_dot_b / denominator))


def line_ray(
    line_origin: Sequence[float], line_direction: Sequence[float], ray_origin: Sequence[float], ray_direction: Sequence[float]
) -> Intersection:
    line_origin, line_direction, ray_origin, ray_direction = (
        as_vector(line_origin),
        as_vector(line_direction),
        as_vector(ray_origin),
        as_vector(ray_direction),
    )
    if _degenerate(line_direction, "Line") or _degenerate(ray_direction, "Ray"):
        return Intersection.none()
    ray_origin_to_line_origin = line_origin - ray_origin
    denominator = perp_dot(line_direction, ray_direction)
    perp_dot_a = perp_dot(line_direction, ray_origin_to_line_origin)
    if abs(denominator) < EPSILON:
        perp_dot_b = perp_dot(ray_direction, ray_origin_to_line_origin)
        if abs(perp_dot_a) > EPSILON or abs(perp_dot_b) > EPSILON:
            return Intersection.none()
        return Intersection.ray(ray_origin, ray_direction)
    ray_distance = perp_dot_a / denominator
    if ray_distance > -EPSILON:
        return Intersection.at_point(ray_origin + ray_direction * ray_distance)
    return Intersection.none()


def line_segment(
    line_origin: Sequence[float], line_direction: Sequence[float], segment_a: Sequence[float], segment_b: Sequence[float]
) -> Intersection:
    line_origin, line_direction, segment_a, segment_b = (
        as_vector(line_origin),
        as_vector(line_direction),
        as_vector(segment_a),
        as_vector(segment_b),
    )
    if _degenerate(line_direction, "Line"):
        return Intersection.none()
    segment_a_to_origin = line_origin - segment_a
    segment_direction = segment_b - segment_a
    denominator = perp_dot(line_direction, segment_direction)
    perp_dot_a = perp_dot(line_direction, segment_a_to_origin)
    if abs(denominator) < EPSILON:
        perp_dot_b = perp_dot(normalized(segment_direction), segment_a_to_origin)
        if abs(perp_dot_a) > EPSILON or abs(perp_dot_b) > EPSILON:
            return Intersection.none()
        # Collinear
        if sqr_magnitude(segment_direction) < EPSILON:
            return Intersection.at_point(segment_a)
        if dot(line_direction, segment_direction) > 0.0:
            return Intersection.segment(segment_a, segment_b)
        return Intersection.segment(segment_b, segment_a)
    segment_distance = perp_dot_a / denominator
    if -EPSILON < segment_distance < 1.0 + EPSILON:
        return Intersection.at_point(segment_a + segment_direction * segment_distance)
    return Intersection.none()


def ray_ray(
    origin_a: Sequence[float], direction_a: Sequence[float], origin_b: Sequence[float], direction_b: Sequence[float]
) -> Intersection:
    origin_a, direction_a, origin_b, direction_b = (
        as_vector(origin_a),
        as_vector(direction_a),
        as_vector(origin_b),
        as_vector(direction_b),
    )
    if _degenerate(direction_a, "Ray") or _degenerate(direction_b, "Ray"):
        return Intersection.none()
    origin_b_to_a = origin_a - origin_b
    denominator = perp_dot(direction_a, direction_b)
    perp_dot_a = perp_dot(direction_a, origin_b_to_a)
    perp_dot_b = perp_dot(direction_b, origin_b_to_a)
    if abs(denominator) < EPSILON:
        if abs(perp_dot_a) > EPSILON or abs(perp_dot_b) > EPSILON:
            return Intersection.none()
        # Collinear
        origin_b_projection = -dot(direction_a, origin_b_to_a)
        if dot(direction_a, direction_b) > 0.0:
            # Codirected: the overlap starts at the origin further ahead
            start = origin_b if origin_b_projection > 0.0 else origin_a
            return Intersection.ray(start, direction_a)
        if origin_b_projection < -EPSILON:
            return Intersection.none()
        if origin_b_projection < EPSILON:
            return Intersection.at_point(origin_a)
        return Intersection.segment(origin_a, origin_b)

    distance_a = perp_dot_b / denominator
    if distance_a < -EPSILON:
        return Intersection.none()
    distance_b = perp_dot_a / denominator
    if distance_b < -EPSILON:
        return Intersection.none()
    return Intersection.at_point(origin_a + direction_a * distance_a)


def ray_segment(
    ray_origin: Sequence[float], ray_direction: Sequence[float], segment_a: Sequence[float], segment_b: Sequence[float]
) -> Intersection:
    ray_origin, ray_direction, segment_a, segment_b = (
        as_vector(ray_origin),
        as_vector(ray_direction),
        as_vector(segment_a),
        as_vector(segment_b),
    )
    if _degenerate(ray_direction, "Ray"):
        return Intersection.none()
    segment_a_to_origin = ray_origin - segment_a
    segment_direction = segment_b - segment_a
    denominator = perp_dot(ray_direction, segment_direction)
    perp_dot_a = perp_dot(ray_direction, segment_a_to_origin)
    perp_dot_b = perp_dot(normalized(segment_direction), segment_a_to_origin)
    if abs(denominator) < EPSILON:
        if abs(perp_dot_a) > EPSILON or abs(perp_dot_b) > EPSILON:
            return Intersection.none()
        # Collinear
        segment_a_projection = dot(ray_direction, segment_a - ray_origin)
        if sqr_magnitude(segment_direction) < EPSILON:
            if segment_a_projection > -EPSILON:
                return Intersection.at_point(segment_a)
            return Intersection.none()
        segment_b_projection = dot(ray_direction, segment_b - ray_origin)
        if segment_a_projection > -EPSILON:
            if segment_b_projection > -EPSILON:
                if segment_b_projection > segment_a_projection:
                    return Intersection.segment(segment_a, segment_b)
                return Intersection.segment(segment_b, segment_a)
            if segment_a_projection > EPSILON:
                return Intersection.segment(ray_origin, segment_a)
            return Intersection.at_point(ray_origin)
        if segment_b_projection > -EPSILON:
            if segment_b_projection > EPSILON:
                return Intersection.segment(ray_origin, segment_b)
            return Intersection.at_point(ray_origin)
        return Intersection.none()

    ray_distance = perp_dot_b / denominator
    segment_distance = perp_dot_a / denominator
    if ray_distance > -EPSILON and -EPSILON < segment_distance < 1.0 + EPSILON:
        return Intersection.at_point(segment_a + segment_direction * segment_distance)
    return Intersection.none()


def _segment_segment_collinear(
    left_a: np.ndarray, left_b: np.ndarray, sqr_left_length: float, right_a: np.ndarray, right_b: np.ndarray
) -> Intersection:
    """Overlap of two codirected collinear segments where ``left_a`` comes first."""

    left_direction = left_b - left_a
    right_a_projection = dot(left_direction, right_a - left_b)
    if abs(right_a_projection) < EPSILON:
        # LA------LB
        #         RA------RB
        return Intersection.at_point(left_b)
    if right_a_projection < 0.0:
        # LA------LB
        #     RA--RB
        #     RA------RB
        right_b_projection = dot(left_direction, right_b - left_a)
        end = left_b if right_b_projection > sqr_left_length else right_b
        return Intersection.segment(right_a, end)
    # LA------LB
    #             RA------RB
    return Intersection.none()


def segment_segment(
    segment1_a: Sequence[float], segment1_b: Sequence[float], segment2_a: Sequence[float], segment2_b: Sequence[float]
) -> Intersection:
    segment1_a, segment1_b, segment2_a, segment2_b = (
        as_vector(segment1_a),
        as_vector(segment1_b),
        as_vector(segment2_a),
        as_vector(segment2_b),
    )
    from_2a_to_1a = segment1_a - segment2_a
    direction1 = segment1_b - segment1_a
    direction2 = segment2_b - segment2_a
    sqr_segment1_length = sqr_magnitude(direction1)
    sqr_segment2_length = sqr_magnitude(direction2)
    segment1_is_point = sqr_segment1_length < EPSILON
    segment2_is_point = sqr_segment2_length < EPSILON
    if segment1_is_point and segment2_is_point:
        if np.array_equal(segment1_a, segment2_a):
            return Intersection.at_point(segment1_a)
        return Intersection.none()
    if segment1_is_point:
        if _point_segment(segment1_a, segment2_a, direction2, sqr_segment2_length):
            return Intersection.at_point(segment1_a)
        return Intersection.none()
    if segment2_is_point:
        if _point_segment(segment2_a, segment1_a, direction1, sqr_segment1_length):
            return Intersection.at_point(segment2_a)
        return Intersection.none()

    denominator = perp_dot(direction1, direction2)
    perp_dot1 = perp_dot(direction1, from_2a_to_1a)
    perp_dot2 = perp_dot(direction2, from_2a_to_1a)
    if abs(denominator) < EPSILON:
        if abs(perp_dot1) > EPSILON or abs(perp_dot2) > EPSILON:
            return Intersection.none()
        # Collinear: order the two intervals along direction1
        if dot(direction1, direction2) > 0.0:
            if -dot(direction1, from_2a_to_1a) > -EPSILON:
                return _segment_segment_collinear(segment1_a, segment1_b, sqr_segment1_length, segment2_a, segment2_b)
            return _segment_segment_collinear(segment2_a, segment2_b, sqr_segment2_length, segment1_a, segment1_b)
        if dot(direction1, segment2_b - segment1_a) > -EPSILON:
            return _segment_segment_collinear(segment1_a, segment1_b, sqr_segment1_length, segment2_b, segment2_a)
        return _segment_segment_collinear(segment2_b, segment2_a, sqr_segment2_length, segment1_a, segment1_b)

    distance1 = perp_dot2 / denominator
    if distance1 < -EPSILON or distance1 > 1.0 + EPSILON:
        return Intersection.none()
    distance2 = perp_dot1 / denominator
    if distance2 < -EPSILON or distance2 > 1.0 + EPSILON:
        return Intersection.none()
    return Intersection.at_point(segment1_a + direction1 * distance1)


# ---------------------------------------------------------------------------
# Round shapes
# ---------------------------------------------------------------------------


def line_circle(
    line_origin: Sequence[float], line_direction: Sequence[float], center: Sequence[float], radius: float
) -> Intersection:
    line_origin, line_direction, center = as_vector(line_origin), as_vector(line_direction), as_vector(center)
    if _degenerate(line_direction, "Line"):
        return Intersection.none()
    origin_to_center = center - line_origin
    center_projection = dot(line_direction, origin_to_center)
    sqr_distance_to_line = sqr_magnitude(origin_to_center) - center_projection * center_projection
    sqr_distance_to_intersection = radius * radius - sqr_distance_to_line
    if sqr_distance_to_intersection < -EPSILON:
        return Intersection.none()
    if sqr_distance_to_intersection < EPSILON:
        return Intersection.at_point(line_origin + line_direction * center_projection)
    distance_to_intersection = math.sqrt(sqr_distance_to_intersection)
    return Intersection.two_points(
        line_origin + line_direction * (center_projection - distance_to_intersection),
        line_origin + line_direction * (center_projection + distance_to_intersection),
    )


def ray_circle(
    ray_origin: Sequence[float], ray_direction: Sequence[float], center: Sequence[float], radius: float
) -> Intersection:
    """Intersect a ray with a circle.

    When the ray starts inside the circle only the far root lies on the ray
    and a single ``POINT`` is reported.
    """

    ray_origin, ray_direction, center = as_vector(ray_origin), as_vector(ray_direction), as_vector(center)
    if _degenerate(ray_direction, "Ray"):
        return Intersection.none()
    origin_to_center = center - ray_origin
    center_projection = dot(ray_direction, origin_to_center)
    if center_projection + radius < -EPSILON:
        return Intersection.none()
    sqr_distance_to_line = sqr_magnitude(origin_to_center) - center_projection * center_projection
    sqr_distance_to_intersection = radius * radius - sqr_distance_to_line
    if sqr_distance_to_intersection < -EPSILON:
        return Intersection.none()
    if sqr_distance_to_intersection < EPSILON:
        if center_projection < -EPSILON:
            return Intersection.none()
        return Intersection.at_point(ray_origin + ray_direction * center_projection)

    distance_to_intersection = math.sqrt(sqr_distance_to_intersection)
    distance_a = center_projection - distance_to_intersection
    distance_b = center_projection + distance_to_intersection
    if distance_a < -EPSILON:
        if distance_b < -EPSILON:
            return Intersection.none()
        return Intersection.at_point(ray_origin + ray_direction * distance_b)
    return Intersection.two_points(ray_origin + ray_direction * distance_a, ray_origin + ray_direction * distance_b)


def segment_circle(
    segment_a: Sequence[float], segment_b: Sequence[float], center: Sequence[float], radius: float
) -> Intersection:
    segment_a, segment_b, center = as_vector(segment_a), as_vector(segment_b), as_vector(center)
    segment_a_to_center = center - segment_a
    from_a_to_b = segment_b - segment_a
    segment_length = magnitude(from_a_to_b)
    if segment_length < EPSILON:
        distance_to_point = magnitude(segment_a_to_center)
        if distance_to_point < radius + EPSILON:
            if distance_to_point > radius - EPSILON:
                return Intersection.at_point(segment_a)
            # Inside the circle
            return Intersection.none(success=True)
        return Intersection.none()

    segment_direction = from_a_to_b / segment_length
    center_projection = dot(segment_direction, segment_a_to_center)
    if center_projection + radius < -EPSILON or center_projection - radius > segment_length + EPSILON:
        return Intersection.none()
    sqr_distance_to_line = sqr_magnitude(segment_a_to_center) - center_projection * center_projection
    sqr_distance_to_intersection = radius * radius - sqr_distance_to_line
    if sqr_distance_to_intersection < -EPSILON:
        return Intersection.none()
    if sqr_distance_to_intersection < EPSILON:
        if center_projection < -EPSILON or center_projection > segment_length + EPSILON:
            return Intersection.none()
        return Intersection.at_point(segment_a + segment_direction * center_projection)

    distance_to_intersection = math.sqrt(sqr_distance_to_intersection)
    distance_a = center_projection - distance_to_intersection
    distance_b = center_projection + distance_to_intersection
    a_after_start = distance_a > -EPSILON
    b_before_end = distance_b < segment_length + EPSILON
    if a_after_start and b_before_end:
        return Intersection.two_points(
            segment_a + segment_direction * distance_a,
            segment_a + segment_direction * distance_b,
        )
    if not a_after_start and not b_before_end:
        # The segment is inside the circle
        return Intersection.none(success=True)
    if a_after_start and distance_a < segment_length + EPSILON:
        return Intersection.at_point(segment_a + segment_direction * distance_a)
    if distance_b > -EPSILON and b_before_end:
        return Intersection.at_point(segment_a + segment_direction * distance_b)
    return Intersection.none()


def _round_contact(
    center_a: np.ndarray, radius_a: float, center_b: np.ndarray, radius_b: float
) -> Optional[Intersection]:
    """Outcome for two round shapes with distinct centers, or None when they cross.

    Covers outer and inner tangency (one ``POINT``), separation (``NONE``,
    failure) and nesting (``NONE``, success).
    """

    from_b_to_a = center_a - center_b
    # magnitude is steadier than the squared form near the boundary
    distance = magnitude(from_b_to_a)
    sum_of_radii = radius_a + radius_b
    if abs(distance - sum_of_radii) < EPSILON:
        return Intersection.at_point(center_b + from_b_to_a * (radius_b / sum_of_radii))
    if distance > sum_of_radii:
        return Intersection.none()
    difference_of_radii = radius_a - radius_b
    if abs(distance - abs(difference_of_radii)) < EPSILON:
        return Intersection.at_point(center_b - from_b_to_a * (radius_b / difference_of_radii))
    if distance < abs(difference_of_radii):
        return Intersection.none(success=True)
    return None


def _radical_middle(
    center_a: np.ndarray, radius_a: float, center_b: np.ndarray, radius_b: float
) -> Tuple[np.ndarray, float]:
    """Foot of the radical line on the center line and the squared half-chord ratio."""

    from_b_to_a = center_a - center_b
    distance_sqr = sqr_magnitude(from_b_to_a)
    radius_a_sqr = radius_a * radius_a
    distance_to_middle = 0.5 * (radius_a_sqr - radius_b * radius_b) / distance_sqr + 0.5
    middle = center_a - from_b_to_a * distance_to_middle
    discriminant = max(0.0, radius_a_sqr / distance_sqr - distance_to_middle * distance_to_middle)
    return middle, discriminant


def circle_circle(center_a: Sequence[float], radius_a: float, center_b: Sequence[float], radius_b: float) -> Intersection:
    center_a, center_b = as_vector(center_a), as_vector(center_b)
    from_b_to_a = center_a - center_b
    if sqr_magnitude(from_b_to_a) < EPSILON_SQUARED:
        if abs(radius_a - radius_b) < EPSILON:
            return Intersection.circle(center_a, radius=radius_a)
        # One circle is inside the other
        return Intersection.none(success=True)
    contact = _round_contact(center_a, radius_a, center_b, radius_b)
    if contact is not None:
        return contact
    middle, discriminant = _radical_middle(center_a, radius_a, center_b, radius_b)
    offset = rotate_ccw90(from_b_to_a) * math.sqrt(discriminant)
    return Intersection.two_points(middle + offset, middle - offset)


apply_debug_logging(globals(), logger=logger)
