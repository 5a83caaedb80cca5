"""Immutable 2D and 3D primitive value types.

Every vector field is stored as a read-only float array of the right
dimension. The heavy lifting lives in :mod:`geoprims.closest`,
:mod:`geoprims.distance` and :mod:`geoprims.geometry`; the classes here are
thin, typed handles over those functions.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields, replace
from typing import Any, List, Sequence, Tuple

import numpy as np
from scipy.spatial.transform import Rotation, Slerp

from . import closest, distance, geometry
from . import intersect as _intersect
from .constants import EPSILON
from .vectors import as_vector, clamp01, magnitude, normalized, sqr_magnitude, to_vector2, to_vector3

logger = logging.getLogger(__name__)

Coord = np.ndarray

_BACK = (0.0, 0.0, -1.0)
_RIGHT = (1.0, 0.0, 0.0)


def _frozen_vector(value: Sequence[float], dim: int, name: str) -> Coord:
    arr = np.array(value, dtype=float)
    if arr.shape != (dim,):
        raise ValueError(f"{name} must be a length-{dim} vector, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


def _check_direction(owner: str, direction: Coord) -> None:
    if sqr_magnitude(direction) < EPSILON:
        logger.warning("%s has a degenerate direction %s", owner, direction.tolist())


def _check_radius(owner: str, radius: float) -> None:
    if radius < 0.0:
        logger.warning("%s has a negative radius %.6g", owner, radius)


def _key_part(value: Any) -> Any:
    if isinstance(value, np.ndarray):
        return tuple(value.tolist())
    if isinstance(value, Rotation):
        return tuple(value.as_quat().tolist())
    return value


def _lerp_value(a: Any, b: Any, t: float) -> Any:
    return a + (b - a) * t


class _Primitive:
    """Shared equality, hashing, interpolation and translation."""

    __slots__ = ()

    # Names of the fields that move under translation
    _positional: Tuple[str, ...] = ()

    def _key(self) -> Tuple[Any, ...]:
        return tuple(_key_part(getattr(self, f.name)) for f in fields(self))

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + self._key())

    def _translated(self, offset: Sequence[float], sign: float):
        changes = {}
        for name in self._positional:
            value = getattr(self, name)
            changes[name] = value + as_vector(offset, value.shape[0]) * sign
        return replace(self, **changes)

    def __add__(self, offset: Sequence[float]):
        return self._translated(offset, 1.0)

    def __sub__(self, offset: Sequence[float]):
        return self._translated(offset, -1.0)

    @classmethod
    def lerp_unclamped(cls, a, b, t: float):
        values = {f.name: _lerp_value(getattr(a, f.name), getattr(b, f.name), t) for f in fields(cls)}
        return cls(**values)

    @classmethod
    def lerp(cls, a, b, t: float):
        return cls.lerp_unclamped(a, b, clamp01(t))


# ---------------------------------------------------------------------------
# Lines and rays
# ---------------------------------------------------------------------------


class _Directed(_Primitive):
    __slots__ = ()
    _positional = ("origin",)

    def get_point(self, distance_: float) -> Coord:
        return self.origin + self.direction * distance_


@dataclass(frozen=True, eq=False)
class Line2(_Directed):
    origin: Coord
    direction: Coord

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", _frozen_vector(self.origin, 2, "origin"))
        object.__setattr__(self, "direction", _frozen_vector(self.direction, 2, "direction"))
        _check_direction("Line2", self.direction)

    def to_line3(self, z: float = 0.0) -> "Line3":
        return Line3(to_vector3(self.origin, z), to_vector3(self.direction))

    def closest_point(self, point: Sequence[float]) -> Coord:
        return closest.point_line(point, self.origin, self.direction)[0]

    def distance_to(self, point: Sequence[float]) -> float:
        return distance.point_line(point, self.origin, self.direction)


@dataclass(frozen=True, eq=False)
class Line3(_Directed):
    origin: Coord
    direction: Coord

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", _frozen_vector(self.origin, 3, "origin"))
        object.__setattr__(self, "direction", _frozen_vector(self.direction, 3, "direction"))
        _check_direction("Line3", self.direction)

    def to_line2(self) -> Line2:
        return Line2(to_vector2(self.origin), to_vector2(self.direction))

    def closest_point(self, point: Sequence[float]) -> Coord:
        return closest.point_line(point, self.origin, self.direction)[0]

    def distance_to(self, point: Sequence[float]) -> float:
        return distance.point_line(point, self.origin, self.direction)


@dataclass(frozen=True, eq=False)
class Ray2(_Directed):
    origin: Coord
    direction: Coord

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", _frozen_vector(self.origin, 2, "origin"))
        object.__setattr__(self, "direction", _frozen_vector(self.direction, 2, "direction"))
        _check_direction("Ray2", self.direction)

    def to_ray3(self, z: float = 0.0) -> "Ray3":
        return Ray3(to_vector3(self.origin, z), to_vector3(self.direction))

    def to_line(self) -> Line2:
        return Line2(self.origin, self.direction)

    def closest_point(self, point: Sequence[float]) -> Coord:
        return closest.point_ray(point, self.origin, self.direction)[0]

    def distance_to(self, point: Sequence[float]) -> float:
        return distance.point_ray(point, self.origin, self.direction)


@dataclass(frozen=True, eq=False)
class Ray3(_Directed):
    origin: Coord
    direction: Coord

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", _frozen_vector(self.origin, 3, "origin"))
        object.__setattr__(self, "direction", _frozen_vector(self.direction, 3, "direction"))
        _check_direction("Ray3", self.direction)

    def to_ray2(self) -> Ray2:
        return Ray2(to_vector2(self.origin), to_vector2(self.direction))

    def to_line(self) -> Line3:
        return Line3(self.origin, self.direction)

    def closest_point(self, point: Sequence[float]) -> Coord:
        return closest.point_ray(point, self.origin, self.direction)[0]

    def distance_to(self, point: Sequence[float]) -> float:
        return distance.point_ray(point, self.origin, self.direction)


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------


class _Segment(_Primitive):
    __slots__ = ()
    _positional = ("a", "b")

    @property
    def direction(self) -> Coord:
        """Unit vector from ``a`` to ``b``; zero for a degenerate segment."""

        return normalized(self.b - self.a)

    @property
    def length(self) -> float:
        return magnitude(self.b - self.a)

    @property
    def center(self) -> Coord:
        return (self.a + self.b) / 2.0

    @property
    def aabb(self) -> Tuple[Coord, Coord]:
        return np.minimum(self.a, self.b), np.maximum(self.a, self.b)

    @property
    def is_degenerate(self) -> bool:
        return bool(np.array_equal(self.a, self.b))

    def get_point(self, position: float) -> Coord:
        return geometry.point_on_segment(self.a, self.b, position)

    def get_points(self, count: int) -> List[Coord]:
        return geometry.points_on_segment(self.a, self.b, count)

    def closest_point(self, point: Sequence[float]) -> Coord:
        return closest.point_segment(point, self.a, self.b)[0]

    def distance_to(self, point: Sequence[float]) -> float:
        return distance.point_segment(point, self.a, self.b)


@dataclass(frozen=True, eq=False)
class Segment2(_Segment):
    a: Coord
    b: Coord

    def __post_init__(self) -> None:
        object.__setattr__(self, "a", _frozen_vector(self.a, 2, "a"))
        object.__setattr__(self, "b", _frozen_vector(self.b, 2, "b"))

    def to_segment3(self, z: float = 0.0) -> "Segment3":
        return Segment3(to_vector3(self.a, z), to_vector3(self.b, z))

    def to_line(self) -> Line2:
        return Line2(self.a, self.direction)

    def to_ray(self) -> Ray2:
        return Ray2(self.a, self.direction)


@dataclass(frozen=True, eq=False)
class Segment3(_Segment):
    a: Coord
    b: Coord

    def __post_init__(self) -> None:
        object.__setattr__(self, "a", _frozen_vector(self.a, 3, "a"))
        object.__setattr__(self, "b", _frozen_vector(self.b, 3, "b"))

    def to_segment2(self) -> Segment2:
        return Segment2(to_vector2(self.a), to_vector2(self.b))

    def to_line(self) -> Line3:
        return Line3(self.a, self.direction)

    def to_ray(self) -> Ray3:
        return Ray3(self.a, self.direction)


# ---------------------------------------------------------------------------
# Round shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Circle2(_Primitive):
    center: Coord
    radius: float

    _positional = ("center",)

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _frozen_vector(self.center, 2, "center"))
        object.__setattr__(self, "radius", float(self.radius))
        _check_radius("Circle2", self.radius)

    @property
    def perimeter(self) -> float:
        return 2.0 * math.pi * self.radius

    @property
    def area(self) -> float:
        return math.pi * self.radius * self.radius

    def get_point(self, angle: float) -> Coord:
        return geometry.point_on_circle2(self.radius, angle, self.center)

    def get_points(self, count: int) -> List[Coord]:
        return geometry.points_on_circle2(self.radius, count, self.center)

    def contains(self, point: Sequence[float]) -> bool:
        return _intersect.point_circle(point, self.center, self.radius)

    def to_sphere(self, z: float = 0.0) -> "Sphere":
        return Sphere(to_vector3(self.center, z), self.radius)

    def to_circle3(self, z: float = 0.0) -> "Circle3":
        return Circle3(to_vector3(self.center, z), Rotation.identity(), self.radius)

    def closest_point(self, point: Sequence[float]) -> Coord:
        return closest.point_circle(point, self.center, self.radius)

    def distance_to(self, point: Sequence[float]) -> float:
        """Signed: negative inside the circle."""

        return distance.point_circle(point, self.center, self.radius)


@dataclass(frozen=True, eq=False)
class Circle3(_Primitive):
    """Circle in 3D space.

    The circle lies in the XY plane of its local frame; ``rotation`` maps that
    frame into world space, so the plane normal is ``rotation * (0, 0, -1)``.
    A raw ``(x, y, z, w)`` quaternion is accepted in place of a
    :class:`scipy.spatial.transform.Rotation`.
    """

    center: Coord
    rotation: Rotation
    radius: float

    _positional = ("center",)

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _frozen_vector(self.center, 3, "center"))
        rotation = self.rotation
        if not isinstance(rotation, Rotation):
            rotation = Rotation.from_quat(np.asarray(rotation, dtype=float))
        if not rotation.single:
            raise ValueError("Circle3 rotation must be a single rotation")
        object.__setattr__(self, "rotation", rotation)
        object.__setattr__(self, "radius", float(self.radius))
        _check_radius("Circle3", self.radius)

    @classmethod
    def unit_xy(cls, center: Sequence[float] = (0.0, 0.0, 0.0), radius: float = 1.0) -> "Circle3":
        return cls(center, Rotation.identity(), radius)

    @classmethod
    def unit_xz(cls, center: Sequence[float] = (0.0, 0.0, 0.0), radius: float = 1.0) -> "Circle3":
        return cls(center, Rotation.from_euler("x", 90, degrees=True), radius)

    @classmethod
    def unit_yz(cls, center: Sequence[float] = (0.0, 0.0, 0.0), radius: float = 1.0) -> "Circle3":
        return cls(center, Rotation.from_euler("YXZ", [90, 0, 90], degrees=True), radius)

    @classmethod
    def lerp_unclamped(cls, a: "Circle3", b: "Circle3", t: float) -> "Circle3":
        # Same construction Slerp uses internally, but not limited to [0, 1]
        delta = (a.rotation.inv() * b.rotation).as_rotvec()
        rotation = a.rotation * Rotation.from_rotvec(delta * t)
        return cls(
            _lerp_value(a.center, b.center, t),
            rotation,
            _lerp_value(a.radius, b.radius, t),
        )

    @classmethod
    def lerp(cls, a: "Circle3", b: "Circle3", t: float) -> "Circle3":
        t = clamp01(t)
        slerp = Slerp([0.0, 1.0], Rotation.concatenate([a.rotation, b.rotation]))
        return cls(
            _lerp_value(a.center, b.center, t),
            slerp(t),
            _lerp_value(a.radius, b.radius, t),
        )

    @property
    def normal(self) -> Coord:
        return self.rotation.apply(_BACK)

    @property
    def perimeter(self) -> float:
        return 2.0 * math.pi * self.radius

    @property
    def area(self) -> float:
        return math.pi * self.radius * self.radius

    def get_point(self, angle: float) -> Coord:
        local = geometry.point_on_circle3("xy", self.radius, angle)
        return self.center + self.rotation.apply(local)

    def get_points(self, count: int) -> List[Coord]:
        locals_ = geometry.points_on_circle3("xy", self.radius, count)
        return [self.center + self.rotation.apply(local) for local in locals_]

    def to_sphere(self) -> "Sphere":
        return Sphere(self.center, self.radius)

    def to_circle2(self) -> Circle2:
        return Circle2(to_vector2(self.center), self.radius)

    def closest_point(self, point: Sequence[float]) -> Coord:
        """Closest point on the circle boundary.

        A point on the axis through the center is equidistant from the whole
        circle; the local +x axis is used then.
        """

        point = as_vector(point, 3)
        normal = self.normal
        to_point = point - self.center
        in_plane = to_point - normal * float(np.dot(to_point, normal))
        if sqr_magnitude(in_plane) < EPSILON:
            in_plane = self.rotation.apply(_RIGHT)
        return self.center + normalized(in_plane) * self.radius

    def distance_to(self, point: Sequence[float]) -> float:
        return magnitude(as_vector(point, 3) - self.closest_point(point))


@dataclass(frozen=True, eq=False)
class Sphere(_Primitive):
    center: Coord
    radius: float

    _positional = ("center",)

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _frozen_vector(self.center, 3, "center"))
        object.__setattr__(self, "radius", float(self.radius))
        _check_radius("Sphere", self.radius)

    @property
    def area(self) -> float:
        return 4.0 * math.pi * self.radius * self.radius

    @property
    def volume(self) -> float:
        return 4.0 / 3.0 * math.pi * self.radius ** 3

    def get_point(self, horizontal_angle: float, vertical_angle: float) -> Coord:
        return self.center + geometry.point_on_sphere(self.radius, horizontal_angle, vertical_angle)

    def get_points(self, count: int) -> List[Coord]:
        return [self.center + point for point in geometry.points_on_sphere(self.radius, count)]

    def contains(self, point: Sequence[float]) -> bool:
        return _intersect.point_sphere(point, self.center, self.radius)

    def to_circle2(self) -> Circle2:
        return Circle2(to_vector2(self.center), self.radius)

    def closest_point(self, point: Sequence[float]) -> Coord:
        return closest.point_sphere(point, self.center, self.radius)

    def distance_to(self, point: Sequence[float]) -> float:
        """Signed: negative inside the sphere."""

        return distance.point_sphere(point, self.center, self.radius)


PRIMITIVE_TYPES = (Line2, Line3, Ray2, Ray3, Segment2, Segment3, Circle2, Circle3, Sphere)
