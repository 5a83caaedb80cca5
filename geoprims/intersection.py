"""Tagged intersection results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np


class IntersectionType(Enum):
    NONE = "none"
    POINT = "point"
    TWO_POINTS = "two_points"
    LINE = "line"
    RAY = "ray"
    SEGMENT = "segment"
    CIRCLE = "circle"
    SPHERE = "sphere"


def _vec(value: Optional[Sequence[float]]) -> Optional[np.ndarray]:
    if value is None:
        return None
    return np.array(value, dtype=float)


@dataclass(frozen=True, eq=False)
class Intersection:
    """Outcome of an intersection query.

    ``kind`` says what the shared locus looks like and which payload fields
    are populated:

    * ``POINT``: ``point_a``
    * ``TWO_POINTS``: ``point_a`` and ``point_b``
    * ``LINE`` / ``RAY``: ``point_a`` as origin, ``direction``
    * ``SEGMENT``: ``point_a`` and ``point_b`` as ordered endpoints
    * ``CIRCLE``: ``point_a`` as center, ``normal`` (3D only) and ``radius``
    * ``SPHERE``: ``point_a`` as center and ``radius``

    ``success`` is not the same thing as ``kind is not NONE``: nested or
    contained shapes report ``success=True`` with ``kind=NONE`` so callers can
    tell "definitely apart" from "one inside the other".
    """

    kind: IntersectionType
    success: bool
    point_a: Optional[np.ndarray] = None
    point_b: Optional[np.ndarray] = None
    direction: Optional[np.ndarray] = None
    normal: Optional[np.ndarray] = None
    radius: Optional[float] = None

    @classmethod
    def none(cls, success: bool = False) -> "Intersection":
        return cls(IntersectionType.NONE, success)

    @classmethod
    def at_point(cls, point: Sequence[float]) -> "Intersection":
        return cls(IntersectionType.POINT, True, point_a=_vec(point))

    @classmethod
    def two_points(cls, point_a: Sequence[float], point_b: Sequence[float]) -> "Intersection":
        return cls(IntersectionType.TWO_POINTS, True, point_a=_vec(point_a), point_b=_vec(point_b))

    @classmethod
    def line(cls, origin: Sequence[float], direction: Optional[Sequence[float]] = None) -> "Intersection":
        return cls(IntersectionType.LINE, True, point_a=_vec(origin), direction=_vec(direction))

    @classmethod
    def ray(cls, origin: Sequence[float], direction: Sequence[float]) -> "Intersection":
        return cls(IntersectionType.RAY, True, point_a=_vec(origin), direction=_vec(direction))

    @classmethod
    def segment(cls, point_a: Sequence[float], point_b: Sequence[float]) -> "Intersection":
        return cls(IntersectionType.SEGMENT, True, point_a=_vec(point_a), point_b=_vec(point_b))

    @classmethod
    def circle(
        cls,
        center: Optional[Sequence[float]] = None,
        normal: Optional[Sequence[float]] = None,
        radius: Optional[float] = None,
    ) -> "Intersection":
        return cls(
            IntersectionType.CIRCLE,
            True,
            point_a=_vec(center),
            normal=_vec(normal),
            radius=None if radius is None else float(radius),
        )

    @classmethod
    def sphere(cls, center: Sequence[float], radius: float) -> "Intersection":
        return cls(IntersectionType.SPHERE, True, point_a=_vec(center), radius=float(radius))

    @property
    def point(self) -> Optional[np.ndarray]:
        return self.point_a

    @property
    def center(self) -> Optional[np.ndarray]:
        if self.kind in (IntersectionType.CIRCLE, IntersectionType.SPHERE):
            return self.point_a
        return None

    @property
    def points(self) -> Tuple[np.ndarray, ...]:
        if self.kind is IntersectionType.POINT:
            return (self.point_a,)
        if self.kind in (IntersectionType.TWO_POINTS, IntersectionType.SEGMENT):
            return (self.point_a, self.point_b)
        return ()

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        parts = [f"kind={self.kind.name}", f"success={self.success}"]
        for name in ("point_a", "point_b", "direction", "normal"):
            value = getattr(self, name)
            if value is not None:
                parts.append(f"{name}={value.tolist()}")
        if self.radius is not None:
            parts.append(f"radius={self.radius!r}")
        return f"Intersection({', '.join(parts)})"
