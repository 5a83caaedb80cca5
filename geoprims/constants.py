"""Process-wide tolerances shared by every geometric query."""

from __future__ import annotations

import math

EPSILON = 1e-5
EPSILON_SQUARED = EPSILON * EPSILON

# Angle between consecutive sunflower/spiral samples, in radians.
GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))

__all__ = ["EPSILON", "EPSILON_SQUARED", "GOLDEN_ANGLE"]
