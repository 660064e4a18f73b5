# -*- coding: utf-8 -*-
"""Direction geometry for comparing and averaging shots.

Directions are handled as 3-D unit vectors (east, north, up) rather than as
(azimuth, inclination) pairs: the angle between two vectors is correct
across the 0°/360° azimuth seam and folds the inclination difference into
the same number, and a vector mean is the natural circular mean.

Conventions:
    - azimuth: degrees clockwise from north, [0, 360)
    - inclination: degrees above horizontal, [-90, 90]
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import NamedTuple

import numpy as np

from distox_lib.constants import POLE_TOLERANCE


class DirectionVector(NamedTuple):
    """An immutable 3-D unit direction vector."""

    east: float
    north: float
    up: float

    def dot(self, other: DirectionVector) -> float:
        """Dot product, the cosine of the angle between two unit vectors."""
        return self.east * other.east + self.north * other.north + self.up * other.up

    @property
    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.dot(self))


def normalize_azimuth(azimuth: float) -> float:
    """Wrap an azimuth into [0, 360).

    Python's modulo already maps negative values up by 360; the extra check
    catches tiny negative values that round to exactly 360.0.
    """
    wrapped = azimuth % 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


def to_vector(azimuth: float, inclination: float) -> DirectionVector:
    """Convert an (azimuth, inclination) pair to a unit vector."""
    azimuth_rad = math.radians(azimuth)
    inclination_rad = math.radians(inclination)
    horizontal = math.cos(inclination_rad)
    return DirectionVector(
        east=horizontal * math.sin(azimuth_rad),
        north=horizontal * math.cos(azimuth_rad),
        up=math.sin(inclination_rad),
    )


def to_angles(vector: DirectionVector) -> tuple[float, float]:
    """Convert a unit vector back to (azimuth, inclination).

    At the poles the azimuth is undefined; 0 is returned by convention.
    """
    up = max(-1.0, min(1.0, vector.up))
    inclination = math.degrees(math.asin(up))
    if math.hypot(vector.east, vector.north) <= POLE_TOLERANCE:
        return 0.0, inclination
    azimuth = math.degrees(math.atan2(vector.east, vector.north))
    return normalize_azimuth(azimuth), inclination


def angular_separation(a: DirectionVector, b: DirectionVector) -> float:
    """Angle in degrees between two unit vectors."""
    # Rounding can push the dot product of near-identical vectors past 1.
    cosine = max(-1.0, min(1.0, a.dot(b)))
    return math.degrees(math.acos(cosine))


def average_directions(vectors: Sequence[DirectionVector]) -> DirectionVector:
    """Mean direction of several unit vectors.

    Raises:
        ValueError: If ``vectors`` is empty, or the vectors cancel out
    """
    if not vectors:
        raise ValueError("Cannot average an empty list of directions")

    mean = np.asarray(vectors, dtype=float).mean(axis=0)
    norm = float(np.linalg.norm(mean))
    if norm == 0.0:
        raise ValueError("Directions cancel out, mean direction is undefined")

    east, north, up = (mean / norm).tolist()
    return DirectionVector(east=east, north=north, up=up)


def average_distances(distances: Sequence[float]) -> float:
    """Arithmetic mean of several distances.

    Raises:
        ValueError: If ``distances`` is empty
    """
    if not distances:
        raise ValueError("Cannot average an empty list of distances")
    return float(np.mean(distances))
