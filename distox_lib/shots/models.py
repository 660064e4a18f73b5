# -*- coding: utf-8 -*-
"""Measurement and shot models for smart-mode classification.

This module contains Pydantic models for representing:
- RawMeasurement: A single accepted reading from the device
- SplayShot: One unaveraged measurement (wall shot, cross-section)
- SurveyShot: Three repeated measurements, averaged into one stretch
- DetectedShot: Tagged union of SplayShot and SurveyShot

All models are immutable. Distances are meters, angles degrees.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING
from typing import Annotated
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator

from distox_lib.constants import SMART_MODE_WINDOW
from distox_lib.enums import ShotType
from distox_lib.shots.direction import DirectionVector
from distox_lib.shots.direction import normalize_azimuth
from distox_lib.shots.direction import to_vector

if TYPE_CHECKING:
    from distox_lib.protocol.models import MeasurementPacket


class RawMeasurement(BaseModel):
    """A raw reading, after duplicate suppression.

    Attributes:
        distance: Distance in meters
        azimuth: Bearing in degrees, normalized into [0, 360)
        inclination: Vertical angle in degrees, [-90, 90]
        timestamp: Monotonic capture instant in seconds
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    distance: Annotated[float, Field(ge=0)]
    azimuth: float
    inclination: Annotated[float, Field(ge=-90, le=90)]
    timestamp: float = Field(default_factory=time.monotonic)

    @field_validator("azimuth")
    @classmethod
    def wrap_azimuth(cls, v: float) -> float:
        return normalize_azimuth(v)

    @classmethod
    def from_packet(
        cls,
        packet: MeasurementPacket,
        timestamp: float | None = None,
    ) -> RawMeasurement:
        """Build a measurement from a decoded packet.

        Args:
            packet: The decoded measurement packet
            timestamp: Capture instant (defaults to ``time.monotonic()``)
        """
        return cls(
            distance=packet.distance,
            azimuth=packet.azimuth,
            inclination=packet.inclination,
            timestamp=time.monotonic() if timestamp is None else timestamp,
        )

    @property
    def direction(self) -> DirectionVector:
        """Unit direction vector of this measurement."""
        return to_vector(self.azimuth, self.inclination)


class _Shot(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    distance: Annotated[float, Field(ge=0)]
    azimuth: float
    inclination: Annotated[float, Field(ge=-90, le=90)]
    measurements: tuple[RawMeasurement, ...]

    @field_validator("azimuth")
    @classmethod
    def wrap_azimuth(cls, v: float) -> float:
        return normalize_azimuth(v)


class SplayShot(_Shot):
    """A single measurement, passed through unchanged."""

    type: Literal[ShotType.SPLAY] = ShotType.SPLAY

    @model_validator(mode="after")
    def check_measurements(self) -> SplayShot:
        if len(self.measurements) != 1:
            raise ValueError(
                f"A splay wraps exactly 1 measurement, got {len(self.measurements)}"
            )
        return self

    @classmethod
    def from_measurement(cls, measurement: RawMeasurement) -> SplayShot:
        return cls(
            distance=measurement.distance,
            azimuth=measurement.azimuth,
            inclination=measurement.inclination,
            measurements=(measurement,),
        )


class SurveyShot(_Shot):
    """Three repeated measurements averaged into one stretch.

    ``measurements`` holds the constituents in arrival order.
    """

    type: Literal[ShotType.SURVEY_SHOT] = ShotType.SURVEY_SHOT

    @model_validator(mode="after")
    def check_measurements(self) -> SurveyShot:
        if len(self.measurements) != SMART_MODE_WINDOW:
            raise ValueError(
                f"A survey shot averages exactly {SMART_MODE_WINDOW} "
                f"measurements, got {len(self.measurements)}"
            )
        return self


DetectedShot = Annotated[SplayShot | SurveyShot, Field(discriminator="type")]
