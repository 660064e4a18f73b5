# -*- coding: utf-8 -*-
"""Protocol message models for DistoX frames.

This module contains Pydantic models for both directions of the link:

- Incoming messages, decoded from 8-byte frames:
  MeasurementPacket, CalibrationSample, DeviceInfo, Acknowledgement and
  UnknownPacket, combined into the ``ProtocolMessage`` tagged union.
- Outgoing commands: Acknowledge, SetMode, ReadMemory and WriteMemory,
  combined into the ``DeviceCommand`` tagged union.

All models are immutable. Angles are degrees, distances meters.
"""

from __future__ import annotations

from typing import Annotated
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_serializer
from pydantic import field_validator

from distox_lib.constants import MEMORY_BLOCK_SIZE
from distox_lib.enums import CalibrationKind
from distox_lib.enums import Command


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


# -----------------------------------------------------------------------------
# Incoming messages
# -----------------------------------------------------------------------------


class MeasurementPacket(_FrozenModel):
    """A decoded measurement frame.

    Attributes:
        sequence_bit: Alternating bit marking a new physical reading
        distance: Distance in meters
        azimuth: Bearing in degrees, [0, 360)
        inclination: Vertical angle in degrees, [-90, 90]
        roll: Roll angle of the device in degrees
        unclamped_inclination: Inclination as sent by the device, set only
            when it was outside [-90, 90] and had to be clamped
    """

    kind: Literal["measurement"] = "measurement"
    sequence_bit: bool
    distance: Annotated[float, Field(ge=0)]
    azimuth: Annotated[float, Field(ge=0, lt=360)]
    inclination: Annotated[float, Field(ge=-90, le=90)]
    roll: float = 0.0
    unclamped_inclination: float | None = None

    @property
    def clamped(self) -> bool:
        """Check if the inclination was corrected while decoding."""
        return self.unclamped_inclination is not None

    def __str__(self) -> str:
        return (
            f"MeasurementPacket(dist: {self.distance:.2f}m, "
            f"azi: {self.azimuth:.1f}°, incl: {self.inclination:.1f}°)"
        )


class CalibrationSample(_FrozenModel):
    """A raw sensor reading sent while the device is in calibration mode.

    Accelerometer and magnetometer samples arrive as two separate frames
    sharing the same ``index``.
    """

    kind: Literal["calibration"] = "calibration"
    sequence_bit: bool
    sensor: CalibrationKind
    x: int
    y: int
    z: int
    index: Annotated[int, Field(ge=0, le=0xFF)]


class DeviceInfo(_FrozenModel):
    """Reply to a memory read: four bytes of device memory at ``address``.

    Firmware/hardware identification and calibration coefficients are both
    read this way.
    """

    kind: Literal["device_info"] = "device_info"
    address: Annotated[int, Field(ge=0, le=0xFFFF)]
    data: bytes

    @field_validator("data")
    @classmethod
    def validate_data(cls, v: bytes) -> bytes:
        if len(v) != MEMORY_BLOCK_SIZE:
            raise ValueError(
                f"Memory reply must carry {MEMORY_BLOCK_SIZE} bytes, got {len(v)}"
            )
        return v

    @field_serializer("data")
    def serialize_data(self, v: bytes) -> str:
        return v.hex()


class Acknowledgement(_FrozenModel):
    """An acknowledgement byte seen on the link (e.g. a loopback echo)."""

    kind: Literal["acknowledgement"] = "acknowledgement"
    sequence_bit: bool


class UnknownPacket(_FrozenModel):
    """A well-formed frame whose discriminator is not recognized.

    Kept rather than rejected to tolerate firmware variants.
    """

    kind: Literal["unknown"] = "unknown"
    sequence_bit: bool
    packet_type: Annotated[int, Field(ge=0, le=0x3F)]
    frame: bytes

    @field_serializer("frame")
    def serialize_frame(self, v: bytes) -> str:
        return v.hex()


ProtocolMessage = Annotated[
    MeasurementPacket | CalibrationSample | DeviceInfo | Acknowledgement | UnknownPacket,
    Field(discriminator="kind"),
]


# -----------------------------------------------------------------------------
# Outgoing commands
# -----------------------------------------------------------------------------


class Acknowledge(_FrozenModel):
    """Acknowledge receipt of the frame carrying ``sequence_bit``."""

    kind: Literal["acknowledge"] = "acknowledge"
    sequence_bit: bool


class SetMode(_FrozenModel):
    """Switch calibration or silent mode on or off."""

    kind: Literal["set_mode"] = "set_mode"
    command: Command

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: Command) -> Command:
        if not v.is_mode_switch:
            raise ValueError(f"{v.name} is not a mode switch command")
        return v


class ReadMemory(_FrozenModel):
    """Request the four bytes of device memory at ``address``."""

    kind: Literal["read_memory"] = "read_memory"
    address: Annotated[int, Field(ge=0, le=0xFFFF)]


class WriteMemory(_FrozenModel):
    """Write four bytes of device memory at ``address``."""

    kind: Literal["write_memory"] = "write_memory"
    address: Annotated[int, Field(ge=0, le=0xFFFF)]
    data: bytes

    @field_validator("data")
    @classmethod
    def validate_data(cls, v: bytes) -> bytes:
        if len(v) != MEMORY_BLOCK_SIZE:
            raise ValueError(
                f"Write data must be exactly {MEMORY_BLOCK_SIZE} bytes, got {len(v)}"
            )
        return v

    @field_serializer("data")
    def serialize_data(self, v: bytes) -> str:
        return v.hex()


DeviceCommand = Annotated[
    Acknowledge | SetMode | ReadMemory | WriteMemory,
    Field(discriminator="kind"),
]
