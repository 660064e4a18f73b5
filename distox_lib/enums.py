# -*- coding: utf-8 -*-
"""Enumerations for the DistoX protocol and smart-mode shots.

This module contains the packet discriminators and command opcodes of the
device protocol, together with the classifications produced by smart mode.
"""

from enum import Enum
from enum import IntEnum

from distox_lib.constants import TYPE_MASK


class PacketType(IntEnum):
    """Packet discriminators (bits 0-5 of the header byte).

    Attributes:
        MEASUREMENT: Distance / azimuth / inclination / roll reading
        CALIBRATION_ACCEL: Raw accelerometer calibration sample
        CALIBRATION_MAG: Raw magnetometer calibration sample
        ACKNOWLEDGE: Acknowledgement byte (``0x55``) echoed back
        MEMORY_REPLY: Four bytes of device memory
    """

    MEASUREMENT = 0x01
    CALIBRATION_ACCEL = 0x02
    CALIBRATION_MAG = 0x03
    ACKNOWLEDGE = 0x15
    MEMORY_REPLY = 0x38

    @classmethod
    def from_header(cls, header: int) -> "PacketType | None":
        """Get the packet type encoded in a header byte.

        Args:
            header: First byte of a frame

        Returns:
            PacketType or None if the discriminator is not recognized
        """
        try:
            return cls(header & TYPE_MASK)
        except ValueError:
            return None


class Command(IntEnum):
    """Opcodes understood by the device.

    The values are fixed by the device firmware and must not change.

    Attributes:
        STOP_CALIBRATION: Leave calibration mode
        START_CALIBRATION: Enter calibration mode
        STOP_SILENT_MODE: Leave silent mode
        START_SILENT_MODE: Enter silent mode
        READ_MEMORY: Read 4 bytes at an address
        WRITE_MEMORY: Write 4 bytes at an address
    """

    STOP_CALIBRATION = 0x30
    START_CALIBRATION = 0x31
    STOP_SILENT_MODE = 0x32
    START_SILENT_MODE = 0x33
    READ_MEMORY = 0x38
    WRITE_MEMORY = 0x39

    @property
    def is_mode_switch(self) -> bool:
        """Check if this opcode is sent alone, without payload."""
        return self not in (Command.READ_MEMORY, Command.WRITE_MEMORY)


class CalibrationKind(str, Enum):
    """Sensor that produced a calibration sample.

    Attributes:
        ACCELERATION: Gravity sensor (G) sample
        MAGNETIC: Magnetic field sensor (M) sample
    """

    ACCELERATION = "acceleration"
    MAGNETIC = "magnetic"

    @classmethod
    def from_packet_type(cls, packet_type: PacketType) -> "CalibrationKind":
        """Get the calibration kind carried by a packet type.

        Raises:
            ValueError: If the packet type is not a calibration packet
        """
        mapping = {
            PacketType.CALIBRATION_ACCEL: cls.ACCELERATION,
            PacketType.CALIBRATION_MAG: cls.MAGNETIC,
        }
        try:
            return mapping[packet_type]
        except KeyError:
            raise ValueError(
                f"Not a calibration packet type: {packet_type!r}"
            ) from None


class ShotType(str, Enum):
    """Classification of a detected shot.

    Attributes:
        SPLAY: A single measurement (wall shot or cross-section)
        SURVEY_SHOT: Three nearly identical measurements, averaged
    """

    SPLAY = "splay"
    SURVEY_SHOT = "survey_shot"


class Severity(str, Enum):
    """Severity level for decode issues.

    Attributes:
        ERROR: The frame was discarded
        WARNING: The frame was decoded, with a correction
    """

    ERROR = "error"
    WARNING = "warning"


class CaptureFormat(str, Enum):
    """On-disk formats of captured byte streams.

    Attributes:
        BINARY: Raw bytes exactly as received
        HEX: Whitespace separated hex byte pairs
    """

    BINARY = "binary"
    HEX = "hex"

    @classmethod
    def from_extension(cls, ext: str) -> "CaptureFormat":
        """Guess the capture format from a file extension.

        Args:
            ext: File extension (with or without dot, case-insensitive)

        Returns:
            HEX for ``.hex`` / ``.txt``, BINARY otherwise
        """
        if ext.lower().lstrip(".") in ("hex", "txt"):
            return cls.HEX
        return cls.BINARY
