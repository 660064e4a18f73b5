# -*- coding: utf-8 -*-
"""Binary codec for the DistoX serial protocol.

Frames sent by the device are always 8 bytes. The first byte is a header:

- bit 7: sequence bit, toggled by the device for every new packet
- bit 6: bit 16 of the distance (measurement packets only)
- bits 0-5: packet type

The remaining 7 bytes are little-endian fields whose layout depends on the
packet type (see :meth:`PacketCodec.decode`). Commands sent to the device
are 1, 3 or 7 bytes long, exactly as the firmware expects them.
"""

from __future__ import annotations

import logging
import struct

from distox_lib.constants import ACKNOWLEDGE_BYTE
from distox_lib.constants import ANGLE_UNITS_PER_HALF_TURN
from distox_lib.constants import DISTANCE_HIGH_BIT_SHIFT
from distox_lib.constants import FRAME_LENGTH
from distox_lib.constants import MILLIMETERS_PER_METER
from distox_lib.constants import ROLL_UNITS_PER_HALF_TURN
from distox_lib.constants import SEQUENCE_BIT_SHIFT
from distox_lib.constants import TYPE_MASK
from distox_lib.enums import CalibrationKind
from distox_lib.enums import Command
from distox_lib.enums import PacketType
from distox_lib.errors import MalformedPacket
from distox_lib.errors import format_frame
from distox_lib.protocol.models import Acknowledge
from distox_lib.protocol.models import Acknowledgement
from distox_lib.protocol.models import CalibrationSample
from distox_lib.protocol.models import DeviceCommand
from distox_lib.protocol.models import DeviceInfo
from distox_lib.protocol.models import MeasurementPacket
from distox_lib.protocol.models import ProtocolMessage
from distox_lib.protocol.models import ReadMemory
from distox_lib.protocol.models import SetMode
from distox_lib.protocol.models import UnknownPacket
from distox_lib.protocol.models import WriteMemory
from distox_lib.shots.direction import normalize_azimuth

logger = logging.getLogger(__name__)

# distance bits 0-15, azimuth, inclination, roll
_MEASUREMENT_FIELDS = struct.Struct("<HHhb")
# x, y, z, sample index
_CALIBRATION_FIELDS = struct.Struct("<hhhB")
# opcode, address
_MEMORY_COMMAND = struct.Struct("<BH")


def _raw_to_degrees(raw: int) -> float:
    return raw * 180.0 / ANGLE_UNITS_PER_HALF_TURN


def sequence_bit_of(header: int) -> bool:
    """Extract the sequence bit from a header byte."""
    return bool((header >> SEQUENCE_BIT_SHIFT) & 0x01)


class PacketCodec:
    """Bidirectional mapping between raw bytes and protocol models.

    The codec is stateless: duplicate suppression is the job of
    :class:`~distox_lib.protocol.sequence.SequenceGuard`.

    Example:
        message = PacketCodec.decode(frame)
        if isinstance(message, MeasurementPacket):
            print(message.distance, message.azimuth, message.inclination)

        ack = PacketCodec.encode_command(Acknowledge(sequence_bit=True))
    """

    # -------------------------------------------------------------------------
    # Decoding (bytes → message)
    # -------------------------------------------------------------------------

    @staticmethod
    def packet_type(frame: bytes) -> int | None:
        """Peek at the type bits of a frame without decoding it.

        Returns:
            The 6-bit packet type, or None for an empty frame
        """
        if not frame:
            return None
        return frame[0] & TYPE_MASK

    @classmethod
    def decode(cls, frame: bytes) -> ProtocolMessage:
        """Decode one 8-byte frame.

        Args:
            frame: Exactly 8 bytes as received from the device

        Returns:
            The decoded message. Unrecognized discriminators decode to
            UnknownPacket.

        Raises:
            MalformedPacket: If the frame is not 8 bytes long, or its type
                bits are zero (framing has been lost)
        """
        frame = bytes(frame)
        if len(frame) != FRAME_LENGTH:
            raise MalformedPacket(
                f"Frame must be {FRAME_LENGTH} bytes, got {len(frame)}",
                frame,
            )

        header = frame[0]
        type_bits = header & TYPE_MASK
        if type_bits == 0:
            raise MalformedPacket("Null packet type, frame boundary lost", frame)

        sequence_bit = sequence_bit_of(header)
        packet_type = PacketType.from_header(header)
        logger.debug("Decoding packet type 0x%02x: %s", type_bits, format_frame(frame))

        match packet_type:
            case PacketType.MEASUREMENT:
                return cls._decode_measurement(frame, sequence_bit)

            case PacketType.CALIBRATION_ACCEL | PacketType.CALIBRATION_MAG:
                x, y, z, index = _CALIBRATION_FIELDS.unpack_from(frame, 1)
                return CalibrationSample(
                    sequence_bit=sequence_bit,
                    sensor=CalibrationKind.from_packet_type(packet_type),
                    x=x,
                    y=y,
                    z=z,
                    index=index,
                )

            case PacketType.MEMORY_REPLY:
                (address,) = struct.unpack_from("<H", frame, 1)
                return DeviceInfo(address=address, data=frame[3:7])

            case PacketType.ACKNOWLEDGE if header & 0x7F == ACKNOWLEDGE_BYTE:
                return Acknowledgement(sequence_bit=sequence_bit)

            case _:
                logger.debug("Unknown packet type 0x%02x", type_bits)
                return UnknownPacket(
                    sequence_bit=sequence_bit,
                    packet_type=type_bits,
                    frame=frame,
                )

    @staticmethod
    def _decode_measurement(frame: bytes, sequence_bit: bool) -> MeasurementPacket:
        distance_low, azimuth_raw, inclination_raw, roll_raw = (
            _MEASUREMENT_FIELDS.unpack_from(frame, 1)
        )
        distance_high = (frame[0] >> DISTANCE_HIGH_BIT_SHIFT) & 0x01
        distance_mm = distance_low | (distance_high << 16)

        inclination = _raw_to_degrees(inclination_raw)
        unclamped_inclination = None
        if not -90.0 <= inclination <= 90.0:
            clamped = max(-90.0, min(90.0, inclination))
            logger.warning(
                "Inclination %.2f° out of range, clamped to %.1f°: %s",
                inclination,
                clamped,
                format_frame(frame),
            )
            unclamped_inclination = inclination
            inclination = clamped

        return MeasurementPacket(
            sequence_bit=sequence_bit,
            distance=distance_mm / MILLIMETERS_PER_METER,
            azimuth=normalize_azimuth(_raw_to_degrees(azimuth_raw)),
            inclination=inclination,
            roll=roll_raw * 180.0 / ROLL_UNITS_PER_HALF_TURN,
            unclamped_inclination=unclamped_inclination,
        )

    # -------------------------------------------------------------------------
    # Encoding (command → bytes)
    # -------------------------------------------------------------------------

    @staticmethod
    def encode_command(command: DeviceCommand) -> bytes:
        """Serialize a command into the bytes the device expects.

        Args:
            command: Any DeviceCommand model

        Returns:
            The encoded command (1, 3 or 7 bytes)

        Raises:
            TypeError: If ``command`` is not a DeviceCommand
        """
        match command:
            case Acknowledge(sequence_bit=bit):
                return bytes([(int(bit) << SEQUENCE_BIT_SHIFT) | ACKNOWLEDGE_BYTE])

            case SetMode(command=opcode):
                return bytes([opcode])

            case ReadMemory(address=address):
                return _MEMORY_COMMAND.pack(Command.READ_MEMORY, address)

            case WriteMemory(address=address, data=data):
                return _MEMORY_COMMAND.pack(Command.WRITE_MEMORY, address) + data

            case _:
                raise TypeError(f"Not a device command: {command!r}")


class FrameBuffer:
    """Re-assembles transport chunks into complete 8-byte frames.

    A serial link delivers bytes in arbitrary chunks; frames are returned
    in arrival order as soon as they are complete, and any trailing partial
    frame is kept for the next call.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def __len__(self) -> int:
        """Number of buffered bytes not yet forming a complete frame."""
        return len(self._buffer)

    def extend(self, chunk: bytes) -> list[bytes]:
        """Append a chunk and pop every complete frame."""
        self._buffer.extend(chunk)
        frames: list[bytes] = []
        while len(self._buffer) >= FRAME_LENGTH:
            frames.append(bytes(self._buffer[:FRAME_LENGTH]))
            del self._buffer[:FRAME_LENGTH]
        return frames

    def clear(self) -> None:
        """Drop any partial frame (e.g. on reconnect)."""
        self._buffer.clear()
