# -*- coding: utf-8 -*-
"""DistoX Protocol Library.

A Python library for decoding the serial protocol of DistoX cave-survey
rangefinders and classifying their readings into splay shots and averaged
survey shots ("smart mode").

Usage:
    from distox_lib import DistoXSession

    session = DistoXSession()
    session.subscribe_shots(lambda shot: print(shot.type, shot.distance))

    for chunk in transport:
        session.feed(chunk)
        for data in session.drain_outgoing():
            transport.write(data)

    session.flush()

    # Or use the building blocks directly
    from distox_lib import PacketCodec, ShotClassifier, RawMeasurement
    message = PacketCodec.decode(frame)
    shot = ShotClassifier().add_measurement(RawMeasurement(...))
"""

__version__ = "0.1.0"

# Constants
from distox_lib.constants import FRAME_LENGTH
from distox_lib.constants import MAX_ANGULAR_DIFFERENCE
from distox_lib.constants import MAX_DISTANCE_DIFFERENCE
from distox_lib.constants import SMART_MODE_WINDOW

# Enums
from distox_lib.enums import CalibrationKind
from distox_lib.enums import CaptureFormat
from distox_lib.enums import Command
from distox_lib.enums import PacketType
from distox_lib.enums import Severity
from distox_lib.enums import ShotType
from distox_lib.errors import DecodeIssue
from distox_lib.errors import MalformedPacket
from distox_lib.models import SessionOptions
from distox_lib.protocol.codec import FrameBuffer
from distox_lib.protocol.codec import PacketCodec
from distox_lib.protocol.memory import MemoryAssembler
from distox_lib.protocol.memory import coefficient_read_commands
from distox_lib.protocol.memory import coefficient_write_commands
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
from distox_lib.protocol.sequence import SequenceGuard
from distox_lib.session import DistoXSession
from distox_lib.shots.classifier import ShotClassifier
from distox_lib.shots.direction import DirectionVector
from distox_lib.shots.direction import angular_separation
from distox_lib.shots.direction import average_directions
from distox_lib.shots.direction import average_distances
from distox_lib.shots.direction import to_angles
from distox_lib.shots.direction import to_vector
from distox_lib.shots.models import DetectedShot
from distox_lib.shots.models import RawMeasurement
from distox_lib.shots.models import SplayShot
from distox_lib.shots.models import SurveyShot

__all__ = [
    # Constants
    "FRAME_LENGTH",
    "MAX_ANGULAR_DIFFERENCE",
    "MAX_DISTANCE_DIFFERENCE",
    "SMART_MODE_WINDOW",
    # Protocol
    "Acknowledge",
    "Acknowledgement",
    # Enums
    "CalibrationKind",
    "CalibrationSample",
    "CaptureFormat",
    "Command",
    # Errors
    "DecodeIssue",
    # Shots
    "DetectedShot",
    "DeviceCommand",
    "DeviceInfo",
    "DirectionVector",
    # Session
    "DistoXSession",
    "FrameBuffer",
    "MalformedPacket",
    "MeasurementPacket",
    "MemoryAssembler",
    "PacketCodec",
    "PacketType",
    "ProtocolMessage",
    "RawMeasurement",
    "ReadMemory",
    "SequenceGuard",
    "SessionOptions",
    "SetMode",
    "Severity",
    "ShotClassifier",
    "ShotType",
    "SplayShot",
    "SurveyShot",
    "UnknownPacket",
    "WriteMemory",
    "angular_separation",
    "average_directions",
    "average_distances",
    "coefficient_read_commands",
    "coefficient_write_commands",
    "to_angles",
    "to_vector",
]
