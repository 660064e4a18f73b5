# -*- coding: utf-8 -*-
"""Protocol module for decoding and encoding DistoX frames."""

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

__all__ = [
    "Acknowledge",
    "Acknowledgement",
    "CalibrationSample",
    "DeviceCommand",
    "DeviceInfo",
    "FrameBuffer",
    "MeasurementPacket",
    "MemoryAssembler",
    "PacketCodec",
    "ProtocolMessage",
    "ReadMemory",
    "SequenceGuard",
    "SetMode",
    "UnknownPacket",
    "WriteMemory",
    "coefficient_read_commands",
    "coefficient_write_commands",
]
