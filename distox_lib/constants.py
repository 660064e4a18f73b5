# -*- coding: utf-8 -*-
"""Constants used throughout the distox_lib library.

This module centralizes all constant values to ensure consistency
and avoid magic numbers scattered across the codebase.
"""

# -----------------------------------------------------------------------------
# Encodings
# -----------------------------------------------------------------------------

#: Encoding used for JSON files
JSON_ENCODING = "utf-8"

#: Encoding used for hex-dump capture files
HEX_ENCODING = "ascii"

# -----------------------------------------------------------------------------
# Frame Layout
# -----------------------------------------------------------------------------

#: Every packet sent by the device is exactly this many bytes
FRAME_LENGTH: int = 8

#: Bits 0-5 of the header byte hold the packet type
TYPE_MASK: int = 0x3F

#: Bit 7 of the header byte is the alternating sequence bit
SEQUENCE_BIT_SHIFT: int = 7

#: Bit 6 of a measurement header is bit 16 of the distance
DISTANCE_HIGH_BIT_SHIFT: int = 6

#: Low 7 bits of an acknowledgement byte
ACKNOWLEDGE_BYTE: int = 0x55

# -----------------------------------------------------------------------------
# Unit Conversions
# -----------------------------------------------------------------------------

#: Distances are transmitted in millimetres
MILLIMETERS_PER_METER: int = 1000

#: Angles: raw * 180 / 32768 = degrees (full circle = 2^16)
ANGLE_UNITS_PER_HALF_TURN: int = 32768

#: Roll: raw int8 * 180 / 128 = degrees
ROLL_UNITS_PER_HALF_TURN: int = 128

# -----------------------------------------------------------------------------
# Smart Mode
# -----------------------------------------------------------------------------

#: Shots closer than this (meters) count as repeats of the same shot
MAX_DISTANCE_DIFFERENCE: float = 0.05

#: Shots closer than this (degrees) count as repeats of the same shot
MAX_ANGULAR_DIFFERENCE: float = 1.7

#: Number of repeated readings that confirm a survey shot
SMART_MODE_WINDOW: int = 3

#: |up| above this is treated as a vertical shot (azimuth undefined)
POLE_TOLERANCE: float = 1e-12

# -----------------------------------------------------------------------------
# Device Memory
# -----------------------------------------------------------------------------

#: Memory is read and written in blocks of this many bytes
MEMORY_BLOCK_SIZE: int = 4

#: First address of the calibration coefficient block
COEFFICIENT_START_ADDRESS: int = 0x8010

#: Size in bytes of the calibration coefficient block (0x8010 - 0x803F)
COEFFICIENT_BLOCK_LENGTH: int = 48

# -----------------------------------------------------------------------------
# Output
# -----------------------------------------------------------------------------

#: Format identifier written by the replay command
SHOTS_FORMAT_IDENTIFIER: str = "distox_shots"

#: Version of the replay JSON envelope
SHOTS_FORMAT_VERSION: str = "1.0"
