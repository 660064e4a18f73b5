# -*- coding: utf-8 -*-
"""Pytest configuration and fixtures.

This module provides builders for raw DistoX frames so that tests can
describe packets in physical units instead of hand-assembled bytes.
"""

from __future__ import annotations

import logging
import struct

import pytest

from distox_lib.session import DistoXSession
from distox_lib.shots.classifier import ShotClassifier
from distox_lib.shots.models import RawMeasurement

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


# =============================================================================
# Frame Builders
# =============================================================================


def angle_to_raw(degrees: float) -> int:
    """Convert degrees to the device's 16-bit angle units (unsigned)."""
    return round(degrees * 32768 / 180) & 0xFFFF


def measurement_frame(
    distance_mm: int,
    azimuth: float = 0.0,
    inclination: float = 0.0,
    *,
    roll_raw: int = 0,
    seq: int = 0,
) -> bytes:
    """Build an 8-byte measurement frame.

    Args:
        distance_mm: Distance in millimetres (17 bits)
        azimuth: Azimuth in degrees
        inclination: Inclination in degrees
        roll_raw: Signed roll byte
        seq: Sequence bit (0 or 1)
    """
    header = 0x01 | (seq << 7) | (((distance_mm >> 16) & 0x01) << 6)
    return struct.pack(
        "<BHHHb",
        header,
        distance_mm & 0xFFFF,
        angle_to_raw(azimuth),
        angle_to_raw(inclination),
        roll_raw,
    )


def calibration_frame(
    packet_type: int,
    x: int,
    y: int,
    z: int,
    index: int,
    *,
    seq: int = 0,
) -> bytes:
    """Build an 8-byte calibration sample frame (type 0x02 or 0x03)."""
    return struct.pack("<BhhhB", packet_type | (seq << 7), x, y, z, index)


def memory_reply_frame(address: int, data: bytes) -> bytes:
    """Build an 8-byte memory reply frame."""
    return struct.pack("<BH", 0x38, address) + data + b"\x00"


def raw(
    distance: float,
    azimuth: float,
    inclination: float,
    timestamp: float = 0.0,
) -> RawMeasurement:
    """Shorthand for a RawMeasurement."""
    return RawMeasurement(
        distance=distance,
        azimuth=azimuth,
        inclination=inclination,
        timestamp=timestamp,
    )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def classifier() -> ShotClassifier:
    """Return a fresh smart-mode classifier."""
    return ShotClassifier()


@pytest.fixture
def session() -> DistoXSession:
    """Return a fresh session with default options."""
    return DistoXSession()
