# -*- coding: utf-8 -*-
"""Transfer of the calibration coefficient block in device memory.

The 48 coefficient bytes live at ``0x8010``-``0x803F`` and can only be
moved 4 bytes at a time, with one ReadMemory/WriteMemory command per block.
Fitting the coefficients is outside the scope of this library: these helpers
only move the raw bytes.
"""

from __future__ import annotations

import logging

from distox_lib.constants import COEFFICIENT_BLOCK_LENGTH
from distox_lib.constants import COEFFICIENT_START_ADDRESS
from distox_lib.constants import MEMORY_BLOCK_SIZE
from distox_lib.protocol.models import DeviceInfo
from distox_lib.protocol.models import ReadMemory
from distox_lib.protocol.models import WriteMemory

logger = logging.getLogger(__name__)


def _block_addresses(start: int, length: int) -> range:
    return range(start, start + length, MEMORY_BLOCK_SIZE)


def coefficient_read_commands() -> list[ReadMemory]:
    """Build the commands reading the whole coefficient block."""
    return [
        ReadMemory(address=address)
        for address in _block_addresses(
            COEFFICIENT_START_ADDRESS, COEFFICIENT_BLOCK_LENGTH
        )
    ]


def coefficient_write_commands(data: bytes) -> list[WriteMemory]:
    """Build the commands writing ``data`` to the coefficient block.

    Args:
        data: Exactly 48 coefficient bytes

    Returns:
        One WriteMemory command per 4-byte block, in address order

    Raises:
        ValueError: If ``data`` is not 48 bytes long
    """
    if len(data) != COEFFICIENT_BLOCK_LENGTH:
        raise ValueError(
            f"Coefficient data must be {COEFFICIENT_BLOCK_LENGTH} bytes, "
            f"got {len(data)}"
        )
    return [
        WriteMemory(
            address=COEFFICIENT_START_ADDRESS + offset,
            data=bytes(data[offset : offset + MEMORY_BLOCK_SIZE]),
        )
        for offset in range(0, COEFFICIENT_BLOCK_LENGTH, MEMORY_BLOCK_SIZE)
    ]


class MemoryAssembler:
    """Collects memory replies into one contiguous block.

    Replies may arrive in any order; replies outside the requested range
    are ignored.

    Attributes:
        start: First address of the block
        length: Size of the block in bytes (multiple of 4)
    """

    def __init__(
        self,
        start: int = COEFFICIENT_START_ADDRESS,
        length: int = COEFFICIENT_BLOCK_LENGTH,
    ) -> None:
        if length <= 0 or length % MEMORY_BLOCK_SIZE:
            raise ValueError(
                f"Block length must be a positive multiple of {MEMORY_BLOCK_SIZE}"
            )
        self.start = start
        self.length = length
        self._blocks: dict[int, bytes] = {}

    @property
    def complete(self) -> bool:
        """Check if every block of the range has been received."""
        return len(self._blocks) == self.length // MEMORY_BLOCK_SIZE

    def add(self, reply: DeviceInfo) -> bool:
        """Store a reply.

        Returns:
            True if the reply belongs to the block, False if it was ignored
        """
        offset = reply.address - self.start
        if offset < 0 or offset >= self.length or offset % MEMORY_BLOCK_SIZE:
            logger.debug("Ignoring memory reply at 0x%04x", reply.address)
            return False
        self._blocks[reply.address] = reply.data
        return True

    def data(self) -> bytes | None:
        """Return the assembled block, or None while blocks are missing."""
        if not self.complete:
            return None
        return b"".join(
            self._blocks[address]
            for address in _block_addresses(self.start, self.length)
        )
