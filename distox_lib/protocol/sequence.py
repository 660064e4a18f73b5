# -*- coding: utf-8 -*-
"""Duplicate suppression for the device's retry-based link layer.

The device toggles a single sequence bit for every new packet and resends
the identical packet until it is acknowledged. Two consecutive packets with
the same bit are therefore the same reading, not a new one.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from distox_lib.protocol.models import ProtocolMessage

logger = logging.getLogger(__name__)


class SequenceGuard:
    """1-bit edge detector, one instance per open connection.

    The state starts "unset" (the first packet is always accepted), is
    updated on every accepted packet, and returns to "unset" on
    :meth:`reset` when the connection is re-established.
    """

    def __init__(self) -> None:
        self._last_bit: bool | None = None

    @property
    def last_bit(self) -> bool | None:
        """Sequence bit of the last accepted packet (None when unset)."""
        return self._last_bit

    def accept(
        self,
        sequence_bit: bool,
        message: ProtocolMessage | None = None,
    ) -> bool:
        """Decide whether a packet is new.

        Args:
            sequence_bit: Sequence bit of the incoming packet
            message: The decoded packet, for logging only

        Returns:
            True for a new packet, False for a retransmission
        """
        if self._last_bit is not None and self._last_bit == sequence_bit:
            logger.debug(
                "Duplicate packet dropped (seq bit %d): %s",
                sequence_bit,
                message,
            )
            return False

        self._last_bit = sequence_bit
        return True

    def reset(self) -> None:
        """Forget the last sequence bit (e.g. when reconnecting)."""
        self._last_bit = None
