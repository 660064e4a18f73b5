# -*- coding: utf-8 -*-
"""Per-connection decode and classify pipeline.

A session owns everything that is tied to one connection to the device:

    bytes → FrameBuffer → PacketCodec → SequenceGuard → ShotClassifier

Each chunk handed to :meth:`DistoXSession.feed` is processed to completion,
including every subscriber callback, before the call returns. Chunks must
be fed in arrival order from a single thread; the session is the only owner
of the pending buffer and the sequence state, so no locking is needed.

Outgoing bytes (acknowledgements and explicit commands) are queued and
handed to the transport through :meth:`DistoXSession.drain_outgoing`.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from distox_lib.enums import Severity
from distox_lib.errors import DecodeIssue
from distox_lib.errors import MalformedPacket
from distox_lib.models import SessionOptions
from distox_lib.protocol.codec import FrameBuffer
from distox_lib.protocol.codec import PacketCodec
from distox_lib.protocol.models import Acknowledge
from distox_lib.protocol.models import CalibrationSample
from distox_lib.protocol.models import DeviceCommand
from distox_lib.protocol.models import MeasurementPacket
from distox_lib.protocol.models import ProtocolMessage
from distox_lib.protocol.models import UnknownPacket
from distox_lib.protocol.sequence import SequenceGuard
from distox_lib.shots.classifier import ShotCallback
from distox_lib.shots.classifier import ShotClassifier
from distox_lib.shots.models import DetectedShot
from distox_lib.shots.models import RawMeasurement
from distox_lib.shots.models import SplayShot

logger = logging.getLogger(__name__)

MessageCallback = Callable[[ProtocolMessage], None]

# Memory replies answer our own read requests; the device does not retry them.
_ACKNOWLEDGED = (MeasurementPacket, CalibrationSample, UnknownPacket)


class DistoXSession:
    """Decode, deduplicate and classify the byte stream of one connection.

    Example:
        session = DistoXSession()
        session.subscribe_shots(store_shot)

        for chunk in transport:
            session.feed(chunk)
            for data in session.drain_outgoing():
                transport.write(data)

        session.flush()

    Attributes:
        options: Session behaviour (smart mode, acknowledgements)
        classifier: The smart-mode classifier fed by this session
        issues: Frames discarded (ERROR) or corrected (WARNING) while
            decoding, in arrival order
    """

    def __init__(
        self,
        options: SessionOptions | None = None,
        classifier: ShotClassifier | None = None,
    ) -> None:
        self.options = options or SessionOptions()
        self.classifier = classifier or ShotClassifier()
        self.issues: list[DecodeIssue] = []

        self._frames = FrameBuffer()
        self._guard = SequenceGuard()
        self._outgoing: deque[bytes] = deque()
        self._shot_subscribers: list[ShotCallback] = []
        self._message_subscribers: list[MessageCallback] = []

        self.classifier.subscribe(self._publish_shot)

    # -------------------------------------------------------------------------
    # Subscribers
    # -------------------------------------------------------------------------

    def subscribe_shots(self, callback: ShotCallback) -> None:
        """Register a callback invoked once per detected shot."""
        self._shot_subscribers.append(callback)

    def subscribe_messages(self, callback: MessageCallback) -> None:
        """Register a callback for every decoded non-measurement message.

        Calibration samples, memory replies and unknown packets are routed
        here, including retransmissions.
        """
        self._message_subscribers.append(callback)

    def _publish_shot(self, shot: DetectedShot) -> None:
        for callback in list(self._shot_subscribers):
            callback(shot)

    def _publish_message(self, message: ProtocolMessage) -> None:
        for callback in list(self._message_subscribers):
            callback(message)

    # -------------------------------------------------------------------------
    # Incoming bytes
    # -------------------------------------------------------------------------

    @property
    def pending_count(self) -> int:
        """Number of measurements waiting for smart-mode classification."""
        return self.classifier.pending_count

    def feed(self, chunk: bytes) -> list[DetectedShot]:
        """Process a chunk of bytes received from the transport.

        Args:
            chunk: Any number of bytes; partial frames are kept until the
                rest arrives

        Returns:
            Shots emitted while processing this chunk, in emission order
        """
        shots: list[DetectedShot] = []
        for frame in self._frames.extend(chunk):
            shot = self._process_frame(frame)
            if shot is not None:
                shots.append(shot)
        return shots

    def _process_frame(self, frame: bytes) -> DetectedShot | None:
        try:
            message = PacketCodec.decode(frame)
        except MalformedPacket as exc:
            logger.warning("Discarding malformed frame: %s", exc)
            self.issues.append(exc.to_issue())
            return None

        # The device retries until acknowledged, so duplicates are ACKed too.
        if self.options.acknowledge and isinstance(message, _ACKNOWLEDGED):
            self.send(Acknowledge(sequence_bit=message.sequence_bit))

        if not isinstance(message, MeasurementPacket):
            self._publish_message(message)
            return None

        if not self._guard.accept(message.sequence_bit, message):
            return None

        logger.debug("Received %s", message)
        if message.clamped:
            self.issues.append(
                DecodeIssue(
                    severity=Severity.WARNING,
                    message=(
                        f"Inclination {message.unclamped_inclination:.2f}° out of "
                        f"range, clamped to {message.inclination:.1f}°"
                    ),
                    frame=frame,
                )
            )

        measurement = RawMeasurement.from_packet(message)
        if self.options.smart_mode:
            return self.classifier.add_measurement(measurement)

        shot = SplayShot.from_measurement(measurement)
        self._publish_shot(shot)
        return shot

    # -------------------------------------------------------------------------
    # Outgoing bytes
    # -------------------------------------------------------------------------

    def send(self, command: DeviceCommand) -> None:
        """Encode a command and queue it for the transport."""
        self._outgoing.append(PacketCodec.encode_command(command))

    def drain_outgoing(self) -> list[bytes]:
        """Pop every queued outgoing message, oldest first."""
        outgoing = list(self._outgoing)
        self._outgoing.clear()
        return outgoing

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Prepare for a new connection.

        Drops any partial frame and the sequence state. Pending smart-mode
        measurements are kept: a reconnect does not end the survey.
        """
        self._frames.clear()
        self._guard.reset()

    def flush(self) -> list[DetectedShot]:
        """Emit pending measurements as splays (end of session)."""
        return self.classifier.flush()

    def clear(self) -> None:
        """Abandon pending measurements without emitting them."""
        self.classifier.clear()
