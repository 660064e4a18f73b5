# -*- coding: utf-8 -*-
"""Error handling for DistoX frame decoding.

This module provides the exception raised for frames that cannot be
decoded, and the issue record a session collects for them so that decoding
can continue with the next frame.
"""

from dataclasses import dataclass

from distox_lib.enums import Severity


def format_frame(frame: bytes) -> str:
    """Format raw bytes as space separated hex pairs."""
    return " ".join(f"{b:02x}" for b in frame)


@dataclass(frozen=True)
class DecodeIssue:
    """Represents a frame that was discarded or corrected while decoding.

    This is a data record for storing issue information, not an exception.
    Use MalformedPacket for raising errors.

    Attributes:
        severity: ERROR (frame discarded) or WARNING (frame corrected)
        message: Human-readable description
        frame: The raw frame bytes
    """

    severity: Severity
    message: str
    frame: bytes = b""

    def __str__(self) -> str:
        """Format as human-readable issue string."""
        base = f"{self.severity.value}: {self.message}"
        if self.frame:
            base += f" [{format_frame(self.frame)}]"
        return base


class MalformedPacket(ValueError):  # noqa: N818
    """Exception raised for frames that cannot be decoded.

    The frame is fatal to itself only: callers discard it and resume with
    the next frame.

    Attributes:
        reason: Why the frame was rejected
        frame: The raw frame bytes
    """

    def __init__(self, reason: str, frame: bytes = b""):
        self.reason = reason
        self.frame = bytes(frame)
        super().__init__(str(self))

    def __str__(self) -> str:
        """Format as human-readable exception string."""
        if self.frame:
            return f"{self.reason} [{format_frame(self.frame)}]"
        return self.reason

    def to_issue(self) -> DecodeIssue:
        """Convert exception to DecodeIssue record."""
        return DecodeIssue(
            severity=Severity.ERROR,
            message=self.reason,
            frame=self.frame,
        )
