# -*- coding: utf-8 -*-
"""Replay command for captured DistoX byte streams.

Feeds a capture (raw bytes, or a hex dump) through a DistoXSession exactly
as if it had arrived from the device, and writes the detected shots as JSON.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from distox_lib.constants import HEX_ENCODING
from distox_lib.constants import JSON_ENCODING
from distox_lib.constants import SHOTS_FORMAT_IDENTIFIER
from distox_lib.constants import SHOTS_FORMAT_VERSION
from distox_lib.enums import CaptureFormat
from distox_lib.errors import format_frame
from distox_lib.models import SessionOptions
from distox_lib.session import DistoXSession

logger = logging.getLogger(__name__)


def read_capture(path: Path, capture_format: CaptureFormat | None = None) -> bytes:
    """Read a captured byte stream.

    Hex dumps hold whitespace separated byte pairs; text after ``#`` on a
    line is a comment.

    Args:
        path: Capture file path
        capture_format: Format of the file (guessed from extension if None)

    Returns:
        The captured bytes

    Raises:
        FileNotFoundError: If the capture doesn't exist
        ValueError: If a hex dump contains something other than hex pairs
    """
    if not path.exists():
        raise FileNotFoundError(f"Capture file not found: {path}")

    if capture_format is None:
        capture_format = CaptureFormat.from_extension(path.suffix)

    if capture_format == CaptureFormat.BINARY:
        return path.read_bytes()

    lines = path.read_text(encoding=HEX_ENCODING).splitlines()
    return bytes.fromhex(" ".join(line.split("#", 1)[0] for line in lines))


def _replay(
    data: bytes,
    options: SessionOptions,
    *,
    flush: bool = True,
) -> dict[str, Any]:
    """Run ``data`` through a fresh session and build the JSON envelope."""
    session = DistoXSession(options=options)
    shots = session.feed(data)
    if flush:
        shots.extend(session.flush())

    return {
        "version": SHOTS_FORMAT_VERSION,
        "format": SHOTS_FORMAT_IDENTIFIER,
        "shots": [shot.model_dump(mode="json") for shot in shots],
        "pending": session.pending_count,
        "issues": [
            {
                "severity": issue.severity.value,
                "message": issue.message,
                "frame": format_frame(issue.frame),
            }
            for issue in session.issues
        ],
    }


def replay(args: list[str]) -> int:
    """Entry point for the replay command."""
    parser = argparse.ArgumentParser(
        prog="distox replay",
        description="Replay a captured DistoX byte stream and print the shots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  distox replay -i capture.bin                    # Shots as JSON (stdout)
  distox replay -i capture.hex -o shots.json      # Hex dump to JSON file
  distox replay -i capture.bin --no-smart-mode    # Every measurement a splay
  distox replay -i capture.bin --no-flush         # Leave incomplete triples

Notes:
  - Capture format is guessed from the extension (.hex/.txt = hex dump)
  - Malformed frames are skipped and reported under "issues"
""",
    )

    parser.add_argument(
        "-i",
        "--input-file",
        type=Path,
        required=True,
        help="Capture file path (raw bytes or hex dump)",
    )
    parser.add_argument(
        "-o",
        "--output-file",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=[fmt.value for fmt in CaptureFormat],
        default=None,
        dest="capture_format",
        help="Capture format: 'binary' or 'hex' (auto-detected if not specified)",
    )
    parser.add_argument(
        "--no-smart-mode",
        action="store_false",
        dest="smart_mode",
        help="Emit every measurement as a splay",
    )
    parser.add_argument(
        "--flush",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Emit measurements still pending at the end as splays",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every decoded frame (debug level for the distox_lib loggers)",
    )

    parsed_args = parser.parse_args(args)

    if parsed_args.verbose:
        logging.getLogger("distox_lib").setLevel(logging.DEBUG)

    capture_format = (
        CaptureFormat(parsed_args.capture_format)
        if parsed_args.capture_format
        else None
    )

    try:
        data = read_capture(parsed_args.input_file, capture_format)
    except (FileNotFoundError, ValueError):
        logger.exception("Cannot read capture `%s`", parsed_args.input_file)
        return 1

    envelope = _replay(
        data,
        SessionOptions(smart_mode=parsed_args.smart_mode),
        flush=parsed_args.flush,
    )
    result = json.dumps(envelope, indent=2, sort_keys=True)

    if parsed_args.output_file is None:
        sys.stdout.write(result + "\n")
    else:
        parsed_args.output_file.write_text(result, encoding=JSON_ENCODING)

    return 0
