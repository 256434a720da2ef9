"""
Multipart snapshot decoder for MHTML / web-archive documents.

The envelope header block is read once to find the boundary, then the rest of
the stream is scanned line by line. Lines between two boundary lines are
accumulated into a raw buffer and handed to decode_part().

Boundary lines are matched by exact byte equality with "--" + boundary after
the line terminator is removed; a line with extra whitespace is body content.
"""

import io
import re
from dataclasses import dataclass
from typing import BinaryIO, List, Union
from pathlib import Path

import structlog

from ..errors import (
    HeaderBlockError,
    MalformedEnvelope,
    MalformedPartHeader,
    StreamReadError,
)
from ..models.snapshot_part import DecodedPart, Snapshot
from .headers import (
    HEADER_CHARSET,
    HEADER_ERRORS,
    HeaderBlock,
    parse_media_type,
    read_header_block,
)
from .transfer_encoding import decode_body

logger = structlog.get_logger(__name__)

# RFC 2046 boundary: 1-70 bchars, no trailing space
_BOUNDARY_RE = re.compile(r"^[0-9A-Za-z'()+_,./:=? -]{0,69}[0-9A-Za-z'()+_,./:=?-]$")


@dataclass
class Envelope:
    """Top-level header block of a snapshot and its boundary."""

    boundary: str
    headers: HeaderBlock

    @property
    def delimiter(self) -> bytes:
        return b"--" + self.boundary.encode(HEADER_CHARSET, HEADER_ERRORS)

    @property
    def close_delimiter(self) -> bytes:
        return self.delimiter + b"--"


def read_envelope(stream: BinaryIO) -> Envelope:
    """
    Read the envelope header block and extract the multipart boundary.

    Args:
        stream: Binary stream positioned at the start of the snapshot

    Returns:
        Envelope; the stream is left right after the header block

    Raises:
        MalformedEnvelope: If no header block, Content-Type or boundary is found
        StreamReadError: If the stream fails
    """
    try:
        headers = read_header_block(stream)
    except HeaderBlockError as e:
        raise MalformedEnvelope(f"Cannot read envelope headers: {e}") from e

    content_type = headers.get("Content-Type")
    if not content_type:
        raise MalformedEnvelope("Envelope has no Content-Type header")

    try:
        _, params = parse_media_type(content_type)
    except ValueError as e:
        raise MalformedEnvelope(f"Unparsable envelope Content-Type: {e}") from e

    boundary = params.get("boundary")
    if not boundary:
        raise MalformedEnvelope(
            f"Envelope Content-Type has no boundary parameter: {content_type!r}"
        )
    if not _BOUNDARY_RE.match(boundary):
        raise MalformedEnvelope(f"Invalid boundary parameter: {boundary!r}")

    return Envelope(boundary=boundary, headers=headers)


def decode_part(raw: bytes) -> DecodedPart:
    """
    Decode one accumulated part buffer (header block followed by body).

    Args:
        raw: Raw part bytes as collected by the splitter

    Returns:
        DecodedPart with the transfer encoding removed

    Raises:
        MalformedPartHeader: If the embedded header block is unparsable
        EncodingError: If the body does not match its declared encoding
    """
    buffer = io.BytesIO(raw)
    try:
        headers = read_header_block(buffer)
    except HeaderBlockError as e:
        raise MalformedPartHeader(f"Cannot read part headers: {e}") from e

    data = decode_body(buffer.read(), headers.get("Content-Transfer-Encoding"))

    return DecodedPart(
        content_type=headers.get("Content-Type"),
        location=headers.get("Content-Location"),
        data=data,
    )


def _split_parts(stream: BinaryIO, envelope: Envelope) -> List[DecodedPart]:
    delimiter = envelope.delimiter
    close_delimiter = envelope.close_delimiter

    parts: List[DecodedPart] = []
    lines = bytearray()
    in_preamble = True
    closed = False

    while True:
        try:
            raw = stream.readline()
        except OSError as e:
            raise StreamReadError(f"Failed to read snapshot stream: {e}") from e
        if not raw:
            # A buffer still open here was never terminated by a boundary
            if lines:
                logger.debug("unterminated_part_discarded", size_bytes=len(lines))
            return parts
        if closed:
            # Epilogue
            continue

        if raw.endswith(b"\r\n"):
            line = raw[:-2]
        elif raw.endswith(b"\n"):
            line = raw[:-1]
        else:
            line = raw

        if line != delimiter and line != close_delimiter:
            if not in_preamble:
                # Blank lines contribute just the newline marker
                lines += line
                lines += b"\n"
            continue

        in_preamble = False
        closed = line == close_delimiter
        if not lines:
            continue

        part = decode_part(bytes(lines))
        logger.debug(
            "part_decoded",
            index=len(parts),
            content_type=part.content_type,
            location=part.location,
            size_bytes=part.size_bytes,
        )
        parts.append(part)
        lines = bytearray()


def decode_parts(stream: BinaryIO) -> List[DecodedPart]:
    """
    Decode a multipart snapshot stream into its parts.

    Args:
        stream: Binary stream of the whole snapshot

    Returns:
        Parts in encounter order; empty if the snapshot has none

    Raises:
        SnapshotDecodeError: Any failure aborts the whole decode
    """
    envelope = read_envelope(stream)
    return _split_parts(stream, envelope)


def decode_snapshot(stream: BinaryIO) -> Snapshot:
    """
    Decode a snapshot stream and keep envelope metadata with the parts.

    Args:
        stream: Binary stream of the whole snapshot

    Returns:
        Snapshot with boundary, Subject, Snapshot-Content-Location, Date and parts
    """
    envelope = read_envelope(stream)
    parts = _split_parts(stream, envelope)

    logger.info(
        "snapshot_decoded",
        boundary=envelope.boundary,
        parts_count=len(parts),
        total_bytes=sum(p.size_bytes for p in parts),
    )

    return Snapshot(
        boundary=envelope.boundary,
        subject=envelope.headers.get("Subject") or None,
        snapshot_location=envelope.headers.get("Snapshot-Content-Location") or None,
        date=envelope.headers.get("Date") or None,
        parts=parts,
    )


def decode_snapshot_bytes(data: bytes) -> List[DecodedPart]:
    """
    Decode snapshot bytes already held in memory.

    Args:
        data: Raw snapshot bytes (e.g. a captured MHTML page)

    Returns:
        Decoded parts in input order
    """
    return decode_parts(io.BytesIO(data))


def decode_snapshot_file(path: Union[str, Path]) -> List[DecodedPart]:
    """
    Decode a snapshot file from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        SnapshotDecodeError: If the snapshot is malformed
    """
    with open(path, "rb") as f:
        return decode_parts(f)

