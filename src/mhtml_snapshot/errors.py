"""
Exception hierarchy for snapshot decoding.

Every failure surfaced by the decoder derives from SnapshotDecodeError so
callers can handle a broken snapshot with a single except clause.
"""


class SnapshotDecodeError(Exception):
    """Base class for all snapshot decoding failures."""

    kind = "snapshot_decode_error"


class MalformedEnvelope(SnapshotDecodeError):
    """Outer header block or boundary parameter cannot be determined."""

    kind = "malformed_envelope"


class StreamReadError(SnapshotDecodeError):
    """I/O failure while reading the underlying stream (not end-of-input)."""

    kind = "stream_read_error"


class MalformedPartHeader(SnapshotDecodeError):
    """A part's embedded header block is unparsable."""

    kind = "malformed_part_header"


class EncodingError(SnapshotDecodeError):
    """Declared Content-Transfer-Encoding does not match the body bytes."""

    kind = "encoding_error"


class HeaderBlockError(ValueError):
    """Raised by the header block reader; callers translate it."""
