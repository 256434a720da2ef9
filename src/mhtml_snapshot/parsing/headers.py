"""
MIME header block reader.

A single parser serves both the snapshot envelope and every embedded part:
it consumes one header block from a binary stream and leaves the stream
positioned at the first body byte.
"""

import re
from email.message import Message
from email.utils import collapse_rfc2231_value
from typing import BinaryIO, Dict, Iterator, List, Optional, Tuple

from ..errors import HeaderBlockError, StreamReadError

# RFC 5322 field name: printable US-ASCII except colon
_FIELD_NAME_RE = re.compile(rb"^[!-9;-~]+$")

# RFC 2045 token characters
_TOKEN = r"[!#$%&'*+.^_`|~0-9A-Za-z-]+"
_MEDIA_TYPE_RE = re.compile(rf"^{_TOKEN}/{_TOKEN}$")

# Header bytes are kept as written; undecodable bytes round-trip via surrogates
HEADER_CHARSET = "utf-8"
HEADER_ERRORS = "surrogateescape"


class HeaderBlock:
    """
    Case-insensitive, order-preserving view of a parsed header block.

    Repeated fields are kept; get() returns the first occurrence.
    """

    def __init__(self, fields: Optional[List[Tuple[str, str]]] = None):
        self._fields: List[Tuple[str, str]] = []
        self._index: Dict[str, List[str]] = {}
        for name, value in fields or []:
            self.add(name, value)

    def add(self, name: str, value: str) -> None:
        self._fields.append((name, value))
        self._index.setdefault(name.lower(), []).append(value)

    def get(self, name: str, default: str = "") -> str:
        values = self._index.get(name.lower())
        return values[0] if values else default

    def get_all(self, name: str) -> List[str]:
        return list(self._index.get(name.lower(), []))

    def items(self) -> List[Tuple[str, str]]:
        return list(self._fields)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._index

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"HeaderBlock({self._fields!r})"


def _readline(stream: BinaryIO) -> bytes:
    try:
        return stream.readline()
    except OSError as e:
        raise StreamReadError(f"Failed to read stream: {e}") from e


def _strip_eol(line: bytes) -> bytes:
    if line.endswith(b"\r\n"):
        return line[:-2]
    if line.endswith(b"\n"):
        return line[:-1]
    return line


def read_header_block(stream: BinaryIO) -> HeaderBlock:
    """
    Read one MIME header block from the current stream position.

    The block ends at the first blank line, which is consumed. End-of-input
    also ends the block, but only once at least one byte has been read.

    Args:
        stream: Binary stream supporting readline()

    Returns:
        HeaderBlock with the parsed fields

    Raises:
        HeaderBlockError: If the stream is empty or a line is malformed
        StreamReadError: If the underlying stream fails
    """
    block = HeaderBlock()
    name = None
    value_parts: List[str] = []
    seen_input = False

    def flush() -> None:
        if name is not None:
            block.add(name, " ".join(value_parts))

    while True:
        raw = _readline(stream)
        if not raw:
            if not seen_input:
                raise HeaderBlockError("no header block: stream is empty")
            break
        seen_input = True

        line = _strip_eol(raw)
        if not line:
            break

        if line[:1] in (b" ", b"\t"):
            # Folded continuation of the previous field
            if name is None:
                raise HeaderBlockError(
                    f"malformed header initial line: {line[:64]!r}"
                )
            value_parts.append(line.strip(b" \t").decode(HEADER_CHARSET, HEADER_ERRORS))
            continue

        field, sep, value = line.partition(b":")
        if not sep or not _FIELD_NAME_RE.match(field):
            raise HeaderBlockError(f"malformed header line: {line[:64]!r}")

        flush()
        name = field.decode("ascii")
        value_parts = [value.strip(b" \t").decode(HEADER_CHARSET, HEADER_ERRORS)]

    flush()
    return block


def parse_media_type(value: str) -> Tuple[str, Dict[str, str]]:
    """
    Split a Content-Type value into media type and parameters.

    Args:
        value: Raw header value, e.g. 'multipart/related; boundary="X"'

    Returns:
        Tuple of (lowercased media type, parameter dict with unquoted values)

    Raises:
        ValueError: If the value is empty or has no valid type/subtype
    """
    media_type = value.split(";", 1)[0].strip()
    if not media_type:
        raise ValueError("no media type")
    if not _MEDIA_TYPE_RE.match(media_type):
        raise ValueError(f"invalid media type: {media_type!r}")

    msg = Message()
    msg["Content-Type"] = value
    params: Dict[str, str] = {}
    # First entry is the media type itself
    for key, param in (msg.get_params() or [])[1:]:
        params[key.lower()] = collapse_rfc2231_value(param)

    return media_type.lower(), params
