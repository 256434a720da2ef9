"""
Content-Transfer-Encoding decoders for snapshot part bodies.
"""

import base64
import binascii

from ..errors import EncodingError

_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")


def decode_base64(data: bytes) -> bytes:
    """
    Decode a base64 body using the standard padded alphabet.

    Line breaks are ignored; any other character outside the alphabet, or
    bad padding, is an error.

    Raises:
        EncodingError: If the body is not valid base64
    """
    compact = data.replace(b"\r", b"").replace(b"\n", b"")
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Invalid base64 body: {e}") from e


def _decode_qp_line(line: bytes, line_number: int) -> bytes:
    out = bytearray()
    i = 0
    while i < len(line):
        byte = line[i]
        if byte != 0x3D:  # "="
            out.append(byte)
            i += 1
            continue
        escape = line[i + 1:i + 3]
        if len(escape) != 2 or not all(c in _HEX_DIGITS for c in escape):
            raise EncodingError(
                f"Invalid quoted-printable escape {line[i:i + 3]!r} on line {line_number}"
            )
        out.append(int(escape, 16))
        i += 3
    return bytes(out)


def decode_quoted_printable(data: bytes) -> bytes:
    """
    Decode a quoted-printable body.

    Trailing whitespace on each encoded line is dropped, a trailing "=" is a
    soft line break, and "=XX" is a hex escape. Line terminators are kept as
    they appear.

    Raises:
        EncodingError: On a malformed "=" sequence
    """
    out = bytearray()
    lines = data.split(b"\n")
    for line_number, line in enumerate(lines, 1):
        if line_number == len(lines):
            eol = b""
        elif line.endswith(b"\r"):
            line, eol = line[:-1], b"\r\n"
        else:
            eol = b"\n"

        line = line.rstrip(b" \t")
        if line.endswith(b"="):
            line, eol = line[:-1], b""

        out += _decode_qp_line(line, line_number)
        out += eol
    return bytes(out)


def decode_body(data: bytes, encoding: str) -> bytes:
    """
    Decode a part body according to its Content-Transfer-Encoding token.

    Args:
        data: Raw body bytes
        encoding: Header value; absent or unknown tokens mean identity

    Returns:
        Decoded body bytes
    """
    token = encoding.strip().lower()
    if token == "base64":
        return decode_base64(data)
    if token == "quoted-printable":
        return decode_quoted_printable(data)
    return data
