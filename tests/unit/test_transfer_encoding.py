"""
Unit tests for Content-Transfer-Encoding decoders (transfer_encoding.py).
"""

import pytest

from mhtml_snapshot.errors import EncodingError
from mhtml_snapshot.parsing.transfer_encoding import (
    decode_base64,
    decode_body,
    decode_quoted_printable,
)


class TestDecodeBase64:
    """Tests for decode_base64()."""

    @pytest.mark.unit
    def test_line_breaks_ignored(self):
        assert decode_base64(b"SGVs\r\nbG8s\nIHdvcmxk\n") == b"Hello, world"

    @pytest.mark.unit
    def test_empty_body(self):
        assert decode_base64(b"") == b""
        assert decode_base64(b"\n") == b""

    @pytest.mark.unit
    @pytest.mark.parametrize("body", [b"SGVs*G8=", b"SGVsbG8 gd29y\n", b"QUJ", b"QQ=\n"])
    def test_invalid_body(self, body):
        with pytest.raises(EncodingError):
            decode_base64(body)


class TestDecodeQuotedPrintable:
    """Tests for decode_quoted_printable()."""

    @pytest.mark.unit
    def test_hex_escapes(self):
        assert decode_quoted_printable(b"a=3Db=3dc\n") == b"a=b=c\n"

    @pytest.mark.unit
    def test_utf8_escapes(self):
        assert decode_quoted_printable(b"caff=C3=A8\n") == "caffè\n".encode("utf-8")

    @pytest.mark.unit
    def test_soft_line_break(self):
        assert decode_quoted_printable(b"long li=\nne\n") == b"long line\n"

    @pytest.mark.unit
    def test_soft_line_break_crlf(self):
        assert decode_quoted_printable(b"long li=\r\nne\r\n") == b"long line\r\n"

    @pytest.mark.unit
    def test_soft_line_break_with_trailing_whitespace(self):
        assert decode_quoted_printable(b"abc= \t\ndef\n") == b"abcdef\n"

    @pytest.mark.unit
    def test_trailing_whitespace_dropped(self):
        assert decode_quoted_printable(b"abc  \ndef\t\n") == b"abc\ndef\n"

    @pytest.mark.unit
    def test_no_final_newline(self):
        assert decode_quoted_printable(b"abc") == b"abc"
        assert decode_quoted_printable(b"abc=") == b"abc"

    @pytest.mark.unit
    @pytest.mark.parametrize("body", [b"=ZZ\n", b"a=4\n", b"=G1\n", b"x = y\n"])
    def test_malformed_escape(self, body):
        with pytest.raises(EncodingError):
            decode_quoted_printable(body)


class TestDecodeBody:
    """Tests for decode_body() dispatch."""

    @pytest.mark.unit
    def test_base64(self):
        assert decode_body(b"aGk=\n", "base64") == b"hi"

    @pytest.mark.unit
    def test_token_normalized(self):
        assert decode_body(b"aGk=\n", " Base64 ") == b"hi"
        assert decode_body(b"a=3Db\n", "Quoted-Printable") == b"a=b\n"

    @pytest.mark.unit
    @pytest.mark.parametrize("encoding", ["", "7bit", "8bit", "binary", "x-unknown"])
    def test_identity(self, encoding):
        assert decode_body(b"a=3Db\n", encoding) == b"a=3Db\n"
