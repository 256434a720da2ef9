# Snapshot decoding module

from .headers import HeaderBlock, parse_media_type, read_header_block
from .multipart_decoder import (
    Envelope,
    decode_part,
    decode_parts,
    decode_snapshot,
    decode_snapshot_bytes,
    decode_snapshot_file,
    read_envelope,
)
from .mime_utils import (
    decode_text,
    get_root_document,
    index_by_location,
    is_text_part,
    suggest_filename,
)
from .transfer_encoding import decode_base64, decode_body, decode_quoted_printable

__all__ = [
    "HeaderBlock",
    "read_header_block",
    "parse_media_type",
    "Envelope",
    "read_envelope",
    "decode_part",
    "decode_parts",
    "decode_snapshot",
    "decode_snapshot_bytes",
    "decode_snapshot_file",
    "decode_body",
    "decode_base64",
    "decode_quoted_printable",
    "is_text_part",
    "decode_text",
    "get_root_document",
    "index_by_location",
    "suggest_filename",
]
