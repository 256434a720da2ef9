"""
Helper functions for working with decoded snapshot parts.
"""

import hashlib
import mimetypes
import posixpath
import re
from typing import Dict, List, Optional
from urllib.parse import unquote, urlparse

import charset_normalizer

from ..models.snapshot_part import DecodedPart
from .headers import parse_media_type

TEXT_MEDIA_TYPES = {
    "application/javascript",
    "application/x-javascript",
    "application/json",
    "application/xml",
    "application/xhtml+xml",
    "image/svg+xml",
}

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def is_text_part(part: DecodedPart) -> bool:
    """
    Determine if a part carries textual content.

    Args:
        part: Decoded snapshot part

    Returns:
        True for text/* and known textual application/image types
    """
    media_type = part.media_type
    return media_type.startswith("text/") or media_type in TEXT_MEDIA_TYPES


def decode_text(part: DecodedPart) -> str:
    """
    Decode part payload to text handling various charsets.

    Args:
        part: Decoded snapshot part

    Returns:
        Decoded string content
    """
    if not part.data:
        return ""

    # Try declared charset first
    charset = None
    try:
        _, params = parse_media_type(part.content_type)
        charset = params.get("charset")
    except ValueError:
        pass

    if charset:
        try:
            return part.data.decode(charset)
        except (UnicodeDecodeError, LookupError):
            pass

    # Try charset detection
    detected = charset_normalizer.from_bytes(part.data).best()
    if detected:
        return str(detected)

    # Final fallback
    return part.data.decode("utf-8", errors="replace")


def get_root_document(parts: List[DecodedPart]) -> Optional[DecodedPart]:
    """
    Find the root HTML document of a snapshot.

    Args:
        parts: Decoded parts in input order

    Returns:
        First text/html part, else the first part, else None
    """
    for part in parts:
        if part.media_type == "text/html":
            return part
    return parts[0] if parts else None


def index_by_location(parts: List[DecodedPart]) -> Dict[str, DecodedPart]:
    """
    Map Content-Location URLs to parts for resolving sub-resource references.

    Parts without a location are skipped; on duplicates the first one wins.
    """
    index: Dict[str, DecodedPart] = {}
    for part in parts:
        if part.location and part.location not in index:
            index[part.location] = part
    return index


def suggest_filename(part: DecodedPart, index: int) -> str:
    """
    Derive a file name for writing a part to disk.

    Uses the basename of the location path when there is one, otherwise a
    short hash of the location (or the part index when it has no location).
    An extension guessed from the media type is appended when missing.

    Args:
        part: Decoded snapshot part
        index: Position of the part in the snapshot

    Returns:
        File name safe to join onto an output directory
    """
    parsed = urlparse(part.location)
    base = posixpath.basename(unquote(parsed.path))
    base = _UNSAFE_FILENAME_CHARS.sub("_", base).strip("._")

    if not base:
        if part.location:
            base = "part-" + hashlib.sha256(part.location.encode("utf-8", "surrogateescape")).hexdigest()[:12]
        else:
            base = f"part-{index:04d}"

    if not posixpath.splitext(base)[1]:
        base += mimetypes.guess_extension(part.media_type) or ".bin"

    return base
