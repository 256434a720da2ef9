"""
Snapshot part models - decoded output of the multipart decoder.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


def printable(value: str) -> str:
    """Replace undecodable header bytes (kept as surrogates) so the value serializes."""
    return value.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


class DecodedPart(BaseModel):
    """One decoded resource of a snapshot (root document or sub-resource)."""

    content_type: str = Field(
        default="", description="Raw Content-Type header value (may be empty)"
    )
    location: str = Field(
        default="", description="Content-Location URL of the resource (may be empty)"
    )
    data: bytes = Field(
        default=b"", description="Payload with transfer encoding removed"
    )

    model_config = {"frozen": True}

    @property
    def media_type(self) -> str:
        """Lowercased type/subtype without parameters ('' if absent)."""
        return self.content_type.split(";", 1)[0].strip().lower()

    @property
    def size_bytes(self) -> int:
        return len(self.data)


class Snapshot(BaseModel):
    """Decoded snapshot: envelope metadata plus ordered parts."""

    boundary: str = Field(description="Boundary parameter of the envelope")
    subject: Optional[str] = Field(None, description="Envelope Subject header")
    snapshot_location: Optional[str] = Field(
        None, description="Snapshot-Content-Location envelope header (page URL)"
    )
    date: Optional[str] = Field(None, description="Envelope Date header, unparsed")
    parts: List[DecodedPart] = Field(
        default_factory=list, description="Parts in input order"
    )
