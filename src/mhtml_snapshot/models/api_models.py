"""
API request and response models for FastAPI endpoints.
"""

import base64
from typing import List, Optional
from pydantic import BaseModel, Field

from .snapshot_part import DecodedPart, printable


class PartSummary(BaseModel):
    """JSON-safe view of a decoded part."""

    index: int = Field(description="Position of the part in the snapshot")
    content_type: str = Field(description="Raw Content-Type header value")
    media_type: str = Field(description="Lowercased type/subtype")
    location: str = Field(description="Content-Location URL")
    size_bytes: int = Field(description="Decoded payload size")
    data_base64: Optional[str] = Field(
        None, description="Base64 of the decoded payload (only when requested)"
    )

    @classmethod
    def from_part(cls, index: int, part: DecodedPart, include_data: bool = False) -> "PartSummary":
        return cls(
            index=index,
            content_type=printable(part.content_type),
            media_type=part.media_type,
            location=printable(part.location),
            size_bytes=part.size_bytes,
            data_base64=base64.b64encode(part.data).decode("ascii") if include_data else None,
        )


class DecodeSnapshotResponse(BaseModel):
    """Response model for the snapshot decode endpoint."""

    success: bool = Field(description="Whether decoding succeeded")
    snapshot_location: Optional[str] = Field(None, description="Page URL of the snapshot")
    subject: Optional[str] = Field(None, description="Snapshot title (Subject header)")
    root_location: Optional[str] = Field(None, description="Location of the root HTML document")
    parts: List[PartSummary] = Field(default_factory=list, description="Decoded parts in order")
    processing_time_ms: Optional[float] = Field(None, description="Decode duration")
    error_kind: Optional[str] = Field(None, description="Error kind if failed")
    error: Optional[str] = Field(None, description="Error message if failed")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status", examples=["healthy"])
    version: str = Field(description="API version", examples=["1.0.0"])
    uptime_seconds: float = Field(description="Service uptime")


class VersionResponse(BaseModel):
    """Version information response."""

    api_version: str = Field(description="API version")
    decoder_version: str = Field(description="Multipart decoder version")
