# Data models for the snapshot decoder

from .snapshot_part import DecodedPart, Snapshot
from .api_models import (
    DecodeSnapshotResponse,
    HealthResponse,
    PartSummary,
    VersionResponse,
)

__all__ = [
    "DecodedPart",
    "Snapshot",
    "PartSummary",
    "DecodeSnapshotResponse",
    "HealthResponse",
    "VersionResponse",
]
