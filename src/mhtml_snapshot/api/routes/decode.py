"""
Snapshot decode endpoint - splits an uploaded MHTML file into its parts.
"""

import io
from time import time
from typing import Optional
from fastapi import APIRouter, File, HTTPException, Query, UploadFile
import structlog

from ...config import settings
from ...errors import SnapshotDecodeError
from ...models.api_models import DecodeSnapshotResponse, PartSummary
from ...models.snapshot_part import printable
from ...parsing import decode_snapshot, get_root_document

logger = structlog.get_logger(__name__)
router = APIRouter()

SNAPSHOT_EXTENSIONS = (".mhtml", ".mht")


@router.post("/mhtml", response_model=DecodeSnapshotResponse)
async def decode_mhtml_file(
    file: UploadFile = File(..., description=".mhtml snapshot to decode"),
    include_data: Optional[bool] = Query(
        default=None,
        description="Include base64 part payloads (defaults to INCLUDE_PART_DATA)",
    ),
) -> DecodeSnapshotResponse:
    """
    Decode an uploaded snapshot and describe its parts.

    The decode is all-or-nothing: a malformed envelope, part header or
    transfer encoding yields success=false with no parts.

    Args:
        file: Uploaded .mhtml/.mht file
        include_data: Whether to return part payloads as base64

    Returns:
        DecodeSnapshotResponse with part summaries or the decode error
    """
    start_time = time()

    if not file.filename or not file.filename.lower().endswith(SNAPSHOT_EXTENSIONS):
        raise HTTPException(
            status_code=400,
            detail="File must be .mhtml or .mht format",
        )

    snapshot_bytes = await file.read()

    size_mb = len(snapshot_bytes) / (1024 * 1024)
    if size_mb > settings.max_snapshot_size_mb:
        raise HTTPException(
            status_code=413,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum ({settings.max_snapshot_size_mb}MB)",
        )

    if include_data is None:
        include_data = settings.include_part_data

    logger.info(
        "Starting snapshot decode",
        filename=file.filename,
        size_bytes=len(snapshot_bytes),
        include_data=include_data,
    )

    try:
        snapshot = decode_snapshot(io.BytesIO(snapshot_bytes))
    except SnapshotDecodeError as e:
        logger.warning(
            "Snapshot decode failed",
            filename=file.filename,
            error_kind=e.kind,
            error=str(e),
        )
        return DecodeSnapshotResponse(
            success=False,
            error_kind=e.kind,
            error=f"Decode failed: {e}",
            processing_time_ms=(time() - start_time) * 1000,
        )

    root = get_root_document(snapshot.parts)

    response = DecodeSnapshotResponse(
        success=True,
        snapshot_location=printable(snapshot.snapshot_location) if snapshot.snapshot_location else None,
        subject=printable(snapshot.subject) if snapshot.subject else None,
        root_location=printable(root.location) if root else None,
        parts=[
            PartSummary.from_part(i, part, include_data=include_data)
            for i, part in enumerate(snapshot.parts)
        ],
        processing_time_ms=(time() - start_time) * 1000,
    )

    logger.info(
        "Snapshot decoded",
        filename=file.filename,
        parts_count=len(response.parts),
        processing_time_ms=response.processing_time_ms,
    )

    return response
