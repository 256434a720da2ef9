"""
Command-line interface for extracting MHTML snapshots.

Decodes a snapshot, optionally writes every part to a directory, and prints a
manifest describing the parts.

Usage:
    # Manifest only
    python -m mhtml_snapshot.cli.extract page.mhtml

    # Write parts to a directory, manifest to a file
    python -m mhtml_snapshot.cli.extract page.mhtml --output-dir page_files/ --output manifest.json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from mhtml_snapshot.config import settings
from mhtml_snapshot.errors import SnapshotDecodeError
from mhtml_snapshot.logging_config import setup_logging
from mhtml_snapshot.models.snapshot_part import Snapshot, printable
from mhtml_snapshot.parsing import decode_snapshot, get_root_document, suggest_filename

logger = structlog.get_logger(__name__)


def write_parts(snapshot: Snapshot, output_dir: Path) -> List[Path]:
    """
    Write every part of a snapshot into a directory.

    File names come from suggest_filename(); clashes get a numeric suffix.

    Args:
        snapshot: Decoded snapshot
        output_dir: Target directory (created if missing)

    Returns:
        Written paths, in part order
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    used = set()
    paths = []

    for index, part in enumerate(snapshot.parts):
        name = suggest_filename(part, index)
        stem, suffix = Path(name).stem, Path(name).suffix
        counter = 1
        while name in used:
            name = f"{stem}_{counter}{suffix}"
            counter += 1
        used.add(name)

        path = output_dir / name
        path.write_bytes(part.data)
        paths.append(path)

    logger.info("parts_written", directory=str(output_dir), count=len(paths))
    return paths


def build_manifest(snapshot: Snapshot, paths: Optional[List[Path]] = None) -> List[dict]:
    """
    Describe each part as a JSON-serializable dict.

    Args:
        snapshot: Decoded snapshot
        paths: Written file paths, parallel to snapshot.parts

    Returns:
        One record per part
    """
    root = get_root_document(snapshot.parts)
    records = []
    for index, part in enumerate(snapshot.parts):
        record = {
            "index": index,
            "content_type": printable(part.content_type),
            "location": printable(part.location),
            "size_bytes": part.size_bytes,
            "root": part is root,
        }
        if paths:
            record["path"] = str(paths[index])
        records.append(record)
    return records


def write_output(records: List[dict], output_path: Optional[Path], format: str = "jsonl"):
    """
    Write manifest records to a file, or stdout when no path is given.

    Args:
        records: Manifest records
        output_path: Output file path
        format: Output format ("json" or "jsonl")
    """
    if format == "jsonl":
        text = "".join(json.dumps(r, ensure_ascii=False) + "\n" for r in records)
    else:
        text = json.dumps(records, ensure_ascii=False, indent=2) + "\n"

    if not output_path:
        sys.stdout.write(text)
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    logger.info("manifest_written", path=str(output_path), count=len(records))


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Split an MHTML snapshot into its root document and sub-resources",
    )
    parser.add_argument("input", type=str, help="Path to .mhtml/.mht snapshot")
    parser.add_argument(
        "--output-dir",
        "-d",
        type=str,
        default=None,
        help="Directory to write decoded parts into (default: don't write parts)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Manifest output path (default: stdout)",
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=["json", "jsonl"],
        default=settings.cli_default_format,
        help="Manifest format (default: %(default)s)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    setup_logging(log_level="DEBUG" if args.verbose else None, json_output=False)

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        with open(input_path, "rb") as f:
            snapshot = decode_snapshot(f)
    except SnapshotDecodeError as e:
        logger.error("snapshot_decode_failed", path=str(input_path), error_kind=e.kind, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    paths = write_parts(snapshot, Path(args.output_dir)) if args.output_dir else None
    records = build_manifest(snapshot, paths)
    write_output(records, Path(args.output) if args.output else None, args.format)
    return 0


if __name__ == "__main__":
    sys.exit(main())
